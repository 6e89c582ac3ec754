"""
DTO контракт: входной документ манифеста.

Иерархия: Manifest -> Connaissement (BL) -> Container.

Модели намеренно снисходительны: исходные JSON часто содержат числа вместо
строк, пропущенные массивы и посторонние поля. Типизация здесь только
нормализует скаляры; решения о дефолтах принимает Flattener.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _as_text(value: Any) -> str | None:
    """Приводит скаляр к строке. Не-скаляры отбрасываются (None)."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return None


def _as_object_list(value: Any) -> list | None:
    """
    Не-массив -> None (Flattener трактует как пустой список с warning).
    Элементы, не являющиеся объектами, превращаются в пустой объект.
    """
    if not isinstance(value, list):
        return None
    return [item if isinstance(item, (dict, BaseModel)) else {} for item in value]


class Container(BaseModel):
    """
    Контейнер, как он описан внутри BL.
    """

    num_conteneur: str | None = Field(None, description="Номер контейнера (ISO 6346)")
    taille_conteneur: Any = Field(None, description="Размер: число или строка")
    code_iso: str | None = Field(None, description="ISO код типа")
    indicateur_groupage: str | None = Field(None, description="Флаг groupage '0'/'1'")
    categorie: str | None = None
    indicateur_reefer: Any = Field(None, description="Флаг reefer: bool, число или строка")
    poids: Any = Field(None, description="Вес, кг")
    tare: Any = None
    statut: str | None = None
    classe_imdg: str | None = Field(
        None,
        validation_alias=AliasChoices("classe_imdg", "imdg_class"),
        description="Класс опасного груза",
    )
    code_un: str | None = Field(
        None,
        validation_alias=AliasChoices("code_un", "un_number"),
        description="UN номер опасного груза",
    )
    dangerous_goods: Any = None
    temperature: str | None = Field(None, description="Температура reefer")

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @field_validator(
        "num_conteneur", "code_iso", "indicateur_groupage", "categorie",
        "statut", "classe_imdg", "code_un", "temperature",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _as_text(v)


class Connaissement(BaseModel):
    """
    Коносамент (BL): получатель, описание груза и список контейнеров.
    """

    num_bl: str | None = Field(None, description="Номер BL")
    article: str | None = None
    description_marchandise: str | None = None
    port_chargement: str | None = None
    client_final: str | None = Field(None, description="Конечный получатель")
    nif_client_final: str | None = None
    poids_brute: Any = None
    nombre_tcs: Any = None
    conteneurs: list[Container] | None = Field(
        None, description="None если массив отсутствует или некорректен"
    )

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator(
        "num_bl", "article", "description_marchandise", "port_chargement",
        "client_final", "nif_client_final",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _as_text(v)

    @field_validator("conteneurs", mode="before")
    @classmethod
    def coerce_containers(cls, v: Any) -> list | None:
        return _as_object_list(v)

    @property
    def commodity(self) -> str:
        """Описание товара: description_marchandise, затем article."""
        return self.description_marchandise or self.article or ""


class Manifest(BaseModel):
    """
    Манифест одного судозахода.
    """

    numero_escale: str | None = Field(None, description="Номер захода")
    consignataire: str | None = None
    code_consignataire: str | None = None
    nom_navire: str | None = Field(None, description="Название судна")
    imo_navire: str | None = None
    call_sign: str | None = None
    num_voyage: str | None = Field(None, description="Номер рейса")
    num_gros: str | None = None
    date_manifeste: str | None = None
    lieu_livraison: str | None = None
    manutentionnaire: str | None = None
    regime: str | None = None
    type_manifeste: str | None = None
    connaissements: list[Connaissement] | None = Field(
        None, description="None если массив отсутствует или некорректен"
    )

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator(
        "numero_escale", "consignataire", "code_consignataire", "nom_navire",
        "imo_navire", "call_sign", "num_voyage", "num_gros", "date_manifeste",
        "lieu_livraison", "manutentionnaire", "regime", "type_manifeste",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        return _as_text(v)

    @field_validator("connaissements", mode="before")
    @classmethod
    def coerce_waybills(cls, v: Any) -> list | None:
        return _as_object_list(v)
