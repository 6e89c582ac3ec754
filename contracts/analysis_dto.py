"""
DTO контракт: Flattener -> Analyzer -> внешние потребители (экспорт, UI).

ContainerRow - атомарная единица: одна связка (манифест, BL, контейнер).
AnalysisResult - статистика и категорийные представления по физическим
контейнерам.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContainerRow(BaseModel):
    """
    Денормализованная строка манифеста.
    """

    # Уровень манифеста
    numero_escale: str = ""
    nom_navire: str = ""
    num_voyage: str = ""
    date_manifeste: str = ""
    type_manifeste: str = ""
    regime: str = ""

    # Уровень BL
    num_bl: str = ""
    port_chargement: str = ""
    client_final: str = ""
    nif_client_final: str = ""
    marchandise: str = Field("", description="Описание товара из BL")

    # Уровень контейнера
    num_conteneur: str = Field(..., description="Номер контейнера или sentinel")
    taille_conteneur: int = Field(0, description="20/40/45, 0 - неизвестно")
    code_iso: str = ""
    indicateur_groupage: str = "0"
    categorie: str = ""
    poids: float = 0.0
    statut: str = ""

    # Спецгрузы
    indicateur_reefer: str = Field("0", description="'0' или '1'")
    temperature: str = ""
    classe_imdg: str = ""
    code_un: str = ""
    imdg_detected: bool = Field(False, description="Класс IMDG выведен эвристикой по тексту")

    model_config = ConfigDict(frozen=True)

    @field_validator("indicateur_reefer")
    @classmethod
    def validate_reefer_flag(cls, v: str) -> str:
        if v not in ("0", "1"):
            raise ValueError(f"Invalid indicateur_reefer: {v}. Must be '0' or '1'.")
        return v


class BLInfo(BaseModel):
    """Участие BL в физическом контейнере."""

    num_bl: str
    client: str = ""
    weight: float = 0.0

    model_config = ConfigDict(frozen=True)


class LCLContainer(BaseModel):
    """Контейнер groupage: больше одного BL."""

    num_conteneur: str
    taille_conteneur: int
    bls: list[BLInfo] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class SpecialCargoContainer(BaseModel):
    """
    Контейнер со спецгрузом (IMDG или Reefer).
    """

    num_conteneur: str
    taille_conteneur: int
    code_iso: str = ""
    bls: list[BLInfo] = Field(default_factory=list)
    marchandise: str = ""

    # IMDG
    classe_imdg: str = ""
    code_un: str = ""
    imdg_detected: bool = False

    # Reefer
    temperature: str = ""
    is_active_reefer: bool = False

    model_config = ConfigDict(frozen=True)


class ContainerError(BaseModel):
    """Контейнер с проблемами качества данных."""

    num_conteneur: str
    taille_conteneur: int
    code_iso: str = ""
    bls: list[BLInfo] = Field(default_factory=list)
    reasons: list[str] = Field(..., description="Что не так с контейнером")

    model_config = ConfigDict(frozen=True)

    @field_validator("reasons")
    @classmethod
    def validate_reasons(cls, v: list[str]) -> list[str]:
        if not v or not all(v):
            raise ValueError("ContainerError requires at least one non-empty reason")
        return v


class AnalyticsStats(BaseModel):
    """
    Производные счётчики по уникальным физическим контейнерам.
    """

    total_containers: int = 0
    count_20: int = 0
    count_40: int = 0
    count_45: int = 0
    count_unknown_size: int = 0
    count_lcl: int = 0
    count_fcl: int = 0
    count_imdg: int = 0
    count_imdg_20: int = 0
    count_imdg_40: int = Field(0, description="40' и 45'")
    count_reefer: int = 0
    count_reefer_20: int = 0
    count_reefer_40: int = Field(0, description="40' и 45'")
    count_errors: int = 0
    teu: int = Field(0, description="20' = 1, 40'/45' = 2")

    model_config = ConfigDict(frozen=True)


class AnalysisResult(BaseModel):
    """
    Результат Analyzer: статистика + 4 категорийных списка.

    Все списки отсортированы по num_conteneur (лексикографически).
    """

    stats: AnalyticsStats
    lcl_containers: list[LCLContainer] = Field(default_factory=list)
    imdg_containers: list[SpecialCargoContainer] = Field(default_factory=list)
    reefer_containers: list[SpecialCargoContainer] = Field(default_factory=list)
    error_containers: list[ContainerError] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
