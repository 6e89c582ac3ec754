"""
DTO контракт: Discharge Reconciler и Planning Builder.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .analysis_dto import ContainerRow


class DischargeRecord(BaseModel):
    """Одна строка отчёта о выгрузке, привязанная к контейнеру."""

    container_num: str = Field(..., description="Канонический id: 4 буквы + 7 цифр")
    raw_line: str = Field(..., description="Исходная строка (trim)")
    date: str | None = Field(None, description="DD/MM/YYYY или DD-MM-YYYY")

    model_config = ConfigDict(frozen=True)


class ReconciliationReport(BaseModel):
    """
    Сверка выгрузки с манифестом.

    matched - есть и в отчёте, и в манифесте;
    unexpected - в отчёте есть, в манифесте нет;
    pending - в манифесте есть, в отчёте пока нет.
    """

    matched: list[str] = Field(default_factory=list)
    unexpected: list[str] = Field(default_factory=list)
    pending: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @computed_field
    @property
    def unexpected_count(self) -> int:
        return len(self.unexpected)

    @computed_field
    @property
    def total_discharged(self) -> int:
        return len(self.matched) + len(self.unexpected)


class CommodityCount(BaseModel):
    name: str
    count: int

    model_config = ConfigDict(frozen=True)


class ContainerLine(BaseModel):
    """Строка контейнера внутри BL-группы."""

    data: ContainerRow
    is_discharged: bool = False
    discharge_date: str | None = None

    model_config = ConfigDict(frozen=True)


class BLGroup(BaseModel):
    """
    Планировочная проекция одного BL.
    """

    bl: str
    vessel_name: str = ""
    arrival_date: str = ""
    client: str = ""
    count: int = 0
    discharged_count: int = 0
    is_fully_discharged: bool = False
    commodities: list[CommodityCount] = Field(default_factory=list)
    rows: list[ContainerLine] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
