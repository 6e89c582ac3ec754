"""
Stage 3: Aggregation

ЦКП: Один агрегат на физический контейнер (ключ - num_conteneur).

Политика слияния строк одного контейнера (merge_row):
- Скаляры (размер, ISO, UN код, температура, товар): первое непустое
  значение побеждает, поздние непустые значения отбрасываются
- Класс IMDG: первое непустое, но явно заявленный класс всегда заменяет
  эвристическую метку; эвристика не заменяет явные данные
- Флаг reefer: монотонное OR
- BL: словарь по num_bl, повтор того же BL перезаписывает client/weight

Данные в BL манифестов часто повторяются непоследовательно, поэтому
политика зафиксирована явно и не зависит от порядка обхода.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Mapping

from contracts.analysis_dto import BLInfo, ContainerRow


@dataclass(frozen=True)
class WaybillEntry:
    """Участие одного BL в контейнере."""
    client: str = ""
    weight: float = 0.0


@dataclass(frozen=True)
class ContainerAggregate:
    """
    Агрегат физического контейнера.
    """
    num_conteneur: str
    size: int = 0
    iso: str = ""
    imdg_class: str = ""
    un_code: str = ""
    imdg_detected: bool = False
    temperature: str = ""
    commodity: str = ""
    reefer_flag: bool = False
    waybills: Mapping[str, WaybillEntry] = field(default_factory=dict)

    @property
    def waybill_count(self) -> int:
        return len(self.waybills)

    def bl_infos(self) -> list[BLInfo]:
        """BL в порядке первого появления."""
        return [
            BLInfo(num_bl=num_bl, client=entry.client, weight=entry.weight)
            for num_bl, entry in self.waybills.items()
        ]


def _first_non_empty(current, candidate):
    return current if current else candidate


def merge_row(aggregate: ContainerAggregate, row: ContainerRow) -> ContainerAggregate:
    """
    Сливает строку в агрегат. Чистая функция: возвращает новый агрегат.
    """
    imdg_class = aggregate.imdg_class
    imdg_detected = aggregate.imdg_detected

    if row.imdg_detected:
        if not imdg_class and not aggregate.un_code:
            imdg_class, imdg_detected = row.classe_imdg, True
    elif imdg_detected and (row.classe_imdg or row.code_un):
        imdg_class, imdg_detected = row.classe_imdg, False
    elif not imdg_class and row.classe_imdg:
        imdg_class = row.classe_imdg

    waybills = dict(aggregate.waybills)
    waybills[row.num_bl] = WaybillEntry(client=row.client_final, weight=row.poids)

    return replace(
        aggregate,
        size=_first_non_empty(aggregate.size, row.taille_conteneur),
        iso=_first_non_empty(aggregate.iso, row.code_iso),
        imdg_class=imdg_class,
        un_code=_first_non_empty(aggregate.un_code, row.code_un),
        imdg_detected=imdg_detected,
        temperature=_first_non_empty(aggregate.temperature, row.temperature),
        commodity=_first_non_empty(aggregate.commodity, row.marchandise),
        reefer_flag=aggregate.reefer_flag or row.indicateur_reefer == "1",
        waybills=waybills,
    )


def aggregate_rows(rows: Iterable[ContainerRow]) -> Dict[str, ContainerAggregate]:
    """
    Строит словарь num_conteneur -> агрегат (порядок первого появления).
    """
    aggregates: Dict[str, ContainerAggregate] = {}
    for row in rows:
        key = row.num_conteneur
        current = aggregates.get(key) or ContainerAggregate(num_conteneur=key)
        aggregates[key] = merge_row(current, row)
    return aggregates
