"""
Planning / Grouping Builder

ЦКП: список BLGroup для планирования выгрузки.

Входные данные: List[ContainerRow] + lookup выгрузки
Выходные данные: List[BLGroup]

Алгоритм:
1. Группировка строк по num_bl (строки без BL -> группа NO_BL)
2. Судно, дата, получатель берутся из первой строки группы
   (один BL - один получатель)
3. Гистограмма товаров по убыванию количества
4. Контейнеры сортируются по ключу последней цифры номера
   (не цифра -> 10, в конец), затем по номеру
5. Группы: по убыванию числа контейнеров, затем по номеру BL
"""

from collections import Counter
from typing import Dict, List, Mapping, Optional, Tuple
from loguru import logger

from config.settings import NO_BL_GROUP, NON_DIGIT_ORDER_KEY, UNDECLARED_COMMODITY, UNKNOWN_CLIENT
from contracts.analysis_dto import ContainerRow
from contracts.planning_dto import BLGroup, CommodityCount, ContainerLine, DischargeRecord

from ..discharge.line_parser import canonical_container_id

_DIGITS = "0123456789"


def discharge_order_key(number: str) -> Tuple[int, str]:
    """
    Ключ сортировки контейнера внутри BL.

    Последний символ номера (после trim): цифра -> её значение, иначе 10.
    """
    clean = (number or "").strip()
    last = clean[-1:]
    key = int(last) if last and last in _DIGITS else NON_DIGIT_ORDER_KEY
    return key, number or ""


class PlanningBuilder:
    """
    Перегруппировка строк манифеста по BL с отметками о выгрузке.
    """

    def build(
        self,
        rows: List[ContainerRow],
        lookup: Optional[Mapping[str, DischargeRecord]] = None,
    ) -> List[BLGroup]:
        lookup = lookup or {}

        by_bl: Dict[str, List[ContainerRow]] = {}
        for row in rows:
            by_bl.setdefault(row.num_bl or NO_BL_GROUP, []).append(row)

        groups = [self._build_group(bl, bl_rows, lookup) for bl, bl_rows in by_bl.items()]
        groups.sort(key=lambda g: (-g.count, g.bl))

        complete = sum(1 for g in groups if g.is_fully_discharged)
        logger.debug(f"[PlanningBuilder] {len(rows)} строк -> {len(groups)} BL, выгружено полностью: {complete}")
        return groups

    def _build_group(
        self,
        bl: str,
        rows: List[ContainerRow],
        lookup: Mapping[str, DischargeRecord],
    ) -> BLGroup:
        first = rows[0]

        commodities = Counter(
            row.marchandise if row.marchandise.strip() else UNDECLARED_COMMODITY
            for row in rows
        )

        lines = []
        for row in sorted(rows, key=lambda r: discharge_order_key(r.num_conteneur)):
            record = lookup.get(canonical_container_id(row.num_conteneur))
            lines.append(ContainerLine(
                data=row,
                is_discharged=record is not None,
                discharge_date=record.date if record else None,
            ))

        discharged = sum(1 for line in lines if line.is_discharged)

        return BLGroup(
            bl=bl,
            vessel_name=first.nom_navire,
            arrival_date=first.date_manifeste,
            client=first.client_final or UNKNOWN_CLIENT,
            count=len(rows),
            discharged_count=discharged,
            is_fully_discharged=len(rows) > 0 and discharged == len(rows),
            commodities=[
                CommodityCount(name=name, count=count)
                for name, count in commodities.most_common()
            ],
            rows=lines,
        )
