"""
Сверка отчётов о выгрузке с манифестом.
"""

from .line_parser import (
    ParsedLine,
    parse_line,
    extract_container_id,
    extract_date,
    canonical_container_id,
)
from .reconciler import (
    DischargeReconciler,
    update_discharge_lookup,
    build_reconciliation_report,
)

__all__ = [
    "ParsedLine",
    "parse_line",
    "extract_container_id",
    "extract_date",
    "canonical_container_id",
    "DischargeReconciler",
    "update_discharge_lookup",
    "build_reconciliation_report",
]
