"""
Контракты DTO проекта Manifest Engine.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- Input -> Validator: Manifest (manifest_dto.py)
- Flattener -> Analyzer/Planning: ContainerRow (analysis_dto.py)
- Analyzer -> потребители: AnalysisResult (analysis_dto.py)
- Reconciler/Planning -> потребители: DischargeRecord, BLGroup (planning_dto.py)
"""

# Input
from .manifest_dto import Manifest, Connaissement, Container

# Flattener / Analyzer
from .analysis_dto import (
    ContainerRow,
    BLInfo,
    LCLContainer,
    SpecialCargoContainer,
    ContainerError,
    AnalyticsStats,
    AnalysisResult,
)

# Reconciler / Planning
from .planning_dto import (
    DischargeRecord,
    ReconciliationReport,
    CommodityCount,
    ContainerLine,
    BLGroup,
)

__all__ = [
    # Input
    "Manifest",
    "Connaissement",
    "Container",
    # Flattener / Analyzer
    "ContainerRow",
    "BLInfo",
    "LCLContainer",
    "SpecialCargoContainer",
    "ContainerError",
    "AnalyticsStats",
    "AnalysisResult",
    # Reconciler / Planning
    "DischargeRecord",
    "ReconciliationReport",
    "CommodityCount",
    "ContainerLine",
    "BLGroup",
]
