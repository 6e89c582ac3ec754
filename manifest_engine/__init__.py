"""
Manifest Engine: разбор и аналитика грузовых манифестов судозахода.

Пакет содержит:
- структурную проверку и разворачивание манифеста в строки
- агрегацию по физическому контейнеру и классификацию (LCL, IMDG, Reefer, ошибки)
- сверку текстовых отчётов о выгрузке
- группировку по BL для планирования выгрузки
"""

from .domain.exceptions import (
    ManifestError,
    DocumentFormatError,
    StructuralError,
    EmptyResultError,
    RulesConfigurationError,
)
from .classification import RulesConfig, DangerousGoodsClassifier
from .stages import (
    ManifestPipeline,
    PipelineResult,
    BatchResult,
    ManifestValidator,
    ManifestFlattener,
    ContainerAnalyzer,
    merge_row,
    load_document,
)
from .discharge import DischargeReconciler, update_discharge_lookup
from .planning import PlanningBuilder
from .vessel import generate_vessel_id, compute_teu

__all__ = [
    "ManifestError",
    "DocumentFormatError",
    "StructuralError",
    "EmptyResultError",
    "RulesConfigurationError",
    "RulesConfig",
    "DangerousGoodsClassifier",
    "ManifestPipeline",
    "PipelineResult",
    "BatchResult",
    "ManifestValidator",
    "ManifestFlattener",
    "ContainerAnalyzer",
    "merge_row",
    "load_document",
    "DischargeReconciler",
    "update_discharge_lookup",
    "PlanningBuilder",
    "generate_vessel_id",
    "compute_teu",
]
