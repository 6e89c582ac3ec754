"""
Этапы движка анализа манифестов.

Порядок выполнения строгий:
1. Validation - структурная проверка документа
2. Flattening - разворачивание в ContainerRow
3. Aggregation - слияние строк по физическому контейнеру
4. Analysis - классификация и статистика
"""

from .stage_1_validation import ManifestValidator
from .stage_2_flatten import (
    ManifestFlattener,
    normalize_size,
    normalize_reefer_flag,
    normalize_weight,
)
from .stage_3_aggregation import (
    ContainerAggregate,
    WaybillEntry,
    merge_row,
    aggregate_rows,
)
from .stage_4_analysis import ContainerAnalyzer, ContainerClassification, classify_container
from .pipeline import (
    ManifestPipeline,
    PipelineResult,
    BatchResult,
    DocumentFailure,
    load_document,
)

__all__ = [
    # Pipeline
    "ManifestPipeline",
    "PipelineResult",
    "BatchResult",
    "DocumentFailure",
    "load_document",
    # Stage 1
    "ManifestValidator",
    # Stage 2
    "ManifestFlattener",
    "normalize_size",
    "normalize_reefer_flag",
    "normalize_weight",
    # Stage 3
    "ContainerAggregate",
    "WaybillEntry",
    "merge_row",
    "aggregate_rows",
    # Stage 4
    "ContainerAnalyzer",
    "ContainerClassification",
    "classify_container",
]
