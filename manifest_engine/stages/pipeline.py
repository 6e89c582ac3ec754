"""
Manifest Pipeline - оркестратор этапов.

Один документ: Validation -> Flattening -> Analysis (Aggregation внутри).
Пакет: каждый документ обрабатывается независимо; ошибка одного документа
фиксируется в сводке и не блокирует остальные.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Set, Tuple
from loguru import logger

from contracts.analysis_dto import AnalysisResult, ContainerRow
from contracts.manifest_dto import Manifest

from ..classification.rules_loader import RulesConfig
from ..domain.exceptions import DocumentFormatError, EmptyResultError, ManifestError
from ..domain.interfaces import IContainerAnalyzer, IManifestFlattener, IManifestValidator
from ..vessel import generate_vessel_id
from .stage_1_validation import ManifestValidator
from .stage_2_flatten import ManifestFlattener
from .stage_4_analysis import ContainerAnalyzer


def load_document(text: Any, source: str = "<document>") -> Any:
    """
    Разбирает JSON текст документа.

    Raises:
        DocumentFormatError: текст не является корректным JSON
    """
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError и UnicodeDecodeError - подклассы ValueError;
        # сюда же попадает лимит длины целых чисел при разборе
        raise DocumentFormatError(
            f"JSON syntax error in {source}", component="ManifestPipeline", original_error=e
        )


@dataclass
class PipelineResult:
    """
    Результат обработки одного документа.
    """
    source: str
    vessel_id: str
    manifests: List[Manifest]
    rows: List[ContainerRow]
    analysis: AnalysisResult
    processing_time_ms: float = 0.0

    @property
    def container_ids(self) -> Set[str]:
        """Номера контейнеров манифеста (для сверки выгрузки)."""
        return {row.num_conteneur for row in self.rows}

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "vessel_id": self.vessel_id,
            "rows_count": len(self.rows),
            "analysis": self.analysis.model_dump(),
            "processing_time_ms": self.processing_time_ms,
        }


@dataclass
class DocumentFailure:
    """Документ, отклонённый целиком."""
    source: str
    error_type: str
    message: str

    def to_dict(self) -> dict:
        return {"source": self.source, "error_type": self.error_type, "message": self.message}


@dataclass
class BatchResult:
    """
    Итог пакетной обработки.
    """
    results: List[PipelineResult] = field(default_factory=list)
    failures: List[DocumentFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    def error_summary(self) -> str:
        return " | ".join(f"{f.source}: {f.message}" for f in self.failures)

    def to_dict(self) -> dict:
        return {
            "results": [r.to_dict() for r in self.results],
            "failures": [f.to_dict() for f in self.failures],
        }


class ManifestPipeline:
    """
    Пайплайн анализа манифеста.

    Все этапы опциональны - по умолчанию создаются стандартные
    с общим RulesConfig.
    """

    def __init__(
        self,
        validator: Optional[IManifestValidator] = None,
        flattener: Optional[IManifestFlattener] = None,
        analyzer: Optional[IContainerAnalyzer] = None,
        rules: Optional[RulesConfig] = None,
    ):
        rules = rules or RulesConfig.load()
        self.validator = validator or ManifestValidator()
        self.flattener = flattener or ManifestFlattener(rules=rules)
        self.analyzer = analyzer or ContainerAnalyzer(rules=rules)

    def process(self, data: Any, source: str = "<document>") -> PipelineResult:
        """
        Обрабатывает распарсенный документ.

        Raises:
            StructuralError: документ не прошёл Stage 1
            EmptyResultError: документ не содержит ни одного контейнера
        """
        start_time = time.time()
        logger.info(f"[ManifestPipeline] Старт обработки: {source}")

        logger.debug("[ManifestPipeline] Stage 1/3: Validation")
        manifests = self.validator.validate(data)

        logger.debug("[ManifestPipeline] Stage 2/3: Flattening")
        rows = self.flattener.flatten(manifests)
        if not rows:
            raise EmptyResultError(f"No containers found in {source}", component="ManifestPipeline")

        logger.debug("[ManifestPipeline] Stage 3/3: Analysis")
        analysis = self.analyzer.analyze(rows)

        processing_time_ms = (time.time() - start_time) * 1000
        vessel_id = generate_vessel_id(manifests[0])

        logger.info(
            f"[ManifestPipeline] {vessel_id}: {len(rows)} строк, "
            f"{analysis.stats.total_containers} контейнеров за {processing_time_ms:.1f}ms"
        )

        return PipelineResult(
            source=source,
            vessel_id=vessel_id,
            manifests=manifests,
            rows=rows,
            analysis=analysis,
            processing_time_ms=processing_time_ms,
        )

    def process_batch(self, documents: Iterable[Tuple[str, Any]]) -> BatchResult:
        """
        Обрабатывает пакет документов (source, данные).

        Данные - JSON текст (str/bytes) или уже распарсенное значение.
        ManifestError фиксируется по документу; прочие исключения
        пробрасываются.
        """
        batch = BatchResult()

        for source, payload in documents:
            try:
                data = load_document(payload, source) if isinstance(payload, (str, bytes)) else payload
                batch.results.append(self.process(data, source=source))
            except ManifestError as e:
                logger.error(f"[ManifestPipeline] Документ отклонён: {source}: {e.message}")
                batch.failures.append(DocumentFailure(
                    source=source,
                    error_type=type(e).__name__,
                    message=e.message,
                ))

        logger.info(
            f"[ManifestPipeline] Пакет: {len(batch.results)} успешно, {len(batch.failures)} с ошибками"
        )
        return batch
