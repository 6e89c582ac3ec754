"""
Stage 4: Analysis

ЦКП: AnalysisResult - статистика и категорийные списки по физическим контейнерам.

Входные данные: List[ContainerRow]
Выходные данные: AnalysisResult

Классификация (независимо, контейнер может попасть в несколько списков):
- LCL: больше одного различного BL, иначе FCL
- IMDG: есть класс или UN код
- Reefer: флаг reefer или ISO код начинается с "R"
- Error: пустой ISO, размер 0, пустой/sentinel номер (все причины)

Списки пересчитываются с нуля на каждый вызов и сортируются по номеру
контейнера (обычное строковое сравнение).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
from loguru import logger

from contracts.analysis_dto import (
    AnalysisResult,
    AnalyticsStats,
    ContainerError,
    ContainerRow,
    LCLContainer,
    SpecialCargoContainer,
)

from ..classification.rules_loader import RulesConfig
from ..domain.interfaces import IContainerAnalyzer
from ..vessel import compute_teu
from .stage_3_aggregation import ContainerAggregate, aggregate_rows


@dataclass(frozen=True)
class ContainerClassification:
    """Категории одного агрегата."""
    is_lcl: bool
    is_imdg: bool
    is_reefer: bool
    reasons: Tuple[str, ...] = ()

    @property
    def is_error(self) -> bool:
        return len(self.reasons) > 0


def classify_container(aggregate: ContainerAggregate, rules: RulesConfig) -> ContainerClassification:
    """Классифицирует агрегат по правилам."""
    reasons = []
    if not aggregate.iso.strip():
        reasons.append(rules.reason_missing_iso)
    if aggregate.size == 0:
        reasons.append(rules.reason_unknown_size)
    number = aggregate.num_conteneur.strip()
    if not number or number in rules.container_sentinels:
        reasons.append(rules.reason_invalid_number)

    is_reefer = aggregate.reefer_flag or aggregate.iso.upper().startswith(rules.reefer_iso_prefix.upper())

    return ContainerClassification(
        is_lcl=aggregate.waybill_count > 1,
        is_imdg=bool(aggregate.imdg_class or aggregate.un_code),
        is_reefer=is_reefer,
        reasons=tuple(reasons),
    )


class ContainerAnalyzer(IContainerAnalyzer):
    """
    Stage 4: агрегация, классификация и статистика.
    """

    def __init__(self, rules: Optional[RulesConfig] = None):
        self.rules = rules or RulesConfig.load()

    def analyze(self, rows: List[ContainerRow]) -> AnalysisResult:
        aggregates = aggregate_rows(rows)

        counts = dict.fromkeys(AnalyticsStats.model_fields, 0)
        lcl: List[LCLContainer] = []
        imdg: List[SpecialCargoContainer] = []
        reefer: List[SpecialCargoContainer] = []
        errors: List[ContainerError] = []

        forty_class = set(self.rules.forty_foot_sizes)

        for number in sorted(aggregates):
            agg = aggregates[number]
            verdict = classify_container(agg, self.rules)
            bls = agg.bl_infos()

            counts["total_containers"] += 1
            if agg.size == 20:
                counts["count_20"] += 1
            elif agg.size == 40:
                counts["count_40"] += 1
            elif agg.size == 45:
                counts["count_45"] += 1
            else:
                counts["count_unknown_size"] += 1

            if verdict.is_lcl:
                counts["count_lcl"] += 1
                lcl.append(LCLContainer(num_conteneur=number, taille_conteneur=agg.size, bls=bls))
            else:
                counts["count_fcl"] += 1

            if verdict.is_imdg:
                counts["count_imdg"] += 1
                if agg.size == 20:
                    counts["count_imdg_20"] += 1
                elif agg.size in forty_class:
                    counts["count_imdg_40"] += 1
                imdg.append(self._special_cargo(agg, bls))

            if verdict.is_reefer:
                counts["count_reefer"] += 1
                if agg.size == 20:
                    counts["count_reefer_20"] += 1
                elif agg.size in forty_class:
                    counts["count_reefer_40"] += 1
                reefer.append(self._special_cargo(agg, bls))

            if verdict.is_error:
                counts["count_errors"] += 1
                errors.append(ContainerError(
                    num_conteneur=number,
                    taille_conteneur=agg.size,
                    code_iso=agg.iso,
                    bls=bls,
                    reasons=list(verdict.reasons),
                ))

        stats = AnalyticsStats(**counts)
        stats = stats.model_copy(update={"teu": compute_teu(stats, self.rules.teu_weights)})

        logger.debug(
            f"[ContainerAnalyzer] {len(rows)} строк -> {stats.total_containers} контейнеров "
            f"(LCL={stats.count_lcl}, IMDG={stats.count_imdg}, "
            f"Reefer={stats.count_reefer}, Errors={stats.count_errors})"
        )

        return AnalysisResult(
            stats=stats,
            lcl_containers=lcl,
            imdg_containers=imdg,
            reefer_containers=reefer,
            error_containers=errors,
        )

    @staticmethod
    def _special_cargo(agg: ContainerAggregate, bls) -> SpecialCargoContainer:
        return SpecialCargoContainer(
            num_conteneur=agg.num_conteneur,
            taille_conteneur=agg.size,
            code_iso=agg.iso,
            bls=bls,
            marchandise=agg.commodity,
            classe_imdg=agg.imdg_class,
            code_un=agg.un_code,
            imdg_detected=agg.imdg_detected,
            temperature=agg.temperature,
            is_active_reefer=agg.reefer_flag,
        )
