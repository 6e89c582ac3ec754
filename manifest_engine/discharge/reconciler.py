"""
Discharge Reconciler

ЦКП: накопительный lookup "канонический id -> DischargeRecord" из
вставленных операторами текстовых отчётов и сверка с манифестом.

Lookup накапливается между вызовами до явного reset(). Запись с тем же
id (в том же или более позднем тексте) перезаписывает предыдущую.
Один писатель: параллельные вызовы должен сериализовать вызывающий.
"""

from typing import Dict, Iterable, Mapping, Optional
from loguru import logger

from contracts.planning_dto import DischargeRecord, ReconciliationReport

from .line_parser import canonical_container_id, parse_line


def update_discharge_lookup(
    text: str,
    lookup: Optional[Mapping[str, DischargeRecord]] = None,
) -> Dict[str, DischargeRecord]:
    """
    Разбирает блок текста и возвращает обновлённую копию lookup.

    Args:
        text: Многострочный свободный текст
        lookup: Существующий lookup (не изменяется)
    """
    updated: Dict[str, DischargeRecord] = dict(lookup or {})
    if not text or not text.strip():
        return updated

    for line in text.splitlines():
        parsed = parse_line(line)
        if parsed is None:
            if line.strip():
                logger.trace(f"[DischargeReconciler] Строка без номера контейнера: {line.strip()[:60]}")
            continue

        updated[parsed.container_id] = DischargeRecord(
            container_num=parsed.container_id,
            raw_line=parsed.raw_line,
            date=parsed.date,
        )

    return updated


def build_reconciliation_report(
    lookup: Mapping[str, DischargeRecord],
    manifest_container_ids: Iterable[str],
) -> ReconciliationReport:
    """
    Делит ключи lookup на matched / unexpected; pending - номера манифеста
    без записи о выгрузке. Unexpected только помечаются, не отбрасываются.
    """
    manifest_ids = {canonical_container_id(c) for c in manifest_container_ids if c}

    matched = sorted(key for key in lookup if key in manifest_ids)
    unexpected = sorted(key for key in lookup if key not in manifest_ids)
    pending = sorted(c for c in manifest_ids if c not in lookup)

    return ReconciliationReport(matched=matched, unexpected=unexpected, pending=pending)


class DischargeReconciler:
    """
    Держатель накопительного lookup.
    """

    def __init__(self, lookup: Optional[Mapping[str, DischargeRecord]] = None):
        self._lookup: Dict[str, DischargeRecord] = dict(lookup or {})

    @property
    def lookup(self) -> Dict[str, DischargeRecord]:
        """Копия текущего lookup."""
        return dict(self._lookup)

    def ingest(self, text: str) -> Dict[str, DischargeRecord]:
        """Добавляет данные из очередной вставки текста."""
        before = len(self._lookup)
        self._lookup = update_discharge_lookup(text, self._lookup)
        logger.info(
            f"[DischargeReconciler] Lookup: {before} -> {len(self._lookup)} контейнеров"
        )
        return self.lookup

    def reset(self) -> None:
        self._lookup = {}
        logger.debug("[DischargeReconciler] Lookup сброшен")

    def reconcile(self, manifest_container_ids: Iterable[str]) -> ReconciliationReport:
        report = build_reconciliation_report(self._lookup, manifest_container_ids)
        if report.unexpected:
            logger.warning(
                f"[DischargeReconciler] {report.unexpected_count} контейнер(ов) вне манифеста: "
                f"{', '.join(report.unexpected[:10])}"
            )
        return report

    def __contains__(self, container_id: str) -> bool:
        return container_id in self._lookup

    def __len__(self) -> int:
        return len(self._lookup)
