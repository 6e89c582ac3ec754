#!/usr/bin/env python3
"""
Точка входа: анализ JSON манифестов судозахода.

Использование:
    # Проанализировать один или несколько манифестов
    python scripts/analyze_manifest.py path/to/manifest.json other.json

    # Все *.json из директории + сверка с отчётом о выгрузке
    python scripts/analyze_manifest.py --dir data/input --discharge report.txt

    # Сохранить полный отчёт в JSON
    python scripts/analyze_manifest.py manifest.json --output data/output/report.json
"""

import sys
import argparse
import json
from pathlib import Path
from typing import List, Tuple

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import INPUT_DIR, LOG_FORMAT, LOG_LEVEL
from manifest_engine.discharge.reconciler import DischargeReconciler
from manifest_engine.planning.bl_grouping import PlanningBuilder
from manifest_engine.stages.pipeline import ManifestPipeline, PipelineResult


def collect_documents(paths: List[Path]) -> List[Tuple[str, str]]:
    """Читает файлы манифестов как текст (source, json_text)."""
    documents = []
    for path in paths:
        try:
            documents.append((path.name, path.read_text(encoding="utf-8")))
        except OSError as e:
            print(f"  [ERROR] Не удалось прочитать {path}: {e}")
    return documents


def print_result(result: PipelineResult) -> None:
    stats = result.analysis.stats
    print(f"\n[{result.vessel_id}] {result.source}")
    print(f"  Контейнеров: {stats.total_containers} (TEU {stats.teu})")
    print(f"  20': {stats.count_20}  40': {stats.count_40}  45': {stats.count_45}  ?: {stats.count_unknown_size}")
    print(f"  LCL: {stats.count_lcl}  FCL: {stats.count_fcl}")
    print(f"  IMDG: {stats.count_imdg} (20': {stats.count_imdg_20}, 40': {stats.count_imdg_40})")
    print(f"  Reefer: {stats.count_reefer} (20': {stats.count_reefer_20}, 40': {stats.count_reefer_40})")
    print(f"  Ошибки данных: {stats.count_errors}")


def main():
    """Главная функция анализа манифестов."""

    print("\n" + "=" * 60)
    print("  MANIFEST ENGINE - анализ манифестов")
    print("=" * 60)

    parser = argparse.ArgumentParser(description="Manifest Engine")
    parser.add_argument("paths", nargs="*", help="JSON файлы манифестов")
    parser.add_argument("--dir", help="Директория с *.json манифестами")
    parser.add_argument("--discharge", nargs="*", default=[], help="Текстовые отчёты о выгрузке")
    parser.add_argument("--output", help="Путь для JSON отчёта")
    args = parser.parse_args()

    paths = [Path(p) for p in args.paths]
    if args.dir:
        paths.extend(sorted(Path(args.dir).glob("*.json")))
    if not paths:
        paths = sorted(INPUT_DIR.glob("*.json")) if INPUT_DIR.exists() else []

    if not paths:
        print("[ERROR] Не найдено ни одного манифеста")
        sys.exit(1)

    print(f"\n[PROCESSING] Обработка {len(paths)} файлов")

    pipeline = ManifestPipeline()
    batch = pipeline.process_batch(collect_documents(paths))

    for result in batch.results:
        print_result(result)

    reconciler = DischargeReconciler()
    for report_path in args.discharge:
        reconciler.ingest(Path(report_path).read_text(encoding="utf-8"))

    report = {"batch": batch.to_dict(), "planning": []}

    if batch.results:
        # Планирование и сверка - по последнему успешно обработанному документу
        active = batch.results[-1]
        groups = PlanningBuilder().build(active.rows, reconciler.lookup)
        report["planning"] = [g.model_dump() for g in groups]

        if len(reconciler):
            reconciliation = reconciler.reconcile(active.container_ids)
            report["reconciliation"] = reconciliation.model_dump()
            print(
                f"\n[DISCHARGE] Совпало: {reconciliation.matched_count}, "
                f"вне манифеста: {reconciliation.unexpected_count}, "
                f"ожидают: {len(reconciliation.pending)}"
            )

        complete = sum(1 for g in groups if g.is_fully_discharged)
        print(f"[PLANNING] BL: {len(groups)}, выгружено полностью: {complete}")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report, f, ensure_ascii=False, indent=2)
        print(f"\n  [SAVED] Отчёт: {output_path}")

    print("\n" + "=" * 60)
    print(f"  ИТОГИ: {len(batch.results)}/{len(batch.results) + len(batch.failures)} успешно обработано")

    if not batch.success:
        print(f"  [WARNING] {batch.error_summary()}")
        sys.exit(1)


if __name__ == "__main__":
    logger.remove()
    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=LOG_LEVEL
    )

    main()
