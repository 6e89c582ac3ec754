"""
Идентичность судозахода и производные метрики ёмкости.
"""

import re
from typing import Optional

from config.settings import UNKNOWN_VESSEL_PART
from contracts.analysis_dto import AnalyticsStats
from contracts.manifest_dto import Manifest


_WHITESPACE_RE = re.compile(r"\s+")


def generate_vessel_id(manifest: Manifest) -> str:
    """
    Стабильный id судозахода: "{судно}-{рейс}-{заход}" без пробелов, в верхнем регистре.

    Используется для отсечения повторной загрузки того же манифеста.
    """
    name = manifest.nom_navire or UNKNOWN_VESSEL_PART
    voyage = manifest.num_voyage or UNKNOWN_VESSEL_PART
    escale = manifest.numero_escale or UNKNOWN_VESSEL_PART
    return _WHITESPACE_RE.sub("", f"{name}-{voyage}-{escale}").upper()


def compute_teu(stats: AnalyticsStats, weights: Optional[dict] = None) -> int:
    """TEU по счётчикам размеров: 20' = 1, 40'/45' = 2."""
    weights = weights or {20: 1, 40: 2, 45: 2}
    return (
        stats.count_20 * weights.get(20, 0)
        + stats.count_40 * weights.get(40, 0)
        + stats.count_45 * weights.get(45, 0)
    )
