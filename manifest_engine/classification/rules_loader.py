"""
Загрузчик правил классификации из YAML.

ЦКП: единая модель RulesConfig для Flattener, Analyzer и DG классификатора.
"""

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Dict, List, Optional
from loguru import logger

from config.settings import RULES_FILE, UNKNOWN_CONTAINER
from ..domain.exceptions import RulesConfigurationError


REQUIRED_SECTIONS = ("dangerous_goods", "container_number", "error_reasons")


@dataclass
class RulesConfig:
    """
    Правила классификации.
    """
    dg_tokens: List[str]
    dg_detected_label: str
    container_sentinels: List[str]
    reason_missing_iso: str
    reason_unknown_size: str
    reason_invalid_number: str
    reefer_iso_prefix: str = "R"
    forty_foot_sizes: List[int] = field(default_factory=lambda: [40, 45])
    teu_weights: Dict[int, int] = field(default_factory=lambda: {20: 1, 40: 2, 45: 2})

    _cache: ClassVar[Dict[str, "RulesConfig"]] = {}

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "RulesConfig":
        """
        Загружает правила (с кешем по пути файла).

        Raises:
            RulesConfigurationError: файл не найден или неполный
        """
        rules_path = Path(path) if path else RULES_FILE
        cache_key = str(rules_path.resolve())

        if cache_key in cls._cache:
            return cls._cache[cache_key]

        if not rules_path.exists():
            raise RulesConfigurationError(
                f"Файл правил не найден: {rules_path}", component="RulesConfig"
            )

        try:
            with open(rules_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RulesConfigurationError(
                f"Некорректный YAML: {rules_path}", component="RulesConfig", original_error=e
            )

        rules = cls.from_dict(data, source=rules_path.name)
        cls._cache[cache_key] = rules

        logger.debug(
            f"[RulesConfig] Загружено из {rules_path.name}: "
            f"{len(rules.dg_tokens)} DG токенов, {len(rules.container_sentinels)} sentinels"
        )
        return rules

    @classmethod
    def from_dict(cls, data: dict, source: str = "<dict>") -> "RulesConfig":
        """Собирает RulesConfig из распарсенного YAML."""
        missing = [s for s in REQUIRED_SECTIONS if not isinstance(data.get(s), dict)]
        if missing:
            raise RulesConfigurationError(
                f"В {source} отсутствуют секции: {', '.join(missing)}", component="RulesConfig"
            )

        dg = data["dangerous_goods"]
        tokens = [str(t).strip() for t in dg.get("tokens") or [] if str(t).strip()]
        if not tokens:
            raise RulesConfigurationError(
                f"В {source} пустой список dangerous_goods.tokens", component="RulesConfig"
            )

        sentinels = [str(s) for s in data["container_number"].get("sentinels") or []]
        if UNKNOWN_CONTAINER not in sentinels:
            sentinels.insert(0, UNKNOWN_CONTAINER)

        reasons = data["error_reasons"]
        sizes = data.get("sizes") or {}
        teu = sizes.get("teu") or {20: 1, 40: 2, 45: 2}

        try:
            return cls(
                dg_tokens=tokens,
                dg_detected_label=str(dg.get("detected_label") or "DETECTED (DGX)"),
                container_sentinels=sentinels,
                reason_missing_iso=str(reasons["missing_iso"]),
                reason_unknown_size=str(reasons["unknown_size"]),
                reason_invalid_number=str(reasons["invalid_number"]),
                reefer_iso_prefix=str((data.get("reefer") or {}).get("iso_prefix") or "R"),
                forty_foot_sizes=[int(s) for s in sizes.get("forty_foot_class") or [40, 45]],
                teu_weights={int(k): int(v) for k, v in teu.items()},
            )
        except (KeyError, TypeError, ValueError) as e:
            raise RulesConfigurationError(
                f"Некорректные значения в {source}", component="RulesConfig", original_error=e
            )

    @classmethod
    def clear_cache(cls) -> None:
        cls._cache.clear()
