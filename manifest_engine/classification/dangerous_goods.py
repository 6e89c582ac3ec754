"""
Эвристика опасного груза по описанию товара.

Чистая функция текста: токены и правило совпадения задаются снаружи,
пайплайн разворачивания от них не зависит.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .rules_loader import RulesConfig


@dataclass(frozen=True)
class DangerousGoodsVerdict:
    """Результат проверки текста."""
    detected: bool
    matched_token: Optional[str] = None


class DangerousGoodsClassifier:
    """
    Ищет в тексте целое слово из набора токенов (без учёта регистра).
    """

    def __init__(self, tokens: Optional[Iterable[str]] = None, rules: Optional[RulesConfig] = None):
        if tokens is None:
            tokens = (rules or RulesConfig.load()).dg_tokens
        self.tokens = [t for t in tokens if t]
        if not self.tokens:
            raise ValueError("DangerousGoodsClassifier requires at least one token")
        alternatives = "|".join(re.escape(t) for t in self.tokens)
        self._pattern = re.compile(rf"\b({alternatives})\b", re.IGNORECASE)

    def classify(self, text: Optional[str]) -> DangerousGoodsVerdict:
        if not text:
            return DangerousGoodsVerdict(detected=False)
        match = self._pattern.search(text)
        if match is None:
            return DangerousGoodsVerdict(detected=False)
        return DangerousGoodsVerdict(detected=True, matched_token=match.group(1).upper())
