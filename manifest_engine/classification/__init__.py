"""
Правила классификации: YAML конфиг и эвристика опасных грузов.
"""

from .rules_loader import RulesConfig
from .dangerous_goods import DangerousGoodsClassifier, DangerousGoodsVerdict

__all__ = [
    "RulesConfig",
    "DangerousGoodsClassifier",
    "DangerousGoodsVerdict",
]
