"""
Настройки проекта Manifest Engine.

Все значения можно переопределить переменными окружения (MANIFEST_*).
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
INPUT_DIR = DATA_DIR / "input"
OUTPUT_DIR = DATA_DIR / "output"

# YAML с правилами классификации (IMDG токены, метки ошибок, TEU)
RULES_FILE = Path(os.getenv(
    "MANIFEST_RULES_FILE",
    str(PROJECT_ROOT / "manifest_engine" / "classification" / "rules.yaml")
))

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("MANIFEST_LOG_LEVEL", "INFO")
LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | <level>{message}</level>"
)

# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================
# False: проверяется только первый элемент массива (fail-fast)
# True: каждый элемент проверяется по тем же правилам
STRICT_VALIDATION = os.getenv("MANIFEST_STRICT_VALIDATION", "0").lower() in ("1", "true", "yes")

# Ключи, хотя бы один из которых обязан присутствовать в манифесте
MANIFEST_IDENTITY_KEYS = ("connaissements", "numero_escale")

# =============================================================================
# SENTINEL-ЗНАЧЕНИЯ
# =============================================================================
UNKNOWN_CONTAINER = "UNKNOWN"          # Номер контейнера отсутствует
NO_BL_GROUP = "NO_BL"                  # Группа для строк без номера BL
UNKNOWN_CLIENT = "UNKNOWN CLIENT"      # Получатель не указан
UNDECLARED_COMMODITY = "NOT DECLARED"  # Товар не указан
UNKNOWN_VESSEL_PART = "UNKNOWN"        # Пропущенная часть vessel id

# =============================================================================
# ПЛАНИРОВАНИЕ
# =============================================================================
# Ключ сортировки для номеров, не оканчивающихся цифрой (идут последними)
NON_DIGIT_ORDER_KEY = 10
