"""
Domain слой движка.

Содержит интерфейсы этапов и исключения.
"""

from .interfaces import (
    IManifestValidator,
    IManifestFlattener,
    IContainerAnalyzer,
)

from .exceptions import (
    ManifestError,
    DocumentFormatError,
    StructuralError,
    EmptyResultError,
    RulesConfigurationError,
)

__all__ = [
    # Интерфейсы
    "IManifestValidator",
    "IManifestFlattener",
    "IContainerAnalyzer",

    # Исключения
    "ManifestError",
    "DocumentFormatError",
    "StructuralError",
    "EmptyResultError",
    "RulesConfigurationError",
]
