"""
Интерфейсы (абстрактные классы) этапов движка.

Позволяют подменять этапы в ManifestPipeline (например, в тестах).
"""

from abc import ABC, abstractmethod
from typing import Any, List

from contracts.analysis_dto import AnalysisResult, ContainerRow
from contracts.manifest_dto import Manifest


class IManifestValidator(ABC):
    """Структурная проверка сырого документа."""

    @abstractmethod
    def validate(self, data: Any) -> List[Manifest]:
        """
        Args:
            data: Результат json.loads

        Returns:
            Типизированный список манифестов

        Raises:
            StructuralError
        """
        pass


class IManifestFlattener(ABC):
    """Разворачивание Manifest -> BL -> Container в плоские строки."""

    @abstractmethod
    def flatten(self, manifests: List[Manifest]) -> List[ContainerRow]:
        pass


class IContainerAnalyzer(ABC):
    """Агрегация строк по физическому контейнеру и классификация."""

    @abstractmethod
    def analyze(self, rows: List[ContainerRow]) -> AnalysisResult:
        pass
