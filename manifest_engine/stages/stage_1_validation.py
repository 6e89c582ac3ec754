"""
Stage 1: Validation

ЦКП: Быстрая структурная проверка распарсенного JSON документа.

Входные данные: произвольное значение (результат json.loads)
Выходные данные: List[Manifest]

Алгоритм (fail-fast):
1. Корень - массив
2. Массив не пуст
3. Первый элемент - объект
4. У первого элемента есть numero_escale или connaissements

По умолчанию проверяется только первый элемент. В strict режиме те же
правила применяются к каждому элементу.
"""

from typing import Any, List, Optional, Sequence
from loguru import logger
from pydantic import ValidationError

from config.settings import MANIFEST_IDENTITY_KEYS, STRICT_VALIDATION
from contracts.manifest_dto import Manifest

from ..domain.exceptions import StructuralError
from ..domain.interfaces import IManifestValidator


class ManifestValidator(IManifestValidator):
    """
    Stage 1: структурная проверка документа.
    """

    def __init__(
        self,
        strict: Optional[bool] = None,
        identity_keys: Sequence[str] = MANIFEST_IDENTITY_KEYS,
    ):
        self.strict = STRICT_VALIDATION if strict is None else strict
        self.identity_keys = tuple(identity_keys)

    def validate(self, data: Any) -> List[Manifest]:
        if not isinstance(data, list):
            raise StructuralError(
                "Root element must be an array of Manifest objects",
                component="ManifestValidator",
            )

        if len(data) == 0:
            raise StructuralError("Manifest array is empty", component="ManifestValidator")

        sampled = data if self.strict else data[:1]
        for idx, item in enumerate(sampled):
            self._check_element(item, idx)

        manifests = [self._to_manifest(item, idx) for idx, item in enumerate(data)]

        logger.debug(
            f"[ManifestValidator] OK: {len(manifests)} манифест(ов), "
            f"проверено элементов: {len(sampled)} (strict={self.strict})"
        )
        return manifests

    def _check_element(self, item: Any, idx: int) -> None:
        if not isinstance(item, dict):
            raise StructuralError(
                f"Manifest element [{idx}] must be an object",
                component="ManifestValidator",
            )

        if not any(key in item for key in self.identity_keys):
            raise StructuralError(
                f"Manifest element [{idx}] is missing key fields "
                f"({' or '.join(self.identity_keys)})",
                component="ManifestValidator",
            )

    def _to_manifest(self, item: Any, idx: int) -> Manifest:
        # Непроверенные элементы не отклоняются: они просто дадут 0 строк
        if not isinstance(item, dict):
            logger.warning(f"[ManifestValidator] Элемент [{idx}] не объект, используется пустой манифест")
            return Manifest()

        try:
            return Manifest.model_validate(item)
        except ValidationError as e:
            raise StructuralError(
                f"Manifest element [{idx}] does not match the Manifest schema",
                component="ManifestValidator",
                original_error=e,
            )
