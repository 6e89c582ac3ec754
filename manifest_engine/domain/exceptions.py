"""
Исключения движка анализа манифестов.

Fatal для одного документа; пакетная обработка ловит их по документу
и продолжает с остальными.
"""


class ManifestError(Exception):
    """Базовое исключение движка."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Manifest Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class DocumentFormatError(ManifestError):
    """Документ не является корректным JSON."""
    pass


class StructuralError(ManifestError):
    """Корень документа не похож на массив манифестов."""
    pass


class EmptyResultError(ManifestError):
    """Структурно валидный документ не дал ни одной строки."""
    pass


class RulesConfigurationError(ManifestError):
    """Ошибка YAML конфигурации правил классификации."""
    pass
