"""Exception hierarchy for the translation engine."""

from typing import List, Optional


class I18nError(Exception):
    """Base class for translation engine errors."""


class TranslationNotFoundError(I18nError):
    """A translation record does not exist."""

    def __init__(self, key: str, locale: str, namespace: str):
        self.key = key
        self.locale = locale
        self.namespace = namespace
        super().__init__(f"Translation not found: {namespace}.{key} ({locale})")


class TranslationValidationError(I18nError):
    """An import payload or record failed validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or [message]
        super().__init__(message)


class FormatError(I18nError):
    """An interchange document could not be parsed at all."""

    def __init__(self, format_name: str, message: str):
        self.format_name = format_name
        super().__init__(f"Invalid {format_name.upper()} document: {message}")


class UnsupportedFormatError(I18nError, ValueError):
    """The requested interchange format is not known."""

    def __init__(self, format_name: str, operation: str = "import"):
        self.format_name = format_name
        self.operation = operation
        super().__init__(f"Unsupported {operation} format: {format_name}")


class UpstreamError(I18nError):
    """A storage, cache or provider collaborator failed."""


class AutoTranslateError(UpstreamError):
    """The auto-translation provider is missing or failed."""
