"""Auto-translation providers."""

from integrations.translation_providers.base import (
    TranslationProvider,
    TranslationProviderError,
)
from integrations.translation_providers.providers import (
    NOT_CONFIGURED,
    HttpTranslationProvider,
    PlaceholderTranslationProvider,
    UnconfiguredTranslationProvider,
    create_provider,
)

__all__ = [
    "NOT_CONFIGURED",
    "HttpTranslationProvider",
    "PlaceholderTranslationProvider",
    "TranslationProvider",
    "TranslationProviderError",
    "UnconfiguredTranslationProvider",
    "create_provider",
]
