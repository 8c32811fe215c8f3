"""Auto-translation provider interface."""

from abc import ABC, abstractmethod


class TranslationProviderError(Exception):
    """A provider is not configured or its call failed."""


class TranslationProvider(ABC):
    """Translates text between two locales.

    Attributes:
        name: Provider identifier recorded in translation metadata.
    """

    name: str = ""

    @abstractmethod
    async def translate(self, text: str, source_locale: str, target_locale: str) -> str:
        """Return ``text`` translated from source_locale to target_locale.

        Raises:
            TranslationProviderError: If the provider call fails.
        """

    async def close(self) -> None:
        """Release resources held by the provider."""
