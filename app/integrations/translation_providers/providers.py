"""Auto-translation provider implementations.

The vendor providers (google, deepl, azure, aws) are placeholders that tag
the source text with the provider and locale pair. HttpTranslationProvider
talks to any JSON endpoint accepting ``{text, source, target}`` and
answering ``{translatedText}``.
"""

from typing import Optional

import httpx

from infrastructure.configuration.integrations.auto_translate import AutoTranslateSettings
from infrastructure.logging import get_module_logger
from integrations.translation_providers.base import (
    TranslationProvider,
    TranslationProviderError,
)

logger = get_module_logger()

NOT_CONFIGURED = "Auto-translation provider not configured"

PLACEHOLDER_PROVIDERS = ("google", "deepl", "azure", "aws")


class PlaceholderTranslationProvider(TranslationProvider):
    """Tags text instead of translating it."""

    def __init__(self, name: str):
        self.name = name

    async def translate(self, text: str, source_locale: str, target_locale: str) -> str:
        return f"[{self.name.upper()}_TRANSLATED:{source_locale}->{target_locale}] {text}"


class HttpTranslationProvider(TranslationProvider):
    """Provider backed by an HTTP translation endpoint."""

    name = "http"

    def __init__(
        self,
        endpoint: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def translate(self, text: str, source_locale: str, target_locale: str) -> str:
        payload = {"text": text, "source": source_locale, "target": target_locale}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.endpoint, json=payload, headers=self._headers()
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "translation_provider_http_error",
                endpoint=self.endpoint,
                status_code=e.response.status_code,
            )
            raise TranslationProviderError(
                f"Translation endpoint returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("translation_provider_request_failed", endpoint=self.endpoint, error=str(e))
            raise TranslationProviderError(f"Translation request failed: {e}") from e
        except ValueError as e:
            raise TranslationProviderError("Translation endpoint returned invalid JSON") from e

        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translated, str):
            raise TranslationProviderError("Translation endpoint response has no translatedText")
        return translated


class UnconfiguredTranslationProvider(TranslationProvider):
    """Stands in when no provider or API key is configured."""

    name = ""

    async def translate(self, text: str, source_locale: str, target_locale: str) -> str:
        raise TranslationProviderError(NOT_CONFIGURED)


def create_provider(
    settings: Optional[AutoTranslateSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TranslationProvider:
    """Build the provider named in settings.

    Missing provider or API key yields a provider whose every call raises
    TranslationProviderError, so auto-translation reports per-key errors instead
    of failing at startup.
    """
    if settings is None:
        settings = AutoTranslateSettings()

    provider = settings.provider
    if not provider or not settings.api_key:
        logger.debug("translation_provider_not_configured", provider=provider)
        return UnconfiguredTranslationProvider()

    if provider in PLACEHOLDER_PROVIDERS:
        return PlaceholderTranslationProvider(provider)

    if provider == "http":
        if not settings.endpoint:
            return UnconfiguredTranslationProvider()
        return HttpTranslationProvider(
            endpoint=settings.endpoint,
            api_key=settings.api_key,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    raise TranslationProviderError(f"Unsupported translation provider: {provider}")
