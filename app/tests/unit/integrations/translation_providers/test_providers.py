"""Unit tests for integrations.translation_providers."""

import json

import httpx
import pytest

from infrastructure.configuration import AutoTranslateSettings
from integrations.translation_providers import (
    NOT_CONFIGURED,
    HttpTranslationProvider,
    PlaceholderTranslationProvider,
    TranslationProviderError,
    UnconfiguredTranslationProvider,
    create_provider,
)

pytestmark = pytest.mark.unit


def _settings(**values):
    return AutoTranslateSettings(_env_file=None, **values)


class TestCreateProvider:
    def test_missing_provider(self):
        assert isinstance(create_provider(_settings()), UnconfiguredTranslationProvider)

    def test_missing_api_key(self):
        provider = create_provider(_settings(provider="google"))
        assert isinstance(provider, UnconfiguredTranslationProvider)

    @pytest.mark.parametrize("name", ["google", "deepl", "azure", "aws"])
    def test_placeholder_providers(self, name):
        provider = create_provider(_settings(provider=name, api_key="k"))

        assert isinstance(provider, PlaceholderTranslationProvider)
        assert provider.name == name

    def test_http_provider(self):
        provider = create_provider(
            _settings(provider="http", api_key="k", endpoint="https://mt.example/t", timeout_seconds=3)
        )

        assert isinstance(provider, HttpTranslationProvider)
        assert provider.endpoint == "https://mt.example/t"
        assert provider.timeout == 3

    def test_http_without_endpoint(self):
        provider = create_provider(_settings(provider="http", api_key="k"))
        assert isinstance(provider, UnconfiguredTranslationProvider)


class TestPlaceholderProvider:
    @pytest.mark.asyncio
    async def test_tags_text(self):
        provider = PlaceholderTranslationProvider("deepl")
        assert await provider.translate("Hello", "en", "de") == "[DEEPL_TRANSLATED:en->de] Hello"


class TestUnconfiguredProvider:
    @pytest.mark.asyncio
    async def test_raises(self):
        with pytest.raises(TranslationProviderError, match=NOT_CONFIGURED):
            await UnconfiguredTranslationProvider().translate("Hello", "en", "fr")


class TestHttpProvider:
    @pytest.mark.asyncio
    async def test_posts_payload(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"translatedText": "Bonjour"})

        provider = HttpTranslationProvider(
            "https://mt.example/t", api_key="k", transport=httpx.MockTransport(handler)
        )

        assert await provider.translate("Hello", "en", "fr") == "Bonjour"
        assert json.loads(seen[0].content) == {"text": "Hello", "source": "en", "target": "fr"}
        assert seen[0].headers["Authorization"] == "Bearer k"

    @pytest.mark.asyncio
    async def test_http_status_error(self):
        provider = HttpTranslationProvider(
            "https://mt.example/t",
            transport=httpx.MockTransport(lambda request: httpx.Response(429)),
        )

        with pytest.raises(TranslationProviderError, match="HTTP 429"):
            await provider.translate("Hello", "en", "fr")

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        provider = HttpTranslationProvider(
            "https://mt.example/t", transport=httpx.MockTransport(handler)
        )

        with pytest.raises(TranslationProviderError, match="Translation request failed"):
            await provider.translate("Hello", "en", "fr")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        provider = HttpTranslationProvider(
            "https://mt.example/t",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")),
        )

        with pytest.raises(TranslationProviderError, match="invalid JSON"):
            await provider.translate("Hello", "en", "fr")

    @pytest.mark.asyncio
    async def test_missing_field(self):
        provider = HttpTranslationProvider(
            "https://mt.example/t",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"x": 1})),
        )

        with pytest.raises(TranslationProviderError, match="no translatedText"):
            await provider.translate("Hello", "en", "fr")
