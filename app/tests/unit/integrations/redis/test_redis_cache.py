"""Unit tests for integrations.redis.cache module."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError, ResponseError

from infrastructure.operations import OperationStatus
from integrations.redis import RedisCacheBackend

pytestmark = pytest.mark.unit


@pytest.fixture
def client():
    mock = AsyncMock()
    mock.get.return_value = None
    return mock


@pytest.fixture
def backend(client):
    return RedisCacheBackend(
        "redis://localhost:6379/0", key_prefix="test:", default_ttl=300, client=client
    )


class TestGet:
    @pytest.mark.asyncio
    async def test_hit_decodes_json(self, backend, client):
        client.get.return_value = json.dumps({"welcome": "Bienvenue"})

        result = await backend.get("i18n:fr:common")

        assert result.is_success
        assert result.data == {"welcome": "Bienvenue"}
        client.get.assert_awaited_once_with("test:i18n:fr:common")

    @pytest.mark.asyncio
    async def test_miss(self, backend):
        result = await backend.get("i18n:fr:common")

        assert result.is_success
        assert result.data is None

    @pytest.mark.asyncio
    async def test_namespace_prefixes_key(self, backend, client):
        await backend.get("i18n:acme:fr:common", namespace="acme")
        client.get.assert_awaited_once_with("test:acme:i18n:acme:fr:common")

    @pytest.mark.asyncio
    async def test_connection_error_is_transient(self, backend, client):
        client.get.side_effect = ConnectionError("refused")

        result = await backend.get("k")

        assert result.status == OperationStatus.TRANSIENT_ERROR
        assert result.error_code == "CONNECTION_ERROR"

    @pytest.mark.asyncio
    async def test_other_redis_error_is_permanent(self, backend, client):
        client.get.side_effect = ResponseError("WRONGTYPE")

        result = await backend.get("k")

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == "REDIS_ERROR"

    @pytest.mark.asyncio
    async def test_non_json_value(self, backend, client):
        client.get.return_value = "not json"

        result = await backend.get("k")

        assert result.error_code == "DECODE_ERROR"


class TestWrites:
    @pytest.mark.asyncio
    async def test_set_serializes_with_ttl(self, backend, client):
        result = await backend.set("k", {"a": "Á"}, ttl=60)

        assert result.is_success
        client.set.assert_awaited_once_with("test:k", '{"a": "Á"}', ex=60)

    @pytest.mark.asyncio
    async def test_set_uses_default_ttl(self, backend, client):
        await backend.set("k", {})
        client.set.assert_awaited_once_with("test:k", "{}", ex=300)

    @pytest.mark.asyncio
    async def test_set_passes_explicit_zero_ttl(self, backend, client):
        await backend.set("k", {}, ttl=0)
        client.set.assert_awaited_once_with("test:k", "{}", ex=0)

    @pytest.mark.asyncio
    async def test_set_unserializable(self, backend, client):
        result = await backend.set("k", {"a": object()})

        assert result.error_code == "ENCODE_ERROR"
        client.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_set_connection_error(self, backend, client):
        client.set.side_effect = ConnectionError("down")

        result = await backend.set("k", {})

        assert result.status == OperationStatus.TRANSIENT_ERROR

    @pytest.mark.asyncio
    async def test_delete(self, backend, client):
        client.delete.return_value = 1

        result = await backend.delete("k", namespace="acme")

        assert result.data is True
        client.delete.assert_awaited_once_with("test:acme:k")

    @pytest.mark.asyncio
    async def test_delete_pattern(self, backend, client):
        async def scan_iter(match):
            for key in ("test:acme:i18n:a", "test:acme:i18n:b"):
                yield key

        client.scan_iter = MagicMock(side_effect=scan_iter)
        client.delete.return_value = 1

        result = await backend.delete_pattern("i18n:*", namespace="acme")

        assert result.data == 2
        client.scan_iter.assert_called_once_with(match="test:acme:i18n:*")


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_close(self, backend, client):
        await backend.close()

        client.aclose.assert_awaited_once()
        await backend.close()
        client.aclose.assert_awaited_once()

    def test_client_created_lazily(self):
        with patch("integrations.redis.cache.aioredis.from_url") as from_url:
            backend = RedisCacheBackend("redis://cache:6379/1")
            from_url.assert_not_called()

            backend._get_client()
            backend._get_client()

        from_url.assert_called_once()
        assert from_url.call_args.args == ("redis://cache:6379/1",)
        assert from_url.call_args.kwargs["decode_responses"] is True
