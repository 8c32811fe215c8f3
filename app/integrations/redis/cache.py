"""Redis client for the shared translation cache tier.

Connects to Redis as a key-value store holding resolved translation maps
so every process serving the same tenants sees the same snapshots.

Features:
- Lazily created asyncio client with connection pooling
- Standardized error handling via OperationResult
- TTL support for automatic expiration
- JSON serialization of cached maps
- SCAN-based pattern deletion

Usage:
    from integrations.redis import RedisCacheBackend

    backend = RedisCacheBackend("redis://localhost:6379/0")
    result = await backend.get("i18n:en:common")
    if result.is_success and result.data:
        translations = result.data
"""

import json
from typing import Any, Optional

import redis.asyncio as aioredis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from infrastructure.cache.backend import CacheBackend, build_key
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()


class RedisCacheBackend(CacheBackend):
    """CacheBackend over ``redis.asyncio``.

    Attributes:
        url: Redis connection URL.
        key_prefix: Prefix prepended to every key (isolates deployments
            sharing one Redis database).
    """

    def __init__(
        self,
        url: str,
        key_prefix: str = "",
        default_ttl: Optional[int] = None,
        client: Optional[aioredis.Redis] = None,
    ):
        self.url = url
        self.key_prefix = key_prefix
        self.default_ttl = default_ttl
        self._client = client

    def _get_client(self) -> aioredis.Redis:
        if self._client is None:
            self._client = aioredis.from_url(
                self.url,
                decode_responses=True,
                max_connections=10,
                socket_timeout=5,
                socket_connect_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30,
            )
            logger.info("redis_client_created", url=self.url)
        return self._client

    def _full_key(self, key: str, namespace: Optional[str]) -> str:
        return f"{self.key_prefix}{build_key(key, namespace)}"

    def _error_result(self, operation: str, key: str, error: Exception) -> OperationResult:
        if isinstance(error, (ConnectionError, TimeoutError)):
            logger.error(f"redis_{operation}_connection_error", key=key, error=str(error))
            return OperationResult.transient_error(
                message=f"Connection error on {operation} for {key}: {error}",
                error_code="CONNECTION_ERROR",
            )
        logger.error(f"redis_{operation}_error", key=key, error=str(error))
        return OperationResult.permanent_error(
            message=f"Error on {operation} for {key}: {error}",
            error_code="REDIS_ERROR",
        )

    async def get(self, key: str, namespace: Optional[str] = None) -> OperationResult:
        full_key = self._full_key(key, namespace)
        try:
            raw = await self._get_client().get(full_key)
        except RedisError as e:
            return self._error_result("get", full_key, e)

        if raw is None:
            logger.debug("redis_key_not_found", key=full_key)
            return OperationResult.success(data=None, message=f"Key not found: {full_key}")

        try:
            return OperationResult.success(data=json.loads(raw))
        except json.JSONDecodeError:
            logger.warning("redis_value_not_json", key=full_key)
            return OperationResult.permanent_error(
                message=f"Cached value for {full_key} is not JSON",
                error_code="DECODE_ERROR",
            )

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
        namespace: Optional[str] = None,
    ) -> OperationResult:
        full_key = self._full_key(key, namespace)
        try:
            serialized = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            return OperationResult.permanent_error(
                message=f"Value for {full_key} is not serializable: {e}",
                error_code="ENCODE_ERROR",
            )

        try:
            expiry = self.default_ttl if ttl is None else ttl
            await self._get_client().set(full_key, serialized, ex=expiry)
        except RedisError as e:
            return self._error_result("set", full_key, e)

        logger.debug("redis_set", key=full_key, ttl=ttl)
        return OperationResult.success(message=f"Value set for key: {full_key}")

    async def delete(self, key: str, namespace: Optional[str] = None) -> OperationResult:
        full_key = self._full_key(key, namespace)
        try:
            deleted = await self._get_client().delete(full_key)
        except RedisError as e:
            return self._error_result("delete", full_key, e)
        return OperationResult.success(data=bool(deleted))

    async def delete_pattern(
        self, pattern: str, namespace: Optional[str] = None
    ) -> OperationResult:
        full_pattern = self._full_key(pattern, namespace)
        deleted = 0
        try:
            client = self._get_client()
            async for key in client.scan_iter(match=full_pattern):
                deleted += await client.delete(key)
        except RedisError as e:
            return self._error_result("delete_pattern", full_pattern, e)

        logger.debug("redis_delete_pattern", pattern=full_pattern, deleted_count=deleted)
        return OperationResult.success(data=deleted)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("redis_client_closed")
