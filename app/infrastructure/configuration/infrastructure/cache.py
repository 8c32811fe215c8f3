"""External cache tier infrastructure settings."""

from typing import Literal

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class CacheSettings(InfrastructureSettings):
    """External cache configuration for resolved translation maps.

    Environment Variables:
        CACHE_BACKEND: 'memory' (single process) or 'redis' (shared)
        REDIS_URL: Redis connection URL (default: redis://localhost:6379/0)
        CACHE_KEY_PREFIX: Prefix prepended to every external cache key
        CACHE_DEFAULT_TTL_SECONDS: TTL used when a caller gives none (default: 3600)
        CACHE_MAX_SIZE: Entry limit for the memory backend (default: 10000)

    Example:
        ```python
        from infrastructure.configuration import settings

        if settings.cache.backend == "redis":
            url = settings.cache.redis_url
        ```
    """

    backend: Literal["memory", "redis"] = Field(default="memory", alias="CACHE_BACKEND")
    redis_url: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    key_prefix: str = Field(default="", alias="CACHE_KEY_PREFIX")
    default_ttl_seconds: int = Field(default=3600, alias="CACHE_DEFAULT_TTL_SECONDS")
    max_size: int = Field(default=10000, alias="CACHE_MAX_SIZE")
