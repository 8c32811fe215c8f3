"""Redis integration for the shared cache tier."""

from integrations.redis.cache import RedisCacheBackend

__all__ = ["RedisCacheBackend"]
