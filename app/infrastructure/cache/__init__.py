"""External cache tier: backend interface and in-memory implementation."""

from infrastructure.cache.backend import CacheBackend, build_key
from infrastructure.cache.memory import InMemoryCacheBackend

__all__ = ["CacheBackend", "InMemoryCacheBackend", "build_key"]
