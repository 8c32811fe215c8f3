"""External cache tier abstract base class."""

import fnmatch
from abc import ABC, abstractmethod
from typing import Any, Optional

from infrastructure.operations import OperationResult


def build_key(key: str, namespace: Optional[str] = None) -> str:
    """Full cache key: ``namespace:key`` when a namespace is given."""
    return f"{namespace}:{key}" if namespace else key


def matches_pattern(full_key: str, pattern: str) -> bool:
    """Glob-style match where ``*`` spans any run of characters."""
    return fnmatch.fnmatchcase(full_key, pattern)


class CacheBackend(ABC):
    """Interface of the shared cache tier sitting behind the in-process map cache.

    Every operation returns an OperationResult instead of raising, so a
    cache outage degrades to a storage round-trip.
    """

    @abstractmethod
    async def get(self, key: str, namespace: Optional[str] = None) -> OperationResult:
        """Get a cached value.

        Returns:
            SUCCESS with data=value, or data=None when the key is absent/expired.
        """

    @abstractmethod
    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
        namespace: Optional[str] = None,
    ) -> OperationResult:
        """Store a JSON-compatible value with an optional TTL in seconds."""

    @abstractmethod
    async def delete(self, key: str, namespace: Optional[str] = None) -> OperationResult:
        """Delete a key. data is True when something was removed."""

    @abstractmethod
    async def delete_pattern(
        self, pattern: str, namespace: Optional[str] = None
    ) -> OperationResult:
        """Delete every key matching a glob pattern. data is the deleted count."""

    async def close(self) -> None:
        """Release connections held by the backend."""
