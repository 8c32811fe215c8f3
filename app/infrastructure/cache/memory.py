"""In-process implementation of the external cache tier.

Stands in for the shared cache in single-process deployments and tests.
Entries expire after their TTL; when full, the least recently accessed
entry is evicted.
"""

import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Dict, Optional

from infrastructure.cache.backend import CacheBackend, build_key, matches_pattern
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()


@dataclass
class CacheItem:
    value: Any
    expires_at: float
    last_accessed: float = field(default_factory=time.monotonic)
    access_count: int = 0


class InMemoryCacheBackend(CacheBackend):
    """Dict-backed cache with TTL expiry and hit/miss statistics."""

    def __init__(self, default_ttl: int = 3600, max_size: int = 10000, clock=time.monotonic):
        self.default_ttl = default_ttl
        self.max_size = max_size
        self._clock = clock
        self._items: Dict[str, CacheItem] = {}
        self._lock = Lock()
        self.hits = 0
        self.misses = 0

    async def get(self, key: str, namespace: Optional[str] = None) -> OperationResult:
        full_key = build_key(key, namespace)
        now = self._clock()
        with self._lock:
            item = self._items.get(full_key)
            if item is not None and now > item.expires_at:
                del self._items[full_key]
                item = None
            if item is None:
                self.misses += 1
                return OperationResult.success(data=None, message=f"Key not found: {full_key}")
            item.access_count += 1
            item.last_accessed = now
            self.hits += 1
            return OperationResult.success(data=item.value)

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None,
        namespace: Optional[str] = None,
    ) -> OperationResult:
        full_key = build_key(key, namespace)
        now = self._clock()
        with self._lock:
            if full_key not in self._items and len(self._items) >= self.max_size:
                self._evict_least_recently_used()
            self._items[full_key] = CacheItem(
                value=value,
                expires_at=now + (self.default_ttl if ttl is None else ttl),
                last_accessed=now,
            )
        logger.debug("cache_set", key=full_key, ttl=ttl)
        return OperationResult.success(message=f"Value set for key: {full_key}")

    async def delete(self, key: str, namespace: Optional[str] = None) -> OperationResult:
        full_key = build_key(key, namespace)
        with self._lock:
            deleted = self._items.pop(full_key, None) is not None
        return OperationResult.success(data=deleted)

    async def delete_pattern(
        self, pattern: str, namespace: Optional[str] = None
    ) -> OperationResult:
        full_pattern = build_key(pattern, namespace)
        with self._lock:
            doomed = [k for k in self._items if matches_pattern(k, full_pattern)]
            for k in doomed:
                del self._items[k]
        logger.debug("cache_delete_pattern", pattern=full_pattern, deleted_count=len(doomed))
        return OperationResult.success(data=len(doomed))

    async def close(self) -> None:
        with self._lock:
            self._items.clear()

    def _evict_least_recently_used(self) -> None:
        oldest_key = min(self._items, key=lambda k: self._items[k].last_accessed)
        del self._items[oldest_key]

    def __len__(self) -> int:
        return len(self._items)

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
