"""Two-tier cache of resolved translation maps.

Tier one is an in-process map bounded by ``max_size`` with insertion-order
eviction: when full, the oldest inserted entry is dropped before a new one
goes in (reads do not refresh an entry's position). Tier two is an optional
external CacheBackend shared between processes; its entries are namespaced
by tenant and expire after ``ttl`` seconds.

Cached maps are read-only snapshots, replaced wholesale on invalidation.
"""

import threading
from collections import OrderedDict
from types import MappingProxyType
from typing import Awaitable, Callable, Mapping, Optional

from infrastructure.cache import CacheBackend
from infrastructure.i18n.models import cache_key
from infrastructure.logging import get_module_logger

logger = get_module_logger()

TranslationMap = Mapping[str, str]

CACHE_PATTERN = "i18n:*"


def freeze(translations: Mapping[str, str]) -> TranslationMap:
    return MappingProxyType(dict(translations))


class TranslationCache:
    """Resolved-map cache with an explicit open/close lifecycle.

    Attributes:
        backend: External cache tier, or None for in-process only.
        max_size: Capacity of the in-process tier.
        ttl: Expiry in seconds for external entries.
        enabled: When False every read misses and writes are no-ops.
    """

    def __init__(
        self,
        backend: Optional[CacheBackend] = None,
        max_size: int = 10000,
        ttl: int = 3600,
        enabled: bool = True,
    ):
        self.backend = backend
        self.max_size = max_size
        self.ttl = ttl
        self.enabled = enabled
        self._local: "OrderedDict[str, TranslationMap]" = OrderedDict()
        self._lock = threading.Lock()
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    async def open(self) -> None:
        self._open = True
        logger.debug("translation_cache_opened", max_size=self.max_size)

    async def close(self) -> None:
        """Drop the in-process tier and close the external backend."""
        self.clear_local()
        if self.backend is not None:
            await self.backend.close()
        self._open = False
        logger.debug("translation_cache_closed")

    def local_size(self) -> int:
        with self._lock:
            return len(self._local)

    def clear_local(self) -> None:
        with self._lock:
            self._local.clear()

    def _get_local(self, key: str) -> Optional[TranslationMap]:
        with self._lock:
            return self._local.get(key)

    def _put_local(self, key: str, translations: TranslationMap) -> None:
        with self._lock:
            if key in self._local:
                del self._local[key]
            elif self.max_size > 0 and len(self._local) >= self.max_size:
                evicted, _ = self._local.popitem(last=False)
                logger.debug("translation_cache_evicted", cache_key=evicted)
            self._local[key] = translations

    async def get(
        self, locale: str, namespace: str, tenant_id: Optional[str] = None
    ) -> Optional[TranslationMap]:
        """Look up a map in tier one, then tier two (promoting a hit)."""
        if not self.enabled:
            return None

        key = cache_key(locale, namespace, tenant_id)
        cached = self._get_local(key)
        if cached is not None:
            return cached

        if self.backend is None:
            return None

        result = await self.backend.get(key, namespace=tenant_id)
        if not result.is_success:
            logger.warning(
                "external_cache_get_failed", cache_key=key, error=result.message
            )
            return None
        if not isinstance(result.data, Mapping):
            return None

        snapshot = freeze({str(k): str(v) for k, v in result.data.items()})
        self._put_local(key, snapshot)
        return snapshot

    async def set(
        self,
        locale: str,
        namespace: str,
        translations: Mapping[str, str],
        tenant_id: Optional[str] = None,
    ) -> TranslationMap:
        """Store a map in both tiers and return the stored snapshot."""
        snapshot = freeze(translations)
        if not self.enabled:
            return snapshot

        key = cache_key(locale, namespace, tenant_id)
        self._put_local(key, snapshot)

        if self.backend is not None:
            result = await self.backend.set(
                key, dict(snapshot), ttl=self.ttl, namespace=tenant_id
            )
            if not result.is_success:
                logger.warning(
                    "external_cache_set_failed", cache_key=key, error=result.message
                )
        return snapshot

    async def get_or_load(
        self,
        locale: str,
        namespace: str,
        tenant_id: Optional[str],
        loader: Callable[[], Awaitable[Mapping[str, str]]],
    ) -> TranslationMap:
        """Return the cached map or build it with ``loader`` and cache it."""
        cached = await self.get(locale, namespace, tenant_id)
        if cached is not None:
            return cached
        return await self.set(locale, namespace, await loader(), tenant_id)

    async def invalidate(
        self,
        locale: Optional[str] = None,
        namespace: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> None:
        """Invalidate one map, or everything when locale or namespace is missing.

        The wildcard form clears the whole in-process tier and deletes every
        ``i18n:*`` key of the tenant from the external tier.
        """
        if locale and namespace:
            key = cache_key(locale, namespace, tenant_id)
            with self._lock:
                self._local.pop(key, None)
            if self.backend is not None:
                result = await self.backend.delete(key, namespace=tenant_id)
                if not result.is_success:
                    logger.warning(
                        "external_cache_delete_failed",
                        cache_key=key,
                        error=result.message,
                    )
            logger.debug("translation_cache_invalidated", cache_key=key)
            return

        self.clear_local()
        if self.backend is not None:
            result = await self.backend.delete_pattern(CACHE_PATTERN, namespace=tenant_id)
            if not result.is_success:
                logger.warning(
                    "external_cache_delete_pattern_failed",
                    pattern=CACHE_PATTERN,
                    error=result.message,
                )
        logger.debug("translation_cache_cleared", tenant_id=tenant_id)
