"""Factory functions for creating translation engine components.

Wires settings into the cache backend, provider and service so callers
get a ready-to-open TranslationService.
"""

from typing import Optional

from infrastructure.cache import CacheBackend, InMemoryCacheBackend
from infrastructure.configuration import Settings, settings as default_settings
from infrastructure.configuration.infrastructure.cache import CacheSettings
from infrastructure.events import EventDispatcher
from infrastructure.i18n.cache import TranslationCache
from infrastructure.i18n.service import TranslationService
from infrastructure.i18n.storage import InMemoryTranslationRepository, TranslationRepository
from infrastructure.logging import get_module_logger
from integrations.redis import RedisCacheBackend
from integrations.translation_providers import TranslationProvider, create_provider

logger = get_module_logger()


def create_cache_backend(cache_settings: Optional[CacheSettings] = None) -> CacheBackend:
    """Create the external cache backend named in settings.

    Args:
        cache_settings: Cache settings (default: application settings).

    Returns:
        RedisCacheBackend when CACHE_BACKEND is ``redis``, else an
        InMemoryCacheBackend.
    """
    cache_settings = cache_settings or default_settings.cache
    if cache_settings.backend == "redis":
        logger.info("cache_backend_selected", backend="redis")
        return RedisCacheBackend(
            cache_settings.redis_url,
            key_prefix=cache_settings.key_prefix,
            default_ttl=cache_settings.default_ttl_seconds,
        )
    logger.info("cache_backend_selected", backend="memory")
    return InMemoryCacheBackend(
        default_ttl=cache_settings.default_ttl_seconds,
        max_size=cache_settings.max_size,
    )


def create_translation_service(
    repository: Optional[TranslationRepository] = None,
    app_settings: Optional[Settings] = None,
    backend: Optional[CacheBackend] = None,
    provider: Optional[TranslationProvider] = None,
) -> TranslationService:
    """Create a TranslationService configured from settings.

    Args:
        repository: Storage collaborator (default: in-memory repository).
        app_settings: Application settings (default: module singleton).
        backend: External cache backend (default: from cache settings).
        provider: Auto-translation provider (default: from settings).

    Returns:
        An unopened TranslationService; use ``async with`` or ``open()``.

    Usage:
        service = create_translation_service()
        async with service:
            text = await service.translate("common.welcome", locale="fr")
    """
    app_settings = app_settings or default_settings
    i18n = app_settings.i18n

    cache = TranslationCache(
        backend=backend if backend is not None else create_cache_backend(app_settings.cache),
        max_size=i18n.max_cache_size,
        ttl=i18n.cache_ttl_seconds,
        enabled=i18n.enable_cache,
    )

    service = TranslationService(
        repository=repository or InMemoryTranslationRepository(),
        cache=cache,
        provider=provider or create_provider(app_settings.auto_translate),
        dispatcher=EventDispatcher(max_listeners=i18n.max_listeners),
        settings=i18n,
    )
    logger.info(
        "translation_service_created",
        default_locale=i18n.default_locale,
        cache_enabled=i18n.enable_cache,
        fuzzy_matching=i18n.enable_fuzzy_matching,
        translation_memory=i18n.enable_translation_memory,
    )
    return service
