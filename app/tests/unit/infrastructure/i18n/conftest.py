"""Feature-level fixtures for translation engine tests.

Provides isolated repositories, caches, settings and services so every test
builds its own engine.
"""

import pytest
import pytest_asyncio

from infrastructure.cache import InMemoryCacheBackend
from infrastructure.configuration import I18nSettings
from infrastructure.events import EventDispatcher
from infrastructure.i18n.cache import TranslationCache
from infrastructure.i18n.service import TranslationService
from infrastructure.i18n.storage import InMemoryTranslationRepository
from infrastructure.i18n.translator import Translator
from tests.factories.i18n import sample_catalog, seed_repository


@pytest.fixture
def i18n_settings():
    """Engine settings from defaults (memory enabled, fuzzy off)."""
    return I18nSettings(
        _env_file=None,
        enable_translation_memory=True,
        enable_fuzzy_matching=False,
    )


@pytest.fixture
def repository():
    return InMemoryTranslationRepository()


@pytest_asyncio.fixture
async def seeded_repository(repository):
    """Repository holding the sample catalog."""
    return await seed_repository(repository, sample_catalog())


@pytest.fixture
def cache_backend():
    return InMemoryCacheBackend(default_ttl=60, max_size=100)


@pytest.fixture
def translation_cache(cache_backend):
    return TranslationCache(backend=cache_backend, max_size=10, ttl=60)


@pytest.fixture
def translator(seeded_repository, translation_cache):
    """Resolution engine over the sample catalog (fr falls back to en)."""
    return Translator(
        repository=seeded_repository,
        cache=translation_cache,
        default_locale="en",
        fallback_locale="en",
    )


@pytest.fixture
def dispatcher():
    return EventDispatcher(max_listeners=10)


@pytest_asyncio.fixture
async def service(repository, translation_cache, dispatcher, i18n_settings):
    """Opened TranslationService over an empty repository."""
    svc = TranslationService(
        repository=repository,
        cache=translation_cache,
        dispatcher=dispatcher,
        settings=i18n_settings,
    )
    await svc.open()
    yield svc
    await svc.close()


@pytest_asyncio.fixture
async def seeded_service(seeded_repository, translation_cache, dispatcher, i18n_settings):
    """Opened TranslationService over the sample catalog."""
    svc = TranslationService(
        repository=seeded_repository,
        cache=translation_cache,
        dispatcher=dispatcher,
        settings=i18n_settings,
    )
    await svc.open()
    yield svc
    await svc.close()
