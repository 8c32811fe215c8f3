"""Infrastructure configuration module - public API.

Centralized configuration for the translation engine using Pydantic
BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings, CacheSettings, AutoTranslateSettings: section classes

Example:
    ```python
    from infrastructure.configuration import settings

    fallback = settings.i18n.fallback_locale
    redis_url = settings.cache.redis_url
    ```
"""

from infrastructure.configuration.features.i18n import I18nSettings
from infrastructure.configuration.infrastructure.cache import CacheSettings
from infrastructure.configuration.integrations.auto_translate import (
    AutoTranslateSettings,
)
from infrastructure.configuration.settings import Settings

settings = Settings()

__all__ = [
    "settings",
    "Settings",
    "I18nSettings",
    "CacheSettings",
    "AutoTranslateSettings",
]
