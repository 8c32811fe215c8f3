"""Translation engine configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import AutoTranslateSettings

# Feature settings
from infrastructure.configuration.features import I18nSettings

# Infrastructure settings
from infrastructure.configuration.infrastructure import CacheSettings


class Settings(BaseSettings):
    """Translation engine configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: auto-translate provider
    - **Features**: translation resolution behaviour (locales, cache, fuzzy, memory)
    - **Infrastructure**: external cache tier

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.configuration import settings

        locale = settings.i18n.default_locale
        if settings.cache.backend == "redis":
            ...
        ```
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    auto_translate: AutoTranslateSettings

    # Feature settings
    i18n: I18nSettings

    # Infrastructure settings
    cache: CacheSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            "auto_translate": AutoTranslateSettings,
            "i18n": I18nSettings,
            "cache": CacheSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)
