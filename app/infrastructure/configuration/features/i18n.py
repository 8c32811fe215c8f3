"""Translation resolution feature settings."""

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class I18nSettings(FeatureSettings):
    """Translation engine configuration.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Locale used when a request names none (default: en)
        I18N_FALLBACK_LOCALE: Locale consulted when a key is missing (default: en)
        I18N_DEFAULT_NAMESPACE: Namespace used when a request names none (default: common)
        I18N_ENABLE_CACHE: Cache resolved translation maps (default: True)
        I18N_CACHE_TTL_SECONDS: External cache TTL for resolved maps (default: 3600)
        I18N_MAX_CACHE_SIZE: Capacity of the in-process map cache (default: 10000)
        I18N_ENABLE_PLURALIZATION: Apply plural rules when a count is given (default: True)
        I18N_ENABLE_INTERPOLATION: Substitute {{variables}} (default: True)
        I18N_ENABLE_FUZZY_MATCHING: Approximate-match missing keys (default: False)
        I18N_FUZZY_THRESHOLD: Minimum similarity for fuzzy key matches (default: 0.7)
        I18N_ENABLE_TRANSLATION_MEMORY: Record and reuse translation pairs (default: False)
        I18N_MEMORY_THRESHOLD: Minimum similarity for memory searches (default: 0.8)
        I18N_AUTO_TRANSLATE_MEMORY_THRESHOLD: Memory reuse threshold during
            auto-translation (default: 0.9)
        I18N_MEMORY_CAPACITY: Entries kept per locale pair (default: 1000)
        I18N_MAX_SIMILARITY_LENGTH: Longest string the edit-distance matcher
            accepts (default: 1000)
        I18N_ENABLE_AUDIT: Write audit records for user-initiated changes (default: True)
        I18N_MAX_LISTENERS: Handlers allowed per event type (default: 100)
        I18N_LOCALES_DIR: Directory holding <locale>.<namespace>.json|yml files

    Example:
        ```python
        from infrastructure.configuration import settings

        if settings.i18n.enable_fuzzy_matching:
            threshold = settings.i18n.fuzzy_threshold
        ```
    """

    default_locale: str = Field(default="en", alias="I18N_DEFAULT_LOCALE")
    fallback_locale: str = Field(default="en", alias="I18N_FALLBACK_LOCALE")
    default_namespace: str = Field(default="common", alias="I18N_DEFAULT_NAMESPACE")
    enable_cache: bool = Field(default=True, alias="I18N_ENABLE_CACHE")
    cache_ttl_seconds: int = Field(default=3600, alias="I18N_CACHE_TTL_SECONDS")
    max_cache_size: int = Field(default=10000, alias="I18N_MAX_CACHE_SIZE")
    enable_pluralization: bool = Field(default=True, alias="I18N_ENABLE_PLURALIZATION")
    enable_interpolation: bool = Field(default=True, alias="I18N_ENABLE_INTERPOLATION")
    enable_fuzzy_matching: bool = Field(
        default=False, alias="I18N_ENABLE_FUZZY_MATCHING"
    )
    fuzzy_threshold: float = Field(default=0.7, alias="I18N_FUZZY_THRESHOLD")
    enable_translation_memory: bool = Field(
        default=False, alias="I18N_ENABLE_TRANSLATION_MEMORY"
    )
    memory_threshold: float = Field(default=0.8, alias="I18N_MEMORY_THRESHOLD")
    auto_translate_memory_threshold: float = Field(
        default=0.9, alias="I18N_AUTO_TRANSLATE_MEMORY_THRESHOLD"
    )
    memory_capacity: int = Field(default=1000, alias="I18N_MEMORY_CAPACITY")
    max_similarity_length: int = Field(
        default=1000, alias="I18N_MAX_SIMILARITY_LENGTH"
    )
    enable_audit: bool = Field(default=True, alias="I18N_ENABLE_AUDIT")
    max_listeners: int = Field(default=100, alias="I18N_MAX_LISTENERS")
    locales_dir: str = Field(default="locales", alias="I18N_LOCALES_DIR")
