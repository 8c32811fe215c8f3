"""Resolution engine for translation keys.

Resolves a key to a final string: cached map lookup, fallback locale,
optional fuzzy key match, default value or the key itself, then plural form
selection and variable interpolation. Resolution never raises; any failure
degrades to the default value or the key.
"""

import asyncio
from typing import Any, Dict, Iterable, List, Mapping, Optional

from infrastructure.i18n.cache import TranslationCache, TranslationMap
from infrastructure.i18n.interpolation import InterpolationOptions, interpolate
from infrastructure.i18n.models import DEFAULT_NAMESPACE, FuzzyMatchResult
from infrastructure.i18n.plurals import apply_pluralization
from infrastructure.i18n.similarity import DEFAULT_MAX_LENGTH, rank_by_similarity
from infrastructure.i18n.storage import TranslationRepository
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class Translator:
    """Translates keys against stored translations.

    Attributes:
        repository: Storage collaborator.
        cache: Two-tier cache of resolved maps.
        default_locale: Locale used when a request names none.
        fallback_locale: Locale tried when the requested one lacks a key.
        default_namespace: Namespace used when a request names none.
    """

    def __init__(
        self,
        repository: TranslationRepository,
        cache: TranslationCache,
        default_locale: str = "en",
        fallback_locale: str = "en",
        default_namespace: str = DEFAULT_NAMESPACE,
        enable_pluralization: bool = True,
        enable_interpolation: bool = True,
        enable_fuzzy_matching: bool = False,
        fuzzy_threshold: float = 0.7,
        max_similarity_length: Optional[int] = DEFAULT_MAX_LENGTH,
    ):
        self.repository = repository
        self.cache = cache
        self.default_locale = default_locale
        self.fallback_locale = fallback_locale
        self.default_namespace = default_namespace
        self.enable_pluralization = enable_pluralization
        self.enable_interpolation = enable_interpolation
        self.enable_fuzzy_matching = enable_fuzzy_matching
        self.fuzzy_threshold = fuzzy_threshold
        self.max_similarity_length = max_similarity_length

    async def _load_from_storage(
        self, locale: str, namespace: str, tenant_id: Optional[str]
    ) -> Dict[str, str]:
        records = await self.repository.find_by_locale_and_namespace(
            locale, namespace, tenant_id
        )
        return {record.key: record.value for record in records}

    async def load_translations(
        self, locale: str, namespace: str, tenant_id: Optional[str] = None
    ) -> TranslationMap:
        """Return the resolved map for a locale/namespace, via the cache."""
        return await self.cache.get_or_load(
            locale,
            namespace,
            tenant_id,
            lambda: self._load_from_storage(locale, namespace, tenant_id),
        )

    async def get_translations(
        self,
        locale: str,
        namespace: str = DEFAULT_NAMESPACE,
        tenant_id: Optional[str] = None,
    ) -> Dict[str, str]:
        return dict(await self.load_translations(locale, namespace, tenant_id))

    async def find_fuzzy_matches(
        self,
        key: str,
        locale: str,
        namespace: str,
        tenant_id: Optional[str] = None,
        threshold: Optional[float] = None,
    ) -> List[FuzzyMatchResult]:
        """Existing keys of a namespace similar to ``key``, best first.

        Returns an empty list when fuzzy matching is disabled or storage fails.
        """
        if not self.enable_fuzzy_matching:
            return []

        threshold = self.fuzzy_threshold if threshold is None else threshold
        try:
            records = await self.repository.find_by_locale_and_namespace(
                locale, namespace, tenant_id
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.error("fuzzy_match_failed", key=key, locale=locale, error=str(e))
            return []

        ranked = rank_by_similarity(
            key,
            records,
            lambda record: record.key,
            threshold,
            max_length=self.max_similarity_length,
        )
        return [
            FuzzyMatchResult(
                key=record.key,
                value=record.value,
                similarity=score,
                namespace=namespace,
            )
            for record, score in ranked
        ]

    async def _resolve(
        self,
        key: str,
        locale: str,
        namespace: str,
        tenant_id: Optional[str],
        default_value: Optional[str],
    ) -> str:
        translations = await self.load_translations(locale, namespace, tenant_id)
        translation = translations.get(key)

        if not translation and locale != self.fallback_locale:
            fallback = await self.load_translations(self.fallback_locale, namespace, tenant_id)
            translation = fallback.get(key)

        if not translation and self.enable_fuzzy_matching:
            matches = await self.find_fuzzy_matches(key, locale, namespace, tenant_id)
            if matches:
                translation = matches[0].value
                logger.info(
                    "fuzzy_match_used",
                    key=key,
                    locale=locale,
                    namespace=namespace,
                    matched_key=matches[0].key,
                    similarity=matches[0].similarity,
                )

        return translation or default_value or key

    async def translate(
        self,
        key: str,
        locale: Optional[str] = None,
        namespace: Optional[str] = None,
        variables: Optional[Mapping[str, Any]] = None,
        count: Optional[float] = None,
        default_value: Optional[str] = None,
        escape_html: bool = False,
        date_format: Optional[str] = None,
        number_format: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> str:
        """Translate a key.

        Args:
            key: Translation key.
            locale: Target locale (default_locale when omitted).
            namespace: Key namespace (default_namespace when omitted).
            variables: Values for ``{{name}}`` placeholders.
            count: Count for plural form selection, also exposed as ``{{count}}``.
            default_value: Returned instead of the key when nothing resolves.
            escape_html: HTML-escape substituted values.
            date_format: Date style for date values (short, medium, long, full).
            number_format: Babel number pattern for numeric values.
            tenant_id: Tenant owning the translations.

        Returns:
            The translated string, the default value, or the key itself.
        """
        locale = locale or self.default_locale
        namespace = namespace or self.default_namespace

        try:
            translation = await self._resolve(key, locale, namespace, tenant_id, default_value)

            if count is not None:
                record = await self.repository.find_by_key(key, locale, namespace, tenant_id)
                if record is not None and record.plural_forms:
                    translation = apply_pluralization(
                        translation,
                        count,
                        locale,
                        record.plural_forms,
                        enabled=self.enable_pluralization,
                    )

            if self.enable_interpolation and (variables is not None or count is not None):
                merged = dict(variables or {})
                if count is not None:
                    merged["count"] = count
                translation = interpolate(
                    translation,
                    merged,
                    InterpolationOptions(
                        locale=locale,
                        escape_html=escape_html,
                        date_format=date_format,
                        number_format=number_format,
                    ),
                )

            return translation
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "translation_failed",
                key=key,
                locale=locale,
                namespace=namespace,
                tenant_id=tenant_id,
                error=str(e),
            )
            return default_value or key

    async def translate_batch(
        self,
        keys: Iterable[str],
        locale: Optional[str] = None,
        namespace: Optional[str] = None,
        variables: Optional[Mapping[str, Mapping[str, Any]]] = None,
        tenant_id: Optional[str] = None,
    ) -> Dict[str, str]:
        """Translate several keys of one locale/namespace.

        The map is loaded once up front; each key then resolves as translate().
        """
        locale = locale or self.default_locale
        namespace = namespace or self.default_namespace
        variables = variables or {}

        await self.load_translations(locale, namespace, tenant_id)

        results: Dict[str, str] = {}
        for key in keys:
            results[key] = await self.translate(
                key,
                locale=locale,
                namespace=namespace,
                variables=variables.get(key),
                tenant_id=tenant_id,
            )
        return results

    async def preload(
        self,
        locales: Iterable[str],
        namespaces: Iterable[str],
        tenant_id: Optional[str] = None,
    ) -> None:
        """Load every (locale, namespace) map concurrently.

        Raises the first load failure. Maps that loaded are cached whole.
        """
        namespaces = list(namespaces)
        pairs = [(locale, namespace) for locale in locales for namespace in namespaces]
        await asyncio.gather(
            *(self.load_translations(locale, namespace, tenant_id) for locale, namespace in pairs)
        )
        logger.info(
            "translations_preloaded",
            locale_namespace_pairs=len(pairs),
            tenant_id=tenant_id,
        )
