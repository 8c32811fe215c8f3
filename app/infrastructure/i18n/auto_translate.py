"""Auto-translation of missing keys.

For each source key absent from the target locale, reuse a close
translation-memory match or ask the provider, then upsert the result.
"""

from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional

from infrastructure.i18n.cache import TranslationCache
from infrastructure.i18n.errors import AutoTranslateError
from infrastructure.i18n.memory import TranslationMemory
from infrastructure.i18n.models import (
    DEFAULT_NAMESPACE,
    Translation,
    TranslationData,
    TranslationMemoryEntry,
)
from infrastructure.i18n.storage import TranslationRepository
from infrastructure.logging import get_module_logger
from integrations.translation_providers.base import (
    TranslationProvider,
    TranslationProviderError,
)

logger = get_module_logger()

Upsert = Callable[[TranslationData, Optional[str]], Awaitable[Translation]]


class AutoTranslator:
    """Fills a target locale from a source locale.

    Attributes:
        provider: Translation provider called on memory misses.
        memory_threshold: Minimum similarity for reusing a memory entry.
    """

    def __init__(
        self,
        repository: TranslationRepository,
        provider: TranslationProvider,
        memory: TranslationMemory,
        upsert: Upsert,
        cache: TranslationCache,
        memory_threshold: float = 0.9,
    ):
        self.repository = repository
        self.provider = provider
        self.memory = memory
        self.upsert = upsert
        self.cache = cache
        self.memory_threshold = memory_threshold

    async def _source_records(
        self,
        source_locale: str,
        keys: Optional[List[str]],
        namespace: str,
        tenant_id: Optional[str],
    ) -> List[Translation]:
        if keys is None:
            return await self.repository.find_by_locale_and_namespace(
                source_locale, namespace, tenant_id
            )
        records = []
        for key in keys:
            record = await self.repository.find_by_key(key, source_locale, namespace, tenant_id)
            if record is not None:
                records.append(record)
        return records

    async def _translate_text(self, record: Translation, source_locale: str, target_locale: str) -> str:
        matches = self.memory.search(
            record.value, source_locale, target_locale, self.memory_threshold
        )
        if matches:
            logger.info(
                "translation_memory_used",
                key=record.key,
                similarity=matches[0].similarity,
            )
            return matches[0].target_text
        try:
            return await self.provider.translate(record.value, source_locale, target_locale)
        except TranslationProviderError as e:
            raise AutoTranslateError(str(e)) from e

    async def auto_translate(
        self,
        source_locale: str,
        target_locale: str,
        keys: Optional[List[str]] = None,
        namespace: str = DEFAULT_NAMESPACE,
        tenant_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Translate source keys missing from the target locale.

        Returns:
            ``{"translated": n, "errors": [...]}``; a failing key does not
            stop the others.
        """
        translated = 0
        errors: List[str] = []

        for record in await self._source_records(source_locale, keys, namespace, tenant_id):
            try:
                existing = await self.repository.find_by_key(
                    record.key, target_locale, namespace, tenant_id
                )
                if existing is not None:
                    continue

                value = await self._translate_text(record, source_locale, target_locale)

                await self.upsert(
                    TranslationData(
                        key=record.key,
                        value=value,
                        locale=target_locale,
                        namespace=namespace,
                        tenant_id=tenant_id,
                        description=f"Auto-translated from {source_locale}",
                        variables=list(record.variables),
                        metadata={
                            "auto_translated": True,
                            "source_locale": source_locale,
                            "translated_at": datetime.now(timezone.utc).isoformat(),
                            "translation_provider": self.provider.name or None,
                        },
                    ),
                    user_id,
                )

                await self.memory.record(
                    TranslationMemoryEntry(
                        source_text=record.value,
                        target_text=value,
                        source_locale=source_locale,
                        target_locale=target_locale,
                        similarity=1.0,
                        context=namespace,
                        metadata={"key": record.key, "auto_translated": True},
                    )
                )

                translated += 1
                logger.info(
                    "auto_translated",
                    key=record.key,
                    source_locale=source_locale,
                    target_locale=target_locale,
                    namespace=namespace,
                )
            except Exception as e:  # pylint: disable=broad-except
                message = f"Failed to auto-translate key '{record.key}': {e}"
                errors.append(message)
                logger.error("auto_translate_key_failed", key=record.key, error=str(e))

        await self.cache.invalidate(target_locale, namespace, tenant_id)

        logger.info(
            "auto_translation_completed",
            source_locale=source_locale,
            target_locale=target_locale,
            namespace=namespace,
            translated=translated,
            error_count=len(errors),
            tenant_id=tenant_id,
        )
        return {"translated": translated, "errors": errors}
