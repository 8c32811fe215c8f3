"""Translation service facade.

Owns the engine components (cache, translation memory, resolution engine,
import/export orchestrator, auto-translator, event dispatcher) and exposes
the management operations built on top of them.

Usage:
    from infrastructure.i18n import create_translation_service

    async with create_translation_service() as service:
        await service.upsert_translation(
            TranslationData(key="welcome", value="Hello {{name}}", locale="en")
        )
        message = await service.translate("welcome", variables={"name": "Ana"})
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import httpx

from infrastructure.configuration.features.i18n import I18nSettings
from infrastructure.events import (
    TRANSLATION_DELETED,
    TRANSLATION_UPSERTED,
    TRANSLATIONS_RELOADED,
    AuditLogHandler,
    Event,
    EventDispatcher,
)
from infrastructure.i18n.auto_translate import AutoTranslator
from infrastructure.i18n.cache import TranslationCache
from infrastructure.i18n.errors import (
    TranslationNotFoundError,
    TranslationValidationError,
    UpstreamError,
)
from infrastructure.i18n.extraction import generate_keys_from_source
from infrastructure.i18n.interchange import TranslationInterchange, validate_entry
from infrastructure.i18n.loader import TranslationFileLoader
from infrastructure.i18n.memory import TranslationMemory
from infrastructure.i18n.models import (
    DEFAULT_NAMESPACE,
    ExportResult,
    FuzzyMatchResult,
    ImportResult,
    Translation,
    TranslationData,
    TranslationMemoryEntry,
)
from infrastructure.i18n.storage import TranslationRepository
from infrastructure.i18n.translator import Translator
from infrastructure.logging import get_module_logger
from integrations.translation_providers import (
    TranslationProvider,
    UnconfiguredTranslationProvider,
)

logger = get_module_logger()

LONG_TRANSLATION_LENGTH = 500

SYNC_SOURCES = ("file", "api", "database")


class TranslationService:
    """Translation engine facade with an explicit open/close lifecycle.

    Attributes:
        repository: Storage collaborator.
        settings: Engine configuration.
        cache: Two-tier resolved-map cache.
        memory: Translation memory index.
        translator: Resolution engine.
        interchange: Import/export orchestrator.
        auto_translator: Fills missing keys through the provider.
        dispatcher: Notification channel for translation events.
    """

    def __init__(
        self,
        repository: TranslationRepository,
        cache: Optional[TranslationCache] = None,
        provider: Optional[TranslationProvider] = None,
        dispatcher: Optional[EventDispatcher] = None,
        settings: Optional[I18nSettings] = None,
        memory: Optional[TranslationMemory] = None,
        file_loader: Optional[TranslationFileLoader] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.repository = repository
        self.settings = settings or I18nSettings()
        s = self.settings

        self.cache = cache or TranslationCache(
            max_size=s.max_cache_size,
            ttl=s.cache_ttl_seconds,
            enabled=s.enable_cache,
        )
        self.memory = memory or TranslationMemory(
            repository=repository,
            enabled=s.enable_translation_memory,
            capacity=s.memory_capacity,
            max_similarity_length=s.max_similarity_length,
        )
        self.provider = provider or UnconfiguredTranslationProvider()
        self.dispatcher = dispatcher or EventDispatcher(max_listeners=s.max_listeners)
        self.file_loader = file_loader or TranslationFileLoader(s.locales_dir)
        self._http_transport = http_transport

        self.translator = Translator(
            repository=repository,
            cache=self.cache,
            default_locale=s.default_locale,
            fallback_locale=s.fallback_locale,
            default_namespace=s.default_namespace,
            enable_pluralization=s.enable_pluralization,
            enable_interpolation=s.enable_interpolation,
            enable_fuzzy_matching=s.enable_fuzzy_matching,
            fuzzy_threshold=s.fuzzy_threshold,
            max_similarity_length=s.max_similarity_length,
        )
        self.interchange = TranslationInterchange(
            repository=repository,
            upsert=self.upsert_translation,
            cache=self.cache,
            source_language=s.default_locale,
        )
        self.auto_translator = AutoTranslator(
            repository=repository,
            provider=self.provider,
            memory=self.memory,
            upsert=self.upsert_translation,
            cache=self.cache,
            memory_threshold=s.auto_translate_memory_threshold,
        )
        self._register_audit_handler()

    def _register_audit_handler(self) -> None:
        if not self.settings.enable_audit:
            return
        audit = AuditLogHandler()
        self.dispatcher.subscribe(TRANSLATION_UPSERTED, audit)
        self.dispatcher.subscribe(TRANSLATION_DELETED, audit)

    # Lifecycle

    async def open(self) -> "TranslationService":
        """Open the cache and load translation memory from storage."""
        await self.cache.open()
        try:
            await self.memory.load()
        except Exception as e:  # pylint: disable=broad-except
            logger.error("translation_memory_load_failed", error=str(e))
        logger.info(
            "translation_service_opened",
            default_locale=self.settings.default_locale,
            fallback_locale=self.settings.fallback_locale,
        )
        return self

    async def close(self) -> None:
        """Release caches, memory, listeners and collaborator connections."""
        await self.cache.close()
        self.memory.clear()
        self.dispatcher.clear()
        await self.provider.close()
        logger.info("translation_service_closed")

    async def __aenter__(self) -> "TranslationService":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _emit(
        self,
        event_type: str,
        payload: Dict[str, Any],
        user_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> None:
        self.dispatcher.dispatch(
            Event(
                event_type=event_type,
                user_id=user_id,
                tenant_id=tenant_id,
                payload=payload,
            )
        )

    # Resolution

    async def translate(self, key: str, **options: Any) -> str:
        """Translate a key. See Translator.translate for options. Never raises."""
        return await self.translator.translate(key, **options)

    async def translate_batch(
        self,
        keys: Iterable[str],
        locale: Optional[str] = None,
        namespace: Optional[str] = None,
        variables: Optional[Mapping[str, Mapping[str, Any]]] = None,
        tenant_id: Optional[str] = None,
    ) -> Dict[str, str]:
        return await self.translator.translate_batch(
            keys, locale=locale, namespace=namespace, variables=variables, tenant_id=tenant_id
        )

    async def get_translations(
        self,
        locale: str,
        namespace: str = DEFAULT_NAMESPACE,
        tenant_id: Optional[str] = None,
    ) -> Dict[str, str]:
        return await self.translator.get_translations(locale, namespace, tenant_id)

    async def preload_translations(
        self,
        locales: Iterable[str],
        namespaces: Iterable[str],
        tenant_id: Optional[str] = None,
    ) -> None:
        await self.translator.preload(locales, namespaces, tenant_id)

    async def find_fuzzy_matches(
        self,
        key: str,
        locale: str,
        namespace: str = DEFAULT_NAMESPACE,
        tenant_id: Optional[str] = None,
        threshold: float = 0.7,
    ) -> List[FuzzyMatchResult]:
        return await self.translator.find_fuzzy_matches(
            key, locale, namespace, tenant_id, threshold
        )

    # Record management

    async def upsert_translation(
        self, data: TranslationData, user_id: Optional[str] = None
    ) -> Translation:
        """Create or update a translation record.

        New records are added to translation memory (source text is the key,
        source locale the default locale). The affected cache entry is
        invalidated and ``translation:upserted`` is emitted.

        Raises:
            TranslationValidationError: If the key or value is malformed.
        """
        problems = validate_entry(data.key, data.value)
        if problems:
            raise TranslationValidationError(problems[0], problems)

        existing = await self.repository.find_by_key(
            data.key, data.locale, data.namespace, data.tenant_id
        )
        if existing is not None:
            translation = await self.repository.update(existing, data, user_id)
        else:
            translation = await self.repository.create(data, user_id)
            await self.memory.record(
                TranslationMemoryEntry(
                    source_text=data.key,
                    target_text=data.value,
                    source_locale=self.settings.default_locale,
                    target_locale=data.locale,
                    similarity=1.0,
                    context=data.namespace,
                    metadata={"key": data.key, "namespace": data.namespace},
                )
            )

        await self.cache.invalidate(data.locale, data.namespace, data.tenant_id)

        is_new = existing is None
        self._emit(
            TRANSLATION_UPSERTED,
            {"translation": translation, "is_new": is_new},
            user_id=user_id,
            tenant_id=data.tenant_id,
        )
        logger.info(
            "translation_upserted",
            id=translation.id,
            key=data.key,
            locale=data.locale,
            namespace=data.namespace,
            is_new=is_new,
            user_id=user_id,
            tenant_id=data.tenant_id,
        )
        return translation

    async def delete_translation(
        self,
        key: str,
        locale: str,
        namespace: str = DEFAULT_NAMESPACE,
        tenant_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> None:
        """Delete a translation record.

        Raises:
            TranslationNotFoundError: If the record does not exist.
        """
        translation = await self.repository.find_by_key(key, locale, namespace, tenant_id)
        if translation is None:
            raise TranslationNotFoundError(key, locale, namespace)

        await self.repository.delete(translation)
        await self.cache.invalidate(locale, namespace, tenant_id)

        self._emit(
            TRANSLATION_DELETED,
            {"translation": translation},
            user_id=user_id,
            tenant_id=tenant_id,
        )
        logger.info(
            "translation_deleted",
            id=translation.id,
            key=key,
            locale=locale,
            namespace=namespace,
            user_id=user_id,
            tenant_id=tenant_id,
        )

    async def bulk_upsert_translations(
        self, items: Iterable[TranslationData], user_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Upsert many records. Returns ``{created, updated, errors}``."""
        results: Dict[str, Any] = {"created": 0, "updated": 0, "errors": []}
        for data in items:
            try:
                existing = await self.repository.find_by_key(
                    data.key, data.locale, data.namespace, data.tenant_id
                )
                await self.upsert_translation(data, user_id)
                if existing is not None:
                    results["updated"] += 1
                else:
                    results["created"] += 1
            except Exception as e:  # pylint: disable=broad-except
                results["errors"].append(f"Failed to upsert {data.key}: {e}")
        return results

    async def get_available_locales(self, tenant_id: Optional[str] = None) -> List[str]:
        return await self.repository.get_available_locales(tenant_id)

    async def get_available_namespaces(
        self, locale: Optional[str] = None, tenant_id: Optional[str] = None
    ) -> List[str]:
        return await self.repository.get_available_namespaces(locale, tenant_id)

    async def get_stats(self, tenant_id: Optional[str] = None) -> Dict[str, Any]:
        return await self.repository.get_stats(tenant_id)

    # Interchange

    async def import_translations(
        self,
        data: Any,
        format: str,
        locale: str,
        namespace: str = DEFAULT_NAMESPACE,
        overwrite: bool = False,
        validate: bool = True,
        tenant_id: Optional[str] = None,
        imported_by: Optional[str] = None,
    ) -> ImportResult:
        return await self.interchange.import_translations(
            data,
            format,
            locale,
            namespace=namespace,
            overwrite=overwrite,
            validate=validate,
            tenant_id=tenant_id,
            imported_by=imported_by,
        )

    async def export_translations(
        self,
        format: str,
        locales: Optional[Sequence[str]] = None,
        namespaces: Optional[Sequence[str]] = None,
        include_metadata: bool = False,
        tenant_id: Optional[str] = None,
    ) -> ExportResult:
        return await self.interchange.export_translations(
            format,
            locales=locales,
            namespaces=namespaces,
            include_metadata=include_metadata,
            tenant_id=tenant_id,
        )

    # Quality reports

    async def find_missing_translations(
        self,
        base_locale: str,
        target_locales: Sequence[str],
        namespace: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Base-locale keys missing from one or more target locales."""
        if namespace:
            namespaces = [namespace]
        else:
            namespaces = await self.repository.get_available_namespaces(base_locale, tenant_id)

        missing = []
        for ns in namespaces:
            for base in await self.repository.find_by_locale_and_namespace(
                base_locale, ns, tenant_id
            ):
                missing_locales = []
                for target_locale in target_locales:
                    found = await self.repository.find_by_key(
                        base.key, target_locale, ns, tenant_id
                    )
                    if found is None:
                        missing_locales.append(target_locale)
                if missing_locales:
                    missing.append(
                        {
                            "key": base.key,
                            "namespace": ns,
                            "base_value": base.value,
                            "missing_locales": missing_locales,
                        }
                    )
        return missing

    async def validate_translation_completeness(
        self,
        base_locale: str,
        target_locales: Sequence[str],
        namespaces: Optional[Sequence[str]] = None,
        tenant_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Completion percentage and missing count per target locale.

        A base locale without keys counts as 100% complete.
        """
        if namespaces is None:
            namespaces = await self.repository.get_available_namespaces(base_locale, tenant_id)

        base_keys: Dict[str, List[str]] = {}
        for ns in namespaces:
            records = await self.repository.find_by_locale_and_namespace(
                base_locale, ns, tenant_id
            )
            base_keys[ns] = [record.key for record in records]
        total_keys = sum(len(keys) for keys in base_keys.values())

        completion_rate: Dict[str, float] = {}
        missing_count: Dict[str, int] = {}
        for target_locale in target_locales:
            translated = 0
            missing = 0
            for ns, keys in base_keys.items():
                target = await self.repository.find_by_locale_and_namespace(
                    target_locale, ns, tenant_id
                )
                target_keys = {record.key for record in target}
                for key in keys:
                    if key in target_keys:
                        translated += 1
                    else:
                        missing += 1
            completion_rate[target_locale] = (
                translated / total_keys * 100 if total_keys > 0 else 100.0
            )
            missing_count[target_locale] = missing

        return {
            "completion_rate": completion_rate,
            "missing_count": missing_count,
            "total_keys": total_keys,
        }

    async def cleanup_unused_translations(
        self,
        used_keys: Iterable[str],
        locale: Optional[str] = None,
        namespace: Optional[str] = None,
        tenant_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Delete records whose key is not in ``used_keys``."""
        results: Dict[str, Any] = {"deleted": 0, "errors": []}
        used = set(used_keys)
        try:
            records = await self.repository.find_all(tenant_id, locale, namespace)
        except Exception as e:  # pylint: disable=broad-except
            results["errors"].append(f"Failed to cleanup translations: {e}")
            return results

        for record in records:
            if record.key in used:
                continue
            try:
                await self.delete_translation(
                    record.key, record.locale, record.namespace, tenant_id, user_id
                )
                results["deleted"] += 1
            except Exception as e:  # pylint: disable=broad-except
                results["errors"].append(f"Failed to delete {record.key}: {e}")
        return results

    async def get_health_report(self, tenant_id: Optional[str] = None) -> Dict[str, Any]:
        """Summary of translation data quality and cache usage."""
        stats = await self.repository.get_stats(tenant_id)
        locales = await self.repository.get_available_locales(tenant_id)
        namespaces = await self.repository.get_available_namespaces(None, tenant_id)

        key_locales: Dict[str, List[str]] = {}
        empty_translations = []
        long_translations = []
        for locale in locales:
            for ns in namespaces:
                for record in await self.repository.find_by_locale_and_namespace(
                    locale, ns, tenant_id
                ):
                    key_locales.setdefault(f"{ns}.{record.key}", []).append(locale)
                    if not record.value or not record.value.strip():
                        empty_translations.append(
                            {"key": record.key, "locale": record.locale, "namespace": record.namespace}
                        )
                    if len(record.value) > LONG_TRANSLATION_LENGTH:
                        long_translations.append(
                            {"key": record.key, "locale": record.locale, "length": len(record.value)}
                        )

        base_locale = self.settings.default_locale
        completion = await self.validate_translation_completeness(
            base_locale,
            [locale for locale in locales if locale != base_locale],
            namespaces,
            tenant_id,
        )

        return {
            "total_translations": stats["total"],
            "locales": locales,
            "namespaces": namespaces,
            "completion_rates": completion["completion_rate"],
            "duplicate_keys": [
                {"key": key, "locales": found_in}
                for key, found_in in key_locales.items()
                if len(found_in) > 1
            ],
            "empty_translations": empty_translations,
            "long_translations": long_translations,
            "cache_hit_rate": getattr(self.cache.backend, "hit_rate", 0.0),
            "memory_usage": {
                "cache_size": self.cache.local_size(),
                "translation_memory_size": len(self.memory),
            },
        }

    # Translation memory and auto-translation

    async def search_translation_memory(
        self,
        source_text: str,
        source_locale: str,
        target_locale: str,
        threshold: Optional[float] = None,
    ) -> List[TranslationMemoryEntry]:
        if threshold is None:
            threshold = self.settings.memory_threshold
        return self.memory.search(source_text, source_locale, target_locale, threshold)

    async def auto_translate(
        self,
        source_locale: str,
        target_locale: str,
        keys: Optional[List[str]] = None,
        namespace: str = DEFAULT_NAMESPACE,
        tenant_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.auto_translator.auto_translate(
            source_locale,
            target_locale,
            keys=keys,
            namespace=namespace,
            tenant_id=tenant_id,
            user_id=user_id,
        )

    # Files and external sources

    async def reload_translations_from_file(
        self, filename: Union[str, Path], namespace: Optional[str] = None
    ) -> ImportResult:
        """Re-import a ``<locale>.<namespace>.json|yml`` file with overwrite.

        Emits ``translations:reloaded`` when the import finishes.
        """
        locale, namespace, data = self.file_loader.read_locale_file(filename, namespace)
        result = await self.import_translations(
            data, "json", locale, namespace=namespace, overwrite=True
        )
        self._emit(
            TRANSLATIONS_RELOADED,
            {"locale": locale, "namespace": namespace, "filename": str(filename)},
        )
        logger.info(
            "translations_reloaded",
            filename=str(filename),
            locale=locale,
            namespace=namespace,
        )
        return result

    async def _fetch_remote(self, url: str, api_key: Optional[str]) -> Any:
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        async with httpx.AsyncClient(transport=self._http_transport) as client:
            response = await client.get(url, headers=headers)
        if not response.is_success:
            raise UpstreamError(f"API sync failed: {response.reason_phrase}")
        return response.json()

    async def sync_translations(
        self,
        source: str,
        file_path: Optional[str] = None,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        locale: Optional[str] = None,
        namespace: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Import translations from a file, an HTTP API or the tenant's records.

        Never raises; failures are reported in ``errors``.
        """
        results: Dict[str, Any] = {"synced": 0, "errors": []}
        try:
            if source == "file":
                if not file_path:
                    raise ValueError("File path is required for file sync")
                data = self.file_loader.read(file_path)
            elif source == "api":
                if not url:
                    raise ValueError("URL is required for API sync")
                data = await self._fetch_remote(url, api_key)
            elif source == "database":
                records = await self.repository.find_all(tenant_id)
                data = {record.key: record.value for record in records}
            else:
                raise ValueError(f"Unsupported sync source: {source}")

            imported = await self.import_translations(
                data,
                "json",
                locale or self.settings.default_locale,
                namespace=namespace or self.settings.default_namespace,
                overwrite=True,
                tenant_id=tenant_id,
            )
            results["synced"] = imported.imported + imported.updated
            results["errors"] = imported.errors
            logger.info(
                "translation_sync_completed",
                source=source,
                synced=results["synced"],
                error_count=len(results["errors"]),
            )
        except Exception as e:  # pylint: disable=broad-except
            results["errors"].append(f"Sync failed: {e}")
            logger.error("translation_sync_failed", source=source, error=str(e))
        return results

    async def generate_keys_from_source(
        self,
        source_files: Iterable[str],
        key_pattern: Optional[str] = None,
        extract_comments: bool = True,
    ) -> Dict[str, Any]:
        return generate_keys_from_source(source_files, key_pattern, extract_comments)
