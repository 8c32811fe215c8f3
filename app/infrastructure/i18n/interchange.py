"""Import/export of translation sets in interchange formats.

Import parses a payload with the format's codec, validates it, then upserts
key by key in payload order. A failing key is recorded in ``errors`` and the
rest of the batch continues. Export assembles
``{locale: {namespace: {key: value}}}`` and serializes it.
"""

import json
import time
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

from infrastructure.i18n.cache import TranslationCache
from infrastructure.i18n.codecs import get_codec
from infrastructure.i18n.interpolation import extract_variables
from infrastructure.i18n.models import (
    DEFAULT_NAMESPACE,
    METADATA_MARKER,
    ExportResult,
    ImportResult,
    Translation,
    TranslationData,
    decode_import_value,
)
from infrastructure.i18n.storage import TranslationRepository
from infrastructure.logging import get_module_logger

logger = get_module_logger()

Upsert = Callable[[TranslationData, Optional[str]], Awaitable[Translation]]


def validate_entry(key: Any, value: Any) -> List[str]:
    """Validation errors of one parsed key/value pair."""
    if not key or not isinstance(key, str):
        return [f"Invalid key: {key}"]

    errors = []
    if ".." in key or key.startswith(".") or key.endswith("."):
        errors.append(f"Invalid key format: {key}")

    if value is None:
        errors.append(f"Empty value for key: {key}")
        return errors

    if isinstance(value, Mapping):
        plural_forms = value.get("_pluralForms")
        if plural_forms and not isinstance(plural_forms, Mapping):
            errors.append(f"Invalid plural forms for key: {key}")

    if isinstance(value, str):
        text = value
    elif isinstance(value, Mapping) and value.get(METADATA_MARKER):
        text = str(value[METADATA_MARKER])
    else:
        text = json.dumps(value, ensure_ascii=False, default=str)
    if text.count("{{") != text.count("}}"):
        errors.append(f"Unmatched interpolation brackets in key: {key}")

    return errors


def validate_translations(translations: Mapping[Any, Any]) -> List[str]:
    """Validate a parsed payload and return every error message."""
    errors: List[str] = []
    for key, value in translations.items():
        errors.extend(validate_entry(key, value))
    return errors


def export_value(translation: Translation, include_metadata: bool) -> Any:
    if include_metadata:
        return {
            "_value": translation.value,
            "_isPlural": translation.is_plural,
            "_pluralForms": translation.plural_forms,
            "_variables": translation.variables,
            "_description": translation.description,
            "_metadata": translation.metadata,
        }
    if translation.is_plural and translation.plural_forms:
        return dict(translation.plural_forms)
    return translation.value


class TranslationInterchange:
    """Import/export orchestrator.

    Attributes:
        repository: Storage collaborator used for lookups and export.
        upsert: Callable creating or updating one record (with side effects
            such as events and translation memory).
        cache: Cache invalidated after each import.
        source_language: Source language written to XLIFF exports.
    """

    def __init__(
        self,
        repository: TranslationRepository,
        upsert: Upsert,
        cache: TranslationCache,
        source_language: str = "en",
    ):
        self.repository = repository
        self.upsert = upsert
        self.cache = cache
        self.source_language = source_language

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
        """Import a payload into one locale/namespace.

        Raises:
            UnsupportedFormatError: If the format is unknown.
            FormatError: If the document cannot be parsed at all.
        """
        codec = get_codec(format, "import", self.source_language)
        translations = codec.parse(data)
        result = ImportResult()

        for key, raw_value in translations.items():
            if validate:
                problems = validate_entry(key, raw_value)
                if problems:
                    result.errors.extend(problems)
                    continue

            try:
                existing = await self.repository.find_by_key(key, locale, namespace, tenant_id)
                if existing is not None and not overwrite:
                    continue

                value = decode_import_value(raw_value)
                variables = value.variables
                if variables is None:
                    variables = extract_variables(value.value)

                await self.upsert(
                    TranslationData(
                        key=key,
                        value=value.value,
                        locale=locale,
                        namespace=namespace,
                        tenant_id=tenant_id,
                        description=value.description,
                        is_plural=value.is_plural,
                        plural_forms=value.plural_forms,
                        variables=variables,
                        metadata=value.metadata,
                    ),
                    imported_by,
                )

                if existing is not None:
                    result.updated += 1
                else:
                    result.imported += 1
            except Exception as e:  # pylint: disable=broad-except
                result.errors.append(f"Failed to import key '{key}': {e}")

        await self.cache.invalidate(locale, namespace, tenant_id)

        logger.info(
            "translations_imported",
            format=codec.name,
            locale=locale,
            namespace=namespace,
            imported=result.imported,
            updated=result.updated,
            error_count=len(result.errors),
            tenant_id=tenant_id,
        )
        return result

    async def build_export_tree(
        self,
        locales: Sequence[str],
        namespaces: Sequence[str],
        include_metadata: bool = False,
        tenant_id: Optional[str] = None,
    ) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Collect records into ``{locale: {namespace: {key: value}}}``.

        Every locale appears; a namespace appears only when it has records.
        """
        tree: Dict[str, Dict[str, Dict[str, Any]]] = {}
        for locale in locales:
            tree[locale] = {}
            for namespace in namespaces:
                records = await self.repository.find_by_locale_and_namespace(
                    locale, namespace, tenant_id
                )
                if records:
                    tree[locale][namespace] = {
                        record.key: export_value(record, include_metadata) for record in records
                    }
        return tree

    async def export_translations(
        self,
        format: str,
        locales: Optional[Sequence[str]] = None,
        namespaces: Optional[Sequence[str]] = None,
        include_metadata: bool = False,
        tenant_id: Optional[str] = None,
    ) -> ExportResult:
        """Export translations; locales and namespaces default to all known.

        Raises:
            UnsupportedFormatError: If the format is unknown.
        """
        codec = get_codec(format, "export", self.source_language)

        if locales is None:
            locales = await self.repository.get_available_locales(tenant_id)
        if namespaces is None:
            namespaces = await self.repository.get_available_namespaces(None, tenant_id)

        tree = await self.build_export_tree(locales, namespaces, include_metadata, tenant_id)
        filename = f"translations-{int(time.time() * 1000)}.{codec.extension}"

        logger.info(
            "translations_exported",
            format=codec.name,
            locales=len(locales),
            namespaces=len(namespaces),
            filename=filename,
            tenant_id=tenant_id,
        )
        return ExportResult(
            format=codec.name,
            data=codec.serialize(tree),
            filename=filename,
            mime_type=codec.mime_type,
        )
