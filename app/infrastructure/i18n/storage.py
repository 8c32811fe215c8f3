"""Storage collaborator for translation records and translation memory.

The engine only talks to storage through TranslationRepository. The
in-memory repository is a complete implementation for tests and local
tooling; tenant scoping is strict, so ``tenant_id=None`` only sees
untenanted records.
"""

import threading
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from infrastructure.i18n.models import (
    Translation,
    TranslationData,
    TranslationMemoryEntry,
    utc_now,
)

RecordKey = Tuple[Optional[str], str, str, str]


class TranslationRepository(ABC):
    """Async storage interface consumed by the translation engine."""

    @abstractmethod
    async def find_by_key(
        self,
        key: str,
        locale: str,
        namespace: str,
        tenant_id: Optional[str] = None,
    ) -> Optional[Translation]:
        """Return the record for a key, or None."""

    @abstractmethod
    async def find_by_locale_and_namespace(
        self, locale: str, namespace: str, tenant_id: Optional[str] = None
    ) -> List[Translation]:
        """Return every record of a locale/namespace ordered by key."""

    @abstractmethod
    async def find_all(
        self,
        tenant_id: Optional[str] = None,
        locale: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> List[Translation]:
        """Return records of a tenant, optionally filtered."""

    @abstractmethod
    async def create(
        self, data: TranslationData, user_id: Optional[str] = None
    ) -> Translation:
        """Create a record."""

    @abstractmethod
    async def update(
        self,
        translation: Translation,
        data: TranslationData,
        user_id: Optional[str] = None,
    ) -> Translation:
        """Replace the mutable fields of an existing record."""

    @abstractmethod
    async def delete(self, translation: Translation) -> None:
        """Delete a record."""

    @abstractmethod
    async def get_available_locales(self, tenant_id: Optional[str] = None) -> List[str]:
        """Distinct locales, sorted."""

    @abstractmethod
    async def get_available_namespaces(
        self, locale: Optional[str] = None, tenant_id: Optional[str] = None
    ) -> List[str]:
        """Distinct namespaces, sorted."""

    @abstractmethod
    async def get_translation_memory(self) -> List[TranslationMemoryEntry]:
        """Persisted translation memory entries."""

    @abstractmethod
    async def add_to_translation_memory(self, entry: TranslationMemoryEntry) -> None:
        """Persist one translation memory entry."""

    @abstractmethod
    async def get_stats(self, tenant_id: Optional[str] = None) -> Dict[str, Any]:
        """Counts: total, by_locale, by_namespace, locales, namespaces."""


class InMemoryTranslationRepository(TranslationRepository):
    """Dict-backed repository."""

    def __init__(self):
        self._records: Dict[RecordKey, Translation] = {}
        self._memory: List[TranslationMemoryEntry] = []
        self._lock = threading.Lock()

    @staticmethod
    def _record_key(
        tenant_id: Optional[str], locale: str, namespace: str, key: str
    ) -> RecordKey:
        return (tenant_id, locale, namespace, key)

    def _scoped(self, tenant_id: Optional[str]) -> List[Translation]:
        with self._lock:
            return [t for t in self._records.values() if t.tenant_id == tenant_id]

    async def find_by_key(self, key, locale, namespace, tenant_id=None):
        with self._lock:
            return self._records.get(self._record_key(tenant_id, locale, namespace, key))

    async def find_by_locale_and_namespace(self, locale, namespace, tenant_id=None):
        return sorted(
            (
                t
                for t in self._scoped(tenant_id)
                if t.locale == locale and t.namespace == namespace
            ),
            key=lambda t: t.key,
        )

    async def find_all(self, tenant_id=None, locale=None, namespace=None):
        return sorted(
            (
                t
                for t in self._scoped(tenant_id)
                if (locale is None or t.locale == locale)
                and (namespace is None or t.namespace == namespace)
            ),
            key=lambda t: (t.locale, t.namespace, t.key),
        )

    async def create(self, data, user_id=None):
        record = Translation(
            key=data.key,
            value=data.value,
            locale=data.locale,
            namespace=data.namespace,
            tenant_id=data.tenant_id,
            description=data.description,
            is_plural=data.is_plural,
            plural_forms=dict(data.plural_forms) if data.plural_forms else None,
            variables=list(data.variables or []),
            metadata=dict(data.metadata or {}),
            created_by=user_id,
            updated_by=user_id,
        )
        record_key = self._record_key(record.tenant_id, record.locale, record.namespace, record.key)
        with self._lock:
            if record_key in self._records:
                raise ValueError(
                    f"Translation already exists: {record.namespace}.{record.key} ({record.locale})"
                )
            self._records[record_key] = record
        return record

    async def update(self, translation, data, user_id=None):
        updated = replace(
            translation,
            value=data.value,
            description=data.description,
            is_plural=data.is_plural,
            plural_forms=dict(data.plural_forms) if data.plural_forms else None,
            variables=list(data.variables or []),
            metadata=dict(data.metadata or {}),
            updated_at=utc_now(),
            updated_by=user_id,
        )
        record_key = self._record_key(
            translation.tenant_id, translation.locale, translation.namespace, translation.key
        )
        with self._lock:
            self._records[record_key] = updated
        return updated

    async def delete(self, translation):
        record_key = self._record_key(
            translation.tenant_id, translation.locale, translation.namespace, translation.key
        )
        with self._lock:
            self._records.pop(record_key, None)

    async def get_available_locales(self, tenant_id=None):
        return sorted({t.locale for t in self._scoped(tenant_id)})

    async def get_available_namespaces(self, locale=None, tenant_id=None):
        return sorted(
            {
                t.namespace
                for t in self._scoped(tenant_id)
                if locale is None or t.locale == locale
            }
        )

    async def get_translation_memory(self):
        with self._lock:
            return list(self._memory)

    async def add_to_translation_memory(self, entry):
        with self._lock:
            self._memory.append(entry)

    async def get_stats(self, tenant_id=None):
        records = self._scoped(tenant_id)
        by_locale = Counter(t.locale for t in records)
        by_namespace = Counter(t.namespace for t in records)
        return {
            "total": len(records),
            "by_locale": dict(by_locale),
            "by_namespace": dict(by_namespace),
            "locales": len(by_locale),
            "namespaces": len(by_namespace),
        }
