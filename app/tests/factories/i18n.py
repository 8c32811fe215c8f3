"""Test data factories for the translation engine.

Provides deterministic builders for:
- Translation records and TranslationData inputs
- TranslationMemoryEntry
- Seeded in-memory repositories
"""

from typing import Dict, Iterable, Optional

from infrastructure.i18n.models import (
    Translation,
    TranslationData,
    TranslationMemoryEntry,
)
from infrastructure.i18n.storage import InMemoryTranslationRepository


def make_translation_data(
    key: str = "welcome",
    value: str = "Welcome",
    locale: str = "en",
    namespace: str = "common",
    tenant_id: Optional[str] = None,
    plural_forms: Optional[Dict[str, str]] = None,
    **overrides,
) -> TranslationData:
    """Create a TranslationData input.

    Passing plural_forms marks the data as plural.
    """
    return TranslationData(
        key=key,
        value=value,
        locale=locale,
        namespace=namespace,
        tenant_id=tenant_id,
        is_plural=plural_forms is not None,
        plural_forms=plural_forms,
        **overrides,
    )


def make_translation(
    key: str = "welcome",
    value: str = "Welcome",
    locale: str = "en",
    namespace: str = "common",
    tenant_id: Optional[str] = None,
    **overrides,
) -> Translation:
    """Create a Translation record."""
    return Translation(
        key=key,
        value=value,
        locale=locale,
        namespace=namespace,
        tenant_id=tenant_id,
        **overrides,
    )


def make_memory_entry(
    source_text: str = "Save changes",
    target_text: str = "Enregistrer les modifications",
    source_locale: str = "en",
    target_locale: str = "fr",
    **overrides,
) -> TranslationMemoryEntry:
    """Create a TranslationMemoryEntry."""
    return TranslationMemoryEntry(
        source_text=source_text,
        target_text=target_text,
        source_locale=source_locale,
        target_locale=target_locale,
        **overrides,
    )


async def seed_repository(
    repository: InMemoryTranslationRepository,
    items: Iterable[TranslationData],
) -> InMemoryTranslationRepository:
    """Create every item in the repository."""
    for data in items:
        await repository.create(data)
    return repository


def sample_catalog() -> list:
    """A small multi-locale catalog.

    - en/common: welcome, greeting, items (plural), farewell
    - fr/common: welcome, items (plural)
    - en/errors: not_found
    """
    return [
        make_translation_data("welcome", "Welcome"),
        make_translation_data("greeting", "Hello {{name}}", variables=["name"]),
        make_translation_data(
            "items",
            "{{count}} items",
            plural_forms={"one": "{{count}} item", "other": "{{count}} items"},
        ),
        make_translation_data("farewell", "Goodbye"),
        make_translation_data("welcome", "Bienvenue", locale="fr"),
        make_translation_data(
            "items",
            "{{count}} éléments",
            locale="fr",
            plural_forms={"one": "{{count}} élément", "other": "{{count}} éléments"},
        ),
        make_translation_data("not_found", "Not found", namespace="errors"),
    ]
