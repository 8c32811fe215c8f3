"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_memory_entry,
    make_translation,
    make_translation_data,
    sample_catalog,
    seed_repository,
)

__all__ = [
    "make_memory_entry",
    "make_translation",
    "make_translation_data",
    "sample_catalog",
    "seed_repository",
]
