"""Translation engine - resolution, interchange and matching.

Resolves translation keys under locale fallback, pluralization and
interpolation rules; matches missing keys approximately; imports and
exports translation sets in JSON, CSV, XLIFF, PO and YAML.

Main components:
- models: Translation, TranslationData, TranslationMemoryEntry, ImportValue
- plurals / interpolation / similarity: pure rule and string helpers
- codecs: one FormatCodec per interchange format
- cache: two-tier TranslationCache of resolved maps
- memory: TranslationMemory index
- translator: Translator resolution engine
- interchange: TranslationInterchange import/export orchestrator
- service: TranslationService facade
- factory: create_translation_service()
"""

from infrastructure.i18n.cache import TranslationCache
from infrastructure.i18n.errors import (
    AutoTranslateError,
    FormatError,
    I18nError,
    TranslationNotFoundError,
    TranslationValidationError,
    UnsupportedFormatError,
    UpstreamError,
)
from infrastructure.i18n.factory import create_cache_backend, create_translation_service
from infrastructure.i18n.interpolation import extract_variables, interpolate
from infrastructure.i18n.memory import TranslationMemory
from infrastructure.i18n.models import (
    ExportResult,
    FuzzyMatchResult,
    ImportResult,
    InterchangeFormat,
    Translation,
    TranslationData,
    TranslationMemoryEntry,
)
from infrastructure.i18n.plurals import apply_pluralization, classify
from infrastructure.i18n.service import TranslationService
from infrastructure.i18n.similarity import levenshtein_distance, similarity
from infrastructure.i18n.storage import InMemoryTranslationRepository, TranslationRepository
from infrastructure.i18n.translator import Translator

__all__ = [
    "AutoTranslateError",
    "ExportResult",
    "FormatError",
    "FuzzyMatchResult",
    "I18nError",
    "ImportResult",
    "InMemoryTranslationRepository",
    "InterchangeFormat",
    "Translation",
    "TranslationCache",
    "TranslationData",
    "TranslationMemory",
    "TranslationMemoryEntry",
    "TranslationNotFoundError",
    "TranslationRepository",
    "TranslationService",
    "TranslationValidationError",
    "Translator",
    "UnsupportedFormatError",
    "UpstreamError",
    "apply_pluralization",
    "classify",
    "create_cache_backend",
    "create_translation_service",
    "extract_variables",
    "interpolate",
    "levenshtein_distance",
    "similarity",
]
