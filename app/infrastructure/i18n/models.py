"""Translation models for the translation engine.

Defines the stored translation record, translation-memory entries, fuzzy
match results, import/export results, and the tagged union used to decode
interchange values at parse time.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union
from uuid import uuid4

DEFAULT_NAMESPACE = "common"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def cache_key(locale: str, namespace: str, tenant_id: Optional[str] = None) -> str:
    """Build the cache key of a resolved translation map.

    Tenant-scoped maps always fold the tenant in so two tenants never share
    an entry.
    """
    if tenant_id:
        return f"i18n:{tenant_id}:{locale}:{namespace}"
    return f"i18n:{locale}:{namespace}"


class InterchangeFormat(str, Enum):
    """Supported import/export formats."""

    JSON = "json"
    CSV = "csv"
    XLIFF = "xliff"
    PO = "po"
    YAML = "yaml"

    @classmethod
    def from_string(cls, value: Union[str, "InterchangeFormat"]) -> "InterchangeFormat":
        """Convert a format name to the enum.

        Raises:
            ValueError: If the format is not supported.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise ValueError(f"Unsupported format: {value}") from e


@dataclass
class Translation:
    """A stored translation record.

    Unique per (key, locale, namespace, tenant_id).
    """

    key: str
    value: str
    locale: str
    namespace: str = DEFAULT_NAMESPACE
    tenant_id: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid4()))
    description: Optional[str] = None
    is_plural: bool = False
    plural_forms: Optional[Dict[str, str]] = None
    variables: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data


@dataclass
class TranslationData:
    """Input for creating or updating a translation record."""

    key: str
    value: str
    locale: str
    namespace: str = DEFAULT_NAMESPACE
    tenant_id: Optional[str] = None
    description: Optional[str] = None
    is_plural: bool = False
    plural_forms: Optional[Dict[str, str]] = None
    variables: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class TranslationMemoryEntry:
    """A previously produced (source, target) translation pair."""

    source_text: str
    target_text: str
    source_locale: str
    target_locale: str
    similarity: float = 1.0
    context: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def pair(self) -> tuple:
        return (self.source_locale, self.target_locale)


@dataclass(frozen=True)
class FuzzyMatchResult:
    """An existing key approximately matching a requested one."""

    key: str
    value: str
    similarity: float
    namespace: str


@dataclass
class ImportResult:
    imported: int = 0
    updated: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass
class ExportResult:
    format: str
    data: str
    filename: str
    mime_type: str


# Decoded interchange values. Each kind is decided once, right after parsing.


@dataclass(frozen=True)
class PlainValue:
    """A bare translation string."""

    value: str

    is_plural = False
    plural_forms = None
    variables = None
    description = None
    metadata = None


@dataclass(frozen=True)
class PluralFormsValue:
    """An object mapping plural form tags to strings."""

    forms: Mapping[str, str]

    is_plural = True
    variables = None
    description = None
    metadata = None

    @property
    def plural_forms(self) -> Dict[str, str]:
        return dict(self.forms)

    @property
    def value(self) -> str:
        """Base value: the ``other`` form, then ``one``, then the first form."""
        if self.forms.get("other"):
            return self.forms["other"]
        if self.forms.get("one"):
            return self.forms["one"]
        return next(iter(self.forms.values()), "")


@dataclass(frozen=True)
class MetadataValue:
    """A wrapper object carrying ``_value`` plus optional metadata fields."""

    value: str
    is_plural: bool = False
    plural_forms: Optional[Dict[str, str]] = None
    variables: Optional[List[str]] = None
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


ImportValue = Union[PlainValue, PluralFormsValue, MetadataValue]

METADATA_MARKER = "_value"


def stringify(value: Any) -> str:
    """Render a scalar the way interchange files expect it."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def decode_import_value(raw: Any) -> ImportValue:
    """Decode one parsed interchange value into its ImportValue kind.

    A mapping with a truthy ``_value`` marker is a metadata wrapper, any other
    mapping is a plural forms object, and everything else is a plain value.
    """
    if isinstance(raw, Mapping):
        if raw.get(METADATA_MARKER):
            plural_forms = raw.get("_pluralForms")
            variables = raw.get("_variables")
            return MetadataValue(
                value=stringify(raw[METADATA_MARKER]),
                is_plural=bool(raw.get("_isPlural", False)),
                plural_forms=(
                    {str(k): stringify(v) for k, v in plural_forms.items()}
                    if isinstance(plural_forms, Mapping)
                    else None
                ),
                variables=list(variables) if isinstance(variables, list) else None,
                description=raw.get("_description"),
                metadata=raw.get("_metadata"),
            )
        return PluralFormsValue(forms={str(k): stringify(v) for k, v in raw.items()})
    return PlainValue(value=stringify(raw))
