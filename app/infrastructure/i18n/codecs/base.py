"""Format codec interface.

A codec turns raw interchange text into a flat ``key -> value`` map and
serializes export trees shaped ``{locale: {namespace: {key: value}}}``.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Mapping, Tuple

from infrastructure.i18n.models import DEFAULT_NAMESPACE

ExportTree = Mapping[str, Mapping[str, Mapping[str, Any]]]


def encode_cell(value: Any) -> str:
    """Strings pass through, structured values become compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def iter_entries(tree: ExportTree) -> Iterator[Tuple[str, str, str, Any]]:
    """Yield (locale, namespace, key, value) in tree order."""
    for locale, namespaces in tree.items():
        for namespace, translations in namespaces.items():
            for key, value in translations.items():
                yield locale, namespace, key, value


class FormatCodec(ABC):
    """Parse/serialize pair for one interchange format.

    Attributes:
        name: Format name used in import/export requests.
        mime_type: MIME type of serialized output.
        extension: File extension of serialized output.
    """

    name: str = ""
    mime_type: str = "text/plain"
    extension: str = ""

    @abstractmethod
    def parse(self, raw: Any) -> Dict[str, Any]:
        """Parse raw interchange text into a flat map.

        Malformed lines and rows are skipped; only a document that cannot be
        read at all raises FormatError.
        """

    @abstractmethod
    def serialize(self, tree: ExportTree) -> str:
        """Serialize an export tree."""

    def serialize_entries(
        self,
        entries: Mapping[str, Any],
        locale: str = "en",
        namespace: str = DEFAULT_NAMESPACE,
    ) -> str:
        """Serialize a flat map as a single locale/namespace document."""
        return self.serialize({locale: {namespace: dict(entries)}})
