"""JSON codec. Parsed objects keep their nesting."""

import json
from typing import Any, Dict, Mapping

from infrastructure.i18n.codecs.base import ExportTree, FormatCodec
from infrastructure.i18n.errors import FormatError


class JsonCodec(FormatCodec):
    name = "json"
    mime_type = "application/json"
    extension = "json"

    def parse(self, raw: Any) -> Dict[str, Any]:
        if isinstance(raw, Mapping):
            return dict(raw)
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise FormatError(self.name, str(e)) from e
        if not isinstance(data, dict):
            raise FormatError(self.name, "top-level value must be an object")
        return data

    def serialize(self, tree: ExportTree) -> str:
        return json.dumps(tree, indent=2, ensure_ascii=False)

    def serialize_entries(self, entries, locale="en", namespace="common") -> str:
        return json.dumps(dict(entries), indent=2, ensure_ascii=False)
