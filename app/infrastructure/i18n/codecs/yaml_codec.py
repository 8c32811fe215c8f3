"""YAML codec. Nested mappings are flattened into dot-separated keys."""

from typing import Any, Dict, Mapping

import yaml

from infrastructure.i18n.codecs.base import ExportTree, FormatCodec
from infrastructure.i18n.errors import FormatError
from infrastructure.i18n.models import stringify


def flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, str]:
    """Flatten nested mappings into ``a.b.c`` keys with string leaves."""
    flattened: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flattened.update(flatten(value, full_key))
        else:
            flattened[full_key] = stringify(value)
    return flattened


class YamlCodec(FormatCodec):
    name = "yaml"
    mime_type = "text/yaml"
    extension = "yaml"

    def parse(self, raw: Any) -> Dict[str, str]:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise FormatError(self.name, str(e)) from e
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise FormatError(self.name, "top-level value must be a mapping")
        return flatten(data)

    def _dump(self, data: Any) -> str:
        return yaml.safe_dump(
            data,
            indent=2,
            allow_unicode=True,
            sort_keys=False,
            default_flow_style=False,
        )

    def serialize(self, tree: ExportTree) -> str:
        return self._dump(tree)

    def serialize_entries(self, entries, locale="en", namespace="common") -> str:
        return self._dump(dict(entries))
