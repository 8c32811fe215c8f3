"""XLIFF 1.2 subset codec.

Parsing matches ``trans-unit`` blocks with a regular expression rather than
an XML parser; only ``id`` and ``target`` are read, and units missing
either are skipped.
"""

import re
from typing import Any, Dict
from xml.sax.saxutils import escape, unescape

from infrastructure.i18n.codecs.base import ExportTree, FormatCodec, encode_cell

TRANS_UNIT_PATTERN = re.compile(
    r'<trans-unit[^>]*id="([^"]*)"[^>]*>[\s\S]*?'
    r"<source[^>]*>([\s\S]*?)</source>[\s\S]*?"
    r"<target[^>]*>([\s\S]*?)</target>[\s\S]*?"
    r"</trans-unit>"
)

_ATTR_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_ATTR_UNESCAPES = {"&quot;": '"', "&apos;": "'"}


class XliffCodec(FormatCodec):
    name = "xliff"
    mime_type = "application/xml"
    extension = "xliff"

    def __init__(self, source_language: str = "en"):
        self.source_language = source_language

    def parse(self, raw: Any) -> Dict[str, str]:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        translations: Dict[str, str] = {}
        for match in TRANS_UNIT_PATTERN.finditer(raw or ""):
            unit_id, target = match.group(1), match.group(3).strip()
            if not unit_id or not target:
                continue
            key = unescape(unit_id, _ATTR_UNESCAPES)
            translations[key] = unescape(target, _ATTR_UNESCAPES)
        return translations

    def serialize(self, tree: ExportTree) -> str:
        lines = ['<?xml version="1.0" encoding="UTF-8"?>', '<xliff version="1.2">']
        for locale, namespaces in tree.items():
            for translations in namespaces.values():
                lines.append(
                    f'  <file source-language="{escape(self.source_language, _ATTR_ENTITIES)}" '
                    f'target-language="{escape(locale, _ATTR_ENTITIES)}" datatype="plaintext">'
                )
                lines.append("    <body>")
                for key, value in translations.items():
                    lines.append(f'      <trans-unit id="{escape(key, _ATTR_ENTITIES)}">')
                    lines.append(f"        <source>{escape(key)}</source>")
                    lines.append(f"        <target>{escape(encode_cell(value))}</target>")
                    lines.append("      </trans-unit>")
                lines.append("    </body>")
                lines.append("  </file>")
        lines.append("</xliff>")
        return "\n".join(lines)
