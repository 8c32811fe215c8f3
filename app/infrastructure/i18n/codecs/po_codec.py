"""GNU gettext PO codec.

Parsing is a line-oriented state machine over ``msgid``/``msgstr`` blocks
where lines starting with ``"`` continue the current string. Entries with
an empty id or string are dropped, and ``msgctxt`` lines end the previous
block without contributing to the key.

Export builds a Babel catalog. When the tree holds more than one
locale/namespace group, each message carries ``<locale>.<namespace>`` as
its context so equal keys from different groups stay distinct.
"""

import io
import re
from typing import Any, Dict, List, Tuple

from babel.messages.catalog import Catalog
from babel.messages.pofile import unescape, write_po

from infrastructure.i18n.codecs.base import ExportTree, FormatCodec, encode_cell, iter_entries

HEADER_COMMENT = "# Translation file"

_QUOTED = re.compile(r'^".*"$')


def _unquote(text: str) -> str:
    text = text.strip()
    if _QUOTED.match(text):
        return unescape(text)
    return text


class PoCodec(FormatCodec):
    name = "po"
    mime_type = "text/plain"
    extension = "po"

    def parse(self, raw: Any) -> Dict[str, str]:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        translations: Dict[str, str] = {}
        msgid = ""
        msgstr = ""
        in_msgid = False
        in_msgstr = False

        for line in (raw or "").split("\n"):
            line = line.strip()
            if line.startswith("msgid "):
                if msgid and msgstr:
                    translations[msgid] = msgstr
                msgid = _unquote(line[6:])
                msgstr = ""
                in_msgid, in_msgstr = True, False
            elif line.startswith("msgstr "):
                msgstr = _unquote(line[7:])
                in_msgid, in_msgstr = False, True
            elif line.startswith("msgctxt "):
                in_msgid, in_msgstr = False, False
            elif line.startswith('"') and in_msgid:
                msgid += _unquote(line)
            elif line.startswith('"') and in_msgstr:
                msgstr += _unquote(line)

        if msgid and msgstr:
            translations[msgid] = msgstr
        return translations

    def serialize(self, tree: ExportTree) -> str:
        entries: List[Tuple[str, str, str, Any]] = list(iter_entries(tree))
        groups = {(locale, namespace) for locale, namespace, _key, _value in entries}

        catalog = Catalog(header_comment=HEADER_COMMENT, charset="utf-8", fuzzy=False)
        for locale, namespace, key, value in entries:
            context = f"{locale}.{namespace}" if len(groups) > 1 else None
            catalog.add(key, encode_cell(value), context=context)

        buffer = io.BytesIO()
        write_po(buffer, catalog)
        return buffer.getvalue().decode("utf-8")
