"""CSV codec.

Export writes ``key,value,locale,namespace`` with every field quoted.
Import reads the first two columns; a first line containing ``key`` is
treated as a header. Rows the reader rejects are skipped and parsing
continues with the next one.
"""

import csv
import io
from typing import Any, Dict

from infrastructure.i18n.codecs.base import ExportTree, FormatCodec, encode_cell, iter_entries
from infrastructure.logging import get_module_logger

logger = get_module_logger()

HEADER = ("key", "value", "locale", "namespace")


class CsvCodec(FormatCodec):
    name = "csv"
    mime_type = "text/csv"
    extension = "csv"

    def parse(self, raw: Any) -> Dict[str, str]:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        translations: Dict[str, str] = {}
        if not raw:
            return translations

        first_line = raw.split("\n", 1)[0]
        skip_header = "key" in first_line
        reader = csv.reader(io.StringIO(raw))
        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                logger.warning("csv_row_skipped", line=reader.line_num, error=str(e))
                skip_header = False
                continue
            if skip_header:
                skip_header = False
                continue
            if len(row) < 2:
                continue
            key, value = row[0].strip(), row[1].strip()
            if key and value:
                translations[key] = value
        return translations

    def serialize(self, tree: ExportTree) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        buffer.write(",".join(HEADER) + "\n")
        for locale, namespace, key, value in iter_entries(tree):
            writer.writerow([key, encode_cell(value), locale, namespace])
        return buffer.getvalue().rstrip("\n")
