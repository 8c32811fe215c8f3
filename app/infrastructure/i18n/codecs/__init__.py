"""Interchange format codecs (JSON, CSV, XLIFF, PO, YAML)."""

from typing import Dict, Union

from infrastructure.i18n.codecs.base import ExportTree, FormatCodec
from infrastructure.i18n.codecs.csv_codec import CsvCodec
from infrastructure.i18n.codecs.json_codec import JsonCodec
from infrastructure.i18n.codecs.po_codec import PoCodec
from infrastructure.i18n.codecs.xliff_codec import XliffCodec
from infrastructure.i18n.codecs.yaml_codec import YamlCodec, flatten
from infrastructure.i18n.errors import UnsupportedFormatError
from infrastructure.i18n.models import InterchangeFormat


def build_codecs(source_language: str = "en") -> Dict[InterchangeFormat, FormatCodec]:
    """Create one codec per supported format."""
    return {
        InterchangeFormat.JSON: JsonCodec(),
        InterchangeFormat.CSV: CsvCodec(),
        InterchangeFormat.XLIFF: XliffCodec(source_language=source_language),
        InterchangeFormat.PO: PoCodec(),
        InterchangeFormat.YAML: YamlCodec(),
    }


def get_codec(
    format_name: Union[str, InterchangeFormat],
    operation: str = "import",
    source_language: str = "en",
) -> FormatCodec:
    """Look up the codec for a format name.

    Raises:
        UnsupportedFormatError: If the format is not supported.
    """
    try:
        fmt = InterchangeFormat.from_string(format_name)
    except ValueError as e:
        raise UnsupportedFormatError(str(format_name), operation) from e
    return build_codecs(source_language)[fmt]


__all__ = [
    "CsvCodec",
    "ExportTree",
    "FormatCodec",
    "JsonCodec",
    "PoCodec",
    "XliffCodec",
    "YamlCodec",
    "build_codecs",
    "flatten",
    "get_codec",
]
