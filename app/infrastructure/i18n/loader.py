"""Translation file reading for reloads and file syncs.

Locale files are named ``<locale>.<namespace>.json`` or
``<locale>.<namespace>.yml`` (namespace defaults to ``common`` when the
name has a single part) and live in the configured locales directory.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from infrastructure.i18n.codecs import JsonCodec, YamlCodec
from infrastructure.i18n.errors import UnsupportedFormatError
from infrastructure.i18n.models import DEFAULT_NAMESPACE
from infrastructure.logging import get_module_logger

logger = get_module_logger()

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def parse_locale_filename(filename: Union[str, Path]) -> Tuple[str, str]:
    """Split ``en.errors.json`` into ``("en", "errors")``.

    Raises:
        ValueError: If the file name has no locale part.
    """
    parts = Path(filename).stem.split(".")
    locale = parts[0]
    if not locale:
        raise ValueError(f"Cannot derive locale from file name: {filename}")
    namespace = parts[1] if len(parts) > 1 and parts[1] else DEFAULT_NAMESPACE
    return locale, namespace


class TranslationFileLoader:
    """Reads translation files into flat payloads ready for import.

    Attributes:
        locales_dir: Directory relative file names are resolved against.
    """

    def __init__(self, locales_dir: Union[str, Path] = "locales"):
        self.locales_dir = Path(locales_dir)
        self._json = JsonCodec()
        self._yaml = YamlCodec()

    def resolve(self, filename: Union[str, Path]) -> Path:
        path = Path(filename)
        if path.is_absolute():
            return path
        return self.locales_dir / path

    def read(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Read a JSON or YAML translation file.

        JSON keeps its structure (plural and metadata objects survive); YAML
        is flattened into dot-separated keys.

        Raises:
            UnsupportedFormatError: For any other file extension.
            FormatError: If the document cannot be parsed.
            OSError: If the file cannot be read.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix not in JSON_SUFFIXES + YAML_SUFFIXES:
            raise UnsupportedFormatError(suffix or path.name, "file")

        with open(path, "r", encoding="utf-8") as f:
            content = f.read()

        if suffix in JSON_SUFFIXES:
            data = self._json.parse(content)
        else:
            data = self._yaml.parse(content)

        logger.debug("translation_file_read", file=str(path), key_count=len(data))
        return data

    def read_locale_file(
        self, filename: Union[str, Path], namespace: Optional[str] = None
    ) -> Tuple[str, str, Dict[str, Any]]:
        """Read a locale file and derive (locale, namespace) from its name."""
        locale, derived_namespace = parse_locale_filename(filename)
        data = self.read(self.resolve(filename))
        return locale, namespace or derived_namespace, data
