"""Extraction of translation keys from source files.

Finds ``t("key")``, ``translate("key")`` and ``i18n("key")`` calls line by
line, with an optional default value given as the next string argument and
an optional context taken from a comment on the line above.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Pattern, Union

from infrastructure.logging import get_module_logger

logger = get_module_logger()

KEY_PATTERN = re.compile(r"""(?:t|translate|i18n)\s*\(\s*['"`]([^'"`]+)['"`]""")

_COMMENT_MARKERS = re.compile(r"^//\s*|^/\*\s*|\s*\*/$")


def _comment_context(previous_line: str) -> Optional[str]:
    previous_line = previous_line.strip()
    if previous_line.startswith("//") or previous_line.startswith("/*"):
        return _COMMENT_MARKERS.sub("", previous_line)
    return None


def _default_value(line: str, call: str) -> Optional[str]:
    match = re.search(re.escape(call) + r"""[^,]*,\s*['"`]([^'"`]+)['"`]""", line)
    return match.group(1) if match else None


def extract_keys_from_text(
    content: str,
    file: str,
    key_pattern: Pattern = KEY_PATTERN,
    extract_comments: bool = True,
) -> List[Dict[str, Any]]:
    """Every key occurrence in ``content`` (duplicates included)."""
    keys = []
    lines = content.split("\n")
    for index, line in enumerate(lines):
        for match in key_pattern.finditer(line):
            context = None
            if extract_comments and index > 0:
                context = _comment_context(lines[index - 1])
            keys.append(
                {
                    "key": match.group(1),
                    "default_value": _default_value(line, match.group(0)),
                    "file": file,
                    "line": index + 1,
                    "context": context,
                }
            )
    return keys


def generate_keys_from_source(
    source_files: Iterable[str],
    key_pattern: Optional[Union[str, Pattern]] = None,
    extract_comments: bool = True,
) -> Dict[str, Any]:
    """Scan source files for translation keys.

    Args:
        source_files: Paths of files to scan.
        key_pattern: Custom regex whose first group is the key.
        extract_comments: Use a comment on the previous line as context.

    Returns:
        ``{"keys": [...], "errors": [...]}`` with keys de-duplicated by
        name, first occurrence kept.
    """
    if key_pattern is None:
        pattern = KEY_PATTERN
    elif isinstance(key_pattern, str):
        pattern = re.compile(key_pattern)
    else:
        pattern = key_pattern

    source_files = list(source_files)
    found: List[Dict[str, Any]] = []
    errors: List[str] = []

    for path in source_files:
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            errors.append(f"Failed to process file {path}: {e}")
            continue
        found.extend(extract_keys_from_text(content, path, pattern, extract_comments))

    unique: Dict[str, Dict[str, Any]] = {}
    for item in found:
        unique.setdefault(item["key"], item)

    logger.info(
        "translation_keys_generated",
        files=len(source_files),
        keys=len(unique),
        error_count=len(errors),
    )
    return {"keys": list(unique.values()), "errors": errors}
