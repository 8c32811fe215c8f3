"""Variable interpolation for translation strings.

Substitutes ``{{name}}`` placeholders. Dates and numbers are formatted with
Babel for the target locale, and values can be HTML-escaped after formatting.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from babel.core import UnknownLocaleError
from babel.dates import format_date, format_datetime
from babel.numbers import format_decimal

from infrastructure.logging import get_module_logger

logger = get_module_logger()

DATE_STYLES = ("short", "medium", "long", "full")

VARIABLE_PATTERN = re.compile(r"{{\s*([^}]+)\s*}}")

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


@dataclass
class InterpolationOptions:
    """Formatting options for interpolated values.

    Attributes:
        locale: Locale used for date and number formatting.
        escape_html: Escape ``& < > " '`` in substituted values.
        date_format: Date style keyword (short, medium, long, full).
        number_format: Number pattern passed to Babel (e.g. ``#,##0.00``).
    """

    locale: str = "en"
    escape_html: bool = False
    date_format: Optional[str] = None
    number_format: Optional[str] = None


def escape_html(text: str) -> str:
    return "".join(_HTML_ESCAPES.get(char, char) for char in text)


def _format_date(value: date, options: InterpolationOptions) -> str:
    if options.date_format not in DATE_STYLES:
        return str(value)
    if isinstance(value, datetime):
        return format_datetime(value, format=options.date_format, locale=options.locale)
    return format_date(value, format=options.date_format, locale=options.locale)


def _format_number(value: Any, options: InterpolationOptions) -> str:
    return format_decimal(value, format=options.number_format, locale=options.locale)


def format_value(value: Any, options: InterpolationOptions) -> str:
    """Stringify one variable value for insertion.

    Unknown locales and unusable format options fall back to ``str(value)``.
    """
    try:
        if isinstance(value, date) and options.date_format:
            return _format_date(value, options)
        if (
            isinstance(value, (int, float, Decimal))
            and not isinstance(value, bool)
            and options.number_format
        ):
            return _format_number(value, options)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.debug("interpolation_format_skipped", locale=options.locale, error=str(e))
    return str(value)


def interpolate(
    template: str,
    variables: Optional[Mapping[str, Any]],
    options: Optional[InterpolationOptions] = None,
) -> str:
    """Substitute ``{{name}}`` placeholders with variable values.

    Placeholders without a matching variable stay in the output literally.

    Args:
        template: Translation string with placeholders.
        variables: Values by placeholder name.
        options: Formatting options.

    Returns:
        Interpolated string.
    """
    if not variables:
        return template

    options = options or InterpolationOptions()
    result = template
    for name, value in variables.items():
        formatted = format_value(value, options)
        if options.escape_html:
            formatted = escape_html(formatted)
        pattern = re.compile(r"{{\s*" + re.escape(str(name)) + r"\s*}}")
        result = pattern.sub(lambda _match: formatted, result)
    return result


def extract_variables(text: str) -> List[str]:
    """List the unique placeholder names of a string in order of appearance."""
    names: Dict[str, None] = {}
    for match in VARIABLE_PATTERN.finditer(text):
        names[match.group(1).strip()] = None
    return list(names)
