"""Tests for infrastructure.i18n.interpolation module."""

from datetime import date, datetime
from unittest.mock import patch

import pytest

from infrastructure.i18n.interpolation import (
    InterpolationOptions,
    escape_html,
    extract_variables,
    format_value,
    interpolate,
)

pytestmark = pytest.mark.unit


class TestInterpolate:
    """Tests for placeholder substitution."""

    def test_basic_substitution(self):
        assert interpolate("Hello {{name}}", {"name": "World"}) == "Hello World"

    def test_whitespace_inside_braces(self):
        assert interpolate("Hello {{  name }}", {"name": "World"}) == "Hello World"

    def test_missing_variable_left_literal(self):
        assert interpolate("{{missing}}", {}) == "{{missing}}"
        assert interpolate("{{missing}} {{name}}", {"name": "A"}) == "{{missing}} A"

    def test_repeated_placeholder(self):
        assert interpolate("{{x}}-{{x}}", {"x": 1}) == "1-1"

    def test_no_variables_returns_template(self):
        assert interpolate("Hi {{name}}", None) == "Hi {{name}}"

    def test_numbers_stringified_without_format(self):
        assert interpolate("{{count}} items", {"count": 3}) == "3 items"

    def test_regex_special_characters_in_name(self):
        assert interpolate("{{a.b}}", {"a.b": "ok"}) == "ok"

    def test_backslashes_in_value_are_literal(self):
        assert interpolate("path {{p}}", {"p": r"C:\new"}) == r"path C:\new"

    def test_escape_html_after_formatting(self):
        result = interpolate(
            "<b>{{name}}</b>",
            {"name": "<script>&\"'"},
            InterpolationOptions(escape_html=True),
        )
        assert result == "<b>&lt;script&gt;&amp;&quot;&#39;</b>"

    def test_escape_html_off_by_default(self):
        assert interpolate("{{v}}", {"v": "<i>"}) == "<i>"

    def test_number_format_uses_locale(self):
        options = InterpolationOptions(locale="en", number_format="#,##0.00")
        assert interpolate("{{n}}", {"n": 1234.5}, options) == "1,234.50"

    def test_number_format_german_separators(self):
        options = InterpolationOptions(locale="de", number_format="#,##0.00")
        assert interpolate("{{n}}", {"n": 1234.5}, options) == "1.234,50"

    def test_date_style(self):
        options = InterpolationOptions(locale="en", date_format="long")
        assert interpolate("{{d}}", {"d": date(2024, 1, 15)}, options) == "January 15, 2024"

    def test_date_without_style_uses_str(self):
        assert interpolate("{{d}}", {"d": date(2024, 1, 15)}) == "2024-01-15"

    def test_unknown_date_style_falls_back(self):
        options = InterpolationOptions(date_format="weird")
        assert interpolate("{{d}}", {"d": date(2024, 1, 15)}, options) == "2024-01-15"


class TestFormatValue:
    """Tests for value formatting fallbacks."""

    def test_unknown_locale_falls_back_to_str(self):
        options = InterpolationOptions(locale="zz_ZZ", number_format="#,##0")
        assert format_value(1000, options) == "1000"

    def test_booleans_not_number_formatted(self):
        options = InterpolationOptions(number_format="#,##0.00")
        assert format_value(True, options) == "True"

    def test_datetime_uses_datetime_formatter(self):
        options = InterpolationOptions(locale="en", date_format="short")
        with patch(
            "infrastructure.i18n.interpolation.format_datetime", return_value="formatted"
        ) as mock_format:
            assert format_value(datetime(2024, 1, 15, 10, 30), options) == "formatted"
        mock_format.assert_called_once()


class TestHelpers:
    def test_escape_html(self):
        assert escape_html("a & b < c") == "a &amp; b &lt; c"

    def test_extract_variables_unique_in_order(self):
        assert extract_variables("{{ b }} {{a}} {{b}}") == ["b", "a"]

    def test_extract_variables_none(self):
        assert extract_variables("plain text") == []
