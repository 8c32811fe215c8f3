"""Tests for infrastructure.i18n.codecs package."""

import csv

import pytest

from infrastructure.i18n.codecs import (
    CsvCodec,
    JsonCodec,
    PoCodec,
    XliffCodec,
    YamlCodec,
    flatten,
    get_codec,
)
from infrastructure.i18n.errors import FormatError, UnsupportedFormatError

pytestmark = pytest.mark.unit

FLAT = {"welcome": "Welcome", "nav.home": "Home", "count": "{{count}} items"}

TREE = {
    "en": {
        "common": {"welcome": "Welcome", "items": {"one": "1 item", "other": "many"}},
    },
    "fr": {},
}


class TestGetCodec:
    @pytest.mark.parametrize(
        "name,codec_class",
        [
            ("json", JsonCodec),
            ("csv", CsvCodec),
            ("xliff", XliffCodec),
            ("po", PoCodec),
            ("yaml", YamlCodec),
            ("JSON", JsonCodec),
        ],
    )
    def test_known_formats(self, name, codec_class):
        assert isinstance(get_codec(name), codec_class)

    def test_unknown_format(self):
        with pytest.raises(UnsupportedFormatError, match="Unsupported export format: xml"):
            get_codec("xml", "export")

    def test_unsupported_is_value_error(self):
        with pytest.raises(ValueError):
            get_codec("docx")


class TestJsonCodec:
    def test_round_trip(self):
        codec = JsonCodec()
        assert codec.parse(codec.serialize_entries(FLAT)) == FLAT

    def test_nested_objects_preserved(self):
        parsed = JsonCodec().parse('{"items": {"one": "1 item", "other": "{{count}} items"}}')
        assert parsed == {"items": {"one": "1 item", "other": "{{count}} items"}}

    def test_accepts_decoded_mapping(self):
        assert JsonCodec().parse({"a": "b"}) == {"a": "b"}

    def test_invalid_document(self):
        with pytest.raises(FormatError):
            JsonCodec().parse("{not json")

    def test_top_level_must_be_object(self):
        with pytest.raises(FormatError):
            JsonCodec().parse("[1, 2]")

    def test_serialize_indents(self):
        output = JsonCodec().serialize(TREE)
        assert output.startswith('{\n  "en": {\n    "common": {')
        assert '"fr": {}' in output


class TestYamlCodec:
    def test_round_trip(self):
        codec = YamlCodec()
        assert codec.parse(codec.serialize_entries(FLAT)) == FLAT

    def test_round_trip_keeps_scalar_looking_strings(self):
        codec = YamlCodec()
        entries = {"yes": "true", "num": "10", "nothing": "null"}
        assert codec.parse(codec.serialize_entries(entries)) == entries

    def test_flattens_nested_mappings(self):
        parsed = YamlCodec().parse("nav:\n  home: Home\n  about:\n    title: About\n")
        assert parsed == {"nav.home": "Home", "nav.about.title": "About"}

    def test_leaves_become_strings(self):
        parsed = YamlCodec().parse("count: 3\nenabled: true\nempty: null\nlist: [a, b]\n")
        assert parsed == {"count": "3", "enabled": "true", "empty": "null", "list": "a,b"}

    def test_empty_document(self):
        assert YamlCodec().parse("") == {}

    def test_invalid_document(self):
        with pytest.raises(FormatError):
            YamlCodec().parse("key: [unclosed")

    def test_scalar_document(self):
        with pytest.raises(FormatError):
            YamlCodec().parse("just a string")

    def test_serialize_tree(self):
        parsed = YamlCodec().parse(YamlCodec().serialize(TREE))
        assert parsed["en.common.welcome"] == "Welcome"
        assert parsed["en.common.items.one"] == "1 item"

    def test_flatten_helper(self):
        assert flatten({"a": {"b": {"c": 1}}}) == {"a.b.c": "1"}


class TestCsvCodec:
    def test_comma_and_quote_survive_round_trip(self):
        codec = CsvCodec()
        assert codec.parse(codec.serialize_entries({'a,b"c': "x"})) == {'a,b"c': "x"}

    def test_serialize_quotes_every_field(self):
        output = CsvCodec().serialize({"en": {"common": {"hi": 'say "hi"'}}})
        lines = output.split("\n")
        assert lines[0] == "key,value,locale,namespace"
        assert lines[1] == '"hi","say ""hi""","en","common"'

    def test_serialize_json_encodes_objects(self):
        output = CsvCodec().serialize({"en": {"common": {"items": {"one": "1"}}}})
        assert output.split("\n")[1] == '"items","{""one"":""1""}","en","common"'

    def test_header_detected(self):
        assert CsvCodec().parse("key,value\nhello,Hello\n") == {"hello": "Hello"}

    def test_no_header(self):
        assert CsvCodec().parse("hello,Hello\nbye,Bye") == {"hello": "Hello", "bye": "Bye"}

    def test_skips_blank_and_incomplete_rows(self):
        raw = "key,value\n\nonly_key\nempty,\n,novalue\nok,fine\n"
        assert CsvCodec().parse(raw) == {"ok": "fine"}

    def test_empty_input(self):
        assert CsvCodec().parse("") == {}

    def test_oversized_row_skipped_and_parsing_continues(self):
        oversized = "x" * (csv.field_size_limit() + 1)
        raw = f'key,value\na,A\nb,"{oversized}"\nc,C\n'
        assert CsvCodec().parse(raw) == {"a": "A", "c": "C"}


class TestXliffCodec:
    def test_round_trip(self):
        codec = XliffCodec()
        entries = {"welcome": "Bienvenue", "tos": "Terms & <conditions>"}
        assert codec.parse(codec.serialize_entries(entries, locale="fr")) == entries

    def test_serialize_layout(self):
        output = XliffCodec().serialize({"fr": {"common": {"hi": "Salut"}}})
        assert output.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<xliff version="1.2">')
        assert (
            '<file source-language="en" target-language="fr" datatype="plaintext">' in output
        )
        assert '<trans-unit id="hi">' in output
        assert "<source>hi</source>" in output
        assert "<target>Salut</target>" in output
        assert output.endswith("</xliff>")

    def test_parse_target_is_trimmed(self):
        raw = """
        <trans-unit id="a" approved="yes">
          <source>a</source>
          <target state="final">
             Value A
          </target>
        </trans-unit>
        """
        assert XliffCodec().parse(raw) == {"a": "Value A"}

    def test_units_without_target_are_ignored(self):
        raw = '<trans-unit id="a"><source>a</source></trans-unit>'
        assert XliffCodec().parse(raw) == {}

    @pytest.mark.parametrize("target", ["", "   ", "\n  \n"])
    def test_units_with_blank_target_are_ignored(self, target):
        raw = (
            f'<trans-unit id="a"><source>a</source><target>{target}</target></trans-unit>'
            '<trans-unit id="b"><source>b</source><target>B</target></trans-unit>'
        )
        assert XliffCodec().parse(raw) == {"b": "B"}

    def test_units_with_empty_id_are_ignored(self):
        raw = '<trans-unit id=""><source>a</source><target>A</target></trans-unit>'
        assert XliffCodec().parse(raw) == {}

    def test_custom_source_language(self):
        output = XliffCodec(source_language="de").serialize({"fr": {"common": {"a": "b"}}})
        assert 'source-language="de"' in output


class TestPoCodec:
    def test_parse_two_entries(self):
        raw = 'msgid "a"\nmsgstr "b"\n\nmsgid "c"\nmsgstr "d"'
        assert PoCodec().parse(raw) == {"a": "b", "c": "d"}

    def test_continuation_lines(self):
        raw = 'msgid ""\n"long."\n"key"\nmsgstr "Hello "\n"world"\n'
        assert PoCodec().parse(raw) == {"long.key": "Hello world"}

    def test_header_entry_skipped(self):
        raw = PoCodec().serialize({})
        assert PoCodec().parse(raw) == {}

    def test_empty_msgstr_skipped(self):
        raw = 'msgid "a"\nmsgstr ""\n\nmsgid "b"\nmsgstr "B"\n'
        assert PoCodec().parse(raw) == {"b": "B"}

    def test_comments_ignored(self):
        raw = '# comment\n#: file.py:1\nmsgid "a"\nmsgstr "b"\n'
        assert PoCodec().parse(raw) == {"a": "b"}

    def test_round_trip_with_escapes(self):
        codec = PoCodec()
        entries = {"quote": 'say "hi"', "lines": "one\ntwo", "slash": "a\\b"}
        assert codec.parse(codec.serialize_entries(entries)) == entries

    def test_serialize_layout(self):
        output = PoCodec().serialize({"en": {"common": {"a": "b"}}})

        assert output.startswith('# Translation file\nmsgid ""\nmsgstr ""\n')
        assert '"Content-Type: text/plain; charset=utf-8\\n"' in output
        assert 'msgid "a"\nmsgstr "b"\n' in output
        assert "msgctxt" not in output
        assert "#, fuzzy" not in output

    def test_serialize_keeps_groups_apart_with_context(self):
        tree = {"en": {"common": {"a": "A"}}, "fr": {"common": {"a": "Ah"}}}
        output = PoCodec().serialize(tree)

        assert 'msgctxt "en.common"\nmsgid "a"\nmsgstr "A"\n' in output
        assert 'msgctxt "fr.common"\nmsgid "a"\nmsgstr "Ah"\n' in output

    def test_context_lines_are_not_part_of_the_key(self):
        raw = 'msgctxt "en.common"\nmsgid "a"\nmsgstr "A"\n\nmsgctxt "x"\nmsgid "b"\nmsgstr "B"\n'
        assert PoCodec().parse(raw) == {"a": "A", "b": "B"}

    def test_long_values_wrap_and_round_trip(self):
        codec = PoCodec()
        entries = {"intro": " ".join(["word"] * 40)}
        output = codec.serialize_entries(entries)

        assert 'msgstr ""\n"word word' in output
        assert codec.parse(output) == entries
