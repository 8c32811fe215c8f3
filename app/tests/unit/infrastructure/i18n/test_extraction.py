"""Tests for infrastructure.i18n.extraction module."""

import pytest

from infrastructure.i18n.extraction import extract_keys_from_text, generate_keys_from_source

pytestmark = pytest.mark.unit

SOURCE = """\
const a = 1;
// Page heading
title = t('home.title', 'Welcome home');
label = translate("nav.about")
/* Footer text */
footer = i18n(`footer.copy`) + t("home.title")
"""


class TestExtractKeysFromText:
    def test_finds_every_call(self):
        keys = extract_keys_from_text(SOURCE, "app.js")
        assert [k["key"] for k in keys] == [
            "home.title",
            "nav.about",
            "footer.copy",
            "home.title",
        ]

    def test_default_value_and_line(self):
        first = extract_keys_from_text(SOURCE, "app.js")[0]
        assert first == {
            "key": "home.title",
            "default_value": "Welcome home",
            "file": "app.js",
            "line": 3,
            "context": "Page heading",
        }

    def test_block_comment_context(self):
        footer = extract_keys_from_text(SOURCE, "app.js")[2]
        assert footer["context"] == "Footer text"

    def test_comments_can_be_ignored(self):
        keys = extract_keys_from_text(SOURCE, "app.js", extract_comments=False)
        assert all(k["context"] is None for k in keys)

    def test_no_default_value(self):
        about = extract_keys_from_text(SOURCE, "app.js")[1]
        assert about["default_value"] is None


class TestGenerateKeysFromSource:
    def test_deduplicates_keeping_first(self, tmp_path):
        first = tmp_path / "a.js"
        first.write_text(SOURCE, encoding="utf-8")
        second = tmp_path / "b.js"
        second.write_text("t('nav.about')\nt('extra.key')\n", encoding="utf-8")

        result = generate_keys_from_source([str(first), str(second)])

        assert [k["key"] for k in result["keys"]] == [
            "home.title",
            "nav.about",
            "footer.copy",
            "extra.key",
        ]
        assert result["keys"][1]["file"] == str(first)
        assert result["errors"] == []

    def test_unreadable_file_is_reported(self, tmp_path):
        missing = tmp_path / "missing.js"
        present = tmp_path / "ok.js"
        present.write_text("t('ok')", encoding="utf-8")

        result = generate_keys_from_source([str(missing), str(present)])

        assert [k["key"] for k in result["keys"]] == ["ok"]
        assert len(result["errors"]) == 1
        assert result["errors"][0].startswith(f"Failed to process file {missing}: ")

    def test_custom_pattern(self, tmp_path):
        path = tmp_path / "view.html"
        path.write_text('<span data-i18n="cart.total"></span>', encoding="utf-8")

        result = generate_keys_from_source([str(path)], key_pattern=r'data-i18n="([^"]+)"')

        assert [k["key"] for k in result["keys"]] == ["cart.total"]

    @pytest.mark.asyncio
    async def test_service_delegates(self, service, tmp_path):
        path = tmp_path / "a.py"
        path.write_text("t('svc.key')", encoding="utf-8")

        result = await service.generate_keys_from_source([str(path)])

        assert result["keys"][0]["key"] == "svc.key"
