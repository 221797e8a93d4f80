"""Tests for stylesheet loading and declaration lookup."""

import pytest

from webcollate.config import TEMPLATES_DIR
from webcollate.errors import ResourceError
from webcollate.stylesheet import Stylesheet, resolve_resource


def test_declarations_for_single_rule():
    sheet = Stylesheet.parse(".header-template { color: red }")
    assert sheet.declarations_for(".header-template") == "color: red"


def test_declarations_joined_across_rules_and_selector_lists():
    sheet = Stylesheet.parse(
        """
        /* comment */
        .footer-template, .other { font-size: 8pt; color: #777 }
        p { margin: 0 }
        .footer-template { text-align: center !important; }
        """
    )
    assert sheet.declarations_for(".footer-template") == (
        "font-size: 8pt;color: #777;text-align: center !important"
    )


def test_missing_selector_yields_empty_string():
    sheet = Stylesheet.parse("@page { size: A4 } body { margin: 0 }")
    assert sheet.declarations_for(".header-template") == ""


def test_selector_must_match_exactly():
    sheet = Stylesheet.parse(".header-template-extra { color: red } div .header-template { color: blue }")
    assert sheet.declarations_for(".header-template") == ""


def test_load_appends_extra_css(tmp_path):
    css_file = tmp_path / "custom.css"
    css_file.write_text("body { margin: 0 }", encoding="utf-8")

    sheet = Stylesheet.load(str(css_file), ".header-template { color: red }")

    assert sheet.text == "body { margin: 0 }.header-template { color: red }"
    assert sheet.declarations_for(".header-template") == "color: red"


def test_resolve_resource_falls_back_to_packaged_templates(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert resolve_resource(None, "default.css") == TEMPLATES_DIR / "default.css"

    local = tmp_path / "default.css"
    local.write_text("", encoding="utf-8")
    assert resolve_resource(None, "default.css").resolve() == local.resolve()


def test_default_stylesheet_styles_print_adornments():
    sheet = Stylesheet.load(None, default="default.css")
    assert "font-size: 8pt" in sheet.declarations_for(".header-template")
    assert "font-size: 8pt" in sheet.declarations_for(".footer-template")


def test_missing_stylesheet_raises_resource_error(tmp_path):
    with pytest.raises(ResourceError, match="missing.css"):
        Stylesheet.load(str(tmp_path / "missing.css"))
