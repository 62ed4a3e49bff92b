"""Tests for the per-type normalizers."""

from __future__ import annotations

from pathlib import Path

import pytest

from extlint.config import ExtLintConfig, ParameterConfig, StyleConfig
from extlint.errors import ParseError
from extlint.models import FileKind
from extlint.normalizers import (
    MarkupNormalizer,
    ScriptNormalizer,
    StructuredDataNormalizer,
    StylesheetNormalizer,
    build_normalizers,
)


def test_structured_data_round_trip_from_relaxed_syntax() -> None:
    result = StructuredDataNormalizer().normalize(
        '{ "a": 1, "b": [1,2,3], } // trailing', path="manifest.json"
    )
    assert result == '{\n  "a": 1,\n  "b": [\n    1,\n    2,\n    3\n  ]\n}'


def test_structured_data_keeps_non_ascii_text() -> None:
    result = StructuredDataNormalizer().normalize("{name: 'café'}", path="_locales/fr.json")
    assert result == '{\n  "name": "café"\n}'


def test_structured_data_rejects_invalid_input() -> None:
    with pytest.raises(ParseError) as excinfo:
        StructuredDataNormalizer().normalize('{ "a": }', path="broken.json")
    assert "broken.json" in str(excinfo.value)


def test_stylesheet_comments_are_stripped() -> None:
    result = StylesheetNormalizer().normalize(
        ".a { color: red; } /* note */ .b { color: blue; }", path="style.css"
    )
    assert "note" not in result
    assert "/*" not in result
    assert ".a {" in result
    assert "color: red;" in result
    assert ".b {" in result
    assert "color: blue;" in result


def test_stylesheet_normalizer_is_idempotent() -> None:
    normalizer = StylesheetNormalizer()
    once = normalizer.normalize("a{color:red}/* x */\nb , i{margin:0 auto}", path="a.css")
    assert normalizer.normalize(once, path="a.css") == once


def test_stylesheet_syntax_errors_raise_parse_error() -> None:
    with pytest.raises(ParseError):
        StylesheetNormalizer().normalize(".a { color: red; ", path="broken.css")


def test_markup_normalizer_formats_html() -> None:
    normalizer = MarkupNormalizer()
    once = normalizer.normalize(
        "<html><body><p class='x'>Hi</p></body></html>", path="popup.html"
    )
    assert '<p class="x">' in once
    assert "\n  <body>" in once
    assert normalizer.normalize(once, path="popup.html") == once


def test_script_normalizer_chain() -> None:
    normalizer = ScriptNormalizer()
    source = (
        "// banner\n"
        "function greet(event, name) {\n"
        "  if (name) return 'Hello ' + name\n"
        "}\n"
    )
    result = normalizer.normalize(source, path="background.js")

    assert "banner" not in result
    assert "function greet(name)" in result
    assert '"Hello "' in result
    assert "'" not in result
    assert "{" in result.split("if (name)", 1)[1]
    assert result.endswith("\n")


def test_script_normalizer_is_idempotent() -> None:
    normalizer = ScriptNormalizer()
    source = "const add = (a, b) => a + b\nfunction run(cb, unused) { return cb(add(1, 2)); }\n"
    once = normalizer.normalize(source, path="content.js")
    assert normalizer.normalize(once, path="content.js") == once


def test_script_normalizer_propagates_parse_errors() -> None:
    with pytest.raises(ParseError):
        ScriptNormalizer().normalize("function (", path="bad.js")


def test_build_normalizers_covers_every_recognized_kind(tmp_path: Path) -> None:
    config = ExtLintConfig(root=tmp_path, parameters=ParameterConfig(removal="trailing"))
    normalizers = build_normalizers(config)

    assert set(normalizers) == {
        FileKind.SCRIPT,
        FileKind.STRUCTURED_DATA,
        FileKind.MARKUP,
        FileKind.STYLESHEET,
    }
    for kind, normalizer in normalizers.items():
        assert normalizer.kind is kind

    script = normalizers[FileKind.SCRIPT]
    assert isinstance(script, ScriptNormalizer)
    assert script.eliminator.policy == "trailing"


def test_script_normalizer_adds_es5_trailing_commas() -> None:
    normalizer = ScriptNormalizer()
    source = "const o = {\n  alpha: 1,\n  beta: 2\n};\nconst a = [\n  1,\n  2\n];\n"
    once = normalizer.normalize(source, path="options.js")

    assert "beta: 2," in once
    assert "2,\n]" in once
    assert normalizer.normalize(once, path="options.js") == once


def test_script_normalizer_honours_trailing_comma_none() -> None:
    normalizer = ScriptNormalizer(StyleConfig(trailing_comma="none"))
    once = normalizer.normalize("const o = {\n  alpha: 1\n};\n", path="options.js")
    assert "alpha: 1," not in once


def test_markup_normalizer_keeps_inline_content_together() -> None:
    result = MarkupNormalizer().normalize("<p>Hello <b>world</b>!</p>", path="popup.html")
    assert result == "<p>Hello <b>world</b>!</p>\n"
    assert "world</b>!" in result


def test_markup_normalizer_breaks_around_block_elements() -> None:
    result = MarkupNormalizer().normalize(
        "<div><h1>Title</h1><p>Text with <a href='#'>a link</a>.</p></div>", path="popup.html"
    )
    assert result == (
        "<div>\n"
        "  <h1>Title</h1>\n"
        '  <p>Text with <a href="#">a link</a>.</p>\n'
        "</div>\n"
    )


def test_markup_normalizer_wraps_text_at_print_width() -> None:
    normalizer = MarkupNormalizer(StyleConfig(print_width=30))
    source = "<p>" + " ".join(["lorem ipsum dolor"] * 5) + " <em>sit amet</em></p>"
    once = normalizer.normalize(source, path="options.html")

    lines = once.splitlines()
    assert lines[0] == "<p>"
    assert lines[-1] == "</p>"
    assert all(len(line) <= 30 for line in lines)
    assert "<em>sit amet</em>" in once.replace("\n  ", " ")
    assert normalizer.normalize(once, path="options.html") == once


def test_markup_normalizer_keeps_preformatted_content() -> None:
    source = "<div><pre>  a\n    b</pre><script>if (a < b) {\n  go();\n}</script></div>"
    result = MarkupNormalizer().normalize(source, path="popup.html")
    assert "<pre>  a\n    b</pre>" in result
    assert "<script>if (a < b) {\n  go();\n}</script>" in result


def test_markup_normalizer_keeps_doctype_and_void_elements() -> None:
    normalizer = MarkupNormalizer()
    once = normalizer.normalize(
        "<!DOCTYPE html><html><head><meta charset='utf-8'><title>T</title></head></html>",
        path="popup.html",
    )
    assert once == (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        '    <meta charset="utf-8">\n'
        "    <title>T</title>\n"
        "  </head>\n"
        "</html>\n"
    )
    assert normalizer.normalize(once, path="popup.html") == once
