"""Tests for extlint.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from extlint.config import ConfigError, ExtLintConfig, load_config
from extlint.models import FileKind


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ExtLintConfig)
    assert config.root == tmp_path.resolve()
    assert config.output_prefix == "linted_"
    assert config.style.print_width == 100
    assert config.style.indent_size == 2
    assert config.style.quotes == "double"
    assert config.style.semicolons is True
    assert config.parameters.removal == "any"
    assert config.extensions == {}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".extlint.yml"
    config_file.write_text(
        """
output_prefix: "clean_"
style:
  print_width: 80
  indent_size: 4
  quotes: single
  semicolons: false
  trailing_comma: none
parameters:
  removal: trailing
extensions:
  script: [".mjs", "cjs"]
  markup:
    - ".HTM"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.output_prefix == "clean_"
    assert config.style.print_width == 80
    assert config.style.indent_size == 4
    assert config.style.quotes == "single"
    assert config.style.semicolons is False
    assert config.style.trailing_comma == "none"
    assert config.parameters.removal == "trailing"
    assert config.extensions == {
        FileKind.SCRIPT: [".mjs", ".cjs"],
        FileKind.MARKUP: [".htm"],
    }


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".extlint.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).output_prefix == "linted_"


@pytest.mark.parametrize(
    "content",
    [
        "- a\n- b\n",
        "parameters:\n  removal: sometimes\n",
        "style:\n  quotes: backtick\n",
        "style:\n  trailing_comma: all\n",
        "style:\n  print_width: 0\n",
        "extensions:\n  images: ['.png']\n",
        "extensions:\n  ignored: ['.txt']\n",
        "output_prefix: 'dist/'\n",
        "style: [unclosed\n",
    ],
)
def test_load_config_rejects_invalid_settings(tmp_path: Path, content: str) -> None:
    (tmp_path / ".extlint.yml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
