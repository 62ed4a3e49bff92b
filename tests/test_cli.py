"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from extlint.archive import read_entries
from extlint.cli import _build_parser, main


def test_cli_requires_an_archive_argument(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
    assert "archive" in capsys.readouterr().err


def test_cli_accepts_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["ext.zip", "--verbose", "--prefix", "clean_", "-c", "conf"])
    assert args.archive == "ext.zip"
    assert args.verbose is True
    assert args.prefix == "clean_"
    assert args.config == Path("conf")


def test_cli_reports_missing_archive(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing.zip"), "--config", str(tmp_path)])
    assert excinfo.value.code == 1
    assert "Archive not found" in capsys.readouterr().err


def test_cli_rejects_path_like_prefix(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "ext.zip"), "--config", str(tmp_path), "--prefix", "out/"])
    assert excinfo.value.code == 2


def test_cli_writes_linted_archive(archive_builder, tmp_path: Path, capsys) -> None:
    archive = archive_builder.build({"manifest.json": "{a: 1,}", "logo.svg": "<svg/>"})

    main([str(archive), "--config", str(tmp_path)])

    output = archive.with_name("linted_extension.zip")
    assert "Linted zip created:" in capsys.readouterr().out
    assert read_entries(output)["manifest.json"] == b'{\n  "a": 1\n}'
    assert read_entries(output)["logo.svg"] == b"<svg/>"


def test_cli_reports_invalid_config(tmp_path: Path, capsys) -> None:
    (tmp_path / ".extlint.yml").write_text("- not\n- a mapping\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "ext.zip"), "--config", str(tmp_path)])
    assert excinfo.value.code == 1
    assert "mapping" in capsys.readouterr().err
