"""Helper utilities for constructing extension archives in tests."""

from __future__ import annotations

import textwrap
import zipfile
from pathlib import Path
from typing import Mapping, Union

Content = Union[str, bytes]


class ArchiveBuilder:
    """Writes ``name -> contents`` entries into a throwaway zip file."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "input"
        self.root.mkdir()

    def build(self, files: Mapping[str, Content], name: str = "extension.zip") -> Path:
        archive_path = self.root / name
        with zipfile.ZipFile(archive_path, "w") as archive:
            for relative, content in files.items():
                if isinstance(content, str):
                    content = textwrap.dedent(content).lstrip("\n").encode("utf-8")
                archive.writestr(relative, content)
        return archive_path


__all__ = ["ArchiveBuilder"]
