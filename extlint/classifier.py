"""Maps archive entries to the normalizer responsible for them."""

from __future__ import annotations

from pathlib import PurePath
from typing import Dict, Mapping, Sequence

from .models import FileKind

DEFAULT_EXTENSIONS: Dict[str, FileKind] = {
    ".js": FileKind.SCRIPT,
    ".json": FileKind.STRUCTURED_DATA,
    ".html": FileKind.MARKUP,
    ".css": FileKind.STYLESHEET,
}


class FileClassifier:
    """Classifies files by case-insensitive extension."""

    def __init__(self, extra_extensions: Mapping[FileKind, Sequence[str]] | None = None) -> None:
        self._table = dict(DEFAULT_EXTENSIONS)
        for kind, suffixes in (extra_extensions or {}).items():
            for suffix in suffixes:
                # Defaults always win so configuration can only add suffixes.
                self._table.setdefault(suffix.lower(), kind)

    def classify(self, path: str | PurePath) -> FileKind:
        suffix = PurePath(path).suffix.lower()
        if not suffix:
            return FileKind.IGNORED
        return self._table.get(suffix, FileKind.IGNORED)


__all__ = ["DEFAULT_EXTENSIONS", "FileClassifier"]
