"""Stylesheet normalization: comment stripping then formatting."""

from __future__ import annotations

import cssbeautifier

from ..config import StyleConfig
from ..models import FileKind
from ..syntax import SourceParser, apply_edits, comment_edits
from .base import Normalizer


class StylesheetNormalizer(Normalizer):
    """Removes every comment with tree-sitter, then runs cssbeautifier."""

    kind = FileKind.STYLESHEET
    language = "css"

    def __init__(self, style: StyleConfig | None = None, parser: SourceParser | None = None) -> None:
        self.style = style or StyleConfig()
        self._parser = parser or SourceParser()

    def strip_comments(self, text: str, *, path: str | None = None) -> str:
        parsed = self._parser.parse(text, self.language, path=path)
        return apply_edits(parsed.source, comment_edits(parsed)).decode("utf-8")

    def normalize(self, text: str, *, path: str) -> str:
        stripped = self.strip_comments(text, path=path)
        options = cssbeautifier.default_options()
        options.indent_size = self.style.indent_size
        options.indent_char = " "
        options.end_with_newline = True
        return cssbeautifier.beautify(stripped, options)
