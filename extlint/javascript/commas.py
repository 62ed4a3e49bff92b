"""Trailing commas for multi-line literals, in the "es5" style."""

from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from ..config import TRAILING_COMMA_STYLES
from ..logging import get_logger
from ..syntax import COMMENT_TYPES, Edit, ParsedSource, SourceParser, apply_edits, walk

# Parameter lists, call arguments and destructuring patterns are left alone.
_LIST_TYPES = frozenset({"object", "array", "named_imports", "export_clause"})


class TrailingCommas:
    """Adds a comma after the last element of multi-line object/array literals."""

    language = "javascript"

    def __init__(self, parser: SourceParser | None = None, *, style: str = "es5") -> None:
        if style not in TRAILING_COMMA_STYLES:
            raise ValueError(f"Unknown trailing comma style: {style}")
        self._parser = parser or SourceParser()
        self.style = style
        self.logger = get_logger("javascript.commas")

    def apply(self, source: str, path: str | None = None) -> str:
        if self.style == "none":
            return source
        parsed = self._parser.try_parse(source, self.language)
        if parsed is None:
            self.logger.debug(
                "Skipping trailing commas for %s: source does not parse", path or "<script>"
            )
            return source
        edits = trailing_comma_edits(parsed)
        if not edits:
            return source
        return apply_edits(parsed.source, edits).decode("utf-8")


def trailing_comma_edits(parsed: ParsedSource) -> List[Edit]:
    edits: List[Edit] = []
    for node in walk(parsed.root):
        if node.type not in _LIST_TYPES:
            continue
        offset = _missing_comma_offset(parsed, node)
        if offset is not None:
            edits.append(Edit(offset, offset, b","))
    return edits


def _missing_comma_offset(parsed: ParsedSource, node: Node) -> Optional[int]:
    """Return where the trailing comma goes, or None when none is wanted."""
    if node.start_point[0] == node.end_point[0]:
        return None
    tokens = [child for child in node.children if child.type not in COMMENT_TYPES]
    if len(tokens) < 3:
        return None
    closing, last = tokens[-1], tokens[-2]
    if closing.type not in {"}", "]"} or last.type == ",":
        return None
    # The closing bracket must open its own line.
    line_start = parsed.source.rfind(b"\n", 0, closing.start_byte) + 1
    if parsed.source[line_start : closing.start_byte].strip():
        return None
    return last.end_byte


__all__ = ["TrailingCommas", "trailing_comma_edits"]
