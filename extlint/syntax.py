"""Tree-sitter parsing and source editing helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from tree_sitter import Node, Parser, Tree
from tree_sitter_language_pack import get_parser

from .errors import ParseError

COMMENT_TYPES = frozenset({"comment", "html_comment", "js_comment"})


@dataclass
class ParsedSource:
    """A syntax tree together with the bytes it was parsed from."""

    tree: Tree
    source: bytes

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` with ``text``; ``start == end`` inserts."""

    start: int
    end: int
    text: bytes


class SourceParser:
    """Caches one tree-sitter parser per language."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def _get_parser(self, language: str) -> Parser:
        parser = self._parsers.get(language)
        if parser is None:
            parser = get_parser(language)  # type: ignore[arg-type]
            self._parsers[language] = parser
        return parser

    def parse(self, source: str | bytes, language: str, *, path: str | None = None) -> ParsedSource:
        """Parse ``source`` and raise :class:`ParseError` when the tree has errors."""
        data = source.encode("utf-8") if isinstance(source, str) else source
        tree = self._get_parser(language).parse(data)
        error = first_error(tree.root_node)
        if error is not None:
            line = error.start_point[0] + 1
            column = error.start_point[1] + 1
            label = f"{path}: " if path else ""
            problem = f"missing {error.type}" if error.is_missing else "unexpected input"
            raise ParseError(
                f"{label}{language} syntax error at line {line}, column {column} ({problem})",
                line=line,
                column=column,
            )
        return ParsedSource(tree=tree, source=data)

    def try_parse(self, source: str | bytes, language: str) -> Optional[ParsedSource]:
        try:
            return self.parse(source, language)
        except ParseError:
            return None


def walk(root: Node) -> Iterator[Node]:
    """Yield ``root`` and its descendants in document order without recursion."""
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def first_error(root: Node) -> Optional[Node]:
    if not root.has_error:
        return None
    for node in walk(root):
        if node.is_error or node.is_missing:
            return node
    return root


def comment_edits(parsed: ParsedSource, types: Iterable[str] = COMMENT_TYPES) -> List[Edit]:
    """Return edits that delete every comment node in ``parsed``."""
    wanted = frozenset(types)
    source = parsed.source
    edits: List[Edit] = []
    for node in walk(parsed.root):
        if node.type not in wanted:
            continue
        start, end = node.start_byte, node.end_byte
        body = source[start:end]
        if body.startswith(b"/*") and b"\n" in body:
            # Keeps automatic semicolon insertion behaving as before.
            replacement = b"\n"
        elif _is_word_byte(source, start - 1) and _is_word_byte(source, end):
            replacement = b" "
        else:
            replacement = b""
        edits.append(Edit(start, end, replacement))
    return edits


def apply_edits(source: bytes, edits: Iterable[Edit]) -> bytes:
    """Apply non-overlapping edits; an edit inside an earlier replacement is dropped.

    Insertions at the same offset keep the order they were produced in and are
    placed before a replacement starting at that offset.
    """
    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end > edit.start, -edit.end))
    chunks: List[bytes] = []
    cursor = 0
    for edit in ordered:
        if edit.start < cursor:
            continue
        chunks.append(source[cursor : edit.start])
        chunks.append(edit.text)
        cursor = max(cursor, edit.end)
    chunks.append(source[cursor:])
    return b"".join(chunks)


def _is_word_byte(source: bytes, index: int) -> bool:
    if index < 0 or index >= len(source):
        return False
    char = source[index]
    return chr(char).isalnum() or char in (ord("_"), ord("$")) or char >= 0x80


__all__ = [
    "COMMENT_TYPES",
    "Edit",
    "ParsedSource",
    "SourceParser",
    "apply_edits",
    "comment_edits",
    "first_error",
    "walk",
]
