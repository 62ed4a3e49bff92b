"""HTML normalization with BeautifulSoup.

Block-level elements go on their own lines and are indented. Text and
inline elements stay together as a run, which is wrapped at the print
width only where the source already had whitespace, so the rendered page
does not change. Preformatted elements are emitted verbatim.
"""

from __future__ import annotations

import re
from typing import Iterable, List

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.element import Comment, NavigableString, PageElement, PreformattedString, Tag

from ..config import StyleConfig
from ..models import FileKind
from .base import Normalizer

INLINE_TAGS = frozenset(
    {
        "a", "abbr", "b", "bdi", "bdo", "br", "button", "cite", "code", "data", "dfn",
        "em", "i", "img", "input", "kbd", "label", "mark", "output", "q", "s", "samp",
        "select", "option", "small", "span", "strong", "sub", "sup", "time", "u", "var",
        "wbr",
    }
)
PREFORMATTED_TAGS = frozenset({"pre", "script", "style", "textarea"})

# Stands in for collapsible whitespace while a run is rendered.
_BREAK = "\x00"
_WHITESPACE = re.compile(r"\s+")


class MarkupNormalizer(Normalizer):
    kind = FileKind.MARKUP

    def __init__(self, style: StyleConfig | None = None) -> None:
        self.style = style or StyleConfig()

    def normalize(self, text: str, *, path: str) -> str:
        soup = BeautifulSoup(text, "html.parser")
        lines: List[str] = []
        self._children(soup.contents, 0, lines)
        return "\n".join(lines) + "\n" if lines else ""

    def _children(self, nodes: Iterable[PageElement], depth: int, lines: List[str]) -> None:
        run: List[PageElement] = []
        for node in nodes:
            if _is_inline(node):
                run.append(node)
                continue
            self._flush(run, depth, lines)
            run = []
            if isinstance(node, Tag):
                self._block(node, depth, lines)
            else:
                lines.append(self._indent(depth) + node.output_ready().strip())
        self._flush(run, depth, lines)

    def _block(self, tag: Tag, depth: int, lines: List[str]) -> None:
        indent = self._indent(depth)
        opening = _opening_tag(tag)
        if tag.name in PREFORMATTED_TAGS:
            lines.append(indent + opening + tag.decode_contents() + f"</{tag.name}>")
            return
        if tag.is_empty_element:
            lines.append(indent + opening)
            return

        closing = f"</{tag.name}>"
        if all(_is_inline(child) for child in tag.contents):
            line = indent + opening + " ".join(_words(tag.contents)) + closing
            if len(line) <= self.style.print_width:
                lines.append(line)
                return
        lines.append(indent + opening)
        self._children(tag.contents, depth + 1, lines)
        lines.append(indent + closing)

    def _flush(self, run: List[PageElement], depth: int, lines: List[str]) -> None:
        indent = self._indent(depth)
        current = ""
        for word in _words(run):
            candidate = f"{current} {word}" if current else word
            if current and len(indent) + len(candidate) > self.style.print_width:
                lines.append(indent + current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(indent + current)

    def _indent(self, depth: int) -> str:
        return " " * (self.style.indent_size * depth)


def _is_inline(node: PageElement) -> bool:
    if isinstance(node, Tag):
        return node.name in INLINE_TAGS
    if isinstance(node, PreformattedString):
        return isinstance(node, Comment)
    return True


def _words(nodes: Iterable[PageElement]) -> List[str]:
    """Split a run into the pieces that may be separated by a line break."""
    rendered = "".join(_render_inline(node) for node in nodes)
    return [word for word in rendered.split(_BREAK) if word]


def _render_inline(node: PageElement) -> str:
    if isinstance(node, PreformattedString):
        return node.output_ready().strip()
    if isinstance(node, NavigableString):
        return _WHITESPACE.sub(_BREAK, EntitySubstitution.substitute_xml(str(node)))
    opening = _opening_tag(node)
    if node.name in PREFORMATTED_TAGS:
        return opening + node.decode_contents() + f"</{node.name}>"
    if node.is_empty_element:
        return opening
    inner = "".join(_render_inline(child) for child in node.contents)
    return f"{opening}{inner}</{node.name}>"


def _opening_tag(tag: Tag) -> str:
    parts = [tag.name]
    for name, value in tag.attrs.items():
        if value is None:
            parts.append(name)
            continue
        if isinstance(value, list):
            value = " ".join(value)
        parts.append(f"{name}={EntitySubstitution.substitute_xml(value, True)}")
    return "<" + " ".join(parts) + ">"


__all__ = ["INLINE_TAGS", "MarkupNormalizer", "PREFORMATTED_TAGS"]
