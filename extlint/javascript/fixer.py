"""Autofix pass enforcing the house script style."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from tree_sitter import Node

from ..config import StyleConfig
from ..logging import get_logger
from ..syntax import COMMENT_TYPES, Edit, ParsedSource, SourceParser, apply_edits, walk

_SEMICOLON_STATEMENTS = frozenset(
    {
        "expression_statement",
        "variable_declaration",
        "lexical_declaration",
        "return_statement",
        "throw_statement",
        "break_statement",
        "continue_statement",
        "debugger_statement",
        "do_statement",
        "import_statement",
        "export_statement",
        "field_definition",
    }
)

_LOOP_STATEMENTS = frozenset({"for_statement", "for_in_statement"})

_CURLY_BODIES = {
    "if_statement": ("consequence",),
    "for_statement": ("body",),
    "for_in_statement": ("body",),
    "while_statement": ("body",),
    "do_statement": ("body",),
}

_CASE_DECLARATIONS = frozenset(
    {
        "lexical_declaration",
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
    }
)

_EXPORTED_DEFINITIONS = frozenset(
    {"function_expression", "function", "generator_function", "class", "arrow_function"}
)


@dataclass
class LintMessage:
    """One rule violation found in a script."""

    rule: str
    line: int
    column: int
    message: str
    fixed: bool


@dataclass
class LintReport:
    """Messages for one script and the fixed output, when any fix applied."""

    path: Optional[str]
    messages: List[LintMessage] = field(default_factory=list)
    output: Optional[str] = None

    @property
    def unfixed(self) -> List[LintMessage]:
        return [message for message in self.messages if not message.fixed]


class ScriptFixer:
    """Applies the quotes, semi and curly rules and reports case declarations."""

    language = "javascript"

    def __init__(self, style: StyleConfig | None = None, parser: SourceParser | None = None) -> None:
        self.style = style or StyleConfig()
        self._parser = parser or SourceParser()
        self.logger = get_logger("javascript.fixer")

    def fix(self, source: str, path: str | None = None) -> Optional[str]:
        """Return the fixed source, or None when nothing could be fixed."""
        report = self.lint(source, path)
        for message in report.unfixed:
            self.logger.warning(
                "%s:%d:%d %s (%s)",
                path or "<script>",
                message.line,
                message.column,
                message.message,
                message.rule,
            )
        return report.output

    def lint(self, source: str, path: str | None = None) -> LintReport:
        report = LintReport(path=path)
        parsed = self._parser.try_parse(source, self.language)
        if parsed is None:
            self.logger.debug("Skipping fixes for %s: source does not parse", path or "<script>")
            return report

        edits: List[Edit] = []
        # Semicolons first so they land inside any braces added at the same offset.
        if self.style.semicolons:
            edits.extend(self._semicolon_edits(parsed, report))
        edits.extend(self._curly_edits(parsed, report))
        edits.extend(self._quote_edits(parsed, report))
        self._check_case_declarations(parsed, report)

        if edits:
            report.output = apply_edits(parsed.source, edits).decode("utf-8")
        return report

    def _semicolon_edits(self, parsed: ParsedSource, report: LintReport) -> List[Edit]:
        edits: List[Edit] = []
        for node in walk(parsed.root):
            if node.type not in _SEMICOLON_STATEMENTS:
                continue
            offset = _missing_semicolon_offset(node)
            if offset is None:
                continue
            _record(report, "semi", node, "Missing semicolon.", end=True)
            edits.append(Edit(offset, offset, b";"))
        return edits

    def _curly_edits(self, parsed: ParsedSource, report: LintReport) -> List[Edit]:
        edits: List[Edit] = []
        for node in walk(parsed.root):
            bodies: List[Node] = []
            for field_name in _CURLY_BODIES.get(node.type, ()):
                body = node.child_by_field_name(field_name)
                if body is not None:
                    bodies.append(body)
            if node.type == "else_clause":
                statements = [
                    child for child in node.named_children if child.type not in COMMENT_TYPES
                ]
                body = statements[0] if statements else None
                if body is not None and body.type != "if_statement":
                    bodies.append(body)
            for body in bodies:
                if body.type == "statement_block":
                    continue
                _record(report, "curly", node, f"Expected {{ after '{_keyword(node)}'.")
                edits.append(Edit(body.start_byte, body.start_byte, b"{ "))
                edits.append(Edit(body.end_byte, body.end_byte, b" }"))
        return edits

    def _quote_edits(self, parsed: ParsedSource, report: LintReport) -> List[Edit]:
        quote = '"' if self.style.quotes == "double" else "'"
        edits: List[Edit] = []
        for node in walk(parsed.root):
            if node.type != "string":
                continue
            raw = parsed.text(node)
            if len(raw) < 2 or raw[0] == quote:
                continue
            label = "doublequote" if quote == '"' else "singlequote"
            _record(report, "quotes", node, f"Strings must use {label}.")
            edits.append(Edit(node.start_byte, node.end_byte, requote(raw, quote).encode("utf-8")))
        return edits

    def _check_case_declarations(self, parsed: ParsedSource, report: LintReport) -> None:
        for node in walk(parsed.root):
            if node.type not in {"switch_case", "switch_default"}:
                continue
            for child in node.named_children:
                if child.type in _CASE_DECLARATIONS:
                    report.messages.append(
                        LintMessage(
                            rule="no-case-declarations",
                            line=child.start_point[0] + 1,
                            column=child.start_point[1] + 1,
                            message="Unexpected lexical declaration in case block.",
                            fixed=False,
                        )
                    )


def requote(raw: str, quote: str) -> str:
    """Rewrite a quoted string literal to use ``quote`` as its delimiter."""
    other = "'" if quote == '"' else '"'
    body = raw[1:-1]
    out: List[str] = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\" and index + 1 < len(body):
            following = body[index + 1]
            out.append(following if following == other else char + following)
            index += 2
            continue
        out.append("\\" + char if char == quote else char)
        index += 1
    return quote + "".join(out) + quote


def _missing_semicolon_offset(node: Node) -> Optional[int]:
    """Return where a terminating semicolon belongs, or None if it is present."""
    parent = node.parent
    if parent is not None and parent.type in _LOOP_STATEMENTS:
        body = parent.child_by_field_name("body")
        if body is None or body != node:
            return None
    if node.type == "export_statement":
        if node.child_by_field_name("declaration") is not None:
            return None
        value = node.child_by_field_name("value")
        if value is not None and value.type in _EXPORTED_DEFINITIONS:
            return None
    tokens = [child for child in node.children if child.type not in COMMENT_TYPES]
    if not tokens:
        return None
    last = tokens[-1]
    if last.type == ";":
        return None
    if node.type == "field_definition":
        # A class field's semicolon belongs to the class body.
        following = node.next_sibling
        while following is not None and following.type in COMMENT_TYPES:
            following = following.next_sibling
        if following is not None and following.type == ";":
            return None
    return last.end_byte


def _keyword(node: Node) -> str:
    if node.type == "else_clause":
        return "else"
    if node.type == "for_in_statement":
        return "for"
    return node.type.split("_", 1)[0]


def _record(report: LintReport, rule: str, node: Node, message: str, *, end: bool = False) -> None:
    row, column = node.end_point if end else node.start_point
    report.messages.append(
        LintMessage(rule=rule, line=row + 1, column=column + 1, message=message, fixed=True)
    )


__all__ = ["LintMessage", "LintReport", "ScriptFixer", "requote"]
