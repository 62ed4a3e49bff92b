"""Dead-parameter elimination for JavaScript sources.

The pass parses a script, works out which declared parameters each function
actually references, drops the ones it never does, and re-emits the source
without comments. Parameters are removed regardless of their position unless
the ``trailing`` policy is selected, so callers relying on positional binding
should pick that policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Set

from tree_sitter import Node

from ..config import REMOVAL_POLICIES
from ..logging import get_logger
from ..syntax import COMMENT_TYPES, Edit, ParsedSource, SourceParser, apply_edits, comment_edits

FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

REFERENCE_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "private_property_identifier",
    }
)

_PATTERN_TYPES = frozenset(
    {
        "assignment_pattern",
        "object_assignment_pattern",
        "object_pattern",
        "array_pattern",
        "rest_pattern",
        "pair_pattern",
    }
)


@dataclass
class FunctionScope:
    """Parameters declared by one function and the names its body references."""

    node: Node
    params: List[Node]
    used: Set[str] = field(default_factory=set)


class DeadParameterEliminator:
    """Removes unreferenced parameters and strips comments from a script."""

    language = "javascript"

    def __init__(self, parser: SourceParser | None = None, *, policy: str = "any") -> None:
        if policy not in REMOVAL_POLICIES:
            raise ValueError(f"Unknown parameter removal policy: {policy}")
        self._parser = parser or SourceParser()
        self.policy = policy
        self.logger = get_logger("javascript.params")

    def eliminate(self, source: str, *, path: str | None = None) -> str:
        parsed = self._parser.parse(source, self.language, path=path)
        edits: List[Edit] = []
        if self.policy != "off":
            for scope in collect_scopes(parsed):
                edit = self._parameter_edit(parsed, scope)
                if edit is not None:
                    edits.append(edit)
        edits.extend(comment_edits(parsed))
        return apply_edits(parsed.source, edits).decode("utf-8")

    def kept_parameters(self, parsed: ParsedSource, scope: FunctionScope) -> List[Node]:
        removable = [
            param.type != "identifier" or parsed.text(param) not in scope.used
            for param in scope.params
        ]
        if self.policy == "trailing":
            keep_count = len(scope.params)
            while keep_count and removable[keep_count - 1]:
                keep_count -= 1
            return scope.params[:keep_count]
        return [param for param, drop in zip(scope.params, removable) if not drop]

    def _parameter_edit(self, parsed: ParsedSource, scope: FunctionScope) -> Optional[Edit]:
        kept = self.kept_parameters(parsed, scope)
        if len(kept) == len(scope.params):
            return None

        self.logger.debug(
            "Dropping %d unused parameter(s) from %s at line %d",
            len(scope.params) - len(kept),
            scope.node.type,
            scope.node.start_point[0] + 1,
        )
        param_list = scope.node.child_by_field_name("parameters")
        if param_list is None:
            # Bare arrow parameter: `x => 1` becomes `() => 1`.
            single = scope.params[0]
            return Edit(single.start_byte, single.end_byte, b"()")
        names = ", ".join(parsed.text(param) for param in kept)
        return Edit(param_list.start_byte, param_list.end_byte, f"({names})".encode("utf-8"))


def collect_scopes(parsed: ParsedSource) -> List[FunctionScope]:
    """Walk the tree once and return a scope per function, innermost first.

    A reference counts for every function enclosing it, so a parameter read
    only from a nested closure is still used by its owner.
    """
    finished: List[FunctionScope] = []
    active: List[FunctionScope] = []
    stack: List[tuple[Node, Optional[FunctionScope]]] = [(parsed.root, None)]
    while stack:
        node, closing = stack.pop()
        if closing is not None:
            active.pop()
            finished.append(closing)
            continue
        if node.type in FUNCTION_TYPES:
            scope = FunctionScope(node=node, params=declared_parameters(node))
            active.append(scope)
            stack.append((node, scope))
        elif node.type in REFERENCE_TYPES and active and not is_declaration(node):
            name = parsed.text(node)
            for scope in active:
                scope.used.add(name)
        for child in reversed(node.children):
            stack.append((child, None))
    return finished


def declared_parameters(function: Node) -> List[Node]:
    param_list = function.child_by_field_name("parameters")
    if param_list is None:
        single = function.child_by_field_name("parameter")
        return [single] if single is not None else []
    return [child for child in param_list.named_children if child.type not in COMMENT_TYPES]


def is_declaration(node: Node) -> bool:
    """Return True for function names and parameter bindings."""
    parent = node.parent
    if parent is None:
        return False
    if parent.type in FUNCTION_TYPES:
        for field_name in ("name", "parameter"):
            declared = parent.child_by_field_name(field_name)
            if declared is not None and declared == node:
                return True
        return False

    current = node
    while parent is not None:
        if parent.type == "formal_parameters":
            return True
        if parent.type not in _PATTERN_TYPES:
            return False
        if parent.type in {"assignment_pattern", "object_assignment_pattern"}:
            if current == parent.child_by_field_name("right"):
                return False
        elif parent.type == "pair_pattern" and current == parent.child_by_field_name("key"):
            return False
        current = parent
        parent = parent.parent
    return False


__all__ = [
    "DeadParameterEliminator",
    "FunctionScope",
    "collect_scopes",
    "declared_parameters",
    "is_declaration",
]
