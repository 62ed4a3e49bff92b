"""JavaScript passes built on the tree-sitter grammar."""

from .commas import TrailingCommas
from .fixer import LintMessage, LintReport, ScriptFixer
from .params import DeadParameterEliminator, FunctionScope

__all__ = [
    "DeadParameterEliminator",
    "FunctionScope",
    "LintMessage",
    "LintReport",
    "ScriptFixer",
    "TrailingCommas",
]
