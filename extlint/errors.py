"""Error hierarchy shared across the extlint pipeline."""

from __future__ import annotations


class ExtLintError(RuntimeError):
    """Base class for failures raised by extlint."""


class UsageError(ExtLintError):
    """Raised when the command line input cannot be used to start a run."""


class ArchiveError(ExtLintError):
    """Raised when an archive cannot be extracted or written."""


class ParseError(ExtLintError):
    """Raised when a file's content does not parse under its grammar."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class TransformError(ExtLintError):
    """Raised for any other failure inside a normalizer chain."""


__all__ = ["ArchiveError", "ExtLintError", "ParseError", "TransformError", "UsageError"]
