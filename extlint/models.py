"""Core data models shared across extlint components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class FileKind(str, Enum):
    """Type tag assigned to every file found in an extracted archive."""

    SCRIPT = "script"
    STRUCTURED_DATA = "structured-data"
    MARKUP = "markup"
    STYLESHEET = "stylesheet"
    IGNORED = "ignored"


@dataclass
class SourceFile:
    """A single file being normalized, keyed by its path inside the archive."""

    relative_path: str
    path: Path
    kind: FileKind
    raw: bytes = b""
    text: str = ""


@dataclass
class FileOutcome:
    """Result of normalizing one file."""

    relative_path: str
    kind: FileKind
    ok: bool
    error: Optional[str] = None


@dataclass
class BatchReport:
    """Aggregated outcomes for one pass over an extracted tree."""

    outcomes: List[FileOutcome] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def normalized(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


@dataclass
class RunResult:
    """Summary of a full archive run."""

    archive: Path
    output: Path
    report: BatchReport
