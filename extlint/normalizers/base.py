"""Base classes for per-type normalizers."""

from abc import ABC, abstractmethod

from ..models import FileKind


class Normalizer(ABC):
    """Contract for text-to-text transforms applied to one file kind."""

    kind: FileKind

    @abstractmethod
    def normalize(self, text: str, *, path: str) -> str:
        """Return the canonical form of ``text``; raise ParseError on bad input."""
