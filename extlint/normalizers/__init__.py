"""Per-type normalizers and the registry the orchestrator dispatches on."""

from __future__ import annotations

from typing import Dict

from ..config import ExtLintConfig
from ..javascript import DeadParameterEliminator, ScriptFixer, TrailingCommas
from ..models import FileKind
from ..syntax import SourceParser
from .base import Normalizer
from .data import StructuredDataNormalizer
from .markup import MarkupNormalizer
from .script import ScriptNormalizer
from .stylesheet import StylesheetNormalizer


def build_normalizers(
    config: ExtLintConfig, parser: SourceParser | None = None
) -> Dict[FileKind, Normalizer]:
    """Return one shared normalizer per recognized file kind."""
    parser = parser or SourceParser()
    style = config.style
    return {
        FileKind.SCRIPT: ScriptNormalizer(
            style,
            eliminator=DeadParameterEliminator(parser, policy=config.parameters.removal),
            fixer=ScriptFixer(style, parser),
            commas=TrailingCommas(parser, style=style.trailing_comma),
        ),
        FileKind.STRUCTURED_DATA: StructuredDataNormalizer(style),
        FileKind.MARKUP: MarkupNormalizer(style),
        FileKind.STYLESHEET: StylesheetNormalizer(style, parser),
    }


__all__ = [
    "Normalizer",
    "MarkupNormalizer",
    "ScriptNormalizer",
    "StructuredDataNormalizer",
    "StylesheetNormalizer",
    "build_normalizers",
]
