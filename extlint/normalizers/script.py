"""Script normalization: dead parameters, autofix, then formatting."""

from __future__ import annotations

import jsbeautifier

from ..config import StyleConfig
from ..javascript import DeadParameterEliminator, ScriptFixer, TrailingCommas
from ..logging import get_logger
from ..models import FileKind
from .base import Normalizer


class ScriptNormalizer(Normalizer):
    """Runs the eliminator, the fixer, jsbeautifier and the trailing-comma pass."""

    kind = FileKind.SCRIPT

    def __init__(
        self,
        style: StyleConfig | None = None,
        eliminator: DeadParameterEliminator | None = None,
        fixer: ScriptFixer | None = None,
        commas: TrailingCommas | None = None,
    ) -> None:
        self.style = style or StyleConfig()
        self.eliminator = eliminator or DeadParameterEliminator()
        self.fixer = fixer or ScriptFixer(self.style)
        self.commas = commas or TrailingCommas(style=self.style.trailing_comma)
        self.logger = get_logger("normalizers.script")

    def normalize(self, text: str, *, path: str) -> str:
        code = self.eliminator.eliminate(text, path=path)
        fixed = self.fixer.fix(code, path)
        if fixed is None:
            self.logger.debug("No fixes produced for %s", path)
        else:
            code = fixed
        formatted = jsbeautifier.beautify(code, self._options())
        return self.commas.apply(formatted, path)

    def _options(self) -> jsbeautifier.BeautifierOptions:
        options = jsbeautifier.default_options()
        options.indent_size = self.style.indent_size
        options.indent_char = " "
        options.wrap_line_length = self.style.print_width
        options.end_with_newline = True
        return options
