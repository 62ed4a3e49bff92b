"""Structured-data normalization via a relaxed JSON5 parse."""

from __future__ import annotations

import json

import json5

from ..config import StyleConfig
from ..errors import ParseError
from ..models import FileKind
from .base import Normalizer


class StructuredDataNormalizer(Normalizer):
    """Accepts JSON5 input and emits strict, indented JSON."""

    kind = FileKind.STRUCTURED_DATA

    def __init__(self, style: StyleConfig | None = None) -> None:
        self.style = style or StyleConfig()

    def normalize(self, text: str, *, path: str) -> str:
        try:
            data = json5.loads(text)
        except ValueError as exc:
            raise ParseError(f"{path}: invalid JSON5: {exc}") from exc
        return json.dumps(data, indent=self.style.indent_size, ensure_ascii=False)
