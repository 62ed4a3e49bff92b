from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.archive_builder import ArchiveBuilder


@pytest.fixture
def archive_builder(tmp_path: Path) -> ArchiveBuilder:
    """Provide a reusable archive builder rooted at the pytest tmp_path."""
    return ArchiveBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_extlint_logger() -> Iterator[None]:
    """Undo CLI logging configuration so caplog sees extlint records."""
    yield
    logger = logging.getLogger("extlint")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
