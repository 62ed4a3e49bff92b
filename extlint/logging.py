"""Logging for extlint runs.

Records emitted while a single archive entry is processed carry that
entry's relative path in a ``file`` attribute, so the log file sink can
show which file every line belongs to. Records without one show ``-``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping, Tuple

_LOGGER_NAME = "extlint"
_NO_FILE = "-"

CONSOLE_FORMAT = "[extlint] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(file)s]: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the extlint hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class FileLogAdapter(logging.LoggerAdapter):
    """Tags every record with the archive entry being processed."""

    def __init__(self, logger: logging.Logger, relative_path: str) -> None:
        super().__init__(logger, {"file": relative_path})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def file_logger(logger: logging.Logger, relative_path: str) -> FileLogAdapter:
    return FileLogAdapter(logger, relative_path)


class _FileFieldFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "file"):
            record.file = _NO_FILE
        return True


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach the console handler and, when ``log_file`` is set, a per-file tagged sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # main() may run more than once in a process; keep a single set of handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.addFilter(_FileFieldFilter())
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["FileLogAdapter", "configure_logging", "file_logger", "get_logger"]
