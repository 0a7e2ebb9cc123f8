"""Logging setup for the snapshot and cleanup commands.

Progress records (DEBUG and INFO) are the command's normal output and go to
stdout next to the artifact report. Warnings and errors, such as a file that
could not be read or a directory that could not be listed, go to stderr.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

_LOGGER_NAME = "codesnap"
_CONSOLE_FORMAT = "[codesnap] %(levelname)s %(message)s"


class _BelowLevel(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the codesnap hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    progress_stream: TextIO | None = None,
    error_stream: TextIO | None = None,
) -> logging.Logger:
    """Route progress to ``progress_stream`` and warnings to ``error_stream``.

    The streams default to the current ``sys.stdout`` and ``sys.stderr``.
    An optional ``log_file`` receives every record at the active level.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Both commands may run in one process; drop handlers from a previous call.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_CONSOLE_FORMAT)

    progress_handler = logging.StreamHandler(progress_stream or sys.stdout)
    progress_handler.setLevel(level)
    progress_handler.addFilter(_BelowLevel(logging.WARNING))
    progress_handler.setFormatter(formatter)
    logger.addHandler(progress_handler)

    error_handler = logging.StreamHandler(error_stream or sys.stderr)
    error_handler.setLevel(logging.WARNING)
    error_handler.setFormatter(formatter)
    logger.addHandler(error_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
