"""Logging setup for the command line tool."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE_LOGGER = "jobfilter"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class LoggingState:
    level: int
    handlers: tuple[logging.Handler, ...]
    propagate: bool


def _level_for_verbosity(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(*, verbosity: int, log_file: Path | None = None) -> LoggingState:
    """
    Route ``jobfilter`` log records to stderr (and optionally a file).

    ``-v`` shows INFO, ``-vv`` shows DEBUG. The file, when given, always
    receives DEBUG records. Returns the previous state for ``restore_logging``.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    previous = LoggingState(
        level=logger.level, handlers=tuple(logger.handlers), propagate=logger.propagate
    )

    stderr_level = _level_for_verbosity(verbosity)
    stderr_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        level=stderr_level,
    )
    handlers: list[logging.Handler] = [stderr_handler]
    level = stderr_level

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)
        level = logging.DEBUG

    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = False
    return previous


def restore_logging(state: LoggingState) -> None:
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in logger.handlers:
        if handler not in state.handlers:
            handler.close()
    logger.handlers = list(state.handlers)
    logger.setLevel(state.level)
    logger.propagate = state.propagate
