"""Logging helpers shared across mdf_tools converters."""

from __future__ import annotations

import logging
import sys
from typing import IO, Mapping

__all__ = [
    "TRACE",
    "DEFAULT_VERBOSITY",
    "VERBOSITY_LEVELS",
    "configure_logger",
    "level_for_verbosity",
]

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

DEFAULT_VERBOSITY = 1

VERBOSITY_LEVELS: Mapping[int, int] = {
    0: logging.CRITICAL,
    1: logging.ERROR,
    2: logging.WARNING,
    3: logging.INFO,
    4: logging.DEBUG,
    5: TRACE,
}

_CONSOLE_FORMAT = "%(levelname)s %(message)s"


def level_for_verbosity(verbosity: int) -> int | None:
    """Return the logging threshold for ``verbosity`` or ``None`` if invalid."""

    return VERBOSITY_LEVELS.get(verbosity)


def configure_logger(
    name: str,
    *,
    verbosity: int = DEFAULT_VERBOSITY,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure and return a namespaced logger writing to ``stream``.

    The console handler is tagged so repeated calls (one per run, or one per
    test) reconfigure it in place instead of stacking duplicates.
    """

    level = level_for_verbosity(verbosity)
    if level is None:
        level = VERBOSITY_LEVELS[DEFAULT_VERBOSITY]

    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    handler = _ensure_console_handler(logger, stream)
    handler.setLevel(level)
    return logger


def _ensure_console_handler(
    logger: logging.Logger, stream: IO[str] | None
) -> logging.Handler:
    target = stream if stream is not None else sys.stderr
    for handler in logger.handlers:
        if getattr(handler, "_mdf_tools_console", False):
            # Swap without flushing; the previous stream may already be closed.
            handler.stream = target  # type: ignore[attr-defined]
            return handler
    console = logging.StreamHandler(stream=target)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    console._mdf_tools_console = True  # type: ignore[attr-defined]
    logger.addHandler(console)
    return console
