"""Logging setup for applications embedding the dispatcher.

The library itself only creates module-level loggers under the
``gamecode_tools`` namespace. Applications call :func:`setup_logging` to attach
a handler; output goes to stderr because stdout carries protocol traffic when
serving over stdio.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import TextIO

LOGGER_NAME = "gamecode_tools"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_ATTR = "_gamecode_tools_handler"


class LogLevel(str, Enum):
    """Supported log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_string(cls, level: str) -> LogLevel:
        """Convert a case-insensitive level name.

        Raises:
            ValueError: If ``level`` is not a known level name.

        """
        try:
            return cls(level.upper())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Invalid log level '{level}'. Valid levels: {valid}"
            ) from None

    def to_logging_level(self) -> int:
        return logging.getLevelName(self.value)


def setup_logging(
    level: LogLevel | str = LogLevel.WARNING, stream: TextIO | None = None
) -> logging.Logger:
    """Configure the package logger.

    Calling this again replaces the handler installed by a previous call, so the
    level and stream can be changed without duplicating output.

    Args:
        level: Minimum level to emit.
        stream: Destination stream; defaults to ``sys.stderr``.

    Returns:
        The configured package logger.

    """
    if isinstance(level, str) and not isinstance(level, LogLevel):
        level = LogLevel.from_string(level)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    logger.addHandler(handler)
    logger.setLevel(level.to_logging_level())
    logger.propagate = False
    return logger
