"""Logging configuration for the catalog service.

Console output only; every module asks for its logger through ``get_logger``
so the whole service hangs off the ``catalog`` logger.
"""

import logging
import sys
from typing import Optional, Union

__all__ = ["setup_logging", "get_logger", "ROOT_LOGGER"]

ROOT_LOGGER = "catalog"


class ColoredConsoleHandler(logging.StreamHandler):
    """Console handler that colours the level name when attached to a tty."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if hasattr(self.stream, "isatty") and self.stream.isatty():
            color = self.COLORS.get(record.levelname, "")
            if color:
                message = message.replace(
                    record.levelname, f"{color}{record.levelname}{self.RESET}", 1
                )
        return message


def setup_logging(level: Union[int, str] = logging.INFO, stream: Optional[object] = None) -> logging.Logger:
    """Configure the ``catalog`` logger.

    Args:
        level: Logging level, either a number or a name such as ``"DEBUG"``.
        stream: Stream for the console handler (default: stdout).

    Returns:
        The configured root logger of the service.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = ColoredConsoleHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return ``catalog`` or a ``catalog.<name>`` child logger."""
    if name == ROOT_LOGGER:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
