"""
Logging helpers for the MyQuran reader.

Library modules log under the "myquran" logger tree. The interactive app keeps
these quiet unless --debug is given, so log lines never land in the middle of
a rendered screen.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "myquran"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Module names are placed below the "myquran" logger, so
    ``get_logger("jump")`` returns ``myquran.jump``.
    """
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None,
    stream: Optional[object] = None,
) -> logging.Logger:
    """
    Configure logging for the reader.

    Args:
        level: Logging level (default: INFO)
        format_string: Log format string (default: DEFAULT_FORMAT)
        date_format: Date format string (default: DEFAULT_DATE_FORMAT)
        stream: Output stream (default: sys.stderr)

    Returns:
        The configured "myquran" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        format_string or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    ))
    logger.addHandler(handler)
    return logger


def enable_debug_logging() -> None:
    configure_logging(level=logging.DEBUG)


def disable_logging() -> None:
    """Silence all reader logging."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
