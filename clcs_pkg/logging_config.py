"""Structured logging configuration for clcs.

Every module logs through a child of the ``clcs`` logger (``clcs.evaluator``,
``clcs.history``, ...). Nothing is emitted until :func:`setup_logging`
attaches handlers, which the CLI does at start-up.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from .config import LOG_LEVEL

ROOT_LOGGER = "clcs"


class StructuredFormatter(logging.Formatter):
    """Formats records as ``<iso timestamp> [LEVEL] name: message``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: str = LOG_LEVEL, log_file: Optional[str] = None
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the ``clcs`` logger.

    Calling it again replaces the handlers of the previous call, so the CLI
    can be entered repeatedly in one process.

    Args:
        level: Logging level name; unknown names fall back to WARNING
        log_file: Optional file path that receives the same records

    Returns:
        The configured ``clcs`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module of this package, e.g. ``get_logger("evaluator")``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
