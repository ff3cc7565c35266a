"""Structured logging for Moo.

All package loggers hang off the ``moo`` logger. Nothing is configured on
import; the CLI calls :func:`setup_logging` once per run, and library users
can either call it or attach their own handlers to ``moo``.
"""

import logging
import sys
from datetime import datetime
from typing import Optional


class StructuredFormatter(logging.Formatter):
    """``<iso timestamp> [LEVEL] moo.<module>: message``, plus any traceback."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Route ``moo`` log records to stderr and optionally a file.

    The default of WARNING keeps normal runs quiet: the parser only logs at
    DEBUG, and the API logs caller function failures at WARNING.
    Calling this again replaces the handlers from the previous call.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (unknown names fall back to WARNING)
        log_file: Also append records to this file

    Returns:
        The ``moo`` logger
    """
    logger = logging.getLogger("moo")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = StructuredFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``moo.<name>`` logger for a package module."""
    return logging.getLogger(f"moo.{name}")
