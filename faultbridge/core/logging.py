"""Logging configuration for services using fault translation."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER_NAME = "faultbridge"
ERROR_LOGGER_NAME = "faultbridge.errors"


def _level_number(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the pipe-separated line format.

    Intended for the hosting service's startup code.

    Args:
        level: The log level name (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=_level_number(level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )


def set_package_log_level(level: str) -> None:
    """Apply ``level`` to all faultbridge loggers, leaving root handlers alone."""
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(_level_number(level))
