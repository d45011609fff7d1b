"""Destinations for the server-side error record."""

from __future__ import annotations

import logging
from typing import Protocol

from faultbridge.core.logging import ERROR_LOGGER_NAME
from faultbridge.schemas.error import ErrorResponse
from faultbridge.translation.rendering import render_log


class LogSink(Protocol):
    """Receives each error response before redaction, plus its stack digest."""

    def emit(self, response: ErrorResponse, stack_digest: str | None = None) -> None: ...


class LoggingSink:
    """Write error records through the standard logging module."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(ERROR_LOGGER_NAME)

    def emit(self, response: ErrorResponse, stack_digest: str | None = None) -> None:
        self._logger.error("%s", render_log(response))
        if stack_digest is not None:
            self._logger.error("%s", stack_digest)
