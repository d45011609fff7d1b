"""Annotation-based adapter: decorator-registered async exception handlers."""

from __future__ import annotations

import logging

import requests
from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from faultbridge.core.faults import Fault
from faultbridge.transport.base import TransportAdapter

logger = logging.getLogger(__name__)


class AnnotatedFaultAdapter(TransportAdapter):
    """Register one decorated handler per fault family on a FastAPI app."""

    def register(self, app: FastAPI) -> None:
        """Attach all fault handlers to ``app``."""

        @app.exception_handler(Fault)
        async def handle_fault(request: Request, exc: Fault) -> Response:
            """Handle faults raised explicitly by request handlers."""
            logger.debug("Translating %s (%s)", type(exc).__name__, exc.category.value)
            return self.respond(request, exc)

        @app.exception_handler(RequestValidationError)
        async def handle_request_validation(request: Request, exc: RequestValidationError) -> Response:
            """Handle request parameter and body validation failures."""
            return self.respond(request, exc)

        @app.exception_handler(ValidationError)
        async def handle_model_validation(request: Request, exc: ValidationError) -> Response:
            """Handle model validation failures raised inside handlers."""
            return self.respond(request, exc)

        @app.exception_handler(StarletteHTTPException)
        async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
            """Handle framework HTTP exceptions such as unknown routes."""
            return self.respond(request, exc)

        @app.exception_handler(requests.RequestException)
        async def handle_downstream(request: Request, exc: requests.RequestException) -> Response:
            """Handle failed calls to downstream services."""
            logger.warning("Downstream call failed: %s", type(exc).__name__)
            return self.respond(request, exc)

        @app.exception_handler(SQLAlchemyError)
        async def handle_database(request: Request, exc: SQLAlchemyError) -> Response:
            """Handle database faults without exposing driver text."""
            return self.respond(request, exc)

        @app.exception_handler(Exception)
        async def handle_unexpected(request: Request, exc: Exception) -> Response:
            """Catch-all for unexpected errors. Never exposes internals."""
            return self.respond(request, exc)
