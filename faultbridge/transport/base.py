"""Shared plumbing for the transport adapters."""

from __future__ import annotations

import requests
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import HTTPConnection
from starlette.responses import Response

from faultbridge.core.faults import Fault
from faultbridge.schemas.error import ErrorResponse
from faultbridge.translation.rendering import JSON_MEDIA_TYPE
from faultbridge.translation.rendering import render_wire
from faultbridge.translation.translator import FaultTranslator

TRACE_ID_HEADER = "x-trace-id"
TRACEPARENT_HEADER = "traceparent"
_INVALID_TRACE_ID = "0" * 32

# Fault families with dedicated handlers; anything else reaches the catch-all.
HANDLED_FAULT_TYPES: tuple[type[Exception], ...] = (
    Fault,
    RequestValidationError,
    StarletteHTTPException,
    ValidationError,
    requests.RequestException,
    SQLAlchemyError,
)


def request_trace_id(connection: HTTPConnection) -> str | None:
    """Return the caller's trace id from request state or tracing headers."""
    state_trace_id = getattr(connection.state, "trace_id", None)
    if state_trace_id:
        return str(state_trace_id)

    header_trace_id = connection.headers.get(TRACE_ID_HEADER)
    if header_trace_id:
        return header_trace_id

    return _traceparent_trace_id(connection.headers.get(TRACEPARENT_HEADER))


def _traceparent_trace_id(traceparent: str | None) -> str | None:
    # version-traceid-parentid-flags
    if not traceparent:
        return None
    parts = traceparent.strip().split("-")
    if len(parts) != 4 or len(parts[1]) != 32 or parts[1] == _INVALID_TRACE_ID:
        return None
    return parts[1]


class TransportAdapter:
    """Narrow seam between a request-handling style and the translation core."""

    def __init__(self, translator: FaultTranslator | None = None) -> None:
        self._translator = translator or FaultTranslator.from_settings()

    def translate(
        self,
        fault: BaseException,
        method: str,
        path: str,
        trace_id: str | None = None,
    ) -> ErrorResponse:
        return self._translator.translate(fault, method, path, trace_id)

    def deliver(self, response: ErrorResponse) -> bytes:
        return render_wire(response)

    def respond(self, connection: HTTPConnection, fault: BaseException) -> Response:
        """Translate ``fault`` raised while serving ``connection`` into a response."""
        method = connection.scope.get("method", "GET")
        response = self.translate(fault, method, connection.url.path, request_trace_id(connection))
        return Response(
            content=self.deliver(response),
            status_code=response.status_code,
            media_type=JSON_MEDIA_TYPE,
        )
