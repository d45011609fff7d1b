"""Reactive-style adapter: ASGI middleware writing errors onto the stream."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from starlette.requests import HTTPConnection
from starlette.requests import Request
from starlette.types import ASGIApp
from starlette.types import Message
from starlette.types import Receive
from starlette.types import Scope
from starlette.types import Send

from faultbridge.transport.base import HANDLED_FAULT_TYPES
from faultbridge.transport.base import TransportAdapter
from faultbridge.transport.base import request_trace_id
from faultbridge.translation.rendering import JSON_MEDIA_TYPE

logger = logging.getLogger(__name__)


class ReactiveFaultAdapter(TransportAdapter):
    """Intercept faults anywhere downstream and emit the error body directly."""

    async def propagate(self, request: Request, exc: Exception) -> None:
        # Hand the fault back up the stack to the middleware.
        raise exc

    def register(self, app: FastAPI) -> None:
        """Install the middleware and route framework faults through it."""
        for fault_type in HANDLED_FAULT_TYPES:
            app.add_exception_handler(fault_type, self.propagate)
        app.add_middleware(FaultTranslationMiddleware, adapter=self)


class FaultTranslationMiddleware:
    """Pure ASGI middleware translating faults raised by the wrapped app."""

    def __init__(self, app: ASGIApp, adapter: ReactiveFaultAdapter) -> None:
        self.app = app
        self.adapter = adapter

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if response_started:
                logger.warning("Fault raised after response started; cannot translate", exc_info=True)
                raise
            await self._send_error(scope, send, exc)

    async def _send_error(self, scope: Scope, send: Send, exc: Exception) -> None:
        connection = HTTPConnection(scope)
        response = self.adapter.translate(
            exc,
            scope.get("method", "GET"),
            connection.url.path,
            request_trace_id(connection),
        )
        body = self.adapter.deliver(response)
        await send(
            {
                "type": "http.response.start",
                "status": response.status_code,
                "headers": [
                    (b"content-type", JSON_MEDIA_TYPE.encode("latin-1")),
                    (b"content-length", str(len(body)).encode("latin-1")),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
