"""Blocking-style adapter: synchronous exception handlers."""

from __future__ import annotations

from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import Response

from faultbridge.transport.base import HANDLED_FAULT_TYPES
from faultbridge.transport.base import TransportAdapter


class BlockingFaultAdapter(TransportAdapter):
    """Translate faults in plain synchronous handlers.

    Starlette runs synchronous exception handlers in its threadpool, so
    translation never runs on the event loop thread.
    """

    def handle(self, request: Request, exc: Exception) -> Response:
        return self.respond(request, exc)

    def register(self, app: FastAPI) -> None:
        """Attach the synchronous handler for every fault family to ``app``."""
        for fault_type in HANDLED_FAULT_TYPES:
            app.add_exception_handler(fault_type, self.handle)
        app.add_exception_handler(Exception, self.handle)
