"""Unit tests for error response and stack digest rendering."""

from __future__ import annotations

from decimal import Decimal
import json

import pytest
from pydantic_core import PydanticSerializationError

from faultbridge.schemas.error import ErrorResponse
from faultbridge.schemas.error import StackDigest
from faultbridge.schemas.error import ValidationSubError
from faultbridge.translation import rendering
from faultbridge.translation.rendering import error_fallback
from faultbridge.translation.rendering import render_digest
from faultbridge.translation.rendering import render_log
from faultbridge.translation.rendering import render_wire
from faultbridge.translation.rendering import stack_fallback


def _response(**overrides: object) -> ErrorResponse:
    values: dict[str, object] = {
        "id": "trace-1",
        "method": "GET",
        "request_uri": "/api/v1/orders/17",
        "status_code": 404,
        "timestamp": "2026-02-20T11:05:30",
        "message": "Data not found",
    }
    values.update(overrides)
    return ErrorResponse(**values)


def test_wire_payload_omits_absent_optional_fields() -> None:
    payload = json.loads(render_wire(_response()))

    assert payload == {
        "id": "trace-1",
        "method": "GET",
        "requestUri": "/api/v1/orders/17",
        "statusCode": 404,
        "timestamp": "2026-02-20T11:05:30",
        "message": "Data not found",
    }


def test_wire_payload_includes_debug_message_and_sub_errors_when_set() -> None:
    response = _response(
        status_code=400,
        message="Validation errors",
        debug_message="quantity: must be positive",
        sub_errors=[ValidationSubError(field="quantity", rejected_value=-1, message="must be positive")],
    )

    payload = json.loads(render_wire(response))

    assert payload["debugMessage"] == "quantity: must be positive"
    assert payload["subErrors"] == [
        {"field": "quantity", "rejectedValue": -1, "message": "must be positive"}
    ]


def test_null_rejected_value_is_still_emitted() -> None:
    response = _response(
        sub_errors=[ValidationSubError(field="name", rejected_value=None, message="must not be null")]
    )

    payload = json.loads(render_wire(response))

    assert payload["subErrors"][0] == {"field": "name", "rejectedValue": None, "message": "must not be null"}


def test_non_scalar_rejected_values_are_rendered_as_text() -> None:
    response = _response(
        sub_errors=[
            ValidationSubError(field="price", rejected_value=Decimal("9.99"), message="too cheap"),
            ValidationSubError(field="tags", rejected_value=["a", "b"], message="too many"),
        ]
    )

    payload = json.loads(render_wire(response))

    assert payload["subErrors"][0]["rejectedValue"] == "9.99"
    assert payload["subErrors"][1]["rejectedValue"] == "['a', 'b']"


def test_log_rendering_matches_wire_rendering() -> None:
    response = _response(debug_message="Order 17 is gone")

    assert render_log(response) == render_wire(response).decode("utf-8")


def test_digest_rendering_uses_camel_case_keys() -> None:
    digest = StackDigest(
        exception_summary="RuntimeError: boom",
        frames=["app.api.handler(/srv/app/api.py:12)"],
        correlation_id="trace-1",
    )

    assert json.loads(render_digest(digest)) == {
        "exceptionSummary": "RuntimeError: boom",
        "frames": ["app.api.handler(/srv/app/api.py:12)"],
        "correlationId": "trace-1",
    }


def test_log_rendering_degrades_to_fallback_string(monkeypatch: pytest.MonkeyPatch) -> None:
    class _FailingSerializer:
        def dump_json(self, *_: object, **__: object) -> bytes:
            raise PydanticSerializationError("cannot serialize")

    monkeypatch.setattr(rendering, "_ERROR_RESPONSE_SERIALIZER", _FailingSerializer())
    monkeypatch.setattr(rendering, "_STACK_DIGEST_SERIALIZER", _FailingSerializer())
    response = _response()
    digest = StackDigest(exception_summary="RuntimeError", frames=[], correlation_id="trace-1")

    assert render_log(response) == error_fallback(repr(response))
    assert render_digest(digest) == stack_fallback(repr(digest))


def test_fallback_strings() -> None:
    assert error_fallback("ErrorResponse id=1") == '{ "errorDetails" : "ErrorResponse id=1" }'
    assert stack_fallback("RuntimeError id=1") == '{ "stackTraceDetails" : "RuntimeError id=1" }'
