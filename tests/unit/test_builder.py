"""Unit tests for error response construction and redaction."""

from __future__ import annotations

from datetime import datetime
from datetime import timedelta
from datetime import timezone
import uuid

import requests

from faultbridge.core.faults import DownstreamError
from faultbridge.core.faults import DuplicateDataFoundError
from faultbridge.schemas.error import ValidationSubError
from faultbridge.translation.builder import ErrorResponseBuilder
from faultbridge.translation.builder import debug_message
from faultbridge.translation.builder import format_timestamp
from faultbridge.translation.builder import redact
from faultbridge.translation.classifier import UNCLASSIFIED
from faultbridge.translation.classifier import classify


def test_build_populates_fields_from_classification_and_fault(builder: ErrorResponseBuilder) -> None:
    fault = DuplicateDataFoundError("x already exists")

    response = builder.build(
        method="post",
        request_uri="/api/v1/clients",
        classification=classify(fault),
        fault=fault,
    )

    assert response.id == "generated-1"
    assert response.method == "POST"
    assert response.request_uri == "/api/v1/clients"
    assert response.status_code == 409
    assert response.timestamp == "2026-02-20T11:05:30"
    assert response.message == "Duplicate Data Found"
    assert response.debug_message == "x already exists"
    assert response.sub_errors is None


def test_trace_id_is_reused_as_response_id(builder: ErrorResponseBuilder) -> None:
    fault = DuplicateDataFoundError("x")

    response = builder.build(
        method="GET",
        request_uri="/",
        classification=classify(fault),
        fault=fault,
        trace_id="4bf92f3577b34da6a3ce929d0e0e4736",
    )

    assert response.id == "4bf92f3577b34da6a3ce929d0e0e4736"


def test_empty_sub_errors_leave_field_unset(builder: ErrorResponseBuilder) -> None:
    fault = DuplicateDataFoundError("x")

    response = builder.build(
        method="GET", request_uri="/", classification=classify(fault), fault=fault, sub_errors=[]
    )

    assert response.sub_errors is None


def test_sub_errors_are_attached_when_present(builder: ErrorResponseBuilder) -> None:
    fault = DuplicateDataFoundError("x")
    sub_error = ValidationSubError(field="name", rejected_value="acme", message="taken")

    response = builder.build(
        method="GET", request_uri="/", classification=classify(fault), fault=fault, sub_errors=[sub_error]
    )

    assert response.sub_errors == [sub_error]


def test_builds_at_different_instants_differ_only_in_id_and_timestamp() -> None:
    moments = iter(
        [
            datetime(2026, 2, 20, 11, 0, 0, tzinfo=timezone.utc),
            datetime(2026, 2, 20, 11, 0, 7, tzinfo=timezone.utc),
        ]
    )
    builder = ErrorResponseBuilder(clock=lambda: next(moments))
    fault = DuplicateDataFoundError("x already exists")
    classification = classify(fault)

    first = builder.build(method="GET", request_uri="/a", classification=classification, fault=fault)
    second = builder.build(method="GET", request_uri="/a", classification=classification, fault=fault)

    assert first.id != second.id
    assert uuid.UUID(first.id).version == 4
    assert first.timestamp != second.timestamp
    assert first.model_dump(exclude={"id", "timestamp"}) == second.model_dump(exclude={"id", "timestamp"})


def test_format_timestamp_converts_to_utc_without_zone_suffix() -> None:
    offset = timezone(timedelta(hours=2))

    assert format_timestamp(datetime(2026, 2, 20, 13, 5, 30, 999999, tzinfo=offset)) == "2026-02-20T11:05:30"
    assert format_timestamp(datetime(2026, 2, 20, 11, 5, 30)) == "2026-02-20T11:05:30"


def test_redact_clears_debug_message_and_keeps_id(builder: ErrorResponseBuilder) -> None:
    fault = RuntimeError("password=hunter2")
    response = builder.build(method="GET", request_uri="/", classification=UNCLASSIFIED, fault=fault)

    redacted = redact(response, UNCLASSIFIED)

    assert response.debug_message == "password=hunter2"
    assert redacted.debug_message is None
    assert redacted.id == response.id
    assert redacted.timestamp == response.timestamp


def test_redact_leaves_non_redacted_categories_untouched(builder: ErrorResponseBuilder) -> None:
    fault = DuplicateDataFoundError("x already exists")
    classification = classify(fault)
    response = builder.build(method="GET", request_uri="/", classification=classification, fault=fault)

    assert redact(response, classification) is response


def test_debug_message_appends_downstream_response_body() -> None:
    response = requests.Response()
    response.status_code = 502
    response._content = b'{"error":"upstream"}'
    http_error = requests.HTTPError("502 Server Error", response=response)

    assert debug_message(http_error) == '502 Server Error, response body is {"error":"upstream"}'
    assert (
        debug_message(DownstreamError("pricing failed", response_body="timeout"))
        == "pricing failed, response body is timeout"
    )


def test_debug_message_of_empty_fault_text_is_absent() -> None:
    assert debug_message(KeyError()) is None
    assert debug_message(DownstreamError()) is None


def test_debug_message_survives_consumed_downstream_body() -> None:
    response = requests.Response()
    response.status_code = 500
    response._content = False
    response._content_consumed = True
    http_error = requests.HTTPError("500 Server Error", response=response)

    assert debug_message(http_error) == "500 Server Error"
