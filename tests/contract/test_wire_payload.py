"""Contract tests for the error payload written to callers."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.testclient import TestClient

from faultbridge.core.config import FaultBridgeSettings
from faultbridge.core.faults import BindError
from faultbridge.core.faults import DataNotFoundError
from faultbridge.core.faults import FieldViolation
from faultbridge.transport.registration import install_fault_handlers

if TYPE_CHECKING:
    from faultbridge.translation.translator import FaultTranslator

REQUIRED_KEYS = {"id", "method", "requestUri", "statusCode", "timestamp", "message"}
OPTIONAL_KEYS = {"debugMessage", "subErrors"}
SUB_ERROR_KEYS = {"field", "rejectedValue", "message"}


def _assert_error_payload(payload: dict) -> None:
    assert REQUIRED_KEYS <= set(payload) <= REQUIRED_KEYS | OPTIONAL_KEYS
    assert isinstance(payload["id"], str) and payload["id"]
    assert isinstance(payload["statusCode"], int)
    datetime.strptime(payload["timestamp"], "%Y-%m-%dT%H:%M:%S")
    for item in payload.get("subErrors", []):
        assert set(item) == SUB_ERROR_KEYS
        assert isinstance(item["field"], str)
        assert isinstance(item["message"], str)


def _build_client(translator: FaultTranslator) -> TestClient:
    app = FastAPI()
    install_fault_handlers(app, FaultBridgeSettings(), translator)

    @app.get("/orders/{order_id}")
    def get_order(order_id: int) -> None:
        raise DataNotFoundError(f"Order {order_id} is gone")

    @app.put("/clients/{client_id}")
    def update_client(client_id: int) -> None:
        raise BindError(
            [
                FieldViolation(field="name", rejected_value=None, message="must not be null"),
                FieldViolation(field="quota", rejected_value=-5, message="must be positive"),
            ]
        )

    return TestClient(app, raise_server_exceptions=False)


def test_not_found_payload_contract(translator: FaultTranslator) -> None:
    client = _build_client(translator)

    response = client.get("/orders/17")

    payload = response.json()
    _assert_error_payload(payload)
    assert payload == {
        "id": "generated-1",
        "method": "GET",
        "requestUri": "/orders/17",
        "statusCode": 404,
        "timestamp": "2026-02-20T11:05:30",
        "message": "Data not found",
        "debugMessage": "Order 17 is gone",
    }


def test_validation_payload_contract(translator: FaultTranslator) -> None:
    client = _build_client(translator)

    response = client.put("/clients/3")

    payload = response.json()
    _assert_error_payload(payload)
    assert payload["statusCode"] == 400
    assert "debugMessage" not in payload
    assert payload["subErrors"] == [
        {"field": "name", "rejectedValue": None, "message": "must not be null"},
        {"field": "quota", "rejectedValue": -5, "message": "must be positive"},
    ]


def test_payload_status_matches_http_status(translator: FaultTranslator) -> None:
    client = _build_client(translator)

    for path in ("/orders/1", "/clients/1", "/nowhere"):
        response = client.request("PUT" if path.startswith("/clients") else "GET", path)
        _assert_error_payload(response.json())
        assert response.json()["statusCode"] == response.status_code
