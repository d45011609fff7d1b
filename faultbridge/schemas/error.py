"""Error response schemas shared by every transport adapter."""

from __future__ import annotations

from typing import Any
from typing import TypeAlias

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import SerializerFunctionWrapHandler
from pydantic import field_serializer
from pydantic import model_serializer
from pydantic.alias_generators import to_camel

_JSON_SCALARS = (str, int, float, bool)
_OPTIONAL_KEYS = ("debug_message", "debugMessage", "sub_errors", "subErrors")


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ValidationSubError(_WireModel):
    """Single field-level validation detail."""

    field: str
    rejected_value: Any = None
    message: str

    @field_serializer("rejected_value")
    def _serialize_rejected_value(self, value: Any) -> Any:
        if value is None or isinstance(value, _JSON_SCALARS):
            return value
        return str(value)


# Tagged variant of field-level details; validation is the only case so far.
SubError: TypeAlias = ValidationSubError


class ErrorResponse(_WireModel):
    """Error entity returned to callers and written to the error log.

    ``debug_message`` and ``sub_errors`` are omitted from serialized output
    when unset, while a sub-error's ``rejected_value`` is always emitted, even
    as ``null``.
    """

    id: str
    method: str
    request_uri: str
    status_code: int
    timestamp: str
    message: str
    debug_message: str | None = None
    sub_errors: list[SubError] | None = None

    @model_serializer(mode="wrap")
    def _omit_absent_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in _OPTIONAL_KEYS:
            if key in data and data[key] is None:
                del data[key]
        return data


class StackDigest(_WireModel):
    """Bounded stack summary correlated with an error response; log-only."""

    exception_summary: str
    frames: list[str]
    correlation_id: str
