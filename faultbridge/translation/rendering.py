"""JSON rendering of error responses and stack digests.

Both serializers are built once at import time and shared by every request.
"""

from __future__ import annotations

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from faultbridge.schemas.error import ErrorResponse
from faultbridge.schemas.error import StackDigest

JSON_MEDIA_TYPE = "application/json"

_ERROR_RESPONSE_SERIALIZER: TypeAdapter[ErrorResponse] = TypeAdapter(ErrorResponse)
_STACK_DIGEST_SERIALIZER: TypeAdapter[StackDigest] = TypeAdapter(StackDigest)


def render_wire(response: ErrorResponse) -> bytes:
    """Serialize ``response`` into the JSON bytes written to the caller."""
    return _ERROR_RESPONSE_SERIALIZER.dump_json(response, by_alias=True)


def render_log(response: ErrorResponse) -> str:
    """Serialize ``response`` for the error log, degrading to a plain string."""
    try:
        return _ERROR_RESPONSE_SERIALIZER.dump_json(response, by_alias=True).decode("utf-8")
    except PydanticSerializationError:
        return error_fallback(repr(response))


def render_digest(digest: StackDigest) -> str:
    """Serialize ``digest`` for the error log, degrading to a plain string."""
    try:
        return _STACK_DIGEST_SERIALIZER.dump_json(digest, by_alias=True).decode("utf-8")
    except PydanticSerializationError:
        return stack_fallback(repr(digest))


def error_fallback(text: str) -> str:
    return '{ "errorDetails" : "' + text + '" }'


def stack_fallback(text: str) -> str:
    return '{ "stackTraceDetails" : "' + text + '" }'
