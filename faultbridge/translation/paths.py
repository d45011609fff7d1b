"""Dotted field paths and nested decoding-failure recognition."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Sequence
from typing import Any

from faultbridge.core.faults import DecodingError
from faultbridge.core.faults import InvalidEnumError
from faultbridge.core.faults import InvalidFormatError
from faultbridge.core.faults import MismatchedInputError
from faultbridge.core.faults import PathReference
from faultbridge.core.faults import ValueInstantiationError
from faultbridge.schemas.error import ValidationSubError

INVALID_FORMAT_MESSAGE = "Invalid format"
INVALID_VALUE_MESSAGE = "Invalid value"
BOOLEAN_MISMATCH_MARKER = 'only "true" or "false" recognized'
_REJECTED_VALUE_START = 'String "'
_REJECTED_VALUE_END = '": only'

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


def resolve_path(tokens: Iterable[Any]) -> str:
    """Join field tokens with ``.`` in traversal order; no tokens yields ``""``."""
    return ".".join(str(token) for token in tokens)


def reference_tokens(path: Sequence[PathReference]) -> list[str]:
    """Return the field names of a mapping path, using indexes for list items."""
    tokens: list[str] = []
    for reference in path:
        if reference.field_name is not None:
            tokens.append(reference.field_name)
        elif reference.index is not None:
            tokens.append(str(reference.index))
    return tokens


def resolve_location(location: Any) -> str:
    """Resolve a validation error location, dropping transport-level prefixes."""
    if not isinstance(location, (tuple, list)):
        return str(location)
    return resolve_path(part for part in location if part not in _LOCATION_PREFIXES)


def decoding_sub_error(fault: DecodingError) -> ValidationSubError | None:
    """Build a sub-error from a decoding fault's nested cause, if recognized."""
    cause = fault.__cause__

    if isinstance(cause, MismatchedInputError) and BOOLEAN_MISMATCH_MARKER in str(cause):
        field = resolve_path(reference_tokens(cause.path))
        return ValidationSubError(
            field=field,
            rejected_value=_scrape_rejected_value(str(cause)),
            message=f"{field} should be true or false",
        )

    if isinstance(cause, InvalidFormatError):
        return ValidationSubError(
            field=resolve_path(reference_tokens(cause.path)),
            rejected_value=None if cause.value is None else str(cause.value),
            message=INVALID_FORMAT_MESSAGE,
        )

    if isinstance(cause, ValueInstantiationError):
        return ValidationSubError(
            field=resolve_path(reference_tokens(cause.path)),
            rejected_value=_instantiation_rejected_value(cause),
            message=INVALID_VALUE_MESSAGE,
        )

    return None


def _instantiation_rejected_value(cause: ValueInstantiationError) -> str | None:
    enum_fault = cause.__cause__
    if not isinstance(enum_fault, InvalidEnumError) or enum_fault.sub_error is None:
        return None
    rejected = enum_fault.sub_error.rejected_value
    return None if rejected is None else str(rejected)


def _scrape_rejected_value(message: str) -> str | None:
    start = message.find(_REJECTED_VALUE_START)
    end = message.find(_REJECTED_VALUE_END)
    if start < 0 or end < 0:
        return None
    start += len(_REJECTED_VALUE_START)
    if end < start:
        return None
    return message[start:end]
