"""Field-level sub-error extraction from validation faults."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from faultbridge.core.faults import BindError
from faultbridge.core.faults import ConstraintViolation
from faultbridge.core.faults import ConstraintViolationError
from faultbridge.core.faults import DecodingError
from faultbridge.core.faults import ElementKind
from faultbridge.core.faults import InvalidEnumError
from faultbridge.core.faults import TypeMismatchError
from faultbridge.schemas.error import ValidationSubError
from faultbridge.translation.paths import decoding_sub_error
from faultbridge.translation.paths import resolve_location

_FIELD_KINDS = frozenset({ElementKind.PROPERTY, ElementKind.PARAMETER})
DEFAULT_ISSUE_MESSAGE = "Invalid value"


def extract_sub_errors(fault: BaseException) -> list[ValidationSubError]:
    """Return the field-level sub-errors carried by ``fault``, in source order.

    An empty list means the fault carries no field detail and the response
    must leave ``sub_errors`` unset.
    """
    if isinstance(fault, BindError):
        return [
            ValidationSubError(field=v.field, rejected_value=v.rejected_value, message=v.message)
            for v in fault.field_violations
        ]

    if isinstance(fault, ConstraintViolationError):
        return [
            sub_error
            for sub_error in (_constraint_sub_error(v) for v in fault.violations)
            if sub_error is not None
        ]

    if isinstance(fault, TypeMismatchError):
        return [ValidationSubError(field=fault.name, rejected_value=fault.value, message=str(fault))]

    if isinstance(fault, DecodingError):
        sub_error = decoding_sub_error(fault)
        return [sub_error] if sub_error is not None else []

    if isinstance(fault, InvalidEnumError):
        return [fault.sub_error] if fault.sub_error is not None else []

    if isinstance(fault, (RequestValidationError, ValidationError)):
        return _issue_sub_errors(fault.errors())

    return []


def _constraint_sub_error(violation: ConstraintViolation) -> ValidationSubError | None:
    # Object validation names the property, method validation the parameter.
    for node in violation.property_path:
        if node.kind in _FIELD_KINDS:
            return ValidationSubError(
                field=node.name or "",
                rejected_value=violation.invalid_value,
                message=violation.message,
            )
    return None


def _issue_sub_errors(issues: Iterable[Mapping[str, Any]]) -> list[ValidationSubError]:
    return [
        ValidationSubError(
            field=resolve_location(issue.get("loc", ())),
            rejected_value=issue.get("input"),
            message=str(issue.get("msg", DEFAULT_ISSUE_MESSAGE)),
        )
        for issue in issues
    ]
