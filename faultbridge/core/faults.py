"""Fault categories and the exceptions request handlers raise."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from faultbridge.schemas.error import ValidationSubError


class FaultCategory(str, Enum):
    """Closed set of categories every fault is classified into."""

    NOT_FOUND = "not_found"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DUPLICATE = "duplicate"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    BAD_REQUEST = "bad_request"
    VALIDATION = "validation"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    DOWNSTREAM = "downstream"
    # Framework exceptions that carry their own status and reason.
    HTTP_STATUS = "http_status"
    INTERNAL = "internal"


class Fault(Exception):
    """Base exception for faults translated into error responses."""

    category: FaultCategory = FaultCategory.INTERNAL

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class DataNotFoundError(Fault):
    """Requested data does not exist."""

    category = FaultCategory.NOT_FOUND


class ResourceNotFoundError(Fault):
    """Requested resource does not exist."""

    category = FaultCategory.RESOURCE_NOT_FOUND


class DuplicateDataFoundError(Fault):
    """Data being created already exists."""

    category = FaultCategory.DUPLICATE


class UnauthorizedError(Fault):
    category = FaultCategory.UNAUTHORIZED


class ForbiddenError(Fault):
    category = FaultCategory.FORBIDDEN


class BadRequestError(Fault):
    """Request is malformed; callers may override the response description."""

    category = FaultCategory.BAD_REQUEST

    def __init__(self, message: str = "", *, description: str | None = None) -> None:
        super().__init__(message)
        self.description = description


class UnsupportedMediaTypeError(Fault):
    category = FaultCategory.UNSUPPORTED_MEDIA_TYPE


class InternalServerError(Fault):
    """Explicit server-side failure; its text is never returned to callers."""

    category = FaultCategory.INTERNAL


class DownstreamError(Fault):
    """A call to a downstream dependency failed."""

    category = FaultCategory.DOWNSTREAM

    def __init__(
        self,
        message: str = "",
        *,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class ElementKind(str, Enum):
    """Kind of a node in a constraint violation property path."""

    BEAN = "bean"
    PROPERTY = "property"
    METHOD = "method"
    PARAMETER = "parameter"
    CROSS_PARAMETER = "cross_parameter"
    RETURN_VALUE = "return_value"
    CONTAINER_ELEMENT = "container_element"


@dataclass(frozen=True)
class PathNode:
    """One segment of a constraint violation property path."""

    name: str | None
    kind: ElementKind


@dataclass(frozen=True)
class ConstraintViolation:
    """Single failed constraint on an object property or method parameter."""

    property_path: Sequence[PathNode]
    invalid_value: Any
    message: str


@dataclass(frozen=True)
class FieldViolation:
    """Single field rejected while binding request data onto an object."""

    field: str
    rejected_value: Any
    message: str


class ValidationFault(Fault):
    """Base class for faults raised when request input fails validation."""

    category = FaultCategory.VALIDATION


class ConstraintViolationError(ValidationFault):
    """One or more declarative constraints failed."""

    def __init__(self, violations: Sequence[ConstraintViolation], message: str = "") -> None:
        super().__init__(message or _summarize(v.message for v in violations))
        self.violations = list(violations)


class BindError(ValidationFault):
    """Request data could not be bound onto the target object."""

    def __init__(self, field_violations: Sequence[FieldViolation], message: str = "") -> None:
        super().__init__(
            message or _summarize(f"{v.field}: {v.message}" for v in field_violations)
        )
        self.field_violations = list(field_violations)


class TypeMismatchError(ValidationFault):
    """A request parameter could not be converted to the declared type."""

    def __init__(self, name: str, value: Any, required_type: type | str) -> None:
        type_name = required_type if isinstance(required_type, str) else required_type.__name__
        super().__init__(
            f"Failed to convert value of type '{type(value).__name__}' "
            f"to required type '{type_name}' for parameter '{name}'"
        )
        self.name = name
        self.value = value
        self.required_type = type_name


class InvalidEnumError(ValidationFault):
    """A value did not match any member of an enumeration."""

    def __init__(self, sub_error: ValidationSubError | None = None) -> None:
        super().__init__("Validation failure")
        self.sub_error = sub_error


class DecodingError(ValidationFault):
    """Request body could not be decoded; the nested cause explains why."""


@dataclass(frozen=True)
class PathReference:
    """Reference to a field traversed while mapping a decoded document."""

    field_name: str | None = None
    index: int | None = None


class JsonMappingError(ValueError):
    """Mapping a decoded document onto a type failed at ``path``."""

    def __init__(self, message: str, path: Sequence[PathReference] = ()) -> None:
        super().__init__(message)
        self.path = list(path)


class MismatchedInputError(JsonMappingError):
    """Input token did not match the shape the target type expects."""


class InvalidFormatError(MismatchedInputError):
    """Input had the right shape but an invalid textual format."""

    def __init__(self, message: str, value: Any, path: Sequence[PathReference] = ()) -> None:
        super().__init__(message, path)
        self.value = value


class ValueInstantiationError(JsonMappingError):
    """Constructing the target value rejected otherwise well-formed input.

    The constructor's own fault, such as an ``InvalidEnumError``, is chained as
    ``__cause__``.
    """


def _summarize(messages: Iterable[str]) -> str:
    return "; ".join(messages) or "Validation failed"
