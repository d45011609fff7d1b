"""Fault classification into status codes and stable descriptions."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

import requests
from fastapi import status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.exc import NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from faultbridge.core.faults import BadRequestError
from faultbridge.core.faults import BindError
from faultbridge.core.faults import ConstraintViolationError
from faultbridge.core.faults import DecodingError
from faultbridge.core.faults import DownstreamError
from faultbridge.core.faults import Fault
from faultbridge.core.faults import FaultCategory
from faultbridge.translation.paths import decoding_sub_error

DATA_NOT_FOUND_DESCRIPTION = "Data not found"
RESOURCE_NOT_FOUND_DESCRIPTION = "Resource not found"
DUPLICATE_DATA_FOUND_DESCRIPTION = "Duplicate Data Found"
UNAUTHORIZED_DESCRIPTION = "Unauthorized"
FORBIDDEN_DESCRIPTION = "Forbidden"
BAD_REQUEST_DESCRIPTION = "Bad Request"
VALIDATION_ERROR_DESCRIPTION = "Validation errors"
UNSUPPORTED_MEDIA_TYPE_DESCRIPTION = "Unsupported Media Type"
INTERNAL_SERVER_ERROR_DESCRIPTION = "Internal Server Error"
UNEXPECTED_ERROR_DESCRIPTION = "Unexpected error"

# Downstream statuses passed through to the caller; anything else becomes a 500.
PROPAGATED_DOWNSTREAM_STATUSES = frozenset(
    {
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_401_UNAUTHORIZED,
        status.HTTP_403_FORBIDDEN,
        status.HTTP_404_NOT_FOUND,
    }
)


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a fault."""

    category: FaultCategory
    status: int
    description: str
    redact: bool = False
    include_stack: bool = False


_STATIC_CLASSIFICATIONS: dict[FaultCategory, Classification] = {
    FaultCategory.NOT_FOUND: Classification(
        FaultCategory.NOT_FOUND, status.HTTP_404_NOT_FOUND, DATA_NOT_FOUND_DESCRIPTION
    ),
    FaultCategory.RESOURCE_NOT_FOUND: Classification(
        FaultCategory.RESOURCE_NOT_FOUND, status.HTTP_404_NOT_FOUND, RESOURCE_NOT_FOUND_DESCRIPTION
    ),
    FaultCategory.DUPLICATE: Classification(
        FaultCategory.DUPLICATE, status.HTTP_409_CONFLICT, DUPLICATE_DATA_FOUND_DESCRIPTION
    ),
    FaultCategory.UNAUTHORIZED: Classification(
        FaultCategory.UNAUTHORIZED, status.HTTP_401_UNAUTHORIZED, UNAUTHORIZED_DESCRIPTION
    ),
    FaultCategory.FORBIDDEN: Classification(
        FaultCategory.FORBIDDEN, status.HTTP_403_FORBIDDEN, FORBIDDEN_DESCRIPTION
    ),
    FaultCategory.UNSUPPORTED_MEDIA_TYPE: Classification(
        FaultCategory.UNSUPPORTED_MEDIA_TYPE,
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        UNSUPPORTED_MEDIA_TYPE_DESCRIPTION,
    ),
    FaultCategory.INTERNAL: Classification(
        FaultCategory.INTERNAL,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_SERVER_ERROR_DESCRIPTION,
        redact=True,
        include_stack=True,
    ),
}

UNCLASSIFIED = Classification(
    FaultCategory.INTERNAL,
    status.HTTP_500_INTERNAL_SERVER_ERROR,
    UNEXPECTED_ERROR_DESCRIPTION,
    redact=True,
    include_stack=True,
)


def classify(fault: BaseException) -> Classification:
    """Classify ``fault``; faults outside the table fall back to a redacted 500."""
    if isinstance(fault, Fault):
        return _classify_fault(fault)

    if isinstance(fault, (RequestValidationError, ValidationError)):
        return _validation(redact=True)

    if isinstance(fault, StarletteHTTPException):
        return _classify_http_exception(fault)

    if isinstance(fault, requests.HTTPError) and fault.response is not None:
        return _classify_downstream(fault.response.status_code)

    if isinstance(fault, requests.RequestException):
        return _classify_downstream(None)

    if isinstance(fault, NoResultFound):
        return _STATIC_CLASSIFICATIONS[FaultCategory.NOT_FOUND]

    if isinstance(fault, IntegrityError):
        # Driver text describes the schema; log it but keep it off the wire.
        return Classification(
            FaultCategory.DUPLICATE,
            status.HTTP_409_CONFLICT,
            DUPLICATE_DATA_FOUND_DESCRIPTION,
            redact=True,
        )

    return UNCLASSIFIED


def _classify_fault(fault: Fault) -> Classification:
    category = fault.category

    if category is FaultCategory.BAD_REQUEST:
        description = fault.description if isinstance(fault, BadRequestError) else None
        return Classification(
            category, status.HTTP_400_BAD_REQUEST, description or BAD_REQUEST_DESCRIPTION
        )

    if category is FaultCategory.VALIDATION:
        if isinstance(fault, (ConstraintViolationError, BindError)):
            return _validation(redact=True)
        if isinstance(fault, DecodingError):
            recognized = decoding_sub_error(fault) is not None
            return _validation(redact=recognized, include_stack=True)
        return _validation(redact=False)

    if category is FaultCategory.DOWNSTREAM:
        status_code = fault.status_code if isinstance(fault, DownstreamError) else None
        return _classify_downstream(status_code)

    return _STATIC_CLASSIFICATIONS.get(category, UNCLASSIFIED)


def _validation(*, redact: bool, include_stack: bool = False) -> Classification:
    return Classification(
        FaultCategory.VALIDATION,
        status.HTTP_400_BAD_REQUEST,
        VALIDATION_ERROR_DESCRIPTION,
        redact=redact,
        include_stack=include_stack,
    )


def _classify_downstream(status_code: int | None) -> Classification:
    if status_code in PROPAGATED_DOWNSTREAM_STATUSES:
        return Classification(
            FaultCategory.DOWNSTREAM,
            status_code,
            HTTPStatus(status_code).phrase,
            redact=True,
            include_stack=True,
        )
    return Classification(
        FaultCategory.DOWNSTREAM,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_SERVER_ERROR_DESCRIPTION,
        redact=True,
        include_stack=True,
    )


def _classify_http_exception(exc: StarletteHTTPException) -> Classification:
    if exc.status_code == status.HTTP_415_UNSUPPORTED_MEDIA_TYPE:
        return _STATIC_CLASSIFICATIONS[FaultCategory.UNSUPPORTED_MEDIA_TYPE]

    if isinstance(exc.detail, str) and exc.detail:
        description = exc.detail
    else:
        description = _reason_phrase(exc.status_code)

    server_side = exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
    return Classification(
        FaultCategory.HTTP_STATUS,
        exc.status_code,
        description,
        redact=server_side,
        include_stack=server_side,
    )


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Request failed"
