"""Error response construction and the final redaction step."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Sequence
from datetime import datetime
from datetime import timezone
import logging
from uuid import uuid4

import requests

from faultbridge.core.faults import DownstreamError
from faultbridge.schemas.error import ErrorResponse
from faultbridge.schemas.error import SubError
from faultbridge.translation.classifier import Classification

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_correlation_id() -> str:
    return str(uuid4())


class ErrorResponseBuilder:
    """Assemble error responses from a classification and its fault.

    The clock and id factory are injectable; everything else comes from the
    arguments, so identical inputs produce identical responses apart from
    ``id`` (without a trace id) and ``timestamp``.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_correlation_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory

    def build(
        self,
        *,
        method: str,
        request_uri: str,
        classification: Classification,
        fault: BaseException,
        sub_errors: Sequence[SubError] | None = None,
        trace_id: str | None = None,
    ) -> ErrorResponse:
        """Build the unredacted response for ``fault``."""
        return ErrorResponse(
            id=trace_id or self._id_factory(),
            method=method.upper(),
            request_uri=request_uri,
            status_code=classification.status,
            timestamp=format_timestamp(self._clock()),
            message=classification.description,
            debug_message=debug_message(fault),
            sub_errors=list(sub_errors) if sub_errors else None,
        )


def redact(response: ErrorResponse, classification: Classification) -> ErrorResponse:
    """Apply the redaction policy; this is the last change made to a response."""
    if not classification.redact or response.debug_message is None:
        return response
    return response.model_copy(update={"debug_message": None})


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` in UTC at second precision without a zone suffix."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def debug_message(fault: BaseException) -> str | None:
    """Return the fault's own text, with downstream response bodies appended."""
    text = str(fault) or None
    body = _downstream_body(fault)
    if body:
        return f"{text or type(fault).__name__}, response body is {body}"
    return text


def _downstream_body(fault: BaseException) -> str | None:
    if isinstance(fault, DownstreamError):
        return fault.response_body
    if isinstance(fault, requests.HTTPError) and fault.response is not None:
        try:
            return fault.response.text
        except (RuntimeError, requests.RequestException):
            # Streamed bodies may already be consumed or fail mid-read.
            logger.debug("Downstream response body unavailable", exc_info=True)
            return None
    return None
