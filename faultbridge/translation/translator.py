"""Transport-agnostic fault translation pipeline."""

from __future__ import annotations

from faultbridge.core.config import FaultBridgeSettings
from faultbridge.core.config import get_settings
from faultbridge.schemas.error import ErrorResponse
from faultbridge.translation.builder import ErrorResponseBuilder
from faultbridge.translation.builder import redact
from faultbridge.translation.classifier import classify
from faultbridge.translation.extractor import extract_sub_errors
from faultbridge.translation.sink import LogSink
from faultbridge.translation.sink import LoggingSink
from faultbridge.translation.stack import StackTraceDigester


class FaultTranslator:
    """Translate any caught fault into a finalized error response.

    The unredacted response, and a stack digest where the classification asks
    for one, go to the log sink first; redaction is applied afterwards so the
    log keeps the detail the caller never sees. Both share the response id.
    """

    def __init__(
        self,
        *,
        builder: ErrorResponseBuilder | None = None,
        digester: StackTraceDigester | None = None,
        sink: LogSink | None = None,
    ) -> None:
        self._builder = builder or ErrorResponseBuilder()
        self._digester = digester or StackTraceDigester()
        self._sink = sink or LoggingSink()

    @classmethod
    def from_settings(
        cls,
        settings: FaultBridgeSettings | None = None,
        *,
        sink: LogSink | None = None,
    ) -> FaultTranslator:
        settings = settings or get_settings()
        return cls(digester=StackTraceDigester.from_settings(settings), sink=sink)

    def translate(
        self,
        fault: BaseException,
        method: str,
        path: str,
        trace_id: str | None = None,
    ) -> ErrorResponse:
        """Classify, extract, build, log and redact the response for ``fault``."""
        classification = classify(fault)
        response = self._builder.build(
            method=method,
            request_uri=path,
            classification=classification,
            fault=fault,
            sub_errors=extract_sub_errors(fault),
            trace_id=trace_id,
        )

        stack_digest = None
        if classification.include_stack:
            stack_digest = self._digester.digest_or_fallback(fault, response.id)
        self._sink.emit(response, stack_digest)

        return redact(response, classification)
