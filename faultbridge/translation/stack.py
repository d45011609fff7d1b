"""Bounded, log-only stack trace digests."""

from __future__ import annotations

import logging
import os
import traceback
from types import TracebackType

from faultbridge.core.config import DEFAULT_OWN_CODE_PREFIX
from faultbridge.core.config import DEFAULT_STACK_FRAME_LIMIT
from faultbridge.core.config import DEFAULT_STACK_SEARCH_LIMIT
from faultbridge.core.config import FaultBridgeSettings
from faultbridge.schemas.error import StackDigest
from faultbridge.translation.rendering import render_digest
from faultbridge.translation.rendering import stack_fallback

logger = logging.getLogger(__name__)


class StackTraceDigester:
    """Summarize a fault's stack into a bounded list of frame descriptors.

    Frames are ordered most recent call first, so the frame that raised the
    fault leads. When none of the kept frames belongs to the service's own
    code, the first own-code frame found within the wider search window is
    appended so the real call site is always visible in the log.
    """

    def __init__(
        self,
        *,
        own_code_prefix: str = DEFAULT_OWN_CODE_PREFIX,
        frame_limit: int = DEFAULT_STACK_FRAME_LIMIT,
        search_limit: int = DEFAULT_STACK_SEARCH_LIMIT,
    ) -> None:
        if frame_limit <= 0:
            raise ValueError("frame_limit must be positive")
        if search_limit < frame_limit:
            raise ValueError("search_limit must be >= frame_limit")

        self._own_code_prefix = own_code_prefix
        self._frame_limit = frame_limit
        self._search_limit = search_limit

    @classmethod
    def from_settings(cls, settings: FaultBridgeSettings) -> StackTraceDigester:
        return cls(
            own_code_prefix=settings.own_code_prefix,
            frame_limit=settings.stack_frame_limit,
            search_limit=settings.stack_search_limit,
        )

    def digest(self, fault: BaseException, correlation_id: str) -> StackDigest:
        """Build the digest for ``fault`` correlated by ``correlation_id``."""
        descriptors = frame_descriptors(fault.__traceback__)
        frames = descriptors[: self._frame_limit]

        if not any(self._is_own_code(frame) for frame in frames):
            own_frame = next(
                (
                    frame
                    for frame in descriptors[: self._search_limit]
                    if self._is_own_code(frame)
                ),
                None,
            )
            if own_frame is not None:
                frames.append(own_frame)

        return StackDigest(
            exception_summary=exception_summary(fault),
            frames=frames,
            correlation_id=correlation_id,
        )

    def digest_or_fallback(self, fault: BaseException, correlation_id: str) -> str:
        """Render the digest as a log string; never raises."""
        try:
            return render_digest(self.digest(fault, correlation_id))
        except Exception:
            logger.debug("Stack digest failed for correlation id %s", correlation_id, exc_info=True)
            return stack_fallback(f"{type(fault).__name__} id={correlation_id}")

    def _is_own_code(self, frame: str) -> bool:
        prefix = self._own_code_prefix
        return bool(prefix) and frame.startswith(f"{prefix}.")


def frame_descriptors(tb: TracebackType | None) -> list[str]:
    """Describe traceback frames as ``module.function(file:line)``, newest first."""
    descriptors = [
        f"{frame.f_globals.get('__name__', '?')}.{frame.f_code.co_name}"
        f"({os.path.basename(frame.f_code.co_filename)}:{lineno})"
        for frame, lineno in traceback.walk_tb(tb)
    ]
    descriptors.reverse()
    return descriptors


def exception_summary(fault: BaseException) -> str:
    """Return ``module.Type: message`` for ``fault``."""
    fault_type = type(fault)
    name = fault_type.__qualname__
    if fault_type.__module__ not in ("builtins", "__main__"):
        name = f"{fault_type.__module__}.{name}"
    text = str(fault)
    return f"{name}: {text}" if text else name
