"""Shared pytest fixtures for faultbridge test suites."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timezone
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from faultbridge.schemas.error import ErrorResponse  # noqa: E402
from faultbridge.translation.builder import ErrorResponseBuilder  # noqa: E402
from faultbridge.translation.stack import StackTraceDigester  # noqa: E402
from faultbridge.translation.translator import FaultTranslator  # noqa: E402

FIXED_NOW = datetime(2026, 2, 20, 11, 5, 30, 123456, tzinfo=timezone.utc)


@dataclass
class RecordingSink:
    """Log sink double keeping every emitted record in memory."""

    records: list[tuple[ErrorResponse, str | None]] = field(default_factory=list)

    def emit(self, response: ErrorResponse, stack_digest: str | None = None) -> None:
        self.records.append((response, stack_digest))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def builder() -> ErrorResponseBuilder:
    """Builder with a frozen clock and a predictable id sequence."""
    counter = iter(range(1, 1_000))
    return ErrorResponseBuilder(
        clock=lambda: FIXED_NOW,
        id_factory=lambda: f"generated-{next(counter)}",
    )


@pytest.fixture
def translator(builder: ErrorResponseBuilder, sink: RecordingSink) -> FaultTranslator:
    return FaultTranslator(
        builder=builder,
        digester=StackTraceDigester(own_code_prefix="tests"),
        sink=sink,
    )
