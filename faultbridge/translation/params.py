"""Request parameter checks that raise translatable faults."""

from __future__ import annotations

import re

from faultbridge.core.faults import BadRequestError


def validate_query_parameter(
    value: str | None,
    name: str,
    pattern: str,
    *,
    mandatory: bool = False,
) -> str | None:
    """Return ``value`` if it is present when required and fully matches ``pattern``."""
    if mandatory and (value is None or not value.strip()):
        raise BadRequestError(f"The parameter {name} is a mandatory parameter.")
    if value is not None and re.fullmatch(pattern, value) is None:
        raise BadRequestError(
            f"The format of the value specified for field {name} is invalid, "
            f"format must match {pattern}"
        )
    return value
