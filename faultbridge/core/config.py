"""Fault translation configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_OWN_CODE_PREFIX = "app"
DEFAULT_STACK_FRAME_LIMIT = 15
DEFAULT_STACK_SEARCH_LIMIT = 100
DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


@dataclass(frozen=True)
class FaultBridgeSettings:
    """Runtime settings for fault translation and adapter registration."""

    own_code_prefix: str = DEFAULT_OWN_CODE_PREFIX
    stack_frame_limit: int = DEFAULT_STACK_FRAME_LIMIT
    stack_search_limit: int = DEFAULT_STACK_SEARCH_LIMIT
    enable_blocking_style: bool = False
    enable_reactive_style: bool = False
    enable_annotated_style: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.stack_frame_limit <= 0:
            raise ValueError("stack_frame_limit must be positive")
        if self.stack_search_limit < self.stack_frame_limit:
            raise ValueError("stack_search_limit must be >= stack_frame_limit")

    def safe_for_logging(self) -> dict[str, str | int | bool]:
        """Return settings as a flat dict for startup logs."""
        return {
            "own_code_prefix": self.own_code_prefix,
            "stack_frame_limit": self.stack_frame_limit,
            "stack_search_limit": self.stack_search_limit,
            "enable_blocking_style": self.enable_blocking_style,
            "enable_reactive_style": self.enable_reactive_style,
            "enable_annotated_style": self.enable_annotated_style,
            "log_level": self.log_level,
        }


@lru_cache(maxsize=1)
def get_settings() -> FaultBridgeSettings:
    """Load fault translation settings from the environment."""
    return FaultBridgeSettings(
        own_code_prefix=os.getenv("FAULTBRIDGE_OWN_CODE_PREFIX", DEFAULT_OWN_CODE_PREFIX),
        stack_frame_limit=_get_int_env("FAULTBRIDGE_STACK_FRAME_LIMIT", DEFAULT_STACK_FRAME_LIMIT),
        stack_search_limit=_get_int_env("FAULTBRIDGE_STACK_SEARCH_LIMIT", DEFAULT_STACK_SEARCH_LIMIT),
        enable_blocking_style=_get_bool_env("FAULTBRIDGE_ENABLE_BLOCKING_STYLE", False),
        enable_reactive_style=_get_bool_env("FAULTBRIDGE_ENABLE_REACTIVE_STYLE", False),
        enable_annotated_style=_get_bool_env("FAULTBRIDGE_ENABLE_ANNOTATED_STYLE", True),
        log_level=os.getenv("FAULTBRIDGE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )
