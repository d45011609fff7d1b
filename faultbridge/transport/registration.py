"""Adapter registration driven by the style switches."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from faultbridge.core.config import FaultBridgeSettings
from faultbridge.core.config import get_settings
from faultbridge.core.logging import set_package_log_level
from faultbridge.transport.annotated import AnnotatedFaultAdapter
from faultbridge.transport.base import TransportAdapter
from faultbridge.transport.blocking import BlockingFaultAdapter
from faultbridge.transport.reactive import ReactiveFaultAdapter
from faultbridge.translation.translator import FaultTranslator

logger = logging.getLogger(__name__)


def install_fault_handlers(
    app: FastAPI,
    settings: FaultBridgeSettings | None = None,
    translator: FaultTranslator | None = None,
) -> list[TransportAdapter]:
    """Register the enabled transport adapters on ``app``.

    All adapters share one translator. Blocking and annotated handlers claim
    the same fault types, so when both are enabled the annotated handlers,
    registered last, take effect.
    """
    settings = settings or get_settings()
    set_package_log_level(settings.log_level)
    translator = translator or FaultTranslator.from_settings(settings)
    logger.info("Installing fault handlers with settings=%s", settings.safe_for_logging())

    adapters: list[TransportAdapter] = []
    if settings.enable_reactive_style:
        reactive = ReactiveFaultAdapter(translator)
        reactive.register(app)
        adapters.append(reactive)
    if settings.enable_blocking_style:
        blocking = BlockingFaultAdapter(translator)
        blocking.register(app)
        adapters.append(blocking)
    if settings.enable_annotated_style:
        annotated = AnnotatedFaultAdapter(translator)
        annotated.register(app)
        adapters.append(annotated)
    return adapters
