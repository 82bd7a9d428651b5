# src/disposer/core/tracing.py

"""
Process-wide trace switch.

Init/read semantics:
- configure_tracing(enabled) is meant to be called once, at startup.
  Re-configuring with the same value is harmless; flipping it raises.
- Until configured, the switch follows Settings.trace_enabled (DISPOSER_TRACE).
- is_tracing_enabled() is evaluated at every trace point; nothing caches it.

Trace lines go to the stdlib logger "disposer.trace", so where they end up is
decided by whatever logging configuration the host process installed.
"""

from __future__ import annotations

import logging

from ..config import get_settings

TRACE_LOGGER_NAME = "disposer.trace"

trace_logger = logging.getLogger(TRACE_LOGGER_NAME)

_enabled: bool | None = None


def configure_tracing(enabled: bool) -> None:
    global _enabled
    enabled = bool(enabled)
    if _enabled is not None and _enabled != enabled:
        raise RuntimeError(f"tracing already configured (enabled={_enabled})")
    _enabled = enabled


def is_tracing_enabled() -> bool:
    if _enabled is not None:
        return _enabled
    return get_settings().trace_enabled


def trace(msg: str, *args: object) -> None:
    if is_tracing_enabled():
        trace_logger.info(msg, *args)


def trace_failure(msg: str, *args: object, exc: BaseException | None = None) -> None:
    if is_tracing_enabled():
        exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
        trace_logger.warning(msg, *args, exc_info=exc_info)
