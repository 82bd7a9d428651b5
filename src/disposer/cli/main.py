# src/disposer/cli/main.py

"""
Demo entrypoint (`disposer-demo`).

Initializes logging and tracing, then owns one Registry for the lifetime of
the process:
- a heartbeat interval on a background thread,
- a stand-in event subscription,
- the previous signal handlers (restored on teardown).
Everything is torn down by one registry.clean() on exit.
"""

from __future__ import annotations

import logging
import signal
import threading

from ..config import Settings, get_settings
from ..core.registry import Registry
from ..core.tracing import configure_tracing
from ..logging_setup import setup_logging
from ..tasks.interval import start_interval_thread

logger = logging.getLogger(__name__)


class _LogSubscription:
    """Stand-in for a host event connection; logs when severed."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.connected = True

    def disconnect(self) -> None:
        if self.connected:
            self.connected = False
            logger.info("Subscription %s disconnected.", self.name)


def _install_signal_handlers(registry: Registry, stop_main: threading.Event) -> None:
    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            previous = signal.signal(signum, _handle_signal)
        except (ValueError, OSError):
            # Not the main thread, or the platform lacks this signal.
            logger.debug("Cannot install handler for signal %s.", signum, exc_info=True)
            continue

        # None means the previous handler was not installed from Python.
        def _restore(signum=signum, previous=previous) -> None:
            signal.signal(signum, previous if previous is not None else signal.SIG_DFL)

        registry.add(_restore, f"restore-signal-{int(signum)}")


def build_registry(settings: Settings, stop_main: threading.Event) -> Registry:
    registry = Registry()

    beats = 0

    def _heartbeat() -> None:
        nonlocal beats
        beats += 1
        logger.info("heartbeat #%d", beats)

    handle = start_interval_thread(settings.demo_interval_seconds, _heartbeat, name="heartbeat")
    registry.add(handle.teardown, "heartbeat")
    registry.add(_LogSubscription("demo"), "demo-subscription")
    _install_signal_handlers(registry, stop_main)
    return registry


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)
    configure_tracing(settings.trace_enabled)

    logger.info("Starting %s...", settings.app_name)

    stop_main = threading.Event()
    registry = build_registry(settings, stop_main)

    try:
        if settings.demo_run_seconds > 0:
            stop_main.wait(timeout=settings.demo_run_seconds)
        else:
            logger.info("Running until Ctrl+C.")
            stop_main.wait()
    finally:
        registry.clean()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
