# src/disposer/tasks/interval.py

from __future__ import annotations

"""
Periodic tasks.

Both helpers run `callback()`, wait `period`, and repeat until torn down.
They hand back an IntervalHandle(cancel_token, teardown); `teardown` is a plain
zero-argument callable meant to be admitted into a Registry.

- start_interval: asyncio flavour, needs a running event loop
- start_interval_thread: daemon thread flavour for synchronous callers

The loop does not know about any registry. Cancellation is cooperative:
a running flag checked between ticks plus a cancel request to the underlying
task/thread. A callback already in progress always runs to completion.
"""

import asyncio
import inspect
import logging
import numbers
import threading
from datetime import timedelta
from typing import Any, Callable, NamedTuple

from ..core.errors import InvalidArgument

logger = logging.getLogger(__name__)


class IntervalHandle(NamedTuple):
    cancel_token: Any  # asyncio.Task or threading.Event
    teardown: Callable[[], None]


def _period_seconds(period: float | timedelta) -> float:
    if isinstance(period, timedelta):
        seconds = period.total_seconds()
    elif isinstance(period, numbers.Real) and not isinstance(period, bool):
        seconds = float(period)
    else:
        raise InvalidArgument(f"period must be a number of seconds or a timedelta, got {period!r}")

    if not seconds > 0:
        raise InvalidArgument(f"period must be positive, got {period!r}")
    return seconds


def start_interval(
        period: float | timedelta,
        callback: Callable[[], Any],
        *,
        name: str | None = None,
) -> IntervalHandle:
    """
    Run `callback` every `period` on the running asyncio loop.

    `callback` may be a plain function or return an awaitable (it is awaited
    before the next wait). Exceptions from the callback are logged and the
    interval keeps running.

    Raises InvalidArgument for a non-positive period and RuntimeError when
    called outside a running event loop.
    """
    seconds = _period_seconds(period)
    loop = asyncio.get_running_loop()
    running = True

    async def _run() -> None:
        while running:
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Interval callback failed (%s)", name or "interval")

            if not running:
                break
            await asyncio.sleep(seconds)

    task = loop.create_task(_run(), name=name)

    def teardown() -> None:
        nonlocal running
        running = False
        task.cancel()

    logger.debug("Interval started (%s, period=%.3fs)", name or "interval", seconds)
    return IntervalHandle(cancel_token=task, teardown=teardown)


def start_interval_thread(
        period: float | timedelta,
        callback: Callable[[], Any],
        *,
        name: str | None = None,
        join_timeout: float | None = None,
) -> IntervalHandle:
    """
    Run `callback` every `period` on a daemon thread.

    teardown() sets the stop event and joins the worker (unless it is called
    from the worker itself), so once it returns no further callback runs.
    `join_timeout` bounds that join for callbacks that may block.
    """
    seconds = _period_seconds(period)
    stop = threading.Event()
    thread_name = name or "disposer-interval"

    def runner() -> None:
        while not stop.is_set():
            try:
                callback()
            except Exception:
                logger.exception("Interval callback failed (%s)", thread_name)

            if stop.wait(seconds):
                break

    t = threading.Thread(target=runner, name=thread_name, daemon=True)
    t.start()

    def teardown() -> None:
        stop.set()
        if threading.current_thread() is not t:
            t.join(timeout=join_timeout)

    logger.debug("Interval thread started (%s, period=%.3fs)", thread_name, seconds)
    return IntervalHandle(cancel_token=stop, teardown=teardown)
