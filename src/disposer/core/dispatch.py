# src/disposer/core/dispatch.py

from __future__ import annotations

"""
Task dispatcher.

dispatch(entry) performs the teardown action matching entry.kind:
- CALLABLE     -> call it; if it returns a callable, call that once as well
- DISPOSABLE   -> entry.task.destroy() (or the configured method)
- SUBSCRIPTION -> entry.task.disconnect()
- SUSPENDED    -> cancel() futures/tasks, close() coroutines/generators

It touches no registry state. Teardown failures, asyncio.CancelledError
included, are caught here and returned as TeardownError; dispatch itself does
not raise for them. KeyboardInterrupt and SystemExit still propagate.
"""

import asyncio
import inspect
import logging
import time

from .errors import TeardownError
from .models import Entry, TaskKind
from .tracing import trace, trace_failure

logger = logging.getLogger(__name__)


def _reject_awaitable(result, what: str) -> None:
    if inspect.isawaitable(result):
        # Nothing here can await it; close it so it is not left dangling.
        close = getattr(result, "close", None)
        if callable(close):
            close()
        raise TypeError(f"{what} returned an awaitable: {result!r}")


def _run_callable(task) -> None:
    result = task()
    _reject_awaitable(result, "teardown callable")
    # One level only: the returned teardown's own return value is never chased.
    if callable(result):
        _reject_awaitable(result(), "returned teardown")


def _run_disposable(task, method: str | None) -> None:
    name = method or "destroy"
    _reject_awaitable(getattr(task, name)(), f"{name}()")


def _run_subscription(task) -> None:
    _reject_awaitable(task.disconnect(), "disconnect()")


def _run_suspended(task) -> None:
    # Future.cancel() returns False on a settled future; close() on a finished
    # coroutine/generator is a no-op. Both are safe to repeat.
    cancel = getattr(task, "cancel", None)
    if callable(cancel):
        cancel()
        return
    task.close()


def _teardown(entry: Entry) -> None:
    kind = entry.kind
    if kind is TaskKind.CALLABLE:
        _run_callable(entry.task)
    elif kind is TaskKind.DISPOSABLE:
        _run_disposable(entry.task, entry.method)
    elif kind is TaskKind.SUBSCRIPTION:
        _run_subscription(entry.task)
    elif kind is TaskKind.SUSPENDED:
        _run_suspended(entry.task)
    else:
        raise AssertionError(f"unhandled task kind: {kind!r}")


def dispatch(entry: Entry) -> TeardownError | None:
    """Tear down one entry. Returns None on success, a TeardownError on failure."""
    started = time.perf_counter()
    try:
        _teardown(entry)
    except (Exception, asyncio.CancelledError) as e:
        err = TeardownError(entry.id, entry.label, e)
        logger.debug("Teardown failed id=%s kind=%s label=%s", entry.id, entry.kind.value, entry.label, exc_info=True)
        trace_failure(
            "teardown failed id=%s kind=%s label=%s: %r",
            entry.id,
            entry.kind.value,
            entry.label,
            e,
            exc=e,
        )
        return err

    trace(
        "teardown id=%s kind=%s label=%s took %.3fms",
        entry.id,
        entry.kind.value,
        entry.label,
        (time.perf_counter() - started) * 1000.0,
    )
    return None
