# src/disposer/tasks/promise.py

from __future__ import annotations

import logging
from typing import TypeVar

from ..core.errors import InvalidTaskKind
from ..core.ports import Deferred
from ..core.registry import Registry

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Deferred)


class PendingPromise:
    """Disposable wrapper around a pending future: destroy() cancels it."""

    __slots__ = ("future",)

    def __init__(self, future: Deferred) -> None:
        self.future = future

    def destroy(self) -> None:
        self.future.cancel()

    def __repr__(self) -> str:
        return f"<PendingPromise {self.future!r}>"


def add_promise(registry: Registry, future: F, label: str | None = None) -> F:
    """
    Track a future in `registry` until it settles.

    - already settled: returned unchanged, nothing is registered
    - pending: registered so that registry.clean() cancels it; once the future
      settles on its own (result, exception or cancel) its entry is detached
      without teardown

    Works with asyncio.Future/Task and concurrent.futures.Future. Returns the
    same future so calls can be chained.
    """
    if not isinstance(future, Deferred):
        raise InvalidTaskKind(future, "not a future-like value")

    if future.done():
        return future

    task_id = registry.add(PendingPromise(future), label)

    def _on_settled(_f: object) -> None:
        registry.detach(task_id)

    # Fires immediately if the future settled after the done() check above.
    future.add_done_callback(_on_settled)
    logger.debug("Tracking pending future id=%s label=%s", task_id, label)
    return future
