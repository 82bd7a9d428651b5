# src/disposer/core/models.py

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .errors import InvalidTaskKind
from .ports import Disposable, Subscription


class TaskKind(StrEnum):
    """
    Closed set of cleanup-unit kinds.

    The kind is decided once, when a task is admitted, and stored on the Entry;
    the dispatcher matches on it instead of re-inspecting the value.
    """

    CALLABLE = "callable"
    DISPOSABLE = "disposable"
    SUBSCRIPTION = "subscription"
    SUSPENDED = "suspended"


@dataclass(slots=True, frozen=True)
class Entry:
    id: int
    task: Any
    kind: TaskKind
    label: str | None = None
    # Teardown method name for DISPOSABLE entries ("destroy" unless overridden).
    method: str | None = None


def is_suspended(value: Any) -> bool:
    """Host-level suspended computation: asyncio/concurrent futures, coroutines, generators."""
    return (
        asyncio.isfuture(value)
        or isinstance(value, concurrent.futures.Future)
        or inspect.iscoroutine(value)
        or inspect.isgenerator(value)
    )


def _has_method(value: Any, name: str) -> bool:
    return callable(getattr(value, name, None))


def classify(value: Any, method: str | None = None) -> TaskKind:
    """
    Decide the TaskKind of `value` or raise InvalidTaskKind.

    Order (first match wins): suspended, subscription, disposable, callable.
    With `method`, the value must expose that callable attribute and is
    always treated as DISPOSABLE.
    """
    if value is None:
        raise InvalidTaskKind(value, "None is not a task")

    if method is not None:
        if not _has_method(value, method):
            raise InvalidTaskKind(value, f"no callable attribute {method!r}")
        return TaskKind.DISPOSABLE

    if is_suspended(value):
        return TaskKind.SUSPENDED

    # Classes expose their methods as plain functions; only instances qualify.
    if not isinstance(value, type):
        if isinstance(value, Subscription) and _has_method(value, "disconnect"):
            return TaskKind.SUBSCRIPTION
        if isinstance(value, Disposable) and _has_method(value, "destroy"):
            return TaskKind.DISPOSABLE

    # Calling these only builds a coroutine / async generator; nothing would run.
    if inspect.iscoroutinefunction(value) or inspect.isasyncgenfunction(value):
        raise InvalidTaskKind(value, "async functions cannot run as synchronous teardown")

    if callable(value):
        return TaskKind.CALLABLE

    raise InvalidTaskKind(value)
