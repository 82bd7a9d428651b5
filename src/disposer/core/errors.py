# src/disposer/core/errors.py

from __future__ import annotations

from typing import Any


class DisposerError(Exception):
    """Base class for every error raised by the disposer package."""


class InvalidTaskKind(DisposerError, TypeError):
    """Raised by Registry.add when a value matches none of the supported task kinds."""

    def __init__(self, value: Any, detail: str | None = None) -> None:
        self.value = value
        msg = f"unsupported task type {type(value).__name__!r}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class InvalidArgument(DisposerError, ValueError):
    pass


class TeardownError(DisposerError):
    """
    A teardown action raised.

    Carries the registry id and label of the failing entry plus the original
    exception as `cause` (also chained as __cause__ when raised).
    """

    def __init__(self, task_id: int, label: str | None, cause: BaseException) -> None:
        self.task_id = task_id
        self.label = label
        self.cause = cause
        where = f"task {task_id}" if label is None else f"task {task_id} ({label})"
        super().__init__(f"teardown failed for {where}: {cause!r}")
