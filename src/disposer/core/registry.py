# src/disposer/core/registry.py

from __future__ import annotations

import logging
import threading
from typing import Any

from .dispatch import dispatch
from .models import Entry, TaskKind, classify
from .tracing import trace

logger = logging.getLogger(__name__)


class Registry:
    """
    Disposal registry: collects cleanup units and tears them all down on clean().

    Task kinds (decided once, in add()):
    - callable: called on teardown; a callable it returns is called too
    - disposable: object.destroy() (or a method named via add(..., method=...))
    - subscription: object.disconnect(); severed before everything else in clean()
    - suspended: asyncio/concurrent futures are cancelled, coroutines/generators closed

    Ids are per-instance, increasing, never reused. The task map and the label
    map are always changed together under one lock; teardown actions run
    outside the lock, so they may call back into add()/remove()/detach().

    The registry is meant for a single logical owner. The lock keeps the two
    maps consistent; it does not order concurrent add()/clean() callers.
    """

    def __init__(self) -> None:
        self._tasks: dict[int, Entry] = {}
        self._labels: dict[int, str] = {}
        self._next_id = 0
        self._lock = threading.RLock()

    # ---- admission ----

    def add(self, task: Any, label: str | None = None, *, method: str | None = None) -> int:
        """
        Admit a cleanup unit and return its id.

        Raises InvalidTaskKind if `task` is not a supported kind. The task is
        never invoked here.
        """
        kind = classify(task, method)

        with self._lock:
            self._next_id += 1
            task_id = self._next_id
            self._tasks[task_id] = Entry(id=task_id, task=task, kind=kind, label=label, method=method)
            if label is not None:
                self._labels[task_id] = label

        trace("add id=%s kind=%s label=%s", task_id, kind.value, label)
        return task_id

    # ---- removal ----

    def _unlink(self, task_id: int) -> Entry | None:
        with self._lock:
            entry = self._tasks.pop(task_id, None)
            self._labels.pop(task_id, None)
        return entry

    def remove(self, task_id: int) -> None:
        """
        Tear down one entry now.

        Unknown or already removed ids are ignored. A failing teardown is raised
        as TeardownError; the entry is gone either way.
        """
        entry = self._unlink(task_id)
        if entry is None:
            return

        trace("remove id=%s kind=%s label=%s", entry.id, entry.kind.value, entry.label)
        err = dispatch(entry)
        if err is not None:
            raise err from err.cause

    def detach(self, task_id: int) -> Any | None:
        """Forget an entry without tearing it down. Returns the task, or None if not live."""
        entry = self._unlink(task_id)
        if entry is None:
            return None
        trace("detach id=%s kind=%s label=%s", entry.id, entry.kind.value, entry.label)
        return entry.task

    # ---- bulk teardown ----

    def clean(self) -> None:
        """
        Tear down every live entry and leave the registry empty.

        1. snapshot the live entries
        2. sever subscriptions first
        3. tear down the rest in admission order
        Failures are logged per entry and never stop the pass. Entries removed
        by another teardown mid-clean are skipped. Entries added mid-clean are
        not in the snapshot and stay registered for the next clean().
        """
        with self._lock:
            snapshot = list(self._tasks.values())

        if not snapshot:
            return

        trace("clean start entries=%d", len(snapshot))

        subscriptions = [e for e in snapshot if e.kind is TaskKind.SUBSCRIPTION]
        others = [e for e in snapshot if e.kind is not TaskKind.SUBSCRIPTION]

        failures = 0
        for entry in subscriptions + others:
            if self._unlink(entry.id) is None:
                continue
            err = dispatch(entry)
            if err is not None:
                failures += 1
                logger.debug("Clean continues after failure: %s", err)

        trace("clean done entries=%d failures=%d", len(snapshot), failures)

    def destroy(self) -> None:
        """Alias of clean(), so a registry can itself be admitted as a disposable."""
        self.clean()

    # ---- introspection ----

    def get_labels(self) -> dict[int, str]:
        with self._lock:
            return dict(self._labels)

    def get_label(self, task_id: int) -> str | None:
        with self._lock:
            return self._labels.get(task_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks

    def __enter__(self) -> Registry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clean()

    def __repr__(self) -> str:
        return f"<Registry entries={len(self)}>"
