# src/disposer/__init__.py

"""
disposer: a registry of cleanup units torn down exactly once, in a fixed order.

Components:
- core/registry.py: Registry (add / remove / detach / clean / get_labels)
- core/dispatch.py: per-kind teardown with failure isolation
- core/tracing.py: process-wide trace switch
- tasks/interval.py: self-cancelling periodic tasks
- tasks/promise.py: pending-future tracking
"""

from .core.dispatch import dispatch
from .core.errors import DisposerError, InvalidArgument, InvalidTaskKind, TeardownError
from .core.models import Entry, TaskKind, classify
from .core.ports import Deferred, Disposable, Subscription
from .core.registry import Registry
from .core.tracing import configure_tracing, is_tracing_enabled
from .tasks.interval import IntervalHandle, start_interval, start_interval_thread
from .tasks.promise import PendingPromise, add_promise

__all__ = [
    "Deferred",
    "Disposable",
    "DisposerError",
    "Entry",
    "IntervalHandle",
    "InvalidArgument",
    "InvalidTaskKind",
    "PendingPromise",
    "Registry",
    "Subscription",
    "TaskKind",
    "TeardownError",
    "add_promise",
    "classify",
    "configure_tracing",
    "dispatch",
    "is_tracing_enabled",
    "start_interval",
    "start_interval_thread",
]
