# src/disposer/core/ports.py

from __future__ import annotations

"""
Ports (capability contracts) consumed by the registry.

The registry never depends on a host object model; it only needs values that
satisfy one of these Protocols. They are runtime-checkable so the classifier
can use isinstance() on arbitrary duck-typed objects.
"""

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Disposable(Protocol):
    """Anything with a zero-argument destroy(); called exactly once, return value ignored."""
    def destroy(self) -> Any: ...


@runtime_checkable
class Subscription(Protocol):
    """
    Active event-listener handle.

    disconnect() must be idempotent. The registry severs subscriptions before
    any other teardown during a bulk clean.
    """

    def disconnect(self) -> Any: ...


@runtime_checkable
class Deferred(Protocol):
    """
    Future-style value (asyncio.Future, concurrent.futures.Future, ...).

    - done(): False while pending, True once settled (result, exception or cancelled)
    - add_done_callback(fn): fn(self) fires exactly once on settlement
    - cancel(): request cancellation; harmless on a settled value
    """

    def done(self) -> bool: ...
    def cancel(self) -> bool: ...
    def add_done_callback(self, fn: Callable[[Any], object], /) -> None: ...
