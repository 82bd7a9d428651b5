# tests/test_interval.py

from __future__ import annotations

import asyncio
import threading
import time
from datetime import timedelta

import pytest

from disposer.core.errors import InvalidArgument
from disposer.core.registry import Registry
from disposer.tasks.interval import start_interval, start_interval_thread


@pytest.mark.parametrize("period", [0, -1, 0.0, timedelta(0), timedelta(seconds=-1), "1", None, True])
def test_thread_interval_rejects_bad_period(period) -> None:
    calls: list[int] = []
    with pytest.raises(InvalidArgument):
        start_interval_thread(period, lambda: calls.append(1))
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("period", [0, -0.5, timedelta(0)])
async def test_async_interval_rejects_bad_period(period) -> None:
    with pytest.raises(InvalidArgument):
        start_interval(period, lambda: None)


def test_async_interval_needs_running_loop() -> None:
    with pytest.raises(RuntimeError):
        start_interval(0.1, lambda: None)


def test_thread_interval_stops_after_clean() -> None:
    ticks: list[float] = []
    reg = Registry()

    handle = start_interval_thread(0.1, lambda: ticks.append(time.monotonic()), name="tick")
    cancel_token, teardown = handle
    reg.add(teardown, "tick")

    time.sleep(0.15)
    reg.clean()
    seen = len(ticks)

    assert 1 <= seen < 3
    assert cancel_token.is_set()

    time.sleep(0.3)
    assert len(ticks) == seen


def test_thread_interval_teardown_is_idempotent() -> None:
    ticks: list[int] = []
    handle = start_interval_thread(timedelta(milliseconds=10), lambda: ticks.append(1))

    time.sleep(0.05)
    handle.teardown()
    handle.teardown()
    seen = len(ticks)

    time.sleep(0.05)
    assert len(ticks) == seen


def test_thread_interval_survives_callback_errors() -> None:
    calls: list[int] = []
    done = threading.Event()

    def flaky() -> None:
        calls.append(1)
        if len(calls) >= 3:
            done.set()
        raise RuntimeError("tick failed")

    handle = start_interval_thread(0.01, flaky)
    try:
        assert done.wait(timeout=2.0)
    finally:
        handle.teardown()

    assert len(calls) >= 3


def test_thread_interval_teardown_from_callback() -> None:
    calls: list[int] = []
    holder: dict[str, object] = {}
    stopped = threading.Event()
    ready = threading.Event()

    def once() -> None:
        ready.wait(timeout=2.0)
        calls.append(1)
        holder["handle"].teardown()  # type: ignore[attr-defined]
        stopped.set()

    holder["handle"] = start_interval_thread(0.01, once)
    ready.set()

    assert stopped.wait(timeout=2.0)
    time.sleep(0.05)
    assert calls == [1]


@pytest.mark.asyncio
async def test_async_interval_stops_after_clean() -> None:
    ticks: list[int] = []
    reg = Registry()

    handle = start_interval(0.01, lambda: ticks.append(1), name="tick")
    reg.add(handle.teardown, "tick")

    await asyncio.sleep(0.035)
    reg.clean()
    seen = len(ticks)
    assert seen >= 1

    await asyncio.sleep(0.05)
    assert len(ticks) == seen
    assert handle.cancel_token.cancelled()


@pytest.mark.asyncio
async def test_async_interval_awaits_coroutine_callbacks() -> None:
    ticks: list[int] = []

    async def tick() -> None:
        await asyncio.sleep(0)
        ticks.append(1)

    handle = start_interval(0.01, tick)
    await asyncio.sleep(0.05)
    handle.teardown()
    await asyncio.sleep(0.01)

    assert ticks
    assert handle.cancel_token.done()


@pytest.mark.asyncio
async def test_async_interval_survives_callback_errors() -> None:
    calls: list[int] = []

    def flaky() -> None:
        calls.append(1)
        raise RuntimeError("tick failed")

    handle = start_interval(0.01, flaky)
    await asyncio.sleep(0.06)
    handle.teardown()

    assert len(calls) >= 2


@pytest.mark.asyncio
async def test_async_interval_cancel_token_in_registry() -> None:
    ticks: list[int] = []
    reg = Registry()

    handle = start_interval(0.01, lambda: ticks.append(1))
    # The task itself is a suspended computation and can be admitted directly.
    reg.add(handle.cancel_token, "interval-task")

    await asyncio.sleep(0.03)
    reg.clean()
    await asyncio.sleep(0)
    seen = len(ticks)

    await asyncio.sleep(0.03)
    assert len(ticks) == seen
    assert handle.cancel_token.cancelled()
