# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from disposer import config
from disposer.core import tracing
from disposer.core.registry import Registry

from .fakes import EventLog


@pytest.fixture(autouse=True)
def _tracing_off(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """
    Pin the process-wide trace switch per test.

    The switch is configure-once in production; tests patch the module global
    instead so every test starts from "disabled" regardless of the environment.
    """
    monkeypatch.setattr(tracing, "_enabled", False)
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture()
def traced(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Enable tracing and capture the trace logger."""
    monkeypatch.setattr(tracing, "_enabled", True)
    caplog.set_level(logging.INFO, logger=tracing.TRACE_LOGGER_NAME)
    return caplog


@pytest.fixture()
def registry() -> Registry:
    return Registry()


@pytest.fixture()
def log() -> EventLog:
    return EventLog()
