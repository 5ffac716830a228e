"""Pytest configuration for the signal_compose test suite.

Provides source factories, structured log capture on the library logger
(which does not propagate to the root logger) and isolation of the timer
configuration environment.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List

import pytest

from signal_compose import Source
from signal_compose.base.timers import BACKEND_ENV, KEEP_ALIVE_ENV


@pytest.fixture()
def make_sources() -> Callable[[int], List[Source]]:
    """Return a factory building ``n`` fresh, unfired sources."""

    def _make(n: int) -> List[Source]:
        return [Source() for _ in range(n)]

    return _make


@pytest.fixture(autouse=True)
def isolated_timer_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear timer environment overrides so every test sees the defaults."""

    monkeypatch.delenv(KEEP_ALIVE_ENV, raising=False)
    monkeypatch.delenv(BACKEND_ENV, raising=False)
    yield


@pytest.fixture()
def log_events() -> Iterator[List[Dict[str, Any]]]:
    """Capture ``log_event`` payloads emitted under the library logger at DEBUG."""

    events: List[Dict[str, Any]] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: events.append(json.loads(record.getMessage()))  # type: ignore[method-assign]
    logger = logging.getLogger("signal_compose")
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield events
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)
