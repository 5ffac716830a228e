"""Behavioural tests for DEADLINE-composition.

Timer-driven tests use short real durations and bounded waits rather than
fixed sleeps so they stay fast without being flaky.
"""
from __future__ import annotations

import asyncio
import threading
import time
from datetime import timedelta

import pytest

from signal_compose import (
    DeadlineExceededError,
    InvalidArgumentError,
    Source,
    compose_deadline,
)
from signal_compose.base.timer_parts.loop_timer import LoopTimer
from signal_compose.base import timers


def test_fires_with_timeout_reason_when_input_never_fires():
    source = Source()
    derived = compose_deadline(source.signal, 0.02)

    assert derived.fired is False  # nosec B101 - pytest assert in tests
    assert derived.wait(timeout=2.0) is True  # nosec B101 - pytest assert in tests

    assert isinstance(derived.reason, DeadlineExceededError)  # nosec B101 - pytest assert in tests
    assert isinstance(derived.reason, TimeoutError)  # nosec B101 - pytest assert in tests
    assert str(derived.reason) == "Timeout"  # nosec B101 - pytest assert in tests
    assert derived.reason.seconds == pytest.approx(0.02)  # nosec B101 - pytest assert in tests
    assert source.signal.subscriber_count == 0  # nosec B101 - released after timeout


def test_input_before_deadline_wins_and_timer_is_cancelled(monkeypatch):
    handles = []
    real_start = timers.start_timer

    def recording_start(*args, **kwargs):
        handle = real_start(*args, **kwargs)
        handles.append(handle)
        return handle

    monkeypatch.setattr("signal_compose.combinators.deadline.start_timer", recording_start)
    source = Source()
    derived = compose_deadline(source.signal, 5)

    source.fire(ValueError("manual"))

    assert derived.fired is True  # nosec B101 - pytest assert in tests
    assert str(derived.reason) == "manual"  # nosec B101 - pytest assert in tests
    assert len(handles) == 1 and handles[0].cancelled is True  # nosec B101 - pytest assert in tests


def test_timer_does_not_fire_after_early_abort():
    source = Source()
    derived = compose_deadline(source.signal, 0.03)
    seen = []
    derived.subscribe(lambda: seen.append(derived.reason))

    source.fire("early")
    time.sleep(0.08)

    assert seen == ["early"]  # nosec B101 - pytest assert in tests
    assert derived.reason == "early"  # nosec B101 - pytest assert in tests


def test_pre_fired_input_starts_no_timer(monkeypatch):
    def forbidden(*args, **kwargs):
        raise AssertionError("timer must not start")

    monkeypatch.setattr("signal_compose.combinators.deadline.start_timer", forbidden)
    source = Source()
    source.fire("already")

    derived = compose_deadline(source.signal, 5)

    assert derived.fired is True and derived.reason == "already"  # nosec B101 - pytest assert in tests


def test_preserves_input_reason_identity():
    source = Source()
    derived = compose_deadline(source.signal, 5)
    reason = RuntimeError("custom")

    source.fire(reason)

    assert derived.reason is reason  # nosec B101 - pytest assert in tests


def test_zero_duration_is_not_synchronous():
    async def scenario():
        derived = compose_deadline(Source().signal, 0)
        fired_on_return = derived.fired
        reason = await asyncio.wait_for(derived.until_fired(), timeout=2.0)
        return fired_on_return, reason

    fired_on_return, reason = asyncio.run(scenario())
    assert fired_on_return is False  # nosec B101 - zero still goes through the timer
    assert isinstance(reason, DeadlineExceededError)  # nosec B101 - pytest assert in tests


def test_accepts_timedelta():
    derived = compose_deadline(Source().signal, timedelta(milliseconds=10))
    assert derived.wait(timeout=2.0) is True  # nosec B101 - pytest assert in tests


def test_each_timeout_gets_a_fresh_reason():
    first = compose_deadline(Source().signal, 0)
    second = compose_deadline(Source().signal, 0)
    assert first.wait(2.0) and second.wait(2.0)  # nosec B101 - pytest assert in tests
    assert first.reason is not second.reason  # nosec B101 - pytest assert in tests


def test_background_timer_is_daemon_by_default(monkeypatch):
    handles = []
    real_start = timers.start_timer

    def recording_start(*args, **kwargs):
        handles.append(real_start(*args, **kwargs))
        return handles[-1]

    monkeypatch.setattr("signal_compose.combinators.deadline.start_timer", recording_start)
    source = Source()
    compose_deadline(source.signal, 5)
    compose_deadline(source.signal, 5, keep_alive=True)
    source.fire()

    assert handles[0].daemon is True  # nosec B101 - never blocks interpreter exit
    assert handles[1].daemon is False  # nosec B101 - explicit opt-in keeps process alive


def test_inside_event_loop_uses_loop_timer():
    async def scenario():
        source = Source()
        derived = compose_deadline(source.signal, 0.01)
        reason = await asyncio.wait_for(derived.until_fired(), timeout=2.0)
        return reason

    reason = asyncio.run(scenario())
    assert isinstance(reason, DeadlineExceededError)  # nosec B101 - pytest assert in tests


def test_inside_event_loop_input_wins(monkeypatch):
    handles = []
    real_start = timers.start_timer

    def recording_start(*args, **kwargs):
        handles.append(real_start(*args, **kwargs))
        return handles[-1]

    monkeypatch.setattr("signal_compose.combinators.deadline.start_timer", recording_start)

    async def scenario():
        source = Source()
        derived = compose_deadline(source.signal, 5)
        asyncio.get_running_loop().call_soon(source.fire, "loop input")
        return await asyncio.wait_for(derived.until_fired(), timeout=2.0)

    assert asyncio.run(scenario()) == "loop input"  # nosec B101 - pytest assert in tests
    assert isinstance(handles[0], LoopTimer) and handles[0].cancelled  # nosec B101 - pytest assert in tests


def test_inside_event_loop_input_fired_from_worker_thread(monkeypatch):
    handles = []
    real_start = timers.start_timer

    def recording_start(*args, **kwargs):
        handles.append(real_start(*args, **kwargs))
        return handles[-1]

    monkeypatch.setattr("signal_compose.combinators.deadline.start_timer", recording_start)

    async def scenario():
        source = Source()
        derived = compose_deadline(source.signal, 0.2)
        worker = threading.Thread(target=source.fire, args=("worker",))
        worker.start()
        worker.join()
        await asyncio.sleep(0.3)
        return derived

    derived = asyncio.run(scenario())
    assert derived.reason == "worker"  # nosec B101 - pytest assert in tests
    assert handles[0].cancelled is True and handles[0].elapsed is False  # nosec B101 - timer never ran


def test_composes_with_any(make_sources):
    from signal_compose import compose_any

    a, b = make_sources(2)
    derived = compose_deadline(compose_any([a.signal, b.signal]), 5)

    b.fire("b")

    assert derived.reason == "b"  # nosec B101 - pytest assert in tests


@pytest.mark.parametrize("seconds", [-1, float("nan"), "10", None])
def test_invalid_duration_reported_at_call_time(seconds):
    with pytest.raises(InvalidArgumentError):
        compose_deadline(Source().signal, seconds)


def test_invalid_signal_reported_at_call_time():
    with pytest.raises(InvalidArgumentError):
        compose_deadline([Source().signal], 1)  # type: ignore[arg-type]


def test_duration_beyond_platform_timer_limit_reported_at_call_time():
    with pytest.raises(InvalidArgumentError) as info:
        compose_deadline(Source().signal, timers.MAX_SECONDS * 2)
    assert info.value.argument == "seconds"  # nosec B101 - pytest assert in tests
