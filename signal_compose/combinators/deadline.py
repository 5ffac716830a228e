"""DEADLINE-composition: fire on the input or after a fixed duration."""

from __future__ import annotations

from datetime import timedelta
from functools import partial
from typing import Optional

from ..base.dto import parse_deadline
from ..base.errors import DeadlineExceededError
from ..base.signal import Signal
from ..base.timers import start_timer
from .state import CompositionState, log_wired, short_circuit


def _on_input_fired(state: CompositionState, signal: Signal) -> None:
    state.settle(signal.reason, trigger="input")


def _on_elapsed(state: CompositionState, seconds: float) -> None:
    state.settle(DeadlineExceededError(seconds), trigger="deadline")


def compose_deadline(
    signal: Signal,
    seconds: float | timedelta,
    *,
    keep_alive: Optional[bool] = None,
) -> Signal:
    """Return a signal that fires when ``signal`` fires or ``seconds`` elapse.

    Semantics:
        - Input already fired: returned signal is already fired with the
          input's reason and no timer is started.
        - Input fires first: the timer is cancelled and the input's reason
          is adopted.
        - Duration elapses first: the reason is a fresh
          ``DeadlineExceededError`` (``str()`` is ``"Timeout"``).
        - A zero duration still goes through the timer; the result is not
          fired synchronously.
        - If both happen in the same scheduling tick the winner depends on
          the host scheduler; the derived signal fires exactly once.

    Args:
        signal: The input signal.
        seconds: Non-negative duration in seconds, or a ``timedelta``.
        keep_alive: Whether the pending timer may keep the process alive.
            Defaults to ``TimerConfig.keep_alive`` (off).

    Returns:
        The derived signal.

    Raises:
        InvalidArgumentError: ``signal`` is not a ``Signal`` or the duration
            is negative, non-finite or not a number.
    """
    params = parse_deadline(signal, seconds)
    source_signal = params.signal

    if source_signal.fired:
        return short_circuit("deadline", 1, source_signal.reason, trigger="input")

    state = CompositionState(combinator="deadline", inputs=1)
    state.arm(start_timer(params.seconds, partial(_on_elapsed, state, params.seconds), keep_alive=keep_alive))
    state.watch(source_signal, partial(_on_input_fired, state, source_signal))
    state.guard_derived()

    if source_signal.fired:
        _on_input_fired(state, source_signal)

    log_wired(state, seconds=params.seconds)
    return state.signal


__all__ = ["compose_deadline"]
