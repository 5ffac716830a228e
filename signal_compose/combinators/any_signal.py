"""OR-composition: fire as soon as any input fires."""

from __future__ import annotations

from functools import partial
from typing import Iterable

from ..base.dto import parse_composition
from ..base.signal import Signal
from .state import CompositionState, log_wired, short_circuit


def _on_input_fired(state: CompositionState, position: int, signal: Signal) -> None:
    state.settle(signal.reason, trigger=position)


def compose_any(signals: Iterable[Signal]) -> Signal:
    """Return a signal that fires when ANY of ``signals`` fires.

    The derived signal adopts the reason of the first input to fire. If an
    input is already fired at call time, the first such input in iteration
    order decides the reason and the result is returned already fired.
    An empty ``signals`` yields a signal that never fires.

    Args:
        signals: Input signals; iterated exactly once.

    Returns:
        The derived signal.

    Raises:
        InvalidArgumentError: ``signals`` is not an iterable of ``Signal``.
    """
    inputs = parse_composition(signals).signals

    for position, signal in enumerate(inputs):
        if signal.fired:
            return short_circuit("any", len(inputs), signal.reason, trigger=position)

    state = CompositionState(combinator="any", inputs=len(inputs))
    for position, signal in enumerate(inputs):
        state.watch(signal, partial(_on_input_fired, state, position, signal))
    state.guard_derived()

    # an input fired from another thread while we were subscribing
    for position, signal in enumerate(inputs):
        if signal.fired:
            _on_input_fired(state, position, signal)
            break

    log_wired(state)
    return state.signal


__all__ = ["compose_any"]
