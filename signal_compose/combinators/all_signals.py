"""AND-composition: fire once every input has fired."""

from __future__ import annotations

from functools import partial
from typing import Iterable

from ..base.dto import parse_composition
from ..base.signal import Signal
from .state import CompositionState, log_wired, short_circuit


def _on_input_fired(state: CompositionState, position: int, signal: Signal) -> None:
    if state.record_fired(position):
        state.settle(signal.reason, trigger=position)


def compose_all(signals: Iterable[Signal]) -> Signal:
    """Return a signal that fires when ALL of ``signals`` have fired.

    The reason is the one of the input whose firing completed the set, i.e.
    the last to fire in time. Inputs are tracked by position, so passing the
    same signal twice counts it twice. When every input is already fired at
    call time the result is returned already fired with the reason of the
    positionally last input. An empty ``signals`` never fires.

    Args:
        signals: Input signals; iterated exactly once.

    Returns:
        The derived signal.

    Raises:
        InvalidArgumentError: ``signals`` is not an iterable of ``Signal``.
    """
    inputs = parse_composition(signals).signals

    if inputs and all(signal.fired for signal in inputs):
        return short_circuit("all", len(inputs), inputs[-1].reason, trigger=len(inputs) - 1)

    state = CompositionState(combinator="all", inputs=len(inputs))
    pending = []
    for position, signal in enumerate(inputs):
        if signal.fired:
            state.record_fired(position)
        else:
            pending.append((position, signal))

    for position, signal in pending:
        state.watch(signal, partial(_on_input_fired, state, position, signal))
    state.guard_derived()

    # inputs fired from another thread while we were subscribing
    for position, signal in pending:
        if signal.fired:
            _on_input_fired(state, position, signal)

    log_wired(state, already_fired=len(inputs) - len(pending))
    return state.signal


__all__ = ["compose_all"]
