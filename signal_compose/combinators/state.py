"""Per-invocation bookkeeping shared by the combinators.

Each ``compose_*`` call owns exactly one :class:`CompositionState`. Handlers
receive the state explicitly (via ``functools.partial``) rather than closing
over loose variables, and teardown is guarded by the one-shot ``cleaned``
flag so "cleanup runs exactly once" is a checkable invariant.

After cleanup the state holds no reference to any input signal or timer.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Callable, List, Optional, Set, Tuple

from ..base.logging import LogContext, get_logger, log_event
from ..base.signal import Signal, Source, Subscription
from ..base.timers import TimerHandle, cancel_timer

_logger = get_logger("combinators")
_ids = itertools.count(1)


@dataclass
class CompositionState:
    """Mutable state of one combinator invocation.

    Attributes:
        combinator: Combinator name used in log events.
        inputs: Number of captured input signals.
        source: Source of the derived signal.
        subscriptions: ``(input, handle)`` pairs still registered on inputs.
        fired_positions: Input positions seen firing (AND composition).
        timer: Pending deadline timer (DEADLINE composition).
        cleaned: Set once cleanup has run.
    """

    combinator: str
    inputs: int
    source: Source = field(default_factory=Source)
    subscriptions: List[Tuple[Signal, Subscription]] = field(default_factory=list)
    fired_positions: Set[int] = field(default_factory=set)
    timer: Optional[TimerHandle] = None
    cleaned: bool = False
    composition_id: str = field(default_factory=lambda: f"c{next(_ids)}")
    _lock: Lock = field(default_factory=Lock, repr=False, compare=False)

    @property
    def signal(self) -> Signal:
        """The derived signal."""
        return self.source.signal

    @property
    def ctx(self) -> LogContext:
        return LogContext(combinator=self.combinator, inputs=self.inputs, composition_id=self.composition_id)

    def guard_derived(self) -> None:
        """Run cleanup when the derived signal fires, whatever fired it."""
        self.source.signal.subscribe(self.cleanup)

    def watch(self, signal: Signal, callback: Callable[[], Any]) -> None:
        """Subscribe ``callback`` on an input and track the subscription."""
        subscription = signal.subscribe(callback)
        with self._lock:
            if not self.cleaned:
                self.subscriptions.append((signal, subscription))
                return
        signal.unsubscribe(subscription)

    def arm(self, timer: TimerHandle) -> None:
        """Track ``timer``; cancel it at once if the outcome is already settled."""
        with self._lock:
            if not self.cleaned:
                self.timer = timer
                return
        cancel_timer(timer)

    def record_fired(self, position: int) -> bool:
        """Mark ``position`` as fired; return ``True`` once every input has fired."""
        with self._lock:
            self.fired_positions.add(position)
            return len(self.fired_positions) == self.inputs

    def settle(self, reason: Any, **fields: Any) -> None:
        """Fire the derived signal with ``reason`` and release everything."""
        if self.source.fire(reason):
            log_event(_logger, "compose.fired", self.ctx, reason=repr(reason), **fields)
        self.cleanup()

    def cleanup(self) -> bool:
        """Unsubscribe from every input and cancel the timer, exactly once."""
        with self._lock:
            if self.cleaned:
                return False
            self.cleaned = True
            subscriptions, self.subscriptions = self.subscriptions, []
            timer, self.timer = self.timer, None
            self.fired_positions = set()
        cancel_timer(timer)
        for signal, subscription in subscriptions:
            signal.unsubscribe(subscription)
        log_event(_logger, "compose.cleanup", self.ctx, released=len(subscriptions), timer=timer is not None)
        return True


def short_circuit(combinator: str, inputs: int, reason: Any, **fields: Any) -> Signal:
    """Return an already fired derived signal; nothing is subscribed."""
    log_event(
        _logger,
        "compose.short_circuit",
        LogContext(combinator=combinator, inputs=inputs),
        reason=repr(reason),
        **fields,
    )
    return Signal.prefired(reason)


def log_wired(state: CompositionState, **fields: Any) -> None:
    log_event(_logger, "compose.wired", state.ctx, subscriptions=len(state.subscriptions), **fields)


__all__ = ["CompositionState", "short_circuit", "log_wired"]
