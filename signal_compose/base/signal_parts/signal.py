"""Set-once observable signal implementation.

Exposes the ``Signal`` class: a one-way latch carrying an opaque reason once
fired, with FIFO one-shot callbacks. Signals are read-only to consumers; the
transition is driven by the owning ``Source`` (or by ``Signal.prefired``).
"""

from __future__ import annotations

import asyncio
import logging
from threading import Event, Lock
from typing import Any, Callable, Optional

from ..errors_parts.cancelled_error import CancelledError
from ..errors_parts.compose_error import InvalidArgumentError
from ..logging import get_logger, log_event
from .state import State
from .subscription import Subscription

_logger = get_logger("signal")

MISSING: Any = object()


def default_reason() -> CancelledError:
    """Reason used when a signal is fired without one."""
    return CancelledError("operation cancelled")


class Signal:
    """A set-once flag with an attached reason and one-shot subscribers.

    Thread-safe: the latch transition happens under a lock and callbacks are
    invoked outside it, in registration order, by whichever thread fires.
    A callback unsubscribed while the signal is dispatching is skipped.
    """

    def __init__(self) -> None:
        self._state = State()
        self._lock = Lock()
        self._event = Event()

    @classmethod
    def prefired(cls, reason: Any = MISSING) -> "Signal":
        """Return a new signal that is already fired with ``reason``."""
        signal = cls()
        signal._fire(default_reason() if reason is MISSING else reason)
        return signal

    @property
    def fired(self) -> bool:  # noqa: D401 - short form
        """Whether the signal has fired."""
        return self._state.fired

    @property
    def reason(self) -> Any:  # noqa: D401 - short form
        """Reason supplied at fire time (``None`` while unfired)."""
        return self._state.reason

    @property
    def subscriber_count(self) -> int:
        """Number of callbacks still waiting for the signal to fire."""
        with self._lock:
            return len(self._state.callbacks)

    def subscribe(self, callback: Callable[[], Any]) -> Subscription:
        """Register ``callback`` to run once when the signal fires.

        Subscribing to an already fired signal registers nothing; the
        returned handle is inert.
        """
        if not callable(callback):
            raise InvalidArgumentError(
                f"expected a callable, got {type(callback).__name__}",
                argument="callback",
            )
        subscription = Subscription()
        with self._lock:
            if not self._state.fired:
                self._state.callbacks[subscription.key] = callback
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a pending callback; unknown or spent handles are ignored."""
        with self._lock:
            self._state.callbacks.pop(subscription.key, None)

    def raise_if_fired(self) -> None:
        """Raise the reason (or ``CancelledError``) if the signal has fired."""
        if not self._state.fired:
            return
        reason = self._state.reason
        if isinstance(reason, BaseException):
            raise reason
        raise CancelledError("operation cancelled" if reason is None else str(reason))

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the signal fires or ``timeout`` elapses; return ``fired``.

        Returns only after every subscriber registered at fire time has run.
        """
        return self._event.wait(timeout)

    async def until_fired(self) -> Any:
        """Wait on the running event loop until the signal fires; return the reason.

        Safe to use when the signal is fired from another thread. Cancelling
        the awaiting task releases its subscription.
        """
        if self._state.fired:
            return self._state.reason
        loop = asyncio.get_running_loop()
        future: asyncio.Future[None] = loop.create_future()

        def _resolve() -> None:
            if not future.done():
                future.set_result(None)

        subscription = self.subscribe(lambda: loop.call_soon_threadsafe(_resolve))
        try:
            if not self._state.fired:
                await future
        finally:
            self.unsubscribe(subscription)
        return self._state.reason

    def _fire(self, reason: Any) -> bool:
        """Latch the signal and run subscribers; return ``False`` if already fired."""
        with self._lock:
            if self._state.fired:
                return False
            self._state.fired = True
            self._state.reason = reason
        try:
            self._dispatch()
        finally:
            self._event.set()
        return True

    def _dispatch(self) -> None:
        while True:
            with self._lock:
                if not self._state.callbacks:
                    return
                key = next(iter(self._state.callbacks))
                callback = self._state.callbacks.pop(key)
            try:
                callback()
            except Exception as exc:  # later subscribers still run
                log_event(
                    _logger,
                    "signal.callback_error",
                    level=logging.ERROR,
                    callback=repr(callback),
                    error=repr(exc),
                )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"Signal(fired={self._state.fired}, "
            f"reason={self._state.reason!r}, subscribers={len(self._state.callbacks)})"
        )


__all__ = ["Signal", "MISSING", "default_reason"]
