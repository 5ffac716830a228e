"""Background-thread timer backend.

Used when no asyncio loop is running. The callback runs on the timer's own
thread; ``keep_alive=False`` marks that thread as a daemon so a pending
deadline never blocks interpreter shutdown.
"""

from __future__ import annotations

import threading
from typing import Any, Callable


class ThreadTimer:
    """One-shot ``threading.Timer`` wrapper honouring the liveness flag.

    ``cancelled`` is true only when ``cancel`` stopped the timer before it
    elapsed; cancelling an elapsed timer changes nothing.
    """

    def __init__(self, seconds: float, callback: Callable[[], Any], *, keep_alive: bool = False) -> None:
        self.keep_alive = keep_alive
        self._callback = callback
        self._lock = threading.Lock()
        self._cancelled = False
        self._elapsed = False
        self._timer = threading.Timer(seconds, self._run)
        self._timer.daemon = not keep_alive
        self._timer.name = f"signal-compose-timer-{seconds:g}s"

    def start(self) -> "ThreadTimer":
        self._timer.start()
        return self

    def _run(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._elapsed = True
        self._callback()

    def cancel(self) -> None:
        with self._lock:
            if self._cancelled or self._elapsed:
                return
            self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def elapsed(self) -> bool:
        return self._elapsed

    @property
    def daemon(self) -> bool:
        return self._timer.daemon

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"ThreadTimer(keep_alive={self.keep_alive}, cancelled={self._cancelled})"


__all__ = ["ThreadTimer"]
