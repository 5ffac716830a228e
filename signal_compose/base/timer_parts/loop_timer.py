"""Event-loop timer backend.

Schedules the callback with ``loop.call_later`` so it runs on the loop thread,
keeping composition single-threaded inside asyncio programs. An asyncio
timer never keeps a loop running on its own, so ``keep_alive`` is recorded
for introspection only.

``cancel`` may be called from any thread: off the loop thread the underlying
handle is cancelled through ``call_soon_threadsafe``, and the callback checks
the cancelled flag itself so it never runs after ``cancel`` returns.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable


def _on_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


class LoopTimer:
    """One-shot ``loop.call_later`` wrapper."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        seconds: float,
        callback: Callable[[], Any],
        *,
        keep_alive: bool = False,
    ) -> None:
        self.keep_alive = keep_alive
        self._loop = loop
        self._callback = callback
        self._lock = threading.Lock()
        self._cancelled = False
        self._elapsed = False
        self._handle = loop.call_later(seconds, self._run)

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
        if _on_loop_thread(self._loop):
            self._handle.cancel()
        elif not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._handle.cancel)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def elapsed(self) -> bool:
        return self._elapsed

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"LoopTimer(when={self._handle.when()!r}, cancelled={self._cancelled})"


__all__ = ["LoopTimer"]
