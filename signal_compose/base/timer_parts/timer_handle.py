"""Structural contract shared by the timer backends."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """A pending one-shot timer.

    ``cancel`` is idempotent and a no-op once the timer has elapsed, so
    ``cancelled`` and ``elapsed`` are never both true.
    ``keep_alive`` reports whether the timer may hold the process open.
    """

    keep_alive: bool

    def cancel(self) -> None:
        ...

    @property
    def cancelled(self) -> bool:
        ...

    @property
    def elapsed(self) -> bool:
        ...


__all__ = ["TimerHandle"]
