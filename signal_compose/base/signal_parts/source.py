"""Write-capable owner of a ``Signal``."""

from __future__ import annotations

from typing import Any

from .signal import MISSING, Signal, default_reason


class Source:
    """Owns one ``Signal`` and exposes its single idempotent transition."""

    def __init__(self) -> None:
        self._signal = Signal()

    @property
    def signal(self) -> Signal:
        """The signal controlled by this source."""
        return self._signal

    @property
    def fired(self) -> bool:  # noqa: D401 - short form
        """Whether the owned signal has fired."""
        return self._signal.fired

    def fire(self, reason: Any = MISSING) -> bool:
        """Fire the signal with ``reason``; the first call wins.

        Returns ``True`` when this call performed the transition. An omitted
        reason becomes ``CancelledError("operation cancelled")``.
        """
        return self._signal._fire(default_reason() if reason is MISSING else reason)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"Source(signal={self._signal!r})"


__all__ = ["Source"]
