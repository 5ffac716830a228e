"""Timeout reason synthesized by the deadline combinator."""

from __future__ import annotations

from typing import Optional


class DeadlineExceededError(TimeoutError):
    """Reason attached to a derived signal whose deadline elapsed.

    ``str()`` is always ``"Timeout"`` so callers can match on the message the
    same way as on the type; ``seconds`` records the configured duration.
    """

    def __init__(self, seconds: Optional[float] = None) -> None:
        super().__init__("Timeout")
        self.seconds = seconds

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"DeadlineExceededError(seconds={self.seconds!r})"


__all__ = ["DeadlineExceededError"]
