"""Internal state holder for signals.

Dataclass used by ``Signal`` to track the latch, the reason and the pending
callbacks. Callbacks live in an insertion-ordered dict keyed by subscription
id, which gives FIFO delivery and constant-time removal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict


@dataclass
class State:
    """Internal state for set-once signals."""

    fired: bool = False
    reason: Any = None
    callbacks: Dict[int, Callable[[], Any]] = field(default_factory=dict)


__all__ = ["State"]
