"""Subscription handle returned by ``Signal.subscribe``."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field

_ids = itertools.count(1)


@dataclass(frozen=True)
class Subscription:
    """Opaque handle identifying one registered callback.

    Handles are only meaningful to the signal that issued them; passing a
    foreign or stale handle to ``Signal.unsubscribe`` is a no-op.
    """

    key: int = field(default_factory=lambda: next(_ids))


__all__ = ["Subscription"]
