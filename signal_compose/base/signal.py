"""Set-once signal primitives (public API facade).

Purpose
-------
Expose the primitive the combinators are built on via the canonical
``signal_compose.base.signal`` import path while the concrete
implementations live under ``signal_parts``.

Notes
-----
- ``Signal`` is the observable, read-only side: ``fired``, ``reason``,
  ``subscribe``/``unsubscribe`` and waiting helpers.
- ``Source`` owns a ``Signal`` and exposes the idempotent ``fire``.
- ``Signal.prefired`` builds an already fired signal without a ``Source``.
"""

from .signal_parts.signal import Signal
from .signal_parts.source import Source
from .signal_parts.subscription import Subscription

__all__ = ["Signal", "Source", "Subscription"]
