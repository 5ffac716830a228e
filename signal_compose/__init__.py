"""signal_compose package

Combinators that derive new cancellation signals from existing ones.

Purpose:
    Coordinate cancellation across concurrent or asynchronous operations by
    composing set-once signals: fire when any input fires, when all inputs
    have fired, or when an input fires or a deadline elapses.

Public API (re-exported):
    - Version: ``__version__``
    - Combinators: :func:`compose_any`, :func:`compose_all`,
      :func:`compose_deadline`
    - Primitives: :class:`Signal`, :class:`Source`, :class:`Subscription`
    - Exceptions: :class:`SignalComposeError`, :class:`InvalidArgumentError`,
      :class:`CancelledError`, :class:`DeadlineExceededError`,
      :class:`ErrorCode`

Example:
    >>> from signal_compose import Source, compose_any
    >>> a, b = Source(), Source()
    >>> derived = compose_any([a.signal, b.signal])
    >>> a.fire("stop")
    True
    >>> derived.fired, derived.reason
    (True, 'stop')
"""

from .base.errors import (
    CancelledError,
    DeadlineExceededError,
    ErrorCode,
    InvalidArgumentError,
    SignalComposeError,
)
from .base.signal import Signal, Source, Subscription
from .combinators import compose_all, compose_any, compose_deadline

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Combinators
    "compose_any",
    "compose_all",
    "compose_deadline",
    # Primitives
    "Signal",
    "Source",
    "Subscription",
    # Exceptions
    "SignalComposeError",
    "InvalidArgumentError",
    "CancelledError",
    "DeadlineExceededError",
    "ErrorCode",
]
