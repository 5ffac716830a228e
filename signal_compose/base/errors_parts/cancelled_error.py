"""Cancellation error type.

Defines the public ``CancelledError`` used as the default reason of a
``Source.fire`` call that supplies none, and raised by
``Signal.raise_if_fired`` when the stored reason is not itself an exception.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes that its signal has fired.

    Distinct from ``asyncio.CancelledError``: this one is an ordinary
    ``RuntimeError`` so cooperative cancellation can be handled without
    interfering with task cancellation.
    """

__all__ = ["CancelledError"]
