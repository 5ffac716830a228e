"""
Signal Compose Base Package

Exports the primitives the combinators are built on:
- Signal / Source / Subscription: the set-once signal pair
- Timers: one-shot timer primitive with an explicit liveness flag
- Errors: normalized error taxonomy
- DTOs: call-time argument validation
"""

from .errors import (
    CancelledError,
    DeadlineExceededError,
    ErrorCode,
    InvalidArgumentError,
    SignalComposeError,
)
from .signal import Signal, Source, Subscription
from .timers import TimerConfig, TimerHandle, cancel_timer, get_timer_config, start_timer

__all__ = [
    # Errors
    "ErrorCode",
    "SignalComposeError",
    "InvalidArgumentError",
    "CancelledError",
    "DeadlineExceededError",
    # Signals
    "Signal",
    "Source",
    "Subscription",
    # Timers
    "TimerConfig",
    "TimerHandle",
    "get_timer_config",
    "start_timer",
    "cancel_timer",
]
