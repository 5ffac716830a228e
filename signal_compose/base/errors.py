"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``signal_compose.base.errors_parts`` to maintain a stable import path while
enforcing the one-class-per-file governance rule.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.compose_error import InvalidArgumentError, SignalComposeError
from .errors_parts.cancelled_error import CancelledError
from .errors_parts.deadline_exceeded import DeadlineExceededError

__all__ = [
    "ErrorCode",
    "SignalComposeError",
    "InvalidArgumentError",
    "CancelledError",
    "DeadlineExceededError",
]
