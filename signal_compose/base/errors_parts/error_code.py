"""
Normalized error codes for signal composition.

Defines the `ErrorCode` enumeration attached to `SignalComposeError` and
emitted in structured log events. Values are lowercase snake_case and are
considered a stable public contract.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    VALIDATION = "validation"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


__all__ = ["ErrorCode"]
