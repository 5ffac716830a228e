"""
Structured library error exception types.

``SignalComposeError`` carries a normalized `ErrorCode` for consistent
handling and structured logging. ``InvalidArgumentError`` is the only error
the combinators raise themselves: it reports a caller contract violation at
call time, never asynchronously.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class SignalComposeError(Exception):
    """Represents a structured library error with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        argument: Name of the offending argument, when one applies.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.INTERNAL
    argument: Optional[str] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining code, argument, and message."""
        if self.argument:
            return f"{self.code.value}: {self.argument}: {self.message}"
        return f"{self.code.value}: {self.message}"


@dataclass
class InvalidArgumentError(SignalComposeError, ValueError):
    """Raised synchronously when a combinator receives malformed input."""

    code: ErrorCode = ErrorCode.VALIDATION


__all__ = ["SignalComposeError", "InvalidArgumentError"]
