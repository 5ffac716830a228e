"""Error taxonomy implementations (one class per file)."""

from .error_code import ErrorCode
from .compose_error import SignalComposeError, InvalidArgumentError
from .cancelled_error import CancelledError
from .deadline_exceeded import DeadlineExceededError

__all__ = [
    "ErrorCode",
    "SignalComposeError",
    "InvalidArgumentError",
    "CancelledError",
    "DeadlineExceededError",
]
