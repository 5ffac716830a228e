"""One-shot timer primitive and its configuration.

This module is the single place that schedules wall-clock callbacks for the
combinators. It picks a backend per call and exposes the liveness flag
explicitly instead of relying on host defaults.

Key Components
--------------
TimerConfig
    Frozen dataclass with the normalized timer settings.

get_timer_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use and again only when the relevant variables change. Supported
    environment variables (all optional):
        SIGNAL_COMPOSE_TIMER_KEEP_ALIVE   (1/true/yes/on; default off)
        SIGNAL_COMPOSE_TIMER_BACKEND      (auto | thread | loop; default auto)

start_timer(seconds, callback, *, keep_alive=None, backend=None)
    Schedules ``callback`` once after ``seconds``. With the ``auto`` backend
    the timer is bound to the running asyncio loop when there is one,
    otherwise it runs on a daemon ``threading.Timer``.

Failure Modes
-------------
``InvalidArgumentError`` for a negative or non-numeric duration or a
non-callable callback. Forcing the ``loop`` backend outside a running loop
degrades to the thread backend and logs ``timer.backend_fallback``.
"""
from __future__ import annotations

import asyncio
import logging
import math
import os
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors_parts.compose_error import InvalidArgumentError
from .logging import get_logger, log_event
from .timer_parts.loop_timer import LoopTimer
from .timer_parts.thread_timer import ThreadTimer
from .timer_parts.timer_handle import TimerHandle

KEEP_ALIVE_ENV = "SIGNAL_COMPOSE_TIMER_KEEP_ALIVE"
BACKEND_ENV = "SIGNAL_COMPOSE_TIMER_BACKEND"
BACKENDS = ("auto", "thread", "loop")
# Longest wait a ``threading.Timer`` can perform on this platform.
MAX_SECONDS = threading.TIMEOUT_MAX

_logger = get_logger("timers")


@dataclass(frozen=True)
class TimerConfig:
    """Container for normalized timer settings.

    Attributes:
        keep_alive: Whether timers may keep the process alive. Off by
            default: a pending deadline is a best-effort background timer.
        backend: ``"auto"``, ``"thread"`` or ``"loop"``.
    """

    keep_alive: bool = False
    backend: str = "auto"


_CACHED: TimerConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_backend(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip().lower()
    return raw if raw in BACKENDS else default


def get_timer_config() -> TimerConfig:
    """Return the process-cached `TimerConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = "/".join([os.getenv(KEEP_ALIVE_ENV, ""), os.getenv(BACKEND_ENV, "")])
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    _CACHED = TimerConfig(
        keep_alive=_parse_env_bool(KEEP_ALIVE_ENV, False),
        backend=_parse_env_backend(BACKEND_ENV, "auto"),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def _validate_seconds(seconds: Any) -> float:
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise InvalidArgumentError(
            f"expected a number of seconds, got {type(seconds).__name__}",
            argument="seconds",
        )
    if math.isnan(seconds) or seconds < 0:
        raise InvalidArgumentError(f"must be non-negative, got {seconds!r}", argument="seconds")
    if seconds > MAX_SECONDS:
        raise InvalidArgumentError(f"must not exceed {MAX_SECONDS:g}, got {seconds!r}", argument="seconds")
    return float(seconds)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def start_timer(
    seconds: float,
    callback: Callable[[], Any],
    *,
    keep_alive: Optional[bool] = None,
    backend: Optional[str] = None,
) -> TimerHandle:
    """Schedule ``callback`` to run once after ``seconds``.

    ``keep_alive`` and ``backend`` default to :func:`get_timer_config`.
    Returns a handle whose ``cancel`` is idempotent.
    """
    delay = _validate_seconds(seconds)
    if not callable(callback):
        raise InvalidArgumentError("expected a callable", argument="callback")
    cfg = get_timer_config()
    keep = cfg.keep_alive if keep_alive is None else keep_alive
    mode = backend or cfg.backend
    if mode not in BACKENDS:
        raise InvalidArgumentError(f"unknown timer backend {mode!r}", argument="backend")

    loop = _running_loop() if mode in ("auto", "loop") else None
    if loop is not None:
        return LoopTimer(loop, delay, callback, keep_alive=keep)
    if mode == "loop":
        log_event(_logger, "timer.backend_fallback", level=logging.WARNING, requested="loop", used="thread")
    return ThreadTimer(delay, callback, keep_alive=keep).start()


def cancel_timer(handle: TimerHandle | None) -> None:
    """Cancel ``handle`` if given; safe on elapsed or cancelled timers."""
    if handle is not None:
        handle.cancel()


__all__ = [
    "MAX_SECONDS",
    "TimerConfig",
    "TimerHandle",
    "get_timer_config",
    "start_timer",
    "cancel_timer",
]
