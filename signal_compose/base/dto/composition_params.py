"""Typed argument objects validated at combinator call time.

Purpose
-------
Check combinator arguments at the boundary so a caller contract violation
surfaces immediately as ``InvalidArgumentError`` instead of failing later
inside a callback.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation.

Failure modes & side effects
----------------------------
- ``parse_composition`` / ``parse_deadline`` raise ``InvalidArgumentError``
  (``code=validation``). ``pydantic.ValidationError`` never escapes; it is
  kept on the error's ``raw`` attribute.
- The ``signals`` iterable is consumed exactly once.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors_parts.compose_error import InvalidArgumentError
from ..signal_parts.signal import Signal
from ..timers import MAX_SECONDS


class CompositionParams(BaseModel):
    """Inputs of ``compose_any`` / ``compose_all``.

    Attributes
    ----------
    signals:
        Captured input signals in iteration order. Duplicates are kept.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    signals: List[Signal] = Field(default_factory=list)


class DeadlineParams(BaseModel):
    """Inputs of ``compose_deadline``.

    Attributes
    ----------
    signal:
        The single input signal.
    seconds:
        Non-negative finite duration no longer than ``MAX_SECONDS``; a
        ``timedelta`` is converted to seconds.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    signal: Signal
    seconds: float = Field(ge=0, le=MAX_SECONDS, allow_inf_nan=False)

    @field_validator("seconds", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> Any:
        if isinstance(value, timedelta):
            return value.total_seconds()
        if isinstance(value, (bool, str, bytes)):
            raise ValueError(f"expected a number of seconds or timedelta, got {type(value).__name__}")
        return value


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def parse_composition(signals: Iterable[Signal]) -> CompositionParams:
    """Materialize and validate the ``signals`` argument."""
    if isinstance(signals, (str, bytes, Signal)):
        raise InvalidArgumentError(
            f"expected an iterable of Signal, got {type(signals).__name__}",
            argument="signals",
        )
    try:
        items = list(signals)
    except TypeError as exc:
        raise InvalidArgumentError(
            f"expected an iterable of Signal, got {type(signals).__name__}",
            argument="signals",
            raw=exc,
        ) from exc
    try:
        return CompositionParams(signals=items)
    except ValidationError as exc:
        raise InvalidArgumentError(_describe(exc), argument="signals", raw=exc) from exc


def parse_deadline(signal: Signal, seconds: float | timedelta) -> DeadlineParams:
    """Validate the ``compose_deadline`` arguments."""
    try:
        return DeadlineParams(signal=signal, seconds=seconds)
    except ValidationError as exc:
        argument = str(exc.errors()[0]["loc"][0]) if exc.errors() else None
        raise InvalidArgumentError(_describe(exc), argument=argument, raw=exc) from exc


__all__ = ["CompositionParams", "DeadlineParams", "parse_composition", "parse_deadline"]
