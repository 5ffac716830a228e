"""Combinators deriving new signals from existing ones.

- ``compose_any``: fires when any input fires (first reason wins).
- ``compose_all``: fires when all inputs have fired (last reason wins).
- ``compose_deadline``: fires on the input or after a duration.

Each call is a pure construction: it returns a new derived signal and owns
all subscriptions it creates, releasing them once the outcome is settled.
"""

from .all_signals import compose_all
from .any_signal import compose_any
from .deadline import compose_deadline
from .state import CompositionState

__all__ = ["compose_any", "compose_all", "compose_deadline", "CompositionState"]
