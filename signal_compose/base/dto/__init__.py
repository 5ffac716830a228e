"""DTO validation package for combinator arguments."""

from .composition_params import (
    CompositionParams,
    DeadlineParams,
    parse_composition,
    parse_deadline,
)

__all__ = [
    "CompositionParams",
    "DeadlineParams",
    "parse_composition",
    "parse_deadline",
]
