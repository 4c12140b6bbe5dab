"""Shared helpers for Duck Overlord."""

from .dice import (
    RandomSource,
    chance,
    make_rng,
    pick,
    roll_below,
    round_half_up,
    weighted_choice,
)

__all__ = [
    "RandomSource",
    "chance",
    "make_rng",
    "pick",
    "roll_below",
    "round_half_up",
    "weighted_choice",
]
