"""
Randomness helpers for Duck Overlord.

Every random decision in the engine goes through a RandomSource, which
only needs a `random()` method returning a float in [0, 1).
`random.Random` qualifies, so a seeded instance gives reproducible games.
"""

import math
import random
from typing import Callable, Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    def random(self) -> float:
        ...


def make_rng(seed: int | None = None) -> random.Random:
    """Create the shared generator. `None` seeds from the OS."""
    return random.Random(seed)


def chance(probability: float, rng: RandomSource) -> bool:
    """Single Bernoulli trial."""
    return rng.random() < probability


def roll_below(n: int, rng: RandomSource) -> int:
    """Uniform integer in [0, n)."""
    return min(n - 1, int(math.floor(rng.random() * n)))


def pick(items: Sequence[T], rng: RandomSource) -> T | None:
    """Uniform choice, or None for an empty sequence."""
    if not items:
        return None
    return items[roll_below(len(items), rng)]


def weighted_choice(
    items: Sequence[T],
    weight: Callable[[T], float],
    rng: RandomSource,
) -> T | None:
    """
    Choose an item with probability proportional to its weight.

    Walks the cumulative weights with one draw. Falls back to the last item
    if float error leaves the draw past the end.
    """
    if not items:
        return None

    total = sum(weight(item) for item in items)
    r = rng.random() * total
    for item in items:
        w = weight(item)
        if r < w:
            return item
        r -= w
    return items[-1]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python rounds to even)."""
    return int(math.floor(value + 0.5))
