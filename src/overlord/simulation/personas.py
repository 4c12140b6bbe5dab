"""
Autoplay personas for balance testing.

Each persona scores the affordable options of the current visitor and
picks the best one (ties go to the earlier option). The chaotic persona
ignores scores and picks at random.
"""

from typing import Callable

from ..state.schema import (
    GambleEffect,
    GameState,
    VisitorOption,
    WarEffect,
    WarSurrenderEffect,
)
from ..systems.effects import can_afford
from ..tools.dice import RandomSource, pick

Scorer = Callable[[GameState, VisitorOption], float]


def _cautious_score(state: GameState, option: VisitorOption) -> float:
    """Keep the peace, keep a cushion of coins, never gamble."""
    e = option.effects
    score = e.happiness * 1.5 - e.rebellion_delta * 2.0 - e.tax_rate_delta * 100
    # Coins matter more the closer we are to bankruptcy
    coin_weight = 0.5 if state.player.coins < 100 else 0.1
    score += e.coins * coin_weight
    if e.add_planet_id:
        score += 40
    if isinstance(e.special, GambleEffect):
        score -= 50
    if isinstance(e.special, WarEffect):
        score -= 20
    if isinstance(e.special, WarSurrenderEffect):
        score -= 30
    return score


def _greedy_score(state: GameState, option: VisitorOption) -> float:
    """Hoard coins and grab planets; happiness only matters near zero."""
    e = option.effects
    score = e.coins * 1.0 - e.rebellion_delta * 0.5
    if state.player.happiness < 25:
        score += e.happiness * 2.0
    if e.add_planet_id:
        score += 200
    if isinstance(e.special, WarEffect):
        score += e.special.investment * 1.2
    if isinstance(e.special, GambleEffect):
        score += 30
    if isinstance(e.special, WarSurrenderEffect):
        score -= 100
    return score


PERSONAS: dict[str, dict] = {
    "cautious": {
        "name": "Cautious",
        "description": "Protects happiness and avoids risk.",
        "scorer": _cautious_score,
    },
    "greedy": {
        "name": "Greedy",
        "description": "Maximizes coins and conquers whenever possible.",
        "scorer": _greedy_score,
    },
    "chaotic": {
        "name": "Chaotic",
        "description": "Picks any affordable option at random.",
        "scorer": None,
    },
}


def get_persona(name: str) -> dict:
    """Look up a persona, falling back to cautious."""
    return PERSONAS.get(name, PERSONAS["cautious"])


def choose(persona: str, state: GameState, rng: RandomSource) -> VisitorOption | None:
    """Pick an option for the current visitor, or None if nothing is affordable."""
    visitor = state.current_visitor
    if visitor is None:
        return None

    affordable = [o for o in visitor.options if can_afford(state, o)]
    if not affordable:
        return None

    scorer: Scorer | None = get_persona(persona)["scorer"]
    if scorer is None:
        return pick(affordable, rng)
    return max(affordable, key=lambda o: scorer(state, o))
