"""
Action dispatch for Duck Overlord.

dispatch(state, action, context) -> new state

The dispatcher routes an Action to the system that owns it. It never
resolves anything itself and never mutates the state it is given.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..content.catalog import Catalog
from ..state.actions import Action, ActionType
from ..state.schema import GameState, Gender, Player
from ..tools.dice import RandomSource
from .days import acknowledge_day_summary
from .effects import choose_option
from .selector import request_visitor


STARTING_COINS = 100
STARTING_HAPPINESS = 50
STARTING_TAX_RATE = 0.15
MAX_VISITORS_PER_DAY = 5


@dataclass
class EngineContext:
    """Everything an action needs besides the state: content and dice."""
    catalog: Catalog
    rng: RandomSource


def new_game(catalog: Catalog, name: str = "", gender: Gender | None = None) -> GameState:
    """Fresh state with the fixed starting resources."""
    return GameState(
        player=Player(
            name=name,
            gender=gender,
            coins=STARTING_COINS,
            happiness=STARTING_HAPPINESS,
        ),
        planets=catalog.fresh_planets(),
        tax_rate=STARTING_TAX_RATE,
        max_visitors_per_day=MAX_VISITORS_PER_DAY,
        day_start_coins=STARTING_COINS,
        day_start_happiness=STARTING_HAPPINESS,
        day_start_rebellion=0,
    )


def dispatch(state: GameState, action: Action, context: EngineContext) -> GameState:
    """Apply one action. Ignored actions return `state` itself."""
    if action.type == ActionType.INITIALIZE:
        return new_game(context.catalog, action.name, action.gender)
    if action.type == ActionType.RESET:
        return new_game(context.catalog)
    if action.type == ActionType.REQUEST_VISITOR:
        return request_visitor(state, context.catalog, context.rng)
    if action.type == ActionType.CHOOSE_OPTION:
        if action.option is None:
            return state
        return choose_option(state, action.option, context.rng)
    if action.type == ActionType.ACKNOWLEDGE_DAY_SUMMARY:
        return acknowledge_day_summary(state, context.catalog, context.rng)

    raise ValueError(f"Unknown action type: {action.type}")
