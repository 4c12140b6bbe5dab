"""
Visitor eligibility.

Pure predicate: each declared condition is an independent constraint and
all of them must hold. A visitor without conditions is always eligible.
"""

from ..state.schema import GameState, Visitor, VisitorConditions


# (condition field, state attribute) pairs compared as lower / upper bounds
_MIN_BOUNDS = (
    ("min_coins", "coins"),
    ("min_happiness", "happiness"),
    ("min_tax_rate", "tax_rate"),
    ("min_rebellion_chance", "rebellion_chance"),
)
_MAX_BOUNDS = (
    ("max_coins", "coins"),
    ("max_happiness", "happiness"),
    ("max_tax_rate", "tax_rate"),
    ("max_rebellion_chance", "rebellion_chance"),
)
# Condition fields that must equal the state field of the same meaning
_EQUALITY = (
    ("god_denied", "god_denied"),
    ("jester_hired", "jester_hired"),
    ("intern_hired", "intern_hired"),
    ("refugee_banned", "refugee_banned"),
    ("bounty_active", "bounty_active"),
    ("science_step", "scientist_step"),
)


def _state_value(state: GameState, name: str):
    if name in ("coins", "happiness"):
        return getattr(state.player, name)
    return getattr(state, name)


def conditions_met(conditions: VisitorConditions, state: GameState) -> bool:
    for cond_field, state_field in _MIN_BOUNDS:
        bound = getattr(conditions, cond_field)
        if bound is not None and _state_value(state, state_field) < bound:
            return False

    for cond_field, state_field in _MAX_BOUNDS:
        bound = getattr(conditions, cond_field)
        if bound is not None and _state_value(state, state_field) > bound:
            return False

    for cond_field, state_field in _EQUALITY:
        expected = getattr(conditions, cond_field)
        if expected is not None and _state_value(state, state_field) != expected:
            return False

    if conditions.requires_owned_planet is not None:
        planet = state.get_planet(conditions.requires_owned_planet)
        if planet is None or not planet.owned:
            return False

    if conditions.requires_planet_not_owned is not None:
        planet = state.get_planet(conditions.requires_planet_not_owned)
        if planet is not None and planet.owned:
            return False

    return True


def matches(visitor: Visitor, state: GameState) -> bool:
    """Whether `visitor` may appear in `state`."""
    if visitor.conditions is None:
        return True
    return conditions_met(visitor.conditions, state)
