"""
Effect resolution for Duck Overlord.

Pure function: choose_option(state, option_ref, rng) -> new state.

Resolution order:
1. Guard: game running, a visitor awaiting a choice, no day summary,
   option belongs to the visitor, and the player can pay for it.
2. Numeric deltas, clamped to their ranges.
3. Planet annexation.
4. The option's special effect (gamble, prophecy, war, ...).
5. Terminal checks.
6. Visit bookkeeping and, when the day is full, the day cycle.

Invalid or unaffordable choices return the input state untouched.
"""

from __future__ import annotations

import logging

from ..content import scripted
from ..state.schema import (
    BountyEffect,
    BountyStage,
    FlagEffect,
    GambleEffect,
    GameState,
    ProphecyEffect,
    ScienceEffect,
    TaxCollectionEffect,
    VisitorOption,
    WarDiscountEffect,
    WarEffect,
    WarSurrenderEffect,
)
from ..tools.dice import RandomSource, chance, round_half_up
from .days import check_terminal, end_day, end_game
from .war import apply_war

logger = logging.getLogger(__name__)


GAMBLE_WIN_CHANCE = 0.5
GAMBLE_WIN = {"coins": 150, "happiness": 10, "rebellion": -5}
GAMBLE_LOSS = {"coins": -75, "happiness": -15, "rebellion": 5}
TAX_PER_PLANET = 100

OptionRef = VisitorOption | str | int


def clamp_resources(state: GameState) -> None:
    """Pull every resource back into its legal range."""
    state.player.coins = max(0, state.player.coins)
    state.player.happiness = max(0, min(100, state.player.happiness))
    state.tax_rate = round(max(0.0, min(GameState.MAX_TAX_RATE, state.tax_rate)), 4)
    state.rebellion_chance = max(0, state.rebellion_chance)


def resolve_option_ref(state: GameState, option_ref: OptionRef) -> VisitorOption | None:
    """Find the option on the current visitor by object, id or index."""
    visitor = state.current_visitor
    if visitor is None:
        return None

    if isinstance(option_ref, VisitorOption):
        option_ref = option_ref.id
    if isinstance(option_ref, int) and not isinstance(option_ref, bool):
        if 0 <= option_ref < len(visitor.options):
            return visitor.options[option_ref]
        return None
    if isinstance(option_ref, str):
        return visitor.get_option(option_ref)
    return None


def can_afford(state: GameState, option: VisitorOption) -> bool:
    cost = option.effects.coins
    return cost >= 0 or state.player.coins + cost >= 0


def prophecy_for(rebellion_chance: int) -> str:
    if rebellion_chance >= 30:
        return "Rebellion is coming. Try to make your citizens happy, or you will be overthrown."
    if rebellion_chance >= 20:
        return (
            "Ire blazes in the hearts of your ducks. "
            "The talons of rebellion may soon clutch your empire."
        )
    return "Your rule is stable. Your subjects are content under your reign."


def _gamble(state: GameState, rng: RandomSource) -> str:
    won = chance(GAMBLE_WIN_CHANCE, rng)
    swing = GAMBLE_WIN if won else GAMBLE_LOSS
    state.player.coins += swing["coins"]
    state.player.happiness += swing["happiness"]
    state.rebellion_chance += swing["rebellion"]
    clamp_resources(state)
    if won:
        return "You are an eggstraordinary being. Your vaults are now filled to the brim."
    return "Your empire is slowly quacking apart. Your wealth and reputation are flying away."


def _collect_taxes(state: GameState) -> str:
    income = round_half_up(state.owned_count * TAX_PER_PLANET * state.tax_rate)
    state.player.coins += income
    return f"Your ledgers swell by {income} coins from your subjects' labor."


def _bounty(state: GameState, effect: BountyEffect) -> None:
    if effect.stage == BountyStage.STAND_DOWN:
        state.bounty_active = False
        state.bounty_next_report_day = None
        state.bounty_failures = 0
        return
    if effect.stage == BountyStage.CONTINUE:
        state.bounty_failures += 1
    state.bounty_active = True
    state.bounty_next_report_day = state.day + 1


def _surrender(state: GameState, effect: WarSurrenderEffect) -> str:
    planet = state.set_planet_owned(effect.planet_id, False)
    return f"You abandon {planet.name if planet else 'the world'}."


def apply_special(state: GameState, option: VisitorOption, rng: RandomSource) -> list[str]:
    """Run the option's special effect. Returns extra narrative."""
    special = option.effects.special
    if special is None:
        return []

    if isinstance(special, GambleEffect):
        return [_gamble(state, rng)]
    if isinstance(special, ProphecyEffect):
        return [prophecy_for(state.rebellion_chance)]
    if isinstance(special, TaxCollectionEffect):
        return [_collect_taxes(state)]
    if isinstance(special, BountyEffect):
        _bounty(state, special)
        return []
    if isinstance(special, ScienceEffect):
        state.scientist_step = special.step
        return []
    if isinstance(special, WarEffect):
        outcome = apply_war(state, special, rng)
        state.war_discount = 1.0
        logger.debug(
            "War %s: invested %d vs %d, p=%.2f, won=%s",
            outcome.campaign.value, outcome.investment,
            outcome.enemy_strength, outcome.win_chance, outcome.won,
        )
        return [outcome.narrative]
    if isinstance(special, WarSurrenderEffect):
        return [_surrender(state, special)]
    if isinstance(special, FlagEffect):
        setattr(state, special.flag.value, True)
        return []
    if isinstance(special, WarDiscountEffect):
        state.war_discount = special.factor
        return []

    raise TypeError(f"Unhandled special effect: {special!r}")


def _join(parts: list[str]) -> str:
    return " ".join(p.strip() for p in parts if p and p.strip())


def choose_option(state: GameState, option_ref: OptionRef, rng: RandomSource) -> GameState:
    """Resolve the player's choice for the current visitor."""
    if state.game_over or state.pending_day_summary or state.show_day_summary:
        return state
    if not state.awaiting_choice:
        return state

    option = resolve_option_ref(state, option_ref)
    if option is None:
        logger.debug("Ignoring unknown option %r", option_ref)
        return state
    if not can_afford(state, option):
        logger.debug(
            "Rejecting %s: costs %d, have %d",
            option.id, -option.effects.coins, state.player.coins,
        )
        return state

    new = state.model_copy(deep=True)
    visitor_id = new.current_visitor.id
    effects = option.effects

    new.player.coins += effects.coins
    new.player.happiness += effects.happiness
    new.tax_rate += effects.tax_rate_delta
    new.rebellion_chance += effects.rebellion_delta
    clamp_resources(new)

    if effects.add_planet_id:
        new.set_planet_owned(effects.add_planet_id, True)

    narrative = apply_special(new, option, rng)
    clamp_resources(new)

    new.choice_made = True
    new.reaction_text = _join([option.reaction, *narrative]) or None

    reason = check_terminal(new)
    if reason is not None:
        end_game(new, reason)
    else:
        if visitor_id not in new.visitors_seen_today:
            new.visitors_seen_today.append(visitor_id)
        if visitor_id not in scripted.NON_COUNTING_VISITORS:
            new.visits_today += 1

        if new.visits_today >= new.max_visitors_per_day:
            narrative += end_day(new, rng)
            new.reaction_text = _join([option.reaction, *narrative]) or None

    if new.game_over:
        extra = _join(narrative)
        if extra:
            new.game_over_reason = f"{extra} {new.game_over_reason}"
        new.reaction_text = None

    logger.debug("Chose %s for %s on day %d", option.id, visitor_id, new.day)
    return new
