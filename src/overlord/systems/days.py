"""
Day cycle and rebellion for Duck Overlord.

A day lasts `max_visitors_per_day` counted visits. When it ends, unrest
is settled: misery feeds rebellion, and a rebellion at or above the
threshold either costs a planet and a fine or, for a broke overlord,
the throne. A surviving day is summarised against the day-start
snapshot and the summary is staged for the front end.
"""

from __future__ import annotations

import logging

from ..content.catalog import Catalog
from ..state.schema import DaySummary, GameOverReason, GameState
from ..tools.dice import RandomSource, pick
from .selector import request_visitor

logger = logging.getLogger(__name__)


LOW_HAPPINESS = 20
LOW_HAPPINESS_REBELLION = 5
REBELLION_THRESHOLD = 30
REBELLION_FINE = 100


def check_terminal(state: GameState) -> GameOverReason | None:
    """
    First terminal condition that holds, or None.

    Victory is checked before the losses so that a winning move is never
    overridden by a simultaneous bankruptcy or uprising.
    """
    if state.total_planets > 0 and state.owned_count == state.total_planets:
        return GameOverReason.VICTORY
    if state.player.coins == 0:
        return GameOverReason.BANKRUPTCY
    if state.owned_count == 0:
        return GameOverReason.TERRITORIAL_COLLAPSE
    if state.player.happiness == 0:
        return GameOverReason.UPRISING
    return None


def end_game(state: GameState, reason: GameOverReason) -> None:
    state.game_over = True
    state.game_over_reason = reason.value
    logger.info("Game over on day %d: %s", state.day, reason.name)


def _settle_rebellion(state: GameState, rng: RandomSource) -> list[str]:
    """Apply end-of-day unrest. Returns narrative for the reaction."""
    if state.player.happiness < LOW_HAPPINESS:
        state.rebellion_chance = min(
            GameState.MAX_REBELLION,
            state.rebellion_chance + LOW_HAPPINESS_REBELLION,
        )

    if state.rebellion_chance < REBELLION_THRESHOLD:
        return []

    if state.player.coins < REBELLION_FINE:
        end_game(state, GameOverReason.EXECUTION)
        return []

    lost = pick(state.owned_planets, rng)
    state.player.coins -= REBELLION_FINE
    state.rebellion_chance = 0
    if lost is None:
        return []

    state.set_planet_owned(lost.id, False)
    logger.info("Rebellion on day %d: lost %s", state.day, lost.id)
    return [
        f"Rebellion erupts on {lost.name}. You lose {REBELLION_FINE} coins "
        "and control of the world."
    ]


def _stage_summary(state: GameState) -> None:
    state.last_day_summary = DaySummary(
        day=state.day,
        coins_change=state.player.coins - state.day_start_coins,
        happiness_change=state.player.happiness - state.day_start_happiness,
        rebellion_change=state.rebellion_chance - state.day_start_rebellion,
    )
    state.pending_day_summary = True

    state.day += 1
    state.visits_today = 0
    state.visitors_seen_today = []

    state.day_start_coins = state.player.coins
    state.day_start_happiness = state.player.happiness
    state.day_start_rebellion = state.rebellion_chance


def end_day(state: GameState, rng: RandomSource) -> list[str]:
    """
    Close out the current day on an already-copied state.

    Returns narrative produced along the way (e.g. a rebellion report).
    If the rebellion ends the game, the day does not advance.
    """
    narrative = _settle_rebellion(state, rng)

    if not state.game_over:
        reason = check_terminal(state)
        if reason is not None:
            end_game(state, reason)

    if not state.game_over:
        _stage_summary(state)
        logger.debug("Day %d begins", state.day)

    return narrative


def acknowledge_day_summary(state: GameState, catalog: Catalog, rng: RandomSource) -> GameState:
    """Dismiss the day summary and bring in the next visitor."""
    if state.game_over:
        return state
    if not (state.show_day_summary or state.pending_day_summary):
        return state

    new = state.model_copy(deep=True)
    new.show_day_summary = False
    new.pending_day_summary = False
    new.reaction_text = None
    new.current_visitor = None
    new.choice_made = False
    return request_visitor(new, catalog, rng)
