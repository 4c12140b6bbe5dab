"""
Visitor selection for Duck Overlord.

Decides who walks into the throne room next. Scripted encounters are
checked as an ordered list of guards (first match wins); if none fires,
a visitor is drawn from the catalog by weight among those that are
eligible and have not been seen today.

Guards may also update side-quest state as they fire (the god's wrath
clears its flag, a successful bounty report closes the contract), so a
guard returns the visitor and edits the copied state it was handed.
"""

from __future__ import annotations

import logging
from typing import Callable

from ..content import scripted
from ..content.catalog import Catalog
from ..state.schema import GameState, Visitor
from ..tools.dice import RandomSource, chance, pick, weighted_choice
from .conditions import matches

logger = logging.getLogger(__name__)


HAPPY_CITIZEN_MIN_HAPPINESS = 80
SCIENTIST_VISIT_CHANCE = 0.3
BOUNTY_SUCCESS_CHANCE = 0.6
TAX_DAY_INTERVAL = 5
WAR_DEFENSE_CHANCE = 0.1
WAR_DEFENSE_MIN_DAY = 4
WAR_ATTACK_CHANCE = 0.3
WAR_ATTACK_MIN_COINS = 150


Guard = Callable[[GameState, Catalog, RandomSource], Visitor | None]


def _tutorial(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if state.day == 1 and state.visits_today < 2:
        return scripted.tutorial_visitor(state.visits_today)
    return None


def _happy_citizen(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    last_slot = state.visits_today == state.max_visitors_per_day - 1
    if last_slot and state.player.happiness >= HAPPY_CITIZEN_MIN_HAPPINESS:
        return scripted.happy_citizen_visitor(state.owned_count)
    return None


def _god_wrath(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if state.god_denied:
        state.god_denied = False
        return scripted.god_wrath_visitor(state.player.coins)
    return None


def _jester(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if state.jester_hired and not state.has_seen(scripted.JESTER_ID):
        return scripted.jester_visitor()
    return None


def _intern(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if state.intern_hired and not state.has_seen(scripted.INTERN_ID):
        return scripted.intern_visitor(pick(scripted.INTERN_TEXTS, rng))
    return None


def _scientist_funding(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if state.scientist_step == 1 and chance(SCIENTIST_VISIT_CHANCE, rng):
        return scripted.scientist_funding_visitor()
    return None


def _scientist_complete(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if state.scientist_step == 2 and chance(SCIENTIST_VISIT_CHANCE, rng):
        return scripted.scientist_complete_visitor()
    return None


def _bounty_report(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    due = (
        state.bounty_active
        and state.bounty_next_report_day is not None
        and state.day >= state.bounty_next_report_day
        and state.visits_today == 0
    )
    if not due:
        return None

    hunter = catalog.get_visitor(scripted.BOUNTY_HUNTER_ID)
    name = hunter.name if hunter else "Bounty Huntress"
    sprite = hunter.sprite if hunter else "bounty_huntress.png"

    if chance(BOUNTY_SUCCESS_CHANCE, rng):
        logger.debug("Bounty report on day %d: success", state.day)
        state.bounty_active = False
        state.bounty_next_report_day = None
        state.bounty_failures = 0
        return scripted.bounty_success_visitor(name, sprite)

    logger.debug("Bounty report on day %d: target escaped", state.day)
    return scripted.bounty_failure_visitor(name, sprite, state.bounty_failures)


def _tax_collector(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if (
        state.day % TAX_DAY_INTERVAL == 0
        and state.visits_today == 0
        and state.owned_count > 0
        and not state.has_seen(scripted.TAX_COLLECTOR_ID)
    ):
        return scripted.tax_collector_visitor()
    return None


def _war_defense(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if not chance(WAR_DEFENSE_CHANCE, rng):
        return None
    if state.day < WAR_DEFENSE_MIN_DAY or state.has_seen(scripted.WAR_GENERAL_ID):
        return None

    ours = pick(state.owned_planets, rng)
    enemy = pick(state.unowned_planets, rng)
    if ours is None or enemy is None:
        return None
    return scripted.war_defense_visitor(ours, enemy, state.war_discount)


def _war_attack(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    if state.player.coins < WAR_ATTACK_MIN_COINS:
        return None
    if not chance(WAR_ATTACK_CHANCE, rng) or state.has_seen(scripted.WAR_GENERAL_ID):
        return None

    enemy = pick(state.unowned_planets, rng)
    if enemy is None:
        return None
    return scripted.war_attack_visitor(enemy, state.war_discount)


# Evaluated in order; the first guard to return a visitor wins.
GUARDS: tuple[Guard, ...] = (
    _tutorial,
    _happy_citizen,
    _god_wrath,
    _jester,
    _intern,
    _scientist_funding,
    _scientist_complete,
    _bounty_report,
    _tax_collector,
    _war_defense,
    _war_attack,
)


def eligible_visitors(state: GameState, catalog: Catalog) -> list[Visitor]:
    """Catalog visitors whose conditions hold and who have not come today."""
    return [
        v for v in catalog.visitors
        if matches(v, state) and not state.has_seen(v.id)
    ]


def draw_from_catalog(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    """Weighted draw: P(v) = weight(v) / sum of eligible weights."""
    pool = eligible_visitors(state, catalog)
    return weighted_choice(pool, lambda v: v.weight, rng)


def select_visitor(state: GameState, catalog: Catalog, rng: RandomSource) -> Visitor | None:
    """
    Choose the next visitor for `state`, editing it for guard side effects.

    `state` must be a private copy; callers own the snapshot they pass in.
    """
    for guard in GUARDS:
        visitor = guard(state, catalog, rng)
        if visitor is not None:
            logger.debug("Guard %s selected %s", guard.__name__, visitor.id)
            return visitor

    visitor = draw_from_catalog(state, catalog, rng)
    if visitor is None:
        logger.debug("No eligible visitors on day %d", state.day)
    else:
        logger.debug("Drew %s from catalog", visitor.id)
    return visitor


def request_visitor(state: GameState, catalog: Catalog, rng: RandomSource) -> GameState:
    """
    Advance the throne room to the next visitor.

    Does nothing while the game is over, a summary is on screen, or a
    visitor is still waiting for a decision. A pending day summary is
    shown instead of drawing a visitor.
    """
    if state.blocked:
        return state

    if state.pending_day_summary:
        new = state.model_copy(deep=True)
        new.show_day_summary = True
        new.pending_day_summary = False
        new.current_visitor = None
        new.choice_made = False
        new.reaction_text = None
        return new

    if state.awaiting_choice:
        return state

    new = state.model_copy(deep=True)
    new.reaction_text = None
    new.choice_made = False
    new.current_visitor = select_visitor(new, catalog, rng)
    return new
