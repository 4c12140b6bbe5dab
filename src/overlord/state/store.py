"""
Game state store.

Owns the current GameState snapshot, runs actions through the pure
dispatcher and tells subscribers what changed. This is the only object a
front end needs:

    store = GameStore(seed=42)
    store.subscribe(lambda event: render(event.data["state"]))
    store.initialize("Daisy", "female")
    store.request_visitor()
    store.choose_option(0)
"""

from __future__ import annotations

import logging
from typing import Callable

from ..content.catalog import Catalog, get_default_catalog
from ..systems.effects import can_afford, resolve_option_ref
from ..systems.turns import EngineContext, dispatch, new_game
from ..tools.dice import RandomSource, make_rng
from .actions import Action, ActionType
from .event_bus import EventBus, EventHandler, EventType, get_event_bus
from .schema import GameState, Gender, VisitorOption

logger = logging.getLogger(__name__)


class GameStore:
    """
    Holds one game and exposes the engine actions.

    Every action returns the (possibly unchanged) current snapshot.
    Snapshots are never mutated after they are handed out, so callers may
    keep references to old states for diffing or undo displays.
    """

    def __init__(
        self,
        catalog: Catalog | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
        bus: EventBus | None = None,
    ):
        """
        Args:
            catalog: Content tables; defaults to the bundled catalog
            rng: Random source; overrides `seed` when given
            seed: Seed for a fresh generator (None = nondeterministic)
            bus: Event bus for notifications; defaults to the global bus
        """
        self.catalog = catalog or get_default_catalog()
        self.rng = rng if rng is not None else make_rng(seed)
        self.bus = bus or get_event_bus()
        self._context = EngineContext(catalog=self.catalog, rng=self.rng)
        self._state = new_game(self.catalog)

    @property
    def state(self) -> GameState:
        return self._state

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """Call `handler` after every state change. Returns an unsubscribe."""
        self.bus.on(EventType.STATE_CHANGED, handler)
        return lambda: self.bus.off(EventType.STATE_CHANGED, handler)

    # ─── Actions ─────────────────────────────────────────────────

    def initialize(self, name: str, gender: Gender | str | None = None) -> GameState:
        return self.dispatch(Action.initialize(name, gender))

    def request_visitor(self) -> GameState:
        return self.dispatch(Action.request_visitor())

    def choose_option(self, option: VisitorOption | str | int) -> GameState:
        return self.dispatch(Action.choose(option))

    def acknowledge_day_summary(self) -> GameState:
        return self.dispatch(Action.acknowledge_day_summary())

    def reset(self) -> GameState:
        return self.dispatch(Action.reset())

    def dispatch(self, action: Action) -> GameState:
        before = self._state
        after = dispatch(before, action, self._context)

        if after is before:
            self._report_ignored(before, action)
            return before

        self._check_invariants(before, after)
        self._state = after
        self._publish(before, after, action)
        return after

    # ─── Internals ───────────────────────────────────────────────

    def _report_ignored(self, state: GameState, action: Action) -> None:
        if action.type != ActionType.CHOOSE_OPTION or not state.awaiting_choice:
            return
        if state.game_over or state.pending_day_summary or state.show_day_summary:
            return
        option = resolve_option_ref(state, action.option)
        if option is not None and not can_afford(state, option):
            self.bus.emit(
                EventType.OPTION_REJECTED,
                day=state.day,
                visitor_id=state.current_visitor.id,
                option_id=option.id,
                cost=-option.effects.coins,
                coins=state.player.coins,
            )

    @staticmethod
    def _check_invariants(before: GameState, after: GameState) -> None:
        """Fail fast on impossible states (stripped under python -O)."""
        assert after.player.coins >= 0, after.player.coins
        assert 0 <= after.player.happiness <= 100, after.player.happiness
        assert 0 <= after.tax_rate <= GameState.MAX_TAX_RATE, after.tax_rate
        assert after.rebellion_chance >= 0, after.rebellion_chance
        assert 0 <= after.scientist_step <= 3, after.scientist_step
        assert after.visits_today <= after.max_visitors_per_day, after.visits_today
        if before.game_over and after.game_over is False:
            # Only a fresh game may clear game over
            assert after.day == 1 and after.visits_today == 0

    def _publish(self, before: GameState, after: GameState, action: Action) -> None:
        day = after.day

        if action.type == ActionType.INITIALIZE:
            self.bus.emit(EventType.GAME_STARTED, day=day, player=after.player.name)
        elif action.type == ActionType.RESET:
            self.bus.emit(EventType.GAME_RESET, day=day)

        if action.type == ActionType.CHOOSE_OPTION and before.current_visitor:
            option = resolve_option_ref(before, action.option)
            self.bus.emit(
                EventType.OPTION_CHOSEN,
                day=before.day,
                visitor_id=before.current_visitor.id,
                option_id=option.id if option else None,
                reaction=after.reaction_text,
            )

        if after.awaiting_choice and (
            before.current_visitor is None
            or before.choice_made
            or before.current_visitor.id != after.current_visitor.id
        ):
            self.bus.emit(
                EventType.VISITOR_ARRIVED,
                day=day,
                visitor_id=after.current_visitor.id,
                name=after.current_visitor.name,
            )

        if action.type not in (ActionType.INITIALIZE, ActionType.RESET):
            before_owned = {p.id for p in before.owned_planets}
            after_owned = {p.id for p in after.owned_planets}
            for planet_id in sorted(after_owned - before_owned):
                self.bus.emit(EventType.PLANET_GAINED, day=day, planet_id=planet_id)
            for planet_id in sorted(before_owned - after_owned):
                self.bus.emit(EventType.PLANET_LOST, day=day, planet_id=planet_id)

            if after.day > before.day:
                summary = after.last_day_summary
                self.bus.emit(
                    EventType.DAY_ENDED,
                    day=before.day,
                    summary=summary.model_dump() if summary else None,
                )
                self.bus.emit(EventType.DAY_STARTED, day=after.day)

        if after.show_day_summary and not before.show_day_summary:
            self.bus.emit(EventType.DAY_SUMMARY_SHOWN, day=day)

        if after.game_over and not before.game_over:
            logger.info("Game over: %s", after.game_over_reason)
            self.bus.emit(EventType.GAME_OVER, day=day, reason=after.game_over_reason)

        self.bus.emit(EventType.STATE_CHANGED, day=day, action=action.type.value, state=after)
