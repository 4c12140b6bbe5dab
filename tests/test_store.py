"""Tests for the game store: action flow, events and invariants."""

import pytest

from overlord.content import scripted as encounters
from overlord.state.actions import Action
from overlord.state.event_bus import EventType
from overlord.state.schema import GameOverReason, Gender, GameState
from overlord.state.store import GameStore
from overlord.tools.dice import make_rng


def assert_invariants(state: GameState) -> None:
    assert state.player.coins >= 0
    assert 0 <= state.player.happiness <= 100
    assert 0 <= state.tax_rate <= GameState.MAX_TAX_RATE
    assert state.rebellion_chance >= 0
    assert 0 <= state.visits_today <= state.max_visitors_per_day
    assert 0 <= state.scientist_step <= 3
    assert state.owned_count <= state.total_planets


class TestNewGame:
    """Test initialization and reset."""

    def test_initialize(self, store):
        state = store.initialize("Daisy", "female")
        assert state.player.name == "Daisy"
        assert state.player.gender == Gender.FEMALE
        assert state.player.coins == 100
        assert state.player.happiness == 50
        assert state.tax_rate == 0.15
        assert state.day == 1
        assert state.owned_count == 1
        assert state.total_planets == 7

    def test_initialize_emits_game_started(self, store, bus):
        store.initialize("Daisy")
        events = bus.get_history(EventType.GAME_STARTED)
        assert len(events) == 1
        assert events[0].data["player"] == "Daisy"

    def test_reset_starts_over(self, store, bus):
        store.initialize("Daisy", Gender.FEMALE)
        store.request_visitor()
        store.choose_option(0)

        state = store.reset()
        assert state.day == 1
        assert state.visits_today == 0
        assert state.player.name == ""
        assert state.current_visitor is None
        assert bus.get_history(EventType.GAME_RESET)

    def test_catalog_planets_are_not_shared(self, store, catalog):
        store.initialize("Daisy")
        store._state.planets[1].owned = True
        assert catalog.planets[1].owned is False


class TestTutorialFlow:
    """Test the opening of a game through the store."""

    def test_first_two_visitors(self, store):
        store.initialize("Daisy", "female")

        state = store.request_visitor()
        assert state.current_visitor.id == encounters.TUTORIAL_INTRO_ID

        state = store.choose_option(0)
        assert state.visits_today == 1
        assert state.reaction_text == "Excellent! Let me teach you how to play."
        assert state.choice_made is True

        state = store.request_visitor()
        assert state.current_visitor.id == encounters.TUTORIAL_RULES_ID
        assert state.reaction_text is None

        state = store.choose_option("royal_advisor_acknowledge")
        assert state.visits_today == 2

        state = store.request_visitor()
        assert state.current_visitor.id not in (
            encounters.TUTORIAL_INTRO_ID,
            encounters.TUTORIAL_RULES_ID,
        )

    def test_request_is_idempotent_while_awaiting(self, store):
        store.initialize("Daisy")
        first = store.request_visitor()
        assert store.request_visitor() is first

    def test_dispatch_accepts_actions(self, store):
        store.dispatch(Action.initialize("Daisy", "male"))
        store.dispatch(Action.request_visitor())
        state = store.dispatch(Action.choose(0))
        assert state.visits_today == 1

    def test_bool_is_not_an_index(self, store, state, option, make_visitor):
        state.current_visitor = make_visitor(options=[option("a", coins=1), option("b", coins=2)])
        store._state = state

        assert Action.choose(True).option is True
        assert store.choose_option(True) is state
        assert store.choose_option(False) is state
        assert store.state.player.coins == 100


class TestEvents:
    """Test notifications published by the store."""

    def test_subscribers_get_every_change(self, store):
        seen = []
        store.subscribe(lambda event: seen.append(event.data["action"]))

        store.initialize("Daisy")
        store.request_visitor()
        store.choose_option(0)

        assert seen == ["initialize", "request_visitor", "choose_option"]

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(lambda event: seen.append(event))
        unsubscribe()
        store.initialize("Daisy")
        assert seen == []

    def test_no_event_for_ignored_action(self, store, bus):
        store.initialize("Daisy")
        store.request_visitor()
        before = len(bus.get_history(EventType.STATE_CHANGED))

        store.request_visitor()
        assert len(bus.get_history(EventType.STATE_CHANGED)) == before

    def test_visitor_arrived_and_option_chosen(self, store, bus):
        store.initialize("Daisy")
        store.request_visitor()
        store.choose_option(0)

        arrived = bus.get_history(EventType.VISITOR_ARRIVED)
        chosen = bus.get_history(EventType.OPTION_CHOSEN)
        assert arrived[0].data["visitor_id"] == encounters.TUTORIAL_INTRO_ID
        assert chosen[0].data["option_id"] == "royal_advisor_acknowledge"

    def test_option_rejected_when_unaffordable(self, store, bus, state, option, make_visitor):
        state.current_visitor = make_visitor(options=[option("palace", coins=-500), option("skip")])
        store._state = state

        after = store.choose_option("palace")
        assert after is state
        rejected = bus.get_history(EventType.OPTION_REJECTED)
        assert len(rejected) == 1
        assert rejected[0].data["cost"] == 500
        assert rejected[0].data["coins"] == 100

    def test_planet_gained(self, store, bus, state, option, make_visitor):
        state.current_visitor = make_visitor(options=[option("annex", add_planet_id="featherfall")])
        store._state = state

        store.choose_option("annex")
        gained = bus.get_history(EventType.PLANET_GAINED)
        assert [e.data["planet_id"] for e in gained] == ["featherfall"]

    def test_day_cycle_events(self, store, bus, state, option, make_visitor):
        state.current_visitor = make_visitor(options=[option("wait")])
        state.visits_today = 4
        store._state = state

        store.choose_option("wait")
        ended = bus.get_history(EventType.DAY_ENDED)
        assert len(ended) == 1
        assert ended[0].day == 2
        assert ended[0].data["summary"]["day"] == 2
        assert bus.get_history(EventType.DAY_STARTED)[0].day == 3

        summary_state = store.request_visitor()
        assert summary_state.show_day_summary is True
        assert summary_state.current_visitor is None
        assert bus.get_history(EventType.DAY_SUMMARY_SHOWN)

        # Nothing moves until the summary is dismissed
        assert store.request_visitor() is summary_state
        assert store.choose_option(0) is summary_state

        after = store.acknowledge_day_summary()
        assert after.show_day_summary is False
        assert after.day == 3
        assert after.awaiting_choice

    def test_game_over_event(self, store, bus, state, option, make_visitor):
        state.current_visitor = make_visitor(options=[option("splurge", coins=-100)])
        store._state = state

        store.choose_option("splurge")
        events = bus.get_history(EventType.GAME_OVER)
        assert len(events) == 1
        assert events[0].data["reason"] == GameOverReason.BANKRUPTCY.value


class TestGameOver:
    """Test that a finished game stays finished."""

    def test_every_action_is_ignored(self, store, state):
        state.game_over = True
        state.game_over_reason = GameOverReason.BANKRUPTCY.value
        store._state = state

        assert store.request_visitor() is state
        assert store.choose_option(0) is state
        assert store.acknowledge_day_summary() is state

    def test_initialize_starts_a_new_game(self, store, state):
        state.game_over = True
        store._state = state

        fresh = store.initialize("Daisy")
        assert fresh.game_over is False
        assert fresh.day == 1


class TestPlaythrough:
    """Play whole games with random choices and check every snapshot."""

    @pytest.mark.parametrize("seed", [1, 7, 42, 1234, 2025])
    def test_invariants_hold(self, catalog, bus, seed):
        rng = make_rng(seed)
        store = GameStore(catalog=catalog, rng=rng, bus=bus)
        state = store.initialize("Daisy", "female")

        for _ in range(1000):
            if state.game_over:
                break
            state = store.request_visitor()
            assert_invariants(state)

            if state.show_day_summary:
                state = store.acknowledge_day_summary()
            elif state.awaiting_choice:
                options = state.current_visitor.options
                before = state
                state = store.choose_option(options[int(rng.random() * len(options))].id)
                assert state.visits_today <= state.max_visitors_per_day
                if state is before:
                    # Unaffordable pick; every catalog visitor has a free way out
                    free = [o for o in options if o.effects.coins >= 0]
                    state = store.choose_option(free[0].id)
            else:
                break
            assert_invariants(state)

        if state.game_over:
            assert state.game_over_reason
            assert store.request_visitor() is state

    def test_same_seed_same_game(self, catalog, bus):
        def play(seed):
            store = GameStore(catalog=catalog, rng=make_rng(seed), bus=bus)
            store.initialize("Daisy")
            ids = []
            for _ in range(40):
                state = store.request_visitor()
                if state.show_day_summary:
                    store.acknowledge_day_summary()
                    continue
                if not state.awaiting_choice:
                    break
                ids.append(state.current_visitor.id)
                free = [o for o in state.current_visitor.options if o.effects.coins >= 0]
                store.choose_option(free[0].id)
                if store.state.game_over:
                    break
            return ids

        assert play(99) == play(99)
