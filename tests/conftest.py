"""
Pytest fixtures for Duck Overlord engine tests.

Provides a scripted random source, small hand-built catalogs and fresh
game states so every test controls exactly which dice fall.
"""

import pytest
from pathlib import Path

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from overlord.content.catalog import Catalog, get_default_catalog
from overlord.state.event_bus import EventBus, reset_event_bus
from overlord.state.schema import (
    Effects,
    Gender,
    Planet,
    Visitor,
    VisitorConditions,
    VisitorOption,
)
from overlord.state.store import GameStore
from overlord.systems.turns import new_game
from overlord.tools.dice import make_rng


class ScriptedRandom:
    """
    Random source that replays queued values.

    Once the queue runs dry it keeps returning `default`; the 0.99 default
    makes every `chance()` roll fail and every pick land on the last item.
    """

    def __init__(self, values=(), default: float = 0.99):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture(autouse=True)
def clean_event_bus():
    """Each test starts with a fresh global event bus."""
    reset_event_bus()
    yield
    reset_event_bus()


@pytest.fixture
def scripted():
    """Factory for ScriptedRandom: scripted(0.1, 0.5, default=0.99)."""
    def factory(*values, default: float = 0.99):
        return ScriptedRandom(values, default=default)
    return factory


@pytest.fixture
def catalog():
    """The bundled content catalog."""
    return get_default_catalog()


@pytest.fixture
def make_visitor():
    """Factory for throwaway visitors with a free default option."""
    def factory(
        visitor_id: str = "tester",
        options: list[VisitorOption] | None = None,
        conditions: VisitorConditions | None = None,
        weight: float = 1.0,
    ) -> Visitor:
        return Visitor(
            id=visitor_id,
            name=visitor_id.replace("_", " ").title(),
            sprite=f"{visitor_id}.png",
            text="Hello, {user}.",
            weight=weight,
            conditions=conditions,
            options=options or [
                VisitorOption(id="ok", text="Okay.", reaction="Very well."),
            ],
        )
    return factory


@pytest.fixture
def option():
    """Factory for options: option("buy", coins=-30, happiness=10)."""
    def factory(option_id: str = "pick", reaction: str = "Done.", **effects) -> VisitorOption:
        return VisitorOption(
            id=option_id,
            text=option_id,
            reaction=reaction,
            effects=Effects(**effects),
        )
    return factory


@pytest.fixture
def tiny_catalog(make_visitor):
    """Two planets and two unconditional visitors."""
    return Catalog(
        planets=(
            Planet(id="home", name="Home", owned=True),
            Planet(id="far", name="Far"),
        ),
        visitors=(
            make_visitor("alpha"),
            make_visitor("beta"),
        ),
    )


@pytest.fixture
def state(catalog):
    """Fresh day-2 game state with the tutorial behind us."""
    s = new_game(catalog, "Daisy", Gender.FEMALE)
    s.day = 2
    return s


@pytest.fixture
def bus():
    """Isolated event bus."""
    return EventBus()


@pytest.fixture
def store(catalog, bus):
    """Store with a seeded generator and its own bus."""
    return GameStore(catalog=catalog, rng=make_rng(1234), bus=bus)
