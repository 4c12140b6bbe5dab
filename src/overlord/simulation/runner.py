"""Simulation runner and transcript management."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from ..content.catalog import Catalog, get_default_catalog
from ..state.event_bus import EventBus
from ..state.schema import GameOverReason, GameState
from ..state.store import GameStore
from ..tools.dice import make_rng
from .personas import PERSONAS, choose

logger = logging.getLogger(__name__)

DEFAULT_MAX_DAYS = 60


@dataclass
class SimulationGame:
    """Outcome of one autoplayed game."""

    number: int
    outcome: str
    days_survived: int
    decisions: int
    coins: int
    happiness: int
    planets_owned: int
    reason: str | None = None


@dataclass
class SimulationTranscript:
    """Complete record of a simulation run."""

    persona: str = "cautious"
    seed: int | None = None
    started_at: datetime = field(default_factory=datetime.now)
    games: list[SimulationGame] = field(default_factory=list)

    def outcome_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for game in self.games:
            counts[game.outcome] = counts.get(game.outcome, 0) + 1
        return counts

    @property
    def average_days(self) -> float:
        if not self.games:
            return 0.0
        return sum(g.days_survived for g in self.games) / len(self.games)

    def to_markdown(self) -> str:
        """Convert transcript to markdown format."""
        lines = [
            "# Simulation Transcript",
            "",
            f"- **Date:** {self.started_at.strftime('%Y-%m-%d %H:%M:%S')}",
            f"- **Persona:** {self.persona}",
            f"- **Seed:** {self.seed if self.seed is not None else 'random'}",
            f"- **Games:** {len(self.games)}",
            "",
            "---",
            "",
            "| # | Outcome | Days | Decisions | Coins | Happiness | Planets |",
            "|---|---------|------|-----------|-------|-----------|---------|",
        ]
        for g in self.games:
            lines.append(
                f"| {g.number} | {g.outcome} | {g.days_survived} | {g.decisions} "
                f"| {g.coins} | {g.happiness} | {g.planets_owned} |"
            )

        lines.append("")
        lines.append("## Summary")
        lines.append("")
        for outcome, count in sorted(self.outcome_counts().items()):
            lines.append(f"- **{outcome}:** {count}")
        lines.append(f"- **Average days survived:** {self.average_days:.1f}")
        lines.append("")

        return "\n".join(lines)

    def save(self, simulations_dir: Path) -> Path:
        """Save transcript to file. Returns the file path."""
        simulations_dir.mkdir(parents=True, exist_ok=True)

        timestamp = self.started_at.strftime("%Y-%m-%d_%H%M%S")
        filename = f"sim_{timestamp}_{self.persona}.md"
        filepath = simulations_dir / filename

        filepath.write_text(self.to_markdown(), encoding="utf-8")
        return filepath


def classify_outcome(state: GameState) -> str:
    """Name the way a game ended."""
    if not state.game_over:
        return "survived"
    reason = state.game_over_reason or ""
    for member in GameOverReason:
        # Execution and collapse reasons may carry a narrative prefix
        if reason.endswith(member.value):
            return member.name.lower()
    return "unknown"


def play_game(
    persona: str,
    number: int,
    catalog: Catalog,
    rng,
    max_days: int = DEFAULT_MAX_DAYS,
) -> SimulationGame:
    """Autoplay one game until it ends, stalls or reaches `max_days`."""
    store = GameStore(catalog=catalog, rng=rng, bus=EventBus())
    store.initialize(f"{PERSONAS[persona]['name']} Duck {number}")
    decisions = 0
    stalled = False

    while not store.state.game_over and store.state.day <= max_days:
        state = store.request_visitor()
        if state.show_day_summary:
            store.acknowledge_day_summary()
            continue
        if not state.awaiting_choice:
            stalled = True
            break

        option = choose(persona, state, rng)
        if option is None:
            stalled = True
            break
        store.choose_option(option.id)
        decisions += 1

    final = store.state
    outcome = "stalled" if stalled else classify_outcome(final)
    logger.debug("Game %d (%s): %s on day %d", number, persona, outcome, final.day)
    return SimulationGame(
        number=number,
        outcome=outcome,
        days_survived=final.day,
        decisions=decisions,
        coins=final.player.coins,
        happiness=final.player.happiness,
        planets_owned=final.owned_count,
        reason=final.game_over_reason,
    )


def run_simulation(
    persona: str = "cautious",
    games: int = 10,
    seed: int | None = None,
    max_days: int = DEFAULT_MAX_DAYS,
    catalog: Catalog | None = None,
) -> SimulationTranscript:
    """
    Autoplay a batch of games with one persona.

    Args:
        persona: Key into PERSONAS
        games: Number of games to play
        seed: Seed shared by the whole batch (None = nondeterministic)
        max_days: Stop a game that is still running after this many days
        catalog: Content tables; defaults to the bundled catalog

    Returns:
        Transcript with one entry per game
    """
    if persona not in PERSONAS:
        raise ValueError(f"Unknown persona: {persona} (choose from {', '.join(PERSONAS)})")

    catalog = catalog or get_default_catalog()
    rng = make_rng(seed)
    transcript = SimulationTranscript(persona=persona, seed=seed)

    for number in range(1, games + 1):
        transcript.games.append(play_game(persona, number, catalog, rng, max_days))

    logger.info(
        "Simulated %d %s game(s): %s",
        games, persona, transcript.outcome_counts(),
    )
    return transcript
