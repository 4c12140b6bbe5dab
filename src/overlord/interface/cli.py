"""
Duck Overlord CLI.

Terminal front end for the engine. Everything the player sees comes from
the store's snapshots; this module only asks questions and renders.
"""

import argparse
import logging
from pathlib import Path

from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from ..simulation import PERSONAS, run_simulation
from ..state.schema import Gender
from ..state.store import GameStore
from ..systems.effects import can_afford
from .config import Config, load_config, set_animate_text, set_player
from .renderer import (
    THEME,
    console,
    show_banner,
    show_day_summary,
    show_game_over,
    show_reaction,
    show_status,
    show_visitor,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Duck Overlord - rule the ponds of the galaxy")
    parser.add_argument("--name", help="Your ruler's name (skips the prompt)")
    parser.add_argument(
        "--gender",
        choices=[g.value for g in Gender],
        help="Your ruler's gender (skips the prompt)",
    )
    parser.add_argument("--seed", type=int, help="Seed for a reproducible game")
    parser.add_argument(
        "--no-animate", "-q",
        action="store_true",
        help="Print visitor text at once for this run only",
    )
    parser.add_argument(
        "--animate",
        choices=["on", "off"],
        help="Turn typed-out visitor text on or off and remember the choice",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine decisions to stderr",
    )
    parser.add_argument(
        "--simulate",
        choices=sorted(PERSONAS),
        metavar="PERSONA",
        help=f"Autoplay instead of playing ({', '.join(sorted(PERSONAS))})",
    )
    parser.add_argument("--games", type=int, default=10, help="Games to autoplay with --simulate")
    parser.add_argument(
        "--transcripts",
        type=Path,
        help="Directory to save the simulation transcript in",
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=Path(".overlord"),
        help="Where preferences are stored",
    )
    return parser


# -----------------------------------------------------------------------------
# Setup
# -----------------------------------------------------------------------------

def load_preferences(args: argparse.Namespace) -> Config:
    """Save any preference flags, then load the config they update."""
    if args.animate is not None:
        set_animate_text(args.animate == "on", args.config_dir)
    return load_config(args.config_dir)


def ask_player(args: argparse.Namespace, config: dict) -> tuple[str, str | None]:
    """Resolve name and gender from flags, then config, then prompts."""
    name = args.name
    if not name:
        question = "What is your name, Overlord?"
        saved = config.get("player_name")
        name = Prompt.ask(question, default=saved) if saved else Prompt.ask(question)
    name = name.strip()

    gender = args.gender or config.get("gender")
    if gender not in [g.value for g in Gender]:
        gender = Prompt.ask("Are you a duck king or a duck queen?", choices=["king", "queen"], default="king")
        gender = Gender.MALE.value if gender == "king" else Gender.FEMALE.value

    return name, gender


# -----------------------------------------------------------------------------
# Simulation
# -----------------------------------------------------------------------------

def simulate(args: argparse.Namespace) -> None:
    with console.status(f"Autoplaying {args.games} {args.simulate} game(s)..."):
        transcript = run_simulation(args.simulate, games=args.games, seed=args.seed)

    table = Table(title=f"Simulation: {PERSONAS[args.simulate]['name']}", title_style=f"bold {THEME['primary']}")
    for column in ("#", "Outcome", "Days", "Decisions", "Coins", "Happiness", "Planets"):
        table.add_column(column, justify="right" if column != "Outcome" else "left")
    for g in transcript.games:
        table.add_row(
            str(g.number), g.outcome, str(g.days_survived), str(g.decisions),
            str(g.coins), str(g.happiness), str(g.planets_owned),
        )
    console.print(table)
    console.print(f"[{THEME['dim']}]Average days survived: {transcript.average_days:.1f}[/]")

    if args.transcripts:
        path = transcript.save(args.transcripts)
        console.print(f"[{THEME['dim']}]Transcript saved to {path}[/]")


# -----------------------------------------------------------------------------
# Main Loop
# -----------------------------------------------------------------------------

def play(store: GameStore, name: str, gender: str | None, animate: bool, speed: float) -> None:
    """Run games until the player declines another."""
    while True:
        state = store.request_visitor()

        if state.game_over:
            show_game_over(state)
            if Confirm.ask("Rule again?", default=False):
                store.initialize(name, gender)
                continue
            return

        if state.show_day_summary:
            if state.last_day_summary:
                show_day_summary(state.last_day_summary)
            Prompt.ask(f"[{THEME['dim']}]Press Enter to begin the next day[/]", default="", show_default=False)
            store.acknowledge_day_summary()
            continue

        visitor = state.current_visitor
        if visitor is None:
            console.print(f"[{THEME['warning']}]No one else seeks an audience. Your court falls silent.[/]")
            return

        show_status(state)
        show_visitor(state, visitor, animate=animate, speed=speed)

        choices = [str(i) for i in range(1, len(visitor.options) + 1)]
        number = IntPrompt.ask("Your decision", choices=choices, show_choices=False)
        option = visitor.options[number - 1]
        if not can_afford(state, option):
            console.print(f"[{THEME['bad']}]The treasury cannot cover that.[/]")
            continue

        after = store.choose_option(option.id)
        if not after.game_over:
            show_reaction(after)


def main():
    """Main entry point."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.simulate:
        simulate(args)
        return

    config = load_preferences(args)
    animate = config.get("animate_text", True) and not args.no_animate
    speed = config.get("text_speed", 0.015)
    seed = args.seed if args.seed is not None else config.get("seed")

    show_banner()

    try:
        name, gender = ask_player(args, config)
        set_player(name, gender, args.config_dir)

        store = GameStore(seed=seed)
        store.initialize(name, gender)
        logger.info("New game for %r (seed=%s)", name, seed)

        play(store, name, gender, animate, speed)
    except (KeyboardInterrupt, EOFError):
        console.print()

    console.print(f"[{THEME['dim']}]Long live the Overlord.[/]")


if __name__ == "__main__":
    main()
