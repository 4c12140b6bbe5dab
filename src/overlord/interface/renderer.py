"""
Display and rendering helpers for the Duck Overlord CLI.

Everything here reads a GameState and draws it; nothing here decides.
"""

import time

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..state.schema import DaySummary, GameState, Visitor
from ..systems.effects import can_afford

# Shared console instance
console = Console()

THEME = {
    "primary": "gold3",          # the crown
    "secondary": "grey70",
    "good": "green3",
    "bad": "red3",
    "warning": "dark_orange",
    "accent": "cyan",
    "dim": "dim",
}


def render_text(text: str, player_name: str) -> str:
    """Substitute the {user} token with the ruler's name."""
    return text.replace("{user}", player_name or "Overlord")


def typewriter(text: str, speed: float, style: str = "") -> None:
    """Reveal text one character at a time."""
    for ch in text:
        console.print(ch, end="", style=style, highlight=False)
        time.sleep(speed)
    console.print()


def show_banner() -> None:
    console.print(Panel(
        Text("DUCK OVERLORD", style=f"bold {THEME['primary']}", justify="center"),
        subtitle="rule the ponds of the galaxy",
        border_style=THEME["primary"],
    ))


def _signed(value: int, invert: bool = False) -> Text:
    good = value < 0 if invert else value > 0
    bad = value > 0 if invert else value < 0
    style = THEME["good"] if good else THEME["bad"] if bad else THEME["dim"]
    return Text(f"{value:+d}", style=style)


def show_status(state: GameState) -> None:
    """One-line resource table."""
    table = Table(show_header=True, header_style=THEME["accent"], box=None, padding=(0, 2))
    for column in ("Day", "Visits", "Coins", "Happiness", "Tax", "Rebellion", "Planets"):
        table.add_column(column)

    rebellion_style = THEME["bad"] if state.rebellion_chance >= 20 else ""
    table.add_row(
        str(state.day),
        f"{state.visits_today}/{state.max_visitors_per_day}",
        str(state.player.coins),
        str(state.player.happiness),
        f"{state.tax_rate:.0%}",
        Text(f"{state.rebellion_chance}%", style=rebellion_style),
        f"{state.owned_count}/{state.total_planets}",
    )
    console.print(table)


def show_visitor(state: GameState, visitor: Visitor, animate: bool = False, speed: float = 0.0) -> None:
    """Draw the visitor's speech and numbered options."""
    text = render_text(visitor.text, state.player.name)
    console.print()
    console.print(f"[bold {THEME['primary']}]{visitor.name}[/]")
    if animate:
        typewriter(text, speed)
    else:
        console.print(text)

    for i, option in enumerate(visitor.options, 1):
        label = render_text(option.text, state.player.name)
        if can_afford(state, option):
            console.print(f"  [{THEME['accent']}]{i}.[/] {label}")
        else:
            console.print(f"  [{THEME['dim']}]{i}. {label} (cannot afford)[/]")


def show_reaction(state: GameState) -> None:
    if state.reaction_text:
        console.print(f"\n[italic]{render_text(state.reaction_text, state.player.name)}[/]")


def show_day_summary(summary: DaySummary) -> None:
    table = Table(title=f"End of day {summary.day}", title_style=f"bold {THEME['primary']}")
    table.add_column("Resource")
    table.add_column("Change", justify="right")
    table.add_row("Coins", _signed(summary.coins_change))
    table.add_row("Happiness", _signed(summary.happiness_change))
    table.add_row("Rebellion", _signed(summary.rebellion_change, invert=True))
    console.print()
    console.print(table)


def show_game_over(state: GameState) -> None:
    won = state.total_planets > 0 and state.owned_count == state.total_planets
    console.print(Panel(
        state.game_over_reason or "The game is over.",
        title="VICTORY" if won else "GAME OVER",
        border_style=THEME["good"] if won else THEME["bad"],
    ))
    console.print(f"[{THEME['dim']}]You ruled for {state.day} day(s).[/]")
