"""
Game systems for Duck Overlord.

Each system is a set of pure functions over GameState snapshots: they
copy, edit the copy and return it. The store strings them together.
"""

from .conditions import matches
from .selector import request_visitor, select_visitor, eligible_visitors
from .effects import choose_option, can_afford
from .war import WarOutcome, resolve_war, win_probability
from .days import acknowledge_day_summary, check_terminal, end_day
from .turns import EngineContext, dispatch, new_game

__all__ = [
    "matches",
    "request_visitor",
    "select_visitor",
    "eligible_visitors",
    "choose_option",
    "can_afford",
    "WarOutcome",
    "resolve_war",
    "win_probability",
    "acknowledge_day_summary",
    "check_terminal",
    "end_day",
    "EngineContext",
    "dispatch",
    "new_game",
]
