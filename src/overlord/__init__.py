"""Duck Overlord: a turn-based space empire management engine."""

from .state.store import GameStore

__version__ = "0.3.0"

__all__ = ["GameStore", "__version__"]
