"""Simulation module for autoplay balance testing."""

from .personas import PERSONAS
from .runner import run_simulation, SimulationGame, SimulationTranscript

__all__ = [
    "PERSONAS",
    "run_simulation",
    "SimulationGame",
    "SimulationTranscript",
]
