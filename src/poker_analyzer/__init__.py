"""Heads-up poker equity estimation and action recommendations."""

from poker_analyzer.errors import InvalidInputError, SimulationCancelled
from poker_analyzer.simulation.equity import evaluate_equity
from poker_analyzer.analysis.analyzer import analyze, quick_analysis

__version__ = "0.1.0"

__all__ = [
    "InvalidInputError", "SimulationCancelled",
    "evaluate_equity", "analyze", "quick_analysis",
]
