"""Card dealing, hand evaluation and equity simulation."""

from poker_analyzer.simulation.deck import available_cards, draw, full_deck, shuffle
from poker_analyzer.simulation.evaluator import HandEvaluator, HandRank, HandValue
from poker_analyzer.simulation.equity import (
    EquitySimulator, SimulationHandle, evaluate_equity, validate_deal,
)
from poker_analyzer.simulation.ranges import expand_range

__all__ = [
    "available_cards", "draw", "full_deck", "shuffle",
    "HandEvaluator", "HandRank", "HandValue",
    "EquitySimulator", "SimulationHandle", "evaluate_equity", "validate_deal",
    "expand_range",
]
