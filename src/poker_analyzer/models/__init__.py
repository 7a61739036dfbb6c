"""Data models for poker analyzer."""

from poker_analyzer.models.card import Card, Rank, Suit, parse_cards
from poker_analyzer.models.action import ActionType, Street, PlayerAction
from poker_analyzer.models.position import Position
from poker_analyzer.models.simulation import SimulationConfig, SimulationResult
from poker_analyzer.models.analysis import (
    OpponentProfile, Dryness, Confidence, Severity,
    Assumptions, AnalysisInput, ActionRecommendation, HandMetrics,
    BoardTexture, LeakFinding, RangeEstimate, AnalysisResult,
)

__all__ = [
    "Card", "Rank", "Suit", "parse_cards",
    "ActionType", "Street", "PlayerAction",
    "Position",
    "SimulationConfig", "SimulationResult",
    "OpponentProfile", "Dryness", "Confidence", "Severity",
    "Assumptions", "AnalysisInput", "ActionRecommendation", "HandMetrics",
    "BoardTexture", "LeakFinding", "RangeEstimate", "AnalysisResult",
]
