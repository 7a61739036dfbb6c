"""Confidence label for an analysis."""

from poker_analyzer.models.action import Street
from poker_analyzer.models.analysis import Confidence, HandMetrics, OpponentProfile

EXTREME_EQUITY_POINTS = 0.4
CLEAR_EQUITY_POINTS = 0.2
STREET_POINTS = {
    Street.PREFLOP: 0.0,
    Street.FLOP: 0.1,
    Street.TURN: 0.2,
    Street.RIVER: 0.3,
}
SPR_POINTS = 0.2
LOW_SPR = 3.0
HIGH_SPR = 15.0
PREDICTABLE_OPPONENT_POINTS = 0.1

HIGH_THRESHOLD = 0.7
MEDIUM_THRESHOLD = 0.4


def equity_points(equity: float) -> float:
    """Equity far from a coin flip is the strongest signal."""
    distance = abs(equity - 0.5)
    if distance > 0.2:
        return EXTREME_EQUITY_POINTS
    if distance > 0.1:
        return CLEAR_EQUITY_POINTS
    return 0.0


def spr_points(spr: float) -> float:
    if spr < LOW_SPR or spr > HIGH_SPR:
        return SPR_POINTS
    return 0.0


def confidence_score(metrics: HandMetrics, street: Street,
                     profile: OpponentProfile) -> float:
    score = equity_points(metrics.equity)
    score += STREET_POINTS[street]
    score += spr_points(metrics.spr)
    if profile.is_predictable:
        score += PREDICTABLE_OPPONENT_POINTS
    return score


def determine_confidence(metrics: HandMetrics, street: Street,
                         profile: OpponentProfile) -> Confidence:
    score = confidence_score(metrics, street, profile)
    # Point sums like 0.4 + 0.3 carry float error
    if score >= HIGH_THRESHOLD - 1e-9:
        return Confidence.HIGH
    if score >= MEDIUM_THRESHOLD - 1e-9:
        return Confidence.MEDIUM
    return Confidence.LOW
