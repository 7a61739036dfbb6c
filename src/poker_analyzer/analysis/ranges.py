"""Coarse range-strength descriptions derived from equity."""

from poker_analyzer.models.analysis import RangeEstimate

# (minimum equity percentage, range description), widest first
RANGE_TIERS = [
    (80.0, "AA-22, AKo-A2o, AKs-A2s, KQo-K2o, KQs-K2s, ..."),
    (60.0, "AA-77, AKo-A9o, AKs-A5s, KQo-KTo, KQs-K9s, ..."),
    (40.0, "AA-99, AKo-ATo, AKs-A9s, KQo-KJo, KQs-KTs, ..."),
    (20.0, "AA-JJ, AKo-AQo, AKs-AJs, KQo, KQs-KJs, ..."),
    (10.0, "AA-QQ, AKo, AKs-AQs, KQs, ..."),
]
NARROWEST_RANGE = "AA-KK, AKs, ..."


def range_string(equity: float) -> str:
    """Describe the range a player with this equity is likely playing."""
    percentage = equity * 100
    for floor, description in RANGE_TIERS:
        if percentage >= floor:
            return description
    return NARROWEST_RANGE


def estimate_ranges(equity: float) -> RangeEstimate:
    return RangeEstimate(hero=range_string(equity), villain=range_string(1 - equity))
