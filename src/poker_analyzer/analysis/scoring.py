"""Heuristic scoring of candidate actions.

Each rule maps a spot (and, for bets, a size) to a partial score plus the
facts that justify it. A candidate's score is the sum of its rules'
points, clamped to [0, 1] once at the end.
"""

from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple

from poker_analyzer.analysis.pot import bet_label, format_big_blinds, format_percentage
from poker_analyzer.models.action import ActionType, Street
from poker_analyzer.models.analysis import (
    ActionRecommendation, BoardTexture, Dryness, HandMetrics,
)

# Fold tiers
FOLD_MARGIN = 0.10
FOLD_SCORE_FAR_BELOW = 0.8
FOLD_SCORE_BELOW = 0.4
FOLD_SCORE_PROFITABLE = 0.1

# Check / call
CALL_RATIO_WEIGHT = 0.4
CALL_SCORE_CAP = 0.8
POT_CONTROL_BONUS = 0.1

# Bet / raise
STRONG_EQUITY = 0.6
VALUE_BET_BONUS = 0.5
WEAK_EQUITY = 0.4
BLUFF_FOLD_EQUITY_FLOOR = 0.3
BLUFF_WEIGHT = 0.6
DRY_BOARD_EQUITY = 0.5
DRY_BOARD_BONUS = 0.2
STANDARD_SIZING = (0.5, 0.75)
SIZING_BONUS = 0.1


class Contribution(NamedTuple):
    points: float
    reasons: Tuple[str, ...] = ()


NO_CONTRIBUTION = Contribution(0.0)


@dataclass(frozen=True)
class ScoringContext:
    """What the rules may look at for one spot."""
    metrics: HandMetrics
    texture: BoardTexture
    street: Street
    fold_equity: float
    facing_bet: bool


Rule = Callable[[ScoringContext, Optional[float]], Contribution]


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


# -- fold --------------------------------------------------------------------

def fold_equity_gap(ctx: ScoringContext, size: Optional[float] = None) -> Contribution:
    """Higher the further equity sits below the break-even point."""
    equity, needed = ctx.metrics.equity, ctx.metrics.required_equity
    if equity < needed - FOLD_MARGIN:
        return Contribution(FOLD_SCORE_FAR_BELOW, (
            "Equity significantly below required",
            f"Need {format_percentage(needed)}, have {format_percentage(equity)}",
        ))
    if equity < needed:
        return Contribution(FOLD_SCORE_BELOW, ("Equity slightly below required",))
    return Contribution(FOLD_SCORE_PROFITABLE, ("Positive equity call",))


# -- check / call ------------------------------------------------------------

def call_equity_ratio(ctx: ScoringContext, size: Optional[float] = None) -> Contribution:
    equity, needed = ctx.metrics.equity, ctx.metrics.required_equity
    if equity < needed:
        return NO_CONTRIBUTION
    if needed > 0:
        points = min(CALL_SCORE_CAP, equity / needed * CALL_RATIO_WEIGHT)
    else:
        points = CALL_SCORE_CAP
    call_value = ctx.metrics.ev.get("call", 0.0)
    return Contribution(points, ("Positive equity call", f"EV: {format_big_blinds(call_value, 2)}"))


def pot_control(ctx: ScoringContext, size: Optional[float] = None) -> Contribution:
    if ctx.street.is_terminal:
        return NO_CONTRIBUTION
    return Contribution(POT_CONTROL_BONUS, ("Pot control with cards to come",))


# -- bet / raise -------------------------------------------------------------

def value_bet(ctx: ScoringContext, size: Optional[float] = None) -> Contribution:
    if ctx.metrics.equity > STRONG_EQUITY:
        return Contribution(VALUE_BET_BONUS, ("Strong hand for value",))
    return NO_CONTRIBUTION


def bluff(ctx: ScoringContext, size: Optional[float] = None) -> Contribution:
    if ctx.metrics.equity < WEAK_EQUITY and ctx.fold_equity > BLUFF_FOLD_EQUITY_FLOOR:
        return Contribution(ctx.fold_equity * BLUFF_WEIGHT,
                            (f"Fold equity: {format_percentage(ctx.fold_equity, 0)}",))
    return NO_CONTRIBUTION


def dry_board(ctx: ScoringContext, size: Optional[float] = None) -> Contribution:
    if ctx.texture.dryness is Dryness.DRY and ctx.metrics.equity > DRY_BOARD_EQUITY:
        return Contribution(DRY_BOARD_BONUS, ("Dry board favors betting",))
    return NO_CONTRIBUTION


def standard_sizing(ctx: ScoringContext, size: Optional[float] = None) -> Contribution:
    low, high = STANDARD_SIZING
    if size is not None and low <= size <= high:
        return Contribution(SIZING_BONUS, ("Standard sizing",))
    return NO_CONTRIBUTION


FOLD_RULES: List[Rule] = [fold_equity_gap]
CALL_RULES: List[Rule] = [call_equity_ratio, pot_control]
BET_RULES: List[Rule] = [value_bet, bluff, dry_board, standard_sizing]


def apply_rules(rules: Sequence[Rule], ctx: ScoringContext,
                size: Optional[float] = None) -> Tuple[float, Tuple[str, ...]]:
    """Sum rule points and collect reasons; the total is clamped to [0, 1]."""
    total = 0.0
    reasons: List[str] = []
    for rule in rules:
        contribution = rule(ctx, size)
        total += contribution.points
        reasons.extend(contribution.reasons)
    return clamp(total), tuple(reasons)


def score_fold(ctx: ScoringContext) -> ActionRecommendation:
    score, reasons = apply_rules(FOLD_RULES, ctx)
    return ActionRecommendation(ActionType.FOLD, score, reasons)


def score_check_call(ctx: ScoringContext) -> ActionRecommendation:
    action = ActionType.CALL if ctx.facing_bet else ActionType.CHECK
    score, reasons = apply_rules(CALL_RULES, ctx)
    return ActionRecommendation(action, score, reasons)


def score_bet(ctx: ScoringContext, size: float) -> ActionRecommendation:
    action = ActionType.RAISE if ctx.facing_bet else ActionType.BET
    score, reasons = apply_rules(BET_RULES, ctx, size)
    bet_value = ctx.metrics.ev.get(bet_label(size))
    if bet_value is not None:
        reasons += (f"EV: {format_big_blinds(bet_value, 2)}",)
    return ActionRecommendation(action, score, reasons, size=size)


def generate_recommendations(ctx: ScoringContext,
                             sizings: Sequence[float]) -> List[ActionRecommendation]:
    """One fold, one check-or-call and one bet-or-raise per sizing, best first."""
    candidates = [score_fold(ctx), score_check_call(ctx)]
    candidates.extend(score_bet(ctx, size) for size in sizings)
    # Stable sort keeps fold < call < bets order on equal scores
    return sorted(candidates, key=lambda r: r.score, reverse=True)
