"""Leak detector: flag recommendations that match common losing patterns.

Rules run after scoring and only read the finished recommendations; they
never change a score.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from poker_analyzer.models.action import ActionType
from poker_analyzer.models.analysis import (
    ActionRecommendation, HandMetrics, LeakFinding, Severity,
)
from poker_analyzer.models.position import Position

OVERCALL_MARGIN = 0.05
UNDERBET_EQUITY = 0.7
UNDERBET_MIN_SIZE = 0.5
LOOSE_OOP_EQUITY = 0.45
SHORT_SPR = 3.0
SHORT_STACK_CALL_EQUITY = 0.6

# (issue, fix) per rule
LEAK_DESCRIPTIONS = {
    "overcall": (
        "Overcalling with insufficient equity",
        "Fold hands that don't meet required equity",
    ),
    "underbet": (
        "Under-betting strong hands",
        "Use larger bet sizes for value",
    ),
    "loose_oop": (
        "Playing too loose out of position",
        "Tighten range when out of position",
    ),
    "short_stack_call": (
        "Calling with short stack and weak hand",
        "Play more aggressively or fold with short stacks",
    ),
}


@dataclass(frozen=True)
class LeakContext:
    metrics: HandMetrics
    top: Optional[ActionRecommendation]
    hero_position: Position
    villain_position: Position

    @property
    def top_action(self) -> Optional[ActionType]:
        return self.top.action if self.top else None


@dataclass(frozen=True)
class LeakRule:
    key: str
    severity: Severity
    applies: Callable[[LeakContext], bool]

    def check(self, ctx: LeakContext) -> Optional[LeakFinding]:
        if not self.applies(ctx):
            return None
        issue, fix = LEAK_DESCRIPTIONS[self.key]
        return LeakFinding(issue=issue, fix=fix, severity=self.severity)


def overcalling(ctx: LeakContext) -> bool:
    return (ctx.metrics.equity < ctx.metrics.required_equity - OVERCALL_MARGIN
            and ctx.top_action is ActionType.CALL)


def underbetting(ctx: LeakContext) -> bool:
    return (ctx.metrics.equity > UNDERBET_EQUITY
            and ctx.top is not None
            and ctx.top.size is not None
            and ctx.top.size < UNDERBET_MIN_SIZE)


def loose_out_of_position(ctx: LeakContext) -> bool:
    """Chips go in with weak equity while acting first; a free check is not a leak."""
    return (ctx.hero_position.is_out_of_position(ctx.villain_position)
            and ctx.metrics.equity < LOOSE_OOP_EQUITY
            and ctx.top_action not in (None, ActionType.FOLD, ActionType.CHECK))


def short_stack_weak_call(ctx: LeakContext) -> bool:
    return (ctx.metrics.spr < SHORT_SPR
            and ctx.top_action is ActionType.CALL
            and ctx.metrics.equity < SHORT_STACK_CALL_EQUITY)


DEFAULT_RULES: List[LeakRule] = [
    LeakRule("overcall", Severity.HIGH, overcalling),
    LeakRule("underbet", Severity.MEDIUM, underbetting),
    LeakRule("loose_oop", Severity.MEDIUM, loose_out_of_position),
    LeakRule("short_stack_call", Severity.HIGH, short_stack_weak_call),
]


class LeakDetector:
    """Run independent leak rules against a finished recommendation list."""

    def __init__(self, rules: Optional[Sequence[LeakRule]] = None):
        self.rules = list(rules) if rules is not None else list(DEFAULT_RULES)

    def detect(self, metrics: HandMetrics,
               recommendations: Sequence[ActionRecommendation],
               hero_position: Position,
               villain_position: Position) -> List[LeakFinding]:
        """Return findings in rule order."""
        ctx = LeakContext(
            metrics=metrics,
            top=recommendations[0] if recommendations else None,
            hero_position=hero_position,
            villain_position=villain_position,
        )
        leaks = []
        for rule in self.rules:
            finding = rule.check(ctx)
            if finding is not None:
                leaks.append(finding)
        return leaks
