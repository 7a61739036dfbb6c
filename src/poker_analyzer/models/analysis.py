"""Analysis input and result models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from poker_analyzer import config
from poker_analyzer.errors import InvalidInputError
from poker_analyzer.models.action import ActionType, PlayerAction, Street
from poker_analyzer.models.card import Card
from poker_analyzer.models.position import Position

MAX_SIZING = 2.0


class OpponentProfile(str, Enum):
    NIT = "NIT"
    REG = "REG"
    LOOSE = "LOOSE"
    WHALE = "WHALE"

    @property
    def is_predictable(self) -> bool:
        return self in (OpponentProfile.NIT, OpponentProfile.REG)


class Dryness(str, Enum):
    DRY = "DRY"
    WET = "WET"
    VERY_WET = "VERY_WET"


class Confidence(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class Assumptions:
    """Caller's read on the opponent and the bet sizes to consider."""
    fold_equity: float = config.DEFAULT_FOLD_EQUITY
    sizings: List[float] = field(default_factory=lambda: list(config.DEFAULT_SIZINGS))


@dataclass
class AnalysisInput:
    """Everything the decision engine needs for one spot.

    Stacks, pot and ``to_call`` share one unit (usually big blinds). When
    ``to_call`` is omitted the facing-bet state is read from ``action_log``;
    a bet to face is priced as a fraction of the pot, otherwise calling is free.
    """
    hero_cards: List[Card]
    pot: float
    board: List[Card] = field(default_factory=list)
    hero_stack: float = 100.0
    villain_stack: float = 100.0
    street: Optional[Street] = None
    hero_position: Position = Position.BB
    villain_position: Position = Position.BTN
    opponent_profile: OpponentProfile = OpponentProfile.REG
    assumptions: Assumptions = field(default_factory=Assumptions)
    action_log: List[PlayerAction] = field(default_factory=list)
    to_call: Optional[float] = None
    villain_range: Optional[str] = None

    def validate(self) -> None:
        """Raise InvalidInputError if the spot cannot be analyzed."""
        if len(self.hero_cards) != 2:
            raise InvalidInputError(f"Hero needs exactly 2 hole cards, got {len(self.hero_cards)}")
        if len(self.board) > 5:
            raise InvalidInputError(f"Board has at most 5 cards, got {len(self.board)}")
        known = list(self.hero_cards) + list(self.board)
        if len(set(known)) != len(known):
            raise InvalidInputError("Duplicate cards between hero hand and board")
        if self.pot <= 0:
            raise InvalidInputError(f"Pot must be positive, got {self.pot}")
        if self.hero_stack < 0 or self.villain_stack < 0:
            raise InvalidInputError("Stacks cannot be negative")
        if self.to_call is not None and self.to_call < 0:
            raise InvalidInputError(f"Call size cannot be negative, got {self.to_call}")
        if not 0.0 <= self.assumptions.fold_equity <= 1.0:
            raise InvalidInputError(
                f"Fold equity must be in [0, 1], got {self.assumptions.fold_equity}")
        for size in self.assumptions.sizings:
            if not 0.0 < size <= MAX_SIZING:
                raise InvalidInputError(f"Bet sizing must be in (0, {MAX_SIZING:g}], got {size}")

    @property
    def effective_street(self) -> Street:
        if self.street is not None:
            return self.street
        return Street.from_board_size(len(self.board))

    @property
    def effective_stack(self) -> float:
        return min(self.hero_stack, self.villain_stack)

    @property
    def call_size(self) -> float:
        """Explicit ``to_call``, else an assumed bet when facing one, else 0 for a free check."""
        if self.to_call is not None:
            return self.to_call
        if not self.facing_bet:
            return 0.0
        return self.pot * config.ASSUMED_BET_FRACTION

    @property
    def facing_bet(self) -> bool:
        if self.to_call is not None:
            return self.to_call > 0
        if not self.action_log:
            return False
        return self.action_log[-1].action_type.is_aggressive


@dataclass(frozen=True)
class ActionRecommendation:
    """One scored candidate action. ``size`` is a fraction of the pot."""
    action: ActionType
    score: float
    rationale: Tuple[str, ...] = ()
    size: Optional[float] = None

    @property
    def label(self) -> str:
        if self.size is None:
            return self.action.value.upper()
        return f"{self.action.value.upper()} {self.size:.0%}"

    def to_dict(self) -> dict:
        d = {"action": self.action.value.upper(), "score": self.score,
             "rationale": list(self.rationale)}
        if self.size is not None:
            d["size"] = self.size
        return d


@dataclass(frozen=True)
class HandMetrics:
    equity: float
    pot_odds: float
    required_equity: float
    spr: float
    ev: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class BoardTexture:
    dryness: Dryness = Dryness.DRY
    paired: bool = False
    monotone: bool = False
    rainbow: bool = False
    connected: bool = False
    high_cards: int = 0
    draw_heavy: bool = False


@dataclass(frozen=True)
class LeakFinding:
    """An advisory note; never feeds back into recommendation scores."""
    issue: str
    fix: str
    severity: Severity


@dataclass(frozen=True)
class RangeEstimate:
    hero: str
    villain: str


@dataclass
class AnalysisResult:
    recommendations: List[ActionRecommendation]
    metrics: HandMetrics
    ranges: RangeEstimate
    confidence: Confidence
    leaks: List[LeakFinding]
    texture: BoardTexture = field(default_factory=BoardTexture)

    @property
    def primary(self) -> Optional[ActionRecommendation]:
        return self.recommendations[0] if self.recommendations else None

    def to_dict(self) -> dict:
        return {
            "recommendations": [r.to_dict() for r in self.recommendations],
            "metrics": {
                "equity": self.metrics.equity,
                "pot_odds": self.metrics.pot_odds,
                "required_equity": self.metrics.required_equity,
                "spr": self.metrics.spr,
                "ev": dict(self.metrics.ev),
            },
            "ranges": {"hero": self.ranges.hero, "villain": self.ranges.villain},
            "confidence": self.confidence.value,
            "leaks": [
                {"issue": l.issue, "fix": l.fix, "severity": l.severity.value}
                for l in self.leaks
            ],
            "texture": {
                "dryness": self.texture.dryness.value,
                "paired": self.texture.paired,
                "monotone": self.texture.monotone,
                "rainbow": self.texture.rainbow,
                "connected": self.texture.connected,
                "high_cards": self.texture.high_cards,
                "draw_heavy": self.texture.draw_heavy,
            },
        }
