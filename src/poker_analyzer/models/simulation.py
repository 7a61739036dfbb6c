"""Equity simulation data models."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from poker_analyzer import config
from poker_analyzer.errors import InvalidInputError
from poker_analyzer.models.card import Card

HoleCards = Tuple[Card, Card]


@dataclass
class SimulationConfig:
    """Settings for one equity simulation run.

    When ``opponent_candidates`` is given, each iteration picks the
    opponent's hole cards uniformly from it instead of dealing two random
    cards.
    """
    iterations: int = config.DEFAULT_ITERATIONS
    opponent_candidates: Optional[List[HoleCards]] = None
    batch_size: int = config.BATCH_SIZE

    def __post_init__(self):
        for name in ("iterations", "batch_size"):
            value = getattr(self, name)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(f"{name} must be an integer, got {value!r}")
        if self.iterations <= 0:
            raise InvalidInputError(f"Iterations must be positive, got {self.iterations}")
        if self.batch_size <= 0:
            raise InvalidInputError(f"Batch size must be positive, got {self.batch_size}")
        if self.opponent_candidates is not None and not self.opponent_candidates:
            raise InvalidInputError("Opponent candidate set is empty")


@dataclass(frozen=True)
class SimulationResult:
    """Win/tie/loss counts from a completed simulation."""
    wins: int
    ties: int
    losses: int
    time_ms: float = field(default=0.0, compare=False)

    @property
    def iterations(self) -> int:
        return self.wins + self.ties + self.losses

    @property
    def equity(self) -> float:
        """Share of the pot won on average: ties count half."""
        if self.iterations == 0:
            return 0.0
        return (self.wins + self.ties / 2) / self.iterations

    @property
    def win_rate(self) -> float:
        return self.wins / self.iterations if self.iterations else 0.0

    @property
    def tie_rate(self) -> float:
        return self.ties / self.iterations if self.iterations else 0.0

    def to_dict(self) -> dict:
        return {
            "equity": self.equity,
            "wins": self.wins,
            "ties": self.ties,
            "losses": self.losses,
            "iterations": self.iterations,
            "time_ms": self.time_ms,
        }
