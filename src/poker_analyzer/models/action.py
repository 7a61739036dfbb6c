"""Action and Street models."""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class Street(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"

    @property
    def is_terminal(self) -> bool:
        """River is the last betting round."""
        return self is Street.RIVER

    @classmethod
    def from_board_size(cls, count: int) -> "Street":
        if count == 0:
            return cls.PREFLOP
        if count <= 3:
            return cls.FLOP
        if count == 4:
            return cls.TURN
        return cls.RIVER


class ActionType(str, Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "all_in"

    @property
    def is_aggressive(self) -> bool:
        return self in (ActionType.BET, ActionType.RAISE, ActionType.ALL_IN)


@dataclass(frozen=True)
class PlayerAction:
    """A single logged action earlier in the hand."""
    actor: str
    action_type: ActionType
    street: Street = Street.PREFLOP
    size: Optional[float] = None
