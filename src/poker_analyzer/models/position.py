"""Position model and post-flop acting order."""

from enum import Enum

from poker_analyzer.errors import InvalidInputError


class Position(str, Enum):
    UTG = "UTG"
    UTG1 = "UTG+1"
    MP = "MP"
    MP1 = "MP+1"
    HJ = "HJ"
    CO = "CO"
    BTN = "BTN"
    SB = "SB"
    BB = "BB"

    @property
    def postflop_order(self) -> int:
        """Index in the post-flop acting order; lower acts first."""
        return _POSTFLOP_ORDER.index(self)

    def is_out_of_position(self, other: "Position") -> bool:
        """True when this seat acts before ``other`` after the flop."""
        return self.postflop_order < other.postflop_order

    @classmethod
    def parse(cls, s: str) -> "Position":
        key = s.strip().upper()
        for p in cls:
            if p.value == key or p.name == key:
                return p
        raise InvalidInputError(f"Unknown position: {s}")


_POSTFLOP_ORDER = [
    Position.SB, Position.BB,
    Position.UTG, Position.UTG1,
    Position.MP, Position.MP1, Position.HJ,
    Position.CO, Position.BTN,
]
