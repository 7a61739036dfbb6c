"""Card, Rank, and Suit models."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from poker_analyzer.errors import InvalidInputError


class Suit(str, Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"

    @classmethod
    def from_symbol(cls, s: str) -> "Suit":
        mapping = {
            "h": cls.HEARTS, "hearts": cls.HEARTS, "♥": cls.HEARTS,
            "d": cls.DIAMONDS, "diamonds": cls.DIAMONDS, "♦": cls.DIAMONDS,
            "c": cls.CLUBS, "clubs": cls.CLUBS, "♣": cls.CLUBS,
            "s": cls.SPADES, "spades": cls.SPADES, "♠": cls.SPADES,
        }
        key = s.lower()
        if key in mapping:
            return mapping[key]
        raise InvalidInputError(f"Unknown suit: {s}")

    @property
    def symbol(self) -> str:
        return {"h": "♥", "d": "♦", "c": "♣", "s": "♠"}[self.value]


_RANK_VALUES = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8,
    "9": 9, "T": 10, "J": 11, "Q": 12, "K": 13, "A": 14,
}


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def numeric_value(self) -> int:
        return _RANK_VALUES[self.value]

    @classmethod
    def from_char(cls, c: str) -> "Rank":
        if c == "10":
            return cls.TEN
        for r in cls:
            if r.value == c.upper():
                return r
        raise InvalidInputError(f"Unknown rank: {c}")


@dataclass(frozen=True)
class Card:
    """A single playing card.

    Cards compare equal when rank and suit both match, so they can be
    used in sets and as dict keys.
    """
    rank: Rank
    suit: Suit

    @classmethod
    def parse(cls, s: str) -> "Card":
        """Parse a card string like 'Ah', 'Ts', '2c' or '10d'."""
        s = s.strip()
        if len(s) == 2:
            return cls(Rank.from_char(s[0]), Suit.from_symbol(s[1]))
        elif len(s) == 3 and s[:2] == "10":
            return cls(Rank.TEN, Suit.from_symbol(s[2]))
        raise InvalidInputError(f"Cannot parse card: {s!r}")

    @property
    def value(self) -> int:
        return self.rank.numeric_value

    def __repr__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"

    def to_short(self) -> str:
        """Return the canonical two-character form, e.g. 'Ah'."""
        return f"{self.rank.value}{self.suit.value}"


def parse_cards(text: str) -> List[Card]:
    """Parse a run of cards separated by spaces or commas, or packed like 'AhKd'."""
    text = text.strip()
    if not text:
        return []
    tokens = [t for t in re.split(r"[\s,]+", text) if t]
    if len(tokens) == 1 and len(tokens[0]) > 3:
        packed = tokens[0]
        if len(packed) % 2:
            raise InvalidInputError(f"Cannot parse cards: {text!r}")
        tokens = [packed[i:i + 2] for i in range(0, len(packed), 2)]
    return [Card.parse(t) for t in tokens]
