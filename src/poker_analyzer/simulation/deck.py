"""Card sampling primitives for equity simulation."""

import random
from typing import Iterable, List, MutableSequence, Sequence, TypeVar

from poker_analyzer.errors import InvalidInputError
from poker_analyzer.models.card import Card, Rank, Suit

T = TypeVar("T")


def full_deck() -> List[Card]:
    """Return the 52 distinct cards, suit by suit."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def available_cards(known: Iterable[Card]) -> List[Card]:
    """Full deck minus the known cards, compared by value."""
    excluded = set(known)
    return [c for c in full_deck() if c not in excluded]


def shuffle(items: MutableSequence[T], rng: random.Random) -> None:
    """Fisher-Yates shuffle in place."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]


def draw(candidates: Sequence[T], count: int, rng: random.Random) -> List[T]:
    """Draw ``count`` items at random without replacement.

    Runs a partial Fisher-Yates over a copy, so ``candidates`` is left
    untouched.

    Raises:
        InvalidInputError: if ``count`` exceeds the number of candidates.
    """
    n = len(candidates)
    if count > n:
        raise InvalidInputError(f"Not enough cards in deck. Need {count}, have {n}")
    if count < 0:
        raise InvalidInputError(f"Cannot draw {count} cards")
    pool = list(candidates)
    for i in range(count):
        j = rng.randrange(i, n)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:count]
