"""Hand evaluation: best 5-card hand out of 5, 6 or 7 cards."""

from dataclasses import dataclass, field
from enum import IntEnum
from functools import total_ordering
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

from poker_analyzer.errors import InvalidInputError
from poker_analyzer.models.card import Card


class HandRank(IntEnum):
    """Hand rankings from worst to best."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


# Longest tiebreaker any category produces (flush / high card)
TIEBREAK_WIDTH = 5

# Every 5-card index subset, fixed per input size: 1, 6 and 21 subsets
FIVE_CARD_SUBSETS: Dict[int, Tuple[Tuple[int, ...], ...]] = {
    n: tuple(combinations(range(n), 5)) for n in (5, 6, 7)
}

_WHEEL = [14, 5, 4, 3, 2]


@total_ordering
@dataclass(frozen=True, eq=False)
class HandValue:
    """Category plus tiebreaker ranks.

    Tiebreakers compare left to right and are zero-padded to a common
    width, so any two values are comparable.
    """
    rank: HandRank
    tiebreakers: Tuple[int, ...] = ()
    _key: Tuple[int, ...] = field(init=False, repr=False)

    def __post_init__(self):
        padded = tuple(self.tiebreakers) + (0,) * (TIEBREAK_WIDTH - len(self.tiebreakers))
        object.__setattr__(self, "_key", (int(self.rank),) + padded)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandValue):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: "HandValue") -> bool:
        if not isinstance(other, HandValue):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)

    def __str__(self) -> str:
        return f"{self.rank.label} {list(self.tiebreakers)}"


def _straight_high(ranks: List[int], distinct: int) -> int:
    """High card of a straight in 5 descending ranks, or 0.

    The wheel A-2-3-4-5 plays the ace low and is 5-high.
    """
    if distinct != 5:
        return 0
    if ranks[0] - ranks[4] == 4:
        return ranks[0]
    if ranks == _WHEEL:
        return 5
    return 0


def _classify(ranks: List[int], suits: List[str]) -> Tuple[HandRank, Tuple[int, ...]]:
    """Classify exactly five cards given as parallel rank/suit lists."""
    ranks = sorted(ranks, reverse=True)

    # Count rank frequencies
    rank_counts: Dict[int, int] = {}
    for r in ranks:
        rank_counts[r] = rank_counts.get(r, 0) + 1

    is_flush = suits.count(suits[0]) == 5
    high_card = _straight_high(ranks, len(rank_counts))

    counts = sorted(rank_counts.values(), reverse=True)
    grouped = sorted(rank_counts, key=lambda r: (-rank_counts[r], -r))

    if is_flush and high_card:
        if high_card == 14:
            return HandRank.ROYAL_FLUSH, (14,)
        return HandRank.STRAIGHT_FLUSH, (high_card,)

    if counts[0] == 4:
        return HandRank.FOUR_OF_A_KIND, (grouped[0], grouped[1])

    if counts[0] == 3 and counts[1] == 2:
        return HandRank.FULL_HOUSE, (grouped[0], grouped[1])

    if is_flush:
        return HandRank.FLUSH, tuple(ranks)

    if high_card:
        return HandRank.STRAIGHT, (high_card,)

    if counts[0] == 3:
        return HandRank.THREE_OF_A_KIND, tuple(grouped)

    # grouped is already pairs high-to-low, then the kicker
    if counts[0] == 2 and counts[1] == 2:
        return HandRank.TWO_PAIR, tuple(grouped)

    if counts[0] == 2:
        return HandRank.ONE_PAIR, tuple(grouped)

    return HandRank.HIGH_CARD, tuple(ranks)


def best_hand(cards: Sequence[Card]) -> HandValue:
    """Best HandValue of 5-7 distinct cards, without input checks."""
    ranks = [c.rank.numeric_value for c in cards]
    suits = [c.suit.value for c in cards]

    best = None
    for subset in FIVE_CARD_SUBSETS[len(cards)]:
        # Tiebreaker length is fixed per category, so plain tuple
        # comparison agrees with HandValue ordering here.
        candidate = _classify([ranks[i] for i in subset], [suits[i] for i in subset])
        if best is None or candidate > best:
            best = candidate
    return HandValue(best[0], best[1])


class HandEvaluator:
    """Evaluates poker hands."""

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> HandValue:
        """Return the best 5-card HandValue among 5, 6 or 7 cards.

        Every 5-card subset is classified and the maximum kept.

        Raises:
            InvalidInputError: on fewer than 5 or more than 7 cards, or
                duplicate cards.
        """
        n = len(cards)
        if n not in FIVE_CARD_SUBSETS:
            raise InvalidInputError(f"Need 5 to 7 cards to evaluate a hand, got {n}")
        if len(set(cards)) != n:
            raise InvalidInputError("Cannot evaluate a hand containing duplicate cards")
        return best_hand(cards)

    @staticmethod
    def compare(hand1: HandValue, hand2: HandValue) -> int:
        """Compare two evaluated hands.

        Returns:
            1 if hand1 wins, -1 if hand2 wins, 0 if tie.
        """
        if hand1 > hand2:
            return 1
        if hand1 < hand2:
            return -1
        return 0

    @staticmethod
    def compare_cards(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
        """Evaluate and compare two card sets."""
        return HandEvaluator.compare(HandEvaluator.evaluate(cards1),
                                     HandEvaluator.evaluate(cards2))
