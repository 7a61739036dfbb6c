"""Hand-class range notation expanded into concrete opponent hands.

Notation:
- Pairs: "AA", "77+", "QQ-99"
- Suited: "AKs", "ATs+", "KQs-K9s"
- Offsuit: "AKo", "A9o+"
- Both: "AK" (suited and offsuit combos)
"""

import logging
from itertools import combinations
from typing import Iterable, List, Set, Tuple

from poker_analyzer.errors import InvalidInputError
from poker_analyzer.models.card import Card, Rank, Suit

logger = logging.getLogger(__name__)

HoleCards = Tuple[Card, Card]

# High to low
RANKS = "AKQJT98765432"


def _rank_index(ch: str) -> int:
    idx = RANKS.find(ch.upper())
    if idx < 0:
        raise InvalidInputError(f"Unknown rank in range: {ch!r}")
    return idx


def _combos(high: str, low: str, kind: str) -> List[HoleCards]:
    """All specific combos of one hand class; ``kind`` is '', 's' or 'o'."""
    r1, r2 = Rank.from_char(high), Rank.from_char(low)
    suits = list(Suit)
    if r1 == r2:
        return [(Card(r1, a), Card(r2, b)) for a, b in combinations(suits, 2)]
    combos = []
    for a in suits:
        for b in suits:
            if a == b and kind != "o":
                combos.append((Card(r1, a), Card(r2, b)))
            elif a != b and kind != "s":
                combos.append((Card(r1, a), Card(r2, b)))
    return combos


def _split_token(token: str) -> Tuple[str, str, str]:
    if len(token) not in (2, 3):
        raise InvalidInputError(f"Cannot parse hand class: {token!r}")
    high, low = token[0].upper(), token[1].upper()
    kind = token[2].lower() if len(token) == 3 else ""
    if kind not in ("", "s", "o"):
        raise InvalidInputError(f"Cannot parse hand class: {token!r}")
    if _rank_index(high) > _rank_index(low):
        high, low = low, high
    if high == low and kind:
        raise InvalidInputError(f"Pairs cannot be suited or offsuit: {token!r}")
    return high, low, kind


def expand_hand_classes(token: str) -> List[Tuple[str, str, str]]:
    """Expand one notation token into (high, low, kind) hand classes."""
    token = token.strip()
    if token.endswith("+"):
        high, low, kind = _split_token(token[:-1])
        if high == low:
            return [(RANKS[i], RANKS[i], "") for i in range(0, _rank_index(high) + 1)]
        # Raise the kicker up to one below the top card
        top = _rank_index(high)
        return [(high, RANKS[i], kind) for i in range(top + 1, _rank_index(low) + 1)]

    if "-" in token:
        left, right = token.split("-", 1)
        h1, l1, k1 = _split_token(left)
        h2, l2, k2 = _split_token(right)
        if h1 == l1 and h2 == l2:
            lo, hi = sorted((_rank_index(h1), _rank_index(h2)))
            return [(RANKS[i], RANKS[i], "") for i in range(lo, hi + 1)]
        if h1 != h2 or k1 != k2:
            raise InvalidInputError(f"Range ends do not match: {token!r}")
        lo, hi = sorted((_rank_index(l1), _rank_index(l2)))
        return [(h1, RANKS[i], k1) for i in range(lo, hi + 1)]

    return [_split_token(token)]


def expand_range(notation: str, dead: Iterable[Card] = ()) -> List[HoleCards]:
    """Expand comma-separated range notation into concrete hole-card pairs.

    Combos that use a dead card are dropped, so the result is a valid
    opponent candidate set for the known hero hand and board.

    Raises:
        InvalidInputError: on unparseable notation or when no combo survives.
    """
    dead_cards: Set[Card] = set(dead)
    seen: Set[frozenset] = set()
    result: List[HoleCards] = []
    for token in notation.split(","):
        if not token.strip():
            continue
        for high, low, kind in expand_hand_classes(token):
            for combo in _combos(high, low, kind):
                key = frozenset(combo)
                if key in seen or dead_cards.intersection(combo):
                    continue
                seen.add(key)
                result.append(combo)

    if not result:
        raise InvalidInputError(f"Range {notation!r} has no combos left after dead cards")
    logger.debug("Expanded range %r into %d combos", notation, len(result))
    return result
