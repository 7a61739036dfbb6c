"""Board texture classification."""

from typing import Sequence

from poker_analyzer.models.analysis import BoardTexture, Dryness
from poker_analyzer.models.card import Card

# Monotone, rainbow and connectedness need at least a flop
MIN_TEXTURE_CARDS = 3
HIGH_CARD_MIN = 10
# Largest rank gap between neighbours that still counts as connected
CONNECTED_GAP = 2
WHEEL_LOW_MAX = 5


def is_paired(board: Sequence[Card]) -> bool:
    ranks = [c.rank for c in board]
    return len(set(ranks)) < len(ranks)


def is_monotone(board: Sequence[Card]) -> bool:
    if len(board) < MIN_TEXTURE_CARDS:
        return False
    return len({c.suit for c in board}) == 1


def is_rainbow(board: Sequence[Card]) -> bool:
    if len(board) < MIN_TEXTURE_CARDS:
        return False
    return len({c.suit for c in board}) == len(board)


def is_connected(board: Sequence[Card]) -> bool:
    """Neighbouring ranks within two of each other, or an ace with a wheel card."""
    if len(board) < MIN_TEXTURE_CARDS:
        return False
    ranks = sorted(c.value for c in board)
    for low, high in zip(ranks, ranks[1:]):
        if high - low <= CONNECTED_GAP:
            return True
    has_ace = 14 in ranks
    has_wheel_card = any(r <= WHEEL_LOW_MAX for r in ranks)
    return has_ace and has_wheel_card


def count_high_cards(board: Sequence[Card]) -> int:
    """Cards ranked T or above."""
    return sum(1 for c in board if c.value >= HIGH_CARD_MIN)


def analyze_board_texture(board: Sequence[Card]) -> BoardTexture:
    """Classify the known board.

    WET when connected or monotone; VERY_WET when connected and either
    monotone or four-plus cards; otherwise DRY.
    """
    paired = is_paired(board)
    monotone = is_monotone(board)
    rainbow = is_rainbow(board)
    connected = is_connected(board)

    dryness = Dryness.DRY
    if connected or monotone:
        dryness = Dryness.WET
    if connected and (monotone or len(board) >= 4):
        dryness = Dryness.VERY_WET

    return BoardTexture(
        dryness=dryness,
        paired=paired,
        monotone=monotone,
        rainbow=rainbow,
        connected=connected,
        high_cards=count_high_cards(board),
        draw_heavy=dryness is not Dryness.DRY,
    )
