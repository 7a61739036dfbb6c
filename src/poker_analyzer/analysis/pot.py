"""Pot economics: pot odds, SPR and expected value.

All amounts share one unit (chips or big blinds). EV results are in that
same unit.
"""

from typing import Dict, Iterable

from poker_analyzer.errors import InvalidInputError


def pot_odds(call_size: float, pot_size: float) -> float:
    """Cost of calling relative to the pot after the call: call / (pot + call)."""
    if call_size < 0:
        raise InvalidInputError(f"Call size cannot be negative, got {call_size}")
    total = pot_size + call_size
    if total <= 0:
        raise InvalidInputError(f"Pot odds undefined for pot={pot_size}, call={call_size}")
    return call_size / total


def required_equity(call_size: float, pot_size: float) -> float:
    """Break-even equity for a call, equal to the pot odds."""
    return pot_odds(call_size, pot_size)


def stack_to_pot_ratio(stack_size: float, pot_size: float) -> float:
    """Effective stack divided by the current pot."""
    if pot_size <= 0:
        raise InvalidInputError(f"SPR undefined for non-positive pot {pot_size}")
    return stack_size / pot_size


def call_ev(equity: float, pot_size: float, call_size: float) -> float:
    """EV of calling: equity * (pot + call) - call."""
    return equity * (pot_size + call_size) - call_size


def bet_ev(equity: float, pot_size: float, size: float, fold_equity: float) -> float:
    """EV of betting ``size`` times the pot.

    The opponent folds with probability ``fold_equity`` and we take the
    pot; otherwise they call and the pot grows by twice the bet. Street and
    raise history are ignored.
    """
    bet = size * pot_size
    called_pot = pot_size + 2 * bet
    return fold_equity * pot_size + (1 - fold_equity) * (equity * called_pot - bet)


def bet_label(size: float) -> str:
    return f"bet_{size:g}"


def action_evs(equity: float, pot_size: float, call_size: float,
               sizings: Iterable[float], fold_equity: float) -> Dict[str, float]:
    """EV of every candidate action keyed by label: fold, call, bet_<size>."""
    ev = {
        "fold": 0.0,
        "call": call_ev(equity, pot_size, call_size),
    }
    for size in sizings:
        ev[bet_label(size)] = bet_ev(equity, pot_size, size, fold_equity)
    return ev


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value * 100:.{decimals}f}%"


def format_big_blinds(value: float, decimals: int = 1) -> str:
    return f"{value:.{decimals}f}BB"
