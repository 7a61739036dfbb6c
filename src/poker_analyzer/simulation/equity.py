"""Monte Carlo equity estimation for a heads-up hand.

Each iteration completes the board, picks an opponent hand (uniformly from
a candidate set, or two random cards), evaluates both players' best five
cards and records a win, tie or loss for the hero.

The loop runs in batches. Between batches it checks an optional
``threading.Event``; once set, the run raises ``SimulationCancelled``
instead of returning a result built from fewer iterations.
"""

import logging
import random
import threading
import time
from concurrent.futures import CancelledError, Executor, Future
from typing import List, Optional, Sequence, Tuple

from poker_analyzer import config
from poker_analyzer.errors import InvalidInputError, SimulationCancelled
from poker_analyzer.models.card import Card
from poker_analyzer.models.simulation import SimulationConfig, SimulationResult
from poker_analyzer.simulation.deck import available_cards, draw
from poker_analyzer.simulation.evaluator import best_hand

logger = logging.getLogger(__name__)

HoleCards = Tuple[Card, Card]

BOARD_SIZE = 5
DECK_SIZE = 52


def validate_deal(hero_cards: Sequence[Card], board: Sequence[Card],
                  opponent_candidates: Optional[Sequence[HoleCards]] = None) -> None:
    """Check that hero, board and candidate hands can be dealt together.

    Candidate hands are alternatives for the same seat, so they may share
    cards with each other but never with the hero or the board.

    Raises:
        InvalidInputError: on bad card counts, duplicates or a deck too
            small to finish the hand.
    """
    if len(hero_cards) != 2:
        raise InvalidInputError(f"Hero needs exactly 2 hole cards, got {len(hero_cards)}")
    if len(board) > BOARD_SIZE:
        raise InvalidInputError(f"Board has at most {BOARD_SIZE} cards, got {len(board)}")

    known = list(hero_cards) + list(board)
    if len(set(known)) != len(known):
        raise InvalidInputError(f"Duplicate cards among hero hand and board: {known}")

    known_set = set(known)
    if opponent_candidates is not None:
        if not opponent_candidates:
            raise InvalidInputError("Opponent candidate set is empty")
        for hand in opponent_candidates:
            if len(hand) != 2 or hand[0] == hand[1]:
                raise InvalidInputError(f"Opponent hand must be 2 distinct cards: {list(hand)}")
            clash = known_set.intersection(hand)
            if clash:
                raise InvalidInputError(f"Opponent hand {list(hand)} reuses known cards {sorted(clash, key=repr)}")

    needed = len(known) + 2 + (BOARD_SIZE - len(board))
    if needed > DECK_SIZE:
        raise InvalidInputError(f"Deal needs {needed} cards, deck has {DECK_SIZE}")


class EquitySimulator:
    """Estimates hero equity by sampling unknown cards.

    The random source is owned by the simulator. Calls to ``run`` from
    several threads must use separate simulators; ``submit`` hands each
    background run its own random source derived from this one.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 batch_size: int = config.BATCH_SIZE):
        self.rng = rng if rng is not None else random.Random()
        self.batch_size = batch_size

    def run(self, hero_cards: Sequence[Card], board: Sequence[Card] = (),
            opponent_candidates: Optional[Sequence[HoleCards]] = None,
            iterations: int = config.DEFAULT_ITERATIONS,
            cancel_event: Optional[threading.Event] = None) -> SimulationResult:
        """Run the simulation to completion.

        Args:
            hero_cards: The hero's two hole cards.
            board: Known community cards (0-5).
            opponent_candidates: Hands to sample the opponent from. Random
                hands are dealt when omitted.
            iterations: Number of runouts to sample.
            cancel_event: Checked between batches.

        Returns:
            SimulationResult whose counts sum to ``iterations``.

        Raises:
            InvalidInputError: before any iteration runs, on invalid input.
            SimulationCancelled: if ``cancel_event`` is set mid-run.
        """
        sim_config = SimulationConfig(
            iterations=iterations,
            opponent_candidates=list(opponent_candidates) if opponent_candidates is not None else None,
            batch_size=self.batch_size,
        )
        validate_deal(hero_cards, board, sim_config.opponent_candidates)
        return self._run(list(hero_cards), list(board), sim_config, self.rng, cancel_event)

    def submit(self, executor: Executor, hero_cards: Sequence[Card],
               board: Sequence[Card] = (),
               opponent_candidates: Optional[Sequence[HoleCards]] = None,
               iterations: int = config.DEFAULT_ITERATIONS) -> "SimulationHandle":
        """Start a simulation on ``executor`` and return a cancellable handle.

        Input is validated here, on the caller's thread.
        """
        sim_config = SimulationConfig(
            iterations=iterations,
            opponent_candidates=list(opponent_candidates) if opponent_candidates is not None else None,
            batch_size=self.batch_size,
        )
        validate_deal(hero_cards, board, sim_config.opponent_candidates)
        rng = random.Random(self.rng.getrandbits(64))
        cancel_event = threading.Event()
        future = executor.submit(self._run, list(hero_cards), list(board),
                                 sim_config, rng, cancel_event)
        return SimulationHandle(future, cancel_event, iterations)

    def _run(self, hero: List[Card], board: List[Card], sim_config: SimulationConfig,
             rng: random.Random,
             cancel_event: Optional[threading.Event]) -> SimulationResult:
        iterations = sim_config.iterations
        candidates = sim_config.opponent_candidates
        missing = BOARD_SIZE - len(board)
        deck = available_cards(hero + board)

        logger.debug("Simulating %s on [%s]: %d iterations vs %s",
                     hero, " ".join(map(repr, board)), iterations,
                     f"{len(candidates)} candidates" if candidates else "random hands")

        start = time.perf_counter()
        wins = ties = losses = 0
        done = 0
        while done < iterations:
            if cancel_event is not None and cancel_event.is_set():
                logger.debug("Simulation cancelled after %d/%d iterations", done, iterations)
                raise SimulationCancelled(done, iterations)

            batch = min(sim_config.batch_size, iterations - done)
            for _ in range(batch):
                if candidates:
                    opponent = candidates[rng.randrange(len(candidates))]
                    pool = [c for c in deck if c != opponent[0] and c != opponent[1]]
                    runout = draw(pool, missing, rng)
                else:
                    dealt = draw(deck, missing + 2, rng)
                    runout, opponent = dealt[:missing], dealt[missing:]

                full_board = board + runout
                hero_value = best_hand(hero + full_board)
                villain_value = best_hand(list(opponent) + full_board)

                if hero_value > villain_value:
                    wins += 1
                elif hero_value < villain_value:
                    losses += 1
                else:
                    ties += 1
            done += batch

        elapsed_ms = (time.perf_counter() - start) * 1000
        result = SimulationResult(wins=wins, ties=ties, losses=losses, time_ms=elapsed_ms)
        logger.debug("Simulation done: equity=%.4f (%d/%d/%d) in %.0f ms",
                     result.equity, wins, ties, losses, elapsed_ms)
        return result


class SimulationHandle:
    """A simulation running on an executor."""

    def __init__(self, future: Future, cancel_event: threading.Event, iterations: int):
        self._future = future
        self._cancel_event = cancel_event
        self.iterations = iterations

    def cancel(self) -> None:
        """Stop the run at the next batch boundary; no result is reported."""
        self._cancel_event.set()
        self._future.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: Optional[float] = None) -> SimulationResult:
        """Wait for the result.

        Raises:
            SimulationCancelled: if the run was cancelled, even when the
                worker had already finished.
        """
        try:
            result = self._future.result(timeout)
        except CancelledError:
            raise SimulationCancelled(0, self.iterations) from None
        if self._cancel_event.is_set():
            raise SimulationCancelled(result.iterations, self.iterations)
        return result


def evaluate_equity(hero_cards: Sequence[Card], board: Sequence[Card] = (),
                    opponent_candidates: Optional[Sequence[HoleCards]] = None,
                    iterations: int = config.DEFAULT_ITERATIONS,
                    rng: Optional[random.Random] = None,
                    cancel_event: Optional[threading.Event] = None) -> SimulationResult:
    """Estimate hero equity against one opponent.

    Pass a seeded ``random.Random`` as ``rng`` for reproducible results.
    """
    simulator = EquitySimulator(rng=rng)
    return simulator.run(hero_cards, board, opponent_candidates,
                         iterations=iterations, cancel_event=cancel_event)
