"""Poker analysis engine: equity in, scored actions and advice out."""

import logging
import random
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from poker_analyzer import config
from poker_analyzer.analysis.confidence import determine_confidence
from poker_analyzer.analysis.leak_detector import LeakDetector
from poker_analyzer.analysis.pot import (
    action_evs, call_ev, format_percentage, pot_odds, required_equity, stack_to_pot_ratio,
)
from poker_analyzer.analysis.ranges import estimate_ranges
from poker_analyzer.analysis.scoring import ScoringContext, generate_recommendations
from poker_analyzer.analysis.texture import analyze_board_texture
from poker_analyzer.models.action import ActionType
from poker_analyzer.models.analysis import (
    ActionRecommendation, AnalysisInput, AnalysisResult, HandMetrics,
)
from poker_analyzer.models.card import Card
from poker_analyzer.models.simulation import SimulationResult
from poker_analyzer.simulation.equity import EquitySimulator
from poker_analyzer.simulation.ranges import expand_range

logger = logging.getLogger(__name__)

QUICK_CALL_SCORE = 0.7
QUICK_FOLD_SCORE = 0.3


@dataclass(frozen=True)
class QuickAnalysis:
    recommendation: ActionRecommendation
    metrics: HandMetrics


class PokerAnalyzer:
    """Turns an AnalysisInput into recommendations, metrics and leaks.

    Cards are only evaluated by the equity simulator; everything after
    that works from the equity number and the known board.
    """

    def __init__(self, simulator: Optional[EquitySimulator] = None,
                 leak_detector: Optional[LeakDetector] = None,
                 iterations: int = config.ANALYSIS_ITERATIONS):
        self.simulator = simulator or EquitySimulator()
        self.leak_detector = leak_detector or LeakDetector()
        self.iterations = iterations

    def analyze(self, spot: AnalysisInput,
                cancel_event: Optional[threading.Event] = None) -> AnalysisResult:
        """Analyze a spot.

        Raises:
            InvalidInputError: if the spot is malformed.
            SimulationCancelled: if ``cancel_event`` fires during the
                equity estimate.
        """
        spot.validate()
        simulation = self.estimate_equity(spot, cancel_event)
        metrics = self.calculate_metrics(spot, simulation.equity)

        street = spot.effective_street
        texture = analyze_board_texture(spot.board)
        ctx = ScoringContext(
            metrics=metrics,
            texture=texture,
            street=street,
            fold_equity=spot.assumptions.fold_equity,
            facing_bet=spot.facing_bet,
        )
        recommendations = generate_recommendations(ctx, spot.assumptions.sizings)
        confidence = determine_confidence(metrics, street, spot.opponent_profile)
        leaks = self.leak_detector.detect(
            metrics, recommendations, spot.hero_position, spot.villain_position,
        )

        logger.debug("Analysis: equity=%.3f top=%s confidence=%s leaks=%d",
                     metrics.equity, recommendations[0].label, confidence.value, len(leaks))

        return AnalysisResult(
            recommendations=recommendations,
            metrics=metrics,
            ranges=estimate_ranges(metrics.equity),
            confidence=confidence,
            leaks=leaks,
            texture=texture,
        )

    def estimate_equity(self, spot: AnalysisInput,
                        cancel_event: Optional[threading.Event] = None) -> SimulationResult:
        candidates = self._opponent_candidates(spot)
        return self.simulator.run(
            spot.hero_cards, spot.board, candidates,
            iterations=self.iterations, cancel_event=cancel_event,
        )

    @staticmethod
    def calculate_metrics(spot: AnalysisInput, equity: float) -> HandMetrics:
        call_size = spot.call_size
        return HandMetrics(
            equity=equity,
            pot_odds=pot_odds(call_size, spot.pot),
            required_equity=required_equity(call_size, spot.pot),
            spr=stack_to_pot_ratio(spot.effective_stack, spot.pot),
            ev=action_evs(equity, spot.pot, call_size,
                          spot.assumptions.sizings, spot.assumptions.fold_equity),
        )

    @staticmethod
    def _opponent_candidates(spot: AnalysisInput) -> Optional[List[Tuple[Card, Card]]]:
        if not spot.villain_range:
            return None
        return expand_range(spot.villain_range, dead=list(spot.hero_cards) + list(spot.board))

    def quick_analysis(self, spot: AnalysisInput) -> QuickAnalysis:
        """Single call-or-fold verdict from equity against pot odds."""
        spot.validate()
        equity = self.estimate_equity(spot).equity
        odds = pot_odds(spot.call_size, spot.pot)
        profitable = equity >= odds

        recommendation = ActionRecommendation(
            action=ActionType.CALL if profitable else ActionType.FOLD,
            score=QUICK_CALL_SCORE if profitable else QUICK_FOLD_SCORE,
            rationale=(
                f"Equity: {format_percentage(equity)}",
                f"Required: {format_percentage(odds)}",
                "Profitable call" if profitable else "Equity below pot odds",
            ),
        )
        metrics = HandMetrics(
            equity=equity,
            pot_odds=odds,
            required_equity=odds,
            spr=stack_to_pot_ratio(spot.effective_stack, spot.pot),
            ev={"call": call_ev(equity, spot.pot, spot.call_size)},
        )
        return QuickAnalysis(recommendation=recommendation, metrics=metrics)


def analyze(spot: AnalysisInput, rng: Optional[random.Random] = None,
            iterations: int = config.ANALYSIS_ITERATIONS) -> AnalysisResult:
    """Analyze a spot with a fresh simulator; pass a seeded ``rng`` to reproduce."""
    analyzer = PokerAnalyzer(simulator=EquitySimulator(rng=rng), iterations=iterations)
    return analyzer.analyze(spot)


def quick_analysis(spot: AnalysisInput, rng: Optional[random.Random] = None,
                   iterations: int = config.ANALYSIS_ITERATIONS) -> QuickAnalysis:
    analyzer = PokerAnalyzer(simulator=EquitySimulator(rng=rng), iterations=iterations)
    return analyzer.quick_analysis(spot)
