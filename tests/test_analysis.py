"""Tests for pot math, board texture, action scoring, confidence and range strings."""

import pytest

from poker_analyzer.analysis.confidence import confidence_score, determine_confidence
from poker_analyzer.analysis.pot import (
    action_evs, bet_ev, bet_label, call_ev, format_big_blinds, format_percentage,
    pot_odds, required_equity, stack_to_pot_ratio,
)
from poker_analyzer.analysis.ranges import NARROWEST_RANGE, RANGE_TIERS, estimate_ranges, range_string
from poker_analyzer.analysis.scoring import (
    Contribution, ScoringContext, apply_rules, generate_recommendations,
    score_bet, score_check_call, score_fold,
)
from poker_analyzer.analysis.texture import analyze_board_texture, is_connected
from poker_analyzer.errors import InvalidInputError
from poker_analyzer.models.action import ActionType, Street
from poker_analyzer.models.analysis import (
    BoardTexture, Confidence, Dryness, HandMetrics, OpponentProfile,
)
from poker_analyzer.models.card import parse_cards


def _make_context(equity=0.5, required=0.25, spr=10.0, street=Street.FLOP,
                  fold_equity=0.3, facing_bet=False, texture=None, ev=None):
    metrics = HandMetrics(
        equity=equity,
        pot_odds=required,
        required_equity=required,
        spr=spr,
        ev=ev if ev is not None else {"fold": 0.0, "call": 1.5},
    )
    return ScoringContext(
        metrics=metrics,
        texture=texture or BoardTexture(),
        street=street,
        fold_equity=fold_equity,
        facing_bet=facing_bet,
    )


class TestPotMath:
    """Tests for pot odds, SPR and EV."""

    def test_pot_odds(self):
        assert pot_odds(10, 30) == pytest.approx(0.25)
        assert required_equity(10, 30) == pytest.approx(0.25)

    def test_free_check_needs_no_equity(self):
        assert pot_odds(0, 10) == 0.0

    def test_pot_odds_undefined(self):
        with pytest.raises(InvalidInputError):
            pot_odds(0, 0)
        with pytest.raises(InvalidInputError):
            pot_odds(-1, 10)

    def test_spr(self):
        assert stack_to_pot_ratio(100, 10) == pytest.approx(10.0)
        with pytest.raises(InvalidInputError):
            stack_to_pot_ratio(100, 0)

    def test_call_ev_breaks_even_at_required_equity(self):
        needed = required_equity(10, 30)
        assert call_ev(needed, 30, 10) == pytest.approx(0.0)
        assert call_ev(needed + 0.05, 30, 10) > 0
        assert call_ev(needed - 0.05, 30, 10) < 0

    def test_bet_ev(self):
        # Fold: win 10. Called: pot 20, win half of it, minus the 5 bet.
        assert bet_ev(0.5, 10, 0.5, 0.3) == pytest.approx(0.3 * 10 + 0.7 * (0.5 * 20 - 5))

    def test_bet_ev_without_fold_equity(self):
        assert bet_ev(0.0, 10, 1.0, 0.0) == pytest.approx(-10.0)

    def test_action_evs_keys(self):
        evs = action_evs(0.6, 10, 5, [0.33, 0.5, 1.0], 0.3)
        assert list(evs) == ["fold", "call", "bet_0.33", "bet_0.5", "bet_1"]
        assert evs["fold"] == 0.0

    def test_bet_label(self):
        assert bet_label(0.75) == "bet_0.75"

    def test_formatting(self):
        assert format_percentage(0.256) == "25.6%"
        assert format_percentage(0.3, 0) == "30%"
        assert format_big_blinds(2.5, 2) == "2.50BB"


class TestBoardTexture:
    """Tests for board texture classification."""

    def test_dry_rainbow_board(self):
        texture = analyze_board_texture(parse_cards("Kh 7d 2c"))
        assert texture.dryness == Dryness.DRY
        assert texture.rainbow
        assert not texture.connected
        assert texture.high_cards == 1
        assert not texture.draw_heavy

    def test_connected_board_is_wet(self):
        texture = analyze_board_texture(parse_cards("9h 8d 2c"))
        assert texture.connected
        assert texture.dryness == Dryness.WET
        assert texture.draw_heavy

    def test_connected_monotone_is_very_wet(self):
        texture = analyze_board_texture(parse_cards("Jh Th 9h"))
        assert texture.monotone
        assert not texture.rainbow
        assert texture.dryness == Dryness.VERY_WET
        assert texture.high_cards == 2

    def test_monotone_unconnected_is_wet(self):
        texture = analyze_board_texture(parse_cards("Ks 7s 2s"))
        assert texture.dryness == Dryness.WET

    def test_ace_with_wheel_card_is_connected(self):
        assert is_connected(parse_cards("Ah 4d 9c"))
        assert analyze_board_texture(parse_cards("Ah 4d 9c")).dryness == Dryness.WET

    def test_four_card_connected_is_very_wet(self):
        texture = analyze_board_texture(parse_cards("Kh Qd 2c 7s"))
        assert texture.dryness == Dryness.VERY_WET

    def test_paired_board_counts_as_connected(self):
        texture = analyze_board_texture(parse_cards("Kh Kd 7c"))
        assert texture.paired
        assert texture.connected
        assert texture.rainbow

    def test_empty_board(self):
        texture = analyze_board_texture([])
        assert texture == BoardTexture()

    def test_flop_needed_for_suit_flags(self):
        texture = analyze_board_texture(parse_cards("Ah Kh"))
        assert not texture.monotone
        assert not texture.rainbow
        assert not texture.connected


class TestScoring:
    """Tests for the fold, check/call and bet/raise rules."""

    def test_fold_far_below_required(self):
        rec = score_fold(_make_context(equity=0.2, required=0.4))
        assert rec.action == ActionType.FOLD
        assert rec.score == pytest.approx(0.8)
        assert rec.rationale[0] == "Equity significantly below required"
        assert rec.rationale[1] == "Need 40.0%, have 20.0%"

    def test_fold_slightly_below_required(self):
        rec = score_fold(_make_context(equity=0.35, required=0.4))
        assert rec.score == pytest.approx(0.4)

    def test_fold_when_call_is_profitable(self):
        rec = score_fold(_make_context(equity=0.5, required=0.4))
        assert rec.score == pytest.approx(0.1)

    def test_call_score_with_cards_to_come(self):
        rec = score_check_call(_make_context(equity=0.5, required=0.25, street=Street.FLOP))
        assert rec.action == ActionType.CHECK
        assert rec.score == pytest.approx(0.9)
        assert "Positive equity call" in rec.rationale
        assert "EV: 1.50BB" in rec.rationale

    def test_call_score_on_river(self):
        rec = score_check_call(_make_context(equity=0.5, required=0.25, street=Street.RIVER))
        assert rec.score == pytest.approx(0.8)

    def test_call_ratio_below_cap(self):
        rec = score_check_call(_make_context(equity=0.3, required=0.25, street=Street.RIVER))
        assert rec.score == pytest.approx(0.3 / 0.25 * 0.4)

    def test_call_with_zero_required_equity(self):
        rec = score_check_call(_make_context(equity=0.1, required=0.0, street=Street.RIVER))
        assert rec.score == pytest.approx(0.8)

    def test_call_without_equity_gets_only_pot_control(self):
        rec = score_check_call(_make_context(equity=0.1, required=0.4, street=Street.TURN))
        assert rec.score == pytest.approx(0.1)

    def test_facing_bet_labels(self):
        ctx = _make_context(facing_bet=True)
        assert score_check_call(ctx).action == ActionType.CALL
        assert score_bet(ctx, 0.5).action == ActionType.RAISE

    def test_value_bet_on_dry_board(self):
        rec = score_bet(_make_context(equity=0.7), 0.5)
        assert rec.action == ActionType.BET
        assert rec.size == 0.5
        assert rec.score == pytest.approx(0.5 + 0.2 + 0.1)
        assert "Strong hand for value" in rec.rationale
        assert "Dry board favors betting" in rec.rationale
        assert "Standard sizing" in rec.rationale

    def test_value_bet_on_wet_board(self):
        wet = BoardTexture(dryness=Dryness.WET, connected=True, draw_heavy=True)
        rec = score_bet(_make_context(equity=0.7, texture=wet), 1.0)
        assert rec.score == pytest.approx(0.5)

    def test_bluff(self):
        rec = score_bet(_make_context(equity=0.2, fold_equity=0.5), 0.75)
        assert rec.score == pytest.approx(0.5 * 0.6 + 0.1)
        assert "Fold equity: 50%" in rec.rationale

    def test_no_bluff_without_fold_equity(self):
        rec = score_bet(_make_context(equity=0.2, fold_equity=0.3), 0.33)
        assert rec.score == pytest.approx(0.0)

    def test_bet_ev_reason(self):
        ev = {"fold": 0.0, "call": 1.0, "bet_0.5": 2.25}
        rec = score_bet(_make_context(equity=0.7, ev=ev), 0.5)
        assert rec.rationale[-1] == "EV: 2.25BB"

    def test_label(self):
        rec = score_bet(_make_context(), 0.33)
        assert rec.label == "BET 33%"
        assert score_fold(_make_context()).label == "FOLD"

    def test_apply_rules_clamps_once(self):
        rules = [lambda ctx, size: Contribution(0.9, ("a",)),
                 lambda ctx, size: Contribution(0.9, ("b",)),
                 lambda ctx, size: Contribution(-0.5)]
        score, reasons = apply_rules(rules, _make_context())
        assert score == 1.0
        assert reasons == ("a", "b")

    def test_apply_rules_floor(self):
        score, _ = apply_rules([lambda ctx, size: Contribution(-0.3)], _make_context())
        assert score == 0.0

    def test_generate_recommendations(self):
        sizings = [0.33, 0.5, 0.75, 1.0]
        recs = generate_recommendations(_make_context(equity=0.7), sizings)
        assert len(recs) == 2 + len(sizings)
        scores = [r.score for r in recs]
        assert scores == sorted(scores, reverse=True)
        assert all(0.0 <= s <= 1.0 for s in scores)
        assert sum(1 for r in recs if r.action == ActionType.BET) == len(sizings)

    def test_ties_keep_candidate_order(self):
        # Both standard sizes score the same; the smaller one was generated first
        recs = generate_recommendations(_make_context(equity=0.7), [0.5, 0.75])
        bets = [r for r in recs if r.action == ActionType.BET]
        assert [b.size for b in bets] == [0.5, 0.75]


class TestConfidence:
    """Tests for the confidence label."""

    def _metrics(self, equity, spr=10.0):
        return HandMetrics(equity=equity, pot_odds=0.3, required_equity=0.3, spr=spr)

    def test_high(self):
        assert determine_confidence(self._metrics(0.9), Street.RIVER,
                                    OpponentProfile.WHALE) == Confidence.HIGH

    def test_medium(self):
        assert determine_confidence(self._metrics(0.65), Street.FLOP,
                                    OpponentProfile.REG) == Confidence.MEDIUM

    def test_low(self):
        assert determine_confidence(self._metrics(0.55), Street.PREFLOP,
                                    OpponentProfile.LOOSE) == Confidence.LOW

    def test_extreme_spr_adds_points(self):
        deep = confidence_score(self._metrics(0.5, spr=20), Street.PREFLOP, OpponentProfile.LOOSE)
        short = confidence_score(self._metrics(0.5, spr=1), Street.PREFLOP, OpponentProfile.LOOSE)
        normal = confidence_score(self._metrics(0.5, spr=8), Street.PREFLOP, OpponentProfile.LOOSE)
        assert deep == short == pytest.approx(0.2)
        assert normal == 0.0

    def test_boundary_sums(self):
        # 0.4 equity points + 0.3 for the river lands exactly on the high threshold
        assert determine_confidence(self._metrics(0.05), Street.RIVER,
                                    OpponentProfile.WHALE) == Confidence.HIGH


class TestRangeStrings:
    """Tests for equity-to-range descriptions."""

    def test_tiers(self):
        assert range_string(0.85) == RANGE_TIERS[0][1]
        assert range_string(0.65) == RANGE_TIERS[1][1]
        assert range_string(0.45) == RANGE_TIERS[2][1]
        assert range_string(0.25) == RANGE_TIERS[3][1]
        assert range_string(0.15) == RANGE_TIERS[4][1]
        assert range_string(0.05) == NARROWEST_RANGE

    def test_villain_uses_complement(self):
        ranges = estimate_ranges(0.85)
        assert ranges.hero == RANGE_TIERS[0][1]
        assert ranges.villain == RANGE_TIERS[4][1]
