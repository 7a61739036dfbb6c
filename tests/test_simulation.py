"""Tests for the card model, deck and hand evaluator."""

import random
from itertools import combinations

import pytest

from poker_analyzer.errors import InvalidInputError
from poker_analyzer.models.card import Card, Rank, Suit, parse_cards
from poker_analyzer.simulation.deck import available_cards, draw, full_deck, shuffle
from poker_analyzer.simulation.evaluator import (
    FIVE_CARD_SUBSETS, HandEvaluator, HandRank, HandValue,
)


def _hand(text: str):
    return parse_cards(text)


class TestCard:
    """Tests for Card parsing and notation."""

    def test_parse(self):
        card = Card.parse("Ah")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.HEARTS
        assert card.value == 14

    def test_parse_ten_variants(self):
        assert Card.parse("Td") == Card.parse("10d") == Card(Rank.TEN, Suit.DIAMONDS)

    def test_parse_uppercase_suit(self):
        assert Card.parse("KS") == Card(Rank.KING, Suit.SPADES)

    def test_round_trip_all_cards(self):
        """Every card survives card -> canonical string -> card."""
        for card in full_deck():
            text = card.to_short()
            assert len(text) == 2
            assert text[1] in "hdcs"
            assert Card.parse(text) == card

    def test_canonical_form(self):
        assert Card(Rank.TEN, Suit.CLUBS).to_short() == "Tc"
        assert repr(Card(Rank.TWO, Suit.SPADES)) == "2s"
        assert str(Card(Rank.ACE, Suit.HEARTS)) == "A♥"

    def test_invalid_cards(self):
        for bad in ("", "A", "Ax", "1h", "AhK"):
            with pytest.raises(InvalidInputError):
                Card.parse(bad)

    def test_parse_cards_formats(self):
        expected = [Card.parse("Ah"), Card.parse("Kd")]
        assert parse_cards("Ah Kd") == expected
        assert parse_cards("Ah,Kd") == expected
        assert parse_cards("AhKd") == expected
        assert parse_cards("") == []

    def test_cards_are_hashable_and_equal_by_value(self):
        assert len({Card.parse("Ah"), Card(Rank.ACE, Suit.HEARTS)}) == 1


class TestDeck:
    """Tests for deck building, exclusion and sampling."""

    def test_full_deck_has_52_distinct_cards(self):
        deck = full_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52
        assert len({(c.rank, c.suit) for c in deck}) == 52

    def test_available_cards_excludes_known(self):
        known = _hand("Ah Kd 2c")
        cards = available_cards(known)
        assert len(cards) == 49
        assert not set(known) & set(cards)

    def test_available_cards_by_value(self):
        # A fresh Card equal by value is excluded like the original
        cards = available_cards([Card(Rank.ACE, Suit.HEARTS)])
        assert Card.parse("Ah") not in cards

    def test_draw_never_returns_excluded_or_duplicates(self):
        rng = random.Random(7)
        known = set(_hand("Ah Ad Kc"))
        pool = available_cards(known)
        for _ in range(500):
            drawn = draw(pool, 7, rng)
            assert len(drawn) == 7
            assert len(set(drawn)) == 7
            assert not known & set(drawn)

    def test_draw_leaves_candidates_untouched(self):
        pool = full_deck()
        before = list(pool)
        draw(pool, 10, random.Random(1))
        assert pool == before

    def test_draw_too_many(self):
        with pytest.raises(InvalidInputError):
            draw(_hand("Ah Kd"), 3, random.Random(0))

    def test_draw_all(self):
        pool = _hand("Ah Kd Qs")
        assert sorted(draw(pool, 3, random.Random(0)), key=repr) == sorted(pool, key=repr)

    def test_shuffle_is_permutation(self):
        items = list(range(20))
        shuffle(items, random.Random(3))
        assert sorted(items) == list(range(20))
        assert items != list(range(20))

    def test_shuffle_reproducible(self):
        a, b = list(range(30)), list(range(30))
        shuffle(a, random.Random(99))
        shuffle(b, random.Random(99))
        assert a == b


class TestHandEvaluator:
    """Tests for hand classification and tiebreakers."""

    @pytest.mark.parametrize("cards,rank,tiebreakers", [
        ("As Th 8d 5c 2s", HandRank.HIGH_CARD, (14, 10, 8, 5, 2)),
        ("As Ah 8d 5c 2s", HandRank.ONE_PAIR, (14, 8, 5, 2)),
        ("As Ah 8d 8c 2s", HandRank.TWO_PAIR, (14, 8, 2)),
        ("As Ah Ad 5c 2s", HandRank.THREE_OF_A_KIND, (14, 5, 2)),
        ("6s 5h 4d 3c 2s", HandRank.STRAIGHT, (6,)),
        ("As Ts 8s 5s 2s", HandRank.FLUSH, (14, 10, 8, 5, 2)),
        ("As Ah Ad 8c 8s", HandRank.FULL_HOUSE, (14, 8)),
        ("As Ah Ad Ac 2s", HandRank.FOUR_OF_A_KIND, (14, 2)),
        ("6s 5s 4s 3s 2s", HandRank.STRAIGHT_FLUSH, (6,)),
        ("As Ks Qs Js Ts", HandRank.ROYAL_FLUSH, (14,)),
    ])
    def test_categories(self, cards, rank, tiebreakers):
        value = HandEvaluator.evaluate(_hand(cards))
        assert value.rank == rank
        assert value.tiebreakers == tiebreakers

    def test_wheel_is_five_high_straight(self):
        value = HandEvaluator.evaluate(_hand("Ah 2c 3d 4s 5h"))
        assert value.rank == HandRank.STRAIGHT
        assert value.tiebreakers == (5,)

    def test_wheel_loses_to_six_high(self):
        wheel = HandEvaluator.evaluate(_hand("Ah 2c 3d 4s 5h"))
        six_high = HandEvaluator.evaluate(_hand("2h 3c 4d 5s 6h"))
        assert wheel < six_high
        assert HandEvaluator.compare(wheel, six_high) == -1

    def test_steel_wheel(self):
        value = HandEvaluator.evaluate(_hand("Ad 2d 3d 4d 5d"))
        assert value.rank == HandRank.STRAIGHT_FLUSH
        assert value.tiebreakers == (5,)

    def test_no_wraparound_straight(self):
        value = HandEvaluator.evaluate(_hand("Qh Kc Ad 2s 3h"))
        assert value.rank == HandRank.HIGH_CARD

    def test_category_ladder(self):
        """Royal > straight flush > quads > boat > flush > straight > trips > two pair > pair > high."""
        ladder = [
            "As Ks Qs Js Ts",
            "9h 8h 7h 6h 5h",
            "Qc Qd Qh Qs 3c",
            "Jc Jd Jh 4s 4c",
            "Kd Td 8d 6d 3d",
            "9c 8d 7h 6s 5c",
            "7c 7d 7h Ks 2c",
            "Tc Td 5h 5s Ac",
            "8c 8d Ah Ks 2c",
            "Ac Qd 9h 7s 4c",
        ]
        values = [HandEvaluator.evaluate(_hand(h)) for h in ladder]
        for better, worse in zip(values, values[1:]):
            assert better > worse

    def test_kickers_break_ties(self):
        high_kicker = HandEvaluator.evaluate(_hand("Ah Ad Kc 7s 2h"))
        low_kicker = HandEvaluator.evaluate(_hand("As Ac Qc 7d 2c"))
        assert high_kicker > low_kicker

    def test_two_pair_ordering(self):
        aces_up = HandEvaluator.evaluate(_hand("Ah Ad 3c 3s Kh"))
        kings_queens = HandEvaluator.evaluate(_hand("Kh Kd Qc Qs Ah"))
        assert aces_up > kings_queens

    def test_equal_hands_tie(self):
        a = HandEvaluator.evaluate(_hand("Ah Kd Qc Js 9h"))
        b = HandEvaluator.evaluate(_hand("As Kc Qd Jh 9s"))
        assert a == b
        assert HandEvaluator.compare(a, b) == 0
        assert hash(a) == hash(b)

    def test_zero_padding_in_comparison(self):
        short = HandValue(HandRank.STRAIGHT, (5,))
        padded = HandValue(HandRank.STRAIGHT, (5, 0, 0))
        assert short == padded
        assert HandValue(HandRank.ONE_PAIR, (9, 5)) > HandValue(HandRank.ONE_PAIR, (9,))

    def test_best_of_seven(self):
        value = HandEvaluator.evaluate(_hand("Ah Kh Qh Jh Th 2c 3d"))
        assert value.rank == HandRank.ROYAL_FLUSH

    def test_best_of_seven_picks_higher_straight(self):
        value = HandEvaluator.evaluate(_hand("Ah 2c 3d 4s 5h 6c 9d"))
        assert value.rank == HandRank.STRAIGHT
        assert value.tiebreakers == (6,)

    def test_best_of_six(self):
        value = HandEvaluator.evaluate(_hand("Kh Kd Kc 4s 4h 2c"))
        assert value.rank == HandRank.FULL_HOUSE
        assert value.tiebreakers == (13, 4)

    def test_subset_tables(self):
        assert len(FIVE_CARD_SUBSETS[5]) == 1
        assert len(FIVE_CARD_SUBSETS[6]) == 6
        assert len(FIVE_CARD_SUBSETS[7]) == 21

    def test_too_few_cards(self):
        with pytest.raises(InvalidInputError):
            HandEvaluator.evaluate(_hand("Ah Kd Qc Js"))

    def test_too_many_cards(self):
        with pytest.raises(InvalidInputError):
            HandEvaluator.evaluate(_hand("Ah Kd Qc Js 9h 8h 7h 6h"))

    def test_duplicate_cards(self):
        with pytest.raises(InvalidInputError):
            HandEvaluator.evaluate(_hand("Ah Ah Qc Js 9h"))

    def test_compare_cards(self):
        pair = _hand("As Ah 8d 5c 2s")
        high_card = _hand("Ks Qh Jd Tc 8s")
        assert HandEvaluator.compare_cards(pair, high_card) == 1
        assert HandEvaluator.compare_cards(high_card, pair) == -1


class TestTotalOrder:
    """The HandValue relation is a total order on random hands."""

    @pytest.fixture(scope="class")
    def values(self):
        rng = random.Random(2024)
        deck = full_deck()
        hands = [draw(deck, 5, rng) for _ in range(60)]
        # Add a few fixed ties and wheels
        hands.append(_hand("Ah 2c 3d 4s 5h"))
        hands.append(_hand("As 2d 3c 4h 5s"))
        hands.append(_hand("2h 3c 4d 5s 6h"))
        return [HandEvaluator.evaluate(h) for h in hands]

    def test_every_category_in_range(self, values):
        for v in values:
            assert 0 <= v.rank <= 9

    def test_trichotomy(self, values):
        for a, b in combinations(values, 2):
            outcomes = [a > b, a < b, a == b]
            assert outcomes.count(True) == 1

    def test_transitivity(self, values):
        for a in values:
            for b in values:
                if not a >= b:
                    continue
                for c in values:
                    if b >= c:
                        assert a >= c
