from random import Random

import pytest

from cribbage.cards import parse_card
from cribbage.deck import build_deck
from cribbage.scoring import ScoringError, score_hand


def cards(text: str):
    return [parse_card(label) for label in text.split()]


def points_for(breakdown, prefix: str) -> int:
    return sum(item.points for item in breakdown.items if item.description.startswith(prefix))


def test_four_of_a_kind_scores_twelve_for_pairs():
    result = score_hand(cards("5♠ 5♥ 5♦ 5♣"), parse_card("6♠"))
    assert points_for(result, "Pair") == 12
    assert points_for(result, "Run") == 0
    assert points_for(result, "15") == 8
    assert result.total == 20


def test_best_hand_scores_29():
    result = score_hand(cards("5♠ 5♥ 5♦ J♣"), parse_card("5♣"))
    assert result.total == 29
    assert points_for(result, "Nobs") == 1


def test_run_with_fifteens_and_nobs():
    result = score_hand(cards("J♠ 4♥ A♦ 2♣"), parse_card("3♠"))
    assert [(item.description, item.points) for item in result.items] == [
        ("15: J♠ + 4♥ + A♦", 2),
        ("15: J♠ + 2♣ + 3♠", 2),
        ("Run of 4: A♦ 2♣ 3♠ 4♥", 4),
        ("Nobs: J♠", 1),
    ]
    assert result.total == 9


def test_double_run_counts_each_combination():
    result = score_hand(cards("7♠ 7♥ 8♦ 9♣"), parse_card("K♠"))
    runs = [item for item in result.items if item.description.startswith("Run")]
    assert len(runs) == 2
    assert all(item.points == 3 for item in runs)
    assert points_for(result, "15") == 4
    assert points_for(result, "Pair") == 2
    assert result.total == 12


def test_only_longest_run_counts():
    result = score_hand(cards("3♠ 4♥ 5♦ 6♣"), parse_card("7♠"))
    runs = [item for item in result.items if item.description.startswith("Run")]
    assert [item.points for item in runs] == [5]


def test_five_card_flush_scores_five_not_nine():
    result = score_hand(cards("2♥ 4♥ 6♥ 8♥"), parse_card("10♥"))
    assert [(item.description, item.points) for item in result.items] == [("Flush: 5 cards (♥)", 5)]
    assert result.total == 5
    assert score_hand(cards("2♥ 4♥ 6♥ 8♥"), parse_card("10♥"), is_crib=True).total == 5


def test_four_card_flush_does_not_count_in_crib():
    hand = cards("2♥ 4♥ 6♥ 8♥")
    assert score_hand(hand, parse_card("10♠")).total == 4
    crib = score_hand(hand, parse_card("10♠"), is_crib=True)
    assert crib.total == 0
    assert crib.is_nineteen


def test_nobs_only():
    result = score_hand(cards("J♦ 7♣ A♠ 9♥"), parse_card("K♦"))
    assert [(item.description, item.points) for item in result.items] == [("Nobs: J♦", 1)]


def test_jack_starter_is_not_nobs():
    result = score_hand(cards("2♦ 7♣ A♠ 9♥"), parse_card("J♦"))
    assert points_for(result, "Nobs") == 0


def test_items_are_ordered_by_category():
    result = score_hand(cards("5♠ 5♥ J♥ Q♥"), parse_card("K♥"))
    order = ["15", "Pair", "Run", "Flush", "Nobs"]
    categories = [next(i for i, prefix in enumerate(order) if item.description.startswith(prefix)) for item in result.items]
    assert categories == sorted(categories)


def test_total_matches_breakdown_on_random_hands():
    rng = Random(11)
    deck = build_deck()
    for _ in range(300):
        sample = rng.sample(deck, 5)
        for is_crib in (False, True):
            result = score_hand(sample[:4], sample[4], is_crib=is_crib)
            assert result.total == sum(item.points for item in result.items)
            assert 0 <= result.total <= 29


def test_malformed_hands_rejected():
    with pytest.raises(ScoringError):
        score_hand(cards("5♠ 5♥ 5♦"), parse_card("6♠"))
    with pytest.raises(ScoringError):
        score_hand(cards("5♠ 5♥ 5♦ 6♠"), parse_card("6♠"))
