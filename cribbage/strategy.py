"""Heuristic decision making for the computer opponent."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, Rank, Suit
from .scoring import FIFTEEN, THIRTY_ONE, score_hand, score_peg

logger = logging.getLogger(__name__)

DISCARD_COUNT = 2

# Representative starters used instead of all 46 unseen cards.
DEFAULT_DISCARD_STARTERS: Tuple[Card, ...] = (
    Card(Rank.ACE, Suit.SPADES),
    Card(Rank.TWO, Suit.HEARTS),
    Card(Rank.FOUR, Suit.DIAMONDS),
    Card(Rank.FIVE, Suit.CLUBS),
    Card(Rank.SEVEN, Suit.SPADES),
    Card(Rank.NINE, Suit.HEARTS),
    Card(Rank.TEN, Suit.DIAMONDS),
    Card(Rank.JACK, Suit.CLUBS),
    Card(Rank.KING, Suit.SPADES),
)

# (pair, fifteen, five) adjustments for the discarded pair.
OWN_CRIB_BONUS = (4, 4, 2)
OPPONENT_CRIB_PENALTY = (-4, -4, -3)

DEFAULT_JITTER = 0.5


def crib_adjustment(discard: Sequence[Card], own_crib: bool) -> int:
    """Value the discarded pair by what it is likely to give the crib."""
    first, second = discard
    pair_adj, fifteen_adj, five_adj = OWN_CRIB_BONUS if own_crib else OPPONENT_CRIB_PENALTY
    adjustment = 0
    if first.rank is second.rank:
        adjustment += pair_adj
    if first.pip_value() + second.pip_value() == FIFTEEN:
        adjustment += fifteen_adj
    if any(card.rank is Rank.FIVE for card in discard):
        adjustment += five_adj
    return adjustment


def evaluate_discard(
    hand: Sequence[Card],
    indices: Tuple[int, int],
    own_crib: bool,
    starters: Sequence[Card] = DEFAULT_DISCARD_STARTERS,
) -> float:
    """Average hand score of the kept four over the sample, plus the crib adjustment."""
    kept = [card for idx, card in enumerate(hand) if idx not in indices]
    scores = [score_hand(kept, starter).total for starter in starters if starter not in hand]
    expected = sum(scores) / len(scores) if scores else 0.0
    discard = [hand[idx] for idx in indices]
    return expected + crib_adjustment(discard, own_crib)


def choose_discard(
    hand: Sequence[Card],
    own_crib: bool,
    *,
    starters: Sequence[Card] = DEFAULT_DISCARD_STARTERS,
) -> Tuple[int, int]:
    """Return the indices of the two cards to lay away into the crib.

    Every pair of the six-card hand is tried in order; the retained four are
    averaged over the starter sample and adjusted for the crib owner. Ties
    keep the first pair found.
    """
    if len(hand) != 6:
        raise ValueError(f"Discard selection needs a six-card hand, got {len(hand)}.")
    best: Optional[Tuple[int, int]] = None
    best_score = float("-inf")
    for indices in combinations(range(len(hand)), DISCARD_COUNT):
        score = evaluate_discard(hand, indices, own_crib, starters)
        if score > best_score:
            best, best_score = indices, score
    assert best is not None
    logger.debug("Discard choice %s scored %s (own crib: %s)", best, best_score, own_crib)
    return best


def playable_cards(hand: Sequence[Card], count: int) -> List[Card]:
    return [card for card in hand if count + card.pip_value() <= THIRTY_ONE]


def evaluate_peg_card(stack: Sequence[Card], count: int, card: Card) -> int:
    new_count = count + card.pip_value()
    score = score_peg([*stack, card], new_count).total * 10
    if new_count == FIFTEEN:
        score += 5
    if new_count == THIRTY_ONE:
        score += 5
    if new_count < 5:
        score += 1
    # A single ten-card would give the opponent 15 or 31.
    if THIRTY_ONE - new_count in (5, 10, 15):
        score -= 2
    return score


def choose_peg_card(
    hand: Sequence[Card],
    stack: Sequence[Card],
    count: int,
    *,
    rng: Optional[Random] = None,
    jitter: float = DEFAULT_JITTER,
) -> Optional[Card]:
    """Greedy one-ply choice of the next pegging card, or None to say go."""
    candidates = playable_cards(hand, count)
    if not candidates:
        return None
    if rng is None:
        rng = Random()

    best_card = candidates[0]
    best_score = float("-inf")
    for card in candidates:
        score = evaluate_peg_card(stack, count, card)
        if jitter:
            score += rng.random() * jitter
        if score > best_score:
            best_card, best_score = card, score
    return best_card


@dataclass
class Strategist:
    """Bundle of the heuristics with their tuning and random source."""

    starters: Tuple[Card, ...] = DEFAULT_DISCARD_STARTERS
    jitter: float = DEFAULT_JITTER
    rng: Random = field(default_factory=Random)

    def choose_discard(self, hand: Sequence[Card], own_crib: bool) -> Tuple[int, int]:
        return choose_discard(hand, own_crib, starters=self.starters)

    def choose_peg_card(self, hand: Sequence[Card], stack: Sequence[Card], count: int) -> Optional[Card]:
        return choose_peg_card(hand, stack, count, rng=self.rng, jitter=self.jitter)
