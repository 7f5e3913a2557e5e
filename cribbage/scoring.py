"""Hand and pegging scoring for cribbage."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import List, Sequence, Tuple

from .cards import Card, Rank, card_label, sort_hand

HAND_SIZE = 4
FIFTEEN = 15
THIRTY_ONE = 31

# Points for the trailing same-rank run while pegging.
PEG_SET_POINTS: dict[int, Tuple[str, int]] = {
    2: ("Pair", 2),
    3: ("Three of a kind", 6),
    4: ("Four of a kind", 12),
}


class ScoringError(ValueError):
    """Raised when cards handed to the scorer cannot form a legal hand."""


@dataclass(frozen=True)
class ScoreItem:
    description: str
    points: int


@dataclass(frozen=True)
class ScoreBreakdown:
    total: int
    items: Tuple[ScoreItem, ...]

    @property
    def is_nineteen(self) -> bool:
        """A hand with nothing to count, traditionally called a nineteen."""
        return not self.items

    @classmethod
    def from_items(cls, items: Sequence[ScoreItem]) -> "ScoreBreakdown":
        return cls(total=sum(item.points for item in items), items=tuple(items))


def _is_contiguous(orders: Sequence[int]) -> bool:
    ranked = sorted(orders)
    return all(b == a + 1 for a, b in zip(ranked, ranked[1:]))


def _labels(cards: Sequence[Card], sep: str) -> str:
    return sep.join(card_label(card) for card in cards)


def _fifteens(cards: Sequence[Card]) -> List[ScoreItem]:
    items: List[ScoreItem] = []
    for size in range(2, len(cards) + 1):
        for combo in combinations(cards, size):
            if sum(card.pip_value() for card in combo) == FIFTEEN:
                items.append(ScoreItem(f"15: {_labels(combo, ' + ')}", 2))
    return items


def _pairs(cards: Sequence[Card]) -> List[ScoreItem]:
    return [
        ScoreItem(f"Pair: {card_label(a)}, {card_label(b)}", 2)
        for a, b in combinations(cards, 2)
        if a.rank is b.rank
    ]


def _runs(cards: Sequence[Card]) -> List[ScoreItem]:
    # Only the longest run length counts; every combination of it scores.
    for length in range(len(cards), 2, -1):
        found = [
            combo
            for combo in combinations(cards, length)
            if _is_contiguous([card.rank_order() for card in combo])
        ]
        if found:
            return [
                ScoreItem(f"Run of {length}: {_labels(sort_hand(combo), ' ')}", length)
                for combo in found
            ]
    return []


def _flush(hand: Sequence[Card], starter: Card, is_crib: bool) -> List[ScoreItem]:
    suit = hand[0].suit
    if any(card.suit is not suit for card in hand):
        return []
    if starter.suit is suit:
        return [ScoreItem(f"Flush: 5 cards ({suit.value})", 5)]
    if is_crib:
        return []
    return [ScoreItem(f"Flush: 4 cards ({suit.value})", 4)]


def _nobs(hand: Sequence[Card], starter: Card) -> List[ScoreItem]:
    return [
        ScoreItem(f"Nobs: {card_label(card)}", 1)
        for card in hand
        if card.rank is Rank.JACK and card.suit is starter.suit
    ]


def score_hand(hand: Sequence[Card], starter: Card, *, is_crib: bool = False) -> ScoreBreakdown:
    """Score a four-card hand (or crib) together with the starter.

    Items are listed as fifteens, pairs, runs, flush, then nobs.

    Raises:
        ScoringError: the hand does not hold four distinct cards or the
            starter duplicates one of them.
    """
    if len(hand) != HAND_SIZE:
        raise ScoringError(f"A scoring hand holds exactly {HAND_SIZE} cards, got {len(hand)}.")
    all_cards = [*hand, starter]
    if len(set(all_cards)) != len(all_cards):
        raise ScoringError("Hand and starter must be distinct cards.")

    items: List[ScoreItem] = []
    items.extend(_fifteens(all_cards))
    items.extend(_pairs(all_cards))
    items.extend(_runs(all_cards))
    items.extend(_flush(hand, starter, is_crib))
    items.extend(_nobs(hand, starter))
    return ScoreBreakdown.from_items(items)


def score_peg(stack: Sequence[Card], count: int) -> ScoreBreakdown:
    """Score the card just appended to the pegging stack.

    Go and last-card points depend on what the players can still do, so they
    are left to the pegging state machine.
    """
    if not stack:
        return ScoreBreakdown(total=0, items=())

    items: List[ScoreItem] = []
    if count == FIFTEEN:
        items.append(ScoreItem("Fifteen", 2))
    if count == THIRTY_ONE:
        items.append(ScoreItem("Thirty-one", 2))

    last_rank = stack[-1].rank
    same_rank = 0
    for card in reversed(stack):
        if card.rank is not last_rank:
            break
        same_rank += 1
    if same_rank in PEG_SET_POINTS:
        description, points = PEG_SET_POINTS[same_rank]
        items.append(ScoreItem(description, points))

    # A pair at the tail breaks any run.
    if same_rank < 2:
        for length in range(len(stack), 2, -1):
            tail = stack[-length:]
            if _is_contiguous([card.rank_order() for card in tail]):
                items.append(ScoreItem(f"Run of {length}", length))
                break

    return ScoreBreakdown.from_items(items)
