"""Deck creation utilities for cribbage."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence

from .cards import Card, RANK_ORDER, SUIT_ORDER
from .errors import EmptyDeckViolation

DECK_SIZE = 52


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank, suit) for suit in SUIT_ORDER for rank in RANK_ORDER]


def shuffled_deck(rng: Optional[Random] = None) -> List[Card]:
    cards = build_deck()
    if rng is None:
        rng = Random()
    rng.shuffle(cards)
    return cards


class Deck:
    """The cards left to deal or cut from during a round."""

    def __init__(self, cards: Optional[Sequence[Card]] = None, *, rng: Optional[Random] = None) -> None:
        if cards is None:
            self._cards = shuffled_deck(rng)
        else:
            self._cards = list(cards)
            if len(set(self._cards)) != len(self._cards):
                raise ValueError("Deck must not contain duplicate cards.")

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def deal(self, count: int) -> List[Card]:
        """Remove and return ``count`` cards from the front of the deck."""
        if count < 0:
            raise ValueError("Cannot deal a negative number of cards.")
        if count > len(self._cards):
            raise EmptyDeckViolation(f"Cannot deal {count} cards from a deck of {len(self._cards)}.")
        dealt = self._cards[:count]
        del self._cards[:count]
        return dealt

    def draw_random(self, rng: Optional[Random] = None) -> Card:
        """Remove and return one card chosen uniformly from the remainder."""
        if not self._cards:
            raise EmptyDeckViolation("Cannot draw from an empty deck.")
        if rng is None:
            rng = Random()
        return self._cards.pop(rng.randrange(len(self._cards)))
