"""Card-related data structures and helpers for cribbage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping


class Suit(Enum):
    SPADES = "♠"
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.name.lower()


SUIT_ORDER: list[Suit] = [Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS]

# Rank order from lowest to highest, used for runs.
RANK_ORDER: list[Rank] = sorted(Rank, key=lambda rank: rank.value)

RANK_SYMBOLS: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

# Pip values used for fifteens and the running count.
PIP_VALUES: dict[Rank, int] = {rank: min(rank.value, 10) for rank in Rank}

_SYMBOL_TO_RANK: dict[str, Rank] = {symbol: rank for rank, symbol in RANK_SYMBOLS.items()}
_SYMBOL_TO_RANK["T"] = Rank.TEN
_LETTER_TO_SUIT: dict[str, Suit] = {"S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def pip_value(self) -> int:
        return PIP_VALUES[self.rank]

    def rank_order(self) -> int:
        return self.rank.value

    def __str__(self) -> str:
        return card_label(self)


def card_label(card: Card) -> str:
    """Return a compact label such as ``10♦`` or ``J♣``."""
    return f"{RANK_SYMBOLS[card.rank]}{card.suit.value}"


def sort_hand(cards: Iterable[Card]) -> List[Card]:
    """Return cards ordered by rank, then by suit, for display."""
    return sorted(cards, key=lambda c: (c.rank_order(), SUIT_ORDER.index(c.suit)))


def parse_card(text: str) -> Card:
    """Parse ``"10♦"``, ``"TD"`` or ``"10d"`` style labels into a card."""
    label = text.strip()
    if len(label) < 2:
        raise ValueError(f"Unknown card label: {text!r}")
    rank_part, suit_part = label[:-1].upper(), label[-1]
    rank = _SYMBOL_TO_RANK.get(rank_part)
    suit = _LETTER_TO_SUIT.get(suit_part.upper())
    if suit is None:
        suit = next((s for s in Suit if s.value == suit_part), None)
    if rank is None or suit is None:
        raise ValueError(f"Unknown card label: {text!r}")
    return Card(rank, suit)


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": card.rank.name.lower(), "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    rank_name = payload["rank"].upper()
    suit_name = payload["suit"].upper()
    return Card(Rank[rank_name], Suit[suit_name])
