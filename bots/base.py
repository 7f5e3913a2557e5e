"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import Optional, Tuple

from cribbage.cards import Card
from cribbage.game import RoundEngine


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def on_round_start(self, hand: RoundEngine, player: int) -> None:
        """Optional hook invoked at the start of each round."""
        return None

    def choose_discard(self, hand: RoundEngine, player: int) -> Tuple[int, int]:
        """Return indices of the two cards to lay away into the crib."""
        return 0, 1

    def choose_peg_card(self, hand: RoundEngine, player: int) -> Optional[Card]:
        """Return the card to peg, or None to say go."""
        assert hand.pegging is not None
        legal = hand.pegging.legal_cards(player)
        return legal[0] if legal else None
