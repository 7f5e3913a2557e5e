"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional, Tuple

from cribbage.cards import Card
from cribbage.game import RoundEngine

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_discard(self, hand: RoundEngine, player: int) -> Tuple[int, int]:
        first, second = self._rng.sample(range(len(hand.hands[player])), 2)
        return first, second

    def choose_peg_card(self, hand: RoundEngine, player: int) -> Optional[Card]:
        assert hand.pegging is not None
        legal = hand.pegging.legal_cards(player)
        if not legal:
            return None
        return self._rng.choice(legal)
