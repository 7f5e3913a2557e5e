"""Heuristic bot built on the engine's strategist."""

from __future__ import annotations

from random import Random
from typing import Optional, Tuple

from cribbage.cards import Card
from cribbage.config import CribbageConfig
from cribbage.game import RoundEngine
from cribbage.strategy import Strategist

from .base import BotStrategy


class HeuristicBot(BotStrategy):
    name = "Heuristic"

    def __init__(self, strategist: Optional[Strategist] = None, seed: Optional[int] = None) -> None:
        self.strategist = strategist or Strategist(rng=Random(seed))

    @classmethod
    def from_config(cls, config: CribbageConfig, rng: Optional[Random] = None) -> "HeuristicBot":
        strategist = Strategist(
            starters=config.ai.starter_cards(),
            jitter=config.ai.tie_break_jitter,
            rng=rng or Random(config.seed),
        )
        return cls(strategist=strategist)

    def choose_discard(self, hand: RoundEngine, player: int) -> Tuple[int, int]:
        return self.strategist.choose_discard(hand.hands[player], own_crib=hand.dealer == player)

    def choose_peg_card(self, hand: RoundEngine, player: int) -> Optional[Card]:
        pegging = hand.pegging
        assert pegging is not None
        return self.strategist.choose_peg_card(pegging.hands[player], pegging.stack, pegging.count)
