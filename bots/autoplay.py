"""Apply bot decisions to a running session."""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from cribbage.cards import card_label
from cribbage.config import PacingConfig
from cribbage.game import GameSession, RoundPhase

from .base import BotStrategy

logger = logging.getLogger(__name__)


def _pause(pacing: Optional[PacingConfig]) -> None:
    if pacing is not None and pacing.enable_thinking_delay and pacing.thinking_delay_seconds > 0:
        time.sleep(pacing.thinking_delay_seconds)


def step_bot(
    session: GameSession,
    bots: Sequence[Optional[BotStrategy]],
    *,
    pacing: Optional[PacingConfig] = None,
) -> bool:
    """Make one bot decision if a bot is due to act. Returns True if it did."""
    if session.is_over or session.current_round is None:
        return False
    hand = session.current_round

    if hand.phase == RoundPhase.DISCARD:
        for player, bot in enumerate(bots):
            if bot is not None and not hand.discarded[player]:
                indices = bot.choose_discard(hand, player)
                logger.debug("%s (player %d) discards %s", bot.name, player, indices)
                hand.discard(player, indices)
                return True
        return False

    if hand.phase == RoundPhase.PEGGING:
        player = hand.current_player
        assert player is not None
        bot = bots[player]
        if bot is None:
            return False
        _pause(pacing)
        card = bot.choose_peg_card(hand, player)
        if card is None:
            logger.debug("%s (player %d) says go", bot.name, player)
            hand.declare_go(player)
        else:
            logger.debug("%s (player %d) plays %s", bot.name, player, card_label(card))
            hand.play_card(player, card)
        return True

    return False


def play_bot_turns(
    session: GameSession,
    bots: Sequence[Optional[BotStrategy]],
    *,
    pacing: Optional[PacingConfig] = None,
) -> int:
    """Let bots act until a human decision is needed; return the number of moves."""
    if len(bots) != 2:
        raise ValueError("Exactly two seats are required.")
    moves = 0
    while step_bot(session, bots, pacing=pacing):
        moves += 1
    return moves
