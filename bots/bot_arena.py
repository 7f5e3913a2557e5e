"""Simple bot arena for cribbage."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Dict, Iterable, Optional, Sequence

from cribbage.game import GameSession, RoundPhase
from cribbage.logging_utils import setup_logging

from .autoplay import play_bot_turns
from .base import BotStrategy
from .heuristic import HeuristicBot
from .random_bot import RandomBot

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "heuristic": HeuristicBot,
    "random": RandomBot,
}

MAX_ROUNDS = 200


def play_round(session: GameSession, bots: Sequence[BotStrategy]) -> None:
    """Play the current round to completion, or until the match ends."""
    hand = session.current_round
    if hand is None:
        raise RuntimeError("No active round.")
    for player, bot in enumerate(bots):
        bot.on_round_start(hand, player)

    play_bot_turns(session, bots)
    if hand.phase == RoundPhase.CUT:
        hand.cut()
    play_bot_turns(session, bots)
    while hand.phase == RoundPhase.SCORING:
        session.advance_scoring()


def run_match(
    bot_a: BotStrategy,
    bot_b: BotStrategy,
    *,
    seed: Optional[int] = None,
    dealer: Optional[int] = None,
) -> dict:
    session = GameSession(rng=Random(seed))
    session.new_match(dealer=dealer)
    bots = [bot_a, bot_b]
    history = []
    while not session.is_over:
        if session.round_number > MAX_ROUNDS:
            raise RuntimeError("Match did not finish within the round limit.")
        round_number = session.round_number
        play_round(session, bots)
        history.append({"round": round_number, "scores": list(session.scores)})

    result = session.result
    assert result is not None
    return {
        "scores": list(result.scores),
        "winner": result.winner,
        "skunk": result.skunk,
        "rounds": session.round_number,
        "history": history,
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run bot-vs-bot cribbage matches.")
    parser.add_argument("--bot-a", default="heuristic", choices=BOT_REGISTRY.keys())
    parser.add_argument("--bot-b", default="random", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of matches to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    wins = [0, 0]
    skunks = [0, 0]
    rounds = 0
    for index in range(args.n):
        bot_a = BOT_REGISTRY[args.bot_a]()
        bot_b = BOT_REGISTRY[args.bot_b]()
        results = run_match(bot_a, bot_b, seed=args.seed + index)
        wins[results["winner"]] += 1
        skunks[results["winner"]] += int(results["skunk"])
        rounds += results["rounds"]
        logger.info("Match %d: %s", index + 1, results["scores"])

    print(f"{args.bot_a} vs {args.bot_b} over {args.n} matches: wins {wins[0]}-{wins[1]}")
    print(f"Skunks: {skunks[0]}-{skunks[1]}, average rounds {rounds / max(args.n, 1):.1f}")


if __name__ == "__main__":
    main()
