"""Match scoreboard: the only place where player scores change."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import OutOfSequence

logger = logging.getLogger(__name__)

WIN_SCORE = 121
SKUNK_LINE = 91


@dataclass(frozen=True)
class MatchResult:
    winner: int
    scores: Tuple[int, int]
    skunk: bool

    @property
    def loser(self) -> int:
        return 1 - self.winner


@dataclass(frozen=True)
class Award:
    player: int
    points: int
    reason: str
    score_after: int


@dataclass
class Scoreboard:
    """Track both scores and decide when the match is over."""

    scores: List[int] = field(default_factory=lambda: [0, 0])
    history: List[Award] = field(default_factory=list)
    result: Optional[MatchResult] = None

    @property
    def is_over(self) -> bool:
        return self.result is not None

    def reset(self) -> None:
        self.scores = [0, 0]
        self.history = []
        self.result = None

    def award(self, player: int, points: int, reason: str = "") -> bool:
        """Add points to a player, capped at the winning score.

        Returns True when this award ends the match.
        """
        if player not in (0, 1):
            raise ValueError(f"Unknown player {player}.")
        if points < 0:
            raise ValueError("Scores never go down.")
        if self.is_over:
            raise OutOfSequence("The match is already over.")
        if points == 0:
            return False

        self.scores[player] = min(self.scores[player] + points, WIN_SCORE)
        self.history.append(Award(player, points, reason, self.scores[player]))
        logger.info("Player %d pegs %d (%s) -> %d", player, points, reason or "unspecified", self.scores[player])

        if self.scores[player] >= WIN_SCORE:
            loser_score = self.scores[1 - player]
            self.result = MatchResult(
                winner=player,
                scores=(self.scores[0], self.scores[1]),
                skunk=loser_score < SKUNK_LINE,
            )
            logger.info(
                "Player %d wins %d-%d%s",
                player,
                self.scores[player],
                loser_score,
                " (skunk)" if self.result.skunk else "",
            )
            return True
        return False
