"""Round and match orchestration for cribbage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, Rank, card_label
from .config import CribbageConfig
from .deck import Deck
from .errors import InvalidSelection, OutOfSequence
from .match import MatchResult, Scoreboard
from .pegging import PegEvent, PeggingState, pegging_order
from .scoring import ScoreBreakdown, score_hand

logger = logging.getLogger(__name__)

DEAL_SIZE = 6
DISCARD_SIZE = 2
HIS_HEELS_POINTS = 2


class RoundPhase(Enum):
    DISCARD = auto()
    CUT = auto()
    PEGGING = auto()
    SCORING = auto()
    COMPLETE = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class ScoringEvent:
    player: int
    is_crib: bool
    cards: Tuple[Card, ...]
    starter: Card
    score: ScoreBreakdown

    @property
    def label(self) -> str:
        return "crib" if self.is_crib else "hand"


@dataclass
class RoundEngine:
    """Manage a single round: discard, cut, pegging, then the show."""

    dealer: int
    scoreboard: Scoreboard
    rng: Optional[Random] = None
    cards: Optional[Sequence[Card]] = None

    phase: RoundPhase = field(init=False, default=RoundPhase.DISCARD)
    deck: Deck = field(init=False)
    hands: List[List[Card]] = field(init=False)
    crib: List[Card] = field(init=False, default_factory=list)
    discarded: List[bool] = field(init=False)
    starter: Optional[Card] = field(init=False, default=None)
    pegging: Optional[PeggingState] = field(init=False, default=None)
    scoring_queue: List[Tuple[int, bool]] = field(init=False, default_factory=list)
    scoring_history: List[ScoringEvent] = field(init=False, default_factory=list)
    log: List[str] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        if self.dealer not in (0, 1):
            raise ValueError("Dealer must be player 0 or 1.")
        if self.rng is None:
            self.rng = Random()
        self.deck = Deck(self.cards, rng=self.rng)
        self.hands = [self.deck.deal(DEAL_SIZE), self.deck.deal(DEAL_SIZE)]
        self.discarded = [False, False]
        logger.debug("Dealt round with dealer %d, %d cards left", self.dealer, len(self.deck))

    @property
    def non_dealer(self) -> int:
        return 1 - self.dealer

    def unheld_count(self) -> int:
        """Cards in neither player's hand: the deck remainder plus the crib."""
        return len(self.deck) + len(self.crib)

    # Discard -----------------------------------------------------------

    def discard(self, player: int, indices: Sequence[int]) -> List[Card]:
        if self.phase != RoundPhase.DISCARD:
            raise InvalidSelection(f"Discards are closed in phase {self.phase.name.lower()}.")
        if player not in (0, 1):
            raise InvalidSelection(f"Unknown player {player}.")
        if self.discarded[player]:
            raise InvalidSelection(f"Player {player} has already discarded.")
        chosen = list(indices)
        if len(chosen) != DISCARD_SIZE or len(set(chosen)) != DISCARD_SIZE:
            raise InvalidSelection(f"Select exactly {DISCARD_SIZE} different cards for the crib.")
        hand = self.hands[player]
        if any(isinstance(idx, bool) or not isinstance(idx, int) or idx < 0 or idx >= len(hand) for idx in chosen):
            raise InvalidSelection("Discard index out of range.")

        laid_away = [hand[idx] for idx in sorted(chosen)]
        self.hands[player] = [card for idx, card in enumerate(hand) if idx not in chosen]
        self.crib.extend(laid_away)
        self.discarded[player] = True
        self.log.append(f"Player {player} lays away two cards")

        if all(self.discarded):
            self.phase = RoundPhase.CUT
        return laid_away

    # Cut ---------------------------------------------------------------

    def cut(self) -> Card:
        self._ensure_phase(RoundPhase.CUT)
        self.starter = self.deck.draw_random(self.rng)
        self.log.append(f"Starter is {card_label(self.starter)}")
        logger.debug("Starter cut: %s", card_label(self.starter))

        if self.starter.rank is Rank.JACK:
            if self._award(self.dealer, HIS_HEELS_POINTS, "His heels"):
                return self.starter

        leader = pegging_order(self.dealer)[0]
        self.pegging = PeggingState(hands=[list(hand) for hand in self.hands], leader=leader)
        self.phase = RoundPhase.PEGGING
        return self.starter

    # Pegging -----------------------------------------------------------

    @property
    def current_player(self) -> Optional[int]:
        if self.phase != RoundPhase.PEGGING or self.pegging is None:
            return None
        return self.pegging.current_player

    def play_card(self, player: int, card: Card) -> PegEvent:
        pegging = self._require_pegging()
        event = pegging.play(player, card)
        self.log.append(event.describe())
        reasons = ", ".join(item.description for item in event.score.items)
        if self._award(player, event.score.total, reasons):
            return event
        self._settle()
        return event

    def declare_go(self, player: int) -> PegEvent:
        pegging = self._require_pegging()
        event = pegging.declare_go(player)
        self.log.append(event.describe())
        self._settle()
        return event

    def _settle(self) -> None:
        assert self.pegging is not None
        follow_up = self.pegging.settle()
        if follow_up is not None:
            self.log.append(follow_up.describe())
            if self._award(follow_up.player, follow_up.score.total, follow_up.score.items[0].description):
                return
        if self.pegging.is_finished():
            self._start_scoring()

    def _require_pegging(self) -> PeggingState:
        self._ensure_phase(RoundPhase.PEGGING)
        assert self.pegging is not None
        return self.pegging

    # Scoring -----------------------------------------------------------

    def _start_scoring(self) -> None:
        self.scoring_queue = [
            (self.non_dealer, False),
            (self.dealer, False),
            (self.dealer, True),
        ]
        self.phase = RoundPhase.SCORING

    def advance_scoring(self) -> ScoringEvent:
        """Count the next of non-dealer hand, dealer hand and crib."""
        self._ensure_phase(RoundPhase.SCORING)
        assert self.starter is not None
        player, is_crib = self.scoring_queue.pop(0)
        cards = self.crib if is_crib else self.hands[player]
        score = score_hand(cards, self.starter, is_crib=is_crib)
        event = ScoringEvent(
            player=player,
            is_crib=is_crib,
            cards=tuple(cards),
            starter=self.starter,
            score=score,
        )
        self.scoring_history.append(event)
        self.log.append(f"Player {player} counts {event.label} for {score.total}")
        if self._award(player, score.total, f"{event.label} count"):
            return event
        if not self.scoring_queue:
            self.phase = RoundPhase.COMPLETE
        return event

    # Helpers -----------------------------------------------------------

    def _award(self, player: int, points: int, reason: str) -> bool:
        if points <= 0:
            return False
        if reason:
            self.log.append(f"Player {player} scores {points} for {reason}")
        if self.scoreboard.award(player, points, reason):
            self.phase = RoundPhase.GAME_OVER
            return True
        return False

    def _ensure_phase(self, expected: RoundPhase) -> None:
        if self.phase != expected:
            raise OutOfSequence(
                f"Action not allowed in phase {self.phase.name.lower()}. Expected {expected.name.lower()}."
            )


@dataclass
class GameSession:
    """Drive rounds until one player reaches the winning score."""

    config: CribbageConfig = field(default_factory=CribbageConfig)
    rng: Optional[Random] = None
    scoreboard: Scoreboard = field(init=False, default_factory=Scoreboard)
    dealer: int = field(init=False, default=0)
    round_number: int = field(init=False, default=0)
    current_round: Optional[RoundEngine] = field(init=False, default=None)
    # Every round dealt this match, including the one in play.
    round_history: List[RoundEngine] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = Random(self.config.seed)

    @property
    def scores(self) -> List[int]:
        return self.scoreboard.scores

    @property
    def is_over(self) -> bool:
        return self.scoreboard.is_over

    @property
    def result(self) -> Optional[MatchResult]:
        return self.scoreboard.result

    def new_match(self, dealer: Optional[int] = None) -> RoundEngine:
        assert self.rng is not None
        self.scoreboard.reset()
        self.round_number = 0
        self.round_history = []
        self.current_round = None
        self.dealer = self.rng.randrange(2) if dealer is None else dealer
        logger.info("New match, player %d deals first", self.dealer)
        return self._start_round()

    def next_round(self) -> RoundEngine:
        hand = self._require_round()
        if hand.phase != RoundPhase.COMPLETE:
            raise OutOfSequence("The current round has not finished counting.")
        self.dealer = 1 - self.dealer
        return self._start_round()

    def advance_scoring(self) -> ScoringEvent:
        """Count the next hand and deal the next round once all three are in."""
        hand = self._require_round()
        event = hand.advance_scoring()
        if hand.phase == RoundPhase.COMPLETE:
            self.next_round()
        return event

    def _start_round(self) -> RoundEngine:
        if self.is_over:
            raise OutOfSequence("The match is already over.")
        self.round_number += 1
        self.current_round = RoundEngine(dealer=self.dealer, scoreboard=self.scoreboard, rng=self.rng)
        self.round_history.append(self.current_round)
        return self.current_round

    def _require_round(self) -> RoundEngine:
        if self.current_round is None:
            raise OutOfSequence("No active round. Start a new match first.")
        return self.current_round
