"""Pegging play: alternating cards toward a running count of 31."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence

from .cards import Card, card_label
from .errors import IllegalPlay, OutOfSequence
from .scoring import THIRTY_ONE, ScoreBreakdown, ScoreItem, score_peg

_NO_SCORE = ScoreBreakdown(total=0, items=())


class PegEventKind(Enum):
    PLAY = auto()
    GO = auto()
    GO_POINT = auto()
    LAST_CARD = auto()


@dataclass(frozen=True)
class PegEvent:
    kind: PegEventKind
    player: int
    count: int
    score: ScoreBreakdown = _NO_SCORE
    card: Optional[Card] = None

    def describe(self) -> str:
        if self.kind is PegEventKind.PLAY:
            assert self.card is not None
            text = f"plays {card_label(self.card)} ({self.count})"
        elif self.kind is PegEventKind.GO:
            text = "says go"
        elif self.kind is PegEventKind.GO_POINT:
            text = "pegs 1 for go"
        else:
            text = "pegs 1 for last card"
        if self.score.total and self.kind is PegEventKind.PLAY:
            details = ", ".join(item.description for item in self.score.items)
            text += f" +{self.score.total} ({details})"
        return f"Player {self.player} {text}"


@dataclass
class PeggingState:
    """Turn order, running count and go bookkeeping for one round of pegging.

    Each ``play`` or ``declare_go`` must be followed by ``settle`` once the
    caller has recorded the points of the returned event.
    """

    hands: List[List[Card]]
    leader: int
    current_player: int = field(init=False)
    stack: List[Card] = field(init=False, default_factory=list)
    count: int = field(init=False, default=0)
    last_player: Optional[int] = field(init=False, default=None)
    said_go: List[bool] = field(init=False)
    history: List[PegEvent] = field(init=False, default_factory=list)
    sub_rounds: int = field(init=False, default=1)
    finished: bool = field(init=False, default=False)
    _last_actor: Optional[int] = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        if len(self.hands) != 2:
            raise ValueError("Pegging supports exactly two players.")
        self.hands = [list(hand) for hand in self.hands]
        self.current_player = self.leader
        self.said_go = [False, False]

    def opponent(self, player: int) -> int:
        return 1 - player

    def legal_cards(self, player: int) -> List[Card]:
        return [card for card in self.hands[player] if self.count + card.pip_value() <= THIRTY_ONE]

    def can_play(self, player: int) -> bool:
        return bool(self.legal_cards(player))

    def is_finished(self) -> bool:
        return self.finished

    def play(self, player: int, card: Card) -> PegEvent:
        self._ensure_turn(player)
        if card not in self.hands[player]:
            raise IllegalPlay(f"{card_label(card)} is not in player {player}'s hand.")
        if self.count + card.pip_value() > THIRTY_ONE:
            raise IllegalPlay(f"{card_label(card)} would take the count past {THIRTY_ONE}.")

        self.hands[player].remove(card)
        self.stack.append(card)
        self.count += card.pip_value()
        self.last_player = player
        event = PegEvent(
            kind=PegEventKind.PLAY,
            player=player,
            count=self.count,
            score=score_peg(self.stack, self.count),
            card=card,
        )
        self.history.append(event)
        self._last_actor = player
        return event

    def declare_go(self, player: int) -> PegEvent:
        self._ensure_turn(player)
        if self.can_play(player):
            raise IllegalPlay(f"Player {player} has a legal card and cannot say go.")
        self.said_go[player] = True
        event = PegEvent(kind=PegEventKind.GO, player=player, count=self.count)
        self.history.append(event)
        self._last_actor = player
        return event

    def settle(self) -> Optional[PegEvent]:
        """Resolve the end of a turn and return any go or last-card award."""
        actor = self._last_actor
        if actor is None:
            raise OutOfSequence("Nothing to settle.")
        self._last_actor = None

        if self.count == THIRTY_ONE:
            last = self.last_player
            self._reset_stack()
            self._set_leader(last)
            return None

        if not self.hands[0] and not self.hands[1]:
            award = self._point_event(PegEventKind.LAST_CARD, "Last card")
            self._reset_stack()
            self.finished = True
            return award

        if not self.can_play(0) and not self.can_play(1):
            last = self.last_player
            award = self._point_event(PegEventKind.GO_POINT, "Go")
            self._reset_stack()
            self._set_leader(last)
            return award

        candidate = self.opponent(actor)
        if self.said_go[candidate] or not self.hands[candidate]:
            candidate = actor
        self.current_player = candidate
        return None

    def _point_event(self, kind: PegEventKind, description: str) -> Optional[PegEvent]:
        if self.last_player is None:
            return None
        event = PegEvent(
            kind=kind,
            player=self.last_player,
            count=self.count,
            score=ScoreBreakdown.from_items([ScoreItem(description, 1)]),
        )
        self.history.append(event)
        return event

    def _set_leader(self, last: Optional[int]) -> None:
        if not self.hands[0] and not self.hands[1]:
            self.finished = True
            return
        if last is None:
            last = self.opponent(self.current_player)
        leader = self.opponent(last)
        if not self.hands[leader]:
            leader = last
        self.current_player = leader

    def _reset_stack(self) -> None:
        self.stack = []
        self.count = 0
        self.last_player = None
        self.said_go = [False, False]
        self.sub_rounds += 1

    def _ensure_turn(self, player: int) -> None:
        if self.finished:
            raise OutOfSequence("Pegging is already finished.")
        if self._last_actor is not None:
            raise OutOfSequence("The previous action has not been settled.")
        if player != self.current_player:
            raise OutOfSequence(f"It is player {self.current_player}'s turn to peg.")


def pegging_order(dealer: int) -> Sequence[int]:
    """Players in pegging order for a round; the non-dealer leads."""
    return (1 - dealer, dealer)
