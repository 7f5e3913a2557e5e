"""Convenience service layer for UI and agents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import Card, card_label, deserialize_card, serialize_card, sort_hand
from .errors import IllegalPlay, OutOfSequence
from .game import GameSession, RoundEngine, RoundPhase, ScoringEvent


@dataclass
class ScoringView:
    player: int
    kind: str
    cards: list[dict]
    card_labels: list[str]
    starter: str
    total: int
    items: list[dict]
    nineteen: bool


@dataclass
class PeggingView:
    current_player: int
    count: int
    stack: list[dict]
    stack_labels: list[str]
    legal_moves: list[dict]
    legal_move_labels: list[str]
    must_go: bool
    said_go: list[bool]


@dataclass
class RoundView:
    phase: str
    dealer: int
    hand: list[dict]
    hand_labels: list[str]
    peg_hand: list[dict]
    opponent_card_count: int
    crib_count: int
    starter: Optional[dict]
    starter_label: Optional[str]
    discarded: list[bool]
    pegging: Optional[PeggingView]
    pending_scoring: int
    last_scoring: Optional[ScoringView]
    log: list[str]


@dataclass
class MatchView:
    phase: str
    scores: list[int]
    dealer: int
    round_number: int
    game_over: bool
    winner: Optional[int]
    skunk: bool
    new_round: bool
    round: Optional[RoundView]


def scoring_view(event: ScoringEvent) -> ScoringView:
    cards = sort_hand(event.cards)
    return ScoringView(
        player=event.player,
        kind=event.label,
        cards=[serialize_card(card) for card in cards],
        card_labels=[card_label(card) for card in cards],
        starter=card_label(event.starter),
        total=event.score.total,
        items=[{"description": item.description, "points": item.points} for item in event.score.items],
        nineteen=event.score.is_nineteen,
    )


class MatchService:
    """Facade around GameSession for UI consumers.

    Each view is built from one player's perspective: their own cards are
    listed, the opponent's only counted.
    """

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()
        self.last_scoring: Optional[ScoringEvent] = None

    # Session lifecycle -------------------------------------------------

    def new_match(self, dealer: Optional[int] = None, perspective: int = 0) -> MatchView:
        self.session.new_match(dealer=dealer)
        self.last_scoring = None
        return self.get_view(perspective)

    def has_active_round(self) -> bool:
        return self.session.current_round is not None

    # Actions -----------------------------------------------------------

    def select_discard(self, player: int, indices: Sequence[int]) -> MatchView:
        hand = self._require_round()
        hand.discard(player, indices)
        return self.get_view(player)

    def cut_starter(self, perspective: int = 0) -> MatchView:
        hand = self._require_round()
        hand.cut()
        return self.get_view(perspective)

    def play_peg_card(self, player: int, card_payload: dict) -> MatchView:
        hand = self._require_round()
        try:
            card = deserialize_card(card_payload)
        except (KeyError, AttributeError, TypeError) as exc:
            raise IllegalPlay(f"Unknown card: {card_payload!r}") from exc
        hand.play_card(player, card)
        return self.get_view(player)

    def declare_go(self, player: int) -> MatchView:
        hand = self._require_round()
        hand.declare_go(player)
        return self.get_view(player)

    def advance_scoring(self, perspective: int = 0) -> MatchView:
        before = self.session.round_number
        self.last_scoring = self.session.advance_scoring()
        return self.get_view(perspective, new_round=self.session.round_number != before)

    # Views -------------------------------------------------------------

    def get_view(
        self,
        perspective: int = 0,
        *,
        new_round: bool = False,
    ) -> MatchView:
        session = self.session
        result = session.result
        hand = session.current_round
        round_view = self._round_view(hand, perspective) if hand is not None else None
        if result is not None:
            phase = "gameover"
        elif hand is not None:
            phase = hand.phase.name.lower()
        else:
            phase = "idle"
        return MatchView(
            phase=phase,
            scores=list(session.scores),
            dealer=session.dealer,
            round_number=session.round_number,
            game_over=result is not None,
            winner=result.winner if result else None,
            skunk=result.skunk if result else False,
            new_round=new_round,
            round=round_view,
        )

    def _round_view(
        self,
        hand: RoundEngine,
        perspective: int,
    ) -> RoundView:
        opponent = 1 - perspective
        # Keep deal order so discard indices line up with the listed cards.
        own_cards = list(hand.hands[perspective])
        peg_cards: list[Card] = list(own_cards)
        opponent_count = len(hand.hands[opponent])
        pegging_view: Optional[PeggingView] = None

        if hand.pegging is not None:
            pegging = hand.pegging
            peg_cards = sort_hand(pegging.hands[perspective])
            if hand.phase == RoundPhase.PEGGING:
                opponent_count = len(pegging.hands[opponent])
                legal = pegging.legal_cards(perspective) if pegging.current_player == perspective else []
                pegging_view = PeggingView(
                    current_player=pegging.current_player,
                    count=pegging.count,
                    stack=[serialize_card(card) for card in pegging.stack],
                    stack_labels=[card_label(card) for card in pegging.stack],
                    legal_moves=[serialize_card(card) for card in sort_hand(legal)],
                    legal_move_labels=[card_label(card) for card in sort_hand(legal)],
                    must_go=pegging.current_player == perspective and not legal,
                    said_go=list(pegging.said_go),
                )

        return RoundView(
            phase=hand.phase.name.lower(),
            dealer=hand.dealer,
            hand=[serialize_card(card) for card in own_cards],
            hand_labels=[card_label(card) for card in own_cards],
            peg_hand=[serialize_card(card) for card in peg_cards],
            opponent_card_count=opponent_count,
            crib_count=len(hand.crib),
            starter=serialize_card(hand.starter) if hand.starter else None,
            starter_label=card_label(hand.starter) if hand.starter else None,
            discarded=list(hand.discarded),
            pegging=pegging_view,
            pending_scoring=len(hand.scoring_queue),
            last_scoring=scoring_view(self.last_scoring) if self.last_scoring else None,
            log=list(hand.log),
        )

    # Helpers -----------------------------------------------------------

    def _require_round(self) -> RoundEngine:
        if self.session.current_round is None:
            raise OutOfSequence("No active round.")
        return self.session.current_round

