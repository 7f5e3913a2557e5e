from random import Random

import pytest

from cribbage.cards import serialize_card
from cribbage.errors import IllegalPlay, OutOfSequence
from cribbage.game import GameSession, RoundPhase
from cribbage.service import MatchService


def new_service(seed: int = 5) -> MatchService:
    return MatchService(GameSession(rng=Random(seed)))


def test_initial_view_hides_opponent_cards():
    service = new_service()
    view = service.new_match(dealer=1)
    assert view.phase == "discard"
    assert view.round_number == 1
    assert view.dealer == 1
    assert view.round is not None
    assert len(view.round.hand) == 6
    assert view.round.hand == [serialize_card(card) for card in service.session.current_round.hands[0]]
    assert view.round.opponent_card_count == 6
    assert view.round.starter is None
    assert view.round.pegging is None


def test_discard_updates_view():
    service = new_service()
    service.new_match(dealer=1)
    view = service.select_discard(0, [0, 1])
    assert view.round.discarded == [True, False]
    assert len(view.round.hand) == 4
    assert view.round.crib_count == 2

    view = service.select_discard(1, [2, 3])
    assert view.phase == "cut"
    assert view.round.crib_count == 4


def test_pegging_view_lists_legal_moves():
    service = new_service()
    service.new_match(dealer=1)
    service.select_discard(0, [0, 1])
    service.select_discard(1, [0, 1])
    view = service.cut_starter(0)
    assert view.round.starter is not None
    assert view.round.starter_label is not None

    pegging = view.round.pegging
    assert pegging is not None
    assert pegging.current_player == 0
    assert pegging.count == 0
    assert len(pegging.legal_moves) == 4
    assert pegging.must_go is False

    view = service.play_peg_card(0, pegging.legal_moves[0])
    assert view.round.pegging.current_player == 1
    assert len(view.round.pegging.stack) == 1
    assert view.round.pegging.legal_moves == []
    assert len(view.round.peg_hand) == 3


def test_scoring_view_after_round():
    service = new_service(7)
    service.new_match(dealer=0)
    hand = service.session.current_round
    service.select_discard(0, [0, 1])
    service.select_discard(1, [0, 1])
    service.cut_starter()
    while hand.phase == RoundPhase.PEGGING:
        player = hand.current_player
        legal = hand.pegging.legal_cards(player)
        if legal:
            service.play_peg_card(player, serialize_card(legal[0]))
        else:
            service.declare_go(player)

    view = service.advance_scoring(0)
    assert view.phase == "scoring"
    assert view.round.last_scoring.player == 1
    assert view.round.last_scoring.kind == "hand"
    assert view.round.pending_scoring == 2

    service.advance_scoring(0)
    view = service.advance_scoring(0)
    assert view.new_round is True
    assert view.phase == "discard"
    assert view.round_number == 2
    assert view.dealer == 1
    assert view.round.last_scoring.kind == "crib"


def test_actions_need_a_round():
    service = new_service()
    assert not service.has_active_round()
    view = service.get_view(0)
    assert view.phase == "idle"
    assert view.round is None
    with pytest.raises(OutOfSequence):
        service.select_discard(0, [0, 1])


def test_unknown_card_payload_is_an_illegal_play():
    service = new_service()
    service.new_match(dealer=1)
    service.select_discard(0, [0, 1])
    service.select_discard(1, [0, 1])
    service.cut_starter(0)
    with pytest.raises(IllegalPlay):
        service.play_peg_card(0, {"rank": "joker", "suit": "hearts"})
    with pytest.raises(IllegalPlay):
        service.play_peg_card(0, {"suit": "hearts"})
    assert len(service.session.current_round.pegging.hands[0]) == 4
