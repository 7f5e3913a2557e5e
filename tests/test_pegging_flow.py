import pytest

from cribbage.cards import parse_card
from cribbage.errors import IllegalPlay, OutOfSequence
from cribbage.pegging import PegEventKind, PeggingState, pegging_order


def cards(text: str):
    return [parse_card(label) for label in text.split()]


def play(state: PeggingState, player: int, label: str):
    event = state.play(player, parse_card(label))
    follow_up = state.settle()
    return event, follow_up


def test_non_dealer_leads():
    assert pegging_order(0) == (1, 0)
    assert pegging_order(1) == (0, 1)


def test_thirty_one_resets_and_passes_the_lead():
    state = PeggingState(hands=[cards("K♠ 6♥ 2♣ 3♣"), cards("Q♦ 5♦ 4♠ 9♥")], leader=0)
    play(state, 0, "K♠")
    play(state, 1, "Q♦")
    play(state, 0, "6♥")
    event, follow_up = play(state, 1, "5♦")

    assert event.count == 31
    assert [item.description for item in event.score.items] == ["Thirty-one"]
    assert follow_up is None
    assert state.count == 0
    assert state.stack == []
    assert state.sub_rounds == 2
    assert state.current_player == 0


def test_go_point_then_last_card():
    state = PeggingState(hands=[cards("K♠ Q♠ 2♣ 3♣"), cards("J♦ 9♥ 8♦ 4♠")], leader=0)
    play(state, 0, "K♠")
    play(state, 1, "J♦")
    event, follow_up = play(state, 0, "Q♠")

    assert event.count == 30
    assert event.score.total == 3
    assert follow_up is not None
    assert follow_up.kind is PegEventKind.GO_POINT
    assert follow_up.player == 0
    assert follow_up.score.total == 1
    assert state.count == 0
    assert state.current_player == 1

    play(state, 1, "9♥")
    play(state, 0, "2♣")
    play(state, 1, "8♦")
    play(state, 0, "3♣")
    assert state.current_player == 1
    event, follow_up = play(state, 1, "4♠")

    assert event.count == 26
    assert follow_up is not None
    assert follow_up.kind is PegEventKind.LAST_CARD
    assert follow_up.player == 1
    assert state.is_finished()


def test_explicit_go_then_thirty_one():
    state = PeggingState(hands=[cards("K♠ 9♣ 2♥ A♦"), cards("Q♦ J♥ 10♣ 8♠")], leader=0)
    play(state, 0, "K♠")
    play(state, 1, "Q♦")
    play(state, 0, "9♣")

    assert state.current_player == 1
    assert state.legal_cards(1) == []
    with pytest.raises(OutOfSequence):
        state.declare_go(0)
    with pytest.raises(IllegalPlay):
        state.play(1, parse_card("J♥"))

    go = state.declare_go(1)
    assert go.kind is PegEventKind.GO
    assert state.settle() is None
    assert state.current_player == 0
    assert state.said_go == [False, True]

    event, follow_up = play(state, 0, "2♥")
    assert event.score.total == 2
    assert follow_up is None
    assert state.count == 0
    assert state.said_go == [False, False]
    assert state.current_player == 1


def test_explicit_go_then_go_point():
    state = PeggingState(hands=[cards("K♠ 9♣ 2♥ A♦"), cards("Q♦ J♥ 10♣ 8♠")], leader=0)
    play(state, 0, "K♠")
    play(state, 1, "Q♦")
    play(state, 0, "9♣")
    state.declare_go(1)
    state.settle()

    event, follow_up = play(state, 0, "A♦")
    assert event.count == 30
    assert follow_up is not None
    assert follow_up.kind is PegEventKind.GO_POINT
    assert follow_up.player == 0
    assert state.current_player == 1


def test_go_is_refused_while_a_card_is_playable():
    state = PeggingState(hands=[cards("K♠ 9♣ 2♥ A♦"), cards("Q♦ J♥ 10♣ 8♠")], leader=0)
    with pytest.raises(IllegalPlay):
        state.declare_go(0)


def test_actions_must_be_settled_and_in_turn():
    state = PeggingState(hands=[cards("K♠ 9♣ 2♥ A♦"), cards("Q♦ J♥ 10♣ 8♠")], leader=0)
    with pytest.raises(OutOfSequence):
        state.play(1, parse_card("Q♦"))
    with pytest.raises(IllegalPlay):
        state.play(0, parse_card("Q♦"))

    state.play(0, parse_card("K♠"))
    with pytest.raises(OutOfSequence):
        state.play(1, parse_card("Q♦"))
    state.settle()
    with pytest.raises(OutOfSequence):
        state.settle()


def test_player_without_cards_is_skipped():
    state = PeggingState(hands=[[], cards("K♠ Q♥ J♦ 9♣")], leader=1)
    play(state, 1, "K♠")
    assert state.current_player == 1
    play(state, 1, "Q♥")
    event, follow_up = play(state, 1, "J♦")

    assert [item.description for item in event.score.items] == ["Run of 3"]
    assert follow_up is not None
    assert follow_up.kind is PegEventKind.GO_POINT
    assert follow_up.player == 1
    assert state.current_player == 1

    _, follow_up = play(state, 1, "9♣")
    assert follow_up is not None
    assert follow_up.kind is PegEventKind.LAST_CARD
    assert state.is_finished()
    with pytest.raises(OutOfSequence):
        state.play(1, parse_card("9♣"))


def test_thirty_one_on_the_final_card_ends_pegging():
    state = PeggingState(hands=[cards("K♠ 6♥"), cards("Q♦ 5♦")], leader=0)
    play(state, 0, "K♠")
    play(state, 1, "Q♦")
    play(state, 0, "6♥")
    event, follow_up = play(state, 1, "5♦")

    assert [item.description for item in event.score.items] == ["Thirty-one"]
    assert follow_up is None
    assert state.is_finished()
    assert all(record.kind is not PegEventKind.LAST_CARD for record in state.history)


def test_last_player_leads_after_thirty_one_when_opponent_is_out():
    state = PeggingState(hands=[cards("K♠ 6♥"), cards("Q♦ 5♦ 3♣")], leader=0)
    play(state, 0, "K♠")
    play(state, 1, "Q♦")
    play(state, 0, "6♥")
    _, follow_up = play(state, 1, "5♦")

    assert follow_up is None
    assert state.count == 0
    assert not state.is_finished()
    assert state.current_player == 1

    _, follow_up = play(state, 1, "3♣")
    assert follow_up is not None
    assert follow_up.kind is PegEventKind.LAST_CARD
    assert follow_up.player == 1
    assert state.is_finished()
