import pytest

from dalmuti_engine.errors import InvariantViolation
from dalmuti_engine.models import GameState, Player
from dalmuti_engine.ranking import assign_social_ranks, next_turn, turn_order


def make_state():
    state = GameState()
    for player_id, name in [("p1", "Alice"), ("p2", "Bob"), ("p3", "Charlie"), ("p4", "Dana")]:
        state.players[player_id] = Player(id=player_id, name=name)
    return state


def test_assign_social_ranks_for_4_players():
    state = make_state()
    state.finish_order = ["p3", "p1", "p4", "p2"]

    assign_social_ranks(state)

    assert state.players["p3"].social_rank == 1
    assert state.players["p1"].social_rank == 2
    assert state.players["p4"].social_rank == 3
    assert state.players["p2"].social_rank == 4
    assert turn_order(state) == ["p3", "p1", "p4", "p2"]


def test_assign_social_ranks_unknown_player():
    state = make_state()
    state.finish_order = ["p1", "ghost"]

    with pytest.raises(InvariantViolation):
        assign_social_ranks(state)


def test_next_turn_wraps_and_skips():
    state = make_state()
    state.finish_order = ["p1", "p2", "p3", "p4"]
    assign_social_ranks(state)
    state.players["p1"].finished = True

    assert next_turn(state, "p2") == "p3"
    assert next_turn(state, "p4") == "p2"


def test_next_turn_with_everyone_finished_stays_put():
    state = make_state()
    state.finish_order = ["p1", "p2", "p3", "p4"]
    assign_social_ranks(state)
    for player in state.players.values():
        player.finished = True

    assert next_turn(state, "p2") == "p2"
