"""
Tests for revolution declarations.
"""

import pytest

from dalmuti_engine.constants import (
    ERROR_INSUFFICIENT_WILDS, ERROR_REVOLUTION_ALREADY_DECLARED, ERROR_WRONG_PHASE, PHASE_PLAY,
)
from dalmuti_engine.engine import declare_revolution, give_back_cards, mark_ready
from dalmuti_engine.revolution import count_held_wilds

FINISH_ORDER = ["0", "1", "2", "3"]


@pytest.fixture
def regular_state(make_tax_state):
    # Player 1 (rank 2) holds both wild cards
    return make_tax_state({
        "0": [12, 11, 10],
        "1": [0, 0, 9],
        "2": [6, 4, 9],
        "3": [5, 3, 12],
    }, finish_order=FINISH_ORDER)


@pytest.fixture
def greater_state(make_tax_state):
    # Player 3 (worst rank) pays tax with nothing but wild cards and a 12,
    # so one wild ends up staged on the debt
    return make_tax_state({
        "0": [12, 11, 10],
        "1": [8, 9, 9],
        "2": [6, 4, 9],
        "3": [0, 0, 12],
    }, finish_order=FINISH_ORDER)


def test_regular_revolution_cancels_taxes(regular_state):
    result = declare_revolution(regular_state, "1")
    state = result.state

    assert result.success
    assert state.tax_debts == []
    assert state.revolution_declared_by == "1"
    assert not state.is_greater_revolution
    assert sorted(c.rank for c in state.players["3"].hand) == [3, 5, 12]
    assert sorted(c.rank for c in state.players["2"].hand) == [4, 6, 9]
    assert [state.players[pid].social_rank for pid in FINISH_ORDER] == [1, 2, 3, 4]
    assert state.finish_order == FINISH_ORDER


def test_staged_wild_counts_toward_revolution(greater_state):
    assert len(greater_state.players["3"].hand) == 1
    assert count_held_wilds(greater_state, "3") == 2


def test_greater_revolution_inverts_ranks(greater_state):
    result = declare_revolution(greater_state, "3")
    state = result.state

    assert result.success
    assert state.is_greater_revolution
    assert state.finish_order == ["3", "2", "1", "0"]
    assert [state.players[pid].social_rank for pid in FINISH_ORDER] == [4, 3, 2, 1]
    assert sorted(c.rank for c in state.players["3"].hand) == [0, 0, 12]
    assert state.tax_debts == []


def test_greater_revolution_changes_who_leads(greater_state):
    state = declare_revolution(greater_state, "3").state
    for player_id in FINISH_ORDER:
        state = mark_ready(state, player_id).state

    assert state.phase == PHASE_PLAY
    assert state.turn == "3"


def test_revolution_needs_both_wilds(regular_state):
    result = declare_revolution(regular_state, "2")

    assert result.error_code == ERROR_INSUFFICIENT_WILDS
    assert result.state is regular_state


def test_only_one_revolution_per_round(regular_state):
    state = declare_revolution(regular_state, "1").state

    result = declare_revolution(state, "1")

    assert result.error_code == ERROR_REVOLUTION_ALREADY_DECLARED


def test_revolution_after_partial_exchange(regular_state):
    state = give_back_cards(regular_state, "0", ["0-0", "0-1"]).state

    state = declare_revolution(state, "1").state

    # The finished exchange stands; the open one is unwound
    assert sorted(c.rank for c in state.players["0"].hand) == [3, 5, 10]
    assert sorted(c.rank for c in state.players["2"].hand) == [4, 6, 9]
    assert state.tax_debts == []


def test_revolution_only_in_tax_phase(make_play_state):
    state = make_play_state({"0": [0, 0], "1": [3]})

    assert declare_revolution(state, "0").error_code == ERROR_WRONG_PHASE
