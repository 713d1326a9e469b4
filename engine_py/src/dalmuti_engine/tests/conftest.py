"""
Shared fixtures for building hand-crafted game states.
"""

from typing import Dict, List, Optional

import pytest

from dalmuti_engine.constants import PHASE_PLAY, PHASE_TAX
from dalmuti_engine.models import Card, GameState, Player
from dalmuti_engine.ranking import assign_social_ranks
from dalmuti_engine.taxation import setup_taxation


def _build_players(hands: Dict[str, List[int]]) -> Dict[str, Player]:
    players = {}
    for player_id, ranks in hands.items():
        players[player_id] = Player(
            id=player_id,
            name=f"Player {int(player_id) + 1}",
            hand=[Card(rank=rank, id=f"{player_id}-{i}") for i, rank in enumerate(ranks)],
        )
    return players


@pytest.fixture
def make_play_state():
    """Factory for a play-phase state. Social rank is player id + 1 unless given."""
    def _make(hands: Dict[str, List[int]], turn: str = "0",
              social_ranks: Optional[Dict[str, int]] = None) -> GameState:
        state = GameState(phase=PHASE_PLAY, players=_build_players(hands), turn=turn)
        for player_id, player in state.players.items():
            player.social_rank = (social_ranks or {}).get(player_id, int(player_id) + 1)
        return state
    return _make


@pytest.fixture
def make_tax_state():
    """Factory for a tax-phase state with debts computed and staged from finish_order."""
    def _make(hands: Dict[str, List[int]], finish_order: List[str]) -> GameState:
        state = GameState(phase=PHASE_TAX, players=_build_players(hands))
        state.finish_order = list(finish_order)
        assign_social_ranks(state)
        setup_taxation(state)
        return state
    return _make
