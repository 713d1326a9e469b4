# engine_py/src/dalmuti_engine/ranking.py

from typing import List, Optional

from .errors import InvariantViolation
from .models import GameState


def assign_social_ranks(state: GameState):
    """
    Assigns social ranks 1..N to players from the finish order.

    This function mutates the state by setting the 'social_rank' attribute on
    each player named in 'finished_order'. Index 0 becomes rank 1.
    """
    for index, player_id in enumerate(state.finish_order):
        if player_id not in state.players:
            raise InvariantViolation(f"Finish order names unknown player {player_id}")
        state.players[player_id].social_rank = index + 1


def _rank_key(state: GameState, player_id: str) -> int:
    return state.players[player_id].social_rank or 0


def turn_order(state: GameState) -> List[str]:
    """Players sorted by social rank, best first. Rank 1 always opens a round."""
    return sorted(state.players, key=lambda pid: _rank_key(state, pid))


def next_turn(state: GameState, current_id: Optional[str]) -> Optional[str]:
    """
    The next unfinished player after current_id in rank order, wrapping around.

    The search is bounded by the player count; if everybody is finished the
    turn stays where it was.
    """
    order = turn_order(state)
    if current_id not in order:
        return current_id

    position = order.index(current_id)
    for step in range(1, len(order) + 1):
        candidate = order[(position + step) % len(order)]
        if not state.players[candidate].finished:
            return candidate
    return current_id


def next_unfinished_by_rank(state: GameState, player_id: str) -> Optional[str]:
    """
    The unfinished player with the next worse social rank than player_id,
    wrapping from the worst rank back to rank 1.
    """
    winner_rank = _rank_key(state, player_id)
    unfinished = sorted(state.unfinished_players(), key=lambda pid: _rank_key(state, pid))
    if not unfinished:
        return None
    for candidate in unfinished:
        if _rank_key(state, candidate) > winner_rank:
            return candidate
    return unfinished[0]
