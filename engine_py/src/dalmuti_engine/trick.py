"""
Trick play: applying plays and passes, and detecting a won trick.

These functions assume the action was already validated and mutate the
state they are given.
"""

from typing import List, Optional

from .models import GameState, Trick
from .ranking import next_unfinished_by_rank


def apply_play(state: GameState, player_id: str, card_ids: List[str], rank: int) -> bool:
    """
    Move cards from the player's hand onto the table.

    The superseded trick's cards go to the discard pile and the pass list is
    reset. A player who empties their hand is finished with the next finish
    position.

    Returns:
        True if the player finished on this play
    """
    player = state.players[player_id]
    cards = player.remove_cards(card_ids)

    if state.current_trick is not None:
        state.discard.extend(state.current_trick.cards)

    state.current_trick = Trick(cards=cards, rank=rank, count=len(cards), played_by=player_id)
    state.last_player_to_play = player_id
    state.passed_players = []

    if not player.hand:
        player.finished = True
        player.finish_position = len(state.finish_order) + 1
        state.finish_order.append(player_id)
        return True
    return False


def apply_pass(state: GameState, player_id: str):
    if player_id not in state.passed_players:
        state.passed_players.append(player_id)


def is_trick_complete(state: GameState) -> bool:
    """
    A trick is won once every unfinished player other than the last player
    to play has passed.
    """
    if state.current_trick is None or state.last_player_to_play is None:
        return False

    still_to_respond = [
        player_id for player_id in state.unfinished_players()
        if player_id != state.last_player_to_play and player_id not in state.passed_players
    ]
    return not still_to_respond


def next_trick_leader(state: GameState) -> Optional[str]:
    """
    The trick winner leads next, unless they finished on the winning play:
    then the lead goes to the unfinished player with the next worse rank.
    """
    winner = state.last_player_to_play
    if winner is None:
        return None
    if not state.players[winner].finished:
        return winner
    return next_unfinished_by_rank(state, winner)


def clear_trick(state: GameState):
    """Clear the play area. Cards of the finished trick go to the discard pile."""
    if state.current_trick is not None:
        state.discard.extend(state.current_trick.cards)
    state.current_trick = None
    state.passed_players = []
