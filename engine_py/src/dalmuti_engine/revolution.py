"""
Revolution: a holder of both wild cards cancels the round's taxation.

When the worst-ranked player of the seeding finish order declares it, the
whole hierarchy is inverted as well.
"""

import logging

from .models import GameState
from .ranking import assign_social_ranks
from .validate import validate_revolution

logger = logging.getLogger(__name__)


def count_held_wilds(state: GameState, player_id: str) -> int:
    """Wild cards in the player's hand plus any staged as their own tax payment."""
    player = state.players[player_id]
    held = sum(1 for card in player.hand if card.is_wild)
    for debt in state.tax_debts:
        if debt.from_player_id == player_id:
            held += sum(1 for card in debt.offered_cards if card.is_wild)
    return held


def is_greater_revolution(state: GameState, player_id: str) -> bool:
    """The declarer holds the worst rank of the finish order that seeded this tax."""
    n = state.player_count
    return len(state.finish_order) >= n and state.finish_order[n - 1] == player_id


def return_staged_cards(state: GameState):
    for debt in state.tax_debts:
        if debt.offered_cards:
            state.players[debt.from_player_id].hand.extend(debt.offered_cards)
            debt.offered_cards = []


def declare_revolution(state: GameState, player_id: str) -> bool:
    """
    Validate and apply a revolution. Mutates state.

    Staged tax cards go back to their payers and every debt is dropped. A
    greater revolution reverses the finish order and reassigns social ranks
    from it.

    Returns:
        True for a greater revolution
    """
    held_wilds = count_held_wilds(state, player_id) if player_id in state.players else 0
    validate_revolution(state, player_id, held_wilds).raise_if_invalid()

    return_staged_cards(state)
    greater = is_greater_revolution(state, player_id)
    if greater:
        state.finish_order = list(reversed(state.finish_order))
        assign_social_ranks(state)
        state.is_greater_revolution = True

    state.tax_debts = []
    state.revolution_declared_by = player_id

    name = state.players[player_id].name
    if greater:
        state.game_log.append(f"{name} declared a greater revolution! The ranks are inverted")
    else:
        state.game_log.append(f"{name} declared a revolution! Taxes are cancelled")
    logger.info(f"Revolution by {player_id} (greater={greater})")
    return greater
