"""
Tax phase logic: debts between the top and bottom of the last finish order.
"""

import logging
from typing import Dict, List

from .comparator import best_first
from .constants import (
    PHASE_TAX, PRIMARY_TAX_COUNT, PRIMARY_TAX_MIN_PLAYERS,
    SECONDARY_TAX_COUNT, SECONDARY_TAX_MIN_PLAYERS,
)
from .errors import InvariantViolation
from .models import GameState, TaxDebt

logger = logging.getLogger(__name__)


def compute_tax_debts(finish_order: List[str], player_count: int) -> List[TaxDebt]:
    """
    Build this round's debts from the previous finish order.

    The worst player owes the best player two cards. With four or more
    players the second-worst also owes the second-best one card.

    Args:
        finish_order: Player ids, best first
        player_count: Number of seated players
    """
    debts = []
    if len(finish_order) < player_count:
        return debts

    if len(finish_order) >= PRIMARY_TAX_MIN_PLAYERS:
        debts.append(TaxDebt(
            from_player_id=finish_order[player_count - 1],
            to_player_id=finish_order[0],
            count=PRIMARY_TAX_COUNT,
        ))
    if len(finish_order) >= SECONDARY_TAX_MIN_PLAYERS:
        debts.append(TaxDebt(
            from_player_id=finish_order[player_count - 2],
            to_player_id=finish_order[1],
            count=SECONDARY_TAX_COUNT,
        ))
    return debts


def stage_tax_payments(state: GameState):
    """
    Take each payer's best cards out of their hand and stage them on the debt.

    Payers never choose: the lowest-numbered cards go, with wild cards
    counted as the weakest rank so they are only taken when nothing else is
    left.
    """
    for debt in state.tax_debts:
        payer = state.players.get(debt.from_player_id)
        if payer is None or debt.to_player_id not in state.players:
            raise InvariantViolation(
                f"Tax debt references unknown player ({debt.from_player_id} -> {debt.to_player_id})"
            )

        staged = best_first(payer.hand)[:debt.count]
        payer.remove_cards([card.id for card in staged])
        debt.offered_cards = staged

        state.game_log.append(
            f"{payer.name} pays {debt.count} card(s) of tax to {state.players[debt.to_player_id].name}"
        )
        logger.info(f"Staged {len(staged)} tax card(s) from {debt.from_player_id} to {debt.to_player_id}")


def setup_taxation(state: GameState):
    """Compute debts from the current finish order and auto-stage payments."""
    state.tax_debts = compute_tax_debts(state.finish_order, state.player_count)
    stage_tax_payments(state)


def apply_give_back(state: GameState, debt: TaxDebt, card_ids: List[str]):
    """
    Swap the receiver's chosen cards for the staged tax cards and mark the
    debt resolved.
    """
    receiver = state.players[debt.to_player_id]
    payer = state.players[debt.from_player_id]

    returned = receiver.remove_cards(card_ids)
    receiver.hand.extend(debt.offered_cards)
    payer.hand.extend(returned)

    debt.offered_cards = []
    debt.count = 0

    state.game_log.append(f"{receiver.name} gave {len(returned)} card(s) back to {payer.name}")
    logger.info(f"Tax exchange {debt.from_player_id} -> {debt.to_player_id} resolved")


def mark_ready(state: GameState, player_id: str):
    """Idempotent: a player already marked ready stays in the list once."""
    if player_id not in state.ready_players:
        state.ready_players.append(player_id)
        state.game_log.append(f"{state.players[player_id].name} is ready")


def all_debts_resolved(state: GameState) -> bool:
    return all(debt.resolved for debt in state.tax_debts)


def is_tax_complete(state: GameState) -> bool:
    """
    Check if the tax phase can end: every debt resolved and every player
    ready. Holds even with no debts, so the first round still waits for
    everyone to acknowledge.
    """
    if state.phase != PHASE_TAX:
        return False
    all_ready = all(player_id in state.ready_players for player_id in state.players)
    return all_debts_resolved(state) and all_ready


def get_pending_tax_actions(state: GameState) -> Dict[str, Dict]:
    """
    Get pending tax actions for each player.

    Returns:
        Dictionary mapping player_id to pending action info
    """
    if state.phase != PHASE_TAX:
        return {}

    pending_actions = {}
    for debt in state.tax_debts:
        if debt.offered_cards:
            pending_actions[debt.to_player_id] = {
                'action': 'give_back',
                'count': debt.count,
                'to': debt.from_player_id
            }

    for player_id in state.players:
        if player_id not in pending_actions and player_id not in state.ready_players:
            pending_actions[player_id] = {'action': 'ready'}

    return pending_actions
