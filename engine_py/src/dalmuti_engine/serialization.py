"""
Per-viewer state projection.
"""

import copy
from dataclasses import asdict
from typing import Any, Dict, Optional

from .constants import HIDDEN_CARD_PREFIX, HIDDEN_CARD_RANK
from .models import Card, GameState


def hidden_hand(player_id: str, size: int):
    """Placeholder cards: same count, no identities."""
    return [
        Card(rank=HIDDEN_CARD_RANK, id=f"{HIDDEN_CARD_PREFIX}-{player_id}-{i}")
        for i in range(size)
    ]


def project(state: GameState, viewer_id: Optional[str] = None) -> GameState:
    """
    Redact a state for one viewer.

    Args:
        state: Authoritative state (left untouched)
        viewer_id: Player viewing the state; None means a spectator, who
            sees everything

    Returns:
        A copy where every other player's hand is replaced by placeholders
        and tax cards heading to the viewer are hidden (their count stays).
    """
    projected = copy.deepcopy(state)
    if viewer_id is None:
        return projected

    for player_id, player in projected.players.items():
        if player_id != viewer_id:
            player.hand = hidden_hand(player_id, len(player.hand))

    for debt in projected.tax_debts:
        if debt.to_player_id == viewer_id:
            debt.offered_cards = []

    return projected


def project_dict(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """The projection as plain dicts and lists, ready for JSON encoding by the host."""
    return asdict(project(state, viewer_id))
