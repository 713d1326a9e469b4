"""
Action models and validation for the engine's action surface.
"""

from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError

from .constants import DECK_SIZE, PRIMARY_TAX_COUNT


class ActionType(str, Enum):
    """Inbound action types."""
    START_GAME = "start_game"
    PLAY_CARDS = "play_cards"
    PASS = "pass"
    MARK_READY = "mark_ready"
    DECLARE_REVOLUTION = "declare_revolution"
    GIVE_BACK_CARDS = "give_back_cards"
    ADVANCE_ROUND = "advance_round"


# Inbound action models
class BaseAction(BaseModel):
    """Base action model. player_id is the caller, not necessarily whose turn it is."""
    type: ActionType
    player_id: str = Field(..., min_length=1, max_length=50)


class StartGameAction(BaseAction):
    """Owner starts the match from the lobby."""
    type: ActionType = ActionType.START_GAME


class PlayCardsAction(BaseAction):
    """Play cards onto the table."""
    type: ActionType = ActionType.PLAY_CARDS
    card_ids: List[str] = Field(..., min_length=1, max_length=DECK_SIZE)


class PassAction(BaseAction):
    """Pass on the current trick."""
    type: ActionType = ActionType.PASS


class MarkReadyAction(BaseAction):
    """Signal readiness to leave the tax phase."""
    type: ActionType = ActionType.MARK_READY


class DeclareRevolutionAction(BaseAction):
    """Declare a revolution while holding both wild cards."""
    type: ActionType = ActionType.DECLARE_REVOLUTION


class GiveBackCardsAction(BaseAction):
    """Tax receiver returns cards to the payer."""
    type: ActionType = ActionType.GIVE_BACK_CARDS
    card_ids: List[str] = Field(..., min_length=1, max_length=PRIMARY_TAX_COUNT)


class AdvanceRoundAction(BaseAction):
    """Owner moves past the round-over screen."""
    type: ActionType = ActionType.ADVANCE_ROUND


# Union type for all inbound actions
InboundAction = Union[
    StartGameAction,
    PlayCardsAction,
    PassAction,
    MarkReadyAction,
    DeclareRevolutionAction,
    GiveBackCardsAction,
    AdvanceRoundAction
]

ACTION_MODELS = {
    ActionType.START_GAME: StartGameAction,
    ActionType.PLAY_CARDS: PlayCardsAction,
    ActionType.PASS: PassAction,
    ActionType.MARK_READY: MarkReadyAction,
    ActionType.DECLARE_REVOLUTION: DeclareRevolutionAction,
    ActionType.GIVE_BACK_CARDS: GiveBackCardsAction,
    ActionType.ADVANCE_ROUND: AdvanceRoundAction,
}


def parse_action(data: Dict[str, Any]) -> InboundAction:
    """
    Parse raw action data into the matching action model.

    Raises:
        ValueError: If the action type is unknown or the payload is malformed
    """
    action_type = data.get("type")

    if not action_type:
        raise ValueError("Missing action type")

    try:
        action_type = ActionType(action_type)
    except ValueError:
        raise ValueError(f"Invalid action type: {action_type}")

    try:
        return ACTION_MODELS[action_type](**data)
    except ValidationError as e:
        raise ValueError(f"Invalid action data: {e}")
