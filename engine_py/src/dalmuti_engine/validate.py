"""
Action validation.

Validators never mutate state. Each returns a ValidationResult; callers turn
an invalid result into a GameError with `result.raise_if_invalid()`.
"""

from typing import Dict, List, Optional

from .comparator import beats, effective_rank
from .constants import (
    ERROR_DUPLICATE_CARD, ERROR_EMPTY_SELECTION, ERROR_INSUFFICIENT_WILDS,
    ERROR_MUST_LEAD, ERROR_NO_PENDING_DEBT, ERROR_NOT_OWNER, ERROR_NOT_YOUR_TURN,
    ERROR_PATTERN_MISMATCH, ERROR_RANK_TOO_LOW, ERROR_REVOLUTION_ALREADY_DECLARED,
    ERROR_UNKNOWN_CARD, ERROR_UNKNOWN_PLAYER, ERROR_WRONG_CARD_COUNT,
    ERROR_WRONG_PHASE, PHASE_PLAY, PHASE_TAX,
)
from .errors import GameError
from .models import GameState, Player, TaxDebt


class ValidationResult:
    """Result of action validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        pattern: Optional[Dict] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.pattern = pattern

    @classmethod
    def success(cls, pattern: Optional[Dict] = None) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, pattern=pattern or {})

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)

    def raise_if_invalid(self) -> 'ValidationResult':
        if not self.valid:
            raise GameError(self.error_code, self.error_message)
        return self


def validate_selection(player: Player, card_ids: List[str]) -> ValidationResult:
    """Check a card selection is non-empty, free of duplicates and owned by the player."""
    if not card_ids:
        return ValidationResult.error(ERROR_EMPTY_SELECTION, "No cards selected")

    if len(set(card_ids)) != len(card_ids):
        return ValidationResult.error(ERROR_DUPLICATE_CARD, "Cannot select the same card twice")

    for card_id in card_ids:
        if player.find_card(card_id) is None:
            return ValidationResult.error(ERROR_UNKNOWN_CARD, f"You don't own {card_id}")

    return ValidationResult.success()


def validate_phase(state: GameState, phase: str) -> ValidationResult:
    if state.phase != phase:
        return ValidationResult.error(
            ERROR_WRONG_PHASE,
            f"Action not allowed in phase {state.phase} (needs {phase})"
        )
    return ValidationResult.success()


def validate_player(state: GameState, player_id: Optional[str]) -> ValidationResult:
    if not player_id or player_id not in state.players:
        return ValidationResult.error(ERROR_UNKNOWN_PLAYER, f"Unknown player: {player_id}")
    return ValidationResult.success()


def validate_owner(state: GameState, caller_id: str, phase: str) -> ValidationResult:
    """Owner-only actions: starting the game and advancing past round-over."""
    result = validate_phase(state, phase)
    if not result.valid:
        return result
    if caller_id != state.owner_id:
        return ValidationResult.error(ERROR_NOT_OWNER, "Only the match owner can do that")
    return ValidationResult.success()


def validate_play(state: GameState, player_id: str, card_ids: List[str]) -> ValidationResult:
    """
    Validate a card play attempt.

    Args:
        state: Current game state
        player_id: ID of player attempting the play
        card_ids: List of card IDs being played

    Returns:
        ValidationResult whose pattern holds the effective rank and count
    """
    for result in (validate_phase(state, PHASE_PLAY), validate_player(state, player_id)):
        if not result.valid:
            return result

    if state.turn != player_id:
        return ValidationResult.error(
            ERROR_NOT_YOUR_TURN,
            f"It's not your turn (current turn: {state.turn})"
        )

    player = state.players[player_id]
    result = validate_selection(player, card_ids)
    if not result.valid:
        return result

    cards = [player.find_card(card_id) for card_id in card_ids]
    rank = effective_rank(cards)
    if rank is None:
        return ValidationResult.error(
            ERROR_PATTERN_MISMATCH,
            "All non-wild cards must share one rank"
        )

    trick = state.current_trick
    if trick is not None:
        if len(cards) != trick.count:
            return ValidationResult.error(
                ERROR_WRONG_CARD_COUNT,
                f"Must play exactly {trick.count} cards"
            )
        if not beats(rank, trick.rank):
            return ValidationResult.error(
                ERROR_RANK_TOO_LOW,
                f"Must play better than rank {trick.rank}"
            )

    return ValidationResult.success({'rank': rank, 'count': len(cards)})


def validate_pass(state: GameState, player_id: str) -> ValidationResult:
    """
    Validate a pass attempt. The leader of a fresh trick cannot pass.
    """
    for result in (validate_phase(state, PHASE_PLAY), validate_player(state, player_id)):
        if not result.valid:
            return result

    if state.turn != player_id:
        return ValidationResult.error(
            ERROR_NOT_YOUR_TURN,
            f"It's not your turn (current turn: {state.turn})"
        )

    if state.current_trick is None:
        return ValidationResult.error(ERROR_MUST_LEAD, "Cannot pass on an opening play")

    return ValidationResult.success({'action': 'pass'})


def find_open_debt(state: GameState, receiver_id: str) -> Optional[TaxDebt]:
    """The debt owed to this receiver whose cards are still staged, if any."""
    for debt in state.tax_debts:
        if debt.to_player_id == receiver_id and debt.offered_cards:
            return debt
    return None


def validate_give_back(state: GameState, receiver_id: str, card_ids: List[str]) -> ValidationResult:
    """
    Validate a receiver's give-back selection.

    Args:
        state: Current game state
        receiver_id: Player receiving tax and returning cards
        card_ids: Cards being returned to the payer
    """
    for result in (validate_phase(state, PHASE_TAX), validate_player(state, receiver_id)):
        if not result.valid:
            return result

    debt = find_open_debt(state, receiver_id)
    if debt is None:
        return ValidationResult.error(ERROR_NO_PENDING_DEBT, "No tax is waiting for you")

    if len(card_ids) != debt.count:
        return ValidationResult.error(
            ERROR_WRONG_CARD_COUNT,
            f"Must give back exactly {debt.count} cards"
        )

    return validate_selection(state.players[receiver_id], card_ids)


def validate_ready(state: GameState, caller_id: str) -> ValidationResult:
    for result in (validate_phase(state, PHASE_TAX), validate_player(state, caller_id)):
        if not result.valid:
            return result
    return ValidationResult.success()


def validate_revolution(state: GameState, caller_id: str, held_wilds: int) -> ValidationResult:
    """
    Validate a revolution declaration.

    Args:
        held_wilds: Wild cards the caller holds, including any staged as their own tax
    """
    for result in (validate_phase(state, PHASE_TAX), validate_player(state, caller_id)):
        if not result.valid:
            return result

    if state.revolution_declared_by is not None:
        return ValidationResult.error(
            ERROR_REVOLUTION_ALREADY_DECLARED,
            "A revolution was already declared this round"
        )

    if held_wilds < 2:
        return ValidationResult.error(
            ERROR_INSUFFICIENT_WILDS,
            "You need both wild cards to declare a revolution"
        )

    return ValidationResult.success()
