"""Main game engine: phase and turn state machine plus the action surface"""

import copy
import logging
import random
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from . import revolution, taxation, trick
from .constants import (
    DECK_SIZE, ERROR_INVALID_ACTION, PHASE_LOBBY, PHASE_PLAY,
    PHASE_ROUND_OVER, PHASE_TAX,
)
from .errors import GameError, InvariantViolation
from .events import (
    AdvanceRoundAction, DeclareRevolutionAction, GiveBackCardsAction,
    InboundAction, MarkReadyAction, PassAction, PlayCardsAction, StartGameAction,
    parse_action,
)
from .models import GameState, Player
from .ranking import assign_social_ranks, next_turn, turn_order
from .rules import RuleConfig, default_rules
from .serialization import project
from .shuffle import build_deck, deal_cards, shuffle_deck, shuffle_ids, validate_deck_integrity
from .validate import (
    find_open_debt, validate_give_back, validate_owner, validate_pass,
    validate_play, validate_ready,
)

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Outcome of an action. On rejection `state` is the untouched input state."""
    success: bool
    state: GameState
    error_code: Optional[str] = None
    error_message: Optional[str] = None


def setup(player_count: int, names: Optional[List[str]] = None, rules: Optional[RuleConfig] = None) -> GameState:
    """
    Create the lobby state for a new match. Player ids are "0".."N-1".

    Raises:
        ValueError: if the player count is outside the configured bounds
    """
    rules = rules or default_rules
    if not rules.validate_player_count(player_count):
        raise ValueError(
            f"Player count {player_count} outside {rules.min_players}..{rules.max_players}"
        )
    if names is not None and len(names) != player_count:
        raise ValueError(f"Expected {player_count} names, got {len(names)}")

    players = {}
    for i in range(player_count):
        player_id = str(i)
        name = names[i] if names else f"Player {i + 1}"
        players[player_id] = Player(id=player_id, name=name)

    return GameState(players=players, owner_id=rules.owner_id)


# ---------------------------------------------------------------------------
# Action plumbing
# ---------------------------------------------------------------------------

def _run_action(state: GameState, action_name: str, mutate: Callable[[GameState], None]) -> ActionResult:
    """
    Apply a mutation to a copy of the state, then run phase transitions.

    A GameError raised anywhere in the mutation rejects the action and the
    original state is returned untouched.
    """
    new_state = copy.deepcopy(state)
    try:
        mutate(new_state)
    except GameError as e:
        logger.info(f"Rejected {action_name}: [{e.code}] {e.message}")
        return ActionResult(success=False, state=state, error_code=e.code, error_message=e.message)

    _advance_phases(new_state)
    new_state.increment_version()
    logger.info(f"Applied {action_name} (phase={new_state.phase}, turn={new_state.turn})")
    return ActionResult(success=True, state=new_state)


def _advance_phases(state: GameState):
    """Evaluate phase guards until none fires."""
    while True:
        if state.phase == PHASE_LOBBY and state.seat_order:
            _enter_tax(state)
        elif state.phase == PHASE_TAX and taxation.is_tax_complete(state):
            state.tax_debts = []
            _enter_play(state)
        elif state.phase == PHASE_PLAY and len(state.unfinished_players()) <= 1:
            _end_play(state)
        else:
            return


def _enter_tax(state: GameState):
    state.phase = PHASE_TAX
    state.ready_players = []
    state.revolution_declared_by = None
    state.is_greater_revolution = False
    state.turn = None
    state.game_log.append(f"Round {state.round_number}: tax phase")
    logger.info(f"Entering tax phase, {len(state.tax_debts)} debt(s)")


def _enter_play(state: GameState):
    state.phase = PHASE_PLAY
    state.current_trick = None
    state.last_player_to_play = None
    state.passed_players = []
    state.finish_order = []
    for player in state.players.values():
        player.finished = False
        player.finish_position = None

    state.turn = turn_order(state)[0]
    state.game_log.append(f"Round {state.round_number} begins. {state.players[state.turn].name} leads")
    logger.info(f"Entering play phase, {state.turn} leads")


def _end_play(state: GameState):
    """
    Close the round: the last player holding cards takes the final position,
    social ranks are snapshotted and the round counter moves on.
    """
    for player_id, player in state.players.items():
        if not player.finished:
            player.finished = True
            player.finish_position = len(state.finish_order) + 1
            state.finish_order.append(player_id)

    assign_social_ranks(state)
    state.round_number += 1
    state.turn = None
    state.phase = PHASE_ROUND_OVER

    standings = ", ".join(
        f"{i + 1}. {state.players[pid].name}" for i, pid in enumerate(state.finish_order)
    )
    state.game_log.append(f"Round over! {standings}")
    logger.info(f"Round over, finish order {state.finish_order}")


def _deal_round(state: GameState, rng: Optional[random.Random]):
    """Deal a fresh shuffled deck and stage this round's taxes."""
    deck = shuffle_deck(build_deck(tag=f"d{state.round_number}"), rng)
    if len(deck) != DECK_SIZE:
        raise InvariantViolation(f"Dealt deck has {len(deck)} cards")

    hands = deal_cards(deck, list(state.players))
    for player_id, cards in hands.items():
        state.players[player_id].hand = cards
    state.discard = []
    taxation.setup_taxation(state)


def _after_play_action(state: GameState, player_id: str):
    """Hand the turn on after a play or pass."""
    if len(state.unfinished_players()) <= 1:
        return

    if trick.is_trick_complete(state):
        leader = trick.next_trick_leader(state)
        trick.clear_trick(state)
        state.turn = leader
        state.game_log.append(f"{state.players[leader].name} leads the next trick")
    else:
        state.turn = next_turn(state, player_id)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def start_game(state: GameState, caller_id: str, rng: Optional[random.Random] = None) -> ActionResult:
    """
    Owner starts the match: random seats, a random initial ranking that
    seeds round-1 taxes, and the first deal.
    """
    def mutate(s: GameState):
        validate_owner(s, caller_id, PHASE_LOBBY).raise_if_invalid()

        player_ids = list(s.players)
        s.seat_order = shuffle_ids(player_ids, rng)
        s.finish_order = shuffle_ids(player_ids, rng)
        s.game_log = []
        assign_social_ranks(s)
        _deal_round(s, rng)
        s.game_log.append("Game started!")

    return _run_action(state, 'start_game', mutate)


def play_cards(state: GameState, player_id: str, card_ids: List[str]) -> ActionResult:
    def mutate(s: GameState):
        pattern = validate_play(s, player_id, card_ids).raise_if_invalid().pattern
        finished = trick.apply_play(s, player_id, card_ids, pattern['rank'])

        player = s.players[player_id]
        s.game_log.append(f"{player.name} played {pattern['count']} card(s) of rank {pattern['rank']}")
        if finished:
            s.game_log.append(f"{player.name} finished in position {player.finish_position}!")
        _after_play_action(s, player_id)

    return _run_action(state, 'play_cards', mutate)


def pass_turn(state: GameState, player_id: str) -> ActionResult:
    def mutate(s: GameState):
        validate_pass(s, player_id).raise_if_invalid()
        trick.apply_pass(s, player_id)
        s.game_log.append(f"{s.players[player_id].name} passed")
        _after_play_action(s, player_id)

    return _run_action(state, 'pass', mutate)


def mark_ready(state: GameState, caller_id: str) -> ActionResult:
    def mutate(s: GameState):
        validate_ready(s, caller_id).raise_if_invalid()
        taxation.mark_ready(s, caller_id)

    return _run_action(state, 'mark_ready', mutate)


def give_back_cards(state: GameState, caller_id: str, card_ids: List[str]) -> ActionResult:
    def mutate(s: GameState):
        validate_give_back(s, caller_id, card_ids).raise_if_invalid()
        taxation.apply_give_back(s, find_open_debt(s, caller_id), card_ids)

    return _run_action(state, 'give_back_cards', mutate)


def declare_revolution(state: GameState, caller_id: str) -> ActionResult:
    def mutate(s: GameState):
        revolution.declare_revolution(s, caller_id)

    return _run_action(state, 'declare_revolution', mutate)


def advance_round(state: GameState, caller_id: str, rng: Optional[random.Random] = None) -> ActionResult:
    """
    Owner (usually on a presentation-layer timer) moves past the round-over
    screen. Fired late, after the phase already moved on, it is rejected
    with no effect.
    """
    def mutate(s: GameState):
        validate_owner(s, caller_id, PHASE_ROUND_OVER).raise_if_invalid()

        s.current_trick = None
        s.last_player_to_play = None
        s.passed_players = []
        s.revolution_declared_by = None
        s.is_greater_revolution = False
        s.ready_players = []
        s.game_log = []

        _deal_round(s, rng)
        for player in s.players.values():
            player.finished = False
            player.finish_position = None
        _enter_tax(s)

    return _run_action(state, 'advance_round', mutate)


def apply_action(state: GameState, action: InboundAction, rng: Optional[random.Random] = None) -> ActionResult:
    """Dispatch a parsed action to its handler."""
    if isinstance(action, StartGameAction):
        return start_game(state, action.player_id, rng)
    if isinstance(action, PlayCardsAction):
        return play_cards(state, action.player_id, action.card_ids)
    if isinstance(action, PassAction):
        return pass_turn(state, action.player_id)
    if isinstance(action, MarkReadyAction):
        return mark_ready(state, action.player_id)
    if isinstance(action, GiveBackCardsAction):
        return give_back_cards(state, action.player_id, action.card_ids)
    if isinstance(action, DeclareRevolutionAction):
        return declare_revolution(state, action.player_id)
    if isinstance(action, AdvanceRoundAction):
        return advance_round(state, action.player_id, rng)
    return ActionResult(
        success=False, state=state,
        error_code=ERROR_INVALID_ACTION, error_message=f"Unsupported action: {action!r}"
    )


# ---------------------------------------------------------------------------
# Match registry
# ---------------------------------------------------------------------------

class DalmutiEngine:
    """
    Holds the authoritative state of each match and serialises every
    mutating action on a per-match lock.
    """

    def __init__(self, rules: Optional[RuleConfig] = None):
        self.rules = rules or default_rules
        self.matches: Dict[str, GameState] = {}
        self.rngs: Dict[str, random.Random] = {}
        self.broken: Dict[str, str] = {}
        self.match_locks = defaultdict(threading.Lock)

    def create_match(self, match_id: str, player_count: int, names: Optional[List[str]] = None,
                     seed: Optional[int] = None) -> GameState:
        with self.match_locks[match_id]:
            if match_id not in self.matches:
                self.matches[match_id] = setup(player_count, names, self.rules)
                self.rngs[match_id] = random.Random(seed)
                logger.info(f"Created match {match_id} with {player_count} players")
            return self.matches[match_id]

    def get_match(self, match_id: str) -> Optional[GameState]:
        return self.matches.get(match_id)

    def apply(self, match_id: str, action: Union[InboundAction, dict]) -> ActionResult:
        """
        Apply one action to a match.

        Raises:
            KeyError: unknown match
            ValueError: malformed action payload
            InvariantViolation: the match state is broken; it stays refused afterwards
        """
        if isinstance(action, dict):
            action = parse_action(action)

        with self.match_locks[match_id]:
            if match_id in self.broken:
                raise InvariantViolation(f"Match {match_id} is broken: {self.broken[match_id]}")
            state = self.matches[match_id]

            try:
                result = apply_action(state, action, self.rngs[match_id])
                if result.success and result.state.phase != PHASE_LOBBY \
                        and not validate_deck_integrity(result.state):
                    raise InvariantViolation("Card accounting does not add up to the deck")
            except InvariantViolation as e:
                self.broken[match_id] = str(e)
                logger.error(f"Match {match_id} broken by {action.type.value}: {e}")
                raise

            if result.success:
                self.matches[match_id] = result.state
            return result

    def view(self, match_id: str, viewer_id: Optional[str] = None) -> GameState:
        with self.match_locks[match_id]:
            return project(self.matches[match_id], viewer_id)
