"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional

from .constants import PHASE_LOBBY, WILD_RANK


@dataclass
class Card:
    rank: int  # 0 = wild, 1 (best) .. 12 (worst)
    id: str

    @property
    def is_wild(self) -> bool:
        return self.rank == WILD_RANK


@dataclass
class Player:
    id: str
    name: str
    hand: List[Card] = field(default_factory=list)
    social_rank: Optional[int] = None  # 1 = best, None before the first draw
    finished: bool = False
    finish_position: Optional[int] = None

    def find_card(self, card_id: str) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def remove_cards(self, card_ids: List[str]) -> List[Card]:
        """Remove the given cards from the hand and return them in the requested order."""
        by_id = {card.id: card for card in self.hand}
        removed = [by_id[card_id] for card_id in card_ids]
        wanted = set(card_ids)
        self.hand = [card for card in self.hand if card.id not in wanted]
        return removed


@dataclass
class Trick:
    cards: List[Card]
    rank: int  # effective rank, 1..13
    count: int
    played_by: str


@dataclass
class TaxDebt:
    from_player_id: str
    to_player_id: str
    count: int
    offered_cards: List[Card] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return self.count == 0 and not self.offered_cards


@dataclass
class GameState:
    phase: str = PHASE_LOBBY
    players: Dict[str, Player] = field(default_factory=dict)
    owner_id: str = '0'
    turn: Optional[str] = None
    current_trick: Optional[Trick] = None
    last_player_to_play: Optional[str] = None
    passed_players: List[str] = field(default_factory=list)
    finish_order: List[str] = field(default_factory=list)  # index 0 = best
    seat_order: List[str] = field(default_factory=list)
    tax_debts: List[TaxDebt] = field(default_factory=list)
    ready_players: List[str] = field(default_factory=list)
    revolution_declared_by: Optional[str] = None
    is_greater_revolution: bool = False
    round_number: int = 1
    discard: List[Card] = field(default_factory=list)
    game_log: List[str] = field(default_factory=list)
    version: int = 0

    @property
    def player_count(self) -> int:
        return len(self.players)

    def unfinished_players(self) -> List[str]:
        return [pid for pid, p in self.players.items() if not p.finished]

    def increment_version(self):
        self.version += 1
