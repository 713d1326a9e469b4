"""
Deck building, shuffling and dealing utilities.
"""

import random
import uuid
from collections import Counter
from typing import Dict, List, Optional

from .comparator import best_first
from .constants import DECK_SIZE, MAX_RANK, MIN_RANK, WILD_COUNT, WILD_RANK
from .errors import InvariantViolation
from .models import Card, GameState


def build_deck(tag: Optional[str] = None) -> List[Card]:
    """
    Create the 80-card deck: two wild cards, and rank r appearing r times
    for r in 1..12.

    Card ids carry a per-deck tag (random unless given) so cards from
    different deals never collide.
    """
    deck_tag = tag or uuid.uuid4().hex[:6]
    deck = []
    seq = 0

    for _ in range(WILD_COUNT):
        deck.append(Card(rank=WILD_RANK, id=f"wild-{deck_tag}-{seq}"))
        seq += 1

    for rank in range(MIN_RANK, MAX_RANK + 1):
        for copy in range(rank):
            deck.append(Card(rank=rank, id=f"r{rank}-{copy}-{deck_tag}-{seq}"))
            seq += 1

    if len(deck) != DECK_SIZE:
        raise InvariantViolation(f"Deck has {len(deck)} cards, expected {DECK_SIZE}")
    return deck


def shuffle_deck(deck: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Shuffle a deck, deterministically if a seeded rng is provided.

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()
    if rng is not None:
        rng.shuffle(deck_copy)
    else:
        random.shuffle(deck_copy)
    return deck_copy


def shuffle_ids(player_ids: List[str], rng: Optional[random.Random] = None) -> List[str]:
    """Uniform random permutation of player ids."""
    ids = list(player_ids)
    if rng is not None:
        rng.shuffle(ids)
    else:
        random.shuffle(ids)
    return ids


def deal_cards(deck: List[Card], player_ids: List[str]) -> Dict[str, List[Card]]:
    """
    Deal the whole deck round-robin. With player counts that don't divide 80
    the first players in the list receive one extra card.
    """
    if not player_ids:
        return {}

    hands = {player_id: [] for player_id in player_ids}
    for i, card in enumerate(deck):
        hands[player_ids[i % len(player_ids)]].append(card)
    return hands


def all_cards_in_play(state: GameState) -> List[Card]:
    """Every card currently held anywhere in the state."""
    cards = []
    for player in state.players.values():
        cards.extend(player.hand)
    for debt in state.tax_debts:
        cards.extend(debt.offered_cards)
    if state.current_trick is not None:
        cards.extend(state.current_trick.cards)
    cards.extend(state.discard)
    return cards


def validate_deck_integrity(state: GameState) -> bool:
    """
    Validate that all 80 cards are accounted for, with no duplicates and the
    right number of cards per rank.
    """
    cards = all_cards_in_play(state)
    if len(cards) != DECK_SIZE:
        return False
    if len({card.id for card in cards}) != DECK_SIZE:
        return False

    counts = Counter(card.rank for card in cards)
    if counts[WILD_RANK] != WILD_COUNT:
        return False
    return all(counts[rank] == rank for rank in range(MIN_RANK, MAX_RANK + 1))


def sort_hand(hand: List[Card]) -> List[Card]:
    """Sort a hand for display: best cards first, wild cards at the end."""
    return best_first(hand)
