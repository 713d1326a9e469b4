"""
Rank comparison logic with wild card substitution.

Lower numbers are better everywhere: a play beats the table when its
effective rank is strictly smaller.
"""

from typing import List, Optional

from .constants import WILD_ALONE_RANK, WILD_RANK
from .models import Card


def effective_rank(cards: List[Card]) -> Optional[int]:
    """
    Get the comparable rank of a set of cards played together.

    Wild cards take the rank of the other cards in the set. A set made only
    of wild cards counts as 13, weaker than any normal rank.

    Returns:
        The effective rank, or None if the non-wild cards span several ranks
        (or the set is empty).
    """
    if not cards:
        return None

    natural_ranks = {card.rank for card in cards if card.rank != WILD_RANK}
    if not natural_ranks:
        return WILD_ALONE_RANK
    if len(natural_ranks) > 1:
        return None
    return natural_ranks.pop()


def beats(new_rank: int, table_rank: int) -> bool:
    """Check if new_rank improves on the rank currently on the table."""
    return new_rank < table_rank


def tax_rank(card: Card) -> int:
    """Sort key treating a wild card as the weakest rank. Never used for play."""
    return WILD_ALONE_RANK if card.rank == WILD_RANK else card.rank


def best_first(cards: List[Card]) -> List[Card]:
    """Sort cards from best (rank 1) to worst, wild cards last."""
    return sorted(cards, key=tax_rank)


def worst_first(cards: List[Card]) -> List[Card]:
    """Sort cards from worst to best, wild cards first."""
    return sorted(cards, key=tax_rank, reverse=True)
