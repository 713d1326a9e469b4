"""
Tests for deck building, dealing and card accounting.
"""

import random
from collections import Counter

from dalmuti_engine.constants import DECK_SIZE, WILD_RANK
from dalmuti_engine.engine import setup, start_game
from dalmuti_engine.models import Card
from dalmuti_engine.shuffle import (
    build_deck, deal_cards, shuffle_deck, sort_hand, validate_deck_integrity,
)


def test_deck_structure():
    deck = build_deck()
    counts = Counter(card.rank for card in deck)

    assert len(deck) == DECK_SIZE == 80
    assert counts[WILD_RANK] == 2
    for rank in range(1, 13):
        assert counts[rank] == rank


def test_deck_ids_unique_and_fresh():
    first = build_deck()
    second = build_deck()

    assert len({card.id for card in first}) == 80
    assert not {card.id for card in first} & {card.id for card in second}


def test_seeded_shuffle_is_reproducible():
    deck = build_deck(tag="t")
    a = shuffle_deck(deck, random.Random(3))
    b = shuffle_deck(deck, random.Random(3))

    assert [c.id for c in a] == [c.id for c in b]
    assert [c.id for c in deck] == [c.id for c in build_deck(tag="t")]  # input untouched


def test_deal_round_robin():
    deck = build_deck()
    hands = deal_cards(deck, ["0", "1", "2", "3"])

    assert all(len(cards) == 20 for cards in hands.values())
    assert hands["0"][0] is deck[0]
    assert hands["1"][0] is deck[1]


def test_deal_uneven_player_count():
    hands = deal_cards(build_deck(), ["0", "1", "2", "3", "4", "5"])

    assert [len(hands[pid]) for pid in "012345"] == [14, 14, 13, 13, 13, 13]


def test_sort_hand_puts_wild_last():
    hand = [Card(rank=0, id="w"), Card(rank=7, id="a"), Card(rank=2, id="b")]

    assert [c.id for c in sort_hand(hand)] == ["b", "a", "w"]


def test_integrity_after_start():
    result = start_game(setup(4), "0", random.Random(1))
    assert validate_deck_integrity(result.state)

    result.state.players["0"].hand.pop()
    assert not validate_deck_integrity(result.state)
