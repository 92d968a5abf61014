"""Deck creation, shuffling and dealing for Spades."""

from __future__ import annotations

from enum import Enum
from random import Random
from typing import List, Optional, Sequence

from .cards import JOKER_IDS, RANK_ORDER, STANDARD_SUITS, Card, Rank, Suit

NUM_SEATS = 4
HAND_SIZE = 13
DECK_SIZE = NUM_SEATS * HAND_SIZE


class Variant(Enum):
    STANDARD = "standard"
    JOKERS = "jokers"

    def __str__(self) -> str:
        return self.value


# The jokers variant drops these deuces to keep the deck at 52 cards.
JOKER_VARIANT_REMOVED: frozenset[Card] = frozenset(
    {Card(Rank.TWO, Suit.CLUBS), Card(Rank.TWO, Suit.DIAMONDS)}
)

_RANKS_HIGH_FIRST = list(reversed(RANK_ORDER))
_RANK_BY_VALUE = {rank.value: rank for rank in RANK_ORDER}
_SUIT_BY_VALUE = {suit.value: suit for suit in STANDARD_SUITS}
_JOKER_BY_ID = {card_id: rank for rank, card_id in JOKER_IDS.items()}


def build_deck(variant: Variant = Variant.STANDARD) -> List[Card]:
    """Return the ordered 52-card deck for the variant."""
    variant = Variant(variant)
    cards = [Card(rank, suit) for suit in STANDARD_SUITS for rank in _RANKS_HIGH_FIRST]
    if variant is Variant.JOKERS:
        cards = [card for card in cards if card not in JOKER_VARIANT_REMOVED]
        cards.append(Card(Rank.BIG, Suit.JOKER))
        cards.append(Card(Rank.LITTLE, Suit.JOKER))
    return cards


_DECK_IDS: dict[Variant, frozenset[str]] = {
    variant: frozenset(card.id for card in build_deck(variant)) for variant in Variant
}


def shuffle(deck: Sequence[Card], rng: Optional[Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of the deck; the input is left untouched."""
    cards = list(deck)
    (rng or Random()).shuffle(cards)
    return cards


def deal_hands(
    *,
    variant: Variant = Variant.STANDARD,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
) -> List[List[Card]]:
    """Deal four 13-card hands, from the given deck order or a fresh shuffle."""
    variant = Variant(variant)
    if deck is not None:
        cards = list(deck)
        if len(set(cards)) != len(cards):
            raise ValueError("Deck must not contain duplicate cards.")
        foreign = [card.id for card in cards if card.id not in _DECK_IDS[variant]]
        if foreign:
            raise ValueError(f"Cards {foreign} do not belong to the {variant} deck.")
    else:
        cards = shuffle(build_deck(variant), rng)
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")

    return [cards[seat * HAND_SIZE : (seat + 1) * HAND_SIZE] for seat in range(NUM_SEATS)]


def parse_card(card_id: object, variant: Optional[Variant] = None) -> Optional[Card]:
    """Parse a wire identifier into a Card, or return None when it is not a valid card.

    With a variant, identifiers that are well formed but absent from that
    variant's deck (``"2C"`` under jokers, ``"BigJoker"`` under standard) are
    rejected too.
    """
    if not isinstance(card_id, str):
        return None

    if card_id in _JOKER_BY_ID:
        card = Card(_JOKER_BY_ID[card_id], Suit.JOKER)
    else:
        rank = _RANK_BY_VALUE.get(card_id[:-1])
        suit = _SUIT_BY_VALUE.get(card_id[-1:])
        if rank is None or suit is None:
            return None
        card = Card(rank, suit)

    if variant is not None and card.id not in _DECK_IDS[Variant(variant)]:
        return None
    return card
