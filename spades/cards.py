"""Card-related data structures and helpers for Spades."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Suit(Enum):
    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"
    JOKER = "J"

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"
    LITTLE = "Little"
    BIG = "Big"

    def __str__(self) -> str:
        return self.name.lower()


TRUMP_SUIT = Suit.SPADES

# Suits that hold ordinary ranked cards, in deck order.
STANDARD_SUITS: tuple[Suit, ...] = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)

# Rank order from lowest to highest for ordinary cards.
RANK_ORDER: list[Rank] = [
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
    Rank.TEN,
    Rank.JACK,
    Rank.QUEEN,
    Rank.KING,
    Rank.ACE,
]

JOKER_RANKS: tuple[Rank, ...] = (Rank.LITTLE, Rank.BIG)

# Jokers sit above the Ace; Big outranks Little.
RANK_VALUE: dict[Rank, int] = {rank: index + 2 for index, rank in enumerate(RANK_ORDER)}
RANK_VALUE[Rank.LITTLE] = 15
RANK_VALUE[Rank.BIG] = 16

JOKER_IDS: dict[Rank, str] = {
    Rank.BIG: "BigJoker",
    Rank.LITTLE: "LittleJoker",
}


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if (self.suit is Suit.JOKER) != (self.rank in JOKER_RANKS):
            raise ValueError(f"{self.rank} cannot be combined with suit {self.suit}.")

    @property
    def id(self) -> str:
        """Wire identifier, e.g. ``"AS"``, ``"10H"`` or ``"BigJoker"``."""
        if self.suit is Suit.JOKER:
            return JOKER_IDS[self.rank]
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return self.id


def card_value(rank: Rank, suit: Suit) -> int:
    """Return the total-order value used for every "higher card wins" comparison."""
    if (suit is Suit.JOKER) != (rank in JOKER_RANKS):
        raise ValueError(f"{rank} cannot be combined with suit {suit}.")
    return RANK_VALUE[rank]


def card_strength(card: Card) -> int:
    return card_value(card.rank, card.suit)


def is_trump(card: Card) -> bool:
    """Spades and both jokers are trump."""
    return card.suit is TRUMP_SUIT or card.suit is Suit.JOKER


def beats(candidate: Card, current: Card, led_suit: Optional[Suit]) -> bool:
    """Return True if candidate strictly outranks current within the trick context."""
    if candidate == current:
        return False

    candidate_trump = is_trump(candidate)
    current_trump = is_trump(current)

    if candidate_trump and not current_trump:
        return True
    if current_trump and not candidate_trump:
        return False
    if candidate_trump and current_trump:
        return card_strength(candidate) > card_strength(current)

    if candidate.suit is current.suit:
        return card_strength(candidate) > card_strength(current)

    # An off-suit discard never takes over from a card of the led suit.
    return candidate.suit is led_suit and current.suit is not led_suit


def card_label(card: Card) -> str:
    if card.suit is Suit.JOKER:
        return f"{card.rank.name.title()} Joker"
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
