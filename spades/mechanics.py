"""Legal move generation and trick resolution for Spades."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .cards import TRUMP_SUIT, Card, Suit, beats, is_trump

Plays = Union[Sequence[Tuple[int, Card]], Mapping[int, Card]]


def legal_plays(hand: Iterable[Card], led_suit: Optional[Suit], trump_broken: bool) -> List[Card]:
    """Return the subset of the hand that may be played, in hand order.

    Leading: trump (spades or jokers) is held back until it has been broken,
    unless the hand holds nothing else. Following: a card of the led suit is
    required when held; jokers only count as following a trump lead. A void
    hand may play anything, so a non-empty hand always has a legal card.
    """
    cards = list(hand)
    if led_suit is None:
        if trump_broken or all(is_trump(card) for card in cards):
            return cards
        return [card for card in cards if not is_trump(card)]

    if led_suit is TRUMP_SUIT or led_suit is Suit.JOKER:
        following = [card for card in cards if is_trump(card)]
    else:
        following = [card for card in cards if card.suit is led_suit]

    return following or cards


def trick_winner(plays: Plays, led_suit: Suit) -> int:
    """Return the seat whose card wins the trick."""
    ordered = list(plays.items()) if isinstance(plays, Mapping) else list(plays)
    if not ordered:
        raise ValueError("Cannot determine the winner of an empty trick.")

    winning_seat, winning_card = ordered[0]
    for seat, card in ordered[1:]:
        if beats(card, winning_card, led_suit):
            winning_seat, winning_card = seat, card
    return winning_seat
