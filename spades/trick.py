"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cards import TRUMP_SUIT, Card, Suit
from .mechanics import trick_winner

PLAYS_PER_TRICK = 4


class TrickError(RuntimeError):
    """Raised when trick play breaks ordering constraints."""


@dataclass
class Trick:
    number: int = 1
    plays: List[Tuple[int, Card]] = field(default_factory=list)
    led_suit: Optional[Suit] = None
    winner: Optional[int] = None

    def is_empty(self) -> bool:
        return not self.plays

    def is_full(self) -> bool:
        return len(self.plays) == PLAYS_PER_TRICK

    def add_play(self, seat: int, card: Card) -> None:
        if self.is_full():
            raise TrickError("Trick already complete.")
        if any(played_seat == seat for played_seat, _ in self.plays):
            raise TrickError(f"Seat {seat} already played to this trick.")
        if not self.plays:
            # A joker lead is a trump lead.
            self.led_suit = TRUMP_SUIT if card.suit is Suit.JOKER else card.suit
        self.plays.append((seat, card))

    def cards(self) -> List[Card]:
        return [card for _, card in self.plays]

    def resolve(self) -> int:
        """Record and return the winning seat of a full trick."""
        if not self.is_full():
            raise TrickError(f"Cannot resolve a trick with {len(self.plays)} plays.")
        assert self.led_suit is not None
        self.winner = trick_winner(self.plays, self.led_suit)
        return self.winner
