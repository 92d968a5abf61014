"""Match state for a four-seat Spades game."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .cards import Card
from .deck import NUM_SEATS, Variant
from .scoring import TeamState
from .trick import Trick

# Partnerships: team 0 holds seats 0 and 2, team 1 holds seats 1 and 3.
TEAM_SEATS: Tuple[Tuple[int, int], Tuple[int, int]] = ((0, 2), (1, 3))


class Phase(Enum):
    BIDDING = "bidding"
    PLAYING = "playing"
    GAME_OVER = "game_over"

    def __str__(self) -> str:
        return self.value


class PlayerKind(Enum):
    HUMAN = "human"
    BOT = "bot"


def next_seat(seat: int) -> int:
    return (seat + 1) % NUM_SEATS


def partner_of(seat: int) -> int:
    return (seat + 2) % NUM_SEATS


def team_of(seat: int) -> int:
    return seat % 2


@dataclass
class PlayerState:
    seat: int
    name: str
    kind: PlayerKind = PlayerKind.BOT
    hand: List[Card] = field(default_factory=list)
    bid: Optional[int] = None
    tricks_won: int = 0

    def reset_for_hand(self, hand: List[Card]) -> None:
        self.hand = list(hand)
        self.bid = None
        self.tricks_won = 0

    def holds(self, card: Card) -> bool:
        return card in self.hand


@dataclass
class GameState:
    target_score: int
    variant: Variant
    players: List[PlayerState]
    teams: List[TeamState] = field(default_factory=lambda: [TeamState(), TeamState()])
    phase: Phase = Phase.BIDDING
    dealer: int = 0
    current_turn: int = 1
    current_trick: Trick = field(default_factory=Trick)
    trick_history: List[Trick] = field(default_factory=list)
    trump_broken: bool = False
    hand_number: int = 1

    def __post_init__(self) -> None:
        if len(self.players) != NUM_SEATS:
            raise ValueError(f"GameState needs exactly {NUM_SEATS} players.")

    def team_players(self, team: int) -> Tuple[PlayerState, PlayerState]:
        first, second = TEAM_SEATS[team]
        return self.players[first], self.players[second]

    def team_bid(self, team: int) -> int:
        return sum(player.bid or 0 for player in self.team_players(team))

    def team_tricks(self, team: int) -> int:
        return sum(player.tricks_won for player in self.team_players(team))

    def all_bids_placed(self) -> bool:
        return all(player.bid is not None for player in self.players)

    def snapshot(self) -> GameState:
        """Return a detached deep copy for read-only consumers."""
        return copy.deepcopy(self)
