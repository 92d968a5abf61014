"""Validation schema for Spades match and benchmark configuration."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .deck import NUM_SEATS

AGENT_NAMES = ("random", "heuristic")


class PlayerConfig(BaseModel):
    seat: int = Field(..., ge=0, lt=NUM_SEATS, description="Seat index; seats 0/2 and 1/3 are partners.")
    kind: Literal["human", "bot"] = Field("bot", description="Whether the seat is driven by a person.")
    name: Optional[str] = Field(None, description="Display name; defaults to 'Player <seat>'.")
    agent: Literal["random", "heuristic"] = Field(
        "heuristic",
        description="Built-in strategy used when the seat is a bot.",
    )

    def display_name(self) -> str:
        return self.name or f"Player {self.seat}"


def default_players() -> List[PlayerConfig]:
    return [
        PlayerConfig(seat=0, kind="human"),
        PlayerConfig(seat=1),
        PlayerConfig(seat=2),
        PlayerConfig(seat=3),
    ]


def bot_players(agent: str = "heuristic") -> List[PlayerConfig]:
    return [PlayerConfig(seat=seat, agent=agent) for seat in range(NUM_SEATS)]


class GameConfig(BaseModel):
    target_score: int = Field(500, gt=0, description="First team to reach this score ends the match.")
    variant: Literal["standard", "jokers"] = Field(
        "standard",
        description="Plain 52-card deck, or two jokers replacing the deuces of clubs and diamonds.",
    )
    players: List[PlayerConfig] = Field(default_factory=default_players)

    @field_validator("players")
    @classmethod
    def validate_seats(cls, value: List[PlayerConfig]) -> List[PlayerConfig]:
        seats = sorted(player.seat for player in value)
        if seats != list(range(NUM_SEATS)):
            raise ValueError(f"Players must occupy seats 0..{NUM_SEATS - 1} exactly once, got {seats}.")
        return sorted(value, key=lambda player: player.seat)


class BenchmarkConfig(BaseModel):
    game: GameConfig = Field(default_factory=lambda: GameConfig(players=bot_players()))
    num_games: int = Field(10, ge=1, description="Number of complete matches to play.")
    seat_rotation_interval: int = Field(
        1,
        ge=1,
        description="Shift every agent one seat to the left after this many games.",
    )
    random_seed: Optional[int] = Field(42, description="Seed for dealing and bot randomness.")
    max_hands: int = Field(200, ge=1, description="Abort a match that has not finished after this many hands.")
