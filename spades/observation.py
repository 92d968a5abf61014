"""Seat-scoped observations handed to agents and UI consumers.

An observation only ever carries the requesting seat's own hand; every other
field is public table information.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Optional

from .deck import NUM_SEATS
from .mechanics import legal_plays
from .state import GameState, Phase, partner_of


@dataclass(frozen=True)
class TeamScoreView:
    points: int
    bags: int


@dataclass(frozen=True)
class SeatBidView:
    seat: int
    bid: int


@dataclass(frozen=True)
class TrickPlayView:
    seat: int
    card: str


@dataclass(frozen=True)
class TrickView:
    trick_number: int
    plays: List[TrickPlayView]
    winner: int
    led_suit: str


@dataclass(frozen=True)
class BiddingContext:
    bids_so_far: List[SeatBidView]
    your_turn_to_bid: bool


@dataclass(frozen=True)
class PlayingContext:
    team_bids: List[int]
    individual_bids: List[SeatBidView]
    tricks_won: List[int]
    individual_tricks_won: List[int]
    current_trick: List[TrickPlayView]
    trick_history: List[TrickView]
    spades_broken: bool
    your_turn_to_play: bool
    legal_plays: List[str]


@dataclass(frozen=True)
class Observation:
    phase: str
    seat: int
    partner_seat: int
    dealer: int
    hand_number: int
    target_score: int
    hand: List[str]
    scores: List[TeamScoreView]
    bidding_context: Optional[BiddingContext] = None
    playing_context: Optional[PlayingContext] = None

    def to_dict(self) -> dict:
        return asdict(self)


def observe(state: GameState, seat: int) -> Observation:
    """Project the game state onto what ``seat`` is allowed to see."""
    if not 0 <= seat < NUM_SEATS:
        raise ValueError(f"Seat must be in 0..{NUM_SEATS - 1}, got {seat}.")

    player = state.players[seat]
    bidding_context: Optional[BiddingContext] = None
    playing_context: Optional[PlayingContext] = None

    if state.phase is Phase.BIDDING:
        bidding_context = BiddingContext(
            bids_so_far=[
                SeatBidView(seat=p.seat, bid=p.bid) for p in state.players if p.bid is not None
            ],
            your_turn_to_bid=state.current_turn == seat,
        )
    else:
        trick = state.current_trick
        your_turn = (
            state.phase is Phase.PLAYING and state.current_turn == seat and not trick.is_full()
        )
        legal = legal_plays(player.hand, trick.led_suit, state.trump_broken) if your_turn else []
        playing_context = PlayingContext(
            team_bids=[state.team_bid(0), state.team_bid(1)],
            individual_bids=[
                SeatBidView(seat=p.seat, bid=p.bid) for p in state.players if p.bid is not None
            ],
            tricks_won=[state.team_tricks(0), state.team_tricks(1)],
            individual_tricks_won=[p.tricks_won for p in state.players],
            current_trick=[TrickPlayView(seat=s, card=c.id) for s, c in trick.plays],
            trick_history=[
                TrickView(
                    trick_number=done.number,
                    plays=[TrickPlayView(seat=s, card=c.id) for s, c in done.plays],
                    winner=done.winner,
                    led_suit=done.led_suit.value,
                )
                for done in state.trick_history
            ],
            spades_broken=state.trump_broken,
            your_turn_to_play=your_turn,
            legal_plays=[card.id for card in legal],
        )

    return Observation(
        phase=state.phase.value,
        seat=seat,
        partner_seat=partner_of(seat),
        dealer=state.dealer,
        hand_number=state.hand_number,
        target_score=state.target_score,
        hand=[card.id for card in player.hand],
        scores=[TeamScoreView(points=team.score, bags=team.bags) for team in state.teams],
        bidding_context=bidding_context,
        playing_context=playing_context,
    )
