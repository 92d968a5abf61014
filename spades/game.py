"""High-level game orchestration for a Spades match."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import List, Optional, Sequence, Tuple

from .actions import Action, Bid, Play
from .cards import Card, is_trump
from .deck import NUM_SEATS, Variant, deal_hands, parse_card
from .mechanics import legal_plays
from .observation import Observation, observe
from .rules_schema import GameConfig
from .scoring import MAX_BID, TRICKS_PER_HAND, TeamScoreResult, score_team
from .state import GameState, Phase, PlayerKind, PlayerState, next_seat
from .trick import Trick, TrickError

logger = logging.getLogger(__name__)


class EngineError(RuntimeError):
    """Raised when the engine is driven outside its state machine."""


class RejectionReason(Enum):
    WRONG_PHASE = "wrong_phase"
    NOT_YOUR_TURN = "not_your_turn"
    INVALID_BID = "invalid_bid"
    INVALID_CARD = "invalid_card"
    CARD_NOT_IN_HAND = "card_not_in_hand"
    ILLEGAL_PLAY = "illegal_play"


@dataclass(frozen=True)
class Rejection:
    reason: RejectionReason
    message: str


@dataclass(frozen=True)
class TeamHandResult:
    bid: int
    won: int
    points_earned: int
    bags_earned: int
    total_score: int
    total_bags: int
    contract_made: Optional[bool]
    nil_results: Tuple[Optional[bool], Optional[bool]]
    bag_penalties: int


@dataclass(frozen=True)
class HandResult:
    hand_number: int
    teams: Tuple[TeamHandResult, TeamHandResult]
    bids: Tuple[int, ...]
    tricks_won: Tuple[int, ...]


@dataclass
class GameEngine:
    """Own one match of Spades: dealing, bidding, trick play and scoring.

    Mutating calls never raise for bad agent input; they return a
    ``Rejection`` and leave the state untouched. A fourth play leaves the
    trick on the table until ``resolve_trick`` is called.
    """

    target_score: int = 500
    variant: Variant = Variant.STANDARD
    rng: Optional[Random] = None
    deck: Optional[Sequence[Card]] = None
    player_names: Optional[Sequence[str]] = None
    player_kinds: Optional[Sequence[PlayerKind]] = None

    state: GameState = field(init=False)
    last_hand_result: Optional[HandResult] = field(init=False, default=None)
    hand_history: List[HandResult] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        self.variant = Variant(self.variant)
        if self.target_score <= 0:
            raise ValueError("Target score must be a positive integer.")
        if self.rng is None:
            self.rng = Random()

        names = list(self.player_names or [f"Player {seat}" for seat in range(NUM_SEATS)])
        kinds = list(self.player_kinds or [PlayerKind.BOT] * NUM_SEATS)
        if len(names) != NUM_SEATS or len(kinds) != NUM_SEATS:
            raise ValueError(f"Exactly {NUM_SEATS} player names and kinds are required.")

        players = [
            PlayerState(seat=seat, name=names[seat], kind=PlayerKind(kinds[seat]))
            for seat in range(NUM_SEATS)
        ]
        self.state = GameState(target_score=self.target_score, variant=self.variant, players=players)
        self.deal_hand(self.deck)

    @classmethod
    def from_config(cls, config: GameConfig, *, rng: Optional[Random] = None) -> GameEngine:
        return cls(
            target_score=config.target_score,
            variant=Variant(config.variant),
            rng=rng,
            player_names=[player.display_name() for player in config.players],
            player_kinds=[PlayerKind(player.kind) for player in config.players],
        )

    # Dealing -----------------------------------------------------------

    def deal_hand(self, deck: Optional[Sequence[Card]] = None) -> None:
        """Deal a fresh hand; team scores and bags carry over."""
        hands = deal_hands(variant=self.variant, rng=self.rng, deck=deck)
        state = self.state
        for player, hand in zip(state.players, hands):
            player.reset_for_hand(hand)
        state.phase = Phase.BIDDING
        state.current_turn = next_seat(state.dealer)
        state.current_trick = Trick(number=1)
        state.trick_history = []
        state.trump_broken = False
        logger.info("Hand %d dealt by seat %d.", state.hand_number, state.dealer)

    # Actions -----------------------------------------------------------

    def submit(self, seat: int, action: Action) -> Optional[Rejection]:
        if isinstance(action, Bid):
            return self.process_bid(seat, action)
        if isinstance(action, Play):
            return self.process_play(seat, action)
        raise TypeError(f"Unsupported action {action!r}.")

    def process_bid(self, seat: int, action: Bid) -> Optional[Rejection]:
        state = self.state
        if state.phase is not Phase.BIDDING:
            return self._reject(seat, RejectionReason.WRONG_PHASE, "Not in bidding phase.")
        if seat != state.current_turn:
            return self._reject(seat, RejectionReason.NOT_YOUR_TURN, "Not your turn.")
        value = action.value
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_BID:
            return self._reject(seat, RejectionReason.INVALID_BID, f"Bid must be an integer in 0..{MAX_BID}.")

        state.players[seat].bid = value
        logger.debug("Seat %d bids %d.", seat, value)

        if state.all_bids_placed():
            state.phase = Phase.PLAYING
            state.current_turn = next_seat(state.dealer)
        else:
            state.current_turn = next_seat(seat)
        return None

    def process_play(self, seat: int, action: Play) -> Optional[Rejection]:
        state = self.state
        if state.phase is not Phase.PLAYING:
            return self._reject(seat, RejectionReason.WRONG_PHASE, "Not in playing phase.")
        if state.current_trick.is_full():
            return self._reject(seat, RejectionReason.WRONG_PHASE, "Trick is waiting to be resolved.")
        if seat != state.current_turn:
            return self._reject(seat, RejectionReason.NOT_YOUR_TURN, "Not your turn.")

        card = parse_card(action.card, self.variant)
        if card is None:
            return self._reject(seat, RejectionReason.INVALID_CARD, f"Invalid card {action.card!r}.")

        player = state.players[seat]
        if not player.holds(card):
            return self._reject(seat, RejectionReason.CARD_NOT_IN_HAND, f"{card} is not in your hand.")

        trick = state.current_trick
        if card not in legal_plays(player.hand, trick.led_suit, state.trump_broken):
            return self._reject(seat, RejectionReason.ILLEGAL_PLAY, f"{card} is not a legal play.")

        player.hand.remove(card)
        trick.add_play(seat, card)
        if is_trump(card):
            state.trump_broken = True
        logger.debug("Seat %d plays %s to trick %d.", seat, card, trick.number)

        if not trick.is_full():
            state.current_turn = next_seat(seat)
        return None

    def resolve_trick(self) -> int:
        """Settle the full trick on the table and return its winner."""
        state = self.state
        if state.phase is not Phase.PLAYING:
            raise EngineError(f"Cannot resolve a trick in phase {state.phase}.")
        trick = state.current_trick
        if not trick.is_full():
            raise TrickError(f"Cannot resolve a trick with {len(trick.plays)} plays.")

        winner = trick.resolve()
        state.players[winner].tricks_won += 1
        state.trick_history.append(trick)
        logger.debug("Trick %d won by seat %d.", trick.number, winner)

        if len(state.trick_history) == TRICKS_PER_HAND:
            self._score_hand()
        else:
            state.current_trick = Trick(number=len(state.trick_history) + 1)
            state.current_turn = winner
        return winner

    # Queries -----------------------------------------------------------

    def observation(self, seat: int) -> Observation:
        return observe(self.state, seat)

    def legal_plays_for(self, seat: int) -> List[Card]:
        state = self.state
        if state.phase is not Phase.PLAYING or seat != state.current_turn:
            return []
        if state.current_trick.is_full():
            return []
        return legal_plays(state.players[seat].hand, state.current_trick.led_suit, state.trump_broken)

    def is_trick_complete(self) -> bool:
        return self.state.current_trick.is_full()

    def is_over(self) -> bool:
        return self.state.phase is Phase.GAME_OVER

    def winner(self) -> Optional[int]:
        """Winning team index once the match is over, None on a tie or mid-match."""
        if not self.is_over():
            return None
        first, second = self.state.teams
        if first.score == second.score:
            return None
        return 0 if first.score > second.score else 1

    # Internals ---------------------------------------------------------

    def _score_hand(self) -> None:
        state = self.state
        team_results: List[TeamHandResult] = []
        for team in (0, 1):
            players = state.team_players(team)
            scored: TeamScoreResult = score_team(
                [player.bid for player in players],
                [player.tricks_won for player in players],
                state.teams[team],
            )
            state.teams[team] = scored.team
            team_results.append(
                TeamHandResult(
                    bid=state.team_bid(team),
                    won=state.team_tricks(team),
                    points_earned=scored.points_earned,
                    bags_earned=scored.bags_earned,
                    total_score=scored.team.score,
                    total_bags=scored.team.bags,
                    contract_made=scored.contract_made,
                    nil_results=scored.nil_results,
                    bag_penalties=scored.bag_penalties,
                )
            )

        result = HandResult(
            hand_number=state.hand_number,
            teams=(team_results[0], team_results[1]),
            bids=tuple(player.bid or 0 for player in state.players),
            tricks_won=tuple(player.tricks_won for player in state.players),
        )
        self.last_hand_result = result
        self.hand_history.append(result)
        logger.info(
            "Hand %d scored: %d-%d.",
            state.hand_number,
            state.teams[0].score,
            state.teams[1].score,
        )

        if any(team.score >= state.target_score for team in state.teams):
            state.phase = Phase.GAME_OVER
            logger.info("Game over after hand %d.", state.hand_number)
            return

        state.dealer = next_seat(state.dealer)
        state.hand_number += 1
        self.deal_hand()

    def _reject(self, seat: int, reason: RejectionReason, message: str) -> Rejection:
        logger.debug("Rejected action from seat %d: %s", seat, message)
        return Rejection(reason=reason, message=message)
