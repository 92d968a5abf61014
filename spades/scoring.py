"""Hand scoring for a Spades partnership: bids, nils and bags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

MAX_BID = 13
TRICKS_PER_HAND = 13
POINTS_PER_BID_TRICK = 10
NIL_BONUS = 100
BAG_LIMIT = 10
BAG_PENALTY = 100


class ScoringError(ValueError):
    """Raised when a hand cannot be scored from the supplied figures."""


@dataclass(frozen=True)
class TeamState:
    """Cumulative partnership standing carried across hands."""

    score: int = 0
    bags: int = 0


@dataclass(frozen=True)
class TeamScoreResult:
    team: TeamState
    points_earned: int
    bags_earned: int
    bag_penalties: int
    # None when both partners bid nil and there was no team contract.
    contract_made: Optional[bool]
    # Per partner: True made nil, False failed nil, None did not bid nil.
    nil_results: Tuple[Optional[bool], Optional[bool]]


def score_team(
    bids: Sequence[Optional[int]],
    tricks_won: Sequence[int],
    prior: TeamState,
) -> TeamScoreResult:
    """Score one partnership's hand and return its new standing.

    Nil bids are settled per player on that player's own tricks. The non-nil
    partners pool their bids and tricks into one contract: made scores ten per
    bid trick plus one per overtrick (each overtrick is also a bag), set loses
    ten per bid trick. Every ten accumulated bags cost 100 points.
    """
    if len(bids) != 2 or len(tricks_won) != 2:
        raise ScoringError("A partnership has exactly two players.")
    for bid in bids:
        if bid is None:
            raise ScoringError("Every bid must be placed before the hand is scored.")
        if not 0 <= bid <= MAX_BID:
            raise ScoringError(f"Bid {bid} is outside 0..{MAX_BID}.")
    for won in tricks_won:
        if not 0 <= won <= TRICKS_PER_HAND:
            raise ScoringError(f"Trick count {won} is outside 0..{TRICKS_PER_HAND}.")
    if prior.bags < 0:
        raise ScoringError("Bag count cannot be negative.")

    score = prior.score
    bags = prior.bags

    nil_results = []
    for bid, won in zip(bids, tricks_won):
        if bid == 0:
            made_nil = won == 0
            score += NIL_BONUS if made_nil else -NIL_BONUS
            nil_results.append(made_nil)
        else:
            nil_results.append(None)

    team_bid = sum(bid for bid in bids if bid)
    team_won = sum(won for bid, won in zip(bids, tricks_won) if bid)

    contract_made: Optional[bool] = None
    overtricks = 0
    if team_bid > 0:
        contract_made = team_won >= team_bid
        if contract_made:
            overtricks = team_won - team_bid
            score += team_bid * POINTS_PER_BID_TRICK + overtricks
            bags += overtricks
        else:
            score -= team_bid * POINTS_PER_BID_TRICK

    penalties = 0
    while bags >= BAG_LIMIT:
        score -= BAG_PENALTY
        bags -= BAG_LIMIT
        penalties += 1

    return TeamScoreResult(
        team=TeamState(score=score, bags=bags),
        points_earned=score - prior.score,
        bags_earned=overtricks,
        bag_penalties=penalties,
        contract_made=contract_made,
        nil_results=(nil_results[0], nil_results[1]),
    )
