"""In-memory benchmark records and summary metrics."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from spades.game import HandResult
from spades.scoring import TRICKS_PER_HAND
from spades.state import TEAM_SEATS


@dataclass(frozen=True)
class HandLog:
    hand_number: int
    bids: Tuple[int, ...]
    tricks_won: Tuple[int, ...]
    score_change: Tuple[int, int]
    bags_change: Tuple[int, int]

    @classmethod
    def from_result(cls, result: HandResult) -> HandLog:
        first, second = result.teams
        return cls(
            hand_number=result.hand_number,
            bids=tuple(result.bids),
            tricks_won=tuple(result.tricks_won),
            score_change=(first.points_earned, second.points_earned),
            bags_change=(first.bags_earned, second.bags_earned),
        )

    def team_bid(self, team: int) -> int:
        return sum(self.bids[seat] for seat in TEAM_SEATS[team])

    def team_contract_tricks(self, team: int) -> int:
        """Tricks taken by the team's non-nil bidders."""
        return sum(self.tricks_won[seat] for seat in TEAM_SEATS[team] if self.bids[seat] > 0)


@dataclass
class GameLog:
    game_id: str
    # None when the match ended level or was cut off.
    winner: Optional[int]
    scores: Tuple[int, int]
    team_agents: Tuple[str, str]
    hands: List[HandLog] = field(default_factory=list)
    actions: int = 0
    fallbacks: int = 0


class MetricsCalculator:
    def __init__(self, logs: Sequence[GameLog]) -> None:
        self.logs = list(logs)

    def primary_metrics(self) -> Dict[str, float]:
        total_games = len(self.logs)
        wins = [0, 0]
        margin = 0
        hands = 0
        bid_diff = 0

        for log in self.logs:
            if log.winner is not None:
                wins[log.winner] += 1
            margin += log.scores[0] - log.scores[1]
            for hand in log.hands:
                hands += 1
                bid_diff += sum(abs(won - bid) for bid, won in zip(hand.bids, hand.tricks_won))

        seats = hands * len(TEAM_SEATS) * 2
        return {
            "win_rate_team1": wins[0] / total_games if total_games else 0.0,
            "win_rate_team2": wins[1] / total_games if total_games else 0.0,
            "avg_score_margin": margin / total_games if total_games else 0.0,
            # 1 - mean(|tricks won - bid| / 13) over every seat of every hand.
            "bid_accuracy": 1 - (bid_diff / seats) / TRICKS_PER_HAND if seats else 0.0,
        }

    def advanced_metrics(self) -> Dict[str, float]:
        hands = 0
        sets = [0, 0]
        overtricks = [0, 0]
        tricks = [0, 0]
        nil_bids = 0
        nil_made = 0
        actions = 0
        fallbacks = 0

        for log in self.logs:
            actions += log.actions
            fallbacks += log.fallbacks
            for hand in log.hands:
                hands += 1
                for team in (0, 1):
                    bid = hand.team_bid(team)
                    won = hand.team_contract_tricks(team)
                    tricks[team] += sum(hand.tricks_won[seat] for seat in TEAM_SEATS[team])
                    if bid > 0 and won < bid:
                        sets[team] += 1
                    overtricks[team] += hand.bags_change[team]
                for bid, won in zip(hand.bids, hand.tricks_won):
                    if bid == 0:
                        nil_bids += 1
                        nil_made += won == 0

        def bag_efficiency(team: int) -> float:
            return 1 - overtricks[team] / tricks[team] if tricks[team] else 1.0

        return {
            "set_rate_team1": sets[0] / hands if hands else 0.0,
            "set_rate_team2": sets[1] / hands if hands else 0.0,
            "bag_efficiency_team1": bag_efficiency(0),
            "bag_efficiency_team2": bag_efficiency(1),
            "nil_success_rate": nil_made / nil_bids if nil_bids else 0.0,
            "error_rate": fallbacks / actions if actions else 0.0,
        }

    def win_rate_by_agent(self) -> Dict[str, float]:
        played: Dict[str, int] = defaultdict(int)
        won: Dict[str, int] = defaultdict(int)
        for log in self.logs:
            for team, label in enumerate(log.team_agents):
                played[label] += 1
                if log.winner == team:
                    won[label] += 1
        return {label: won[label] / played[label] for label in played}
