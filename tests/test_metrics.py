import pytest

from bots.metrics import GameLog, HandLog, MetricsCalculator


def sample_logs():
    first = GameLog(
        game_id="a",
        winner=0,
        scores=(520, 310),
        team_agents=("Heuristic/Heuristic", "Random/Random"),
        hands=[
            HandLog(hand_number=1, bids=(3, 2, 3, 2), tricks_won=(4, 2, 3, 4), score_change=(61, 42), bags_change=(1, 2)),
            HandLog(hand_number=2, bids=(0, 4, 5, 4), tricks_won=(0, 2, 6, 5), score_change=(151, -80), bags_change=(1, 0)),
        ],
        actions=100,
        fallbacks=5,
    )
    second = GameLog(
        game_id="b",
        winner=1,
        scores=(200, 510),
        team_agents=("Random/Random", "Heuristic/Heuristic"),
        hands=[],
        actions=100,
        fallbacks=0,
    )
    return [first, second]


def test_primary_metrics():
    metrics = MetricsCalculator(sample_logs()).primary_metrics()
    assert metrics["win_rate_team1"] == 0.5
    assert metrics["win_rate_team2"] == 0.5
    assert metrics["avg_score_margin"] == pytest.approx(((520 - 310) + (200 - 510)) / 2)
    # Absolute misses: hand 1 -> 1+0+0+2, hand 2 -> 0+2+1+1.
    assert metrics["bid_accuracy"] == pytest.approx(1 - (7 / 8) / 13)


def test_advanced_metrics():
    metrics = MetricsCalculator(sample_logs()).advanced_metrics()
    assert metrics["set_rate_team1"] == 0.0
    assert metrics["set_rate_team2"] == 0.5
    assert metrics["bag_efficiency_team1"] == pytest.approx(1 - 2 / 13)
    assert metrics["nil_success_rate"] == 1.0
    assert metrics["error_rate"] == pytest.approx(5 / 200)


def test_win_rate_by_agent():
    rates = MetricsCalculator(sample_logs()).win_rate_by_agent()
    assert rates == {"Heuristic/Heuristic": 1.0, "Random/Random": 0.0}


def test_empty_logs():
    calculator = MetricsCalculator([])
    assert calculator.primary_metrics()["win_rate_team1"] == 0.0
    assert calculator.advanced_metrics()["error_rate"] == 0.0
