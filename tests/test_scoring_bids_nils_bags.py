import pytest

from spades.scoring import ScoringError, TeamState, score_team


def test_made_bid_scores_overtricks_as_bags():
    result = score_team([4, 4], [6, 4], TeamState())
    assert result.team == TeamState(score=82, bags=2)
    assert result.points_earned == 82
    assert result.bags_earned == 2
    assert result.contract_made is True


def test_nil_bonus_and_partner_contract_are_independent():
    result = score_team([0, 3], [0, 5], TeamState())
    assert result.team == TeamState(score=132, bags=2)
    assert result.nil_results == (True, None)


def test_failed_nil_tricks_do_not_count_for_partner():
    result = score_team([0, 4], [2, 3], TeamState(score=50))
    # -100 for the nil, -40 for the set partner.
    assert result.team == TeamState(score=-90, bags=0)
    assert result.nil_results == (False, None)
    assert result.contract_made is False


def test_double_nil_has_no_contract():
    result = score_team([0, 0], [0, 1], TeamState(score=10, bags=3))
    assert result.team == TeamState(score=10, bags=3)
    assert result.contract_made is None
    assert result.nil_results == (True, False)


def test_set_loses_ten_per_bid_trick_without_bags():
    result = score_team([5, 4], [3, 2], TeamState(score=100, bags=4))
    assert result.team == TeamState(score=10, bags=4)
    assert result.bags_earned == 0


def test_crossing_ten_bags_costs_one_hundred():
    result = score_team([2, 2], [4, 3], TeamState(score=200, bags=8))
    assert result.team == TeamState(score=200 + 40 + 3 - 100, bags=1)
    assert result.bags_earned == 3
    assert result.bag_penalties == 1


def test_penalty_repeats_until_bags_below_ten():
    result = score_team([1, 1], [1, 1], TeamState(score=0, bags=25))
    assert result.team == TeamState(score=20 - 200, bags=5)
    assert result.bag_penalties == 2


def test_scoring_is_deterministic():
    prior = TeamState(score=-30, bags=9)
    assert score_team([3, 2], [7, 1], prior) == score_team([3, 2], [7, 1], prior)
    assert 0 <= score_team([3, 2], [7, 1], prior).team.bags <= 9


def test_unset_bid_rejected():
    with pytest.raises(ScoringError):
        score_team([None, 3], [2, 3], TeamState())


def test_out_of_range_figures_rejected():
    with pytest.raises(ScoringError):
        score_team([14, 0], [0, 0], TeamState())
    with pytest.raises(ScoringError):
        score_team([1, 1], [14, 0], TeamState())
