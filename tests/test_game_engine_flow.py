from random import Random

import pytest

from spades.actions import Bid, Play
from spades.deck import Variant, build_deck, parse_card
from spades.game import EngineError, GameEngine
from spades.state import Phase
from spades.trick import TrickError


def bid_all(engine, bids):
    """Place bids in turn order; ``bids`` is keyed by seat."""
    for _ in range(4):
        seat = engine.state.current_turn
        assert engine.process_bid(seat, Bid(bids[seat])) is None


def play_first_legal(engine):
    seat = engine.state.current_turn
    card = engine.legal_plays_for(seat)[0]
    assert engine.process_play(seat, Play(card.id)) is None
    return seat, card


def play_trick(engine):
    for _ in range(4):
        play_first_legal(engine)
    return engine.resolve_trick()


def test_new_engine_starts_bidding_left_of_dealer():
    engine = GameEngine(deck=build_deck())
    assert engine.state.phase is Phase.BIDDING
    assert engine.state.dealer == 0
    assert engine.state.current_turn == 1
    assert engine.state.hand_number == 1
    assert all(len(player.hand) == 13 for player in engine.state.players)


def test_bidding_moves_to_play_after_four_bids():
    engine = GameEngine(deck=build_deck())
    engine.process_bid(1, Bid(3))
    assert engine.state.current_turn == 2
    engine.process_bid(2, Bid(2))
    engine.process_bid(3, Bid(1))
    assert engine.state.phase is Phase.BIDDING
    engine.process_bid(0, Bid(4))
    assert engine.state.phase is Phase.PLAYING
    assert engine.state.current_turn == 1


def test_fourth_play_waits_for_explicit_resolution():
    engine = GameEngine(deck=build_deck())
    bid_all(engine, {0: 4, 1: 3, 2: 2, 3: 1})
    for _ in range(4):
        play_first_legal(engine)

    assert engine.is_trick_complete()
    assert engine.state.trick_history == []
    assert [card.id for card in engine.state.current_trick.cards()] == ["AH", "AD", "AC", "AS"]

    winner = engine.resolve_trick()
    assert winner == 0
    assert engine.state.players[0].tricks_won == 1
    assert engine.state.current_turn == 0
    assert engine.state.current_trick.number == 2
    assert engine.state.trump_broken


def test_resolving_incomplete_trick_is_a_programming_error():
    engine = GameEngine(deck=build_deck())
    bid_all(engine, {0: 4, 1: 3, 2: 2, 3: 1})
    play_first_legal(engine)
    with pytest.raises(TrickError):
        engine.resolve_trick()


def test_full_hand_scores_and_deals_next_hand():
    engine = GameEngine(target_score=500, deck=build_deck())
    bid_all(engine, {0: 4, 1: 3, 2: 2, 3: 1})
    winners = [play_trick(engine) for _ in range(13)]

    assert winners == [0] * 13
    result = engine.last_hand_result
    assert result is not None
    assert result.hand_number == 1
    us, them = result.teams
    assert (us.bid, us.won, us.points_earned, us.bags_earned) == (6, 13, 67, 7)
    assert (them.bid, them.won, them.points_earned, them.bags_earned) == (4, 0, -40, 0)
    assert result.bids == (4, 3, 2, 1)
    assert result.tricks_won == (13, 0, 0, 0)

    state = engine.state
    assert state.teams[0].score == 67 and state.teams[0].bags == 7
    assert state.teams[1].score == -40
    assert state.phase is Phase.BIDDING
    assert state.dealer == 1
    assert state.current_turn == 2
    assert state.hand_number == 2
    assert state.trick_history == []
    assert not state.trump_broken
    assert all(player.bid is None and player.tricks_won == 0 for player in state.players)
    assert all(len(player.hand) == 13 for player in state.players)
    assert engine.hand_history == [result]


def test_reaching_target_ends_the_game():
    engine = GameEngine(target_score=50, deck=build_deck())
    bid_all(engine, {0: 4, 1: 3, 2: 2, 3: 1})
    for _ in range(13):
        play_trick(engine)

    assert engine.is_over()
    assert engine.state.phase is Phase.GAME_OVER
    assert engine.winner() == 0
    assert engine.state.hand_number == 1
    assert engine.process_bid(engine.state.current_turn, Bid(1)) is not None
    with pytest.raises(EngineError):
        engine.resolve_trick()


def test_joker_breaks_trump_and_wins():
    hands = [
        [f"{rank}S" for rank in "A K Q J 10 9 8 7 6 5 4 3 2".split()],
        ["LittleJoker"] + [f"{rank}H" for rank in "K Q J 10 9 8 7 6 5 4 3 2".split()],
        ["AH"] + [f"{rank}D" for rank in "A K Q J 10 9 8 7 6 5 4 3".split()],
        ["BigJoker"] + [f"{rank}C" for rank in "A K Q J 10 9 8 7 6 5 4 3".split()],
    ]
    deck = [parse_card(card_id, Variant.JOKERS) for hand in hands for card_id in hand]
    engine = GameEngine(variant=Variant.JOKERS, deck=deck)
    bid_all(engine, {0: 5, 1: 2, 2: 2, 3: 2})

    assert "LittleJoker" not in [card.id for card in engine.legal_plays_for(1)]
    assert engine.process_play(1, Play("KH")) is None
    assert [card.id for card in engine.legal_plays_for(2)] == ["AH"]
    assert engine.process_play(2, Play("AH")) is None
    assert engine.process_play(3, Play("BigJoker")) is None
    assert engine.state.trump_broken
    assert engine.process_play(0, Play("AS")) is None
    assert engine.resolve_trick() == 3


def test_seeded_engines_deal_identically():
    first = GameEngine(rng=Random(11))
    second = GameEngine(rng=Random(11))
    assert [p.hand for p in first.state.players] == [p.hand for p in second.state.players]


def test_invalid_construction():
    with pytest.raises(ValueError):
        GameEngine(target_score=0)
    with pytest.raises(ValueError):
        GameEngine(player_names=["a", "b"])
