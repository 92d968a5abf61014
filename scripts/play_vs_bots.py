#!/usr/bin/env python3
"""Interactive CLI to play a full Spades match with a bot partner against two bots."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from random import Random
from typing import List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from bots.bot_arena import build_agents
from bots.runner import GameRunner
from spades.actions import Bid, Play
from spades.cards import card_label
from spades.deck import parse_card
from spades.game import GameEngine
from spades.rules_schema import GameConfig, PlayerConfig
from spades.state import GameState, Phase

HUMAN_SEAT = 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Spades from seat 0 against bots.")
    parser.add_argument("--target-score", type=int, default=250, help="Score required to win the match.")
    parser.add_argument("--variant", choices=["standard", "jokers"], default="standard")
    parser.add_argument("--opponent", choices=["random", "heuristic"], default="heuristic")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


def describe(card_id: str) -> str:
    card = parse_card(card_id)
    return card_label(card) if card else card_id


def print_trick(state: GameState) -> None:
    print(f"\nTrick {state.current_trick.number}:")
    for seat, card in state.current_trick.plays:
        who = "You" if seat == HUMAN_SEAT else state.players[seat].name
        print(f"  {who} -> {card_label(card)}")


def print_state(engine: GameEngine) -> None:
    obs = engine.observation(HUMAN_SEAT)
    print("\n============================")
    print(f"Hand {obs.hand_number}, phase: {obs.phase}")
    us, them = obs.scores
    print(f"Scores -> Us: {us.points} ({us.bags} bags), Them: {them.points} ({them.bags} bags)")
    if obs.bidding_context is not None:
        for entry in obs.bidding_context.bids_so_far:
            print(f"  Seat {entry.seat} bid {entry.bid}")
    if obs.playing_context is not None:
        context = obs.playing_context
        print(f"Bids: {[(b.seat, b.bid) for b in context.individual_bids]}, tricks: {context.individual_tricks_won}")
        for play in context.current_trick:
            print(f"  Seat {play.seat} -> {describe(play.card)}")
    print("Your hand: " + ", ".join(obs.hand))


def choose_bid() -> Bid:
    while True:
        choice = input("Your bid 0-13 (q to quit): ").strip()
        if choice.lower() == "q":
            raise KeyboardInterrupt
        if choice.isdigit():
            return Bid(value=int(choice))
        print("Please enter a number.")


def choose_play(legal: List[str]) -> Play:
    for index, card_id in enumerate(legal):
        print(f"[{index}] {describe(card_id)}")
    while True:
        choice = input("Select card (q to quit): ").strip()
        if choice.lower() == "q":
            raise KeyboardInterrupt
        if choice.isdigit() and 0 <= int(choice) < len(legal):
            return Play(card=legal[int(choice)])
        print("Invalid choice. Try again.")


def print_new_hand_results(engine: GameEngine, hands_seen: int) -> int:
    for result in engine.hand_history[hands_seen:]:
        print(f"\nHand {result.hand_number} complete.")
        for team, summary in zip(("Us", "Them"), result.teams):
            print(f"  {team}: bid {summary.bid}, won {summary.won}, {summary.points_earned:+d} points")
    return len(engine.hand_history)


def play_match(engine: GameEngine, runner: GameRunner) -> None:
    runner.run()
    hands_seen = 0
    while not engine.is_over():
        hands_seen = print_new_hand_results(engine, hands_seen)
        print_state(engine)
        if engine.state.phase is Phase.BIDDING:
            action = choose_bid()
        else:
            action = choose_play(engine.observation(HUMAN_SEAT).playing_context.legal_plays)
        rejection = runner.human_action(HUMAN_SEAT, action)
        if rejection is not None:
            print(f"Rejected: {rejection.message}")

    print_new_hand_results(engine, hands_seen)
    winner = engine.winner()
    print("\nMatch finished!")
    if winner is None:
        print("It's a tie.")
    elif winner == HUMAN_SEAT % 2:
        print("Congratulations, your team won the match!")
    else:
        print("The bots win this match.")


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper())
    players = [PlayerConfig(seat=HUMAN_SEAT, kind="human", name="You")] + [
        PlayerConfig(seat=seat, agent=args.opponent) for seat in range(1, 4)
    ]
    config = GameConfig(target_score=args.target_score, variant=args.variant, players=players)
    engine = GameEngine.from_config(config, rng=Random(args.seed))
    runner = GameRunner(engine, build_agents(config.players, seed=args.seed), on_trick=print_trick)
    try:
        play_match(engine, runner)
    except KeyboardInterrupt:
        print("\nExiting early.")


if __name__ == "__main__":
    main()
