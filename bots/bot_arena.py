"""Bot arena and benchmark runner for Spades."""

from __future__ import annotations

import argparse
import logging
import uuid
from random import Random
from typing import Dict, Iterable, List, Optional, Sequence

from spades.deck import NUM_SEATS, Variant
from spades.game import GameEngine
from spades.rules_schema import BenchmarkConfig, GameConfig, PlayerConfig
from spades.state import TEAM_SEATS

from .base import BotStrategy
from .heuristic_bot import HeuristicBot
from .metrics import GameLog, HandLog, MetricsCalculator
from .random_bot import RandomBot
from .runner import GameRunner

logger = logging.getLogger(__name__)

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "random": RandomBot,
    "heuristic": HeuristicBot,
}


def make_bot(name: str, seed: Optional[int] = None) -> BotStrategy:
    if name == "random":
        return RandomBot(seed=seed)
    return BOT_REGISTRY[name]()


def build_agents(players: Sequence[PlayerConfig], *, seed: Optional[int] = None) -> List[Optional[BotStrategy]]:
    """One agent per seat; human seats get None."""
    agents: List[Optional[BotStrategy]] = []
    for player in players:
        if player.kind == "human":
            agents.append(None)
        else:
            agents.append(make_bot(player.agent, None if seed is None else seed + player.seat))
    return agents


def _team_label(agents: Sequence[Optional[BotStrategy]], team: int) -> str:
    return "/".join(agents[seat].name if agents[seat] else "Human" for seat in TEAM_SEATS[team])


def play_game(
    engine: GameEngine,
    agents: Sequence[Optional[BotStrategy]],
    *,
    max_hands: int = 200,
    game_id: Optional[str] = None,
) -> GameLog:
    """Play a bot-only match to completion and return its log."""
    if any(agent is None for agent in agents):
        raise ValueError("Arena games need an agent in every seat.")
    for agent in agents:
        agent.reset()

    runner = GameRunner(engine, agents)
    while not engine.is_over() and engine.state.hand_number <= max_hands:
        runner.step()
    if not engine.is_over():
        logger.warning("Match stopped after %d hands without reaching %d.", max_hands, engine.target_score)

    scores = engine.state.teams
    return GameLog(
        game_id=game_id or uuid.uuid4().hex,
        winner=engine.winner(),
        scores=(scores[0].score, scores[1].score),
        team_agents=(_team_label(agents, 0), _team_label(agents, 1)),
        hands=[HandLog.from_result(result) for result in engine.hand_history],
        actions=runner.actions,
        fallbacks=runner.fallbacks,
    )


def run_match(
    bot_a: BotStrategy,
    bot_b: BotStrategy,
    *,
    target_score: int = 500,
    variant: Variant = Variant.STANDARD,
    seed: Optional[int] = None,
    max_hands: int = 200,
) -> dict:
    """Seat ``bot_a`` at 0/2 and ``bot_b`` at 1/3 and play one match."""
    engine = GameEngine(target_score=target_score, variant=variant, rng=Random(seed))
    log = play_game(engine, [bot_a, bot_b, bot_a, bot_b], max_hands=max_hands)
    history = [
        {
            "hand": hand.hand_number,
            "score_change": hand.score_change,
            "bags_change": hand.bags_change,
        }
        for hand in log.hands
    ]
    return {"scores": list(log.scores), "winner": log.winner, "history": history}


def run_benchmark(config: BenchmarkConfig) -> List[GameLog]:
    """Play ``num_games`` matches, rotating agents one seat every ``seat_rotation_interval`` games."""
    rng = Random(config.random_seed)
    logs: List[GameLog] = []
    for index in range(config.num_games):
        shift = (index // config.seat_rotation_interval) % NUM_SEATS
        players = [
            config.game.players[(seat - shift) % NUM_SEATS].model_copy(update={"seat": seat})
            for seat in range(NUM_SEATS)
        ]
        game = GameConfig(target_score=config.game.target_score, variant=config.game.variant, players=players)
        seed = None if config.random_seed is None else config.random_seed + index * NUM_SEATS
        engine = GameEngine.from_config(game, rng=Random(rng.getrandbits(32)))
        log = play_game(engine, build_agents(game.players, seed=seed), max_hands=config.max_hands)
        logger.info("Game %d/%d finished: %s", index + 1, config.num_games, log.scores)
        logs.append(log)
    return logs


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a Spades bot benchmark.")
    parser.add_argument("--team-a", default="heuristic", choices=BOT_REGISTRY.keys(), help="Agent for seats 0 and 2.")
    parser.add_argument("--team-b", default="random", choices=BOT_REGISTRY.keys(), help="Agent for seats 1 and 3.")
    parser.add_argument("--games", type=int, default=10, help="Number of matches to play.")
    parser.add_argument("--target", type=int, default=500, help="Target score.")
    parser.add_argument("--variant", default="standard", choices=[variant.value for variant in Variant])
    parser.add_argument("--rotate", type=int, default=1, help="Games between seat rotations.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    players = [
        PlayerConfig(seat=seat, agent=args.team_a if seat % 2 == 0 else args.team_b)
        for seat in range(NUM_SEATS)
    ]
    config = BenchmarkConfig(
        game=GameConfig(target_score=args.target, variant=args.variant, players=players),
        num_games=args.games,
        seat_rotation_interval=args.rotate,
        random_seed=args.seed,
    )
    logs = run_benchmark(config)
    calculator = MetricsCalculator(logs)

    print(f"Played {len(logs)} games to {args.target}.")
    for name, value in {**calculator.primary_metrics(), **calculator.advanced_metrics()}.items():
        print(f"  {name}: {value:.3f}")
    for label, rate in calculator.win_rate_by_agent().items():
        print(f"  win rate {label}: {rate:.3f}")


if __name__ == "__main__":
    main()
