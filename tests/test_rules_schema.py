import pytest
from pydantic import ValidationError

from spades.game import GameEngine
from spades.rules_schema import BenchmarkConfig, GameConfig, PlayerConfig
from spades.state import PlayerKind


def test_default_config():
    config = GameConfig()
    assert config.target_score == 500
    assert config.variant == "standard"
    assert [player.kind for player in config.players] == ["human", "bot", "bot", "bot"]


def test_players_sorted_by_seat():
    config = GameConfig(players=[PlayerConfig(seat=seat) for seat in (3, 1, 0, 2)])
    assert [player.seat for player in config.players] == [0, 1, 2, 3]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"target_score": 0},
        {"variant": "tarot"},
        {"players": [PlayerConfig(seat=0), PlayerConfig(seat=1), PlayerConfig(seat=2)]},
        {"players": [PlayerConfig(seat=seat) for seat in (0, 1, 1, 3)]},
    ],
)
def test_invalid_game_config(kwargs):
    with pytest.raises(ValidationError):
        GameConfig(**kwargs)


def test_invalid_player_and_benchmark_config():
    with pytest.raises(ValidationError):
        PlayerConfig(seat=4)
    with pytest.raises(ValidationError):
        BenchmarkConfig(num_games=0)


def test_engine_from_config():
    config = GameConfig(
        target_score=250,
        variant="jokers",
        players=[
            PlayerConfig(seat=0, kind="human", name="Ada"),
            PlayerConfig(seat=1),
            PlayerConfig(seat=2, name="Partner"),
            PlayerConfig(seat=3),
        ],
    )
    engine = GameEngine.from_config(config)
    assert engine.target_score == 250
    assert engine.variant.value == "jokers"
    assert [player.name for player in engine.state.players] == ["Ada", "Player 1", "Partner", "Player 3"]
    assert engine.state.players[0].kind is PlayerKind.HUMAN
    assert engine.state.players[1].kind is PlayerKind.BOT
