"""Convenience service layer for UI and HTTP consumers."""

from __future__ import annotations

from random import Random
from typing import Optional

from .actions import Bid, Play
from .game import GameEngine, HandResult, Rejection
from .observation import Observation
from .rules_schema import GameConfig
from .state import GameState


class ActionRejected(Exception):
    """Raised by the facade when the engine turns an action down."""

    def __init__(self, rejection: Rejection) -> None:
        super().__init__(rejection.message)
        self.rejection = rejection


class MatchService:
    """Facade around GameEngine that raises on rejected actions."""

    def __init__(self, engine: Optional[GameEngine] = None) -> None:
        self.engine = engine or GameEngine()

    # Match lifecycle ---------------------------------------------------

    def new_match(self, config: Optional[GameConfig] = None, *, rng: Optional[Random] = None) -> GameState:
        self.engine = GameEngine.from_config(config or GameConfig(), rng=rng)
        return self.snapshot()

    # Actions -----------------------------------------------------------

    def place_bid(self, seat: int, value: int, reasoning: str = "") -> Observation:
        self._check(self.engine.process_bid(seat, Bid(value=value, reasoning=reasoning)))
        return self.get_observation(seat)

    def play_card(self, seat: int, card_id: str, reasoning: str = "") -> Observation:
        self._check(self.engine.process_play(seat, Play(card=card_id, reasoning=reasoning)))
        return self.get_observation(seat)

    def resolve_trick(self) -> int:
        return self.engine.resolve_trick()

    # Views -------------------------------------------------------------

    def get_observation(self, seat: int) -> Observation:
        return self.engine.observation(seat)

    def last_hand_result(self) -> Optional[HandResult]:
        return self.engine.last_hand_result

    def snapshot(self) -> GameState:
        return self.engine.state.snapshot()

    # Helpers -----------------------------------------------------------

    def _check(self, rejection: Optional[Rejection]) -> None:
        if rejection is not None:
            raise ActionRejected(rejection)
