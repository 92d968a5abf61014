"""Random baseline bot."""

from __future__ import annotations

import random
from typing import Optional

from spades.actions import Bid, Play
from spades.observation import Observation

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def bid(self, observation: Observation) -> Bid:
        value = self._rng.randint(1, 5)
        return Bid(value=value, reasoning="Random bid between 1 and 5.")

    def play(self, observation: Observation) -> Play:
        context = observation.playing_context
        if context is None or not context.legal_plays:
            raise RuntimeError("No legal plays available for bot.")
        return Play(card=self._rng.choice(context.legal_plays), reasoning="Random legal card.")
