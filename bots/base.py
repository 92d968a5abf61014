"""Common bot strategy interfaces."""

from __future__ import annotations

from spades.actions import Bid, Play
from spades.observation import Observation


class BotStrategy:
    """Base class for bot policies.

    Strategies only ever see their own seat's ``Observation``. ``bid`` and
    ``play`` may also be coroutine functions when driven by the asyncio
    runner.
    """

    name: str = "BaseBot"

    def reset(self) -> None:
        """Optional hook invoked before a new match starts."""
        return None

    def bid(self, observation: Observation) -> Bid:
        """Return the bid for this hand."""
        return Bid(value=1)

    def play(self, observation: Observation) -> Play:
        """Return one of the legal plays listed in the observation."""
        context = observation.playing_context
        if context is None or not context.legal_plays:
            raise RuntimeError("No legal plays available for bot.")
        return Play(card=context.legal_plays[0])
