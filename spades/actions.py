"""Agent action values accepted by the game engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class Bid:
    value: int
    reasoning: str = field(default="", compare=False)


@dataclass(frozen=True)
class Play:
    card: str
    reasoning: str = field(default="", compare=False)


Action = Union[Bid, Play]


def coerce_bid(decision: Any) -> Bid:
    """Accept a ``Bid`` or a wire mapping like ``{"value": 3}``."""
    if isinstance(decision, Bid):
        return decision
    if isinstance(decision, Mapping) and "value" in decision:
        return Bid(value=decision["value"], reasoning=str(decision.get("reasoning", "")))
    raise ValueError(f"Expected a bid decision, got {decision!r}.")


def coerce_play(decision: Any) -> Play:
    """Accept a ``Play`` or a wire mapping like ``{"card": "AS"}``."""
    if isinstance(decision, Play):
        return decision
    if isinstance(decision, Mapping) and "card" in decision:
        return Play(card=decision["card"], reasoning=str(decision.get("reasoning", "")))
    raise ValueError(f"Expected a play decision, got {decision!r}.")
