"""Turn loop that drives a GameEngine with agents and human input."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from typing import Any, Callable, Optional, Sequence

from spades.actions import Action, Bid, Play, coerce_bid, coerce_play
from spades.cards import card_strength
from spades.deck import NUM_SEATS
from spades.game import EngineError, GameEngine, Rejection
from spades.state import GameState, Phase

from .base import BotStrategy

logger = logging.getLogger(__name__)

# Minimum non-nil bid, used when an agent fails to produce a valid bid.
FALLBACK_BID = 1

StateCallback = Callable[[GameState], None]
TrickCallback = Callable[[GameState], None]


class GameRunner:
    """Alternate between the agent holding the turn and the engine.

    A seat without an agent is a human seat: the loop stops there until
    ``human_action`` supplies a move. Bad or crashing agent decisions are
    logged and replaced by a deterministic fallback so a match cannot stall.
    ``delay`` seconds are waited before every agent decision in both loops.
    Async agents must be driven through ``arun`` and ``ahuman_action``.
    """

    def __init__(
        self,
        engine: GameEngine,
        agents: Sequence[Optional[BotStrategy]],
        *,
        on_state_change: Optional[StateCallback] = None,
        on_trick: Optional[TrickCallback] = None,
        delay: float = 0.0,
    ) -> None:
        if len(agents) != NUM_SEATS:
            raise ValueError(f"Exactly {NUM_SEATS} agent slots are required.")
        self.engine = engine
        self.agents = list(agents)
        self.on_state_change = on_state_change
        self.on_trick = on_trick
        self.delay = delay
        self.actions = 0
        self.fallbacks = 0

    # Loop --------------------------------------------------------------

    def waiting_for_human(self) -> bool:
        state = self.engine.state
        if state.phase is Phase.GAME_OVER or self.engine.is_trick_complete():
            return False
        return self.agents[state.current_turn] is None

    def step(self) -> bool:
        """Advance by one action or trick resolution; False when nothing can move."""
        if self.engine.is_over():
            return False
        if self.engine.is_trick_complete():
            self._resolve()
            return True

        seat = self.engine.state.current_turn
        agent = self.agents[seat]
        if agent is None:
            return False

        if self.delay:
            time.sleep(self.delay)

        observation = self.engine.observation(seat)
        if self.engine.state.phase is Phase.BIDDING:
            decision = self._decide(agent.bid, observation, seat)
            self._apply_bid(seat, decision)
        else:
            decision = self._decide(agent.play, observation, seat)
            self._apply_play(seat, decision)
        self._notify()
        return True

    def run(self, max_steps: Optional[int] = None) -> GameState:
        steps = 0
        while max_steps is None or steps < max_steps:
            if not self.step():
                break
            steps += 1
        return self.engine.state

    async def arun(self, *, timeout: Optional[float] = None) -> GameState:
        """Cooperative variant: awaits async agents, falling back after ``timeout`` seconds."""
        while not self.engine.is_over():
            if self.engine.is_trick_complete():
                self._resolve()
                continue

            seat = self.engine.state.current_turn
            agent = self.agents[seat]
            if agent is None:
                break

            if self.delay:
                await asyncio.sleep(self.delay)

            observation = self.engine.observation(seat)
            if self.engine.state.phase is Phase.BIDDING:
                decision = await self._adecide(agent.bid, observation, seat, timeout)
                self._apply_bid(seat, decision)
            else:
                decision = await self._adecide(agent.play, observation, seat, timeout)
                self._apply_play(seat, decision)
            self._notify()
        return self.engine.state

    def human_action(self, seat: int, action: Action) -> Optional[Rejection]:
        """Apply a human move, then let the bots play until input is needed again."""
        rejection = self._submit_human(seat, action)
        if rejection is None:
            self.run()
        return rejection

    async def ahuman_action(
        self, seat: int, action: Action, *, timeout: Optional[float] = None
    ) -> Optional[Rejection]:
        """Async counterpart of ``human_action`` that resumes through ``arun``."""
        rejection = self._submit_human(seat, action)
        if rejection is None:
            await self.arun(timeout=timeout)
        return rejection

    # Decisions ---------------------------------------------------------

    def _decide(self, method: Callable[..., Any], observation, seat: int) -> Any:
        try:
            result = method(observation)
        except Exception:
            logger.exception("Agent at seat %d crashed.", seat)
            return None
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            logger.warning("Agent at seat %d returned an awaitable; use arun() for async agents.", seat)
            return None
        return result

    async def _adecide(
        self,
        method: Callable[..., Any],
        observation,
        seat: int,
        timeout: Optional[float],
    ) -> Any:
        try:
            result = method(observation)
            if inspect.isawaitable(result):
                result = await asyncio.wait_for(result, timeout)
        except asyncio.TimeoutError:
            logger.warning("Agent at seat %d timed out after %ss.", seat, timeout)
            return None
        except Exception:
            logger.exception("Agent at seat %d crashed.", seat)
            return None
        return result

    def _apply_bid(self, seat: int, decision: Any) -> None:
        self.actions += 1
        rejection: Optional[Rejection] = None
        if decision is not None:
            try:
                rejection = self.engine.process_bid(seat, coerce_bid(decision))
            except ValueError as exc:
                logger.warning("Agent at seat %d produced a malformed bid: %s", seat, exc)
            else:
                if rejection is None:
                    return

        reason = rejection.message if rejection is not None else "no usable decision"
        logger.warning("Seat %d bid rejected (%s); falling back to %d.", seat, reason, FALLBACK_BID)
        self.fallbacks += 1
        self._require(self.engine.process_bid(seat, Bid(value=FALLBACK_BID, reasoning="Fallback")))

    def _apply_play(self, seat: int, decision: Any) -> None:
        self.actions += 1
        rejection: Optional[Rejection] = None
        if decision is not None:
            try:
                rejection = self.engine.process_play(seat, coerce_play(decision))
            except ValueError as exc:
                logger.warning("Agent at seat %d produced a malformed play: %s", seat, exc)
            else:
                if rejection is None:
                    return

        legal = self.engine.legal_plays_for(seat)
        fallback = min(legal, key=card_strength)
        reason = rejection.message if rejection is not None else "no usable decision"
        logger.warning("Seat %d play rejected (%s); falling back to %s.", seat, reason, fallback)
        self.fallbacks += 1
        self._require(self.engine.process_play(seat, Play(card=fallback.id, reasoning="Fallback")))

    # Helpers -----------------------------------------------------------

    def _submit_human(self, seat: int, action: Action) -> Optional[Rejection]:
        rejection = self.engine.submit(seat, action)
        if rejection is not None:
            logger.info("Human action from seat %d rejected: %s", seat, rejection.message)
            return rejection
        self._notify()
        return None

    def _resolve(self) -> None:
        if self.on_trick is not None:
            self.on_trick(self.engine.state)
        self.engine.resolve_trick()
        self._notify()

    def _notify(self) -> None:
        if self.on_state_change is not None:
            self.on_state_change(self.engine.state)

    @staticmethod
    def _require(rejection: Optional[Rejection]) -> None:
        if rejection is not None:
            raise EngineError(f"Fallback action rejected: {rejection.message}")
