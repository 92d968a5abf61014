"""REST service to play Spades from one seat against bots."""

from __future__ import annotations

import uuid
from random import Random
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from bots.bot_arena import build_agents
from bots.runner import GameRunner
from spades.actions import Bid, Play
from spades.deck import NUM_SEATS
from spades.game import GameEngine, HandResult, Rejection
from spades.rules_schema import GameConfig, PlayerConfig


class StartRequest(BaseModel):
    target_score: int = Field(500, gt=0)
    variant: Literal["standard", "jokers"] = "standard"
    human_seat: int = Field(0, ge=0, lt=NUM_SEATS)
    human_name: str = "You"
    opponent: Literal["random", "heuristic"] = "heuristic"
    seed: Optional[int] = None


class BidRequest(BaseModel):
    value: int
    reasoning: str = ""


class PlayRequest(BaseModel):
    card: str
    reasoning: str = ""


class SessionState:
    def __init__(self, engine: GameEngine, runner: GameRunner, human_seat: int) -> None:
        self.engine = engine
        self.runner = runner
        self.human_seat = human_seat


sessions: Dict[str, SessionState] = {}


app = FastAPI(title="Spades Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def serialize_hand_result(result: Optional[HandResult]) -> Optional[Dict[str, object]]:
    if result is None:
        return None
    return {
        "handNumber": result.hand_number,
        "teams": [
            {
                "bid": team.bid,
                "won": team.won,
                "pointsEarned": team.points_earned,
                "bagsEarned": team.bags_earned,
                "totalScore": team.total_score,
                "totalBags": team.total_bags,
            }
            for team in result.teams
        ],
    }


def serialize_state(session: SessionState) -> Dict[str, object]:
    engine = session.engine
    players: List[Dict[str, object]] = [
        {"seat": player.seat, "name": player.name, "kind": player.kind.value}
        for player in engine.state.players
    ]
    return {
        "observation": engine.observation(session.human_seat).to_dict(),
        "players": players,
        "currentTurn": engine.state.current_turn,
        "lastHandResult": serialize_hand_result(engine.last_hand_result),
        "matchComplete": engine.is_over(),
        "winner": engine.winner(),
    }


def ensure_session(session_id: str) -> SessionState:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def reject(rejection: Rejection) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"reason": rejection.reason.value, "message": rejection.message},
    )


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    players = [
        PlayerConfig(seat=seat, kind="human", name=request.human_name)
        if seat == request.human_seat
        else PlayerConfig(seat=seat, agent=request.opponent)
        for seat in range(NUM_SEATS)
    ]
    config = GameConfig(target_score=request.target_score, variant=request.variant, players=players)
    engine = GameEngine.from_config(config, rng=Random(request.seed))
    runner = GameRunner(engine, build_agents(config.players, seed=request.seed))
    runner.run()

    session = SessionState(engine=engine, runner=runner, human_seat=request.human_seat)
    session_id = uuid.uuid4().hex
    sessions[session_id] = session
    return {"session_id": session_id, "state": serialize_state(session)}


@app.get("/session/{session_id}")
def get_state(session_id: str) -> Dict[str, object]:
    return {"state": serialize_state(ensure_session(session_id))}


@app.post("/session/{session_id}/bid")
def place_bid(session_id: str, request: BidRequest) -> Dict[str, object]:
    session = ensure_session(session_id)
    rejection = session.runner.human_action(
        session.human_seat, Bid(value=request.value, reasoning=request.reasoning)
    )
    if rejection is not None:
        raise reject(rejection)
    return {"state": serialize_state(session)}


@app.post("/session/{session_id}/play")
def play_card(session_id: str, request: PlayRequest) -> Dict[str, object]:
    session = ensure_session(session_id)
    rejection = session.runner.human_action(
        session.human_seat, Play(card=request.card, reasoning=request.reasoning)
    )
    if rejection is not None:
        raise reject(rejection)
    return {"state": serialize_state(session)}


@app.delete("/session/{session_id}")
def end_session(session_id: str) -> Dict[str, object]:
    ensure_session(session_id)
    del sessions[session_id]
    return {"ended": session_id}
