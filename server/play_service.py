"""REST service to play cribbage against the computer."""

from __future__ import annotations

import logging
import os
import uuid
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass
from random import Random
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from bots.autoplay import play_bot_turns
from bots.base import BotStrategy
from bots.heuristic import HeuristicBot
from cribbage.config import CribbageConfig, PacingConfig, load_config
from cribbage.errors import CribbageError, OutOfSequence
from cribbage.game import GameSession
from cribbage.logging_utils import setup_logging
from cribbage.service import MatchService, MatchView

logger = logging.getLogger(__name__)

HUMAN = 0
COMPUTER = 1


class StartRequest(BaseModel):
    seed: Optional[int] = None
    enable_thinking_delay: bool = False
    dealer: Optional[int] = Field(None, ge=0, le=1)


class DiscardRequest(BaseModel):
    indices: List[int]


class CardPayload(BaseModel):
    rank: str
    suit: str


class PlayRequest(BaseModel):
    card: CardPayload


@dataclass
class SessionState:
    service: MatchService
    bots: List[Optional[BotStrategy]]
    pacing: PacingConfig


sessions: Dict[str, SessionState] = {}
base_config: CribbageConfig = load_config(os.getenv("CRIBBAGE_CONFIG"))


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(base_config.logging.level)
    yield


app = FastAPI(title="Cribbage Play Service", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def ensure_session(session_id: str) -> SessionState:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def run_action(state: SessionState, action) -> Dict[str, object]:
    """Apply a human action, then let the computer respond."""
    try:
        action()
        play_bot_turns(state.service.session, state.bots, pacing=state.pacing)
    except OutOfSequence as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except CribbageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except (KeyError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Malformed request: {exc}") from exc
    return respond(state.service.get_view(HUMAN))


def respond(view: MatchView) -> Dict[str, object]:
    return {"state": asdict(view)}


def build_session(request: StartRequest) -> SessionState:
    config = base_config.model_copy(
        update={
            "seed": request.seed if request.seed is not None else base_config.seed,
            "pacing": base_config.pacing.model_copy(update={"enable_thinking_delay": request.enable_thinking_delay}),
        }
    )
    rng = Random(config.seed)
    session = GameSession(config=config, rng=rng)
    computer = HeuristicBot.from_config(config, rng=rng)
    bots: List[Optional[BotStrategy]] = [None, None]
    bots[COMPUTER] = computer
    return SessionState(service=MatchService(session), bots=bots, pacing=config.pacing)


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    state = build_session(request)
    session_id = uuid.uuid4().hex
    sessions[session_id] = state
    response = run_action(state, lambda: state.service.new_match(dealer=request.dealer))
    logger.info("Started session %s", session_id)
    return {"session_id": session_id, **response}


@app.get("/session/{session_id}")
def get_state(session_id: str) -> Dict[str, object]:
    state = ensure_session(session_id)
    return respond(state.service.get_view(HUMAN))


@app.post("/session/{session_id}/discard")
def discard(session_id: str, request: DiscardRequest) -> Dict[str, object]:
    state = ensure_session(session_id)
    return run_action(state, lambda: state.service.select_discard(HUMAN, request.indices))


@app.post("/session/{session_id}/cut")
def cut(session_id: str) -> Dict[str, object]:
    state = ensure_session(session_id)
    return run_action(state, lambda: state.service.cut_starter(HUMAN))


@app.post("/session/{session_id}/play")
def play(session_id: str, request: PlayRequest) -> Dict[str, object]:
    state = ensure_session(session_id)
    payload = request.card.model_dump()
    return run_action(state, lambda: state.service.play_peg_card(HUMAN, payload))


@app.post("/session/{session_id}/go")
def go(session_id: str) -> Dict[str, object]:
    state = ensure_session(session_id)
    return run_action(state, lambda: state.service.declare_go(HUMAN))


@app.post("/session/{session_id}/advance")
def advance(session_id: str) -> Dict[str, object]:
    state = ensure_session(session_id)
    before = state.service.session.round_number
    response = run_action(state, lambda: state.service.advance_scoring(HUMAN))
    response["state"]["new_round"] = state.service.session.round_number != before
    return response


@app.post("/session/{session_id}/reset")
def reset(session_id: str) -> Dict[str, object]:
    state = ensure_session(session_id)
    return run_action(state, lambda: state.service.new_match())
