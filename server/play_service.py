"""REST service to play 31 against the heuristic bot."""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import asdict
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from bots.heuristic import HeuristicBot
from bots.turn_driver import BotTurnDriver, TurnOutcome, no_pause
from engine.cards import serialize_card
from engine.config import TableConfig, load_config
from engine.errors import (
    EmptyDeckError,
    EmptyPileError,
    GameError,
    IllegalActionError,
    InvalidCardError,
    SessionError,
)
from engine.game import GameSession
from engine.logging_utils import setup_logging
from engine.service import RoundService

logger = logging.getLogger(__name__)

CONFIG_ENV = "THIRTYONE_CONFIG"


class StartRequest(BaseModel):
    seed: Optional[int] = None
    starting_player: Optional[int] = None


class ActionRequest(BaseModel):
    action: Literal["draw_deck", "draw_discard", "discard", "end_turn", "knock", "move"]
    card_index: Optional[int] = None
    to_index: Optional[int] = None


class TableSession:
    def __init__(self, config: TableConfig) -> None:
        self.config = config
        revealed = config.human_player if config.reveal_dealt_hand else None
        self.service = RoundService(GameSession(seed=config.seed, revealed_player=revealed))
        self.driver = BotTurnDriver(HeuristicBot(), config.bot_player, pacing=config.pacing, pause=no_pause)
        self.bot_turns: List[TurnOutcome] = []

    def start_round(self, starting_player: int) -> None:
        self.service.start_new_round(starting_player=starting_player)
        self.bot_turns = []
        self.run_bot()

    def run_bot(self) -> None:
        state = self.service.session.current_round
        while state is not None and not state.is_over() and state.active_player == self.driver.player:
            self.bot_turns.append(self.driver.take_turn(state))


sessions: Dict[str, TableSession] = {}
base_config = load_config(os.getenv(CONFIG_ENV))
setup_logging(base_config.log_level)

app = FastAPI(title="Thirty-One Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def describe_turn(outcome: TurnOutcome) -> Dict[str, object]:
    if outcome.knocked:
        return {"player": outcome.player, "knocked": True}
    return {
        "player": outcome.player,
        "knocked": False,
        "source": "discard" if outcome.drew_from_discard else "deck",
        # A card taken from the discard pile was face up, a deck card stays hidden.
        "drawn": serialize_card(outcome.drawn) if outcome.drew_from_discard and outcome.drawn else None,
        "discarded": serialize_card(outcome.discarded) if outcome.discarded else None,
    }


def serialize_state(table: TableSession) -> Dict[str, object]:
    view = table.service.get_session_view(table.config.human_player)
    return {
        "wins": view.wins,
        "draws": view.draws,
        "round": asdict(view.round) if view.round is not None else None,
        "botTurns": [describe_turn(outcome) for outcome in table.bot_turns],
    }


def ensure_session(session_id: str) -> TableSession:
    table = sessions.get(session_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return table


def error_status(exc: GameError) -> int:
    if isinstance(exc, InvalidCardError):
        return 400
    if isinstance(exc, (IllegalActionError, EmptyDeckError, EmptyPileError, SessionError)):
        return 409
    return 400


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    updates: Dict[str, object] = {}
    if request.seed is not None:
        updates["seed"] = request.seed
    if request.starting_player is not None:
        updates["starting_player"] = request.starting_player
    try:
        config = TableConfig.model_validate({**base_config.model_dump(), **updates})
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    table = TableSession(config)
    table.start_round(config.starting_player)
    session_id = uuid.uuid4().hex
    sessions[session_id] = table
    logger.info("Session %s started.", session_id)
    return {"session_id": session_id, "state": serialize_state(table)}


@app.get("/session/{session_id}")
def get_session(session_id: str) -> Dict[str, object]:
    return {"state": serialize_state(ensure_session(session_id))}


@app.post("/session/{session_id}/action")
def take_action(session_id: str, request: ActionRequest) -> Dict[str, object]:
    table = ensure_session(session_id)
    service = table.service
    player = table.config.human_player
    try:
        if request.action == "draw_deck":
            table.bot_turns = []
            service.draw_from_deck(player)
        elif request.action == "draw_discard":
            table.bot_turns = []
            service.draw_from_discard(player)
        elif request.action == "discard":
            if request.card_index is None:
                raise HTTPException(status_code=400, detail="card_index is required to discard")
            service.discard(player, request.card_index)
        elif request.action == "move":
            if request.card_index is None or request.to_index is None:
                raise HTTPException(status_code=400, detail="card_index and to_index are required to move")
            service.move_card(player, request.card_index, request.to_index)
        elif request.action == "knock":
            table.bot_turns = []
            service.knock(player)
        else:
            service.end_turn(player)
            table.run_bot()
    except GameError as exc:
        raise HTTPException(status_code=error_status(exc), detail=str(exc)) from exc
    return {"state": serialize_state(table)}


@app.post("/session/{session_id}/next-round")
def next_round(session_id: str) -> Dict[str, object]:
    table = ensure_session(session_id)
    state = table.service.session.current_round
    if state is not None and not state.is_over():
        raise HTTPException(status_code=409, detail="The current round has not ended")
    if state is not None:
        table.service.finish_round()
    rounds_played = len(table.service.session.round_history)
    table.start_round((table.config.starting_player + rounds_played) % 2)
    return {"state": serialize_state(table)}
