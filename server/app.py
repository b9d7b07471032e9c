from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException

from fortune.core.exceptions import ConstructionError, GameNotFoundError
from fortune.services import GameRunner
from fortune.settings import get_engine_settings
from snapshot import leaderboard, serialize_snapshot

from .registry import GameRegistry
from .schemas import (
    ActionRequest,
    ActionResponse,
    AdvanceResponse,
    CreateGameRequest,
    CreateGameResponse,
    EventsResponse,
    LeaderboardEntry,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    settings = get_engine_settings()
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting Fortune Street server")

    yield

    logger.info("Shutting down Fortune Street server")


app = FastAPI(
    title="Fortune Street Server",
    version="0.1.0",
    lifespan=lifespan,
)
registry = GameRegistry()


async def _runner_or_404(game_id: str) -> GameRunner:
    try:
        return await registry.require(game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@app.post("/games", response_model=CreateGameResponse)
async def create_game(req: CreateGameRequest):
    try:
        gid = await registry.create_game(
            num_players=req.players,
            roles=req.roles,
            seed=req.seed,
            max_rounds=req.max_rounds,
            target_net_worth=req.target_net_worth,
            board=req.board,
        )
    except (ConstructionError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return CreateGameResponse(game_id=gid)


@app.get("/games/{game_id}/snapshot")
async def get_snapshot(game_id: str):
    runner = await _runner_or_404(game_id)
    return serialize_snapshot(runner.game)


@app.get("/games/{game_id}/status")
async def get_status(game_id: str):
    runner = await _runner_or_404(game_id)
    return runner.status()


@app.get("/games/{game_id}/pending")
async def get_pending(game_id: str):
    runner = await _runner_or_404(game_id)
    return {"game_id": game_id, "pending": runner.pending()}


@app.get("/games/{game_id}/legal_actions")
async def legal_actions(game_id: str, player_id: Optional[int] = None):
    runner = await _runner_or_404(game_id)
    return {"game_id": game_id, "player_id": player_id, "actions": runner.legal_actions(player_id)}


@app.post("/games/{game_id}/actions", response_model=ActionResponse)
async def apply_action(game_id: str, req: ActionRequest):
    runner = await _runner_or_404(game_id)
    ok, reason = runner.submit(req.action_type, req.params, req.player_id)
    if ok:
        runner.advance()
    return ActionResponse(accepted=ok, reason=reason, pending=runner.pending())


@app.post("/games/{game_id}/advance", response_model=AdvanceResponse)
async def advance(game_id: str):
    runner = await _runner_or_404(game_id)
    applied = runner.advance()
    return AdvanceResponse(
        game_id=game_id,
        actions_applied=applied,
        human_turn=runner.is_human_turn(),
        game_over=runner.game.game_over,
    )


@app.get("/games/{game_id}/events", response_model=EventsResponse)
async def get_events(game_id: str, since: int = 0):
    runner = await _runner_or_404(game_id)
    return EventsResponse(game_id=game_id, **runner.events_since(since))


@app.get("/games/{game_id}/leaderboard", response_model=List[LeaderboardEntry])
async def get_leaderboard(game_id: str):
    runner = await _runner_or_404(game_id)
    return leaderboard(runner.game)


@app.delete("/games/{game_id}")
async def delete_game(game_id: str):
    if not await registry.stop(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    return {"game_id": game_id, "deleted": True}


if __name__ == "__main__":
    # Convenience entrypoint for running directly: python -m server.app
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=True)
