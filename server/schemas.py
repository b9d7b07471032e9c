from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CreateGameRequest(BaseModel):
    players: int = Field(4, ge=2, le=8)
    roles: Optional[List[str]] = None  # e.g., ["human", "greedy", "random"]
    seed: Optional[int] = None
    max_rounds: Optional[int] = Field(default=None, ge=1)
    target_net_worth: Optional[int] = Field(default=None, gt=0)
    board: Optional[Dict[str, Any]] = None


class CreateGameResponse(BaseModel):
    game_id: str


class ActionRequest(BaseModel):
    player_id: Optional[int] = None
    action_type: str
    params: Dict[str, Any] = Field(default_factory=dict)


class ActionResponse(BaseModel):
    accepted: bool
    reason: Optional[str] = None
    pending: Optional[Dict[str, Any]] = None


class AdvanceResponse(BaseModel):
    game_id: str
    actions_applied: int
    human_turn: bool
    game_over: bool


class EventsResponse(BaseModel):
    game_id: str
    events: List[Dict[str, Any]]
    next_index: int


class LeaderboardEntry(BaseModel):
    rank: int
    player_id: int
    name: str
    net_worth: int
    is_bankrupt: bool
