"""
GameRunner drives one game: bots answer their own decisions, humans
submit theirs through `submit`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from events.mapper import map_events
from fortune.core.agents import Agent, GreedyAgent, RandomAgent
from fortune.core.exceptions import FortuneError
from fortune.core.game.game import GameState
from fortune.core.game.rules import apply_action, get_legal_actions, parse_action

logger = logging.getLogger(__name__)

AGENT_ROLES = ("human", "greedy", "random")


def build_agents(game: GameState, roles: Sequence[str]) -> List[Optional[Agent]]:
    """One agent per player; None marks a human seat."""
    agents: List[Optional[Agent]] = []
    for player_id in sorted(game.players):
        role = roles[player_id] if player_id < len(roles) else "greedy"
        name = game.players[player_id].name
        if role not in AGENT_ROLES:
            raise ValueError(f"Unknown agent role {role!r}, expected one of {AGENT_ROLES}")
        if role == "human":
            agents.append(None)
        elif role == "random":
            agents.append(RandomAgent(player_id, name))
        else:
            agents.append(GreedyAgent(player_id, name))
    return agents


class GameRunner:
    """Owns a single GameState and advances it one decision at a time.

    Responsibilities:
    - Let bot seats answer pending decisions
    - Accept and validate decisions for human seats
    - Expose mapped events for subscribers
    """

    def __init__(self, game_id: str, game: GameState, agents: List[Optional[Agent]]):
        self.game_id = game_id
        self.game = game
        self.agents = agents

    def is_human_turn(self) -> bool:
        if self.game.game_over:
            return False
        return self.agents[self.game.get_current_player().player_id] is None

    def legal_actions(self, player_id: Optional[int] = None) -> List[Dict[str, Any]]:
        if player_id is None:
            player_id = self.game.get_current_player().player_id
        return [a.to_dict() for a in get_legal_actions(self.game, player_id)]

    def pending(self) -> Optional[Dict[str, Any]]:
        if self.game.game_over or self.game.pending is None:
            return None
        return self.game.pending.to_dict()

    def submit(
        self, action_type: str, params: Optional[Dict[str, Any]] = None, player_id: Optional[int] = None
    ) -> Tuple[bool, Optional[str]]:
        """Apply one decision. Returns (accepted, reason)."""
        action = parse_action(action_type, params)
        if action is None:
            return False, f"Unknown action {action_type!r} or unexpected params {sorted(params or {})}"
        if player_id is None:
            player_id = self.game.get_current_player().player_id
        if player_id not in self.game.players:
            return False, f"Unknown player {player_id}"
        if self.agents[player_id] is not None:
            return False, f"Player {player_id} is controlled by a bot"

        try:
            ok = apply_action(self.game, action, player_id)
        except (FortuneError, ValueError) as exc:
            logger.info(f"Game {self.game_id}: {action!r} failed: {exc}")
            return False, str(exc)

        if not ok:
            return False, "Action not allowed for this player or turn phase"
        return True, None

    def step_bot(self) -> bool:
        """Let the current bot answer one decision. Returns False on a human seat or game end."""
        if self.game.game_over or self.is_human_turn():
            return False
        player_id = self.game.get_current_player().player_id
        legal = get_legal_actions(self.game, player_id)
        if not legal:
            return False
        action = self.agents[player_id].choose_action(self.game, legal)
        return apply_action(self.game, action, player_id)

    def advance(self, max_actions: int = 10000) -> int:
        """Run bot decisions until a human must answer or the game ends.

        Returns the number of actions applied.
        """
        applied = 0
        while applied < max_actions and self.step_bot():
            applied += 1
        if applied >= max_actions:
            logger.warning(f"Game {self.game_id}: stopped after {max_actions} bot actions")
        return applied

    def events_since(self, index: int = 0) -> Dict[str, Any]:
        events = self.game.event_log.events_since(index)
        start = max(index, 0)
        return {
            "events": map_events(self.game.board, events, start=start),
            "next_index": start + len(events),
        }

    def status(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "turn_number": self.game.turn_number,
            "round_number": self.game.round_number,
            "phase": self.game.phase.value,
            "game_over": self.game.game_over,
            "winner": self.game.winner,
            "human_turn": self.is_human_turn(),
        }
