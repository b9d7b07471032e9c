from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Dict, Mapping, Optional

from fortune.core.exceptions import GameNotFoundError
from fortune.core.game import Board, Player, create_game
from fortune.services import GameRunner, build_agents
from fortune.settings import get_engine_settings

logger = logging.getLogger(__name__)


class GameRegistry:
    """In-memory registry of running games."""

    def __init__(self):
        self._games: Dict[str, GameRunner] = {}
        self._lock = asyncio.Lock()

    async def create_game(
        self,
        *,
        num_players: int = 4,
        roles: Optional[list[str]] = None,
        seed: Optional[int] = None,
        max_rounds: Optional[int] = None,
        target_net_worth: Optional[int] = None,
        board: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Create a game and run its bot seats up to the first human decision.

        Raises:
            ConstructionError: the board definition is malformed
            ValueError: an unknown agent role was requested
        """
        game_id = uuid.uuid4().hex[:12]

        config = get_engine_settings().to_game_config(
            seed=seed, max_rounds=max_rounds, target_net_worth=target_net_worth
        )
        game_board = Board.from_dict(board) if board is not None else Board()
        players = [Player(i, name) for i, name in enumerate(self._default_names(num_players))]
        game = create_game(config, players, game_board)

        roles = roles or ["greedy"] * num_players
        runner = GameRunner(game_id, game, build_agents(game, roles))

        async with self._lock:
            self._games[game_id] = runner
        logger.info(f"Created game {game_id} with roles {roles}")

        runner.advance()
        return game_id

    async def require(self, game_id: str) -> GameRunner:
        runner = self._games.get(game_id)
        if runner is None:
            raise GameNotFoundError(f"Game {game_id} not found")
        return runner

    async def stop(self, game_id: str) -> bool:
        async with self._lock:
            runner = self._games.pop(game_id, None)
        if runner is None:
            return False
        logger.info(f"Removed game {game_id}")
        return True

    @staticmethod
    def _default_names(n: int) -> list[str]:
        base = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Hank"]
        if n <= len(base):
            return base[:n]
        # Extend if needed
        return base + [f"P{i}" for i in range(len(base), n)]
