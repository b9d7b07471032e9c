"""Random agent that makes random accept/decline decisions."""

import random
from typing import List, Optional

from fortune.core.game.game import GameState
from fortune.core.game.rules import Action, ActionType

from fortune.core.agents.base import Agent

# Stock trades are outside a bot's binary decisions
_SHARE_ACTIONS = (ActionType.BUY_SHARES, ActionType.SELL_SHARES)


class RandomAgent(Agent):
    """
    Simple AI that flips a coin on every purchase offer.

    Every other decision has a single forced answer (roll, pay, draw,
    leave the bank), which the agent always takes.
    """

    def __init__(self, player_id: int, name: str, seed: Optional[int] = None):
        """
        Initialize the random agent.

        Args:
            player_id: The player's index in the game.
            name: The player's display name.
            seed: Seed for the agent's own coin; defaults to the player id.
        """
        super().__init__(player_id, name)
        self.rng = random.Random(player_id if seed is None else seed)

    def choose_action(self, game: GameState, legal_actions: List[Action]) -> Action:
        """
        Choose a random answer to the pending decision.

        Args:
            game: The current game state.
            legal_actions: List of legal actions available to the player.

        Returns:
            The chosen action to execute.
        """
        candidates = [a for a in legal_actions if a.action_type not in _SHARE_ACTIONS]
        if not candidates:
            candidates = legal_actions
        return self.rng.choice(candidates)
