"""Greedy agent that buys shops whenever it can keep a cash reserve."""

from typing import List

from fortune.core.game.game import GameState
from fortune.core.game.rules import Action, ActionType

from fortune.core.agents.base import Agent


class GreedyAgent(Agent):
    """
    Simple AI that accepts purchase offers unless they eat into its reserve.

    Declines a shop when its price is more than `max_price_ratio` of the
    agent's cash. All other decisions take the single forced answer.
    """

    def __init__(self, player_id: int, name: str, max_price_ratio: float = 0.5):
        """
        Initialize the greedy agent.

        Args:
            player_id: The player's index in the game.
            name: The player's display name.
            max_price_ratio: Largest share of cash the agent spends on one shop.
        """
        super().__init__(player_id, name)
        self.max_price_ratio = max_price_ratio

    def choose_action(self, game: GameState, legal_actions: List[Action]) -> Action:
        """
        Choose action with a simple greedy strategy.

        Priority order:
        1. Buy the offered shop if affordable within the reserve
        2. Roll, pay, draw, or leave the bank
        3. Decline

        Args:
            game: The current game state.
            legal_actions: List of legal actions available to the player.

        Returns:
            The chosen action to execute.
        """
        player = game.players[self.player_id]
        by_type = {a.action_type: a for a in legal_actions}

        buy_action = by_type.get(ActionType.BUY_SHOP)
        if buy_action is not None:
            offer = game.pending
            if player.cash > 0 and offer.price / player.cash <= self.max_price_ratio:
                return buy_action

        priority = [
            ActionType.ROLL_DICE,
            ActionType.PAY_FEE,
            ActionType.DRAW_CHANCE,
            ActionType.LEAVE_BANK,
            ActionType.DECLINE_SHOP,
        ]
        for action_type in priority:
            if action_type in by_type:
                return by_type[action_type]

        return legal_actions[0]
