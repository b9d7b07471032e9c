"""Base class for Fortune Street bots."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from fortune.core.game.game import GameState
    from fortune.core.game.rules import Action


class Agent(ABC):
    """
    A bot seat. It answers the game's pending decision (roll, buy or
    decline, pay, draw, leave the bank) by picking one of the legal actions.
    """

    def __init__(self, player_id: int, name: str):
        self.player_id = player_id
        self.name = name

    @abstractmethod
    def choose_action(self, game: "GameState", legal_actions: List["Action"]) -> "Action":
        """Return one of `legal_actions`. The game state is read-only here."""
