"""
Player state and management.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Set

from fortune.core.game.tiles import Suit


class PlayerState:
    """Represents the complete state of a player in the game."""

    def __init__(self, player_id: int, name: str, starting_cash: int):
        self.player_id = player_id
        self.name = name
        self.cash = starting_cash
        self.position = 0
        self.level = 1
        self.suits: Set[Suit] = set()
        self.stocks: Dict[str, int] = {}
        self.is_bankrupt = False

    def shares_in(self, district: str) -> int:
        return self.stocks.get(district, 0)

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', "
            f"cash={self.cash}, position={self.position}, level={self.level})"
        )


@dataclass
class ShopRecord:
    """Tracks ownership state of a shop."""

    owner_id: Optional[int] = None


@dataclass
class DistrictRecord:
    """Mutable market state of a district."""

    shares_available: int
    owned_shops: int = 0


class Player:
    """
    Convenience wrapper for player information.
    This is primarily for the external API.
    """

    def __init__(self, player_id: int, name: str):
        self.player_id = player_id
        self.name = name

    def __repr__(self) -> str:
        return f"Player(id={self.player_id}, name='{self.name}')"
