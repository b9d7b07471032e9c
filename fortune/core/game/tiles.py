"""
Board tile definitions and types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional


class Suit(Enum):
    """The four collectible suit symbols."""

    SPADE = "spade"
    HEART = "heart"
    DIAMOND = "diamond"
    CLUB = "club"

    @property
    def icon(self) -> str:
        return _SUIT_ICONS[self]


_SUIT_ICONS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
}

ALL_SUITS = frozenset(Suit)


class TileType(Enum):
    """Types of tiles on the board."""

    SHOP = "shop"
    CHANCE = "chance"
    BANK = "bank"
    SUIT = "suit"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Tile:
    """Base class for a board tile."""

    name: str
    position: int

    tile_type: ClassVar[TileType]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', position={self.position})"


@dataclass(frozen=True, repr=False)
class ShopTile(Tile):
    """A purchasable shop belonging to a district."""

    price: int
    district: str
    fee_multiplier: float = 1.0
    suit: Optional[Suit] = None

    tile_type = TileType.SHOP


@dataclass(frozen=True, repr=False)
class ChanceTile(Tile):
    """Draws a signed cash effect from the chance table."""

    tile_type = TileType.CHANCE


@dataclass(frozen=True, repr=False)
class BankTile(Tile):
    """The bank: promotion with a full suit set, and stock trading."""

    tile_type = TileType.BANK


@dataclass(frozen=True, repr=False)
class SuitTile(Tile):
    """Awards its suit to any player who lands on it."""

    suit: Suit

    tile_type = TileType.SUIT


@dataclass(frozen=True, repr=False)
class NeutralTile(Tile):
    """A tile with no effect."""

    tile_type = TileType.NEUTRAL
