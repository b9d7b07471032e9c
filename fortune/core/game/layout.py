"""
Board definitions consumed at game construction.

A board definition is a static description of the tile loop and the
districts its shops belong to. It is validated with pydantic before the
immutable Board is built from it.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from fortune.core.game.tiles import Suit, TileType


class TileSpec(BaseModel):
    """One tile of the loop, in board order."""

    kind: TileType
    name: Optional[str] = None
    price: Optional[int] = None
    district: Optional[str] = None
    fee_multiplier: float = Field(default=1.0, gt=0)
    suit: Optional[Suit] = None


class DistrictSpec(BaseModel):
    """A named group of shops with a tradeable share pool."""

    district_id: str = Field(min_length=1)
    share_pool: int = 50
    base_share_price: int = 20


class BoardDefinition(BaseModel):
    """The full static description of a board."""

    tiles: List[TileSpec]
    districts: List[DistrictSpec] = Field(default_factory=list)


def _shop(district: str, price: int, fee_multiplier: float) -> TileSpec:
    return TileSpec(kind=TileType.SHOP, district=district, price=price, fee_multiplier=fee_multiplier)


def standard_board_definition() -> BoardDefinition:
    """The 17-tile starter loop: bank, four districts, four suits, four chance tiles."""
    tiles = [
        TileSpec(kind=TileType.BANK, name="Bank"),
        _shop("Downtown", 300, 2.7),
        TileSpec(kind=TileType.SUIT, suit=Suit.SPADE),
        _shop("Downtown", 320, 2.8),
        TileSpec(kind=TileType.CHANCE),
        _shop("Plaza", 280, 2.7),
        TileSpec(kind=TileType.SUIT, suit=Suit.HEART),
        _shop("Plaza", 260, 2.7),
        TileSpec(kind=TileType.CHANCE),
        _shop("Harbor", 350, 2.7),
        TileSpec(kind=TileType.SUIT, suit=Suit.DIAMOND),
        _shop("Harbor", 360, 2.9),
        TileSpec(kind=TileType.CHANCE),
        _shop("Grove", 240, 2.5),
        TileSpec(kind=TileType.SUIT, suit=Suit.CLUB),
        _shop("Grove", 260, 2.5),
        TileSpec(kind=TileType.CHANCE),
    ]
    districts = [
        DistrictSpec(district_id="Downtown"),
        DistrictSpec(district_id="Plaza"),
        DistrictSpec(district_id="Harbor"),
        DistrictSpec(district_id="Grove"),
    ]
    return BoardDefinition(tiles=tiles, districts=districts)
