"""
The board: an immutable loop of tiles grouped into districts, built from a
validated BoardDefinition.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from fortune.core.exceptions import ConstructionError
from fortune.core.game.layout import BoardDefinition, standard_board_definition
from fortune.core.game.tiles import (
    BankTile,
    ChanceTile,
    NeutralTile,
    ShopTile,
    SuitTile,
    Tile,
    TileType,
)


@dataclass(frozen=True)
class DistrictData:
    """Static description of a district."""

    district_id: str
    shop_positions: Tuple[int, ...]
    share_pool: int
    base_share_price: int


class Board:
    """An immutable loop of tiles grouped into districts."""

    def __init__(self, definition: Optional[BoardDefinition] = None):
        if definition is None:
            definition = standard_board_definition()
        self._tiles: Tuple[Tile, ...] = self._create_tiles(definition)
        self._districts: Dict[str, DistrictData] = self._build_districts(definition)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Board":
        """Build a board from an unvalidated mapping (e.g. parsed JSON)."""
        try:
            definition = BoardDefinition.model_validate(raw)
        except ValidationError as exc:
            raise ConstructionError(f"Invalid board definition: {exc}") from exc
        return cls(definition)

    def _create_tiles(self, definition: BoardDefinition) -> Tuple[Tile, ...]:
        if not definition.tiles:
            raise ConstructionError("Board must contain at least one tile")

        known = {d.district_id for d in definition.districts}
        tiles: List[Tile] = []
        shop_counts: Dict[str, int] = {}
        for position, spec in enumerate(definition.tiles):
            if spec.kind == TileType.SHOP:
                if spec.district is None or spec.price is None:
                    raise ConstructionError(f"Shop at position {position} needs a price and a district")
                if spec.district not in known:
                    raise ConstructionError(
                        f"Shop at position {position} references unknown district {spec.district!r}"
                    )
                if spec.price <= 0:
                    raise ConstructionError(f"Shop at position {position} has non-positive price {spec.price}")
                shop_counts[spec.district] = shop_counts.get(spec.district, 0) + 1
                name = spec.name or f"{spec.district} Shop {shop_counts[spec.district]}"
                tiles.append(
                    ShopTile(name, position, spec.price, spec.district, spec.fee_multiplier, spec.suit)
                )
            elif spec.kind == TileType.SUIT:
                if spec.suit is None:
                    raise ConstructionError(f"Suit tile at position {position} has no suit")
                tiles.append(SuitTile(spec.name or f"{spec.suit.value.title()} Suit", position, spec.suit))
            elif spec.kind == TileType.BANK:
                tiles.append(BankTile(spec.name or "Bank", position))
            elif spec.kind == TileType.CHANCE:
                tiles.append(ChanceTile(spec.name or "Chance", position))
            elif spec.kind == TileType.NEUTRAL:
                tiles.append(NeutralTile(spec.name or "Empty Lot", position))
        return tuple(tiles)

    def _build_districts(self, definition: BoardDefinition) -> Dict[str, DistrictData]:
        districts: Dict[str, DistrictData] = {}
        for spec in definition.districts:
            if spec.district_id in districts:
                raise ConstructionError(f"Duplicate district id {spec.district_id!r}")
            if spec.share_pool < 0:
                raise ConstructionError(f"District {spec.district_id!r} has a negative share pool")
            if spec.base_share_price <= 0:
                raise ConstructionError(f"District {spec.district_id!r} needs a positive share price")
            positions = tuple(
                t.position for t in self._tiles if isinstance(t, ShopTile) and t.district == spec.district_id
            )
            if not positions:
                raise ConstructionError(f"District {spec.district_id!r} has no shops")
            districts[spec.district_id] = DistrictData(
                spec.district_id, positions, spec.share_pool, spec.base_share_price
            )
        return districts

    def cycle_length(self) -> int:
        """Number of tiles in the loop."""
        return len(self._tiles)

    def tile_at(self, index: int) -> Tile:
        """Get the tile at the given index, wrapping around the loop."""
        return self._tiles[index % len(self._tiles)]

    def get_shop(self, position: int) -> Optional[ShopTile]:
        """Get a shop tile, or None if the tile is not a shop."""
        tile = self.tile_at(position)
        return tile if isinstance(tile, ShopTile) else None

    def shop_positions(self) -> List[int]:
        """Positions of every shop on the board."""
        return [t.position for t in self._tiles if isinstance(t, ShopTile)]

    def district_ids(self) -> List[str]:
        return list(self._districts)

    def get_district(self, district_id: str) -> Optional[DistrictData]:
        return self._districts.get(district_id)

    def shops_in(self, district_id: str) -> Tuple[int, ...]:
        """Shop positions belonging to a district, in board order."""
        district = self._districts.get(district_id)
        return district.shop_positions if district else ()
