"""
Shop ownership, district membership and suit collection.

Every ownership change goes through OwnershipRegistry.transfer so a shop
can never be observed with more than one owner.
"""

from typing import Dict, List, Optional

from fortune.core.game.board import Board
from fortune.core.game.money import EventLog, EventType
from fortune.core.game.player import DistrictRecord, PlayerState, ShopRecord
from fortune.core.game.tiles import ALL_SUITS, Suit


class OwnershipRegistry:
    """Maps shops to owners and tracks per-district owned counts."""

    def __init__(
        self,
        board: Board,
        players: Dict[int, PlayerState],
        districts: Dict[str, DistrictRecord],
        event_log: EventLog,
    ):
        self.board = board
        self.players = players
        self.districts = districts
        self.event_log = event_log
        self.shops: Dict[int, ShopRecord] = {pos: ShopRecord() for pos in board.shop_positions()}

    def owner_of(self, position: int) -> Optional[int]:
        record = self.shops.get(position)
        return record.owner_id if record else None

    def transfer(self, position: int, new_owner: Optional[int]) -> None:
        """
        Hand a shop to a new owner (or back to the bank with None).

        Callers validate the move; this only keeps ownership and district
        counts consistent.
        """
        shop = self.board.get_shop(position)
        if shop is None:
            raise ValueError(f"Position {position} is not a shop")
        if new_owner is not None and new_owner not in self.players:
            raise ValueError(f"Unknown player {new_owner}")

        record = self.shops[position]
        previous = record.owner_id
        if previous == new_owner:
            return

        district = self.districts[shop.district]
        if previous is None:
            district.owned_shops += 1
        elif new_owner is None:
            district.owned_shops -= 1
        record.owner_id = new_owner

        self.event_log.log(
            EventType.OWNERSHIP_CHANGED,
            player_id=new_owner,
            details={
                "position": position,
                "shop": shop.name,
                "district": shop.district,
                "previous_owner": previous,
                "new_owner": new_owner,
            },
        )

    def shops_owned_by(self, player_id: int) -> List[int]:
        """Positions of all shops owned by a player, in board order."""
        return sorted(pos for pos, record in self.shops.items() if record.owner_id == player_id)

    def owned_count(self, district_id: str) -> int:
        return self.districts[district_id].owned_shops

    def owned_fraction(self, district_id: str) -> float:
        """Fraction of a district's shops currently owned by any player."""
        members = self.board.shops_in(district_id)
        if not members:
            return 0.0
        return self.districts[district_id].owned_shops / len(members)

    def award_suit(self, player_id: int, suit: Suit) -> bool:
        """
        Give a suit to a player. Adding a suit already held is a no-op.

        Returns:
            True if the player's suit set is now complete
        """
        player = self.players[player_id]
        if suit not in player.suits:
            player.suits.add(suit)
            self.event_log.log(
                EventType.SUIT_AWARDED,
                player_id=player_id,
                details={"suit": suit.value, "suit_count": len(player.suits)},
            )
        return player.suits >= ALL_SUITS
