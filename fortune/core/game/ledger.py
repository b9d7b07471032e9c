"""
Cash, share and net worth accounting.

Prices and valuations are never stored: district share prices follow the
owned fraction of the district, shop valuations follow the owner's level,
and net worth is recomputed from both on every call.
"""

from typing import Dict

from fortune.core.exceptions import (
    InsufficientFundsError,
    InsufficientHoldingsError,
    InsufficientSharesError,
    UnknownDistrictError,
)
from fortune.core.game.board import Board
from fortune.core.game.config import GameConfig
from fortune.core.game.money import EventLog, EventType
from fortune.core.game.ownership import OwnershipRegistry
from fortune.core.game.player import DistrictRecord, PlayerState


class EconomyLedger:
    """Per-player cash and holdings, per-district share pools."""

    def __init__(
        self,
        config: GameConfig,
        board: Board,
        players: Dict[int, PlayerState],
        districts: Dict[str, DistrictRecord],
        registry: OwnershipRegistry,
        event_log: EventLog,
    ):
        self.config = config
        self.board = board
        self.players = players
        self.districts = districts
        self.registry = registry
        self.event_log = event_log

    # Cash

    def available_cash(self, player_id: int) -> int:
        """Cash a player can spend without dropping below the floor."""
        return self.players[player_id].cash - self.config.cash_floor

    def can_afford(self, player_id: int, amount: int) -> bool:
        return self.available_cash(player_id) >= amount

    def credit(self, player_id: int, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Credit amount must be non-negative, got {amount}")
        self.players[player_id].cash += amount

    def debit(self, player_id: int, amount: int) -> None:
        """
        Remove cash from a player.

        Raises:
            InsufficientFundsError: cash would fall below the floor. Nothing
                is deducted in that case.
        """
        if amount < 0:
            raise ValueError(f"Debit amount must be non-negative, got {amount}")
        if not self.can_afford(player_id, amount):
            raise InsufficientFundsError(player_id, amount, self.available_cash(player_id))
        self.players[player_id].cash -= amount

    # Valuation

    def district_price(self, district_id: str) -> int:
        """Current share price, a non-decreasing function of the owned fraction."""
        district = self._district_data(district_id)
        fraction = self.registry.owned_fraction(district_id)
        return int(round(district.base_share_price * (1 + self.config.district_price_growth * fraction)))

    def shop_value(self, position: int) -> int:
        """Shop valuation: base price scaled by the owner's level."""
        shop = self.board.get_shop(position)
        if shop is None:
            raise ValueError(f"Position {position} is not a shop")
        owner_id = self.registry.owner_of(position)
        if owner_id is None:
            return shop.price
        level = self.players[owner_id].level
        return int(round(shop.price * (1 + self.config.level_value_step * (level - 1))))

    def shop_fee(self, position: int) -> int:
        """Fee owed by a visitor landing on an owned shop."""
        shop = self.board.get_shop(position)
        if shop is None:
            raise ValueError(f"Position {position} is not a shop")
        return int(round(self.shop_value(position) * self.config.fee_rate * shop.fee_multiplier))

    def stock_value(self, player_id: int) -> int:
        player = self.players[player_id]
        return sum(count * self.district_price(d) for d, count in player.stocks.items())

    def net_worth(self, player_id: int) -> int:
        """Cash + owned shop valuations + holdings at current share prices."""
        player = self.players[player_id]
        shops = sum(self.shop_value(pos) for pos in self.registry.shops_owned_by(player_id))
        return player.cash + shops + self.stock_value(player_id)

    # Shares

    def buy_shares(self, player_id: int, district_id: str, count: int) -> int:
        """
        Buy shares from a district's pool at the current price.

        Returns:
            Total cost paid
        """
        self._check_count(count)
        record = self._district_record(district_id)
        if count > record.shares_available:
            raise InsufficientSharesError(district_id, count, record.shares_available)

        price = self.district_price(district_id)
        cost = price * count
        self.debit(player_id, cost)

        player = self.players[player_id]
        record.shares_available -= count
        player.stocks[district_id] = player.shares_in(district_id) + count

        self.event_log.log(
            EventType.SHARES_BOUGHT,
            player_id=player_id,
            details={
                "district": district_id,
                "count": count,
                "price": price,
                "total": cost,
                "new_balance": player.cash,
            },
        )
        return cost

    def sell_shares(self, player_id: int, district_id: str, count: int) -> int:
        """
        Sell shares back into a district's pool at the current price.

        Returns:
            Total proceeds received
        """
        self._check_count(count)
        record = self._district_record(district_id)
        player = self.players[player_id]
        held = player.shares_in(district_id)
        if count > held:
            raise InsufficientHoldingsError(player_id, district_id, count, held)

        price = self.district_price(district_id)
        proceeds = price * count
        record.shares_available += count
        if held == count:
            del player.stocks[district_id]
        else:
            player.stocks[district_id] = held - count
        self.credit(player_id, proceeds)

        self.event_log.log(
            EventType.SHARES_SOLD,
            player_id=player_id,
            details={
                "district": district_id,
                "count": count,
                "price": price,
                "total": proceeds,
                "new_balance": player.cash,
            },
        )
        return proceeds

    def liquidate(self, player_id: int) -> int:
        """Sell every share a player holds. Returns total proceeds."""
        player = self.players[player_id]
        sold = dict(player.stocks)
        proceeds = 0
        for district_id in sorted(sold):
            proceeds += self.sell_shares(player_id, district_id, sold[district_id])

        if sold:
            self.event_log.log(
                EventType.FORCED_LIQUIDATION,
                player_id=player_id,
                details={"holdings": sold, "proceeds": proceeds, "new_balance": player.cash},
            )
        return proceeds

    def _check_count(self, count: int) -> None:
        if not isinstance(count, int) or isinstance(count, bool) or count <= 0:
            raise ValueError(f"Share count must be a positive integer, got {count!r}")

    def _district_data(self, district_id: str):
        district = self.board.get_district(district_id)
        if district is None:
            raise UnknownDistrictError(f"Unknown district {district_id!r}")
        return district

    def _district_record(self, district_id: str) -> DistrictRecord:
        self._district_data(district_id)
        return self.districts[district_id]
