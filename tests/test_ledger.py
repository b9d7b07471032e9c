"""
Tests for cash, share trading, valuation and net worth.
"""

import pytest

from conftest import BAKERY, BOOKSTORE, CAFE
from fortune.core.exceptions import (
    InsufficientFundsError,
    InsufficientHoldingsError,
    InsufficientSharesError,
    UnknownDistrictError,
)
from fortune.core.game.money import EventType


def test_credit_and_debit(small_game):
    ledger = small_game.ledger
    ledger.credit(0, 250)
    assert small_game.players[0].cash == 1750

    ledger.debit(0, 750)
    assert small_game.players[0].cash == 1000


def test_negative_amounts_rejected(small_game):
    with pytest.raises(ValueError):
        small_game.ledger.credit(0, -1)
    with pytest.raises(ValueError):
        small_game.ledger.debit(0, -1)


def test_debit_below_floor_fails_without_clamping(small_game):
    player = small_game.players[0]
    player.cash = 50

    with pytest.raises(InsufficientFundsError) as exc_info:
        small_game.ledger.debit(0, 60)

    assert exc_info.value.amount == 60
    assert exc_info.value.available == 50
    assert player.cash == 50


def test_debit_respects_configured_floor(small_game):
    small_game.config.cash_floor = 100
    small_game.players[0].cash = 150

    assert small_game.ledger.available_cash(0) == 50
    with pytest.raises(InsufficientFundsError):
        small_game.ledger.debit(0, 60)
    small_game.ledger.debit(0, 50)
    assert small_game.players[0].cash == 100


def test_buy_shares_scenario(small_game):
    """Buying 5 shares at price 20 with 200 cash leaves 100."""
    player = small_game.players[0]
    player.cash = 200

    cost = small_game.ledger.buy_shares(0, "North", 5)

    assert cost == 100
    assert player.cash == 100
    assert player.shares_in("North") == 5
    assert small_game.districts["North"].shares_available == 45


def test_buy_more_than_pool_fails_without_change(small_game):
    player = small_game.players[0]
    player.cash = 200
    events_before = len(small_game.event_log)

    with pytest.raises(InsufficientSharesError) as exc_info:
        small_game.ledger.buy_shares(0, "North", 1000)

    assert exc_info.value.available == 50
    assert player.cash == 200
    assert player.shares_in("North") == 0
    assert small_game.districts["North"].shares_available == 50
    assert len(small_game.event_log) == events_before


def test_buy_shares_without_cash_fails_without_change(small_game):
    player = small_game.players[0]
    player.cash = 30

    with pytest.raises(InsufficientFundsError):
        small_game.ledger.buy_shares(0, "North", 2)

    assert player.cash == 30
    assert player.shares_in("North") == 0
    assert small_game.districts["North"].shares_available == 50


def test_sell_shares(small_game):
    player = small_game.players[0]
    small_game.ledger.buy_shares(0, "South", 10)
    cash_after_buy = player.cash

    proceeds = small_game.ledger.sell_shares(0, "South", 4)

    assert proceeds == 80
    assert player.cash == cash_after_buy + 80
    assert player.shares_in("South") == 6
    assert small_game.districts["South"].shares_available == 44


def test_sell_more_than_held_fails(small_game):
    small_game.ledger.buy_shares(0, "South", 3)

    with pytest.raises(InsufficientHoldingsError) as exc_info:
        small_game.ledger.sell_shares(0, "South", 4)

    assert exc_info.value.held == 3
    assert small_game.players[0].shares_in("South") == 3


def test_selling_everything_clears_holding(small_game):
    small_game.ledger.buy_shares(0, "South", 3)
    small_game.ledger.sell_shares(0, "South", 3)
    assert "South" not in small_game.players[0].stocks


@pytest.mark.parametrize("count", [0, -2, 1.5, True])
def test_invalid_share_counts(small_game, count):
    with pytest.raises(ValueError):
        small_game.ledger.buy_shares(0, "North", count)


def test_unknown_district(small_game):
    with pytest.raises(UnknownDistrictError):
        small_game.ledger.buy_shares(0, "Atlantis", 1)
    with pytest.raises(UnknownDistrictError):
        small_game.ledger.district_price("Atlantis")


def test_share_trades_are_logged(small_game):
    small_game.ledger.buy_shares(0, "North", 2)
    small_game.ledger.sell_shares(0, "North", 1)

    types = [e.event_type for e in small_game.event_log.get_recent_events(2)]
    assert types == [EventType.SHARES_BOUGHT, EventType.SHARES_SOLD]


def test_district_price_tracks_owned_fraction(small_game):
    ledger = small_game.ledger
    assert ledger.district_price("North") == 20

    small_game.ownership.transfer(BAKERY, 0)
    assert ledger.district_price("North") == 30

    small_game.ownership.transfer(BOOKSTORE, 1)
    assert ledger.district_price("North") == 40

    small_game.ownership.transfer(BOOKSTORE, None)
    assert ledger.district_price("North") == 30
    assert ledger.district_price("South") == 20


def test_shop_value_and_fee_follow_owner_level(small_game):
    ledger = small_game.ledger
    assert ledger.shop_value(BOOKSTORE) == 400

    small_game.ownership.transfer(BOOKSTORE, 0)
    assert ledger.shop_value(BOOKSTORE) == 400
    assert ledger.shop_fee(BOOKSTORE) == 40

    small_game.players[0].level = 3
    assert ledger.shop_value(BOOKSTORE) == 480
    assert ledger.shop_fee(BOOKSTORE) == 48


def test_fee_multiplier_applies(basic_game):
    basic_game.ownership.transfer(1, 0)

    # Downtown Shop 1: price 300, multiplier 2.7
    assert basic_game.ledger.shop_fee(1) == 81


def test_net_worth_aggregates_cash_shops_and_stock(small_game):
    ledger = small_game.ledger
    player = small_game.players[0]

    ledger.buy_shares(0, "North", 5)
    small_game.ownership.transfer(CAFE, 0)
    small_game.ownership.transfer(BAKERY, 1)

    # North is half owned, so shares are worth 30 each
    expected = player.cash + 200 + 5 * 30
    assert ledger.net_worth(0) == expected
    assert small_game.net_worth(0) == expected


def test_net_worth_never_stale_after_price_change(small_game):
    ledger = small_game.ledger
    ledger.buy_shares(0, "North", 10)
    before = ledger.net_worth(0)

    small_game.ownership.transfer(BOOKSTORE, 1)

    assert ledger.net_worth(0) == before + 10 * 10
