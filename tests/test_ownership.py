"""
Tests for shop ownership transfers and suit collection.
"""

import pytest

from conftest import BAKERY, BOOKSTORE, CAFE, CHANCE
from fortune.core.game.money import EventType
from fortune.core.game.tiles import Suit


def test_shops_start_unowned(small_game):
    registry = small_game.ownership
    assert all(registry.owner_of(pos) is None for pos in small_game.board.shop_positions())
    assert registry.owner_of(CHANCE) is None
    assert registry.owned_count("North") == 0


def test_transfer_updates_owner_and_district_counts(small_game):
    registry = small_game.ownership

    registry.transfer(BAKERY, 0)
    assert registry.owner_of(BAKERY) == 0
    assert registry.owned_count("North") == 1
    assert registry.owned_fraction("North") == 0.5

    # Player to player keeps the district count
    registry.transfer(BAKERY, 1)
    assert registry.owner_of(BAKERY) == 1
    assert registry.owned_count("North") == 1

    registry.transfer(BAKERY, None)
    assert registry.owner_of(BAKERY) is None
    assert registry.owned_count("North") == 0


def test_transfer_to_current_owner_is_noop(small_game):
    registry = small_game.ownership
    registry.transfer(CAFE, 0)
    events_before = len(small_game.event_log)

    registry.transfer(CAFE, 0)

    assert registry.owned_count("South") == 1
    assert len(small_game.event_log) == events_before


def test_transfer_logs_ownership_change(small_game):
    small_game.ownership.transfer(BOOKSTORE, 1)

    event = small_game.event_log.get_recent_events(1)[0]
    assert event.event_type == EventType.OWNERSHIP_CHANGED
    assert event.player_id == 1
    assert event.details["details"]["previous_owner"] is None
    assert event.details["details"]["district"] == "North"


def test_transfer_rejects_non_shop_and_unknown_player(small_game):
    with pytest.raises(ValueError):
        small_game.ownership.transfer(CHANCE, 0)
    with pytest.raises(ValueError):
        small_game.ownership.transfer(BAKERY, 99)
    assert small_game.ownership.owner_of(BAKERY) is None


def test_shops_owned_by_in_board_order(small_game):
    registry = small_game.ownership
    registry.transfer(CAFE, 0)
    registry.transfer(BAKERY, 0)
    registry.transfer(BOOKSTORE, 1)

    assert registry.shops_owned_by(0) == [BAKERY, CAFE]
    assert small_game.shops_owned_by(1) == [BOOKSTORE]


def test_award_suit_is_idempotent(small_game):
    registry = small_game.ownership
    player = small_game.players[0]

    registry.award_suit(0, Suit.HEART)
    events_after_first = len(small_game.event_log)
    registry.award_suit(0, Suit.HEART)

    assert player.suits == {Suit.HEART}
    assert len(small_game.event_log) == events_after_first


def test_award_suit_reports_complete_set(small_game):
    registry = small_game.ownership
    results = [registry.award_suit(0, suit) for suit in Suit]
    assert results == [False, False, False, True]
    assert len(small_game.players[0].suits) == 4
