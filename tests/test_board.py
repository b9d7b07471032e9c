"""
Tests for board construction and tile lookup.
"""

import copy

import pytest

from conftest import SMALL_BOARD
from fortune.core.exceptions import ConstructionError
from fortune.core.game.board import Board
from fortune.core.game.tiles import Suit, TileType


def test_standard_board_layout():
    board = Board()

    assert board.cycle_length() == 17
    assert board.tile_at(0).tile_type == TileType.BANK
    assert sorted(board.district_ids()) == ["Downtown", "Grove", "Harbor", "Plaza"]
    for district_id in board.district_ids():
        assert len(board.shops_in(district_id)) == 2

    suits = {board.tile_at(i).suit for i in (2, 6, 10, 14)}
    assert suits == set(Suit)
    assert all(board.tile_at(i).tile_type == TileType.CHANCE for i in (4, 8, 12, 16))


def test_default_tile_names():
    board = Board()
    assert board.tile_at(1).name == "Downtown Shop 1"
    assert board.tile_at(3).name == "Downtown Shop 2"
    assert board.tile_at(2).name == "Spade Suit"
    assert board.tile_at(4).name == "Chance"


def test_tile_at_wraps_around(small_board):
    length = small_board.cycle_length()
    assert small_board.tile_at(length) is small_board.tile_at(0)
    assert small_board.tile_at(length + 4).name == "Bakery"


def test_get_shop_only_returns_shops(small_board):
    assert small_board.get_shop(4).price == 300
    assert small_board.get_shop(4).suit == Suit.SPADE
    assert small_board.get_shop(5) is None
    assert small_board.shop_positions() == [4, 6, 9]
    assert small_board.shops_in("North") == (4, 6)
    assert small_board.shops_in("Nowhere") == ()


def test_empty_board_rejected():
    with pytest.raises(ConstructionError):
        Board.from_dict({"tiles": [], "districts": []})


def test_dangling_district_rejected():
    raw = copy.deepcopy(SMALL_BOARD)
    raw["tiles"][4]["district"] = "Atlantis"
    with pytest.raises(ConstructionError, match="Atlantis"):
        Board.from_dict(raw)


def test_shop_without_price_rejected():
    raw = copy.deepcopy(SMALL_BOARD)
    del raw["tiles"][4]["price"]
    with pytest.raises(ConstructionError):
        Board.from_dict(raw)


def test_non_positive_price_rejected():
    raw = copy.deepcopy(SMALL_BOARD)
    raw["tiles"][4]["price"] = 0
    with pytest.raises(ConstructionError):
        Board.from_dict(raw)


def test_suit_tile_without_suit_rejected():
    raw = copy.deepcopy(SMALL_BOARD)
    del raw["tiles"][7]["suit"]
    with pytest.raises(ConstructionError):
        Board.from_dict(raw)


def test_district_without_shops_rejected():
    raw = copy.deepcopy(SMALL_BOARD)
    raw["districts"].append({"district_id": "East"})
    with pytest.raises(ConstructionError, match="East"):
        Board.from_dict(raw)


def test_duplicate_district_rejected():
    raw = copy.deepcopy(SMALL_BOARD)
    raw["districts"].append({"district_id": "North"})
    with pytest.raises(ConstructionError, match="Duplicate"):
        Board.from_dict(raw)


def test_malformed_input_wrapped_in_construction_error():
    with pytest.raises(ConstructionError):
        Board.from_dict({"tiles": [{"kind": "casino"}]})
    with pytest.raises(ConstructionError):
        Board.from_dict({"districts": []})
