"""Shared test fixtures for Fortune Street tests."""

import pytest

from fortune.core import GameConfig, Player, create_game
from fortune.core.game.board import Board
from fortune.core.game.dice import RandomnessSource

# Ten-tile loop used by most rule tests:
#   0 Bank | 1-3 Empty | 4 North shop (300, spade) | 5 Chance
#   6 North shop (400) | 7 Heart suit | 8 Empty | 9 South shop (200, club)
SMALL_BOARD = {
    "tiles": [
        {"kind": "bank"},
        {"kind": "neutral"},
        {"kind": "neutral"},
        {"kind": "neutral"},
        {"kind": "shop", "name": "Bakery", "price": 300, "district": "North", "suit": "spade"},
        {"kind": "chance"},
        {"kind": "shop", "name": "Bookstore", "price": 400, "district": "North"},
        {"kind": "suit", "suit": "heart"},
        {"kind": "neutral"},
        {"kind": "shop", "name": "Cafe", "price": 200, "district": "South", "suit": "club"},
    ],
    "districts": [
        {"district_id": "North", "share_pool": 50, "base_share_price": 20},
        {"district_id": "South", "share_pool": 50, "base_share_price": 20},
    ],
}

BAKERY, CHANCE, BOOKSTORE, HEART_SUIT, CAFE = 4, 5, 6, 7, 9


class ScriptedDice(RandomnessSource):
    """Returns queued die rolls and chance amounts instead of random draws."""

    def __init__(self, rolls=(), chances=()):
        super().__init__(seed=0)
        self.rolls = list(rolls)
        self.chances = list(chances)

    def roll_die(self) -> int:
        return self.rolls.pop(0)

    def chance_effect(self) -> int:
        return self.chances.pop(0)


def rig(game, rolls=(), chances=()):
    """Replace a game's randomness with scripted values."""
    game.dice = ScriptedDice(rolls, chances)
    return game.dice


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def small_config():
    """Rules used with the small board: 1500 starting cash, 10% fee rate."""
    return GameConfig(seed=42, starting_cash=1500)


@pytest.fixture
def small_board():
    return Board.from_dict(SMALL_BOARD)


@pytest.fixture
def two_players():
    """Two test players."""
    return [Player(0, "Alice"), Player(1, "Bob")]


@pytest.fixture
def three_players():
    """Three test players."""
    return [Player(0, "Alice"), Player(1, "Bob"), Player(2, "Charlie")]


@pytest.fixture
def four_players():
    """Four test players."""
    return [
        Player(0, "Alice"),
        Player(1, "Bob"),
        Player(2, "Charlie"),
        Player(3, "Diana"),
    ]


@pytest.fixture
def basic_game(game_config, two_players):
    """Standard board, two players, fixed seed."""
    return create_game(game_config, two_players)


@pytest.fixture
def small_game(small_config, two_players, small_board):
    """Small board, two players."""
    return create_game(small_config, two_players, small_board)
