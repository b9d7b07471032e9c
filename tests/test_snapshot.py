import json

from conftest import BAKERY, CAFE, rig
from snapshot import district_summary, leaderboard, player_summary, serialize_snapshot


def test_serialize_snapshot_keys(basic_game):
    snap = serialize_snapshot(basic_game)

    assert set(snap) == {
        "turn_number",
        "round_number",
        "current_player_id",
        "phase",
        "pending",
        "last_roll",
        "players",
        "districts",
        "game_over",
        "winner",
    }
    assert snap["phase"] == "awaiting_roll"
    assert snap["pending"] == {"kind": "roll", "player_id": 0}
    assert len(snap["players"]) == 2
    assert len(snap["districts"]) == 4
    json.dumps(snap)


def test_player_summary_reflects_holdings(small_game):
    small_game.ownership.transfer(CAFE, 0)
    small_game.ledger.buy_shares(0, "North", 4)
    small_game.ownership.award_suit(0, small_game.board.get_shop(CAFE).suit)

    summary = player_summary(small_game, 0)

    assert summary["cash"] == 1420
    assert summary["net_worth"] == 1420 + 200 + 80
    assert summary["level"] == 1
    assert summary["suits"] == ["club"]
    assert summary["stocks"] == {"North": 4}
    assert summary["shops"] == [
        {"position": CAFE, "name": "Cafe", "district": "South", "value": 200, "fee": 20}
    ]


def test_district_summary(small_game):
    small_game.ownership.transfer(BAKERY, 1)

    north = district_summary(small_game, "North")

    assert north["owned_shops"] == 1
    assert north["owned_fraction"] == 0.5
    assert north["share_price"] == 30
    assert north["shares_available"] == 50
    assert north["shops"] == [4, 6]


def test_snapshot_shows_pending_offer(small_game):
    rig(small_game, rolls=[4])
    small_game.roll_dice(0)

    snap = serialize_snapshot(small_game)

    assert snap["last_roll"] == 4
    assert snap["phase"] == "awaiting_purchase_decision"
    assert snap["pending"] == {
        "kind": "purchase_offer",
        "player_id": 0,
        "position": BAKERY,
        "shop": "Bakery",
        "price": 300,
    }


def test_leaderboard_ranks_bankrupt_last(small_game):
    small_game.players[0].cash = 3000
    small_game.players[0].is_bankrupt = True

    board = leaderboard(small_game)

    assert [row["player_id"] for row in board] == [1, 0]
    assert [row["rank"] for row in board] == [1, 2]
