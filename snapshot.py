"""
Public snapshot serialization of GameState.

Read-only projections consumed by the UI layer: per-player summaries,
per-district market data, the leaderboard, and the pending decision.
Nothing here mutates the game.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fortune.core.game.game import GameState


def player_summary(game: GameState, player_id: int) -> Dict[str, Any]:
    """Sidebar view of one player."""
    player = game.players[player_id]
    shops: List[Dict[str, Any]] = []
    for pos in game.shops_owned_by(player_id):
        shop = game.board.get_shop(pos)
        shops.append(
            {
                "position": pos,
                "name": shop.name,
                "district": shop.district,
                "value": game.ledger.shop_value(pos),
                "fee": game.ledger.shop_fee(pos),
            }
        )

    return {
        "player_id": player_id,
        "name": player.name,
        "cash": player.cash,
        "net_worth": game.net_worth(player_id),
        "level": player.level,
        "suits": sorted(s.value for s in player.suits),
        "position": player.position,
        "is_bankrupt": player.is_bankrupt,
        "shops": shops,
        "stocks": dict(sorted(player.stocks.items())),
    }


def district_summary(game: GameState, district_id: str) -> Dict[str, Any]:
    """Market view of one district."""
    data = game.board.get_district(district_id)
    record = game.districts[district_id]
    return {
        "district_id": district_id,
        "shops": list(data.shop_positions),
        "owned_shops": record.owned_shops,
        "owned_fraction": game.ownership.owned_fraction(district_id),
        "share_price": game.ledger.district_price(district_id),
        "shares_available": record.shares_available,
        "share_pool": data.share_pool,
    }


def leaderboard(game: GameState) -> List[Dict[str, Any]]:
    """All players ranked by net worth, bankrupt players last."""
    rows = [
        {
            "player_id": pid,
            "name": p.name,
            "net_worth": game.net_worth(pid),
            "is_bankrupt": p.is_bankrupt,
        }
        for pid, p in game.players.items()
    ]
    rows.sort(key=lambda r: (r["is_bankrupt"], -r["net_worth"], r["player_id"]))
    for rank, row in enumerate(rows, start=1):
        row["rank"] = rank
    return rows


def serialize_snapshot(game: GameState) -> Dict[str, Any]:
    """Serialize a GameState into a public, stable JSON dict.

    The snapshot includes:
    - turn and round counters, current player and turn phase
    - the pending decision request, if any
    - players with public info (cash, net worth, level, suits, shops, stocks)
    - districts with owned fraction and current share price
    - the game-over flag and winner
    """
    pending = game.pending.to_dict() if game.pending is not None else None
    return {
        "turn_number": game.turn_number,
        "round_number": game.round_number,
        "current_player_id": game.get_current_player().player_id,
        "phase": game.phase.value,
        "pending": pending,
        "last_roll": game.last_roll,
        "players": [player_summary(game, pid) for pid in sorted(game.players)],
        "districts": [district_summary(game, d) for d in game.board.district_ids()],
        "game_over": game.game_over,
        "winner": game.winner,
    }
