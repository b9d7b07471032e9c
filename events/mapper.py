"""
Mapping from internal EventLog objects to canonical public JSON events.

The internal engine emits GameEvent objects where:
- event_type is money.EventType
- player_id is optional
- details may be nested (often passed as details={...})

This module produces stable, UI/JSONL-friendly dicts with consistent
event_type strings and payload keys.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from fortune.core.game.board import Board
from fortune.core.game.money import EventType, GameEvent


def _flatten_details(details: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize nested details payloads from engine logs."""
    if not details:
        return {}
    if "details" in details and isinstance(details["details"], dict):
        return details["details"]
    return details


def _tile_name(board: Board, position: Optional[int]) -> Optional[str]:
    if position is None:
        return None
    return board.tile_at(position).name


def map_event(board: Board, event: GameEvent) -> Dict[str, Any]:
    """
    Map a single GameEvent to a canonical JSON dict.

    Args:
        board: Board instance (for resolving tile names)
        event: internal event object

    Returns:
        dict with keys: event_type (str), player_id (optional), and event-specific fields
    """
    etype = event.event_type.value
    d = _flatten_details(event.details)

    base: Dict[str, Any] = {"event_type": etype}
    if event.player_id is not None:
        base["player_id"] = event.player_id

    if event.event_type == EventType.DICE_ROLL:
        base.update(value=d.get("value"))
        return base

    if event.event_type == EventType.MOVE:
        to_pos = d.get("to")
        base.update(
            from_position=d.get("from"),
            to_position=to_pos,
            spaces=d.get("spaces"),
            tile_name=_tile_name(board, to_pos),
        )
        return base

    if event.event_type == EventType.PASSED_START:
        base.update(amount=d.get("amount"), cash_after=d.get("new_balance"))
        return base

    if event.event_type == EventType.LAND:
        position = d.get("position")
        base.update(
            position=position,
            tile_name=d.get("tile") or _tile_name(board, position),
            tile_type=d.get("tile_type"),
        )
        return base

    # Shops
    if event.event_type in (EventType.PURCHASE, EventType.PURCHASE_DECLINED):
        base.update(shop_name=d.get("shop"), position=d.get("position"), price=d.get("price"))
        if "new_balance" in d:
            base["cash_after"] = d["new_balance"]
        return base

    if event.event_type == EventType.OWNERSHIP_CHANGED:
        base.update(
            position=d.get("position"),
            shop_name=d.get("shop"),
            district=d.get("district"),
            previous_owner_id=d.get("previous_owner"),
            new_owner_id=d.get("new_owner"),
        )
        return base

    if event.event_type == EventType.FEE_PAYMENT:
        position = d.get("position")
        base.update(
            payer_id=event.player_id,
            owner_id=d.get("owner"),
            position=position,
            shop_name=_tile_name(board, position),
            amount=d.get("amount"),
            paid=d.get("paid"),
            payer_cash_after=d.get("payer_balance"),
            owner_cash_after=d.get("owner_balance"),
        )
        return base

    if event.event_type == EventType.CHANCE_EFFECT:
        base.update(
            amount=d.get("amount"),
            applied=d.get("applied"),
            cash_before=d.get("cash_before"),
            cash_after=d.get("cash_after"),
        )
        return base

    # Progression
    if event.event_type == EventType.SUIT_AWARDED:
        base.update(suit=d.get("suit"), suit_count=d.get("suit_count"))
        return base

    if event.event_type == EventType.LEVEL_UP:
        base.update(level=d.get("level"))
        return base

    if event.event_type == EventType.SALARY:
        base.update(amount=d.get("amount"), level=d.get("level"), cash_after=d.get("new_balance"))
        return base

    # Stocks
    if event.event_type in (EventType.SHARES_BOUGHT, EventType.SHARES_SOLD):
        base.update(
            district=d.get("district"),
            count=d.get("count"),
            price=d.get("price"),
            total=d.get("total"),
            cash_after=d.get("new_balance"),
        )
        return base

    if event.event_type == EventType.FORCED_LIQUIDATION:
        base.update(holdings=d.get("holdings", {}), proceeds=d.get("proceeds"), cash_after=d.get("new_balance"))
        return base

    if event.event_type == EventType.BANKRUPTCY:
        base.update(creditor_id=d.get("creditor"), amount=d.get("amount"), stage=d.get("stage"))
        if "paid" in d:
            base["paid"] = d["paid"]
        return base

    # Turn + game state
    if event.event_type == EventType.TURN_START:
        base.update(turn_number=d.get("turn"), round_number=d.get("round"))
        return base

    if event.event_type == EventType.TURN_SETTLED:
        base.update(turn_number=d.get("turn"), cash=d.get("cash"))
        return base

    if event.event_type == EventType.GAME_START:
        players = d.get("players") or []
        base.update(
            player_names=players,
            num_players=len(players),
            starting_cash=d.get("starting_cash"),
            seed=d.get("seed"),
            tiles=d.get("tiles"),
        )
        return base

    if event.event_type == EventType.GAME_END:
        base.update(
            winner_id=d.get("winner"),
            winner_networth=d.get("net_worth"),
            turns=d.get("turns"),
            rounds=d.get("rounds"),
        )
        return base

    # Default: echo raw fields
    base.update(d)
    return base


def map_events(board: Board, events: Iterable[GameEvent], *, start: int = 0) -> List[Dict[str, Any]]:
    """Map a sequence of GameEvent objects.

    Args:
        board: Board instance
        events: iterable of GameEvent
        start: sequence number of the first event (for incremental flushing)
    """
    mapped: List[Dict[str, Any]] = []
    for idx, ev in enumerate(events, start=start):
        mev = map_event(board, ev)
        mev["seq"] = idx
        mapped.append(mev)
    return mapped
