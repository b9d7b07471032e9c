"""
Game event logging.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    MOVE = "move"
    PASSED_START = "passed_start"
    LAND = "land"

    PURCHASE = "purchase"
    PURCHASE_DECLINED = "purchase_declined"
    OWNERSHIP_CHANGED = "ownership_changed"
    FEE_PAYMENT = "fee_payment"

    CHANCE_EFFECT = "chance_effect"

    SUIT_AWARDED = "suit_awarded"
    LEVEL_UP = "level_up"
    SALARY = "salary"

    SHARES_BOUGHT = "shares_bought"
    SHARES_SOLD = "shares_sold"

    FORCED_LIQUIDATION = "forced_liquidation"
    BANKRUPTCY = "bankruptcy"
    TURN_SETTLED = "turn_settled"
    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    player_id: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = f"P{self.player_id}" if self.player_id is not None else "System"
        return f"[{player_str}] {self.event_type.value}: {self.details}"


class EventLog:
    """Manages the ordered, replayable game event stream."""

    def __init__(self):
        self.events: List[GameEvent] = []

    def log(self, event_type: EventType, player_id: Optional[int] = None, **details: Any) -> None:
        """Log a game event."""
        event = GameEvent(event_type, player_id, details)
        self.events.append(event)

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        return self.events[-count:]

    def events_since(self, index: int) -> List[GameEvent]:
        """Get every event logged at or after the given index."""
        return self.events[max(index, 0):]

    def __len__(self) -> int:
        return len(self.events)
