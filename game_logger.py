"""
JSONL logger for Fortune Street game events.

Writes the engine's event stream, mapped to public JSON events, plus
per-turn player snapshots, to a JSONL file.
"""

import json
import logging
from datetime import datetime
from typing import Any, Optional

from events.mapper import map_events
from snapshot import player_summary

logger = logging.getLogger(__name__)


class GameLogger:
    """Logger that writes game events to a JSONL file."""

    def __init__(self, log_file: Optional[str] = None):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file. If None, generates timestamped filename.
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"fortune_game_{timestamp}.jsonl"

        self.log_file = log_file
        self.event_count = 0
        self._engine_last_idx = 0  # last flushed index from engine's EventLog

        # Create/clear log file
        with open(self.log_file, "w"):
            pass

    def log_event(self, event_type: str, **kwargs: Any) -> None:
        """
        Log a game event to JSONL file.

        Args:
            event_type: Type of event (e.g., "game_start", "dice_roll", "purchase")
            **kwargs: Additional event data
        """
        event = {
            "event_id": self.event_count,
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
            **kwargs,
        }

        with open(self.log_file, "a") as f:
            f.write(json.dumps(event) + "\n")

        self.event_count += 1

    def flush_engine_events(self, game) -> int:
        """Flush new internal engine events to JSONL using the event mapper.

        Returns the number of events written.
        """
        events = game.event_log.events
        if self._engine_last_idx >= len(events):
            return 0

        new_events = events[self._engine_last_idx :]
        mapped = map_events(game.board, new_events, start=self._engine_last_idx)

        for m in mapped:
            if "turn_number" not in m:
                m["turn_number"] = game.turn_number

            if "player_id" in m:
                m["player_name"] = game.players[m["player_id"]].name
            if m.get("event_type") == "fee_payment" and m.get("owner_id") is not None:
                m["owner_name"] = game.players[m["owner_id"]].name

            if m.get("event_type") == "game_end":
                m["final_standings"] = [
                    {
                        "player_id": pid,
                        "player_name": p.name,
                        "net_worth": game.net_worth(pid),
                        "is_bankrupt": p.is_bankrupt,
                    }
                    for pid, p in sorted(game.players.items())
                ]

            etype = m.pop("event_type")
            self.log_event(etype, **m)

        self._engine_last_idx = len(events)
        logger.debug(f"Flushed {len(mapped)} engine events to {self.log_file}")
        return len(mapped)

    def log_turn_snapshot(self, game) -> None:
        """Log a state snapshot for every player at the start of a turn."""
        for player_id in sorted(game.players):
            summary = player_summary(game, player_id)
            summary["tile_name"] = game.board.tile_at(summary["position"]).name
            self.log_event("player_state", turn_number=game.turn_number, **summary)
