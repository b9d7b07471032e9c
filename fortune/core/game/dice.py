"""
Seedable randomness for dice and chance effects.

Every random draw in a game goes through one RandomnessSource so that a full
game can be replayed from its seed and decision sequence.
"""

import random
from typing import Any, Optional, Sequence, Tuple

from fortune.core.game.config import DEFAULT_CHANCE_TABLE


class RandomnessSource:
    """Die rolls and chance-table lookups driven by an explicit seed."""

    def __init__(self, seed: Optional[int] = None, chance_table: Sequence[int] = DEFAULT_CHANCE_TABLE):
        if not chance_table:
            raise ValueError("chance_table must contain at least one entry")
        self.seed = seed
        self.chance_table: Tuple[int, ...] = tuple(chance_table)
        self._rng = random.Random(seed)

    def roll_die(self) -> int:
        """Roll a single six-sided die."""
        return self._rng.randint(1, 6)

    def chance_effect(self) -> int:
        """Draw a signed cash delta from the chance table."""
        return self._rng.choice(self.chance_table)

    def getstate(self) -> Any:
        return self._rng.getstate()

    def setstate(self, state: Any) -> None:
        self._rng.setstate(state)
