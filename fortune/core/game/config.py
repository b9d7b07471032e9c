"""
Game configuration settings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


DEFAULT_CHANCE_TABLE: Tuple[int, ...] = (-150, -100, -50, 50, 100, 150, 200)


class SuitAwardPolicy(Enum):
    """When a shop's suit symbol is handed to a player."""

    ON_PURCHASE = "on_purchase"
    ON_OWNER_LANDING = "on_owner_landing"


@dataclass
class GameConfig:
    """Configuration for a Fortune Street game."""

    starting_cash: int = 2500
    cash_floor: int = 0

    # Fee owed on landing = shop valuation * fee_rate * tile fee multiplier
    fee_rate: float = 0.10
    pass_start_bonus: int = 100

    # Salary paid on promotion: base + per_level * level + net_worth * rate
    base_salary: int = 500
    salary_per_level: int = 100
    salary_net_worth_rate: float = 0.10

    # Shop valuation grows by this fraction of the price for each owner level above 1
    level_value_step: float = 0.10

    # District share price = base * (1 + growth * owned_fraction)
    district_price_growth: float = 1.0

    suit_award_policy: SuitAwardPolicy = SuitAwardPolicy.ON_PURCHASE

    max_rounds: Optional[int] = None
    target_net_worth: Optional[int] = None
    end_on_bankruptcy: bool = True

    seed: Optional[int] = None
    chance_table: Tuple[int, ...] = field(default=DEFAULT_CHANCE_TABLE)
