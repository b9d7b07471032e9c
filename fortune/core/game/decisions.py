"""
Decision requests the engine hands to the external actor.

While a turn is parked in an awaiting phase, exactly one of these describes
what the current player has to answer.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class DecisionRequest:
    """Base class for a pending decision."""

    player_id: int

    kind = "decision"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class RollPrompt(DecisionRequest):
    """Start of turn: roll, or trade stock first."""

    kind = "roll"


@dataclass(frozen=True)
class PurchaseOffer(DecisionRequest):
    """The player landed on an unowned shop."""

    position: int
    shop: str
    price: int

    kind = "purchase_offer"


@dataclass(frozen=True)
class FeeDue(DecisionRequest):
    """The player landed on a shop owned by someone else."""

    position: int
    shop: str
    owner_id: int
    amount: int

    kind = "fee_due"


@dataclass(frozen=True)
class ChanceDraw(DecisionRequest):
    """The player landed on a chance tile and must draw."""

    position: int

    kind = "chance_draw"


@dataclass(frozen=True)
class BankVisit(DecisionRequest):
    """The player is at the bank and may trade stock before leaving."""

    promoted: bool
    level: int
    share_prices: Dict[str, int] = field(default_factory=dict)

    kind = "bank_visit"
