"""
Custom exception hierarchy for the Fortune Street engine and services.

Provides typed errors that can be handled consistently across
the core engine, services, and API layer.
"""


class FortuneError(Exception):
    """Base exception for all game-related errors."""


class ConstructionError(FortuneError):
    """Board definition is malformed; the game cannot start."""


class GameNotFoundError(FortuneError):
    """Game does not exist."""


class OutOfTurnActionError(FortuneError):
    """Action does not belong to the current player or turn phase."""


class UnknownDistrictError(FortuneError):
    """District id is not part of the board."""


class InsufficientFundsError(FortuneError):
    """A debit would drive cash below the configured floor."""

    def __init__(self, player_id: int, amount: int, available: int):
        super().__init__(
            f"Player {player_id} cannot pay {amount} (available above floor: {available})"
        )
        self.player_id = player_id
        self.amount = amount
        self.available = available


class ShareError(FortuneError):
    """Base class for stock trading failures."""


class InsufficientSharesError(ShareError):
    """Requested share count exceeds the district's remaining pool."""

    def __init__(self, district: str, requested: int, available: int):
        super().__init__(
            f"District {district!r} has {available} shares left, {requested} requested"
        )
        self.district = district
        self.requested = requested
        self.available = available


class InsufficientHoldingsError(ShareError):
    """Requested share count exceeds the player's holding."""

    def __init__(self, player_id: int, district: str, requested: int, held: int):
        super().__init__(
            f"Player {player_id} holds {held} shares of {district!r}, {requested} requested"
        )
        self.player_id = player_id
        self.district = district
        self.requested = requested
        self.held = held
