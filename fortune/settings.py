"""
Central application configuration using pydantic-settings.

This module provides typed access to environment-based configuration for:
- Engine rules used when games are created by the CLI or the server
- Logging and event-log output

Per-game rule overrides still go through `GameConfig`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fortune.core.game.config import GameConfig, SuitAwardPolicy


class EngineSettings(BaseSettings):
    """
    Default rules and runtime options.

    Environment variables (prefix: FORTUNE_):
        FORTUNE_STARTING_CASH     - Cash each player starts with (default: 2500)
        FORTUNE_FEE_RATE          - Shop fee as a fraction of valuation (default: 0.10)
        FORTUNE_PASS_START_BONUS  - Bonus for passing tile 0 (default: 100)
        FORTUNE_SUIT_AWARD_POLICY - on_purchase | on_owner_landing (default: on_purchase)
        FORTUNE_MAX_ROUNDS        - Round limit (default: 30)
        FORTUNE_TARGET_NET_WORTH  - Net worth that ends the game (default: unset)
        FORTUNE_SEED              - Seed for dice and chance draws (default: unset)
        FORTUNE_LOG_LEVEL         - Python logging level (default: INFO)
        FORTUNE_EVENT_LOG_DIR     - Directory for JSONL event logs (default: .)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="FORTUNE_",
    )

    starting_cash: int = Field(default=2500, gt=0, description="Cash each player starts with.")
    fee_rate: float = Field(default=0.10, ge=0, description="Shop fee as a fraction of valuation.")
    pass_start_bonus: int = Field(default=100, ge=0, description="Bonus for passing tile 0.")
    suit_award_policy: SuitAwardPolicy = Field(
        default=SuitAwardPolicy.ON_PURCHASE,
        description="When a shop's suit symbol is awarded.",
    )
    max_rounds: Optional[int] = Field(default=30, ge=1, description="Round limit per game.")
    target_net_worth: Optional[int] = Field(default=None, gt=0, description="Net worth that ends the game.")
    seed: Optional[int] = Field(default=None, description="Seed for dice and chance draws.")

    log_level: str = Field(default="INFO", description="Python logging level name.")
    event_log_dir: str = Field(default=".", description="Directory for JSONL event logs.")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        """Accept any case, fall back to INFO when empty."""
        if not value:
            return "INFO"
        return str(value).upper()

    def to_game_config(self, **overrides) -> GameConfig:
        """Build a GameConfig from these settings, with per-game overrides."""
        values = {
            "starting_cash": self.starting_cash,
            "fee_rate": self.fee_rate,
            "pass_start_bonus": self.pass_start_bonus,
            "suit_award_policy": self.suit_award_policy,
            "max_rounds": self.max_rounds,
            "target_net_worth": self.target_net_worth,
            "seed": self.seed,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GameConfig(**values)


@lru_cache
def get_engine_settings() -> EngineSettings:
    """Return cached engine settings instance."""
    return EngineSettings()
