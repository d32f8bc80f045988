"""Application and challenge settings models."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_PAIRS = ["BTC/USD", "ETH/USD", "SOL/USD", "XRP/USD"]


class ChallengeSettings(BaseModel):
    """Growth challenge configuration.

    ``enabled`` is the state discriminant. ``start_date`` and
    ``starting_balance`` are snapshotted when the challenge is switched
    on and stay fixed while it remains enabled.
    """

    enabled: bool = Field(default=False, description="Whether the challenge is active")
    target_balance: float = Field(default=0.0, description="Balance to reach")
    duration_days: int = Field(default=0, ge=0, description="Challenge length in days")
    start_date: Optional[date] = Field(default=None, description="Day the challenge began")
    starting_balance: float = Field(default=0.0, description="Balance when enabled")

    model_config = {"frozen": True}


class AppSettings(BaseModel):
    """User settings for the journal."""

    beginning_balance: float = Field(
        default=10000.0, description="Account balance before any recorded entry"
    )
    daily_target_r: float = Field(default=2.0, description="Daily profit target in R")
    sl_budget_r: float = Field(default=1.0, description="Daily stop-loss budget in R")
    pairs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PAIRS), description="Tradable symbols"
    )
    theme: Literal["light", "dark"] = Field(default="dark", description="UI theme")
    challenge: ChallengeSettings = Field(
        default_factory=ChallengeSettings, description="Growth challenge"
    )

    model_config = {"frozen": True}


def enable_challenge(
    settings: AppSettings,
    target_balance: float,
    duration_days: int,
    current_balance: float,
    today: date,
) -> AppSettings:
    """Switch the challenge on, or update an active one.

    On the Disabled -> Active transition the start date and starting
    balance are captured from ``today`` and ``current_balance``. An
    already active challenge keeps its original snapshot.

    Args:
        settings: Current settings.
        target_balance: Balance to reach.
        duration_days: Number of days allowed.
        current_balance: Balance right now.
        today: Reference date.

    Returns:
        Updated settings.
    """
    challenge = settings.challenge
    if challenge.enabled and challenge.start_date is not None:
        updated = challenge.model_copy(
            update={"target_balance": target_balance, "duration_days": duration_days}
        )
    else:
        updated = ChallengeSettings(
            enabled=True,
            target_balance=target_balance,
            duration_days=duration_days,
            start_date=today,
            starting_balance=current_balance,
        )
    return settings.model_copy(update={"challenge": updated})


def disable_challenge(settings: AppSettings) -> AppSettings:
    """Switch the challenge off, keeping target and duration for next time."""
    updated = settings.challenge.model_copy(
        update={"enabled": False, "start_date": None, "starting_balance": 0.0}
    )
    return settings.model_copy(update={"challenge": updated})


def with_pair_added(settings: AppSettings, pair: str) -> AppSettings:
    """Add a symbol to the pair list. Blank or duplicate symbols are ignored."""
    pair = pair.strip()
    if not pair or pair in settings.pairs:
        return settings
    return settings.model_copy(update={"pairs": [*settings.pairs, pair]})


def with_pair_removed(settings: AppSettings, pair: str) -> AppSettings:
    """Remove a symbol from the pair list."""
    return settings.model_copy(
        update={"pairs": [p for p in settings.pairs if p != pair]}
    )
