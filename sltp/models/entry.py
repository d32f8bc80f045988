"""LedgerEntry data model."""

import secrets
import time
from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field

WITHDRAWAL_PAIR = "WITHDRAWAL"


def new_entry_id() -> str:
    """Generate a unique entry ID.

    Millisecond timestamp followed by a short random suffix, so IDs
    still sort roughly by creation time.
    """
    return f"{int(time.time() * 1000)}-{secrets.token_hex(3)}"


class LedgerEntry(BaseModel):
    """A single journal entry: a closed trade or a withdrawal."""

    id: str = Field(default_factory=new_entry_id, min_length=1, description="Entry ID")
    pair: str = Field(..., min_length=1, description="Instrument symbol or WITHDRAWAL")
    direction: Literal["long", "short"] = Field(..., description="Trade direction")
    pnl: float = Field(..., description="Gross profit/loss")
    fee: float = Field(default=0.0, description="Fee paid (sign is ignored)")
    date: date_type = Field(..., description="Trade date")
    notes: Optional[str] = Field(default=None, description="User notes")

    model_config = {"frozen": True}

    @property
    def is_withdrawal(self) -> bool:
        """Whether this entry is a cash withdrawal rather than a trade."""
        return self.pair == WITHDRAWAL_PAIR

    @classmethod
    def withdrawal(cls, amount: float, on: date_type) -> "LedgerEntry":
        """Build a withdrawal entry.

        Args:
            amount: Amount withdrawn, must be positive.
            on: Date of the withdrawal.

        Returns:
            Entry with a negative P&L equal to the withdrawn amount.
        """
        if amount <= 0:
            raise ValueError(f"Withdrawal amount must be positive, got {amount}")
        return cls(
            pair=WITHDRAWAL_PAIR,
            direction="long",
            pnl=-abs(amount),
            fee=0.0,
            date=on,
            notes="Withdrawal",
        )
