"""Risk-unit (R) conversion.

One R is 1% of a reference balance. For a single day the reference is the
balance at the start of that day, not the running balance including it.
"""

from datetime import date
from typing import Iterable, Optional

from sltp.analytics.aggregate import daily_summary
from sltp.analytics.ledger import balance_before
from sltp.models import AppSettings, DayRisk, LedgerEntry

RISK_UNIT_FRACTION = 0.01


class RiskUnit:
    """Converts between dollars and risk units for a reference balance.

    A non-positive reference balance has no meaningful risk unit: the
    unit size is reported as 0 and ``to_r`` returns None.
    """

    def __init__(self, reference_balance: float):
        self.reference_balance = reference_balance

    @property
    def is_degenerate(self) -> bool:
        return self.reference_balance <= 0

    @property
    def size(self) -> float:
        """Dollar value of 1R."""
        if self.is_degenerate:
            return 0.0
        return self.reference_balance * RISK_UNIT_FRACTION

    def to_r(self, amount: float) -> Optional[float]:
        """Express a dollar amount in R."""
        if self.is_degenerate:
            return None
        return amount / self.size

    def amount(self, multiple: float) -> float:
        """Dollar value of ``multiple`` R."""
        return self.size * multiple

    def __repr__(self) -> str:
        return f"RiskUnit(reference_balance={self.reference_balance!r})"


def day_risk(
    entries: Iterable[LedgerEntry], settings: AppSettings, day: date
) -> DayRisk:
    """Evaluate a day's trading result against the daily target and SL budget.

    Args:
        entries: Ledger snapshot.
        settings: Settings providing beginning balance and R multiples.
        day: Day to evaluate.

    Returns:
        DayRisk for the day.
    """
    entries = list(entries)
    reference = balance_before(entries, settings.beginning_balance, day)
    unit = RiskUnit(reference)
    summary = daily_summary(entries, day)

    target_amount = unit.amount(settings.daily_target_r)
    sl_amount = unit.amount(settings.sl_budget_r)

    return DayRisk(
        date=day,
        reference_balance=reference,
        unit_size=unit.size,
        total_pnl=summary.total_pnl,
        total_r=unit.to_r(summary.total_pnl),
        target_amount=target_amount,
        sl_amount=sl_amount,
        target_hit=(
            not unit.is_degenerate
            and summary.total_trades > 0
            and summary.total_pnl >= target_amount
        ),
        sl_breached=(
            not unit.is_degenerate
            and summary.total_trades > 0
            and summary.total_pnl <= -sl_amount
        ),
    )
