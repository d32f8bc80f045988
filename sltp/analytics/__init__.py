"""Analytics over a ledger snapshot.

Every function here is pure: it takes entries and settings by value and
returns a freshly computed result. Anything that depends on the current
date takes it as an explicit ``today`` argument.
"""

from sltp.analytics.aggregate import calendar_month, daily_summary, monthly_summary
from sltp.analytics.challenge import (
    classify_risk,
    compute_challenge_progress,
    required_daily_r,
)
from sltp.analytics.ledger import (
    actual_trades,
    balance_before,
    current_balance,
    net_pnl,
    split_day,
)
from sltp.analytics.risk import RiskUnit, day_risk
from sltp.analytics.stats import (
    EquityCurve,
    TradeSeries,
    compute_stats,
    performance_by_symbol,
)

__all__ = [
    "calendar_month",
    "daily_summary",
    "monthly_summary",
    "classify_risk",
    "compute_challenge_progress",
    "required_daily_r",
    "actual_trades",
    "balance_before",
    "current_balance",
    "net_pnl",
    "split_day",
    "RiskUnit",
    "day_risk",
    "EquityCurve",
    "TradeSeries",
    "compute_stats",
    "performance_by_symbol",
]
