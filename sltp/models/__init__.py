"""Data models for the SLTP journal."""

from sltp.models.entry import WITHDRAWAL_PAIR, LedgerEntry, new_entry_id
from sltp.models.settings import AppSettings, ChallengeSettings
from sltp.models.results import (
    CalendarDay,
    ChallengeProgress,
    DailySummary,
    DayRisk,
    MonthlySummary,
    PairStats,
    Ratio,
    RiskLevel,
    SymbolPerformance,
    TradeBias,
    TradingStats,
)
from sltp.models.series import EquityCurve, EquityPoint, TradePoint, TradeSeries

__all__ = [
    "WITHDRAWAL_PAIR",
    "LedgerEntry",
    "new_entry_id",
    "AppSettings",
    "ChallengeSettings",
    "CalendarDay",
    "ChallengeProgress",
    "DailySummary",
    "DayRisk",
    "EquityCurve",
    "EquityPoint",
    "MonthlySummary",
    "PairStats",
    "Ratio",
    "RiskLevel",
    "SymbolPerformance",
    "TradeBias",
    "TradePoint",
    "TradeSeries",
    "TradingStats",
]
