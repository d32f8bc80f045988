"""Derived analytics results.

None of these are persisted; they are rebuilt from a ledger snapshot
every time they are needed.
"""

import math
from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field

from sltp.models.series import EquityCurve, TradeSeries

RiskLevel = Literal["Conservative", "Moderate", "Aggressive"]
DayTone = Literal["profit", "loss", "flat", "empty"]


class Ratio(BaseModel):
    """A ratio that may have no finite value.

    ``finite`` carries a number, ``unbounded`` means a positive numerator
    over a zero denominator, and ``undefined`` means both sides are zero.
    Undefined ratios are reported as 0 when converted to ``float``.
    """

    kind: Literal["finite", "unbounded", "undefined"] = Field(..., description="Ratio kind")
    value: Optional[float] = Field(default=None, description="Value for finite ratios")

    model_config = {"frozen": True}

    @classmethod
    def finite(cls, value: float) -> "Ratio":
        return cls(kind="finite", value=value)

    @classmethod
    def unbounded(cls) -> "Ratio":
        return cls(kind="unbounded")

    @classmethod
    def undefined(cls) -> "Ratio":
        return cls(kind="undefined")

    @classmethod
    def of(cls, numerator: float, denominator: float) -> "Ratio":
        """Divide two non-negative magnitudes."""
        if denominator > 0:
            return cls.finite(numerator / denominator)
        if numerator > 0:
            return cls.unbounded()
        return cls.undefined()

    @property
    def is_unbounded(self) -> bool:
        return self.kind == "unbounded"

    def __float__(self) -> float:
        if self.kind == "finite":
            return float(self.value)
        if self.kind == "unbounded":
            return math.inf
        return 0.0


class DailySummary(BaseModel):
    """Trading activity for a single day, withdrawals excluded."""

    date: date_type = Field(..., description="Day summarised")
    total_trades: int = Field(..., ge=0, description="Number of trades")
    total_pnl: float = Field(..., description="P&L net of fees")
    total_fees: float = Field(..., ge=0, description="Fees paid")
    win_count: int = Field(..., ge=0, description="Trades with positive P&L")
    loss_count: int = Field(..., ge=0, description="Trades with negative P&L")
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage")

    model_config = {"frozen": True}


class MonthlySummary(BaseModel):
    """Portfolio summary for one calendar month, withdrawals excluded."""

    month: int = Field(..., ge=1, le=12, description="Calendar month")
    year: int = Field(..., description="Calendar year")
    monthly_pl: float = Field(..., description="P&L net of fees")
    monthly_ev: float = Field(..., description="Net gross P&L per winning trade")
    monthly_fees: float = Field(..., ge=0, description="Fees paid")
    fees_percent: float = Field(..., ge=0, description="Fees as a share of gross P&L")
    win_count: int = Field(..., ge=0, description="Trades with positive P&L")
    loss_count: int = Field(..., ge=0, description="Trades with negative P&L")

    model_config = {"frozen": True}

    @property
    def win_rate(self) -> float:
        """Win rate over decisive (non break-even) trades."""
        decided = self.win_count + self.loss_count
        return self.win_count / decided * 100 if decided > 0 else 0.0


class CalendarDay(BaseModel):
    """One cell of the monthly calendar heat-map."""

    date: date_type = Field(..., description="Calendar day")
    pnl: float = Field(default=0.0, description="Trading P&L net of fees")
    trade_count: int = Field(default=0, ge=0, description="Number of trades")
    tone: DayTone = Field(default="empty", description="Heat-map colour class")
    is_today: bool = Field(default=False, description="Whether this is the reference day")

    model_config = {"frozen": True}


class DayRisk(BaseModel):
    """A day's result expressed in risk units, with target and budget."""

    date: date_type = Field(..., description="Day evaluated")
    reference_balance: float = Field(..., description="Balance at the start of the day")
    unit_size: float = Field(..., ge=0, description="Dollar value of 1R")
    total_pnl: float = Field(..., description="Trading P&L net of fees")
    total_r: Optional[float] = Field(
        default=None, description="P&L in R, None when the balance is not positive"
    )
    target_amount: float = Field(..., description="Daily target in dollars")
    sl_amount: float = Field(..., description="Daily stop-loss budget in dollars")
    target_hit: bool = Field(default=False, description="P&L reached the target")
    sl_breached: bool = Field(default=False, description="Loss reached the SL budget")

    model_config = {"frozen": True}


class TradeBias(BaseModel):
    """Long/short split of the ledger."""

    long: int = Field(default=0, ge=0, description="Long trades")
    short: int = Field(default=0, ge=0, description="Short trades")
    bias: Literal["Long", "Short", "Neutral"] = Field(default="Neutral", description="Dominant side")

    model_config = {"frozen": True}


class PairStats(BaseModel):
    """Accumulated activity for a single pair."""

    pair: str
    count: int = 0
    pnl: float = 0.0
    min_loss: float = 0.0

    model_config = {"frozen": True}


class SymbolPerformance(BaseModel):
    """Winning and losing P&L buckets for a single pair."""

    pair: str
    wins: int = 0
    losses: int = 0
    win_pnl: float = 0.0
    loss_pnl: float = 0.0

    model_config = {"frozen": True}


class TradingStats(BaseModel):
    """Full-history statistics bundle."""

    total_trades: int = 0
    net_pnl: float = 0.0
    win_rate: float = 0.0
    profit_factor: Ratio = Field(default_factory=Ratio.undefined)
    avg_risk_reward: Ratio = Field(default_factory=Ratio.undefined)
    largest_win: float = 0.0
    largest_loss: float = 0.0
    trade_bias: TradeBias = Field(default_factory=TradeBias)
    most_traded_pair: str = "N/A"
    most_profitable_pair: str = "N/A"
    largest_loss_pair: str = "N/A"
    pair_stats: list[PairStats] = Field(default_factory=list)
    performance_by_symbol: list[SymbolPerformance] = Field(default_factory=list)
    equity_curve: EquityCurve = Field(default_factory=EquityCurve)
    trade_series: TradeSeries = Field(default_factory=TradeSeries)

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


class ChallengeProgress(BaseModel):
    """Where an active challenge stands."""

    current_balance: float = Field(..., description="Balance now")
    target_balance: float = Field(..., description="Balance to reach")
    days_elapsed: int = Field(..., description="Whole days since the start")
    days_remaining: int = Field(..., ge=0, description="Days left")
    required_daily_r: float = Field(
        ..., description="Compound daily growth needed, in percent (R)"
    )
    risk_level: RiskLevel = Field(..., description="How demanding the pace is")

    model_config = {"frozen": True}

    @property
    def progress_percent(self) -> float:
        """Current balance as a share of the target, capped at 100."""
        if self.target_balance <= 0:
            return 0.0
        return max(0.0, min(self.current_balance / self.target_balance * 100, 100.0))
