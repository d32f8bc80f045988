"""Property-based tests for the statistics engine.

**Feature: sltp-journal**
"""

import math
from datetime import date

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from pydantic import ValidationError

from sltp.analytics.aggregate import daily_summary
from sltp.analytics.stats import (
    EquityCurve,
    TradeSeries,
    compute_stats,
    performance_by_symbol,
)
from sltp.models import LedgerEntry, Ratio, TradingStats
from sltp.models.series import date_label

DECEMBER_TRADES = [
    ("BTC/USD", "long", 150.00, 2.50, "2025-12-02"),
    ("ETH/USD", "long", 85.00, 1.50, "2025-12-05"),
    ("BTC/USD", "short", -45.00, 2.50, "2025-12-10"),
    ("SOL/USD", "long", 120.00, 1.80, "2025-12-15"),
    ("ETH/USD", "short", 60.00, 1.50, "2025-12-18"),
    ("BNB/USD", "long", 95.00, 1.75, "2025-12-20"),
    ("SOL/USD", "short", -30.00, 1.80, "2025-12-22"),
    ("BTC/USD", "long", 200.00, 2.50, "2025-12-28"),
]


def _ledger() -> list[LedgerEntry]:
    return [
        LedgerEntry(pair=pair, direction=side, pnl=pnl, fee=fee, date=date.fromisoformat(d))
        for pair, side, pnl, fee, d in DECEMBER_TRADES
    ]


def _trade(pnl: float, pair: str = "BTC/USD", day: date = date(2025, 12, 1), **kwargs) -> LedgerEntry:
    return LedgerEntry(pair=pair, direction=kwargs.pop("direction", "long"), pnl=pnl, date=day, **kwargs)


def entry_strategy():
    """Generate trade entries for testing."""
    return st.builds(
        LedgerEntry,
        id=st.uuids().map(str),
        pair=st.sampled_from(["BTC/USD", "ETH/USD", "SOL/USD"]),
        direction=st.sampled_from(["long", "short"]),
        pnl=st.floats(min_value=-10000.0, max_value=10000.0, allow_nan=False, allow_infinity=False),
        fee=st.floats(min_value=0.0, max_value=50.0, allow_nan=False, allow_infinity=False),
        date=st.dates(min_value=date(2024, 1, 1), max_value=date(2026, 12, 31)),
    )


class TestEmptyLedger:
    """
    **Feature: sltp-journal, Property: Empty Ledger**

    An empty ledger produces zeros and N/A, never an error.
    """

    def test_empty_ledger_returns_zeros(self):
        stats = compute_stats([])

        assert stats.net_pnl == 0
        assert stats.win_rate == 0
        assert float(stats.profit_factor) == 0
        assert float(stats.avg_risk_reward) == 0
        assert stats.largest_win == 0
        assert stats.largest_loss == 0
        assert stats.trade_bias.bias == "Neutral"
        assert stats.most_traded_pair == "N/A"
        assert stats.most_profitable_pair == "N/A"
        assert stats.largest_loss_pair == "N/A"
        assert list(stats.equity_curve) == []
        assert list(stats.trade_series) == []
        assert stats.performance_by_symbol == []


class TestSeriesFields:
    """Chart series on the statistics bundle are typed series objects."""

    def test_series_types(self):
        stats = compute_stats(_ledger())

        assert isinstance(stats.equity_curve, EquityCurve)
        assert isinstance(stats.trade_series, TradeSeries)
        assert len(stats.trade_series) == 8

    def test_defaults_are_empty_series(self):
        stats = TradingStats()

        assert isinstance(stats.equity_curve, EquityCurve)
        assert len(stats.equity_curve) == 0

    def test_rejects_plain_lists(self):
        with pytest.raises(ValidationError):
            TradingStats(equity_curve=[])


class TestRatios:
    """
    **Feature: sltp-journal, Property: Profit Factor Infinity**
    """

    def test_no_losers_is_unbounded(self):
        stats = compute_stats([_trade(100.0), _trade(50.0)])

        assert stats.profit_factor == Ratio.unbounded()
        assert stats.avg_risk_reward.is_unbounded
        assert float(stats.profit_factor) == math.inf

    def test_only_losers_is_zero(self):
        stats = compute_stats([_trade(-10.0)])

        assert stats.profit_factor == Ratio.finite(0.0)
        assert float(stats.profit_factor) == 0
        assert float(stats.avg_risk_reward) == 0

    def test_only_break_even_is_undefined(self):
        stats = compute_stats([_trade(0.0)])

        assert stats.profit_factor == Ratio.undefined()
        assert float(stats.profit_factor) == 0

    def test_sample_ratios(self):
        stats = compute_stats(_ledger())

        assert float(stats.profit_factor) == pytest.approx(710.0 / 75.0)
        assert float(stats.avg_risk_reward) == pytest.approx((710.0 / 6) / (75.0 / 2))


class TestWinRate:
    """
    **Feature: sltp-journal, Property: Win Rate Exactness**

    Break-even trades count as neither win nor loss but stay in the total.
    """

    def test_break_even_in_denominator(self):
        entries = [_trade(10.0), _trade(-5.0), _trade(0.0)]

        stats = compute_stats(entries)
        summary = daily_summary(entries, date(2025, 12, 1))

        assert stats.win_rate == pytest.approx(100 / 3)
        assert summary.win_count == 1
        assert summary.loss_count == 1
        assert summary.win_rate == pytest.approx(33.333, rel=1e-3)

    @given(entries=st.lists(entry_strategy(), min_size=1, max_size=50))
    @settings(max_examples=100)
    def test_win_rate_bounds(self, entries: list[LedgerEntry]):
        stats = compute_stats(entries)

        assert 0 <= stats.win_rate <= 100
        assert stats.largest_loss <= stats.largest_win


class TestSampleLedger:
    """Headline numbers over a realistic month."""

    def test_headline_metrics(self):
        stats = compute_stats(_ledger())

        assert stats.total_trades == 8
        assert stats.net_pnl == pytest.approx(619.15)
        assert stats.win_rate == pytest.approx(75.0)
        assert stats.largest_win == 200.0
        assert stats.largest_loss == -45.0
        assert stats.trade_bias.long == 5
        assert stats.trade_bias.short == 3
        assert stats.trade_bias.bias == "Long"

    def test_pair_attribution(self):
        stats = compute_stats(_ledger())

        assert stats.most_traded_pair == "BTC/USD"
        assert stats.most_profitable_pair == "BTC/USD"
        assert stats.largest_loss_pair == "BTC/USD"

        btc = next(p for p in stats.pair_stats if p.pair == "BTC/USD")
        assert btc.count == 3
        assert btc.pnl == pytest.approx(297.5)
        assert btc.min_loss == -45.0

        bnb = next(p for p in stats.pair_stats if p.pair == "BNB/USD")
        assert bnb.min_loss == 0.0

    def test_ties_go_to_first_pair_seen(self):
        entries = [
            _trade(10.0, pair="ETH/USD"),
            _trade(10.0, pair="BTC/USD"),
        ]

        stats = compute_stats(entries)

        assert stats.most_traded_pair == "ETH/USD"
        assert stats.most_profitable_pair == "ETH/USD"
        assert stats.largest_loss_pair == "ETH/USD"

    def test_bias_neutral_on_tie(self):
        stats = compute_stats([_trade(1.0, direction="long"), _trade(1.0, direction="short")])

        assert stats.trade_bias.bias == "Neutral"

    def test_short_bias(self):
        stats = compute_stats([_trade(1.0, direction="short")])

        assert stats.trade_bias.bias == "Short"


class TestFeeAsymmetry:
    """
    **Feature: sltp-journal, Property: Raw Fee in Full-History Net P&L**

    Full-history net P&L subtracts the stored fee as-is, while daily
    totals subtract its magnitude. Pinned so neither side drifts.
    """

    def test_negative_fee_diverges(self):
        entries = [_trade(100.0, fee=-2.0)]

        stats = compute_stats(entries)
        summary = daily_summary(entries, date(2025, 12, 1))

        assert stats.net_pnl == pytest.approx(102.0)
        assert summary.total_pnl == pytest.approx(98.0)


class TestStatsDoNotFilterWithdrawals:
    """Withdrawal filtering is the caller's job."""

    def test_withdrawal_counted_as_trade(self):
        entries = [_trade(200.0), LedgerEntry.withdrawal(500.0, date(2025, 12, 1))]

        stats = compute_stats(entries)

        assert stats.total_trades == 2
        assert stats.largest_loss == -500.0
        assert stats.largest_loss_pair == "WITHDRAWAL"


class TestSeries:
    """
    **Feature: sltp-journal, Property: Sort Stability**

    Chart series are in date order; entries sharing a date keep their
    input order.
    """

    def test_same_day_order_preserved(self):
        day = date(2025, 12, 5)
        entries = [
            _trade(3.0, pair="SOL/USD", day=day),
            _trade(1.0, pair="BTC/USD", day=date(2025, 12, 1)),
            _trade(-2.0, pair="ETH/USD", day=day),
            _trade(5.0, pair="XRP/USD", day=day),
        ]

        series = list(TradeSeries(entries))

        assert [p.pair for p in series] == ["BTC/USD", "SOL/USD", "ETH/USD", "XRP/USD"]
        assert [p.index for p in series] == [1, 2, 3, 4]

    def test_equity_curve_running_sum(self):
        curve = list(EquityCurve(_ledger()))

        assert len(curve) == 8
        assert curve[0].cumulative == 147.5
        assert curve[0].date_label == "Dec 2"
        assert curve[-1].cumulative == pytest.approx(619.15)

    def test_curve_is_restartable(self):
        curve = EquityCurve(_ledger())

        first = list(curve)
        second = list(curve)

        assert first == second
        assert len(curve) == 8

    @given(entries=st.lists(entry_strategy(), max_size=40))
    @settings(max_examples=100)
    def test_curve_ends_at_net_pnl(self, entries: list[LedgerEntry]):
        """
        *For any* ledger, the last curve point equals net P&L to the cent.
        """
        stats = compute_stats(entries)
        points = list(stats.equity_curve)

        assert len(points) == len(entries)
        if points:
            assert points[-1].cumulative == pytest.approx(stats.net_pnl, abs=0.01)

    def test_date_label(self):
        assert date_label(date(2025, 1, 9)) == "Jan 9"


class TestPerformanceBySymbol:
    """Win/loss buckets per pair."""

    def test_buckets(self):
        perf = {p.pair: p for p in performance_by_symbol(_ledger())}

        assert perf["BTC/USD"].wins == 2
        assert perf["BTC/USD"].losses == 1
        assert perf["BTC/USD"].win_pnl == 350.0
        assert perf["BTC/USD"].loss_pnl == 45.0
        assert perf["BNB/USD"].losses == 0
        assert perf["BNB/USD"].loss_pnl == 0.0

    def test_break_even_in_neither_bucket(self):
        perf = performance_by_symbol([_trade(0.0)])

        assert perf[0].wins == 0
        assert perf[0].losses == 0
