"""Full-history trading statistics.

This module treats every entry it is given as a trade. Callers that want
withdrawals left out of win rate, bias and pair attribution must filter
them first (see ``sltp.analytics.ledger.actual_trades``).

Net P&L here subtracts the stored fee as-is, while the daily and monthly
aggregates subtract its magnitude. Both behaviours are kept on purpose.
"""

from typing import Iterable

from sltp.models import (
    LedgerEntry,
    PairStats,
    Ratio,
    SymbolPerformance,
    TradeBias,
    TradingStats,
)
from sltp.models.series import EquityCurve, TradeSeries, raw_net_pnl


def trade_bias(entries: Iterable[LedgerEntry]) -> TradeBias:
    """Count long vs short trades and name the dominant side."""
    long_count = 0
    short_count = 0
    for entry in entries:
        if entry.direction == "long":
            long_count += 1
        elif entry.direction == "short":
            short_count += 1

    if long_count > short_count:
        bias = "Long"
    elif short_count > long_count:
        bias = "Short"
    else:
        bias = "Neutral"
    return TradeBias(long=long_count, short=short_count, bias=bias)


def pair_statistics(entries: Iterable[LedgerEntry]) -> list[PairStats]:
    """Per-pair count, net P&L and worst single P&L.

    Pairs are returned in the order they first appear. ``min_loss``
    starts at 0, so a pair that never lost reports 0.
    """
    stats: dict[str, dict] = {}
    for entry in entries:
        acc = stats.setdefault(entry.pair, {"count": 0, "pnl": 0.0, "min_loss": 0.0})
        acc["count"] += 1
        acc["pnl"] += raw_net_pnl(entry)
        acc["min_loss"] = min(acc["min_loss"], entry.pnl)
    return [PairStats(pair=pair, **acc) for pair, acc in stats.items()]


def performance_by_symbol(entries: Iterable[LedgerEntry]) -> list[SymbolPerformance]:
    """Split each pair's gross P&L into winning and losing buckets.

    ``loss_pnl`` is a magnitude. Break-even trades land in neither bucket.
    """
    perf: dict[str, dict] = {}
    for entry in entries:
        acc = perf.setdefault(
            entry.pair, {"wins": 0, "losses": 0, "win_pnl": 0.0, "loss_pnl": 0.0}
        )
        if entry.pnl > 0:
            acc["wins"] += 1
            acc["win_pnl"] += entry.pnl
        elif entry.pnl < 0:
            acc["losses"] += 1
            acc["loss_pnl"] += abs(entry.pnl)

    return [
        SymbolPerformance(
            pair=pair,
            wins=acc["wins"],
            losses=acc["losses"],
            win_pnl=round(acc["win_pnl"], 2),
            loss_pnl=round(acc["loss_pnl"], 2),
        )
        for pair, acc in perf.items()
    ]


def compute_stats(entries: Iterable[LedgerEntry]) -> TradingStats:
    """Compute the full statistics bundle for a ledger.

    Args:
        entries: Entries to analyse, all treated as trades.

    Returns:
        TradingStats. An empty ledger yields zeros, undefined ratios and
        ``N/A`` pair labels.
    """
    trades = list(entries)
    if not trades:
        return TradingStats()

    net = sum(raw_net_pnl(t) for t in trades)

    wins = [t.pnl for t in trades if t.pnl > 0]
    losses = [t.pnl for t in trades if t.pnl < 0]
    win_rate = len(wins) / len(trades) * 100

    total_wins = sum(wins)
    total_losses = abs(sum(losses))
    profit_factor = Ratio.of(total_wins, total_losses)

    avg_win = total_wins / len(wins) if wins else 0.0
    avg_loss = total_losses / len(losses) if losses else 0.0
    avg_risk_reward = Ratio.of(avg_win, avg_loss)

    pairs = pair_statistics(trades)
    # max/min keep the first pair reached on ties
    most_traded = max(pairs, key=lambda p: p.count)
    most_profitable = max(pairs, key=lambda p: p.pnl)
    largest_loss = min(pairs, key=lambda p: p.min_loss)

    return TradingStats(
        total_trades=len(trades),
        net_pnl=net,
        win_rate=win_rate,
        profit_factor=profit_factor,
        avg_risk_reward=avg_risk_reward,
        largest_win=max(t.pnl for t in trades),
        largest_loss=min(t.pnl for t in trades),
        trade_bias=trade_bias(trades),
        most_traded_pair=most_traded.pair,
        most_profitable_pair=most_profitable.pair,
        largest_loss_pair=largest_loss.pair,
        pair_stats=pairs,
        performance_by_symbol=performance_by_symbol(trades),
        equity_curve=EquityCurve(trades),
        trade_series=TradeSeries(trades),
    )
