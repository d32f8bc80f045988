"""Daily and monthly P&L aggregation.

Withdrawals are cash movements, not trades, so every aggregate here is
computed over actual trades only.
"""

import calendar
from collections import defaultdict
from datetime import date
from typing import Iterable

from sltp.analytics.ledger import actual_trades, net_pnl, split_day
from sltp.models import CalendarDay, DailySummary, LedgerEntry, MonthlySummary


def daily_summary(entries: Iterable[LedgerEntry], day: date) -> DailySummary:
    """Summarise the trades of a single day.

    Args:
        entries: Ledger snapshot.
        day: Day to summarise.

    Returns:
        DailySummary. A day without trades yields zeros.
    """
    trades, _ = split_day(entries, day)

    total_pnl = 0.0
    total_fees = 0.0
    win_count = 0
    loss_count = 0

    for trade in trades:
        total_pnl += net_pnl(trade)
        total_fees += abs(trade.fee)
        if trade.pnl > 0:
            win_count += 1
        elif trade.pnl < 0:
            loss_count += 1

    total_trades = len(trades)
    win_rate = (win_count / total_trades * 100) if total_trades > 0 else 0.0

    return DailySummary(
        date=day,
        total_trades=total_trades,
        total_pnl=total_pnl,
        total_fees=total_fees,
        win_count=win_count,
        loss_count=loss_count,
        win_rate=win_rate,
    )


def monthly_summary(
    entries: Iterable[LedgerEntry], month: int, year: int
) -> MonthlySummary:
    """Summarise the trades of one calendar month.

    ``monthly_ev`` is gross winning P&L minus gross losing P&L, divided by
    the number of winning trades. ``fees_percent`` expresses fees against
    the month's gross (pre-fee) P&L.

    Args:
        entries: Ledger snapshot.
        month: Month number, 1-12.
        year: Four digit year.

    Returns:
        MonthlySummary. A month without trades yields zeros.
    """
    trades = [
        t for t in actual_trades(entries)
        if t.date.month == month and t.date.year == year
    ]

    monthly_pl = 0.0
    monthly_fees = 0.0
    total_win_pnl = 0.0
    total_loss_pnl = 0.0
    win_count = 0
    loss_count = 0

    for trade in trades:
        monthly_pl += net_pnl(trade)
        monthly_fees += abs(trade.fee)
        if trade.pnl > 0:
            total_win_pnl += trade.pnl
            win_count += 1
        elif trade.pnl < 0:
            total_loss_pnl += abs(trade.pnl)
            loss_count += 1

    monthly_ev = (total_win_pnl - total_loss_pnl) / win_count if win_count > 0 else 0.0

    gross_pl = monthly_pl + monthly_fees
    fees_percent = monthly_fees / abs(gross_pl) * 100 if gross_pl != 0 else 0.0

    return MonthlySummary(
        month=month,
        year=year,
        monthly_pl=monthly_pl,
        monthly_ev=monthly_ev,
        monthly_fees=monthly_fees,
        fees_percent=fees_percent,
        win_count=win_count,
        loss_count=loss_count,
    )


def calendar_month(
    entries: Iterable[LedgerEntry], month: int, year: int, today: date
) -> list[CalendarDay]:
    """Build the heat-map cells for a calendar month.

    Days with no entries at all are ``empty``. Days that only hold
    withdrawals are ``flat`` with zero trades.

    Args:
        entries: Ledger snapshot.
        month: Month number, 1-12.
        year: Four digit year.
        today: Reference day used to flag ``is_today``.

    Returns:
        One CalendarDay per day of the month, in order.
    """
    by_day: dict[date, list[LedgerEntry]] = defaultdict(list)
    for entry in entries:
        if entry.date.month == month and entry.date.year == year:
            by_day[entry.date].append(entry)

    _, days_in_month = calendar.monthrange(year, month)
    cells = []
    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        day_entries = by_day.get(day)

        if not day_entries:
            cells.append(CalendarDay(date=day, is_today=day == today))
            continue

        trades = actual_trades(day_entries)
        pnl = sum(net_pnl(t) for t in trades)
        if pnl > 0:
            tone = "profit"
        elif pnl < 0:
            tone = "loss"
        else:
            tone = "flat"

        cells.append(
            CalendarDay(
                date=day,
                pnl=pnl,
                trade_count=len(trades),
                tone=tone,
                is_today=day == today,
            )
        )
    return cells
