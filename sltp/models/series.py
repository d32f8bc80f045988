"""Chart series over a ledger: cumulative equity and per-trade P&L.

Both series sort entries by date, keeping input order within a day, and
can be iterated any number of times. P&L here subtracts the stored fee
as-is, matching full-history net P&L.
"""

from datetime import date
from typing import Iterable, Iterator, Sequence

from pydantic import BaseModel

from sltp.models.entry import LedgerEntry


class EquityPoint(BaseModel):
    """One point of the cumulative equity curve."""

    index: int
    date_label: str
    cumulative: float

    model_config = {"frozen": True}


class TradePoint(BaseModel):
    """One bar of the per-trade P&L chart."""

    index: int
    pnl: float
    pair: str
    date_label: str

    model_config = {"frozen": True}


def raw_net_pnl(entry: LedgerEntry) -> float:
    """P&L minus the fee exactly as stored."""
    return entry.pnl - entry.fee


def date_label(day: date) -> str:
    """Short chart label such as ``Dec 2``."""
    return f"{day.strftime('%b')} {day.day}"


def sort_by_date(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Sort entries by date, keeping input order within a day."""
    return sorted(entries, key=lambda e: e.date)


class EquityCurve:
    """Cumulative net P&L, one point per trade in date order.

    Iterating starts from the first trade every time, so the curve can
    be consumed more than once.
    """

    def __init__(self, entries: Iterable[LedgerEntry] = ()):
        self._trades: Sequence[LedgerEntry] = tuple(sort_by_date(entries))

    def __iter__(self) -> Iterator[EquityPoint]:
        cumulative = 0.0
        for index, trade in enumerate(self._trades, start=1):
            cumulative += raw_net_pnl(trade)
            yield EquityPoint(
                index=index,
                date_label=date_label(trade.date),
                cumulative=round(cumulative, 2),
            )

    def __len__(self) -> int:
        return len(self._trades)


class TradeSeries:
    """Per-trade net P&L in date order, restartable like EquityCurve."""

    def __init__(self, entries: Iterable[LedgerEntry] = ()):
        self._trades: Sequence[LedgerEntry] = tuple(sort_by_date(entries))

    def __iter__(self) -> Iterator[TradePoint]:
        for index, trade in enumerate(self._trades, start=1):
            yield TradePoint(
                index=index,
                pnl=round(raw_net_pnl(trade), 2),
                pair=trade.pair,
                date_label=date_label(trade.date),
            )

    def __len__(self) -> int:
        return len(self._trades)
