"""Ledger normalisation: net P&L, trade/withdrawal split and balances."""

from datetime import date
from typing import Iterable

from sltp.models import LedgerEntry


def net_pnl(entry: LedgerEntry) -> float:
    """P&L of an entry after fees.

    Fees are subtracted by magnitude so that entries stored with a
    negative fee are treated the same as positive ones.
    """
    return entry.pnl - abs(entry.fee)


def actual_trades(entries: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """All entries that are trades rather than withdrawals."""
    return [e for e in entries if not e.is_withdrawal]


def split_day(
    entries: Iterable[LedgerEntry], day: date
) -> tuple[list[LedgerEntry], list[LedgerEntry]]:
    """Partition one day's entries into trades and withdrawals.

    Args:
        entries: Ledger snapshot.
        day: Day to select.

    Returns:
        Tuple of (actual trades, withdrawals) dated exactly ``day``.
    """
    trades: list[LedgerEntry] = []
    withdrawals: list[LedgerEntry] = []
    for entry in entries:
        if entry.date != day:
            continue
        if entry.is_withdrawal:
            withdrawals.append(entry)
        else:
            trades.append(entry)
    return trades, withdrawals


def current_balance(entries: Iterable[LedgerEntry], beginning_balance: float) -> float:
    """Account balance after every entry, withdrawals included."""
    return beginning_balance + sum(net_pnl(e) for e in entries)


def balance_before(
    entries: Iterable[LedgerEntry], beginning_balance: float, day: date
) -> float:
    """Account balance at the start of ``day``.

    Only entries dated strictly before ``day`` count; withdrawals are
    included as they reduce the balance like any other entry.
    """
    return beginning_balance + sum(net_pnl(e) for e in entries if e.date < day)
