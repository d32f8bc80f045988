"""Journal entry commands for SLTP CLI.

Handles logging trades and withdrawals, listing, editing, deleting and
importing entries.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from sltp.cli.common import console, error_panel, get_settings, get_store, money
from sltp.cli.parsing import AMOUNT, DAY


@click.command()
@click.argument("pair")
@click.argument("direction", type=click.Choice(["long", "short"], case_sensitive=False))
@click.option(
    "-p", "--pnl",
    type=AMOUNT,
    required=True,
    help="Gross P&L of the trade. Sums like 100+50-20 are accepted.",
)
@click.option(
    "-f", "--fee",
    type=AMOUNT,
    default=0.0,
    help="Fee paid for the trade.",
)
@click.option(
    "-d", "--date",
    "trade_date",
    type=DAY,
    default=None,
    help="Trade date (YYYY-MM-DD). Defaults to today.",
)
@click.option(
    "-n", "--notes",
    type=str,
    default=None,
    help="Free-text notes.",
)
def add(
    pair: str,
    direction: str,
    pnl: float,
    fee: float,
    trade_date: Optional[date],
    notes: Optional[str],
) -> None:
    """Log a closed trade.

    PAIR is the instrument symbol (e.g., BTC/USD).
    DIRECTION is long or short.

    \b
    Examples:
      sltp add BTC/USD long --pnl 150 --fee 2.5
      sltp add ETH/USD short --pnl -45 --fee 1.5 --notes "Stopped out"
      sltp add SOL/USD long --pnl 80+40-15 --date 2025-12-15
    """
    from sltp.models import WITHDRAWAL_PAIR, LedgerEntry

    pair = pair.upper()
    if pair == WITHDRAWAL_PAIR:
        error_panel("Use [cyan]sltp withdraw[/cyan] to record withdrawals.")

    settings = get_settings()
    if settings.pairs and pair not in settings.pairs:
        console.print(
            f"[yellow]{pair} is not in your pair list. "
            f"Add it with [cyan]sltp settings pair-add {pair}[/cyan].[/yellow]"
        )

    entry = LedgerEntry(
        pair=pair,
        direction=direction.lower(),
        pnl=pnl,
        fee=fee,
        date=trade_date or date.today(),
        notes=notes,
    )
    get_store().add_entry(entry)

    console.print(Panel(
        f"[bold]{entry.pair}[/bold] {entry.direction.upper()} on {entry.date.isoformat()}\n\n"
        f"P&L: {money(entry.pnl)}   Fee: ${abs(entry.fee):,.2f}\n"
        f"[dim]ID: {entry.id}[/dim]",
        title="[bold green]Trade Logged[/bold green]",
        border_style="green",
    ))


@click.command()
@click.argument("amount", type=AMOUNT)
@click.option(
    "-d", "--date",
    "withdraw_date",
    type=DAY,
    default=None,
    help="Withdrawal date (YYYY-MM-DD). Defaults to today.",
)
def withdraw(amount: float, withdraw_date: Optional[date]) -> None:
    """Record a withdrawal from the account.

    Withdrawals reduce the account balance but are not counted
    as trades in any statistic.

    \b
    Examples:
      sltp withdraw 500
      sltp withdraw 1000 --date 2025-12-31
    """
    from sltp.models import LedgerEntry

    try:
        entry = LedgerEntry.withdrawal(amount, withdraw_date or date.today())
    except ValueError as e:
        error_panel(str(e))

    get_store().add_entry(entry)
    console.print(Panel(
        f"Withdrew [bold]${abs(entry.pnl):,.2f}[/bold] on {entry.date.isoformat()}\n"
        f"[dim]ID: {entry.id}[/dim]",
        title="[bold cyan]Withdrawal[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.argument("entry_id")
@click.option(
    "-p", "--pnl",
    type=AMOUNT,
    default=None,
    help="New P&L. For a withdrawal, the amount withdrawn.",
)
@click.option(
    "-f", "--fee",
    type=AMOUNT,
    default=None,
    help="New fee.",
)
@click.option(
    "-d", "--date",
    "entry_date",
    type=DAY,
    default=None,
    help="New date (YYYY-MM-DD).",
)
@click.option(
    "-n", "--notes",
    type=str,
    default=None,
    help="New notes.",
)
def edit(
    entry_id: str,
    pnl: Optional[float],
    fee: Optional[float],
    entry_date: Optional[date],
    notes: Optional[str],
) -> None:
    """Change the P&L, fee, date or notes of an entry.

    For a withdrawal, --pnl is the amount withdrawn and is stored
    as a negative P&L. Withdrawals carry no fee.

    \b
    Examples:
      sltp edit 1734567890123-a1b2c3 --pnl 120 --notes "Partial exit"
      sltp edit 1734567890123-d4e5f6 --pnl 750    # withdrawal amount
    """
    store = get_store()
    entry = store.get_entry(entry_id)
    if entry is None:
        error_panel(f"No entry with ID {entry_id}")

    updates = {"pnl": pnl, "fee": fee, "date": entry_date, "notes": notes}
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        raise click.UsageError("Nothing to change. See 'sltp edit --help'.")

    if entry.is_withdrawal:
        if "fee" in updates:
            error_panel("Withdrawals carry no fee.")
        if "pnl" in updates:
            if pnl <= 0:
                error_panel("Withdrawal amount must be positive.")
            updates["pnl"] = -abs(pnl)

    changed = entry.model_copy(update=updates)
    store.update_entry(changed)

    console.print(Panel(
        f"[bold]{changed.pair}[/bold] on {changed.date.isoformat()}\n\n"
        f"P&L: {money(changed.pnl)}   Fee: ${abs(changed.fee):,.2f}\n"
        f"Notes: {changed.notes or '-'}",
        title="[bold green]Entry Updated[/bold green]",
        border_style="green",
    ))


@click.command()
@click.argument("entry_id")
def delete(entry_id: str) -> None:
    """Delete an entry by ID.

    \b
    Examples:
      sltp delete 1734567890123-a1b2c3
    """
    if not get_store().delete_entry(entry_id):
        error_panel(f"No entry with ID {entry_id}")
    console.print(f"[green]Deleted entry {entry_id}[/green]")


@click.command()
@click.option(
    "-d", "--date",
    "entry_date",
    type=DAY,
    default=None,
    help="Only show entries for this date.",
)
def entries(entry_date: Optional[date]) -> None:
    """List journal entries, newest first.

    \b
    Examples:
      sltp entries
      sltp entries --date 2025-12-02
    """
    rows = get_store().get_entries(day=entry_date)

    if not rows:
        console.print(Panel(
            "[dim]No entries found[/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Journal",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Pair")
    table.add_column("Side", justify="center")
    table.add_column("P&L", justify="right")
    table.add_column("Fee", justify="right")
    table.add_column("Notes", max_width=30)
    table.add_column("ID", style="dim")

    for entry in rows:
        if entry.is_withdrawal:
            side = "[yellow]-[/yellow]"
        elif entry.direction == "long":
            side = "[green]LONG[/green]"
        else:
            side = "[red]SHORT[/red]"

        table.add_row(
            entry.date.isoformat(),
            entry.pair,
            side,
            money(entry.pnl),
            f"${abs(entry.fee):,.2f}",
            entry.notes or "-",
            entry.id,
        )

    console.print(table)
    console.print(f"\n[bold]Total Entries:[/bold] {len(rows)}")


@click.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_(path: Path) -> None:
    """Import entries from a JSON export.

    PATH is a JSON array of entries with id, pair, direction, pnl,
    fee, date and optional notes. Entries whose ID is already in the
    journal are skipped.

    \b
    Examples:
      sltp import trades.json
    """
    from sltp.models import LedgerEntry

    try:
        raw = json.loads(path.read_text())
        parsed = [LedgerEntry(**item) for item in raw]
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        error_panel(f"Could not read {path}:\n\n{e}")

    imported = get_store().import_entries(parsed)
    console.print(Panel(
        f"Imported: {imported} entries\n"
        f"Skipped:  {len(parsed) - imported} (already in journal)",
        title="[bold cyan]Import Complete[/bold cyan]",
        border_style="cyan",
    ))
