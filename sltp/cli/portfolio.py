"""Portfolio commands for SLTP CLI.

Monthly summary, calendar heat-map, daily detail and full-history
statistics.
"""

import calendar as calendar_module
from datetime import date
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from sltp.cli.common import console, error_panel, get_settings, get_store, money
from sltp.cli.parsing import DAY

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
CELL_STYLES = {
    "profit": "green",
    "loss": "red",
    "flat": "white",
    "empty": "dim",
}


def _month_options(func):
    func = click.option(
        "-y", "--year",
        type=int,
        default=None,
        help="Year (defaults to the current year).",
    )(func)
    func = click.option(
        "-m", "--month",
        type=click.IntRange(1, 12),
        default=None,
        help="Month number 1-12 (defaults to the current month).",
    )(func)
    return func


def _ratio_text(ratio, prefix: str = "") -> str:
    if ratio.is_unbounded:
        return "∞"
    return f"{prefix}{float(ratio):.2f}"


@click.command()
@_month_options
def summary(month: Optional[int], year: Optional[int]) -> None:
    """Show the monthly P&L summary and account balance.

    \b
    Examples:
      sltp summary                      # Current month
      sltp summary --month 12 --year 2025
    """
    from sltp.analytics import compute_challenge_progress, current_balance, monthly_summary

    today = date.today()
    month = month or today.month
    year = year or today.year

    entries = get_store().get_entries()
    settings = get_settings()
    result = monthly_summary(entries, month, year)
    balance = current_balance(entries, settings.beginning_balance)

    ev_color = "green" if result.monthly_ev >= 0 else "red"
    text = (
        f"[bold]{calendar_module.month_name[month]} {year}[/bold]\n\n"
        f"Monthly P/L:   {money(result.monthly_pl)}\n"
        f"Monthly EV:    [{ev_color}]${abs(result.monthly_ev):,.2f}[/{ev_color}]\n"
        f"Fees:          ${result.monthly_fees:,.2f} "
        f"[dim]({result.fees_percent:.1f}% of gross)[/dim]\n"
        f"Win Rate:      {result.win_rate:.0f}% "
        f"[dim]({result.win_count}W / {result.loss_count}L)[/dim]\n"
        f"{'─' * 30}\n"
        f"[bold]Balance:       ${balance:,.2f}[/bold]"
    )
    console.print(Panel(text, title="[bold cyan]Portfolio[/bold cyan]", border_style="cyan"))

    progress = compute_challenge_progress(settings.challenge, balance, today)
    if progress is not None:
        from sltp.cli.challenge import render_progress

        render_progress(progress)


@click.command()
@_month_options
def calendar(month: Optional[int], year: Optional[int]) -> None:
    """Show a calendar heat-map of daily trading P&L.

    \b
    Examples:
      sltp calendar
      sltp calendar --month 12 --year 2025
    """
    from sltp.analytics import calendar_month

    today = date.today()
    month = month or today.month
    year = year or today.year

    cells = calendar_month(get_store().get_entries(), month, year, today)

    table = Table(
        title=f"{calendar_module.month_name[month]} {year}",
        show_header=True,
        header_style="bold cyan",
        show_lines=True,
    )
    for header in WEEKDAY_HEADERS:
        table.add_column(header, justify="center", min_width=9)

    # Sunday-first weeks
    offset = (cells[0].date.weekday() + 1) % 7
    row: list[str] = [""] * offset
    for cell in cells:
        style = CELL_STYLES[cell.tone]
        day_text = f"[bold]{cell.date.day}[/bold]"
        if cell.is_today:
            day_text = f"[reverse]{day_text}[/reverse]"
        if cell.tone == "empty":
            text = day_text
        else:
            text = f"{day_text}\n[{style}]{cell.pnl:+,.0f}[/{style}]\n[dim]{cell.trade_count}t[/dim]"
        row.append(text)
        if len(row) == 7:
            table.add_row(*row)
            row = []
    if row:
        row.extend([""] * (7 - len(row)))
        table.add_row(*row)

    console.print(table)

    month_total = sum(c.pnl for c in cells)
    console.print(f"\n[bold]Month P&L:[/bold] {money(month_total)}")


@click.command()
@click.argument("day", type=DAY)
def day(day: date) -> None:
    """Show trades for a day with R conversion and target/SL status.

    DAY is a date (YYYY-MM-DD) or 'today'.

    \b
    Examples:
      sltp day today
      sltp day 2025-12-02
    """
    from sltp.analytics import daily_summary, day_risk, split_day

    entries = get_store().get_entries()
    settings = get_settings()
    trades, withdrawals = split_day(entries, day)

    if not trades and not withdrawals:
        error_panel(f"No entries on {day.isoformat()}", title="Nothing Logged")

    result = daily_summary(entries, day)
    risk = day_risk(entries, settings, day)

    r_text = f"{risk.total_r:+.2f}R" if risk.total_r is not None else "n/a"
    status = []
    if risk.target_hit:
        status.append("[green]Target hit[/green]")
    if risk.sl_breached:
        status.append("[red]SL budget breached[/red]")

    text = (
        f"[bold]{day.strftime('%A, %B')} {day.day}[/bold]\n\n"
        f"Trades: {result.total_trades}   "
        f"P&L: {money(result.total_pnl)}   "
        f"Fees: ${result.total_fees:,.2f}   "
        f"Result: {r_text}\n"
        f"Win Rate: {result.win_rate:.1f}% ({result.win_count}W / {result.loss_count}L)\n\n"
        f"1R = ${risk.unit_size:,.2f} [dim](1% of ${risk.reference_balance:,.2f})[/dim]\n"
        f"Daily Target: +{settings.daily_target_r}R (${risk.target_amount:,.2f})\n"
        f"SL Budget:    -{settings.sl_budget_r}R (${risk.sl_amount:,.2f})"
    )
    if status:
        text += "\n\n" + "  ".join(status)

    console.print(Panel(text, title="[bold cyan]Daily Detail[/bold cyan]", border_style="cyan"))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Pair", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("P&L", justify="right")
    table.add_column("Notes", max_width=30)
    for entry in trades + withdrawals:
        side = "-" if entry.is_withdrawal else entry.direction.upper()
        table.add_row(entry.pair, side, money(entry.pnl), entry.notes or "")
    console.print(table)


@click.command()
@click.option(
    "--include-withdrawals",
    is_flag=True,
    default=False,
    help="Count withdrawal entries as trades.",
)
@click.option(
    "--curve",
    is_flag=True,
    default=False,
    help="Also print the cumulative P&L curve.",
)
def stats(include_withdrawals: bool, curve: bool) -> None:
    """Show full-history trading statistics.

    \b
    Examples:
      sltp stats
      sltp stats --curve
    """
    from sltp.analytics import actual_trades, compute_stats

    # chronological, so same-day trades appear in the order they were logged
    entries = get_store().get_entries(oldest_first=True)
    if not include_withdrawals:
        entries = actual_trades(entries)

    result = compute_stats(entries)
    bias = result.trade_bias

    text = (
        f"Net P&L:          {money(result.net_pnl)}\n"
        f"Win Rate:         {result.win_rate:.1f}%\n"
        f"Profit Factor:    {_ratio_text(result.profit_factor)}\n"
        f"Avg Risk:Reward:  {_ratio_text(result.avg_risk_reward, prefix='1:')}\n"
        f"Largest Win:      [green]${result.largest_win:,.2f}[/green]\n"
        f"Largest Loss:     [red]${abs(result.largest_loss):,.2f}[/red]\n"
        f"Trade Bias:       {bias.bias} [dim]({bias.long}L / {bias.short}S)[/dim]\n"
        f"{'─' * 30}\n"
        f"Most Traded:      {result.most_traded_pair}\n"
        f"Most Profitable:  [green]{result.most_profitable_pair}[/green]\n"
        f"Largest Loss Pair: [red]{result.largest_loss_pair}[/red]"
    )
    console.print(Panel(
        text,
        title=f"[bold cyan]Trading Statistics[/bold cyan] [dim]({result.total_trades} trades)[/dim]",
        border_style="cyan",
    ))

    if result.performance_by_symbol:
        table = Table(title="Performance by Symbol", show_header=True, header_style="bold cyan")
        table.add_column("Pair", style="bold")
        table.add_column("Wins", justify="right")
        table.add_column("Losses", justify="right")
        table.add_column("Win P&L", justify="right", style="green")
        table.add_column("Loss P&L", justify="right", style="red")
        for perf in result.performance_by_symbol:
            table.add_row(
                perf.pair,
                str(perf.wins),
                str(perf.losses),
                f"${perf.win_pnl:,.2f}",
                f"${perf.loss_pnl:,.2f}",
            )
        console.print(table)

    if curve and len(result.equity_curve):
        table = Table(title="Cumulative P&L", show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Date")
        table.add_column("Cumulative", justify="right")
        for point in result.equity_curve:
            table.add_row(str(point.index), point.date_label, money(point.cumulative))
        console.print(table)
