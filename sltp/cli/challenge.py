"""Growth challenge commands for SLTP CLI."""

from datetime import date

import click
from rich.panel import Panel

from sltp.cli.common import console, error_panel, get_settings, get_store
from sltp.cli.parsing import AMOUNT

RISK_COLORS = {
    "Conservative": "green",
    "Moderate": "yellow",
    "Aggressive": "red",
}


def render_progress(progress) -> None:
    """Print a challenge progress panel."""
    bar_width = 30
    filled = int(progress.progress_percent / 100 * bar_width)
    bar = "█" * filled + "░" * (bar_width - filled)
    color = RISK_COLORS[progress.risk_level]

    if progress.required_daily_r == float("inf"):
        pace = "unreachable"
    else:
        pace = f"{progress.required_daily_r:.2f}R / day"

    console.print(Panel(
        f"${progress.current_balance:,.0f} [green]{bar}[/green] ${progress.target_balance:,.0f}\n\n"
        f"Required pace:  [bold]{pace}[/bold]\n"
        f"Risk level:     [{color}]{progress.risk_level}[/{color}]\n"
        f"Days:           {progress.days_elapsed} elapsed, {progress.days_remaining} remaining",
        title="[bold cyan]Challenge Progress[/bold cyan]",
        border_style="cyan",
    ))


def _balance(settings) -> float:
    from sltp.analytics import current_balance

    return current_balance(get_store().get_entries(), settings.beginning_balance)


@click.group(invoke_without_command=True)
@click.pass_context
def challenge(ctx: click.Context) -> None:
    """Track a target-balance challenge.

    Without a subcommand, shows current progress.

    \b
    Examples:
      sltp challenge enable --target 12000 --days 30
      sltp challenge
      sltp challenge disable
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(status)


@challenge.command()
def status() -> None:
    """Show challenge progress."""
    from sltp.analytics import compute_challenge_progress

    settings = get_settings()
    progress = compute_challenge_progress(settings.challenge, _balance(settings), date.today())

    if progress is None:
        console.print(Panel(
            "[dim]No active challenge[/dim]\n\n"
            "Run [cyan]sltp challenge enable --target AMOUNT --days N[/cyan] to start one.",
            title="[bold]Challenge[/bold]",
            border_style="dim",
        ))
        return

    render_progress(progress)


@challenge.command()
@click.option("-t", "--target", type=AMOUNT, required=True, help="Target balance.")
@click.option(
    "-d", "--days",
    type=click.IntRange(min=0),
    required=True,
    help="Number of days to reach the target.",
)
def enable(target: float, days: int) -> None:
    """Start a challenge, or change target/duration of the active one.

    The start date and starting balance are captured the first time
    the challenge is enabled and kept until it is disabled.
    """
    from sltp.config import save_settings
    from sltp.models.settings import enable_challenge

    if target <= 0:
        error_panel("Target balance must be positive.")

    settings = get_settings()
    was_active = settings.challenge.enabled
    settings = enable_challenge(settings, target, days, _balance(settings), date.today())
    save_settings(settings)

    started = settings.challenge
    verb = "Updated" if was_active else "Started"
    console.print(
        f"[green]{verb} challenge:[/green] ${started.target_balance:,.2f} in "
        f"{started.duration_days} days "
        f"[dim](since {started.start_date.isoformat()}, "
        f"from ${started.starting_balance:,.2f})[/dim]"
    )


@challenge.command()
def disable() -> None:
    """Stop the active challenge."""
    from sltp.config import save_settings
    from sltp.models.settings import disable_challenge

    settings = get_settings()
    if not settings.challenge.enabled:
        console.print("[dim]No active challenge[/dim]")
        return

    save_settings(disable_challenge(settings))
    console.print("[yellow]Challenge disabled[/yellow]")
