"""Settings commands for SLTP CLI."""

from typing import Optional

import click
from rich.panel import Panel

from sltp.cli.common import console, get_settings
from sltp.cli.parsing import AMOUNT


def _show(settings) -> None:
    challenge = settings.challenge
    if challenge.enabled:
        challenge_text = (
            f"[green]Active[/green] - ${challenge.target_balance:,.2f} in "
            f"{challenge.duration_days} days since {challenge.start_date}"
        )
    else:
        challenge_text = "[dim]Disabled[/dim]"

    console.print(Panel(
        f"Beginning Balance:  ${settings.beginning_balance:,.2f}\n"
        f"Daily Target:       {settings.daily_target_r}R\n"
        f"SL Budget:          {settings.sl_budget_r}R\n"
        f"Theme:              {settings.theme}\n"
        f"Pairs:              {', '.join(settings.pairs) or '-'}\n"
        f"Challenge:          {challenge_text}",
        title="[bold cyan]Settings[/bold cyan]",
        border_style="cyan",
    ))


@click.group(name="settings", invoke_without_command=True)
@click.pass_context
def settings_group(ctx: click.Context) -> None:
    """View and change journal settings.

    \b
    Examples:
      sltp settings
      sltp settings set --balance 25000 --target-r 2 --sl-r 1
      sltp settings pair-add BNB/USD
    """
    if ctx.invoked_subcommand is None:
        _show(get_settings())


@settings_group.command()
def show() -> None:
    """Show current settings."""
    _show(get_settings())


@settings_group.command(name="set")
@click.option("-b", "--balance", type=AMOUNT, default=None, help="Beginning balance.")
@click.option("-t", "--target-r", type=float, default=None, help="Daily target in R.")
@click.option("-s", "--sl-r", type=float, default=None, help="Daily stop-loss budget in R.")
@click.option(
    "--theme",
    type=click.Choice(["light", "dark"]),
    default=None,
    help="UI theme.",
)
def set_(
    balance: Optional[float],
    target_r: Optional[float],
    sl_r: Optional[float],
    theme: Optional[str],
) -> None:
    """Change beginning balance, R targets or theme."""
    from sltp.config import save_settings

    updates = {
        "beginning_balance": balance,
        "daily_target_r": target_r,
        "sl_budget_r": sl_r,
        "theme": theme,
    }
    updates = {k: v for k, v in updates.items() if v is not None}
    if not updates:
        raise click.UsageError("Nothing to change. See 'sltp settings set --help'.")

    settings = get_settings().model_copy(update=updates)
    save_settings(settings)
    _show(settings)


@settings_group.command(name="pair-add")
@click.argument("pair")
def pair_add(pair: str) -> None:
    """Add a symbol to the pair list."""
    from sltp.config import save_settings
    from sltp.models.settings import with_pair_added

    settings = with_pair_added(get_settings(), pair.upper())
    save_settings(settings)
    console.print(f"[green]Pairs:[/green] {', '.join(settings.pairs)}")


@settings_group.command(name="pair-remove")
@click.argument("pair")
def pair_remove(pair: str) -> None:
    """Remove a symbol from the pair list."""
    from sltp.config import save_settings
    from sltp.models.settings import with_pair_removed

    settings = with_pair_removed(get_settings(), pair.upper())
    save_settings(settings)
    console.print(f"[green]Pairs:[/green] {', '.join(settings.pairs) or '-'}")
