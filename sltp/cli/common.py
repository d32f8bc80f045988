"""Shared helpers for SLTP CLI commands."""

from rich.console import Console
from rich.panel import Panel

console = Console()


def get_store():
    """Get the journal store instance."""
    from sltp.config import get_db_path
    from sltp.db.store import JournalStore

    return JournalStore(get_db_path())


def get_settings():
    """Load settings, falling back to defaults."""
    from sltp.config import load_settings

    return load_settings()


def money(amount: float, signed: bool = True) -> str:
    """Format a dollar amount with rich colour markup."""
    color = "green" if amount >= 0 else "red"
    sign = ("+" if amount >= 0 else "-") if signed else ("" if amount >= 0 else "-")
    return f"[{color}]{sign}${abs(amount):,.2f}[/{color}]"


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)
