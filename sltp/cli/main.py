"""Main CLI entry point for SLTP.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import logging

import click
from rich.console import Console

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their
    commands is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        # Module attribute may differ from the command name (e.g. settings_group)
        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Journal entries
    "add": "sltp.cli.entries",
    "withdraw": "sltp.cli.entries",
    "edit": "sltp.cli.entries",
    "delete": "sltp.cli.entries",
    "entries": "sltp.cli.entries",
    "import": "sltp.cli.entries",
    # Analytics
    "summary": "sltp.cli.portfolio",
    "calendar": "sltp.cli.portfolio",
    "day": "sltp.cli.portfolio",
    "stats": "sltp.cli.portfolio",
    # Challenge and settings
    "challenge": "sltp.cli.challenge",
    "settings": "sltp.cli.settings",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(verbose: bool) -> None:
    """Route log records through rich."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="sltp-journal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """SLTP - trading journal with R-based progress tracking.

    Log trades and withdrawals, then review daily and monthly P&L,
    full-history statistics and your growth challenge.

    \b
    Quick Start:
      sltp add BTC/USD long --pnl 150 --fee 2.5   # Log a trade
      sltp calendar                               # Monthly heat-map
      sltp stats                                  # Full statistics
    """
    setup_logging(verbose)
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
