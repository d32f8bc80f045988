"""CLI commands for SLTP.

This package provides the command-line interface for the journal:
logging entries, reviewing P&L and statistics, and managing settings
and the growth challenge.
"""

from sltp.cli.main import cli, main

__all__ = ["cli", "main"]
