"""Rich console utilities for output formatting."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# Every diagnostic line starts with this so it can be told apart from rm's own output
PREFIX = "safe-rm: "


def create_console() -> Console:
    """Create a configured Rich console.

    Highlighting is off and soft wrapping on so that paths are printed
    exactly as given, one diagnostic per line.
    """
    return Console(highlight=False, soft_wrap=True)


def print_notice(console: Console, message: str) -> None:
    """Print a plain ``safe-rm:`` diagnostic line."""
    console.print(escape(PREFIX + message))


def print_warning(console: Console, message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{escape(PREFIX + message)}[/yellow]")


def print_error(console: Console, message: str) -> None:
    """Print an error message."""
    console.print(f"[red]{escape(PREFIX + message)}[/red]")
