"""Removal of protected paths from rm's argument list."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from rich.console import Console

from safe_rm.core.normalize import normalize_path
from safe_rm.safety.protected import ProtectedPaths
from safe_rm.ui.console import print_notice


@dataclass(frozen=True)
class Decision:
    """What happens to one argument."""

    argument: str
    normalized: str
    protected: bool


class ArgumentFilter:
    """Drops arguments that normalize to a protected path."""

    def __init__(self, protected: ProtectedPaths, console: Optional[Console] = None):
        self.protected = protected
        self.console = console or Console()

    def check(self, args: Iterable[str]) -> list[Decision]:
        """Classify arguments without printing anything."""
        decisions = []
        for arg in args:
            normalized = normalize_path(arg)
            decisions.append(Decision(arg, normalized, normalized in self.protected))
        return decisions

    def filter(self, args: Iterable[str]) -> list[str]:
        """
        Return the arguments that may be forwarded, in their original order.

        Flags and missing files go through the same comparison as any other
        argument; they simply never match. Each dropped argument is reported
        under its original spelling.

        Args:
            args: Arguments intended for rm

        Returns:
            The unprotected arguments, unmodified
        """
        filtered = []
        for decision in self.check(args):
            if decision.protected:
                print_notice(self.console, f"Skipping {decision.argument}.")
            else:
                filtered.append(decision.argument)
        return filtered


def filter_arguments(
    args: Iterable[str],
    protected: ProtectedPaths,
    console: Optional[Console] = None,
) -> list[str]:
    """Shortcut for ``ArgumentFilter(protected, console).filter(args)``."""
    return ArgumentFilter(protected, console).filter(args)
