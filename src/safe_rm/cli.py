"""safe-rm CLI - Main entry points."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from safe_rm import __version__
from safe_rm.config import (
    GLOBAL_CONFIGS,
    LOCAL_CONFIGS,
    SETTINGS_FILE,
    Settings,
    get_config_paths,
    get_home,
    load_settings,
    resolve_rm_binary,
)
from safe_rm.core.filter import ArgumentFilter, filter_arguments
from safe_rm.core.forwarder import (
    FAILURE_EXIT_CODE,
    RecursionGuardError,
    ensure_real_rm_is_callable,
    run_binary,
)
from safe_rm.core.loader import ConfigLoader
from safe_rm.ui.console import create_console, print_warning


def _current_exe() -> str:
    """Path of the running safe-rm executable."""
    return shutil.which(sys.argv[0]) or sys.argv[0]


def _load_settings_or_defaults(settings_path: Path, console: Console) -> Settings:
    """Load settings, falling back to defaults on a broken file."""
    try:
        return load_settings(settings_path)
    except ValueError as e:
        print_warning(console, f"Config error: {e}")
        return Settings()


def run(
    argv: Sequence[str],
    *,
    settings_path: Path = SETTINGS_FILE,
    global_configs: Sequence[Path | str] = GLOBAL_CONFIGS,
    local_configs: Sequence[Path | str] = LOCAL_CONFIGS,
    environ: Optional[Mapping[str, str]] = None,
    current_exe: Optional[str] = None,
    console: Optional[Console] = None,
) -> int:
    """
    Filter rm's arguments and forward the survivors to the real rm.

    Args:
        argv: Arguments intended for rm, without the program name
        settings_path: safe-rm TOML settings file
        global_configs: System-wide protected path lists
        local_configs: Per-user protected path lists, relative to $HOME
        environ: Environment to read, defaults to ``os.environ``
        current_exe: Path of the running executable, for the recursion guard
        console: Console for diagnostics

    Returns:
        Exit code to terminate with
    """
    console = console or create_console()
    environ = os.environ if environ is None else environ

    settings = _load_settings_or_defaults(settings_path, console)
    rm_binary = resolve_rm_binary(settings, environ)

    try:
        ensure_real_rm_is_callable(rm_binary, current_exe or _current_exe(), console)
    except RecursionGuardError:
        return FAILURE_EXIT_CODE

    loader = ConfigLoader(global_configs, local_configs, get_home(environ), console)
    filtered_args = filter_arguments(argv, loader.load(), console)
    return run_binary(rm_binary, filtered_args, console)


def main() -> None:
    """Entry point for ``safe-rm``; every argument belongs to rm."""
    sys.exit(run(sys.argv[1:]))


app = typer.Typer(
    name="safe-rm-config",
    help="Inspect the paths safe-rm refuses to pass on to rm.",
    no_args_is_help=True,
)
console = create_console()


def _status_label(path: Path) -> str:
    return "[green]exists[/green]" if path.exists() else "[dim]not found[/dim]"


@app.command()
def paths() -> None:
    """Show configuration file locations."""
    global_paths, user_paths = get_config_paths(get_home())

    console.print("[bold]Protected path lists:[/bold]\n")
    for path in global_paths:
        console.print(f"  Global: {escape(str(path))} ({_status_label(path)})")
    if user_paths:
        for path in user_paths:
            console.print(f"  User:   {escape(str(path))} ({_status_label(path)})")
    else:
        console.print("  User:   [dim]$HOME is not set, skipped[/dim]")

    console.print("\n[bold]Settings:[/bold]\n")
    console.print(f"  {escape(str(SETTINGS_FILE))} ({_status_label(SETTINGS_FILE)})")


@app.command()
def show() -> None:
    """Show the effective protected paths and the real rm binary."""
    settings = _load_settings_or_defaults(SETTINGS_FILE, console)
    loader = ConfigLoader(GLOBAL_CONFIGS, LOCAL_CONFIGS, get_home(), console)
    protected = loader.load()

    table = Table(title="Protected paths", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Path", style="cyan")
    for index, path in enumerate(protected, start=1):
        table.add_row(str(index), escape(path))
    console.print(table)

    if protected.is_default:
        console.print("[yellow]No configured paths found, using built-in defaults.[/yellow]")

    console.print("\n[bold]Sources:[/bold]")
    for source in loader.sources:
        detail = f"{len(source.paths)} path(s)" if source.status == "loaded" else source.status
        console.print(f"  {escape(str(source.path))}: {detail}")

    console.print(f"\n[bold]Real rm:[/bold] {escape(resolve_rm_binary(settings))}")
    source_text = escape(str(settings._source)) if settings._source else "[dim]defaults only[/dim]"
    console.print(f"[bold]Settings:[/bold] {source_text}")


@app.command(context_settings={"ignore_unknown_options": True})
def check(
    args: list[str] = typer.Argument(..., help="Arguments as they would be given to rm"),
) -> None:
    """Show which arguments safe-rm would skip. Nothing is deleted."""
    loader = ConfigLoader(GLOBAL_CONFIGS, LOCAL_CONFIGS, get_home(), console)
    arg_filter = ArgumentFilter(loader.load(), console)

    table = Table(show_header=True)
    table.add_column("Argument")
    table.add_column("Normalized", style="dim")
    table.add_column("Action")
    for decision in arg_filter.check(args):
        action = "[red]skip[/red]" if decision.protected else "[green]pass[/green]"
        table.add_row(escape(decision.argument), escape(decision.normalized), action)
    console.print(table)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"safe-rm v{__version__}")
        raise typer.Exit(0)


@app.callback()
def config_main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log config loading details",
    ),
) -> None:
    """safe-rm-config - Inspect safe-rm's protected paths."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


if __name__ == "__main__":
    main()
