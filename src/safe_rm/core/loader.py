"""Loading of protected paths from safe-rm configuration files."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from rich.console import Console

from safe_rm.core.expander import Expansion, expand
from safe_rm.safety.protected import ProtectedPaths
from safe_rm.ui.console import print_warning

logger = logging.getLogger(__name__)

ConfigStatus = Literal["loaded", "missing", "unreadable"]


@dataclass
class ConfigFile:
    """Outcome of reading one configuration file."""

    path: Path
    status: ConfigStatus
    expansions: list[Expansion] = field(default_factory=list)
    unreadable_lines: int = 0

    @property
    def paths(self) -> list[str]:
        """All paths contributed by the file, in line order."""
        return [path for expansion in self.expansions for path in expansion.paths]


def _strip_terminator(raw: bytes) -> bytes:
    """Strip the line terminator (``\\n`` or ``\\r\\n``)."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def read_config(path: Path, console: Optional[Console] = None) -> ConfigFile:
    """
    Read one configuration file, expanding every line.

    Not all configuration files are expected to be present, so a missing
    file contributes nothing without a diagnostic. A file that exists but
    cannot be opened is reported and contributes nothing.

    Args:
        path: Configuration file to read
        console: Console for diagnostics

    Returns:
        ConfigFile describing what the file contributed
    """
    console = console or Console()
    path = Path(path)

    if not os.path.exists(path):
        return ConfigFile(path=path, status="missing")

    result = ConfigFile(path=path, status="loaded")
    try:
        with open(path, "rb") as f:
            for raw in f:
                try:
                    line = _strip_terminator(raw).decode("utf-8")
                except UnicodeDecodeError:
                    result.unreadable_lines += 1
                    print_warning(console, f"Ignoring unreadable line in {path}.")
                    continue
                result.expansions.append(expand(line, str(path), console))
    except OSError as e:
        logger.debug("Cannot read %s: %s", path, e)
        print_warning(console, f"Could not open configuration file: {path}")
        return ConfigFile(path=path, status="unreadable")

    logger.debug("Read %d paths from %s", len(result.paths), path)
    return result


class ConfigLoader:
    """Merges global and per-user configuration files into protected paths."""

    def __init__(
        self,
        global_configs: Sequence[Path | str] = (),
        local_configs: Sequence[Path | str] = (),
        home: Optional[Path | str] = None,
        console: Optional[Console] = None,
    ):
        self.global_configs = [Path(p) for p in global_configs]
        self.local_configs = [Path(p) for p in local_configs]
        self.home = Path(home) if home else None
        self.console = console or Console()
        self.sources: list[ConfigFile] = []

    def config_files(self) -> list[Path]:
        """Files to consult, in merge order.

        Per-user files are only consulted when a home directory is known.
        """
        files = list(self.global_configs)
        if self.home is not None:
            files.extend(self.home / config for config in self.local_configs)
        return files

    def load(self) -> ProtectedPaths:
        """
        Read every configuration file and build the protected path set.

        Falls back to the built-in system directory list when no file
        contributes a single path.

        Returns:
            Sorted, duplicate-free protected paths
        """
        self.sources = [read_config(path, self.console) for path in self.config_files()]
        collected = [path for source in self.sources for path in source.paths]

        if not collected:
            logger.debug("No protected paths configured, using defaults")
            return ProtectedPaths.defaults()
        return ProtectedPaths.from_iterable(collected)


def read_config_files(
    global_configs: Sequence[Path | str],
    local_configs: Sequence[Path | str],
    home: Optional[Path | str] = None,
    console: Optional[Console] = None,
) -> ProtectedPaths:
    """Shortcut for ``ConfigLoader(...).load()``."""
    return ConfigLoader(global_configs, local_configs, home, console).load()
