"""Glob expansion of configuration lines into literal paths."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Optional

from rich.console import Console

from safe_rm.ui.console import print_warning

logger = logging.getLogger(__name__)

# Upper bound on the paths a single configuration line may contribute
MAX_GLOB_EXPANSION = 256


class PatternError(ValueError):
    """A configuration line is not a valid glob pattern."""

    def __init__(self, pattern: str, position: int, reason: str) -> None:
        super().__init__(f"{reason} (at position {position} in {pattern!r})")
        self.pattern = pattern
        self.position = position
        self.reason = reason


@dataclass
class Expansion:
    """Outcome of expanding one configuration line."""

    pattern: str
    paths: list[str] = field(default_factory=list)
    error: Optional[str] = None
    truncated: bool = False
    unreadable: int = 0

    @property
    def skipped(self) -> bool:
        """True when the line contributed nothing because it was rejected."""
        return self.error is not None


def validate_pattern(pattern: str) -> None:
    """
    Reject patterns that the wildcard grammar does not allow.

    Args:
        pattern: Glob pattern taken from a configuration line

    Raises:
        PatternError: On a run of three or more ``*``, a ``**`` that is not a
            whole path component, or an unterminated ``[`` class
    """
    length = len(pattern)
    i = 0
    while i < length:
        char = pattern[i]
        if char == "*":
            end = i
            while end < length and pattern[end] == "*":
                end += 1
            stars = end - i
            if stars > 2:
                raise PatternError(
                    pattern, i, "wildcards are either regular `*` or recursive `**`"
                )
            if stars == 2:
                before_ok = i == 0 or pattern[i - 1] == "/"
                after_ok = end == length or pattern[end] == "/"
                if not (before_ok and after_ok):
                    raise PatternError(
                        pattern, i, "recursive wildcards must form a single path component"
                    )
            i = end
        elif char == "[":
            start = i + 1
            if start < length and pattern[start] == "!":
                start += 1
            # A ']' right after the opening bracket is a literal member
            if start < length and pattern[start] == "]":
                start += 1
            close = pattern.find("]", start)
            if close == -1:
                raise PatternError(pattern, i, "invalid range pattern")
            i = close + 1
        else:
            i += 1


def clean_path(path: str) -> str:
    """Drop trailing and repeated separators and ``.`` components, keeping ``..``."""
    return str(Path(path))


MatchResult = tuple[str, Optional[OSError]]


def _has_magic(part: str) -> bool:
    return any(char in part for char in "*?[")


def _join(base: str, name: str) -> str:
    return os.path.join(base, name) if base else name


def _list_dir(base: str) -> list[os.DirEntry]:
    """Entries of a directory sorted by name. Raises OSError when unlistable."""
    with os.scandir(base or ".") as entries:
        return sorted(entries, key=lambda entry: entry.name)


def _walk(base: str, parts: list[str], dirs_only: bool) -> Iterator[MatchResult]:
    if not parts:
        if base and (not dirs_only or os.path.isdir(base)):
            yield base, None
        return

    part, rest = parts[0], parts[1:]
    if part == "**":
        yield from _walk_recursive(base, rest, dirs_only)
        return

    if not _has_magic(part):
        path = _join(base, part)
        if rest or dirs_only:
            if os.path.isdir(path):
                yield from _walk(path, rest, dirs_only)
        elif os.path.lexists(path):
            yield path, None
        return

    try:
        entries = _list_dir(base)
    except OSError as e:
        yield base or ".", e
        return

    for entry in entries:
        if not fnmatchcase(entry.name, part):
            continue
        path = _join(base, entry.name)
        if rest:
            if entry.is_dir():
                yield from _walk(path, rest, dirs_only)
        elif not dirs_only or entry.is_dir():
            yield path, None


def _walk_recursive(base: str, rest: list[str], dirs_only: bool) -> Iterator[MatchResult]:
    # ``**`` matches zero or more directories; symlinked directories are not followed
    yield from _walk(base, rest, dirs_only)

    try:
        entries = _list_dir(base)
    except OSError as e:
        yield base or ".", e
        return

    for entry in entries:
        path = _join(base, entry.name)
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_recursive(path, rest, dirs_only)
        elif not rest and not dirs_only:
            yield path, None


def iter_matches(pattern: str) -> Iterator[MatchResult]:
    """
    Lazily enumerate the paths a pattern matches.

    Each directory is listed in name order, so the sequence of matches is
    the same on every run. Hidden entries match wildcards like any other.

    Yields:
        ``(path, None)`` for a match, or ``(directory, error)`` for a
        directory that could not be listed while matching
    """
    if not pattern:
        return
    if not _has_magic(pattern):
        if os.path.lexists(pattern):
            yield pattern, None
        return

    base = "/" if pattern.startswith("/") else ""
    parts = [part for part in pattern.split("/") if part]
    yield from _walk(base, parts, pattern.endswith("/"))


def expand(
    line: str,
    source: str = "",
    console: Optional[Console] = None,
    limit: int = MAX_GLOB_EXPANSION,
) -> Expansion:
    """
    Expand one configuration line into the paths it matches.

    Matches are enumerated lazily and enumeration stops as soon as the
    budget is exhausted, so an overly broad pattern such as ``/**`` is
    never materialized in full.

    Args:
        line: Literal path or glob pattern
        source: Configuration file the line came from, for diagnostics
        console: Console for diagnostics
        limit: Maximum number of paths the line may contribute

    Returns:
        Expansion holding the matched paths, or the reason the line was skipped
    """
    console = console or Console()
    expansion = Expansion(pattern=line)

    try:
        validate_pattern(line)
    except PatternError as e:
        logger.debug("Rejected pattern %r from %s: %s", line, source, e)
        print_warning(console, f'Invalid glob pattern "{line}" found in {source} and ignored.')
        expansion.error = e.reason
        return expansion

    for match, error in iter_matches(line):
        if error is not None:
            logger.debug("Cannot list %s: %s", match, error)
            expansion.unreadable += 1
            print_warning(
                console,
                f'Ignored unreadable path while expanding glob "{line}" from {source}.',
            )
            continue

        if len(expansion.paths) >= limit:
            print_warning(
                console,
                f'Glob "{line}" found in {source} expands to more than {limit} paths. '
                "Ignoring the rest.",
            )
            expansion.truncated = True
            break
        expansion.paths.append(clean_path(match))

    logger.debug("Pattern %r from %s matched %d paths", line, source, len(expansion.paths))
    return expansion
