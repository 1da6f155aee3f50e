"""Canonical path forms used as comparison keys."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union


def symlink_canonicalize(path: Union[str, Path]) -> Optional[Path]:
    """
    Make a path absolute without following its final component.

    The parent directory is fully canonicalized and the last component is
    appended unchanged, so a symlink keeps its own identity instead of
    taking on the identity of its target.

    Args:
        path: Path to canonicalize

    Returns:
        The canonical location of the path itself, or None when the parent
        directory cannot be canonicalized
    """
    path = Path(path)
    if not path.is_absolute():
        # Relative paths are resolved against the current directory
        path = Path(".") / path

    if path.parent == path:
        # Stop at the root
        return Path(path.anchor or "/")

    try:
        directory = path.parent.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return None

    if path.name == "..":
        return directory.parent
    return directory / path.name


def normalize_path(arg: str) -> str:
    """
    Return the canonical form of an argument for comparison.

    Never fails: any argument that cannot be canonicalized (missing file,
    flag, I/O error) is returned unchanged.

    Args:
        arg: Argument as received on the command line

    Returns:
        Canonical absolute path, or ``arg`` itself
    """
    if not arg:
        return arg

    # islink() looks at the raw string, so "link/" is judged by its target
    if os.path.islink(arg):
        canonical = symlink_canonicalize(arg)
        return str(canonical) if canonical is not None else arg

    try:
        return str(Path(arg).resolve(strict=True))
    except (OSError, RuntimeError, ValueError):
        return arg
