"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
import stat
import tempfile
from pathlib import Path

import pytest
from rich.console import Console


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing, symlinks in its path resolved."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def console() -> Console:
    """Console that records diagnostics; read them with console.file.getvalue()."""
    return Console(file=io.StringIO(), highlight=False, soft_wrap=True, width=200)


@pytest.fixture
def write_config(temp_dir: Path):
    """Write a protected path list and return its location."""

    def _write(name: str, *lines: str) -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{line}\n" for line in lines))
        return path

    return _write


@pytest.fixture
def fake_rm(temp_dir: Path):
    """
    Create a stand-in rm that records its arguments.

    The script writes one argument per line to ``args.txt`` next to itself
    and exits with the code stored in ``exit_code`` (default 0).
    """
    script = temp_dir / "bin" / "fake-rm"
    script.parent.mkdir()
    script.write_text(
        "#!/bin/sh\n"
        'dir=$(dirname "$0")\n'
        ': > "$dir/args.txt"\n'
        'for arg in "$@"; do printf \'%s\\n\' "$arg" >> "$dir/args.txt"; done\n'
        'if [ -f "$dir/exit_code" ]; then exit "$(cat "$dir/exit_code")"; fi\n'
        "exit 0\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def protected_tree(temp_dir: Path):
    """Create files, a directory and symlinks for filtering tests."""
    (temp_dir / "empty").write_text("")
    (temp_dir / "dir").mkdir()
    (temp_dir / "dir" / "file1").write_text("1")
    (temp_dir / "dir" / "file2").write_text("2")
    (temp_dir / "outside").write_text("3")
    (temp_dir / "unprotected_symlink").symlink_to(temp_dir / "empty")
    (temp_dir / "protected_symlink").symlink_to(temp_dir / "empty")
    (temp_dir / "dir_link").symlink_to(temp_dir / "dir")
    yield temp_dir
