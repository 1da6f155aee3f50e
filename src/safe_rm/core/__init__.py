"""Core path resolution, filtering and forwarding functionality."""

from __future__ import annotations

from .expander import MAX_GLOB_EXPANSION, Expansion, PatternError, expand
from .filter import ArgumentFilter, filter_arguments
from .forwarder import RecursionGuardError, ensure_real_rm_is_callable, run_binary
from .loader import ConfigFile, ConfigLoader, read_config, read_config_files
from .normalize import normalize_path, symlink_canonicalize

__all__ = [
    "MAX_GLOB_EXPANSION",
    "ArgumentFilter",
    "ConfigFile",
    "ConfigLoader",
    "Expansion",
    "PatternError",
    "RecursionGuardError",
    "ensure_real_rm_is_callable",
    "expand",
    "filter_arguments",
    "normalize_path",
    "read_config",
    "read_config_files",
    "run_binary",
    "symlink_canonicalize",
]
