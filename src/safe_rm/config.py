"""Configuration management for safe-rm."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from safe_rm.core.normalize import normalize_path

# Protected path lists, one path or glob per line
GLOBAL_CONFIG = Path("/etc/safe-rm.conf")
LOCAL_GLOBAL_CONFIG = Path("/usr/local/etc/safe-rm.conf")
GLOBAL_CONFIGS: tuple[Path, ...] = (GLOBAL_CONFIG, LOCAL_GLOBAL_CONFIG)

# Relative to $HOME
USER_CONFIG = Path(".config/safe-rm")
LEGACY_USER_CONFIG = Path(".safe-rm")
LOCAL_CONFIGS: tuple[Path, ...] = (USER_CONFIG, LEGACY_USER_CONFIG)

# Settings for safe-rm itself
SETTINGS_FILE = Path("/etc/safe-rm.toml")

REAL_RM = "/bin/rm"
REAL_RM_ENV = "SAFE_RM_REAL_RM"


@dataclass
class Settings:
    """Settings read from ``/etc/safe-rm.toml``."""

    # The real rm may have been renamed, e.g. to /bin/rm.real
    rm_binary: Optional[str] = None

    # Metadata (not from TOML)
    _source: Path | None = field(default=None, repr=False)


def _load_toml(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file."""
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _validate_settings(data: dict[str, Any]) -> list[str]:
    """Validate TOML data and return list of errors."""
    errors: list[str] = []

    rm_binary = data.get("rm_binary")
    if rm_binary is not None and not isinstance(rm_binary, str):
        errors.append(f"Invalid rm_binary: {rm_binary!r} (must be a path string)")

    return errors


def _dict_to_settings(data: dict[str, Any], source: Path | None = None) -> Settings:
    """Convert parsed TOML dict to Settings, ignoring unknown keys."""
    valid_fields = {f.name for f in fields(Settings) if not f.name.startswith("_")}
    known = {k: v for k, v in data.items() if k in valid_fields}
    return Settings(**known, _source=source)


def load_settings(path: Path = SETTINGS_FILE) -> Settings:
    """
    Load safe-rm settings.

    A missing file is not an error and yields the defaults.

    Args:
        path: TOML settings file

    Returns:
        Settings instance

    Raises:
        ValueError: If the file cannot be read, is not valid TOML or holds
            invalid values
    """
    if not os.path.exists(path):
        return Settings()

    try:
        data = _load_toml(path)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Error opening file {path}: {e}") from e

    errors = _validate_settings(data)
    if errors:
        raise ValueError(f"Settings validation failed ({path}): {'; '.join(errors)}")

    return _dict_to_settings(data, path)


def resolve_rm_binary(
    settings: Settings,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Pick the rm binary to forward to.

    Priority (highest to lowest):
    1. ``rm_binary`` from the settings file
    2. ``$SAFE_RM_REAL_RM`` (normalized)
    3. ``/bin/rm``

    Args:
        settings: Loaded settings
        environ: Environment to read, defaults to ``os.environ``

    Returns:
        Path of the real rm binary
    """
    if settings.rm_binary:
        return settings.rm_binary

    environ = os.environ if environ is None else environ
    from_env = environ.get(REAL_RM_ENV)
    if from_env:
        return normalize_path(from_env)

    return REAL_RM


def get_home(environ: Optional[Mapping[str, str]] = None) -> Path | None:
    """
    Home directory for per-user configuration files, None when $HOME is unset.

    An empty $HOME is treated as unset, so per-user files are skipped rather
    than looked up relative to the working directory.
    """
    environ = os.environ if environ is None else environ
    home = environ.get("HOME")
    return Path(home) if home else None


def get_config_paths(home: Path | None) -> tuple[list[Path], list[Path]]:
    """
    Get protected path list locations in merge order.

    Returns:
        (global_paths, user_paths) - user paths are empty without a home
    """
    user_paths = [home / config for config in LOCAL_CONFIGS] if home is not None else []
    return list(GLOBAL_CONFIGS), user_paths
