"""Protected path set consulted before anything is handed to rm."""

from __future__ import annotations

from .protected import DEFAULT_PATHS, ProtectedPaths

__all__ = ["DEFAULT_PATHS", "ProtectedPaths"]
