"""safe-rm - Keep rm away from the paths that matter."""

from __future__ import annotations

__version__ = "1.1.0"
__all__ = ["__version__"]
