"""UI components for console output."""

from __future__ import annotations

from .console import create_console, print_notice

__all__ = ["create_console", "print_notice"]
