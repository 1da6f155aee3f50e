"""Protected path definitions to prevent accidental deletion."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

# Used only when no configuration file yields a single path
DEFAULT_PATHS: tuple[str, ...] = (
    "/bin",
    "/boot",
    "/dev",
    "/etc",
    "/home",
    "/initrd",
    "/lib",
    "/lib32",
    "/lib64",
    "/proc",
    "/root",
    "/sbin",
    "/sys",
    "/usr",
    "/usr/bin",
    "/usr/include",
    "/usr/lib",
    "/usr/local",
    "/usr/local/bin",
    "/usr/local/include",
    "/usr/local/sbin",
    "/usr/local/share",
    "/usr/sbin",
    "/usr/share",
    "/usr/src",
    "/var",
)


@dataclass(frozen=True)
class ProtectedPaths:
    """
    Sorted, duplicate-free set of paths that must never reach rm.

    Entries are compared as exact strings against normalized arguments,
    so ``/usr`` protects ``/usr`` itself but not ``/usr/share/doc``.
    """

    paths: tuple[str, ...] = ()
    is_default: bool = False

    @classmethod
    def from_iterable(cls, paths: Iterable[str], is_default: bool = False) -> "ProtectedPaths":
        """Build the set, sorting and removing duplicates."""
        return cls(paths=tuple(sorted(set(paths))), is_default=is_default)

    @classmethod
    def defaults(cls) -> "ProtectedPaths":
        """Return the built-in system directory list."""
        return cls.from_iterable(DEFAULT_PATHS, is_default=True)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        index = bisect_left(self.paths, path)
        return index < len(self.paths) and self.paths[index] == path

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)
