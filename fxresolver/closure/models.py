"""Data models for the closure module."""

import os
from typing import Iterator, Optional

__all__ = ["DependencyClosure"]


class DependencyClosure:
    """
    Simple name → resolved path, built incrementally by a closure walk.

    Doubles as the walk's visited set: a name is recorded before its own
    references are followed. Names compare through os.path.normcase, so they
    are case-insensitive exactly where the filesystem is.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, str]] = {}

    @staticmethod
    def _key(name: str) -> str:
        return os.path.normcase(name)

    def add(self, name: str, path: str) -> None:
        """Record `name`; the first recorded path for a name is kept."""
        self._entries.setdefault(self._key(name), (name, path))

    def get(self, name: str) -> Optional[str]:
        entry = self._entries.get(self._key(name))
        return entry[1] if entry else None

    def names(self) -> list[str]:
        return [name for name, _ in self._entries.values()]

    def paths(self) -> list[str]:
        """Resolved paths in order of first resolution."""
        return [path for _, path in self._entries.values()]

    def items(self) -> list[tuple[str, str]]:
        return list(self._entries.values())

    def as_dict(self) -> dict[str, str]:
        return dict(self._entries.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"DependencyClosure({len(self)} assemblies)"
