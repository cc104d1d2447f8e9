"""Icon theme models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from icontheme.constants import DEFAULT_THRESHOLD


class SubdirType(Enum):
    """Size class of an icon directory, valued by its index file spelling."""

    FIXED = "Fixed"
    SCALABLE = "Scalable"
    THRESHOLD = "Threshold"


@dataclass(frozen=True, slots=True)
class IconThemeSubdir:
    """One icon directory declared by a theme."""

    name: str
    size: int
    type: SubdirType = SubdirType.THRESHOLD
    min_size: int = 0
    max_size: int = 0
    threshold: int = DEFAULT_THRESHOLD

    def contains(self, size: int) -> bool:
        return self.min_size <= size <= self.max_size

    def size_distance(self, size: int) -> int:
        """Return how far ``size`` lies outside the directory range, 0 inside it."""
        return max(0, size - self.max_size) + max(0, self.min_size - size)


@dataclass(frozen=True, slots=True)
class IconTheme:
    """A fully parsed icon theme."""

    name: str
    comment: str
    directories: tuple[str, ...]
    subdirs: tuple[IconThemeSubdir, ...]
    dir: str
    inherits: str | None = None

    @property
    def parents(self) -> tuple[str, ...]:
        if not self.inherits:
            return ()
        return tuple(part for part in self.inherits.split(",") if part)


@dataclass(frozen=True, slots=True)
class IconMatch:
    """A resolved icon file and the size range it was found for."""

    path: Path
    min_size: int
    max_size: int
