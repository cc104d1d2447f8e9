"""Resolve icon names to files using the loaded themes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from icontheme.constants import (
    EXTENSIONS,
    FALLBACK_MAX_SIZE,
    FALLBACK_MIN_SIZE,
    FALLBACK_THEME_NAME,
)
from icontheme.models import IconMatch, IconTheme, IconThemeSubdir
from icontheme.paths import LocalFileSystem
from icontheme.registry import ThemeRegistry

logger = logging.getLogger(__name__)


def find_icon_in_dir(
    name: str,
    directory: Path,
    fs: LocalFileSystem,
    extensions: Sequence[str] = EXTENSIONS,
) -> IconMatch | None:
    """Look for ``name`` directly inside ``directory``.

    Flat directories carry no size information, so a hit is reported with
    the permissive range 1..512.
    """
    path = _first_readable(fs, Path(directory), name, extensions)
    if path is None:
        return None
    return IconMatch(path=path, min_size=FALLBACK_MIN_SIZE, max_size=FALLBACK_MAX_SIZE)


class IconResolver:
    """Finds the best icon file for a name and pixel size."""

    def __init__(
        self,
        registry: ThemeRegistry,
        fs: LocalFileSystem | None = None,
        extensions: Sequence[str] = EXTENSIONS,
    ) -> None:
        self._registry = registry
        self._fs = fs or registry.fs
        self._extensions = tuple(extensions)

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._extensions

    def find_icon(self, name: str, size: int, theme_name: str | None = None) -> IconMatch | None:
        """Search ``theme_name``, then Hicolor, then the bare base directories."""
        match = None
        if theme_name:
            match = self.find_icon_with_theme(name, size, theme_name)
        if match is None and theme_name != FALLBACK_THEME_NAME:
            match = self.find_icon_with_theme(name, size, FALLBACK_THEME_NAME)
        if match is None:
            match = self._find_fallback_icon(name)
        if match is None:
            logger.debug("No icon found for %r at size %d", name, size)
        return match

    def find_icon_with_theme(self, name: str, size: int, theme_name: str) -> IconMatch | None:
        return self._search_theme(name, size, theme_name, visited=set())

    def find_icon_in_dir(self, name: str, directory: Path) -> IconMatch | None:
        return find_icon_in_dir(name, directory, self._fs, self._extensions)

    def _search_theme(
        self, name: str, size: int, theme_name: str, visited: set[int]
    ) -> IconMatch | None:
        theme = self._registry.get_theme(theme_name)
        if theme is None:
            return None
        if id(theme) in visited:
            logger.debug("Inheritance cycle through theme %r", theme.name)
            return None
        visited.add(id(theme))

        match = self._exact_match(theme, name, size)
        if match is None:
            match = self._closest_match(theme, name, size)
        if match is None:
            for parent in theme.parents:
                match = self._search_theme(name, size, parent, visited)
                if match is not None:
                    break
        return match

    def _candidates(self, theme: IconTheme) -> list[tuple[Path, IconThemeSubdir]]:
        # Later subdirectories first, they tend to be scalable or larger.
        candidates: list[tuple[Path, IconThemeSubdir]] = []
        for base_dir in self._registry.base_dirs:
            theme_dir = base_dir / theme.dir
            if not self._fs.is_dir(theme_dir):
                continue
            for subdir in reversed(theme.subdirs):
                candidates.append((theme_dir / subdir.name, subdir))
        return candidates

    def _exact_match(self, theme: IconTheme, name: str, size: int) -> IconMatch | None:
        for directory, subdir in self._candidates(theme):
            if not subdir.contains(size):
                continue
            path = _first_readable(self._fs, directory, name, self._extensions)
            if path is not None:
                return IconMatch(path=path, min_size=subdir.min_size, max_size=subdir.max_size)
        return None

    def _closest_match(self, theme: IconTheme, name: str, size: int) -> IconMatch | None:
        best: IconMatch | None = None
        smallest_error: int | None = None
        for directory, subdir in self._candidates(theme):
            error = subdir.size_distance(size)
            if smallest_error is not None and error >= smallest_error:
                continue
            path = _first_readable(self._fs, directory, name, self._extensions)
            if path is None:
                continue
            best = IconMatch(path=path, min_size=subdir.min_size, max_size=subdir.max_size)
            smallest_error = error
        return best

    def _find_fallback_icon(self, name: str) -> IconMatch | None:
        for base_dir in self._registry.base_dirs:
            match = self.find_icon_in_dir(name, base_dir)
            if match is not None:
                return match
        return None


def _first_readable(
    fs: LocalFileSystem, directory: Path, name: str, extensions: Sequence[str]
) -> Path | None:
    for extension in extensions:
        path = directory / f"{name}.{extension}"
        if fs.is_readable(path):
            return path
    return None
