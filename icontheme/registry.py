"""Icon theme discovery and registry."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from icontheme.builder import build_theme
from icontheme.constants import INDEX_FILE_NAME
from icontheme.errors import ErrorCode, IconThemeError
from icontheme.models import IconTheme
from icontheme.parser import iter_events
from icontheme.paths import LocalFileSystem

logger = logging.getLogger(__name__)


def load_theme(base_dir: Path, dir_name: str) -> IconTheme | None:
    """Parse ``<base_dir>/<dir_name>/index.theme``.

    Returns None when the folder has no index file. Malformed files raise
    an :class:`IconThemeError` subclass with ``path`` set.
    """
    index_path = Path(base_dir) / dir_name / INDEX_FILE_NAME
    try:
        with index_path.open("r", encoding="utf-8", errors="replace") as handle:
            return build_theme(iter_events(handle), dir_name)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except IconThemeError as exc:
        if exc.path is None:
            exc.path = index_path
        raise
    except OSError as exc:
        raise IconThemeError(
            ErrorCode.FILE_UNREADABLE,
            path=index_path,
            details={"original": str(exc)},
        ) from exc


class ThemeRegistry:
    """Loads icon themes from every base directory, in base directory order."""

    def __init__(self, fs: LocalFileSystem | None = None) -> None:
        self._fs = fs or LocalFileSystem()
        self._themes: list[IconTheme] = []
        self._base_dirs: tuple[Path, ...] = ()
        self._load_failures: list[IconThemeError] = []

    @property
    def fs(self) -> LocalFileSystem:
        return self._fs

    @property
    def themes(self) -> tuple[IconTheme, ...]:
        return tuple(self._themes)

    @property
    def base_dirs(self) -> tuple[Path, ...]:
        return self._base_dirs

    def reload(self) -> None:
        self._themes = []
        self._load_failures = []
        self._base_dirs = tuple(self._fs.base_directories())
        for base_dir in self._base_dirs:
            self._load_from_base_dir(base_dir)
        logger.debug("Loaded themes: %s", ", ".join(self.theme_names()))

    def get_theme(self, name: str) -> IconTheme | None:
        """Return the first theme whose display name is exactly ``name``."""
        for theme in self._themes:
            if theme.name == name:
                return theme
        return None

    def theme_names(self) -> list[str]:
        return [theme.name for theme in self._themes]

    def load_errors(self) -> list[str]:
        return [str(exc) for exc in self._load_failures]

    def load_failures(self) -> list[IconThemeError]:
        return list(self._load_failures)

    def __len__(self) -> int:
        return len(self._themes)

    def __iter__(self) -> Iterator[IconTheme]:
        return iter(self.themes)

    def _load_from_base_dir(self, base_dir: Path) -> None:
        for dir_name in self._fs.theme_directory_names(base_dir):
            try:
                theme = load_theme(base_dir, dir_name)
            except IconThemeError as exc:
                logger.debug("Skipping theme %s: %s", dir_name, exc)
                self._load_failures.append(exc)
                continue
            if theme is not None:
                self._themes.append(theme)
