"""Filesystem helpers used by the theme registry and the icon resolver."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterable, Mapping

from icontheme.constants import DEFAULT_DATA_DIRS

_VAR_RE = re.compile(r"\$(?:\{(\w+)\}|(\w+))")


class LocalFileSystem:
    """Icon base directory discovery and file probing on the local disk."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        extra_dirs: Iterable[str | Path] = (),
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._extra_dirs = [str(path) for path in extra_dirs]

    def base_directories(self) -> list[Path]:
        """Return existing icon base directories in search order."""
        results: list[Path] = []
        for template in [*self._extra_dirs, *base_directory_templates(self._environ)]:
            expanded = expand_path(template, self._environ)
            if expanded is None or not expanded.is_absolute():
                continue
            if expanded in results or not self.is_dir(expanded):
                continue
            results.append(expanded)
        return results

    def theme_directory_names(self, base_dir: Path) -> list[str]:
        """Return the folder names directly below ``base_dir``, hidden ones skipped."""
        try:
            names = [entry.name for entry in os.scandir(base_dir)]
        except OSError:
            return []
        return sorted(name for name in names if not name.startswith("."))

    def is_readable(self, path: Path) -> bool:
        return os.path.isfile(path) and os.access(path, os.R_OK)

    def is_dir(self, path: Path) -> bool:
        return os.path.isdir(path)


def base_directory_templates(environ: Mapping[str, str]) -> list[str]:
    """Return unexpanded base directory entries for ``environ``."""
    templates = ["$HOME/.icons"]  # deprecated location, still honoured
    if environ.get("XDG_DATA_HOME"):
        templates.append("$XDG_DATA_HOME/icons")
    else:
        templates.append("$HOME/.local/share/icons")
    templates.append("/usr/share/pixmaps")

    data_dirs = environ.get("XDG_DATA_DIRS") or DEFAULT_DATA_DIRS
    for data_dir in data_dirs.split(":"):
        if data_dir:
            templates.append(f"{data_dir}/icons")
    return templates


def expand_path(template: str, environ: Mapping[str, str]) -> Path | None:
    """Expand ``~`` and ``$VAR`` in ``template``; None if a variable is undefined."""
    missing = False

    def _substitute(match: re.Match[str]) -> str:
        nonlocal missing
        name = match.group(1) or match.group(2)
        value = environ.get(name)
        if value is None:
            missing = True
            return ""
        return value

    expanded = _VAR_RE.sub(_substitute, template)
    if missing:
        return None
    if expanded == "~" or expanded.startswith("~/"):
        home = environ.get("HOME")
        if home is None:
            return None
        expanded = home + expanded[1:]
    return Path(expanded)
