"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

from icontheme.constants import EXTENSIONS, FALLBACK_MAX_SIZE, FALLBACK_MIN_SIZE

DEFAULT_ICON_SIZE = 24


class AppSettings:
    """Wraps QSettings for persistent lookup configuration.

    With ``path`` the settings live in that INI file, otherwise in the
    platform's native store for the ``icontheme`` application.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            self._qs = QSettings("icontheme", "icontheme")
        else:
            self._qs = QSettings(str(path), QSettings.Format.IniFormat)

    # -- lookup --

    @property
    def theme_name(self) -> str:
        raw = self._qs.value("lookup/theme", "", type=str)
        return (raw or "").strip()

    @theme_name.setter
    def theme_name(self, value: str) -> None:
        self._qs.setValue("lookup/theme", (value or "").strip())

    @property
    def icon_size(self) -> int:
        raw = self._qs.value("lookup/size", DEFAULT_ICON_SIZE, type=int)
        return _clamp_size(raw)

    @icon_size.setter
    def icon_size(self, value: int) -> None:
        self._qs.setValue("lookup/size", _clamp_size(value))

    @property
    def extensions(self) -> list[str]:
        raw = self._qs.value("lookup/extensions", list(EXTENSIONS))
        cleaned = _clean_extensions(_as_list(raw))
        return cleaned or list(EXTENSIONS)

    @extensions.setter
    def extensions(self, value: list[str]) -> None:
        self._qs.setValue("lookup/extensions", _clean_extensions(value))

    # -- paths --

    @property
    def extra_icon_dirs(self) -> list[str]:
        raw = self._qs.value("paths/extra_icon_dirs", [])
        return [item.strip() for item in _as_list(raw) if item.strip()]

    @extra_icon_dirs.setter
    def extra_icon_dirs(self, value: list[str]) -> None:
        cleaned = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        self._qs.setValue("paths/extra_icon_dirs", cleaned)

    # -- helpers --

    def sync(self) -> None:
        self._qs.sync()

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def log_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
        return base / "icontheme"


def _as_list(raw: object) -> list[str]:
    # QSettings hands back a plain string for single-item lists.
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw] if raw else []
    if isinstance(raw, (list, tuple)):
        return [item for item in raw if isinstance(item, str)]
    return []


def _clean_extensions(values: list[str]) -> list[str]:
    cleaned: list[str] = []
    for value in values:
        ext = value.strip().lstrip(".").lower()
        if ext and ext not in cleaned:
            cleaned.append(ext)
    return cleaned


def _clamp_size(value: int) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError):
        return DEFAULT_ICON_SIZE
    return max(FALLBACK_MIN_SIZE, min(FALLBACK_MAX_SIZE, size))
