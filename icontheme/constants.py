"""Icon theme lookup constants."""

from __future__ import annotations

INDEX_FILE_NAME = "index.theme"
ICON_THEME_GROUP = "Icon Theme"
FALLBACK_THEME_NAME = "Hicolor"

# Highest priority first.
EXTENSIONS: tuple[str, ...] = (
    "svg",
    "png",
    "xpm",
)

DEFAULT_THRESHOLD = 2
FALLBACK_MIN_SIZE = 1
FALLBACK_MAX_SIZE = 512

INHERITS_KEYS: tuple[str, ...] = (
    "Inherits",
    "Inherists",
)

DEFAULT_DATA_DIRS = "/usr/local/share:/usr/share"
