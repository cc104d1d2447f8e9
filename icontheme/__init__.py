"""Freedesktop icon theme lookup."""

from icontheme.errors import ErrorCode, GrammarError, IconThemeError, ValidationError
from icontheme.models import IconMatch, IconTheme, IconThemeSubdir, SubdirType
from icontheme.paths import LocalFileSystem
from icontheme.registry import ThemeRegistry
from icontheme.resolver import IconResolver, find_icon_in_dir

__all__ = [
    "ErrorCode",
    "GrammarError",
    "IconThemeError",
    "ValidationError",
    "IconMatch",
    "IconTheme",
    "IconThemeSubdir",
    "SubdirType",
    "LocalFileSystem",
    "ThemeRegistry",
    "IconResolver",
    "find_icon_in_dir",
]
