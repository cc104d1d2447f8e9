"""YAML summary of a loaded theme registry."""

from __future__ import annotations

from typing import Any

import yaml

from icontheme.models import IconTheme
from icontheme.registry import ThemeRegistry


def theme_summary(theme: IconTheme) -> dict[str, Any]:
    summary: dict[str, Any] = {
        "name": theme.name,
        "dir": theme.dir,
        "comment": theme.comment,
    }
    if theme.inherits:
        summary["inherits"] = list(theme.parents)
    summary["subdirs"] = [
        {
            "name": subdir.name,
            "type": subdir.type.value,
            "size": subdir.size,
            "range": [subdir.min_size, subdir.max_size],
        }
        for subdir in theme.subdirs
    ]
    return summary


def registry_summary(registry: ThemeRegistry) -> dict[str, Any]:
    """Return base directories, loaded themes and load errors as plain data."""
    return {
        "base_dirs": [str(path) for path in registry.base_dirs],
        "themes": [theme_summary(theme) for theme in registry.themes],
        "errors": [exc.to_dict() for exc in registry.load_failures()],
    }


def dump_registry(registry: ThemeRegistry) -> str:
    return yaml.safe_dump(
        registry_summary(registry),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
