"""Command line bootstrap."""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
from typing import Sequence

from icontheme.config.settings import AppSettings
from icontheme.paths import LocalFileSystem
from icontheme.registry import ThemeRegistry
from icontheme.report import dump_registry
from icontheme.resolver import IconResolver


def _configure_logger(settings: AppSettings, verbose: bool) -> logging.Logger:
    logger = logging.getLogger("icontheme")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    handler = RotatingFileHandler(
        settings.log_dir / "icontheme.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    handler.setLevel(logging.INFO)
    logger.addHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console)
    logger.propagate = False
    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icontheme",
        description="Look up freedesktop icon theme files",
    )
    parser.add_argument("--settings", help="Path to an INI settings file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log lookup details")
    subparsers = parser.add_subparsers(dest="command", required=True)

    find_parser = subparsers.add_parser("find", help="Resolve an icon name to a file")
    find_parser.add_argument("name", help="Icon name without extension")
    find_parser.add_argument("--size", type=int, help="Target size in pixels")
    find_parser.add_argument("--theme", help="Theme to search before Hicolor")

    subparsers.add_parser("list", help="Show loaded themes as YAML")
    subparsers.add_parser("dirs", help="Show icon base directories in search order")
    return parser


def run_app(argv: Sequence[str] | None = None) -> int:
    """Parse ``argv``, run the requested command and return the exit code."""
    args = build_parser().parse_args(argv)
    settings = AppSettings(args.settings)
    logger = _configure_logger(settings, args.verbose)

    fs = LocalFileSystem(extra_dirs=settings.extra_icon_dirs)
    registry = ThemeRegistry(fs)
    registry.reload()
    errors = registry.load_errors()
    if errors:
        logger.warning("theme load warnings: %s", " | ".join(errors[:6]))

    if args.command == "dirs":
        for base_dir in registry.base_dirs:
            print(base_dir)
        return 0
    if args.command == "list":
        sys.stdout.write(dump_registry(registry))
        return 0

    resolver = IconResolver(registry, fs, extensions=settings.extensions)
    size = args.size if args.size is not None else settings.icon_size
    theme_name = args.theme or settings.theme_name or None
    match = resolver.find_icon(args.name, size, theme_name)
    if match is None:
        print(f"No icon found for {args.name!r} at size {size}", file=sys.stderr)
        return 1
    logger.info("resolved %s size=%d theme=%s -> %s", args.name, size, theme_name, match.path)
    print(f"{match.path} {match.min_size}-{match.max_size}")
    return 0
