"""Tests for icontheme.resolver."""

from __future__ import annotations

from pathlib import Path

import pytest

from icontheme.paths import LocalFileSystem
from icontheme.registry import ThemeRegistry
from icontheme.resolver import IconResolver, find_icon_in_dir


class _FixedDirs(LocalFileSystem):
    """Local filesystem with an explicit list of base directories."""

    def __init__(self, *base_dirs: Path) -> None:
        super().__init__(environ={})
        self._dirs = list(base_dirs)

    def base_directories(self) -> list[Path]:
        return [path for path in self._dirs if path.is_dir()]


def _write_theme(
    base: Path,
    folder: str,
    name: str,
    subdirs: list[tuple[str, str]],
    inherits: str | None = None,
) -> Path:
    """Write an index.theme; ``subdirs`` holds (dir name, group body) pairs."""
    theme_dir = base / folder
    theme_dir.mkdir(parents=True, exist_ok=True)
    lines = ["[Icon Theme]", f"Name={name}", "Comment=test"]
    if inherits:
        lines.append(f"Inherits={inherits}")
    lines.append("Directories=" + ",".join(subdir for subdir, _ in subdirs))
    for subdir, body in subdirs:
        lines.append("")
        lines.append(f"[{subdir}]")
        lines.extend(body.split(";"))
    (theme_dir / "index.theme").write_text("\n".join(lines) + "\n", encoding="utf-8")
    return theme_dir


def _icon(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"icon")
    return path


def _resolver(*base_dirs: Path, **kwargs) -> IconResolver:
    fs = _FixedDirs(*base_dirs)
    registry = ThemeRegistry(fs)
    registry.reload()
    return IconResolver(registry, **kwargs)


@pytest.fixture
def base(tmp_path):
    path = tmp_path / "icons"
    path.mkdir()
    return path


class TestExactMatch:
    def test_later_subdir_wins(self, base):
        theme_dir = _write_theme(
            base, "demo", "Demo",
            [("16x16", "Size=16;Type=Fixed"), ("scalable", "Size=48;Type=Scalable")],
        )
        _icon(theme_dir / "16x16" / "app.png")
        scalable = _icon(theme_dir / "scalable" / "app.svg")
        match = _resolver(base).find_icon_with_theme("app", 48, "Demo")
        assert match is not None
        assert match.path == scalable
        assert (match.min_size, match.max_size) == (48, 48)

    def test_reverse_order_beats_declaration_order(self, base):
        theme_dir = _write_theme(
            base, "demo", "Demo",
            [("a", "Size=48;Type=Threshold"), ("b", "Size=48;Type=Scalable;MinSize=8;MaxSize=512")],
        )
        _icon(theme_dir / "a" / "app.png")
        later = _icon(theme_dir / "b" / "app.png")
        match = _resolver(base).find_icon_with_theme("app", 48, "Demo")
        assert match.path == later
        assert (match.min_size, match.max_size) == (8, 512)

    def test_extension_priority(self, base):
        theme_dir = _write_theme(base, "demo", "Demo", [("s", "Size=16;Type=Fixed")])
        _icon(theme_dir / "s" / "app.xpm")
        svg = _icon(theme_dir / "s" / "app.svg")
        _icon(theme_dir / "s" / "app.png")
        assert _resolver(base).find_icon_with_theme("app", 16, "Demo").path == svg

    def test_custom_extensions(self, base):
        theme_dir = _write_theme(base, "demo", "Demo", [("s", "Size=16;Type=Fixed")])
        png = _icon(theme_dir / "s" / "app.png")
        _icon(theme_dir / "s" / "app.svg")
        resolver = _resolver(base, extensions=("png",))
        assert resolver.find_icon_with_theme("app", 16, "Demo").path == png

    def test_unknown_theme(self, base):
        assert _resolver(base).find_icon_with_theme("app", 16, "Nope") is None

    def test_folder_name_is_not_a_theme_name(self, base):
        theme_dir = _write_theme(base, "bar", "Foo", [("s", "Size=16;Type=Fixed")])
        hicolor = _write_theme(base, "hicolor", "Hicolor", [("s", "Size=16;Type=Fixed")])
        _icon(theme_dir / "s" / "app.png")
        fallback = _icon(hicolor / "s" / "app.png")
        resolver = _resolver(base)
        assert resolver.find_icon_with_theme("app", 16, "bar") is None
        assert resolver.find_icon("app", 16, "bar").path == fallback

    def test_searches_every_base_dir(self, tmp_path):
        first = tmp_path / "one"
        second = tmp_path / "two"
        _write_theme(first, "demo", "Demo", [("s", "Size=16;Type=Fixed")])
        (second / "demo" / "s").mkdir(parents=True)
        icon = _icon(second / "demo" / "s" / "app.png")
        match = _resolver(first, second).find_icon_with_theme("app", 16, "Demo")
        assert match.path == icon


class TestInexactMatch:
    def test_closest_fixed_dir(self, base):
        theme_dir = _write_theme(base, "demo", "Demo", [("32x32", "Size=32;Type=Fixed")])
        icon = _icon(theme_dir / "32x32" / "app.png")
        match = _resolver(base).find_icon_with_theme("app", 40, "Demo")
        assert match.path == icon
        assert (match.min_size, match.max_size) == (32, 32)

    def test_smallest_error_wins(self, base):
        theme_dir = _write_theme(
            base, "demo", "Demo",
            [("16", "Size=16;Type=Fixed"), ("32", "Size=32;Type=Fixed"), ("128", "Size=128;Type=Fixed")],
        )
        _icon(theme_dir / "16" / "app.png")
        closest = _icon(theme_dir / "32" / "app.png")
        _icon(theme_dir / "128" / "app.png")
        assert _resolver(base).find_icon_with_theme("app", 40, "Demo").path == closest

    def test_tie_keeps_later_declared(self, base):
        theme_dir = _write_theme(
            base, "demo", "Demo",
            [("32", "Size=32;Type=Fixed"), ("48", "Size=48;Type=Fixed")],
        )
        _icon(theme_dir / "32" / "app.png")
        later = _icon(theme_dir / "48" / "app.png")
        assert _resolver(base).find_icon_with_theme("app", 40, "Demo").path == later

    def test_skips_closer_dirs_without_file(self, base):
        theme_dir = _write_theme(
            base, "demo", "Demo",
            [("16", "Size=16;Type=Fixed"), ("32", "Size=32;Type=Fixed")],
        )
        icon = _icon(theme_dir / "16" / "app.png")
        (theme_dir / "32").mkdir()
        assert _resolver(base).find_icon_with_theme("app", 40, "Demo").path == icon


class TestInheritance:
    def test_falls_back_to_parent(self, base):
        _write_theme(base, "a", "A", [("s", "Size=16;Type=Fixed")], inherits="B")
        parent_dir = _write_theme(base, "b", "B", [("s", "Size=16;Type=Fixed")])
        icon = _icon(parent_dir / "s" / "app.png")
        match = _resolver(base).find_icon_with_theme("app", 16, "A")
        assert match.path == icon

    def test_child_preferred_over_parent(self, base):
        child_dir = _write_theme(base, "a", "A", [("s", "Size=16;Type=Fixed")], inherits="B")
        parent_dir = _write_theme(base, "b", "B", [("s", "Size=16;Type=Fixed")])
        child = _icon(child_dir / "s" / "app.png")
        _icon(parent_dir / "s" / "app.png")
        assert _resolver(base).find_icon_with_theme("app", 16, "A").path == child

    def test_child_inexact_beats_parent_exact(self, base):
        child_dir = _write_theme(base, "a", "A", [("s", "Size=16;Type=Fixed")], inherits="B")
        parent_dir = _write_theme(base, "b", "B", [("s", "Size=64;Type=Fixed")])
        child = _icon(child_dir / "s" / "app.png")
        _icon(parent_dir / "s" / "app.png")
        assert _resolver(base).find_icon_with_theme("app", 64, "A").path == child

    def test_multiple_parents_in_order(self, base):
        _write_theme(base, "a", "A", [("s", "Size=16;Type=Fixed")], inherits="Missing,C,B")
        b_dir = _write_theme(base, "b", "B", [("s", "Size=16;Type=Fixed")])
        c_dir = _write_theme(base, "c", "C", [("s", "Size=16;Type=Fixed")])
        _icon(b_dir / "s" / "app.png")
        c_icon = _icon(c_dir / "s" / "app.png")
        assert _resolver(base).find_icon_with_theme("app", 16, "A").path == c_icon

    def test_cycle_terminates(self, base):
        _write_theme(base, "a", "A", [("s", "Size=16;Type=Fixed")], inherits="B")
        _write_theme(base, "b", "B", [("s", "Size=16;Type=Fixed")], inherits="A")
        assert _resolver(base).find_icon_with_theme("app", 16, "A") is None


class TestFindIcon:
    def test_requested_theme_first(self, base):
        hicolor = _write_theme(base, "hicolor", "Hicolor", [("s", "Size=16;Type=Fixed")])
        demo = _write_theme(base, "demo", "Demo", [("s", "Size=16;Type=Fixed")])
        _icon(hicolor / "s" / "app.png")
        icon = _icon(demo / "s" / "app.png")
        assert _resolver(base).find_icon("app", 16, "Demo").path == icon

    def test_hicolor_fallback(self, base):
        hicolor = _write_theme(base, "hicolor", "Hicolor", [("s", "Size=16;Type=Fixed")])
        _write_theme(base, "demo", "Demo", [("s", "Size=16;Type=Fixed")])
        icon = _icon(hicolor / "s" / "app.png")
        assert _resolver(base).find_icon("app", 16, "Demo").path == icon
        assert _resolver(base).find_icon("app", 16).path == icon

    def test_flat_fallback(self, base):
        icon = _icon(base / "app.png")
        match = _resolver(base).find_icon("app", 16, "Demo")
        assert match.path == icon
        assert (match.min_size, match.max_size) == (1, 512)

    def test_not_found(self, base):
        assert _resolver(base).find_icon("missing", 16, "Demo") is None

    def test_repeated_calls_identical(self, base):
        theme_dir = _write_theme(
            base, "demo", "Demo",
            [("16", "Size=16;Type=Fixed"), ("scalable", "Size=48;Type=Scalable;MaxSize=256")],
        )
        _icon(theme_dir / "16" / "app.png")
        _icon(theme_dir / "scalable" / "app.svg")
        resolver = _resolver(base)
        results = {resolver.find_icon("app", 24, "Demo") for _ in range(5)}
        assert len(results) == 1

    def test_directory_named_like_icon_ignored(self, base):
        (base / "app.png").mkdir()
        assert _resolver(base).find_icon("app", 16) is None


def test_find_icon_in_dir(tmp_path):
    icon = _icon(tmp_path / "app.png")
    match = find_icon_in_dir("app", tmp_path, LocalFileSystem(environ={}))
    assert match.path == icon
    assert (match.min_size, match.max_size) == (1, 512)
    assert find_icon_in_dir("other", tmp_path, LocalFileSystem(environ={})) is None
