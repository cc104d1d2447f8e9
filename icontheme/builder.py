"""Fold index file events into an IconTheme."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

from icontheme.constants import DEFAULT_THRESHOLD, ICON_THEME_GROUP, INHERITS_KEYS
from icontheme.errors import ErrorCode, GrammarError, ValidationError
from icontheme.models import IconTheme, IconThemeSubdir, SubdirType
from icontheme.parser import Entry, Event, GroupEnd, GroupStart

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_KEYS = {
    "Size": "size",
    "MinSize": "min_size",
    "MaxSize": "max_size",
    "Threshold": "threshold",
}


@dataclass(slots=True)
class _SubdirDraft:
    name: str
    size: int | None = None
    type: SubdirType = SubdirType.THRESHOLD
    min_size: int | None = None
    max_size: int | None = None
    threshold: int = DEFAULT_THRESHOLD
    result: IconThemeSubdir | None = None

    def finalize(self, line: int) -> None:
        if self.size is None:
            raise ValidationError(
                ErrorCode.MISSING_SIZE,
                line=line,
                details={"group": self.name},
            )
        size = self.size
        if self.type is SubdirType.FIXED:
            min_size = max_size = size
        elif self.type is SubdirType.SCALABLE:
            min_size = size if self.min_size is None else self.min_size
            max_size = size if self.max_size is None else self.max_size
        else:
            min_size = size - self.threshold
            max_size = size + self.threshold
        self.result = IconThemeSubdir(
            name=self.name,
            size=size,
            type=self.type,
            min_size=min_size,
            max_size=max_size,
            threshold=self.threshold,
        )


class ThemeBuilder:
    """Accumulates one theme from a stream of parser events.

    Errors are raised as :class:`GrammarError` or :class:`ValidationError`;
    a builder that raised must be thrown away.
    """

    def __init__(self) -> None:
        self._started = False
        self._header_closed = False
        self._name: str | None = None
        self._comment: str | None = None
        self._inherits: str | None = None
        self._directories: tuple[str, ...] | None = None
        self._subdirs: list[_SubdirDraft] = []

    def feed(self, event: Event) -> None:
        if isinstance(event, GroupStart):
            self._on_group_start(event)
        elif isinstance(event, GroupEnd):
            self._on_group_end(event)
        else:
            self._on_entry(event)

    def finish(self, dir_name: str) -> IconTheme:
        """Return the finished theme for the folder ``dir_name``."""
        if not self._started:
            raise ValidationError(ErrorCode.FIRST_GROUP)
        if not self._header_closed:
            raise ValidationError(ErrorCode.MISSING_THEME_FIELD)
        subdirs: list[IconThemeSubdir] = []
        for draft in self._subdirs:
            if draft.result is None:
                raise ValidationError(ErrorCode.MISSING_SIZE, details={"group": draft.name})
            subdirs.append(draft.result)
        return IconTheme(
            name=self._name,
            comment=self._comment,
            directories=self._directories,
            subdirs=tuple(subdirs),
            dir=dir_name,
            inherits=self._inherits,
        )

    # -- events --

    def _on_group_start(self, event: GroupStart) -> None:
        if not self._started:
            if event.name != ICON_THEME_GROUP:
                raise ValidationError(
                    ErrorCode.FIRST_GROUP,
                    line=event.line,
                    details={"group": event.name},
                )
            self._started = True
            return

        if not self._directories or event.name not in self._directories:
            return
        if any(draft.name == event.name for draft in self._subdirs):
            return
        self._subdirs.append(_SubdirDraft(name=event.name))

    def _on_group_end(self, event: GroupEnd) -> None:
        if event.name == ICON_THEME_GROUP:
            if not (self._name is not None and self._comment is not None and self._directories):
                raise ValidationError(ErrorCode.MISSING_THEME_FIELD, line=event.line)
            self._header_closed = True
            return

        draft = self._current_subdir(event.name)
        if draft is not None:
            draft.finalize(event.line)

    def _on_entry(self, event: Entry) -> None:
        if event.group is None:
            raise ValidationError(ErrorCode.FIRST_GROUP, line=event.line)

        if event.group == ICON_THEME_GROUP:
            self._on_theme_entry(event)
            return

        draft = self._current_subdir(event.group)
        if draft is None:
            return
        if event.key in _INT_KEYS:
            setattr(draft, _INT_KEYS[event.key], _parse_int(event))
        elif event.key == "Type":
            draft.type = _parse_type(event)
        # Ignored: Scale, Context, Applications

    def _on_theme_entry(self, event: Entry) -> None:
        if event.key == "Name":
            self._name = event.value
        elif event.key == "Comment":
            self._comment = event.value
        elif event.key in INHERITS_KEYS:
            self._inherits = event.value
        elif event.key == "Directories":
            self._directories = tuple(
                dict.fromkeys(part for part in event.value.split(",") if part)
            )
        # Ignored: ScaledDirectories, Hidden, Example

    def _current_subdir(self, group: str) -> _SubdirDraft | None:
        if not self._subdirs:
            return None
        draft = self._subdirs[-1]
        if draft.name != group:
            return None
        return draft


def build_theme(events: Iterable[Event], dir_name: str) -> IconTheme:
    """Fold ``events`` into a theme stored in the folder ``dir_name``."""
    builder = ThemeBuilder()
    for event in events:
        builder.feed(event)
    return builder.finish(dir_name)


def _parse_int(event: Entry) -> int:
    if not _INT_RE.fullmatch(event.value):
        raise GrammarError(
            ErrorCode.BAD_NUMBER,
            line=event.line,
            details={"key": event.key, "value": event.value},
        )
    return int(event.value)


def _parse_type(event: Entry) -> SubdirType:
    try:
        return SubdirType(event.value)
    except ValueError as exc:
        raise GrammarError(
            ErrorCode.BAD_TYPE,
            line=event.line,
            details={"value": event.value},
        ) from exc
