"""Tokenizer for freedesktop desktop-entry style index files.

The grammar is the subset used by ``index.theme`` files:

* blank lines and lines starting with ``#`` are skipped,
* ``[Group Name]`` opens a group,
* ``Key=Value`` assigns a value inside the current group.

Lines are turned into a flat sequence of events. The parser knows nothing
about icon themes; :mod:`icontheme.builder` gives the events meaning.
Values are taken verbatim, backslash escapes are not decoded.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from icontheme.errors import ErrorCode, GrammarError

_KEY_RE = re.compile(r"[A-Za-z0-9-]*")
# ASCII whitespace only; other code points belong to the line.
_WHITESPACE = " \t\r\n\v\f"


@dataclass(frozen=True, slots=True)
class GroupStart:
    """A ``[name]`` header was read."""

    name: str
    line: int


@dataclass(frozen=True, slots=True)
class GroupEnd:
    """The group ``name`` was closed by the next header or end of input."""

    name: str
    line: int


@dataclass(frozen=True, slots=True)
class Entry:
    """A ``key=value`` line. ``group`` is None before the first header."""

    group: str | None
    key: str
    value: str
    line: int


Event = GroupStart | GroupEnd | Entry


def iter_events(lines: Iterable[str]) -> Iterator[Event]:
    """Yield parse events for ``lines``, raising GrammarError on the first bad line."""
    group: str | None = None
    lineno = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip(_WHITESPACE)
        if not line or line.startswith("#"):
            continue

        if line.startswith("["):
            name = _parse_group_header(line, lineno)
            if group is not None:
                yield GroupEnd(group, lineno)
            yield GroupStart(name, lineno)
            group = name
        else:
            key, value = _parse_entry(line, lineno)
            yield Entry(group, key, value, lineno)

    if group is not None:
        yield GroupEnd(group, lineno)


def parse_events(lines: Iterable[str]) -> list[Event]:
    """Parse ``lines`` completely and return the events as a list."""
    return list(iter_events(lines))


def _parse_group_header(line: str, lineno: int) -> str:
    if len(line) < 2 or not line.endswith("]"):
        raise GrammarError(
            ErrorCode.MALFORMED_GROUP,
            line=lineno,
            details={"text": line},
        )
    name = line[1:-1]
    for ch in name:
        if ch in "[]" or _is_control(ch):
            raise GrammarError(
                ErrorCode.MALFORMED_GROUP,
                line=lineno,
                details={"text": line},
            )
    return name


def _parse_entry(line: str, lineno: int) -> tuple[str, str]:
    key = _KEY_RE.match(line).group(0)
    rest = line[len(key):].lstrip(_WHITESPACE)
    if not rest.startswith("="):
        raise GrammarError(
            ErrorCode.MALFORMED_ENTRY,
            line=lineno,
            details={"text": line},
        )
    return key, rest[1:].lstrip(_WHITESPACE)


def _is_control(ch: str) -> bool:
    code = ord(ch)
    return code < 0x20 or code == 0x7F
