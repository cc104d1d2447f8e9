"""Error codes and error handling utilities for icontheme."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for theme loading."""

    # Grammar errors
    MALFORMED_GROUP = auto()
    MALFORMED_ENTRY = auto()
    BAD_NUMBER = auto()
    BAD_TYPE = auto()

    # Validation errors
    FIRST_GROUP = auto()
    MISSING_THEME_FIELD = auto()
    MISSING_SIZE = auto()

    # File system errors
    FILE_UNREADABLE = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MALFORMED_GROUP: "Malformed group header.",
    ErrorCode.MALFORMED_ENTRY: "Malformed key-value line, expected 'Key=Value'.",
    ErrorCode.BAD_NUMBER: "Expected an integer value.",
    ErrorCode.BAD_TYPE: "Unknown directory type, expected Fixed, Scalable or Threshold.",

    ErrorCode.FIRST_GROUP: "The first group must be [Icon Theme].",
    ErrorCode.MISSING_THEME_FIELD: "[Icon Theme] requires Name, Comment and Directories.",
    ErrorCode.MISSING_SIZE: "Icon directory group requires a Size entry.",

    ErrorCode.FILE_UNREADABLE: "The theme index file could not be read.",
}


@dataclass
class IconThemeError(Exception):
    """Base exception for icontheme with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    line: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        location = ""
        if self.path is not None:
            location = str(self.path)
        if self.line is not None:
            location = f"{location}:{self.line}" if location else f"line {self.line}"
        parts = [f"{location}: {self.message}" if location else self.message]
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f" ({details_str})")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or reports."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "line": self.line,
            "details": self.details,
        }


class GrammarError(IconThemeError):
    """Raised when an index file line is not well formed."""


class ValidationError(IconThemeError):
    """Raised when a theme or directory group lacks required entries."""
