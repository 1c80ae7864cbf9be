"""Domain enumerations."""

from __future__ import annotations

from enum import Enum


class Severity(Enum):
    """Rule severity. Declaration order is sort order: errors first."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    HINT = "hint"

    @property
    def icon(self) -> str:
        """Glyph shown next to a rule in the report."""
        return _ICONS[self]

    @property
    def rank(self) -> int:
        """Sort key, lower is more severe."""
        return _RANKS[self]

    @classmethod
    def parse(cls, value: str | None) -> Severity:
        """Parse a severity name. Missing or unknown severity is a warning."""
        if not value:
            return cls.WARN
        normalized = value.strip().lower()
        if normalized in ("warning", "warn"):
            return cls.WARN
        for member in cls:
            if member.value == normalized:
                return member
        return cls.WARN


_ICONS = {
    Severity.ERROR: "❌",
    Severity.WARN: "⚠️",
    Severity.INFO: "\U0001f535",
    Severity.HINT: "\U0001f4a0",
}

_RANKS = {member: rank for rank, member in enumerate(Severity)}
