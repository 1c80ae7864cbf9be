"""Violation entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reportview.domain.model.rendered_code import RenderedCode
    from reportview.domain.model.span import Span


@dataclass(frozen=True, slots=True)
class Violation:
    """Static data of one violation occurrence.

    Attributes:
        rule_id: Violated rule (must not be empty)
        category: Category id of the rule (must not be empty)
        message: Human-readable explanation (must not be empty)
        path: JSON path of the offending node
        span: Location in the linted document
        how_to_fix: Fix hint, None when the rule has none
    """

    rule_id: str
    category: str
    message: str
    path: str
    span: Span
    how_to_fix: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.rule_id:
            raise ValueError("rule_id must not be empty")
        if not self.category:
            raise ValueError("category must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")


@dataclass(frozen=True, slots=True)
class ViolationRecord:
    """Snapshot of a mounted violation entry.

    Attributes:
        violation_id: Random id assigned on attach
        violation: Static violation data
        selected: Highlighted in its rule group
        rendered_code: Captured fragment, None until first selection
    """

    violation_id: str
    violation: Violation
    selected: bool
    rendered_code: RenderedCode | None
