"""Report input data: what the builder turns into a component tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from reportview.domain.model.category import Category
    from reportview.domain.model.rule import RuleResult


@dataclass(frozen=True, slots=True)
class ReportData:
    """Lint results plus the categories to navigate them by.

    Attributes:
        categories: Navigable categories in order (without the synthetic "all")
        results: Every lint result, in engine order
        max_violations: Display cap per rule (>= 1)
        generated: Report generation time
        spec_lines: Lines of the linted document, empty when unavailable
    """

    categories: tuple[Category, ...]
    results: tuple[RuleResult, ...]
    max_violations: int = 100
    generated: datetime | None = None
    spec_lines: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_violations < 1:
            raise ValueError(f"max_violations must be >= 1, got {self.max_violations}")
        ids = [c.id for c in self.categories]
        if len(ids) != len(set(ids)):
            raise ValueError("category ids must be unique")

    def results_for(self, category_id: str) -> tuple[RuleResult, ...]:
        """Results whose rule belongs to category_id."""
        return tuple(r for r in self.results if r.rule.category_id == category_id)
