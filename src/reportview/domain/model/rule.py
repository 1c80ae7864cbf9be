"""Rule entities: lint engine output and per-rule report summary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reportview.domain.model.enums import Severity
    from reportview.domain.model.span import Span


@dataclass(frozen=True, slots=True)
class Rule:
    """A named check.

    Attributes:
        id: Rule identifier (must not be empty)
        description: Human-readable summary of the check
        category_id: Category the rule belongs to (must not be empty)
        severity: ERROR/WARN/INFO/HINT
        how_to_fix: Fix hint shown in the drawer
    """

    id: str
    description: str
    category_id: str
    severity: Severity
    how_to_fix: str = ""

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.id:
            raise ValueError("id must not be empty")
        if not self.category_id:
            raise ValueError("category_id must not be empty")


@dataclass(frozen=True, slots=True)
class RuleResult:
    """One failed check, as produced by the lint engine."""

    rule: Rule
    message: str
    path: str
    span: Span

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("message must not be empty")


@dataclass(frozen=True, slots=True)
class RuleSummary:
    """Static header data of one rule inside one category panel.

    The mutable expanded flag lives on the RuleEntry component.

    Attributes:
        rule_id: Rule identifier (must not be empty)
        description: Rule description
        icon: Severity glyph
        num_results: Number of violations of this rule in the category
        total_rules_in_category: Number of rules in the owning panel (>= 1)
        max_violations_shown: Display cap for mounted violations (>= 1)
    """

    rule_id: str
    description: str
    icon: str
    num_results: int
    total_rules_in_category: int
    max_violations_shown: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.rule_id:
            raise ValueError("rule_id must not be empty")
        if self.num_results < 0:
            raise ValueError(f"num_results must be >= 0, got {self.num_results}")
        if self.total_rules_in_category < 1:
            raise ValueError(f"total_rules_in_category must be >= 1, got {self.total_rules_in_category}")
        if self.max_violations_shown < 1:
            raise ValueError(f"max_violations_shown must be >= 1, got {self.max_violations_shown}")

    @property
    def truncated(self) -> bool:
        """More results than the display cap allows."""
        return self.num_results > self.max_violations_shown

    @property
    def omitted_count(self) -> int:
        """Results not mounted because of the display cap."""
        return max(0, self.num_results - self.max_violations_shown)

    @property
    def shown_count(self) -> int:
        """Results actually mounted."""
        return min(self.num_results, self.max_violations_shown)
