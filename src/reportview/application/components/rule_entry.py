"""RuleEntry: accordion holding the violations of one rule.

State machine:

    collapsed ──click_summary()──▶ expanded     (broadcasts RuleSelected)
    expanded  ──click_summary()──▶ collapsed    (broadcasts RuleSelected)
    expanded  ──other_rule_selected()──▶ collapsed   (silent)

Mutual exclusion has no coordinator: every RuleEntry listens to every
RuleSelected at document level and collapses itself unless it broadcast
that very event. Entries of the same rule in other panels collapse too.
The silent path keeps collapses from triggering more collapses.
"""

from __future__ import annotations

from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, cast

from reportview.application.components.base import Component
from reportview.application.components.category_panel import CategoryReportPanel
from reportview.application.components.violation_entry import ViolationEntry
from reportview.domain.events import RuleSelected, ViolationSelected

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from reportview.domain.model.rendered_code import RenderedCode
    from reportview.domain.model.rule import RuleSummary
    from reportview.domain.model.violation import Violation

DEFAULT_HEADER_HEIGHT = 60


class RuleState(Enum):
    """Accordion state."""

    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


class RuleEntry(Component):
    """One rule inside a category panel.

    Only the first `max_violations_shown` violations are mounted; the
    rest are counted in the truncation notice. All violations are still
    held, the cap is display-only.
    """

    def __init__(
        self,
        summary: RuleSummary,
        violations: Sequence[Violation],
        *,
        header_height: int = DEFAULT_HEADER_HEIGHT,
        fragment_for: Callable[[Violation], RenderedCode | None] | None = None,
    ) -> None:
        """Initialize and mount the capped violation entries.

        Args:
            summary: Static rule header data.
            violations: Every violation of the rule in this category.
            header_height: Pixels reserved per sibling rule header.
            fragment_for: Produces the rendered code of a violation.

        Raises:
            ValueError: violations count differs from summary.num_results.
        """
        super().__init__()
        if len(violations) != summary.num_results:
            raise ValueError(
                f"summary.num_results ({summary.num_results}) != violations ({len(violations)})"
            )
        self._summary = summary
        self._violations = tuple(violations)
        self._header_height = header_height
        self.state = RuleState.COLLAPSED
        self.max_height: int | None = None
        self._broadcast: RuleSelected | None = None

        for violation in self._violations[: summary.max_violations_shown]:
            fragment = partial(fragment_for, violation) if fragment_for is not None else None
            self.append(ViolationEntry(violation, fragment))

    def __repr__(self) -> str:
        return f"RuleEntry(rule_id={self.rule_id!r}, state={self.state.value})"

    @property
    def summary(self) -> RuleSummary:
        """Static rule header data."""
        return self._summary

    @property
    def rule_id(self) -> str:
        """Rule identifier."""
        return self._summary.rule_id

    @property
    def violations(self) -> tuple[Violation, ...]:
        """Every violation, mounted or not."""
        return self._violations

    @property
    def entries(self) -> tuple[ViolationEntry, ...]:
        """Mounted violation entries."""
        return cast("tuple[ViolationEntry, ...]", self.children)

    @property
    def expanded(self) -> bool:
        """Accordion open."""
        return self.state is RuleState.EXPANDED

    @property
    def truncation_notice(self) -> str | None:
        """Notice for violations not mounted, None when nothing was cut."""
        if not self._summary.truncated:
            return None
        return f"{self._summary.omitted_count} more violations not rendered, There are just too many!"

    def connected(self) -> None:
        self.listen_document(RuleSelected, self._on_rule_selected)
        self.listen_document(ViolationSelected, self._on_violation_selected)

    def click_summary(self) -> None:
        """User clicked the summary row: toggle and broadcast RuleSelected."""
        document = self._require_document()
        with document.interaction():
            if self.expanded:
                self._collapse()
            else:
                self._expand()
            self._broadcast = RuleSelected(id=self.rule_id)
            try:
                self.dispatch(self._broadcast)
            finally:
                self._broadcast = None

    def other_rule_selected(self) -> None:
        """Peer notification: collapse silently. Selection is left alone."""
        self._collapse()

    def compute_max_height(self) -> int | None:
        """Violation list height that keeps every rule header in view.

        Containing panel height minus header_height per rule in the
        category, floored at 0. None when the panel height is unknown.
        """
        panel = self.closest(CategoryReportPanel)
        if panel is None or panel.rendered_height is None:
            return None
        reserved = self._header_height * self._summary.total_rules_in_category
        return max(0, panel.rendered_height - reserved)

    def _expand(self) -> None:
        self.state = RuleState.EXPANDED
        self.max_height = self.compute_max_height()
        self.request_update()

    def _collapse(self) -> None:
        if self.state is RuleState.COLLAPSED:
            return
        self.state = RuleState.COLLAPSED
        self.request_update()

    def _on_rule_selected(self, event: RuleSelected) -> None:
        if event is not self._broadcast:
            self.other_rule_selected()

    def _on_violation_selected(self, event: ViolationSelected) -> None:
        document = self._require_document()
        document.reconcile(
            self.entries,
            lambda entry: entry.set_selected(entry.violation_id == event.violation_id),
            label="select violation",
        )
