"""CategoryReportPanel: the rule list of one category."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from reportview.application.components.base import Component

if TYPE_CHECKING:
    from reportview.application.components.rule_entry import RuleEntry

NO_VIOLATIONS_TEXT = "All good in here, no rules broken!"


class CategoryReportPanel(Component):
    """Groups the RuleEntry children of one category.

    Visibility is driven from outside (ReportRoot compares every panel's
    id against the activated category), never by the panel itself.
    `is_empty` latches the first time the panel's category is activated
    with no rules: a static report never gains rules.

    Attributes:
        id: Category id.
        visible: Panel shown.
        is_empty: Empty state latched.
        rendered_height: Height in pixels reported by the layout, None
            when unknown.
    """

    def __init__(self, category_id: str, *, rendered_height: int | None = None) -> None:
        super().__init__()
        if not category_id:
            raise ValueError("category_id must not be empty")
        self.id = category_id
        self.visible = False
        self.is_empty = False
        self.rendered_height = rendered_height

    def __repr__(self) -> str:
        return f"CategoryReportPanel(id={self.id!r})"

    @property
    def rules(self) -> tuple[RuleEntry, ...]:
        """Live rule entries, in display order."""
        return cast("tuple[RuleEntry, ...]", self.children)

    def add_rule(self, rule: RuleEntry) -> RuleEntry:
        """Append a rule entry."""
        return self.append(rule)

    def set_visible(self, visible: bool) -> None:
        """Show or hide, requesting a render only on change."""
        if self.visible != visible:
            self.visible = visible
            self.request_update()

    def mark_empty_if_no_rules(self) -> bool:
        """Latch is_empty when no rule is attached. Returns is_empty."""
        if not self.is_empty and not self.rules:
            self.is_empty = True
            self.request_update()
        return self.is_empty
