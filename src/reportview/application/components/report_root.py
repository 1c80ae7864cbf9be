"""ReportRoot: outermost component, reacts to report-wide events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reportview.application.components.base import Component
from reportview.application.components.category_navigation import CategoryNavigator
from reportview.application.components.category_panel import CategoryReportPanel
from reportview.application.components.rule_entry import RuleEntry
from reportview.application.components.violation_entry import ViolationEntry
from reportview.domain.events import CategoryActivated, ViolationSelected
from reportview.domain.exceptions import MissingDrawerError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reportview.application.components.violation_drawer import ViolationDrawer

logger = logging.getLogger(__name__)


class ReportRoot(Component):
    """Holds navigation, the category panels and the drawer.

    The drawer is a constructor dependency: a root without a drawer
    cannot exist, so drawer-open requests always have a target.

    On CategoryActivated (reconciled against the whole document):
      1. show every panel whose id matches, hide the rest
      2. collapse every RuleEntry through the silent peer path and
         deselect every ViolationEntry
      3. latch the empty state of the matching panels
      4. hide the drawer
    On ViolationSelected: show the drawer.

    Both handlers need the drawer attached to this root's document;
    a removed drawer raises MissingDrawerError.
    """

    def __init__(
        self,
        drawer: ViolationDrawer,
        navigator: CategoryNavigator | None = None,
        panels: Sequence[CategoryReportPanel] = (),
    ) -> None:
        """Initialize root.

        Raises:
            MissingDrawerError: drawer is None.
        """
        super().__init__()
        if drawer is None:
            raise MissingDrawerError
        self._drawer = drawer
        self._navigator = self.append(navigator if navigator is not None else CategoryNavigator())
        for panel in panels:
            self.append(panel)
        self.append(drawer)
        self.active_category_id: str | None = None
        self.category_description: str | None = None

        self.listen(CategoryActivated, self._on_category_activated)
        self.listen(ViolationSelected, self._on_violation_selected)

    def __repr__(self) -> str:
        return f"ReportRoot(active={self.active_category_id!r})"

    @property
    def drawer(self) -> ViolationDrawer:
        """The document's drawer."""
        return self._drawer

    @property
    def navigator(self) -> CategoryNavigator:
        """Category navigation."""
        return self._navigator

    @property
    def panels(self) -> tuple[CategoryReportPanel, ...]:
        """Category panels owned by this root."""
        return tuple(c for c in self.children if isinstance(c, CategoryReportPanel))

    def add_panel(self, panel: CategoryReportPanel) -> CategoryReportPanel:
        """Append a category panel."""
        return self.append(panel)

    def _on_category_activated(self, event: CategoryActivated) -> None:
        document = self._require_document()
        drawer = self._attached_drawer()
        self.active_category_id = event.id
        self.category_description = event.description
        self.request_update()

        panels = document.query_all(CategoryReportPanel)
        document.reconcile(panels, lambda p: p.set_visible(p.id == event.id), label="panel visibility")
        document.reconcile(document.query_all(RuleEntry), RuleEntry.other_rule_selected, label="collapse rule")
        document.reconcile(
            document.query_all(ViolationEntry), lambda e: e.set_selected(False), label="clear selection"
        )
        matching = [p for p in panels if p.id == event.id]
        document.reconcile(matching, CategoryReportPanel.mark_empty_if_no_rules, label="empty state")
        if not matching:
            logger.debug("Category %r matches no panel", event.id)
        drawer.hide()

    def _on_violation_selected(self, event: ViolationSelected) -> None:
        del event  # Unused: the drawer copies the event itself
        self._attached_drawer().show()

    def _attached_drawer(self) -> ViolationDrawer:
        if self._drawer.document is None or self._drawer.document is not self.document:
            raise MissingDrawerError
        return self._drawer
