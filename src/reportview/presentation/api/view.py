"""ReportView facade: one mounted report document plus its central store.

Example:
    view = ReportView.from_file("report.json")
    view.activate_category("schemas")
    view.toggle_rule("oas3-schema")
    print(view.render())
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reportview.application.builder import ReportBuilder
from reportview.application.components.category_navigation import CategoryNavigator
from reportview.application.components.report_root import ReportRoot
from reportview.application.components.rule_entry import RuleEntry
from reportview.application.components.violation_drawer import find_drawer
from reportview.application.components.violation_entry import ViolationEntry
from reportview.application.document import Document
from reportview.application.renderers.console import ConsoleRenderer
from reportview.application.store import ViewStore, snapshot
from reportview.domain.events import CategoryActivated, RuleSelected, ViolationSelected
from reportview.domain.exceptions import ComponentNotFoundError, InvalidEventError
from reportview.domain.model.configuration import ReportConfig
from reportview.infrastructure.code_renderer import SnippetRenderer
from reportview.infrastructure.event_codec import decode_event
from reportview.infrastructure.report_loader import load_report_data

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from reportview.application.components.violation_drawer import ViolationDrawer
    from reportview.domain.events import Event
    from reportview.domain.model.report_data import ReportData
    from reportview.domain.model.view_state import ViewState

logger = logging.getLogger(__name__)


class ReportView:
    """Host-facing entry point.

    The store listens at document level, registered before mount, so
    it sees the bootstrap activation like any other event. After every
    interaction `state` equals `snapshot()`.
    """

    def __init__(self, root: ReportRoot, config: ReportConfig | None = None) -> None:
        """Mount root in a fresh document.

        Args:
            root: Unmounted report root.
            config: Configuration used for rendering. Uses defaults if None.

        Raises:
            ReconciliationError: A component failed during bootstrap.
        """
        self._config = config or ReportConfig()
        self._store = ViewStore()
        self._document = Document()
        for event_cls in (CategoryActivated, RuleSelected, ViolationSelected):
            self._document.listen(event_cls, self._store.dispatch)
        self._root = self._document.mount(root)
        self._renderer = ConsoleRenderer(self._config)

    def __repr__(self) -> str:
        return f"ReportView(active={self._store.state.active_category_id!r})"

    @classmethod
    def from_data(cls, data: ReportData, config: ReportConfig | None = None) -> ReportView:
        """Build and mount a report from loaded data.

        Raises:
            ReportDataError: Data inconsistent (unknown category).
        """
        config = config or ReportConfig()
        fragments = SnippetRenderer.from_config(data.spec_lines, config)
        root = ReportBuilder(config, fragment_factory=fragments).build(data)
        return cls(root, config)

    @classmethod
    def from_file(cls, path: Path | str, config: ReportConfig | None = None) -> ReportView:
        """Load a JSON report and mount it.

        Raises:
            ReportDataError: File unreadable or malformed.
        """
        return cls.from_data(load_report_data(path), config)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def document(self) -> Document:
        """Live document."""
        return self._document

    @property
    def root(self) -> ReportRoot:
        """Mounted report root."""
        return self._root

    @property
    def drawer(self) -> ViolationDrawer:
        """The document's drawer."""
        return find_drawer(self._document)

    @property
    def store(self) -> ViewStore:
        """Central store, for slice subscriptions."""
        return self._store

    @property
    def state(self) -> ViewState:
        """State reduced from every event so far."""
        return self._store.state

    def snapshot(self) -> ViewState:
        """State read off the component tree."""
        return snapshot(self._document)

    def violation_entries(self, rule_id: str | None = None) -> tuple[ViolationEntry, ...]:
        """Mounted violation entries of the visible panels, optionally of one rule."""
        return tuple(
            entry
            for rule in self._visible_rules()
            if rule_id is None or rule.rule_id == rule_id
            for entry in rule.entries
        )

    # -------------------------------------------------------------------------
    # Interactions
    # -------------------------------------------------------------------------

    def activate_category(self, category_id: str) -> None:
        """Click the navigation link of a category.

        Raises:
            ComponentNotFoundError: No link for category_id.
            ReconciliationError: A component failed to update.
        """
        link = self._root.navigator.link(category_id)
        if link is None:
            raise ComponentNotFoundError("CategoryLink", f"id={category_id!r}")
        link.click()

    def toggle_rule(self, rule_id: str) -> None:
        """Click the summary row of a rule in the visible panel.

        Raises:
            ComponentNotFoundError: No visible rule with rule_id.
            ReconciliationError: A component failed to update.
        """
        self._find_rule(rule_id).click_summary()

    def select_violation(self, violation_id: str) -> None:
        """Click a violation entry.

        Raises:
            ComponentNotFoundError: No entry with violation_id.
            ReconciliationError: A component failed to update.
        """
        self._find_entry(violation_id).click()

    def dispatch_wire_event(self, name: str, detail: Mapping[str, object]) -> Event:
        """Decode a wire event and raise it from the component that owns it.

        categoryActivated is raised by the navigator, ruleSelected acts as
        a click on the visible rule, violationSelected is raised by the
        entry with the matching violationId and must carry that entry's
        violation fields.

        Returns:
            The decoded event.

        Raises:
            InvalidEventError: Undecodable event, or violation fields that
                differ from the entry's.
            ComponentNotFoundError: No component owns the event's id.
            ReconciliationError: A component failed to update.
        """
        event = decode_event(name, detail)
        logger.debug("Wire event %s: %r", name, event)
        match event:
            case CategoryActivated():
                self._document.query_one(CategoryNavigator).dispatch(event)
            case RuleSelected():
                self._find_rule(event.id).click_summary()
            case ViolationSelected():
                entry = self._find_entry(event.violation_id)
                if not entry.describes(event):
                    raise InvalidEventError(name=name, reason=f"fields differ from violation {event.violation_id!r}")
                entry.dispatch(event)
        return event

    def render(self) -> str:
        """Current view as a rich formatted string."""
        return self._renderer.render(self._document)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def _visible_rules(self) -> tuple[RuleEntry, ...]:
        return tuple(rule for panel in self._root.panels if panel.visible for rule in panel.rules)

    def _find_rule(self, rule_id: str) -> RuleEntry:
        for rule in self._visible_rules():
            if rule.rule_id == rule_id:
                return rule
        raise ComponentNotFoundError("RuleEntry", f"rule_id={rule_id!r}")

    def _find_entry(self, violation_id: str) -> ViolationEntry:
        for entry in self._document.query_all(ViolationEntry):
            if entry.violation_id == violation_id:
                return entry
        raise ComponentNotFoundError("ViolationEntry", f"violation_id={violation_id!r}")
