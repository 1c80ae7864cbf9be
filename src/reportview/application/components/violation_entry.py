"""ViolationEntry: leaf component for one violation occurrence."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, TypeAlias

from reportview.application.components.base import Component
from reportview.domain.events import ViolationSelected
from reportview.domain.exceptions import DetachedComponentError
from reportview.domain.model.violation import ViolationRecord

if TYPE_CHECKING:
    from collections.abc import Callable

    from reportview.domain.model.rendered_code import RenderedCode
    from reportview.domain.model.violation import Violation

FragmentSource: TypeAlias = "Callable[[], RenderedCode | None]"


def new_violation_id() -> str:
    """Random violation id. Not derived from content."""
    return secrets.token_hex(8)


class ViolationEntry(Component):
    """One violation in a rule's list.

    The violation id is regenerated on every attach, so two identical
    violations (or one violation mounted twice) stay distinguishable.
    The rendered code fragment is read from `fragment` on the first click
    only and cached; the drawer borrows it for display.
    """

    def __init__(self, violation: Violation, fragment: FragmentSource | None = None) -> None:
        super().__init__()
        self._violation = violation
        self._fragment = fragment
        self._rendered_code: RenderedCode | None = None
        self._fragment_captured = False
        self._violation_id: str | None = None
        self.selected = False

    def __repr__(self) -> str:
        return f"ViolationEntry(rule={self._violation.rule_id!r}, line={self._violation.span.start_line})"

    @property
    def violation(self) -> Violation:
        """Static violation data."""
        return self._violation

    @property
    def violation_id(self) -> str | None:
        """Id assigned on attach, None while detached."""
        return self._violation_id

    @property
    def rendered_code(self) -> RenderedCode | None:
        """Cached fragment, None until the first click captured it."""
        return self._rendered_code

    @property
    def record(self) -> ViolationRecord:
        """Frozen snapshot of this entry.

        Raises:
            DetachedComponentError: Entry not attached, no id yet.
        """
        return ViolationRecord(
            violation_id=self._require_id(),
            violation=self._violation,
            selected=self.selected,
            rendered_code=self._rendered_code,
        )

    def connected(self) -> None:
        self._violation_id = new_violation_id()

    def disconnected(self) -> None:
        self._violation_id = None
        self.selected = False

    def set_selected(self, selected: bool) -> None:
        """Set highlight state, requesting a render only on change."""
        if self.selected != selected:
            self.selected = selected
            self.request_update()

    def click(self) -> None:
        """User activated the entry: broadcast ViolationSelected.

        Raises:
            DetachedComponentError: Entry not attached.
        """
        document = self._require_document()
        with document.interaction():
            self.dispatch(self._build_event(self._capture_fragment()))

    def describes(self, event: ViolationSelected) -> bool:
        """Event carries this entry's id and violation fields. The code fragment is not compared.

        Raises:
            DetachedComponentError: Entry not attached.
        """
        return event == self._build_event(event.rendered_code)

    def _capture_fragment(self) -> RenderedCode | None:
        if not self._fragment_captured:
            self._fragment_captured = True
            self._rendered_code = self._fragment() if self._fragment is not None else None
        return self._rendered_code

    def _build_event(self, rendered_code: RenderedCode | None) -> ViolationSelected:
        v = self._violation
        return ViolationSelected(
            message=v.message,
            id=v.rule_id,
            start_line=v.span.start_line,
            start_col=v.span.start_col,
            end_line=v.span.end_line,
            end_col=v.span.end_col,
            path=v.path,
            category=v.category,
            violation_id=self._require_id(),
            rendered_code=rendered_code,
            how_to_fix=v.how_to_fix,
        )

    def _require_id(self) -> str:
        if self._violation_id is None:
            raise DetachedComponentError(type(self).__name__)
        return self._violation_id
