"""Central view store: the report UI as one value updated by pure reducers.

Same event vocabulary as the component tree. For any event sequence,
reducing from the bootstrap state gives the value snapshot() reads off
the settled tree.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, TypeAlias

from reportview.application.components.report_root import ReportRoot
from reportview.application.components.rule_entry import RuleEntry
from reportview.application.components.violation_drawer import find_drawer
from reportview.application.components.violation_entry import ViolationEntry
from reportview.domain.events import CategoryActivated, RuleSelected, ViolationSelected
from reportview.domain.model.view_state import ViewState

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from reportview.application.document import Document
    from reportview.domain.events import Event

Selector: TypeAlias = "Callable[[ViewState], object]"
Subscriber: TypeAlias = "Callable[[ViewState], None]"


# =============================================================================
# Reducers
# =============================================================================


def reduce_category_activated(state: ViewState, event: CategoryActivated) -> ViewState:
    """Switch category: collapse everything, clear selection, hide drawer."""
    return replace(
        state,
        active_category_id=event.id,
        expanded_rule_id=None,
        selected_violation_id=None,
        selected_rule_id=None,
        drawer_visible=False,
    )


def reduce_rule_selected(state: ViewState, event: RuleSelected) -> ViewState:
    """Toggle a rule. Selection and drawer are untouched."""
    expanded = None if state.expanded_rule_id == event.id else event.id
    return replace(state, expanded_rule_id=expanded)


def reduce_violation_selected(state: ViewState, event: ViolationSelected) -> ViewState:
    """Select a violation and open the drawer on it."""
    return replace(
        state,
        selected_violation_id=event.violation_id,
        selected_rule_id=event.id,
        drawer_visible=True,
        drawer_current=event,
    )


def reduce(state: ViewState, event: Event) -> ViewState:
    """Apply one event. Pure: state is never mutated."""
    match event:
        case CategoryActivated():
            return reduce_category_activated(state, event)
        case RuleSelected():
            return reduce_rule_selected(state, event)
        case ViolationSelected():
            return reduce_violation_selected(state, event)


def reduce_all(events: Iterable[Event], state: ViewState | None = None) -> ViewState:
    """Fold events over state (default: initial state)."""
    result = state if state is not None else ViewState()
    for event in events:
        result = reduce(result, event)
    return result


# =============================================================================
# Store
# =============================================================================


class ViewStore:
    """Holds the current ViewState and notifies slice subscribers.

    A subscriber is called after an event only when its selected slice
    changed. Subscribers run in subscription order.
    """

    def __init__(self, state: ViewState | None = None) -> None:
        self._state = state if state is not None else ViewState()
        self._subscriptions: list[tuple[Selector, Subscriber]] = []

    @property
    def state(self) -> ViewState:
        """Current state."""
        return self._state

    def subscribe(self, selector: Selector, subscriber: Subscriber) -> Callable[[], None]:
        """Watch a slice of the state.

        Returns:
            Callable that cancels the subscription.
        """
        entry = (selector, subscriber)
        self._subscriptions.append(entry)

        def _unsubscribe() -> None:
            if entry in self._subscriptions:
                self._subscriptions.remove(entry)

        return _unsubscribe

    def dispatch(self, event: Event) -> ViewState:
        """Reduce event into the state, then notify changed slices."""
        previous = self._state
        self._state = reduce(previous, event)
        for selector, subscriber in tuple(self._subscriptions):
            if selector(previous) != selector(self._state):
                subscriber(self._state)
        return self._state


# =============================================================================
# Tree projection
# =============================================================================


def snapshot(document: Document) -> ViewState:
    """Read the settled component tree as a ViewState.

    Raises:
        ComponentNotFoundError: No ReportRoot attached.
        MissingDrawerError: No drawer attached.
    """
    root = document.query_one(ReportRoot)
    drawer = find_drawer(document)

    expanded = [r.rule_id for r in document.query_all(RuleEntry) if r.expanded]
    selected = [e for e in document.query_all(ViolationEntry) if e.selected]

    return ViewState(
        active_category_id=root.active_category_id,
        expanded_rule_id=expanded[0] if expanded else None,
        selected_violation_id=selected[0].violation_id if selected else None,
        selected_rule_id=selected[0].violation.rule_id if selected else None,
        drawer_visible=drawer.visible,
        drawer_current=drawer.current,
    )
