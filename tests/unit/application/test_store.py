"""Tests for the central view store: reducers, ViewStore, snapshot()."""

from __future__ import annotations

from reportview.application.components.rule_entry import RuleEntry
from reportview.application.store import (
    ViewStore,
    reduce,
    reduce_all,
    reduce_category_activated,
    reduce_rule_selected,
    reduce_violation_selected,
    snapshot,
)
from reportview.domain.model.view_state import ViewState
from tests.factories import (
    make_category_activated,
    make_root,
    make_rule_selected,
    make_violation_selected,
    mount,
)


class TestReducers:
    """Pure reducer functions."""

    def test_category_activated_resets(self) -> None:
        """Category switch collapses, deselects and hides the drawer."""
        event = make_violation_selected("R1", "v-1")
        state = ViewState("a", "R1", "v-1", "R1", True, event)

        result = reduce_category_activated(state, make_category_activated("b"))

        assert result == ViewState("b", None, None, None, False, event)

    def test_rule_selected_toggles(self) -> None:
        """Same rule twice: expand then collapse."""
        state = reduce_rule_selected(ViewState(), make_rule_selected("R1"))
        assert state.expanded_rule_id == "R1"
        assert reduce_rule_selected(state, make_rule_selected("R1")).expanded_rule_id is None

    def test_rule_selected_switches(self) -> None:
        """Another rule replaces the expanded one."""
        state = ViewState(expanded_rule_id="R1")
        assert reduce_rule_selected(state, make_rule_selected("R2")).expanded_rule_id == "R2"

    def test_rule_selected_keeps_foreign_selection(self) -> None:
        """Another rule's header click leaves the selection and drawer alone."""
        event = make_violation_selected("R1", "v-1")
        state = ViewState("a", "R1", "v-1", "R1", True, event)
        result = reduce_rule_selected(state, make_rule_selected("R2"))
        assert result == ViewState("a", "R2", "v-1", "R1", True, event)

    def test_rule_selected_keeps_own_selection(self) -> None:
        """Collapsing the selection's own rule keeps it."""
        state = ViewState("a", "R1", "v-1", "R1", True, None)
        result = reduce_rule_selected(state, make_rule_selected("R1"))
        assert result.selected_violation_id == "v-1"
        assert result.expanded_rule_id is None

    def test_violation_selected(self) -> None:
        """Selection and drawer follow the event."""
        event = make_violation_selected("R3", "v-9")
        result = reduce_violation_selected(ViewState(expanded_rule_id="R1"), event)
        assert result == ViewState(None, "R1", "v-9", "R3", True, event)

    def test_reduce_does_not_mutate(self) -> None:
        """reduce() returns a new value."""
        state = ViewState()
        result = reduce(state, make_category_activated("a"))
        assert state == ViewState()
        assert result.active_category_id == "a"

    def test_reduce_all(self) -> None:
        """reduce_all() folds from the initial state."""
        events = [make_category_activated("a"), make_rule_selected("R1"), make_rule_selected("R2")]
        assert reduce_all(events) == ViewState(active_category_id="a", expanded_rule_id="R2")


class TestViewStore:
    """ViewStore dispatch and subscriptions."""

    def test_dispatch(self) -> None:
        """dispatch() reduces into state."""
        store = ViewStore()
        store.dispatch(make_category_activated("a"))
        assert store.state.active_category_id == "a"

    def test_subscriber_called_on_slice_change(self) -> None:
        """Subscribers run only when their slice changed."""
        store = ViewStore()
        seen: list[str | None] = []
        store.subscribe(lambda s: s.expanded_rule_id, lambda s: seen.append(s.expanded_rule_id))

        store.dispatch(make_category_activated("a"))
        store.dispatch(make_rule_selected("R1"))
        store.dispatch(make_category_activated("a"))

        assert seen == ["R1", None]

    def test_unsubscribe(self) -> None:
        """Unsubscribed callbacks stop running."""
        store = ViewStore()
        seen: list[ViewState] = []
        cancel = store.subscribe(lambda s: s.active_category_id, seen.append)
        cancel()
        cancel()

        store.dispatch(make_category_activated("a"))

        assert seen == []


class TestSnapshot:
    """snapshot() reads the tree."""

    def test_after_mount(self) -> None:
        """Bootstrap state: default category, nothing else."""
        root = make_root({"schemas": {"R1": 1}, "tags": {}})
        document = mount(root)
        assert snapshot(document) == ViewState(active_category_id="schemas")

    def test_after_interactions(self) -> None:
        """Expanded rule, selection and drawer are read back."""
        root = make_root({"schemas": {"R1": 2}})
        document = mount(root)
        rule = root.descendants(RuleEntry)[0]
        rule.click_summary()
        rule.entries[1].click()

        state = snapshot(document)

        assert state.expanded_rule_id == "R1"
        assert state.selected_violation_id == rule.entries[1].violation_id
        assert state.selected_rule_id == "R1"
        assert state.drawer_visible is True
        assert state.drawer_current == root.drawer.current
