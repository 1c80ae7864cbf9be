"""Tests for Document: registry, queries, reconciliation, interactions."""

from __future__ import annotations

import pytest

from reportview.application.components.base import Component
from reportview.application.document import Document
from reportview.domain.events import RuleSelected
from reportview.domain.exceptions import AlreadyMountedError, ComponentNotFoundError, ReconciliationError


class _Leaf(Component):
    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name
        self.value = 0

    def __repr__(self) -> str:
        return f"_Leaf({self.name})"


def _mounted(*names: str) -> tuple[Document, Component, tuple[_Leaf, ...]]:
    root = Component()
    leaves = tuple(root.append(_Leaf(n)) for n in names)
    document = Document()
    document.mount(root)
    return document, root, leaves


class TestMount:
    """Tests for mount()."""

    def test_mount_returns_root(self) -> None:
        """mount() returns and records the root."""
        document = Document()
        root = Component()
        assert document.mount(root) is root
        assert document.root is root

    def test_second_mount_raises(self) -> None:
        """Only one root per document."""
        document = Document()
        document.mount(Component())
        with pytest.raises(AlreadyMountedError):
            document.mount(Component())


class TestQueries:
    """Tests for query_all() / query_one()."""

    def test_query_all_attach_order(self) -> None:
        """Instances come back in tree pre-order."""
        document, _, leaves = _mounted("a", "b", "c")
        assert document.query_all(_Leaf) == leaves
        assert len(document) == 4

    def test_query_one(self) -> None:
        """query_one() returns the first instance."""
        document, _, leaves = _mounted("a", "b")
        assert document.query_one(_Leaf) is leaves[0]

    def test_query_one_missing(self) -> None:
        """query_one() without a match raises ComponentNotFoundError."""
        document, _, _ = _mounted()
        with pytest.raises(ComponentNotFoundError, match="_Leaf"):
            document.query_one(_Leaf)

    def test_removed_not_returned(self) -> None:
        """Detached components leave the registry."""
        document, root, leaves = _mounted("a", "b")
        root.remove(leaves[0])
        assert document.query_all(_Leaf) == (leaves[1],)


class TestReconcile:
    """Tests for reconcile() and interaction()."""

    def test_updates_every_instance(self) -> None:
        """Action is applied to each instance."""
        document, _, leaves = _mounted("a", "b")

        def set_value(leaf: _Leaf) -> None:
            leaf.value = 7

        assert document.reconcile(leaves, set_value, label="set") == 2
        assert [leaf.value for leaf in leaves] == [7, 7]

    def test_failure_isolated_and_raised_at_end(self) -> None:
        """One failing instance does not block the others."""
        document, _, leaves = _mounted("a", "b", "c")

        def update(leaf: _Leaf) -> None:
            if leaf.name == "b":
                raise RuntimeError("b broke")
            leaf.value = 1

        with pytest.raises(ReconciliationError) as exc_info:
            with document.interaction():
                updated = document.reconcile(leaves, update, label="update")
                assert updated == 2

        assert [leaf.value for leaf in leaves] == [1, 0, 1]
        (failure,) = exc_info.value.failures
        assert failure.target == "_Leaf(b)"
        assert failure.action == "update"

    def test_nested_interactions_raise_once_at_outermost(self) -> None:
        """Inner scopes defer to the outermost one."""
        document, _, leaves = _mounted("a")

        def fail(leaf: _Leaf) -> None:
            raise KeyError(leaf.name)

        with pytest.raises(ReconciliationError):
            with document.interaction():
                with document.interaction():
                    document.reconcile(leaves, fail, label="fail")
                leaves[0].value = 5

        assert leaves[0].value == 5

    def test_exception_in_scope_drops_pending(self) -> None:
        """An exception leaving the scope propagates and clears failures."""
        document, _, leaves = _mounted("a")

        def fail(leaf: _Leaf) -> None:
            raise KeyError(leaf.name)

        with pytest.raises(ZeroDivisionError):
            with document.interaction():
                document.reconcile(leaves, fail, label="fail")
                raise ZeroDivisionError

        with document.interaction():
            pass

    def test_failing_listener_isolated(self) -> None:
        """A failing document listener does not block later listeners."""
        document, root, _ = _mounted()
        received: list[str] = []

        def broken(event: object) -> None:
            raise RuntimeError("listener")

        document.listen(RuleSelected, broken)
        document.listen(RuleSelected, lambda event: received.append("second"))

        with pytest.raises(ReconciliationError):
            root.dispatch(RuleSelected(id="R1"))

        assert received == ["second"]

    def test_unlisten_unknown_ignored(self) -> None:
        """Removing an unknown handler is a no-op."""
        Document().unlisten(RuleSelected, lambda event: None)


class TestFlags:
    """Tests for document flags and the dirty set."""

    def test_set_and_clear(self) -> None:
        """Flags can be toggled."""
        document = Document()
        document.set_flag("drawer-active")
        assert document.has_flag("drawer-active")
        assert document.flags == frozenset({"drawer-active"})

        document.set_flag("drawer-active", enabled=False)
        assert not document.has_flag("drawer-active")

    def test_flush_clears(self) -> None:
        """flush_updates() empties the dirty set."""
        document, root, _ = _mounted()
        document.mark_dirty(root)
        assert document.flush_updates() == (root,)
        assert document.flush_updates() == ()
