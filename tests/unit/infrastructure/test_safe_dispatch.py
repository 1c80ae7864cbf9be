"""Tests for SafeDispatch.

Tests exception capture, ordering, and deferred raising.
"""

import logging

import pytest

from reportview.domain.exceptions import ReconciliationError
from reportview.infrastructure.safe_dispatch import ReconcileFailure, SafeDispatch


def _boom() -> None:
    raise RuntimeError("boom")


class TestSafeDispatchBasic:
    """Basic SafeDispatch functionality."""

    def test_action_runs(self) -> None:
        """Successful action returns True and leaves nothing pending."""
        calls: list[int] = []
        dispatch = SafeDispatch()

        assert dispatch.invoke("t", lambda: calls.append(1), label="append") is True
        assert calls == [1]
        assert dispatch.has_pending_error is False

    def test_exception_captured(self) -> None:
        """Raising action returns False and records the failure."""
        dispatch = SafeDispatch()

        assert dispatch.invoke("target", _boom, label="explode") is False
        assert dispatch.has_pending_error is True
        (failure,) = dispatch.failures
        assert failure.target == "'target'"
        assert failure.action == "explode"
        assert isinstance(failure.error, RuntimeError)

    def test_failures_in_order(self) -> None:
        """Failures are kept oldest first, none dropped."""
        dispatch = SafeDispatch()
        dispatch.invoke("a", _boom, label="first")
        dispatch.invoke("b", lambda: None, label="ok")
        dispatch.invoke("c", _boom, label="second")

        assert [f.action for f in dispatch.failures] == ["first", "second"]

    def test_keyboard_interrupt_propagates(self) -> None:
        """BaseException outside Exception is not captured."""

        def interrupt() -> None:
            raise KeyboardInterrupt

        dispatch = SafeDispatch()
        with pytest.raises(KeyboardInterrupt):
            dispatch.invoke("t", interrupt, label="interrupt")
        assert dispatch.has_pending_error is False

    def test_failure_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Captured failure is logged with traceback."""
        dispatch = SafeDispatch()
        with caplog.at_level(logging.ERROR, logger="reportview.infrastructure.safe_dispatch"):
            dispatch.invoke("t", _boom, label="explode")

        assert "Update failed" in caplog.text
        assert caplog.records[0].exc_info is not None


class TestCheckPendingErrors:
    """Deferred raising."""

    def test_no_errors_no_raise(self) -> None:
        """Nothing pending: returns silently."""
        SafeDispatch().check_pending_errors()

    def test_raises_and_clears(self) -> None:
        """Pending failures raise once, then are cleared."""
        dispatch = SafeDispatch()
        dispatch.invoke("t", _boom, label="explode")

        with pytest.raises(ReconciliationError) as exc_info:
            dispatch.check_pending_errors()

        assert len(exc_info.value.failures) == 1
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        dispatch.check_pending_errors()

    def test_reset(self) -> None:
        """reset() drops failures without raising."""
        dispatch = SafeDispatch()
        dispatch.invoke("t", _boom, label="explode")
        dispatch.reset()

        assert dispatch.has_pending_error is False
        dispatch.check_pending_errors()


class TestReconcileFailure:
    """Tests for ReconcileFailure."""

    def test_str(self) -> None:
        """Formats target, action and error."""
        failure = ReconcileFailure(target="Panel", action="show", error=KeyError("x"))
        assert str(failure) == "Panel: show raised KeyError: 'x'"
