"""SafeDispatch: exception-isolating wrapper for component updates.

Broadcast reconciliation touches every live instance of a component kind.
One instance failing must not leave the others stale, so each update runs
through invoke(), which captures the exception instead of propagating it.
Captured failures surface later via check_pending_errors(), once the whole
interaction has been processed.

  Flow:
    Document.reconcile(instances, action)
        for each instance:  SafeDispatch.invoke(instance, action)
                                  │
                             action(instance)
                                  │
                             if raises: CAPTURE, log, continue
    Document.interaction() exit  →  check_pending_errors()  →  ReconciliationError

KeyboardInterrupt and SystemExit are not captured.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from reportview.domain.exceptions import ReconciliationError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileFailure:
    """One captured update failure.

    Attributes:
        target: Description of the component (or listener) that failed.
        action: What was being applied.
        error: The exception raised.
    """

    target: str
    action: str
    error: Exception

    def __str__(self) -> str:
        """Format as 'target: action raised Type: message'."""
        return f"{self.target}: {self.action} raised {type(self.error).__name__}: {self.error}"


class SafeDispatch:
    """Exception-absorbing invoker for per-instance updates.

    Contract:
      - invoke() NEVER re-raises an Exception subclass
      - every failure captured in order, none dropped
      - check_pending_errors() raises all of them at once and clears them

    Single-threaded: used only from the event handling path.
    """

    __slots__ = ("_failures",)

    def __init__(self) -> None:
        """Initialize with no pending failures."""
        self._failures: list[ReconcileFailure] = []

    @property
    def has_pending_error(self) -> bool:
        """Check if any failure is pending."""
        return bool(self._failures)

    @property
    def failures(self) -> tuple[ReconcileFailure, ...]:
        """Pending failures, oldest first."""
        return tuple(self._failures)

    def invoke(self, target: object, action: Callable[[], object], *, label: str) -> bool:
        """Run action, capturing any exception.

        Args:
            target: Object the action updates. Only used for diagnostics.
            action: Zero-argument callable.
            label: Short name of the action for diagnostics.

        Returns:
            True if the action completed, False if it raised.
        """
        try:
            action()
        # BLE001: every failure is recorded here and re-raised by check_pending_errors().
        except Exception as exc:  # noqa: BLE001
            failure = ReconcileFailure(target=repr(target), action=label, error=exc)
            logger.exception("Update failed: %s", failure)
            self._failures.append(failure)
            return False
        return True

    def check_pending_errors(self) -> None:
        """Raise captured failures, if any. Clears them.

        Raises:
            ReconciliationError: One or more invoke() calls failed.
        """
        if not self._failures:
            return
        failures = tuple(self._failures)
        self._failures.clear()
        raise ReconciliationError(failures)

    def reset(self) -> None:
        """Drop pending failures without raising."""
        self._failures.clear()
