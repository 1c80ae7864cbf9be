"""Domain exceptions: all public errors of reportview.

Hexagonal architecture: all exceptions visible to users defined in domain.
Application/Infrastructure use these, not define their own public exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reportview.infrastructure.safe_dispatch import ReconcileFailure


class ReportViewError(Exception):
    """Base for all reportview exceptions.

    Allows: except ReportViewError to catch all library errors.
    """


class ReportDataError(ReportViewError, ValueError):
    """Report input data is malformed.

    Raised by the loader and the builder. FAIL-FIRST: bad data never
    produces a half-built component tree.

    Attributes:
        reason: Why the data was rejected.
    """

    def __init__(self, reason: str) -> None:
        """Initialize with rejection reason."""
        if not reason:
            raise ValueError("reason must not be empty")
        self.reason = reason
        super().__init__(f"Invalid report data: {reason}")


class InvalidEventError(ReportViewError, ValueError):
    """Wire event cannot be decoded.

    Unknown event name or a required field missing.

    Attributes:
        name: Wire name of the event.
        reason: What is wrong with it.
    """

    def __init__(self, *, name: str, reason: str) -> None:
        """Initialize with event name and reason."""
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


class MissingDrawerError(ReportViewError, LookupError):
    """No ViolationDrawer available to the operation.

    Drawer-open requests need exactly one drawer in the document.
    """

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("No violation drawer attached to the document")


class DuplicateDrawerError(ReportViewError, RuntimeError):
    """A second ViolationDrawer was attached to the same document."""

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("Document already has a violation drawer")


class ComponentNotFoundError(ReportViewError, LookupError):
    """Lookup for a live component failed.

    Attributes:
        kind: Component class name searched for.
        detail: Optional description of the lookup key.
    """

    def __init__(self, kind: str, detail: str | None = None) -> None:
        """Initialize with component kind and optional lookup detail."""
        self.kind = kind
        self.detail = detail
        msg = f"No {kind} found"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class DetachedComponentError(ReportViewError, RuntimeError):
    """Operation needs a component attached to a document.

    Attributes:
        kind: Component class name.
    """

    def __init__(self, kind: str) -> None:
        """Initialize with component kind."""
        self.kind = kind
        super().__init__(f"{kind} is not attached to a document")


class ReconciliationError(ReportViewError):
    """One or more component updates failed during an interaction.

    Every other instance was still reconciled; this error surfaces the
    failures after the interaction completed.

    Attributes:
        failures: All captured failures, in occurrence order.
    """

    def __init__(self, failures: Sequence[ReconcileFailure]) -> None:
        """Initialize with captured failures."""
        if not failures:
            raise ValueError("ReconciliationError requires at least one failure")
        self.failures = tuple(failures)

        msg_parts = [f"{len(self.failures)} component update(s) failed:"]
        for failure in self.failures:
            msg_parts.append(f"  {failure}")
        super().__init__("\n".join(msg_parts))
        self.__cause__ = self.failures[0].error


class AlreadyMountedError(ReportViewError, RuntimeError):
    """Document already has a mounted root.

    Inherits RuntimeError for semantic correctness (invalid state).
    """

    def __init__(self) -> None:
        """Initialize with fixed message."""
        super().__init__("Document already has a mounted root")
