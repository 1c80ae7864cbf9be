"""Document: the live registry every component is queried from.

There is no shared store behind the components. Consistency comes from
broadcast reconciliation: on an event, a handler queries the document
for every live instance of a component kind and pushes the new state
into each. Each push is isolated (SafeDispatch); failures surface as one
ReconciliationError when the outermost interaction ends.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import partial
from typing import TYPE_CHECKING, TypeVar

from reportview.domain.exceptions import AlreadyMountedError, ComponentNotFoundError
from reportview.infrastructure.safe_dispatch import SafeDispatch

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from reportview.application.components.base import Component, Listener
    from reportview.domain.events import Event

logger = logging.getLogger(__name__)


C = TypeVar("C", bound="Component")


class Document:
    """Registry of attached components, document-level listeners and flags.

    Contracts:
        - query_all() returns instances in attach order (tree pre-order)
        - one failing update never blocks the others
        - all handlers of one interaction run before failures are raised
    """

    def __init__(self) -> None:
        self._components: list[Component] = []
        self._listeners: dict[type, list[Listener]] = {}
        self._flags: set[str] = set()
        self._dirty: dict[int, Component] = {}
        self._safe = SafeDispatch()
        self._depth = 0
        self._root: Component | None = None

    def __repr__(self) -> str:
        return f"Document(components={len(self._components)})"

    # -------------------------------------------------------------------------
    # Mounting
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Component | None:
        """Mounted root component."""
        return self._root

    def mount(self, root: C) -> C:
        """Attach root and run first_updated() hooks.

        Raises:
            AlreadyMountedError: A root is already mounted.
            ReconciliationError: A hook or handler failed.
        """
        if self._root is not None:
            raise AlreadyMountedError
        self._root = root
        self.adopt(root)
        return root

    def adopt(self, component: Component) -> None:
        """Attach a subtree, then run its first_updated() hooks in order."""
        with self.interaction():
            component.attach(self)
            for node in tuple(component.walk()):
                self.safe_invoke(node, node.run_first_updated, label="first_updated")

    def register(self, component: Component) -> None:
        """Add a component to the registry. Called by Component.attach()."""
        self._components.append(component)

    def unregister(self, component: Component) -> None:
        """Remove a component from the registry. Called by Component.detach()."""
        self._components.remove(component)
        self._dirty.pop(id(component), None)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def query_all(self, kind: type[C]) -> tuple[C, ...]:
        """Every live instance of kind, in attach order."""
        return tuple(c for c in self._components if isinstance(c, kind))

    def query_one(self, kind: type[C]) -> C:
        """First live instance of kind.

        Raises:
            ComponentNotFoundError: No instance attached.
        """
        for component in self._components:
            if isinstance(component, kind):
                return component
        raise ComponentNotFoundError(kind.__name__)

    def __len__(self) -> int:
        return len(self._components)

    # -------------------------------------------------------------------------
    # Events and reconciliation
    # -------------------------------------------------------------------------

    def listen(self, event_cls: type, handler: Listener) -> None:
        """Run handler for every event of event_cls reaching the document."""
        self._listeners.setdefault(event_cls, []).append(handler)

    def unlisten(self, event_cls: type, handler: Listener) -> None:
        """Remove a handler added with listen(). Unknown handlers ignored."""
        handlers = self._listeners.get(event_cls)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def notify(self, event: Event) -> None:
        """Deliver event to document-level listeners, each in isolation."""
        for handler in tuple(self._listeners.get(type(event), ())):
            self.safe_invoke(handler, partial(handler, event), label=f"{type(event).__name__} listener")

    def reconcile(
        self,
        instances: Iterable[C],
        action: Callable[[C], object],
        *,
        label: str,
    ) -> int:
        """Apply action to every instance, isolating failures.

        Returns:
            Number of instances updated without error.
        """
        updated = 0
        for instance in tuple(instances):
            if self.safe_invoke(instance, partial(action, instance), label=label):
                updated += 1
        return updated

    def safe_invoke(self, target: object, action: Callable[[], object], *, label: str) -> bool:
        """Run one isolated update. See SafeDispatch.invoke()."""
        return self._safe.invoke(target, action, label=label)

    @contextmanager
    def interaction(self) -> Iterator[Document]:
        """Scope of one user interaction.

        Nested scopes join the outermost one. When the outermost scope
        exits normally, captured failures are raised.

        Raises:
            ReconciliationError: One or more isolated updates failed.
        """
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                self._safe.reset()
            raise
        self._depth -= 1
        if self._depth == 0:
            self._safe.check_pending_errors()

    # -------------------------------------------------------------------------
    # Flags and rendering
    # -------------------------------------------------------------------------

    @property
    def flags(self) -> frozenset[str]:
        """Document-level flags, used by layout only."""
        return frozenset(self._flags)

    def set_flag(self, name: str, *, enabled: bool = True) -> None:
        """Add or remove a document-level flag."""
        if enabled:
            self._flags.add(name)
        else:
            self._flags.discard(name)

    def has_flag(self, name: str) -> bool:
        """Check a document-level flag."""
        return name in self._flags

    def mark_dirty(self, component: Component) -> None:
        """Queue component for the next render pass. Coalesces repeats."""
        self._dirty.setdefault(id(component), component)

    def flush_updates(self) -> tuple[Component, ...]:
        """Take every queued component, oldest request first."""
        dirty = tuple(self._dirty.values())
        self._dirty.clear()
        if dirty:
            logger.debug("Flushing %d pending update(s)", len(dirty))
        return dirty
