"""Component base: tree membership, event propagation, update requests.

A component belongs to at most one parent and, once attached, to one
Document. Events dispatched by a component run the target's own
listeners, then every ancestor's, then the document's: propagation
crosses every enclosing component, nothing stops it.
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, TypeAlias, TypeVar

from reportview.domain.exceptions import DetachedComponentError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from reportview.application.document import Document
    from reportview.domain.events import Event

C = TypeVar("C", bound="Component")
Listener: TypeAlias = "Callable[[Event], None]"


class Component:
    """Node of the live report tree.

    Hooks for subclasses:
      - connected(): after the component is registered with a document
      - disconnected(): before it is unregistered
      - first_updated(): once, after the whole subtree it arrived with is attached
    """

    def __init__(self) -> None:
        self._parent: Component | None = None
        self._children: list[Component] = []
        self._document: Document | None = None
        self._listeners: dict[type, list[Listener]] = {}
        self._document_subscriptions: list[tuple[type, Listener]] = []
        self._first_updated_done = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # -------------------------------------------------------------------------
    # Tree
    # -------------------------------------------------------------------------

    @property
    def parent(self) -> Component | None:
        """Enclosing component, None for a root."""
        return self._parent

    @property
    def children(self) -> tuple[Component, ...]:
        """Direct children in insertion order."""
        return tuple(self._children)

    @property
    def document(self) -> Document | None:
        """Document this component is attached to."""
        return self._document

    @property
    def is_attached(self) -> bool:
        """Attached to a document."""
        return self._document is not None

    def append(self, child: C) -> C:
        """Add child as last child. Attaches it if self is attached.

        Raises:
            ValueError: child already has a parent.
        """
        if child._parent is not None:
            raise ValueError(f"{child!r} already has a parent")
        child._parent = self
        self._children.append(child)
        if self._document is not None:
            self._document.adopt(child)
        return child

    def remove(self, child: Component) -> None:
        """Remove a direct child, detaching its subtree.

        Raises:
            ValueError: child is not a child of self.
        """
        if child._parent is not self:
            raise ValueError(f"{child!r} is not a child of {self!r}")
        if child._document is not None:
            child.detach()
        self._children.remove(child)
        child._parent = None

    def walk(self) -> Iterator[Component]:
        """Self and every descendant, depth-first pre-order."""
        yield self
        for child in self._children:
            yield from child.walk()

    def descendants(self, kind: type[C]) -> tuple[C, ...]:
        """Descendants of a kind within this subtree, excluding self."""
        return tuple(c for c in self.walk() if c is not self and isinstance(c, kind))

    def closest(self, kind: type[C]) -> C | None:
        """Nearest ancestor of a kind, None if there is none."""
        node = self._parent
        while node is not None:
            if isinstance(node, kind):
                return node
            node = node._parent
        return None

    # -------------------------------------------------------------------------
    # Document membership
    # -------------------------------------------------------------------------

    def attach(self, document: Document) -> None:
        """Register self and subtree with document. Pre-order."""
        self._document = document
        document.register(self)
        self.connected()
        for child in self._children:
            child.attach(document)

    def detach(self) -> None:
        """Unregister self and subtree from its document."""
        document = self._require_document()
        for child in self._children:
            child.detach()
        self.disconnected()
        for event_cls, handler in self._document_subscriptions:
            document.unlisten(event_cls, handler)
        self._document_subscriptions.clear()
        document.unregister(self)
        self._document = None

    def connected(self) -> None:
        """Hook: called right after registration."""

    def disconnected(self) -> None:
        """Hook: called right before unregistration."""

    def first_updated(self) -> None:
        """Hook: called once after the first attach completes."""

    def run_first_updated(self) -> None:
        """Run first_updated() unless already done."""
        if self._first_updated_done:
            return
        self._first_updated_done = True
        self.first_updated()

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def listen(self, event_cls: type, handler: Listener) -> None:
        """Run handler for events of event_cls reaching this component."""
        self._listeners.setdefault(event_cls, []).append(handler)

    def listen_document(self, event_cls: type, handler: Listener) -> None:
        """Run handler for every event of event_cls reaching the document.

        Subscription ends when the component is detached.
        """
        document = self._require_document()
        document.listen(event_cls, handler)
        self._document_subscriptions.append((event_cls, handler))

    def dispatch(self, event: Event) -> None:
        """Propagate event from self up to the document.

        Raises:
            DetachedComponentError: self is not attached.
        """
        document = self._require_document()
        with document.interaction():
            node: Component | None = self
            while node is not None:
                node._deliver(document, event)
                node = node._parent
            document.notify(event)

    def _deliver(self, document: Document, event: Event) -> None:
        for handler in tuple(self._listeners.get(type(event), ())):
            document.safe_invoke(self, partial(handler, event), label=f"{type(event).__name__} handler")

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def request_update(self) -> None:
        """Mark self for the next render pass."""
        if self._document is not None:
            self._document.mark_dirty(self)

    def _require_document(self) -> Document:
        if self._document is None:
            raise DetachedComponentError(type(self).__name__)
        return self._document
