"""Category navigation: one CategoryLink per category inside a CategoryNavigator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reportview.application.components.base import Component
from reportview.domain.events import CategoryActivated
from reportview.domain.exceptions import ReportDataError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reportview.domain.model.category import Category

logger = logging.getLogger(__name__)


class CategoryLink(Component):
    """Navigation entry of one category. Owns the active flag."""

    def __init__(self, category: Category) -> None:
        super().__init__()
        self._category = category
        self.active = False

    def __repr__(self) -> str:
        return f"CategoryLink(id={self.id!r}, active={self.active})"

    @property
    def category(self) -> Category:
        """Linked category."""
        return self._category

    @property
    def id(self) -> str:
        """Category id."""
        return self._category.id

    @property
    def is_default(self) -> bool:
        """Marked as the initial category."""
        return self._category.is_default

    def enable_category(self) -> None:
        """Mark active. Idempotent."""
        if not self.active:
            self.active = True
            self.request_update()

    def disable_category(self) -> None:
        """Mark inactive. Idempotent."""
        if self.active:
            self.active = False
            self.request_update()

    def toggle(self, emit: bool = True) -> None:
        """Flip the active flag; with emit, raise CategoryActivated."""
        self.active = not self.active
        self.request_update()
        if emit:
            self.dispatch(CategoryActivated(id=self.id, description=self._category.description))

    def click(self) -> None:
        """User clicked the link."""
        document = self._require_document()
        with document.interaction():
            self.toggle(emit=True)


class CategoryNavigator(Component):
    """Container of category links.

    On first update it activates the default category by dispatching
    one synthetic CategoryActivated. The navigator's own listener runs
    first (the dispatching node receives its own event), then the
    ancestors' and the document's, exactly as for a click.
    """

    def __init__(self, categories: Sequence[Category] = (), *, default: str | None = None) -> None:
        """Initialize with one link per category.

        Args:
            categories: Categories in navigation order.
            default: Default category id. None = the category flagged
                is_default.

        Raises:
            ReportDataError: More than one category flagged default.
        """
        super().__init__()
        flagged = [c.id for c in categories if c.is_default]
        if len(flagged) > 1:
            raise ReportDataError(f"more than one default category: {', '.join(flagged)}")
        self.default = default if default is not None else (flagged[0] if flagged else None)
        for category in categories:
            self.append(CategoryLink(category))
        self.listen(CategoryActivated, self._on_category_activated)

    def __repr__(self) -> str:
        return f"CategoryNavigator(default={self.default!r})"

    @property
    def links(self) -> tuple[CategoryLink, ...]:
        """Child links in navigation order."""
        return tuple(c for c in self.children if isinstance(c, CategoryLink))

    @property
    def active_links(self) -> tuple[CategoryLink, ...]:
        """Links currently active."""
        return tuple(link for link in self.links if link.active)

    def link(self, category_id: str) -> CategoryLink | None:
        """Link of a category, None if absent."""
        for link in self.links:
            if link.id == category_id:
                return link
        return None

    def add_link(self, category: Category) -> CategoryLink:
        """Append a link for category."""
        return self.append(CategoryLink(category))

    def resolve_default(self) -> CategoryLink | None:
        """Link to activate on bootstrap.

        The configured default when it matches a link, else the first
        link. None when there are no links.
        """
        links = self.links
        if not links:
            return None
        if self.default is not None:
            match = self.link(self.default)
            if match is not None:
                return match
            logger.warning("Default category %r not found, falling back to %r", self.default, links[0].id)
        else:
            logger.warning("No default category, falling back to %r", links[0].id)
        return links[0]

    def first_updated(self) -> None:
        target = self.resolve_default()
        if target is None:
            logger.debug("Navigator has no categories, nothing to activate")
            return
        self.dispatch(CategoryActivated(id=target.id, description=target.category.description))

    def _on_category_activated(self, event: CategoryActivated) -> None:
        document = self._require_document()
        document.reconcile(
            self.links,
            lambda link: link.enable_category() if link.id == event.id else link.disable_category(),
            label="activate category link",
        )
        if not self.active_links:
            logger.debug("Category %r matches no link", event.id)
