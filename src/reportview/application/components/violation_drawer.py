"""ViolationDrawer: the single detail panel of a document.

Render contract:
  - hidden, or nothing ever selected  → DrawerPlaceholder
  - otherwise                         → DrawerDetail (message tokens,
    rendered code, JSON path, how to fix, help link)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from reportview.application.components.base import Component
from reportview.domain.events import ViolationSelected
from reportview.domain.exceptions import DuplicateDrawerError, MissingDrawerError
from reportview.domain.model.drawer_state import DrawerState

if TYPE_CHECKING:
    from reportview.application.document import Document
    from reportview.domain.model.rendered_code import RenderedCode

DRAWER_ACTIVE_FLAG = "drawer-active"
DEFAULT_HELP_URL_BASE = "https://quobix.com/vacuum/rules"
PLACEHOLDER_TEXT = "Please select a rule violation from a category."

_BACKTICK_SPAN = re.compile(r"(`[^`]*`)")


@dataclass(frozen=True, slots=True)
class MessageToken:
    """Piece of a violation message. Code tokens came from back-tick spans."""

    text: str
    is_code: bool = False


@dataclass(frozen=True, slots=True)
class DrawerPlaceholder:
    """Shown while nothing is selected or the drawer is hidden."""

    text: str = PLACEHOLDER_TEXT


@dataclass(frozen=True, slots=True)
class DrawerDetail:
    """Full detail of the selected violation."""

    title: tuple[MessageToken, ...]
    rule_id: str
    code: RenderedCode | None
    path: str
    how_to_fix: str | None
    help_link: str


DrawerView: TypeAlias = "DrawerPlaceholder | DrawerDetail"


def split_backticks(message: str) -> tuple[MessageToken, ...]:
    """Split message on back-tick spans. Empty plain pieces are dropped.

    "use `foo` here" → ("use ", "foo"[code], " here")
    """
    tokens: list[MessageToken] = []
    for part in _BACKTICK_SPAN.split(message):
        if _BACKTICK_SPAN.fullmatch(part):
            tokens.append(MessageToken(part.replace("`", ""), is_code=True))
        elif part:
            tokens.append(MessageToken(part))
    return tuple(tokens)


def help_link(category: str, rule_id: str, base: str = DEFAULT_HELP_URL_BASE) -> str:
    """Documentation URL of a rule.

    Both parts are lower-cased; `$` is removed from the rule id first.
    """
    rule_part = rule_id.replace("$", "").lower()
    return f"{base.rstrip('/')}/{category.lower()}/{rule_part}"


def find_drawer(document: Document) -> ViolationDrawer:
    """The drawer attached to document.

    Raises:
        MissingDrawerError: No drawer attached.
    """
    drawers = document.query_all(ViolationDrawer)
    if not drawers:
        raise MissingDrawerError
    return drawers[0]


class ViolationDrawer(Component):
    """Detail drawer. At most one per document.

    Listens at document level for ViolationSelected: copies the event,
    then shows itself.
    """

    def __init__(self, *, help_url_base: str = DEFAULT_HELP_URL_BASE) -> None:
        super().__init__()
        self._help_url_base = help_url_base
        self._state = DrawerState()

    def __repr__(self) -> str:
        return f"ViolationDrawer(visible={self.visible})"

    @property
    def state(self) -> DrawerState:
        """Current drawer state."""
        return self._state

    @property
    def visible(self) -> bool:
        """Drawer open."""
        return self._state.visible

    @property
    def current(self) -> ViolationSelected | None:
        """Last selected violation, None if nothing was ever selected."""
        return self._state.current

    def attach(self, document: Document) -> None:
        """Attach, enforcing one drawer per document.

        Raises:
            DuplicateDrawerError: Document already has a drawer.
        """
        if document.query_all(ViolationDrawer):
            raise DuplicateDrawerError
        super().attach(document)

    def connected(self) -> None:
        self.listen_document(ViolationSelected, self._on_violation_selected)

    def disconnected(self) -> None:
        document = self._require_document()
        document.set_flag(DRAWER_ACTIVE_FLAG, enabled=False)

    def show(self) -> None:
        """Open the drawer."""
        self._set_visible(True)

    def hide(self) -> None:
        """Close the drawer. Keeps the current violation."""
        self._set_visible(False)

    def present(self, event: ViolationSelected) -> None:
        """Take event as the current violation and open the drawer."""
        self._state = DrawerState(visible=self._state.visible, current=event)
        self.show()
        self.request_update()

    def render(self) -> DrawerView:
        """Drawer content according to the render contract."""
        current = self._state.current
        if not self._state.visible or current is None:
            return DrawerPlaceholder()
        return DrawerDetail(
            title=split_backticks(current.message),
            rule_id=current.id,
            code=current.rendered_code,
            path=current.path,
            how_to_fix=current.how_to_fix,
            help_link=help_link(current.category, current.id, self._help_url_base),
        )

    def _set_visible(self, visible: bool) -> None:
        self._state = DrawerState(visible=visible, current=self._state.current)
        if self._document is not None:
            self._document.set_flag(DRAWER_ACTIVE_FLAG, enabled=visible)
        self.request_update()

    def _on_violation_selected(self, event: ViolationSelected) -> None:
        self.present(event)
