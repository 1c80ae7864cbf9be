"""Drawer state value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reportview.domain.events import ViolationSelected


@dataclass(frozen=True, slots=True)
class DrawerState:
    """State of the single detail drawer.

    Attributes:
        visible: Drawer open
        current: Last selected violation, None if nothing was ever selected
    """

    visible: bool = False
    current: ViolationSelected | None = None
