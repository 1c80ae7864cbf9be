"""Central view state: the whole report UI as one value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reportview.domain.events import ViolationSelected


@dataclass(frozen=True, slots=True)
class ViewState:
    """Everything the component tree agrees on after an event settles.

    Attributes:
        active_category_id: Active category, None before bootstrap
        expanded_rule_id: Expanded rule, None when all collapsed
        selected_violation_id: Selected violation, None when none
        selected_rule_id: Rule owning the selected violation
        drawer_visible: Drawer open
        drawer_current: Last selected violation (kept while hidden)
    """

    active_category_id: str | None = None
    expanded_rule_id: str | None = None
    selected_violation_id: str | None = None
    selected_rule_id: str | None = None
    drawer_visible: bool = False
    drawer_current: ViolationSelected | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if (self.selected_violation_id is None) != (self.selected_rule_id is None):
            raise ValueError("selected_violation_id and selected_rule_id must be set together")
