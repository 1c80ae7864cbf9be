"""Domain layer: immutable report view events.

Every event propagates upward from the component that raised it through
every enclosing component to the document. All objects frozen.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reportview.domain.model.rendered_code import RenderedCode


class EventType(Enum):
    """Event types, valued by their wire name."""

    CATEGORY_ACTIVATED = "categoryActivated"
    RULE_SELECTED = "ruleSelected"
    VIOLATION_SELECTED = "violationSelected"


@dataclass(frozen=True, slots=True)
class CategoryActivated:
    """A category was chosen in the navigator."""

    id: str
    description: str


@dataclass(frozen=True, slots=True)
class RuleSelected:
    """A rule summary row was clicked. `id` is the rule id."""

    id: str


@dataclass(frozen=True, slots=True)
class ViolationSelected:
    """A violation entry was clicked.

    `id` is the rule id; `violation_id` is the entry's random id, so
    listeners correlate selection without comparing content.
    """

    message: str
    id: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    path: str
    category: str
    violation_id: str
    rendered_code: RenderedCode | None
    how_to_fix: str | None = None


Event = CategoryActivated | RuleSelected | ViolationSelected


def get_event_type(event: Event) -> EventType:
    """Get EventType for event.

    Exhaustive match on Event union. Type system ensures all cases covered.
    """
    match event:
        case CategoryActivated():
            return EventType.CATEGORY_ACTIVATED
        case RuleSelected():
            return EventType.RULE_SELECTED
        case ViolationSelected():
            return EventType.VIOLATION_SELECTED
