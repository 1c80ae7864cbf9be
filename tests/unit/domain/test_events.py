"""Tests for domain events."""

import dataclasses

import pytest

from reportview.domain.events import (
    CategoryActivated,
    EventType,
    RuleSelected,
    ViolationSelected,
    get_event_type,
)
from tests.factories import make_category_activated, make_rule_selected, make_violation_selected


class TestEventType:
    """Tests for EventType wire names."""

    def test_values(self) -> None:
        """Enum values are the wire names."""
        assert EventType.CATEGORY_ACTIVATED.value == "categoryActivated"
        assert EventType.RULE_SELECTED.value == "ruleSelected"
        assert EventType.VIOLATION_SELECTED.value == "violationSelected"

    @pytest.mark.parametrize(
        ("event", "expected"),
        [
            (make_category_activated(), EventType.CATEGORY_ACTIVATED),
            (make_rule_selected(), EventType.RULE_SELECTED),
            (make_violation_selected(), EventType.VIOLATION_SELECTED),
        ],
    )
    def test_get_event_type(
        self, event: CategoryActivated | RuleSelected | ViolationSelected, expected: EventType
    ) -> None:
        """get_event_type maps each event class."""
        assert get_event_type(event) is expected


class TestEvents:
    """Tests for event value semantics."""

    def test_frozen(self) -> None:
        """Events are immutable."""
        event = RuleSelected(id="R1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.id = "R2"  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        """Events with equal fields are equal."""
        assert CategoryActivated("a", "d") == CategoryActivated("a", "d")
        assert make_violation_selected(violation_id="x") != make_violation_selected(violation_id="y")

    def test_how_to_fix_optional(self) -> None:
        """how_to_fix defaults to None."""
        assert make_violation_selected().how_to_fix is None
