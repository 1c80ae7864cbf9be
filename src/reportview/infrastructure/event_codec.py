"""Wire codec: events ↔ camelCase detail mappings.

Decoding ignores unknown fields and fails on missing required ones.
The rendered code handle is opaque: it is passed through untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from reportview.domain.events import (
    CategoryActivated,
    EventType,
    RuleSelected,
    ViolationSelected,
    get_event_type,
)
from reportview.domain.exceptions import InvalidEventError
from reportview.domain.model.rendered_code import RenderedCode

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reportview.domain.events import Event

# wire field → attribute
_VIOLATION_INT_FIELDS = {
    "startLine": "start_line",
    "startCol": "start_col",
    "endLine": "end_line",
    "endCol": "end_col",
}
_VIOLATION_STR_FIELDS = {
    "message": "message",
    "id": "id",
    "path": "path",
    "category": "category",
    "violationId": "violation_id",
}


def decode_event(name: str, detail: Mapping[str, object]) -> Event:
    """Decode a wire event.

    Args:
        name: Wire event name (e.g. "violationSelected").
        detail: Event payload.

    Raises:
        InvalidEventError: Unknown name, or a required field missing or mistyped.
    """
    try:
        event_type = EventType(name)
    except ValueError:
        raise InvalidEventError(name=name, reason="unknown event") from None

    match event_type:
        case EventType.CATEGORY_ACTIVATED:
            return CategoryActivated(
                id=_str(name, detail, "id"),
                description=_str(name, detail, "description"),
            )
        case EventType.RULE_SELECTED:
            return RuleSelected(id=_str(name, detail, "id"))
        case EventType.VIOLATION_SELECTED:
            return _decode_violation_selected(name, detail)


def encode_event(event: Event) -> tuple[str, dict[str, object]]:
    """Encode an event as (wire name, detail)."""
    name = get_event_type(event).value
    match event:
        case CategoryActivated():
            return name, {"id": event.id, "description": event.description}
        case RuleSelected():
            return name, {"id": event.id}
        case ViolationSelected():
            detail: dict[str, object] = {
                wire: getattr(event, attr) for wire, attr in _VIOLATION_STR_FIELDS.items()
            }
            detail.update({wire: getattr(event, attr) for wire, attr in _VIOLATION_INT_FIELDS.items()})
            detail["renderedCode"] = event.rendered_code
            if event.how_to_fix is not None:
                detail["howToFix"] = event.how_to_fix
            return name, detail


def _decode_violation_selected(name: str, detail: Mapping[str, object]) -> ViolationSelected:
    if "renderedCode" not in detail:
        raise InvalidEventError(name=name, reason="missing field 'renderedCode'")
    rendered = detail["renderedCode"]
    if rendered is not None and not isinstance(rendered, RenderedCode):
        raise InvalidEventError(name=name, reason="renderedCode must be a RenderedCode handle or null")

    how_to_fix = detail.get("howToFix")
    if how_to_fix is not None and not isinstance(how_to_fix, str):
        raise InvalidEventError(name=name, reason="howToFix must be a string")

    strings = {attr: _str(name, detail, wire) for wire, attr in _VIOLATION_STR_FIELDS.items()}
    ints = {attr: _int(name, detail, wire) for wire, attr in _VIOLATION_INT_FIELDS.items()}
    return ViolationSelected(
        message=strings["message"],
        id=strings["id"],
        start_line=ints["start_line"],
        start_col=ints["start_col"],
        end_line=ints["end_line"],
        end_col=ints["end_col"],
        path=strings["path"],
        category=strings["category"],
        violation_id=strings["violation_id"],
        rendered_code=rendered,
        how_to_fix=how_to_fix,
    )


def _str(name: str, detail: Mapping[str, object], field: str) -> str:
    if field not in detail:
        raise InvalidEventError(name=name, reason=f"missing field {field!r}")
    value = detail[field]
    if not isinstance(value, str):
        raise InvalidEventError(name=name, reason=f"{field!r} must be a string")
    return value


def _int(name: str, detail: Mapping[str, object], field: str) -> int:
    if field not in detail:
        raise InvalidEventError(name=name, reason=f"missing field {field!r}")
    value = detail[field]
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidEventError(name=name, reason=f"{field!r} must be an integer")
    return value
