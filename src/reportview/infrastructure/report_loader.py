"""Report loader: JSON lint report → ReportData.

Stdlib-only. Files may be gzip-compressed; compression is detected by
the gzip magic bytes, not the file name. Accepted shape (unknown keys ignored)::

    {
      "generated": "2024-05-01T10:00:00+00:00",      optional, ISO 8601
      "maxViolations": 100,                           optional
      "ruleCategories": [                             optional
        {"id": "schemas", "name": "Schemas", "description": "..."}
      ],
      "specLines": ["openapi: 3.1.0", ...],           optional (or "spec": "...")
      "resultSet": {"results": [                      or "ruleResults": [...]
        {
          "message": "...", "path": "$.paths./pets",
          "range": {"start": {"line": 4, "character": 2},
                    "end":   {"line": 4, "character": 9}},
          "ruleId": "operation-description",
          "ruleSeverity": "error",
          "rule": {"id": "...", "description": "...", "howToFix": "...",
                   "category": {"id": "descriptions", "name": "...", "description": "..."}}
        }
      ]}
    }

Categories referenced by results but not listed are added: from the
built-in catalogue when known, else from the result's own category
object.
"""

from __future__ import annotations

import gzip
import json
import logging
import zlib
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, TypeGuard

from reportview.domain.exceptions import ReportDataError
from reportview.domain.model.category import BUILTIN_BY_ID, BUILTIN_CATEGORIES, CATEGORY_ALL, Category
from reportview.domain.model.enums import Severity
from reportview.domain.model.report_data import ReportData
from reportview.domain.model.rule import Rule, RuleResult
from reportview.domain.model.span import Span

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def load_report_data(path: Path | str) -> ReportData:
    """Read and parse a JSON report file, plain or gzipped.

    Raises:
        ReportDataError: File unreadable, undecodable, or malformed.
    """
    file_path = Path(path)
    try:
        payload = file_path.read_bytes()
    except OSError as exc:
        raise ReportDataError(f"cannot read {file_path}: {exc}") from exc
    data = parse_report_bytes(payload)
    logger.debug("Loaded %d result(s) from %s", len(data.results), file_path)
    return data


def parse_report_bytes(payload: bytes) -> ReportData:
    """Parse raw report bytes, decompressing them first when gzipped.

    Raises:
        ReportDataError: Corrupt gzip stream, not UTF-8, not JSON, or malformed.
    """
    if payload.startswith(GZIP_MAGIC):
        try:
            payload = gzip.decompress(payload)
        except (OSError, EOFError, zlib.error) as exc:
            raise ReportDataError(f"corrupt gzip stream: {exc}") from exc
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ReportDataError(f"not UTF-8 text: {exc}") from exc
    return parse_report_json(text)


def parse_report_json(text: str) -> ReportData:
    """Parse a JSON report document.

    Raises:
        ReportDataError: Not JSON or malformed.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ReportDataError(f"not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ReportDataError("top level must be an object")
    return report_data_from_dict(raw)


def report_data_from_dict(raw: Mapping[str, object]) -> ReportData:
    """Build ReportData from decoded JSON.

    Raises:
        ReportDataError: Malformed data.
    """
    raw_results = _results_list(raw)
    results: list[RuleResult] = []
    referenced: dict[str, Category] = {}
    for index, item in enumerate(raw_results):
        result, category = _parse_result(item, f"results[{index}]")
        results.append(result)
        referenced.setdefault(category.id, category)

    categories = _categories(raw.get("ruleCategories"), referenced)
    max_violations = raw.get("maxViolations", 100)
    if not isinstance(max_violations, int) or isinstance(max_violations, bool) or max_violations < 1:
        raise ReportDataError(f"maxViolations must be a positive integer, got {max_violations!r}")

    try:
        return ReportData(
            categories=categories,
            results=tuple(results),
            max_violations=max_violations,
            generated=_parse_generated(raw.get("generated")),
            spec_lines=_spec_lines(raw),
        )
    except ValueError as exc:
        raise ReportDataError(str(exc)) from exc


# =============================================================================
# Helpers
# =============================================================================


def _results_list(raw: Mapping[str, object]) -> list[object]:
    container = raw.get("resultSet", raw.get("ruleResults", []))
    if isinstance(container, dict):
        container = container.get("results", [])
    if container is None:
        return []
    if not isinstance(container, list):
        raise ReportDataError("results must be a list")
    return container


def _require_str(mapping: Mapping[str, object], key: str, where: str, *, allow_empty: bool = False) -> str:
    value = mapping.get(key)
    if not isinstance(value, str) or (not value and not allow_empty):
        raise ReportDataError(f"{where}.{key} must be a non-empty string")
    return value


def _optional_str(mapping: Mapping[str, object], key: str) -> str:
    value = mapping.get(key)
    return value if isinstance(value, str) else ""


def _position(raw: object, where: str) -> tuple[int, int]:
    if not isinstance(raw, dict):
        raise ReportDataError(f"{where} must be an object")
    line = raw.get("line")
    character = raw.get("character", 0)
    if not _is_int(line) or not _is_int(character):
        raise ReportDataError(f"{where} needs integer line and character")
    return line, character


def _is_int(value: object) -> TypeGuard[int]:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_span(raw: object, where: str) -> Span:
    if not isinstance(raw, dict):
        raise ReportDataError(f"{where}.range must be an object")
    start_line, start_col = _position(raw.get("start"), f"{where}.range.start")
    end_line, end_col = _position(raw.get("end", raw.get("start")), f"{where}.range.end")
    try:
        return Span(start_line, start_col, end_line, end_col)
    except ValueError as exc:
        raise ReportDataError(f"{where}.range: {exc}") from exc


def _parse_category(raw: object, where: str) -> Category:
    if isinstance(raw, str) and raw:
        return BUILTIN_BY_ID.get(raw) or Category(id=raw, name=raw)
    if not isinstance(raw, dict):
        raise ReportDataError(f"{where} must be a category object or id")
    category_id = _require_str(raw, "id", where)
    builtin = BUILTIN_BY_ID.get(category_id)
    return Category(
        id=category_id,
        name=_optional_str(raw, "name") or (builtin.name if builtin else category_id),
        description=_optional_str(raw, "description") or (builtin.description if builtin else ""),
    )


def _parse_result(item: object, where: str) -> tuple[RuleResult, Category]:
    if not isinstance(item, dict):
        raise ReportDataError(f"{where} must be an object")
    rule_raw = item.get("rule")
    if not isinstance(rule_raw, dict):
        raise ReportDataError(f"{where}.rule must be an object")

    rule_id = _optional_str(rule_raw, "id") or _require_str(item, "ruleId", where)
    category = _parse_category(rule_raw.get("category", rule_raw.get("categoryId")), f"{where}.rule.category")
    severity = Severity.parse(_optional_str(item, "ruleSeverity") or _optional_str(rule_raw, "severity"))
    rule = Rule(
        id=rule_id,
        description=_optional_str(rule_raw, "description"),
        category_id=category.id,
        severity=severity,
        how_to_fix=_optional_str(rule_raw, "howToFix"),
    )
    result = RuleResult(
        rule=rule,
        message=_require_str(item, "message", where),
        path=_optional_str(item, "path"),
        span=_parse_span(item.get("range"), where),
    )
    return result, category


def _categories(raw: object, referenced: Mapping[str, Category]) -> tuple[Category, ...]:
    if raw is None:
        listed = list(BUILTIN_CATEGORIES)
    elif isinstance(raw, list):
        listed = [_parse_category(c, f"ruleCategories[{i}]") for i, c in enumerate(raw)]
    else:
        raise ReportDataError("ruleCategories must be a list")

    listed = [c for c in listed if c.id != CATEGORY_ALL]
    seen = {c.id for c in listed}
    for category_id, category in referenced.items():
        if category_id not in seen and category_id != CATEGORY_ALL:
            listed.append(category)
            seen.add(category_id)
    return tuple(listed)


def _parse_generated(raw: object) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ReportDataError("generated must be an ISO 8601 string")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ReportDataError(f"generated: {exc}") from exc


def _spec_lines(raw: Mapping[str, object]) -> tuple[str, ...]:
    lines = raw.get("specLines")
    if isinstance(lines, list) and all(isinstance(line, str) for line in lines):
        return tuple(lines)
    spec = raw.get("spec")
    if isinstance(spec, str):
        return tuple(spec.split("\n"))
    return ()
