"""Domain model entities."""

from reportview.domain.model.category import (
    ALL_CATEGORIES,
    BUILTIN_BY_ID,
    BUILTIN_CATEGORIES,
    CATEGORY_ALL,
    Category,
)
from reportview.domain.model.configuration import ReportConfig
from reportview.domain.model.drawer_state import DrawerState
from reportview.domain.model.enums import Severity
from reportview.domain.model.rendered_code import RenderedCode
from reportview.domain.model.report_data import ReportData
from reportview.domain.model.rule import Rule, RuleResult, RuleSummary
from reportview.domain.model.span import Span
from reportview.domain.model.view_state import ViewState
from reportview.domain.model.violation import Violation, ViolationRecord

__all__ = [
    "ALL_CATEGORIES",
    "BUILTIN_BY_ID",
    "BUILTIN_CATEGORIES",
    "CATEGORY_ALL",
    "Category",
    "DrawerState",
    "RenderedCode",
    "ReportConfig",
    "ReportData",
    "Rule",
    "RuleResult",
    "RuleSummary",
    "Severity",
    "Span",
    "ViewState",
    "Violation",
    "ViolationRecord",
]
