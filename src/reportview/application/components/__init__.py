"""Report view components."""

from reportview.application.components.base import Component
from reportview.application.components.category_navigation import CategoryLink, CategoryNavigator
from reportview.application.components.category_panel import CategoryReportPanel
from reportview.application.components.report_root import ReportRoot
from reportview.application.components.rule_entry import RuleEntry, RuleState
from reportview.application.components.violation_drawer import (
    DrawerDetail,
    DrawerPlaceholder,
    MessageToken,
    ViolationDrawer,
    find_drawer,
    help_link,
    split_backticks,
)
from reportview.application.components.violation_entry import ViolationEntry

__all__ = [
    "CategoryLink",
    "CategoryNavigator",
    "CategoryReportPanel",
    "Component",
    "DrawerDetail",
    "DrawerPlaceholder",
    "MessageToken",
    "ReportRoot",
    "RuleEntry",
    "RuleState",
    "ViolationDrawer",
    "ViolationEntry",
    "find_drawer",
    "help_link",
    "split_backticks",
]
