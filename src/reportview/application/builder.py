"""Report builder: ReportData → component tree.

Categories: the synthetic "all" category first (default), then the
data's categories in order. Inside a category, results are grouped by
rule in first-seen order and the groups sorted by severity, errors
first; sorting is stable so equal severities keep engine order.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, TypeAlias

from reportview.application.components.category_navigation import CategoryNavigator
from reportview.application.components.category_panel import CategoryReportPanel
from reportview.application.components.report_root import ReportRoot
from reportview.application.components.rule_entry import RuleEntry
from reportview.application.components.violation_drawer import ViolationDrawer
from reportview.domain.exceptions import ReportDataError
from reportview.domain.model.category import ALL_CATEGORIES, CATEGORY_ALL, Category
from reportview.domain.model.configuration import ReportConfig
from reportview.domain.model.rule import RuleSummary
from reportview.domain.model.violation import Violation

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from reportview.domain.model.rendered_code import RenderedCode
    from reportview.domain.model.report_data import ReportData
    from reportview.domain.model.rule import Rule, RuleResult

logger = logging.getLogger(__name__)

FragmentFactory: TypeAlias = "Callable[[Violation], RenderedCode | None]"


def to_violation(result: RuleResult) -> Violation:
    """Violation data of one lint result."""
    return Violation(
        rule_id=result.rule.id,
        category=result.rule.category_id,
        message=result.message,
        path=result.path,
        span=result.span,
        how_to_fix=result.rule.how_to_fix or None,
    )


def group_by_rule(results: Sequence[RuleResult]) -> list[tuple[Rule, list[RuleResult]]]:
    """Group results by rule id, severity-sorted, first-seen order within a severity."""
    groups: dict[str, list[RuleResult]] = defaultdict(list)
    rules: dict[str, Rule] = {}
    for result in results:
        rules.setdefault(result.rule.id, result.rule)
        groups[result.rule.id].append(result)
    ordered = [(rules[rule_id], grouped) for rule_id, grouped in groups.items()]
    ordered.sort(key=lambda item: item[0].severity.rank)
    return ordered


def navigation_categories(data: ReportData, config: ReportConfig) -> tuple[Category, ...]:
    """Navigation order: "all" first, then the data's categories.

    Only the configured default keeps is_default.
    """
    categories = (ALL_CATEGORIES, *(c for c in data.categories if c.id != CATEGORY_ALL))
    return tuple(
        Category(id=c.id, name=c.name, description=c.description, is_default=c.id == config.default_category_id)
        for c in categories
    )


class ReportBuilder:
    """Builds the component tree of one report.

    Example:
        root = ReportBuilder(ReportConfig(max_violations=10)).build(data)
        Document().mount(root)
    """

    def __init__(
        self,
        config: ReportConfig | None = None,
        *,
        fragment_factory: FragmentFactory | None = None,
    ) -> None:
        """Initialize builder.

        Args:
            config: Report configuration. Uses defaults if None.
            fragment_factory: Renders the code fragment of a violation.
                None = no fragments.
        """
        self._config = config or ReportConfig()
        self._fragment_factory = fragment_factory

    def build(self, data: ReportData) -> ReportRoot:
        """Build an unmounted ReportRoot for data.

        Raises:
            ReportDataError: A result references an unknown category.
        """
        categories = navigation_categories(data, self._config)
        known = {c.id for c in categories}
        unknown = sorted({r.rule.category_id for r in data.results} - known)
        if unknown:
            raise ReportDataError(f"results reference unknown categories: {', '.join(unknown)}")

        cap = min(self._config.max_violations, data.max_violations)
        panels = [self.build_panel(c.id, self._results_for(data, c.id), cap) for c in categories]
        logger.debug("Built %d panel(s) from %d result(s)", len(panels), len(data.results))

        return ReportRoot(
            drawer=ViolationDrawer(help_url_base=self._config.help_url_base),
            navigator=CategoryNavigator(categories, default=self._config.default_category_id),
            panels=panels,
        )

    def build_panel(self, category_id: str, results: Sequence[RuleResult], cap: int) -> CategoryReportPanel:
        """One category panel with a RuleEntry per violated rule."""
        panel = CategoryReportPanel(category_id)
        groups = group_by_rule(results)
        for rule, grouped in groups:
            summary = RuleSummary(
                rule_id=rule.id,
                description=rule.description,
                icon=rule.severity.icon,
                num_results=len(grouped),
                total_rules_in_category=len(groups),
                max_violations_shown=cap,
            )
            panel.add_rule(
                RuleEntry(
                    summary,
                    [to_violation(r) for r in grouped],
                    header_height=self._config.rule_header_height,
                    fragment_for=self._fragment_factory,
                )
            )
        return panel

    @staticmethod
    def _results_for(data: ReportData, category_id: str) -> tuple[RuleResult, ...]:
        if category_id == CATEGORY_ALL:
            return data.results
        return data.results_for(category_id)


def build_report(
    data: ReportData,
    config: ReportConfig | None = None,
    fragment_factory: FragmentFactory | None = None,
) -> ReportRoot:
    """Build an unmounted ReportRoot. See ReportBuilder."""
    return ReportBuilder(config, fragment_factory=fragment_factory).build(data)
