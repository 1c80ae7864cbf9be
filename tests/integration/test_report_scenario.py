"""End-to-end walk through a three-category report."""

from __future__ import annotations

from reportview.application.components.category_panel import CategoryReportPanel
from reportview.application.components.report_root import ReportRoot
from reportview.application.components.rule_entry import RuleEntry
from reportview.application.components.violation_drawer import DrawerDetail
from reportview.application.document import Document
from reportview.domain.events import RuleSelected
from tests.factories import make_root, mount


def _panel(root: ReportRoot, category_id: str) -> CategoryReportPanel:
    return next(p for p in root.panels if p.id == category_id)


def _rule(root: ReportRoot, category_id: str, rule_id: str) -> RuleEntry:
    return next(r for r in _panel(root, category_id).rules if r.rule_id == rule_id)


class TestThreeCategoryScenario:
    """Mount, expand, switch, select, reselect."""

    def test_walkthrough(self) -> None:
        """Every step leaves the tree in the expected state."""
        root = make_root({"A": {"R1": 2}, "B": {"R2": 2}, "C": {}})
        document = Document()
        rule_events: list[RuleSelected] = []
        document.listen(RuleSelected, rule_events.append)
        document.mount(root)

        # mount
        assert [p.id for p in root.panels if p.visible] == ["A"]
        assert not any(r.expanded for r in document.query_all(RuleEntry))

        # click rule R1 in A
        r1 = _rule(root, "A", "R1")
        r1.click_summary()
        assert r1.expanded is True
        assert rule_events == [RuleSelected(id="R1")]

        # click category B
        link_b = root.navigator.link("B")
        assert link_b is not None
        link_b.click()
        assert _panel(root, "B").visible is True
        assert _panel(root, "A").visible is False
        assert r1.expanded is False
        assert root.drawer.visible is False

        # click violation V1 in B
        v1, v2 = _rule(root, "B", "R2").entries
        v1.click()
        assert root.drawer.visible is True
        view = root.drawer.render()
        assert isinstance(view, DrawerDetail)
        assert view.path == v1.violation.path
        assert root.drawer.current is not None
        assert root.drawer.current.message == v1.violation.message
        assert v1.selected is True

        # click violation V2
        v2.click()
        assert root.drawer.current is not None
        assert root.drawer.current.message == v2.violation.message
        assert root.drawer.current.violation_id == v2.violation_id
        assert v1.selected is False
        assert v2.selected is True

    def test_empty_category(self) -> None:
        """Switching to a rule-less category shows its empty state."""
        root = make_root({"A": {"R1": 1}, "B": {}, "C": {}})
        mount(root)
        link_c = root.navigator.link("C")
        assert link_c is not None

        link_c.click()

        assert _panel(root, "C").is_empty is True
        assert _panel(root, "C").visible is True
