"""Tests for CategoryReportPanel."""

import pytest

from reportview.application.components.category_panel import NO_VIOLATIONS_TEXT, CategoryReportPanel
from tests.factories import make_root, make_rule_entry, mount


class TestCategoryReportPanel:
    """Tests for CategoryReportPanel."""

    def test_empty_id_raises(self) -> None:
        """Category id is required."""
        with pytest.raises(ValueError):
            CategoryReportPanel("")

    def test_starts_hidden(self) -> None:
        """New panels are hidden and not empty."""
        panel = CategoryReportPanel("tags")
        assert panel.visible is False
        assert panel.is_empty is False

    def test_rules_in_order(self) -> None:
        """rules lists added entries in order."""
        panel = CategoryReportPanel("tags")
        a = panel.add_rule(make_rule_entry("A"))
        b = panel.add_rule(make_rule_entry("B"))
        assert panel.rules == (a, b)

    def test_empty_latch(self) -> None:
        """A panel without rules latches is_empty."""
        panel = CategoryReportPanel("tags")
        assert panel.mark_empty_if_no_rules() is True
        assert panel.is_empty is True

    def test_not_empty_with_rules(self) -> None:
        """A panel with rules never latches."""
        panel = CategoryReportPanel("tags")
        panel.add_rule(make_rule_entry())
        assert panel.mark_empty_if_no_rules() is False

    def test_set_visible_requests_update_on_change(self) -> None:
        """Only real changes queue a render."""
        root = make_root({"tags": {}, "schemas": {}})
        document = mount(root)
        tags, schemas = root.panels
        document.flush_updates()

        tags.set_visible(True)
        schemas.set_visible(False)

        assert document.flush_updates() == ()
        schemas.set_visible(True)
        assert document.flush_updates() == (schemas,)

    def test_empty_text(self) -> None:
        """Empty-state text."""
        assert NO_VIOLATIONS_TEXT == "All good in here, no rules broken!"
