"""Tests for ViolationDrawer and its render helpers."""

from __future__ import annotations

import pytest

from reportview.application.components.base import Component
from reportview.application.components.violation_drawer import (
    DRAWER_ACTIVE_FLAG,
    PLACEHOLDER_TEXT,
    DrawerDetail,
    DrawerPlaceholder,
    MessageToken,
    ViolationDrawer,
    find_drawer,
    help_link,
    split_backticks,
)
from reportview.application.document import Document
from reportview.domain.exceptions import DuplicateDrawerError, MissingDrawerError
from reportview.domain.model.rendered_code import RenderedCode
from tests.factories import make_violation_selected


def _mounted_drawer(**kwargs: str) -> tuple[ViolationDrawer, Document, Component]:
    root = Component()
    drawer = root.append(ViolationDrawer(**kwargs))
    document = Document()
    document.mount(root)
    return drawer, document, root


class TestSplitBackticks:
    """Tests for split_backticks()."""

    def test_plain(self) -> None:
        """No back-ticks: one plain token."""
        assert split_backticks("plain text") == (MessageToken("plain text"),)

    def test_code_spans(self) -> None:
        """Back-tick spans become code tokens without the ticks."""
        assert split_backticks("use `foo` not `bar`!") == (
            MessageToken("use "),
            MessageToken("foo", is_code=True),
            MessageToken(" not "),
            MessageToken("bar", is_code=True),
            MessageToken("!"),
        )

    def test_leading_code(self) -> None:
        """Empty plain pieces are dropped."""
        assert split_backticks("`x` is bad") == (MessageToken("x", is_code=True), MessageToken(" is bad"))

    def test_unbalanced(self) -> None:
        """A lone back-tick stays plain text."""
        assert split_backticks("a ` b") == (MessageToken("a ` b"),)


class TestHelpLink:
    """Tests for help_link()."""

    def test_lowercased(self) -> None:
        """Category and rule id are lower-cased."""
        assert help_link("Schemas", "OAS3-Schema") == "https://quobix.com/vacuum/rules/schemas/oas3-schema"

    def test_dollar_removed(self) -> None:
        """$ is stripped from the rule id."""
        assert help_link("tags", "$ref-siblings") == "https://quobix.com/vacuum/rules/tags/ref-siblings"

    def test_custom_base(self) -> None:
        """Trailing slash on the base is not doubled."""
        assert help_link("tags", "r", "https://docs.example/") == "https://docs.example/tags/r"


class TestDrawerState:
    """show/hide/present."""

    def test_initial_placeholder(self) -> None:
        """A fresh drawer renders the placeholder."""
        drawer, _, _ = _mounted_drawer()
        assert drawer.visible is False
        assert drawer.render() == DrawerPlaceholder()
        assert drawer.render().text == PLACEHOLDER_TEXT

    def test_show_without_selection(self) -> None:
        """Visible but empty still renders the placeholder."""
        drawer, document, _ = _mounted_drawer()
        drawer.show()
        assert isinstance(drawer.render(), DrawerPlaceholder)
        assert document.has_flag(DRAWER_ACTIVE_FLAG)

    def test_present(self) -> None:
        """present() stores the event and opens the drawer."""
        drawer, document, _ = _mounted_drawer()
        code = RenderedCode(source="a: b", first_line=1, highlight_line=1)
        event = make_violation_selected("R1", message="use `x`", rendered_code=code, how_to_fix="fix it")

        drawer.present(event)

        assert drawer.visible is True
        assert drawer.current is event
        view = drawer.render()
        assert isinstance(view, DrawerDetail)
        assert view.title == (MessageToken("use "), MessageToken("x", is_code=True))
        assert view.code is code
        assert view.how_to_fix == "fix it"
        assert view.help_link.endswith("/schemas/r1")
        assert document.has_flag(DRAWER_ACTIVE_FLAG)

    def test_hide_keeps_current(self) -> None:
        """Hiding keeps the violation but renders the placeholder."""
        drawer, document, _ = _mounted_drawer()
        event = make_violation_selected()
        drawer.present(event)

        drawer.hide()

        assert drawer.current is event
        assert isinstance(drawer.render(), DrawerPlaceholder)
        assert not document.has_flag(DRAWER_ACTIVE_FLAG)

    def test_listens_to_document(self) -> None:
        """ViolationSelected anywhere in the document opens the drawer."""
        drawer, _, root = _mounted_drawer()
        other = root.append(Component())
        event = make_violation_selected()

        other.dispatch(event)

        assert drawer.visible is True
        assert drawer.current is event

    def test_disconnect_clears_flag(self) -> None:
        """Removing the drawer clears the document flag."""
        drawer, document, root = _mounted_drawer()
        drawer.show()
        root.remove(drawer)
        assert not document.has_flag(DRAWER_ACTIVE_FLAG)

    def test_custom_help_base(self) -> None:
        """Help links use the configured base."""
        drawer, _, _ = _mounted_drawer(help_url_base="https://docs.example")
        drawer.present(make_violation_selected("R1"))
        view = drawer.render()
        assert isinstance(view, DrawerDetail)
        assert view.help_link == "https://docs.example/schemas/r1"


class TestSingleton:
    """One drawer per document."""

    def test_second_drawer_rejected(self) -> None:
        """Attaching a second drawer raises DuplicateDrawerError."""
        _, _, root = _mounted_drawer()
        with pytest.raises(DuplicateDrawerError):
            root.append(ViolationDrawer())

    def test_find_drawer(self) -> None:
        """find_drawer() returns the attached drawer."""
        drawer, document, _ = _mounted_drawer()
        assert find_drawer(document) is drawer

    def test_find_drawer_missing(self) -> None:
        """find_drawer() without a drawer raises MissingDrawerError."""
        document = Document()
        document.mount(Component())
        with pytest.raises(MissingDrawerError):
            find_drawer(document)
