"""Console renderer: mounted report document → rich formatted string."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from reportview.application.components.category_panel import NO_VIOLATIONS_TEXT
from reportview.application.components.report_root import ReportRoot
from reportview.application.components.violation_drawer import DrawerDetail, find_drawer
from reportview.domain.model.configuration import ReportConfig

if TYPE_CHECKING:
    from reportview.application.components.category_navigation import CategoryNavigator
    from reportview.application.components.category_panel import CategoryReportPanel
    from reportview.application.components.rule_entry import RuleEntry
    from reportview.application.components.violation_drawer import ViolationDrawer
    from reportview.application.document import Document
    from reportview.domain.model.rendered_code import RenderedCode

ACTIVE_MARKER = "▶"
SELECTED_MARKER = "●"


class ConsoleRenderer:
    """Renders the settled state of a report document as rich text.

    Output is str, not print(). Caller decides destination.
    Only what a user would see is rendered: hidden panels and collapsed
    rules show nothing beyond their headers.
    """

    def __init__(self, config: ReportConfig | None = None, *, color: bool = True) -> None:
        """Initialize renderer.

        Args:
            config: Report configuration (width). Uses defaults if None.
            color: Emit ANSI styles. False gives plain text.
        """
        self._config = config or ReportConfig()
        self._color = color

    def render(self, document: Document) -> str:
        """Format document as a rich formatted string.

        Pending update requests are consumed: the output reflects every
        change made so far.

        Raises:
            ComponentNotFoundError: No ReportRoot attached.
            MissingDrawerError: No drawer attached.
        """
        document.flush_updates()
        root = document.query_one(ReportRoot)

        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._color,
            no_color=not self._color,
            highlight=False,
            emoji=False,
            width=self._config.width,
        )

        self._render_navigation(console, root.navigator)
        if root.category_description:
            console.print(Text(root.category_description, style="italic"))
            console.print()
        for panel in root.panels:
            if panel.visible:
                self._render_panel(console, panel)
        self._render_drawer(console, find_drawer(document))

        return output.getvalue()

    def _render_navigation(self, console: Console, navigator: CategoryNavigator) -> None:
        """Render one line of category links, active one marked."""
        line = Text()
        for index, link in enumerate(navigator.links):
            if index:
                line.append(" | ", style="dim")
            if link.active:
                line.append(f"{ACTIVE_MARKER} {link.category.name}", style="bold cyan")
            else:
                line.append(link.category.name)
        console.rule(line)
        console.print()

    def _render_panel(self, console: Console, panel: CategoryReportPanel) -> None:
        """Render rules of a visible panel, or its empty state."""
        if panel.is_empty or not panel.rules:
            console.print(Text(NO_VIOLATIONS_TEXT, style="green"))
            console.print()
            return
        for rule in panel.rules:
            self._render_rule(console, rule)
        console.print()

    def _render_rule(self, console: Console, rule: RuleEntry) -> None:
        """Render a rule header, plus its violations when expanded."""
        summary = rule.summary
        header = Text()
        header.append("▼ " if rule.expanded else "▶ ", style="dim")
        header.append(f"{summary.icon} ")
        header.append(summary.description or summary.rule_id, style="bold")
        header.append(f" ({summary.num_results})", style="dim")
        console.print(header)

        if not rule.expanded:
            return
        for entry in rule.entries:
            v = entry.violation
            line = Text("    ")
            if entry.selected:
                line.append(f"{SELECTED_MARKER} ", style="bold yellow")
            else:
                line.append("  ")
            line.append(v.message, style="bold" if entry.selected else "")
            line.append(f"  {v.span.start_line}:{v.span.start_col}", style="dim")
            console.print(line)
        notice = rule.truncation_notice
        if notice is not None:
            console.print(Text(f"    {notice}", style="magenta"))

    def _render_drawer(self, console: Console, drawer: ViolationDrawer) -> None:
        """Render the drawer view: placeholder or violation detail."""
        console.rule("Violation")
        view = drawer.render()
        if not isinstance(view, DrawerDetail):
            console.print(Text(view.text, style="dim"))
            return

        title = Text()
        for token in view.title:
            title.append(token.text, style="bold cyan" if token.is_code else "bold")
        console.print(title)
        console.print(Text(view.rule_id, style="dim"))
        console.print()

        if view.code is not None:
            console.print(self._syntax(view.code))
            console.print()

        console.print(Text.assemble(("JSON Path: ", "bold"), view.path))
        if view.how_to_fix:
            console.print(Text.assemble(("How to fix: ", "bold"), view.how_to_fix))
        console.print(Text.assemble(("Learn more: ", "bold"), (view.help_link, "underline blue")))

    def _syntax(self, code: RenderedCode) -> Syntax:
        """Highlighted fragment with line numbers, violation line marked."""
        return Syntax(
            code.source,
            code.lexer,
            line_numbers=True,
            start_line=code.first_line,
            highlight_lines={code.highlight_line},
            word_wrap=True,
        )
