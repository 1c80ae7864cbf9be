"""Code fragment renderer: source excerpt around a violation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reportview.domain.model.rendered_code import RenderedCode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from reportview.domain.model.configuration import ReportConfig
    from reportview.domain.model.violation import Violation


class SnippetRenderer:
    """Cuts the lines around a violation out of the linted document.

    Output is a RenderedCode handle; highlighting happens at display time.
    """

    def __init__(
        self,
        spec_lines: Sequence[str],
        *,
        before: int = 3,
        after: int = 3,
        lexer: str = "yaml",
    ) -> None:
        """Initialize renderer.

        Args:
            spec_lines: Lines of the linted document.
            before: Context lines above the violation.
            after: Context lines below the violation.
            lexer: Lexer name recorded on the fragment.
        """
        if before < 0 or after < 0:
            raise ValueError("context lines must be >= 0")
        self._lines = tuple(spec_lines)
        self._before = before
        self._after = after
        self._lexer = lexer

    @classmethod
    def from_config(cls, spec_lines: Sequence[str], config: ReportConfig) -> SnippetRenderer:
        """Renderer using the config's snippet settings."""
        return cls(
            spec_lines,
            before=config.snippet_lines_before,
            after=config.snippet_lines_after,
            lexer=config.snippet_lexer,
        )

    def __call__(self, violation: Violation) -> RenderedCode | None:
        """Render violation. None when the source is unavailable."""
        return self.render(violation)

    def render(self, violation: Violation) -> RenderedCode | None:
        """Excerpt around violation.span.start_line.

        Returns:
            The fragment, or None when the document is unavailable or the
            line lies outside it.
        """
        line = violation.span.start_line
        if not self._lines or line > len(self._lines):
            return None
        first = max(1, line - self._before)
        last = min(len(self._lines), line + self._after)
        return RenderedCode(
            source="\n".join(self._lines[first - 1 : last]),
            first_line=first,
            highlight_line=line,
            lexer=self._lexer,
        )
