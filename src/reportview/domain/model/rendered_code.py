"""Rendered code fragment handle."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RenderedCode:
    """Opaque code fragment produced by a rendering collaborator.

    Components pass it around without looking inside. The console
    renderer turns it into a rich Syntax block.

    Attributes:
        source: Source excerpt around the violation
        first_line: Line number of the first excerpt line (>= 1)
        highlight_line: Line to highlight
        lexer: Pygments lexer name
    """

    source: str
    first_line: int
    highlight_line: int
    lexer: str = "yaml"

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.first_line < 1:
            raise ValueError(f"first_line must be >= 1, got {self.first_line}")
        if self.highlight_line < self.first_line:
            raise ValueError(
                f"highlight_line ({self.highlight_line}) must be >= first_line ({self.first_line})"
            )
