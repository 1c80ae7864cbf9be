"""Report view configuration."""

from __future__ import annotations

from dataclasses import dataclass

from reportview.domain.model.category import CATEGORY_ALL


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """Configuration DTO for building and rendering a report view.

    All fields have defaults (convenience). Immutable, FAIL-FIRST validation.

    Attributes:
        max_violations: Violations mounted per rule before truncation.
        rule_header_height: Pixels reserved per rule header when sizing an
            expanded violation list.
        help_url_base: Root of the rule documentation links.
        default_category_id: Category activated on mount.
        snippet_lines_before: Source lines shown above a violation.
        snippet_lines_after: Source lines shown below a violation.
        snippet_lexer: Lexer for rendered code fragments.
        width: Console width used by the renderer.
    """

    max_violations: int = 100
    rule_header_height: int = 60
    help_url_base: str = "https://quobix.com/vacuum/rules"
    default_category_id: str = CATEGORY_ALL
    snippet_lines_before: int = 3
    snippet_lines_after: int = 3
    snippet_lexer: str = "yaml"
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_violations < 1:
            raise ValueError(f"max_violations must be >= 1, got {self.max_violations}")
        if self.rule_header_height < 0:
            raise ValueError(f"rule_header_height must be >= 0, got {self.rule_header_height}")
        if not self.help_url_base:
            raise ValueError("help_url_base must not be empty")
        if not self.default_category_id:
            raise ValueError("default_category_id must not be empty")
        if self.snippet_lines_before < 0 or self.snippet_lines_after < 0:
            raise ValueError("snippet context lines must be >= 0")
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")
