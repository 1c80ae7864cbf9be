"""Source span value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Span:
    """Position of a violation in the linted document.

    Attributes:
        start_line: First line (1-based, must be > 0)
        start_col: First column (0-based, must be >= 0)
        end_line: Last line (must be >= start_line)
        end_col: Last column (must be >= 0)
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.start_line <= 0:
            raise ValueError(f"start_line must be > 0, got {self.start_line}")
        if self.start_col < 0:
            raise ValueError(f"start_col must be >= 0, got {self.start_col}")
        if self.end_line < self.start_line:
            raise ValueError(f"end_line ({self.end_line}) must be >= start_line ({self.start_line})")
        if self.end_col < 0:
            raise ValueError(f"end_col must be >= 0, got {self.end_col}")

    def __str__(self) -> str:
        """Format as line:col-line:col."""
        return f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"
