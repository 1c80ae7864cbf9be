"""Rule category value object and the built-in catalogue."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class Category:
    """Top-level grouping of rules, selectable via navigation.

    Identity is `id`. The transient active flag is owned by the
    CategoryLink component, not by this object.

    Attributes:
        id: Category identifier (must not be empty)
        name: Display name (must not be empty)
        description: Shown while the category is active
        is_default: Activated when the report is first mounted
    """

    id: str
    name: str
    description: str = ""
    is_default: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.id:
            raise ValueError("id must not be empty")
        if not self.name:
            raise ValueError("name must not be empty")


CATEGORY_ALL = "all"

ALL_CATEGORIES = Category(
    id=CATEGORY_ALL,
    name="All Categories",
    description="All the categories, for those who like a party.",
    is_default=True,
)

# Navigation order of the linter's own categories.
BUILTIN_CATEGORIES: tuple[Category, ...] = (
    Category(
        id="information",
        name="Contract Information",
        description=(
            "The info object contains licencing, contact, authorship details and more. "
            "Checks to confirm required details have been completed."
        ),
    ),
    Category(
        id="operations",
        name="Operations",
        description=(
            "Operations are the core of the contract, they define paths and HTTP methods. "
            "These rules check operations have been well constructed."
        ),
    ),
    Category(
        id="tags",
        name="Tags",
        description=(
            "Tags are used as meta-data for operations. They help consumers navigate "
            "the contract when using documentation, testing or code generation tools."
        ),
    ),
    Category(
        id="schemas",
        name="Schemas",
        description=(
            "Schemas define the data going in and the data flowing out of an operation. "
            "These rules check for structural validity and correct use of structures."
        ),
    ),
    Category(
        id="validation",
        name="Validation",
        description=(
            "Validation rules make sure that certain characters or patterns have not been "
            "used that may cause issues when rendering in different types of applications."
        ),
    ),
    Category(
        id="descriptions",
        name="Descriptions",
        description=(
            "Just about everything can and should have a description. These rules check "
            "for absent, copy/pasted or short descriptions."
        ),
    ),
    Category(
        id="security",
        name="Security",
        description=(
            "These rules make sure that the correct security definitions have been used "
            "and put in the right places."
        ),
    ),
    Category(
        id="examples",
        name="Examples",
        description=(
            "Examples help consumers understand how API calls should look. These rules "
            "check examples exist and match the schema and types provided."
        ),
    ),
)

BUILTIN_BY_ID = MappingProxyType({c.id: c for c in (ALL_CATEGORIES, *BUILTIN_CATEGORIES)})
