"""
Filter state for paginated list screens.

FilterState values are immutable: every edit produces a new value. The
controller replaces its filters wholesale on each edit or refresh and
never mutates them in place.

Each entity gets a closed shape:

    FilterState
    ├── ClientFilterState
    ├── ProductFilterState
    └── OrderFilterState (client_id, product_id)
"""

from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any, Literal

from order_desk.errors import ValidationError

SortOrder = Literal["asc", "desc"]
EntityKind = Literal["clients", "products", "orders"]

DEFAULT_PAGE_SIZE = 20

# Fields that describe the cursor rather than the query
_PAGING_FIELDS = frozenset({"page", "page_size"})


@dataclass(frozen=True, slots=True)
class FilterState:
    """
    Query parameters shared by every list screen.

    Attributes:
        search: Free-text search; empty string means no search.
        start_date: Inclusive lower bound on creation date.
        end_date: Inclusive upper bound on creation date.
        page: 1-indexed page number.
        page_size: Number of items per page.
        sort_by: Optional field name to sort by.
        sort_order: Sort direction, used together with sort_by.
    """

    search: str = ""
    start_date: datetime | None = None
    end_date: datetime | None = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str | None = None
    sort_order: SortOrder | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.page, int) or self.page < 1:
            raise ValidationError(f"page must be an integer >= 1, got {self.page!r}")
        if not isinstance(self.page_size, int) or self.page_size <= 0:
            raise ValidationError(
                f"page_size must be a positive integer, got {self.page_size!r}"
            )
        if self.sort_order not in (None, "asc", "desc"):
            raise ValidationError(f"sort_order must be 'asc' or 'desc', got {self.sort_order!r}")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError("start_date must not be after end_date")

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the names of all fields of this filter shape."""
        return frozenset(f.name for f in fields(cls))

    def merged(self, changes: dict[str, Any]) -> "FilterState":
        """
        Return a copy with changes applied and the page reset to 1.

        Raises:
            ValidationError: If a change names a field this shape lacks.
        """
        unknown = set(changes) - self.field_names()
        if unknown:
            raise ValidationError(
                f"Unknown filter field(s) for {type(self).__name__}: {sorted(unknown)}"
            )
        values = {key: value for key, value in changes.items() if key != "page"}
        if "search" in values:
            values["search"] = values["search"] or ""
        return replace(self, **values, page=1)

    def first_page(self) -> "FilterState":
        """Return a copy positioned on page 1."""
        return replace(self, page=1)

    def next_page(self) -> "FilterState":
        """Return a copy positioned on the following page."""
        return replace(self, page=self.page + 1)

    def cleared(self) -> "FilterState":
        """Return default filters of the same shape, preserving only page_size."""
        return type(self)(page_size=self.page_size)

    @classmethod
    def reset_fields(cls) -> dict[str, Any]:
        """Return every non-paging field at its default value."""
        defaults = cls()
        return {
            name: getattr(defaults, name)
            for name in cls.field_names()
            if name not in _PAGING_FIELDS
        }

    @property
    def has_active_filters(self) -> bool:
        """True when any query field differs from the defaults."""
        return any(
            getattr(self, name) != value for name, value in self.reset_fields().items()
        )


@dataclass(frozen=True, slots=True)
class ClientFilterState(FilterState):
    """Filters for the clients list."""


@dataclass(frozen=True, slots=True)
class ProductFilterState(FilterState):
    """Filters for the products list."""


@dataclass(frozen=True, slots=True)
class OrderFilterState(FilterState):
    """Filters for the orders list, with equality filters on client and product."""

    client_id: str | None = None
    product_id: str | None = None


_FILTER_SHAPES: dict[str, type[FilterState]] = {
    "clients": ClientFilterState,
    "products": ProductFilterState,
    "orders": OrderFilterState,
}


def default_filters(
    kind: EntityKind | None = None, page_size: int = DEFAULT_PAGE_SIZE
) -> FilterState:
    """
    Return a fresh default FilterState.

    Args:
        kind: Entity list the filters are for; None gives the generic shape.
        page_size: Items per page.
    """
    if kind is None:
        return FilterState(page_size=page_size)
    try:
        shape = _FILTER_SHAPES[kind]
    except KeyError as exc:
        raise ValidationError(f"Unknown entity kind: {kind}") from exc
    return shape(page_size=page_size)
