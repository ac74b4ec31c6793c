"""
Paging models shared by every list screen.

PageResult is a single page as returned by the backend; AccumulatedList is
the controller's visible state after concatenating pages.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from order_desk.errors import FetchError
from order_desk.models.filters import FilterState

T = TypeVar("T")


def total_pages_for(total_count: int, page_size: int) -> int:
    """Return ceil(total_count / page_size)."""
    return math.ceil(total_count / page_size) if page_size > 0 else 0


@dataclass(frozen=True, slots=True)
class PageResult(Generic[T]):
    """
    Represents a single page of items.

    Attributes:
        items: Items on this page, in server order.
        total_count: Total number of items matching the query.
        page: 1-indexed page number.
        page_size: Requested page size.
        total_pages: ceil(total_count / page_size).
    """

    items: Sequence[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int

    @property
    def has_more(self) -> bool:
        """Return True when pages after this one exist."""
        return self.page < self.total_pages

    @classmethod
    def of(
        cls, items: Sequence[T], total_count: int, page: int, page_size: int
    ) -> "PageResult[T]":
        """Build a page, deriving total_pages from the counts."""
        return cls(
            items=list(items),
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages_for(total_count, page_size),
        )

    @classmethod
    def from_wire(
        cls,
        body: Mapping[str, Any],
        parse_item: Callable[[Mapping[str, Any]], T],
        requested: FilterState | None = None,
    ) -> "PageResult[T]":
        """
        Parse the backend's ``{data, total, page, page_size, totalPages}`` body.

        Missing paging fields fall back to the request's values; a missing
        ``totalPages`` is derived from ``total`` and ``page_size``.

        Raises:
            FetchError: If the body is not a paged response.
        """
        if not isinstance(body, Mapping) or not isinstance(body.get("data"), list):
            raise FetchError("Malformed page response from server")
        items = [parse_item(item) for item in body["data"]]
        page = int(body.get("page") or (requested.page if requested else 1))
        page_size = int(
            body.get("page_size")
            or body.get("pageSize")
            or (requested.page_size if requested else max(len(items), 1))
        )
        total = int(body.get("total", len(items)))
        total_pages = body.get("totalPages")
        return cls(
            items=items,
            total_count=total,
            page=page,
            page_size=page_size,
            total_pages=(
                int(total_pages)
                if total_pages is not None
                else total_pages_for(total, page_size)
            ),
        )


@dataclass(frozen=True, slots=True)
class AccumulatedList(Generic[T]):
    """
    Snapshot of a list screen's visible state.

    Attributes:
        items: Items loaded so far across pages, in page order.
        total: Total count reported by the latest applied response.
        has_more: Whether the latest applied page was not the last one.
        is_loading: A reset fetch is in flight.
        is_loading_more: An append fetch is in flight.
        error: User-visible message from the last failed fetch, if any.
        filters: Filters of the current generation.
        generation: Current generation token.
    """

    items: Sequence[T] = field(default_factory=list)
    total: int = 0
    has_more: bool = False
    is_loading: bool = False
    is_loading_more: bool = False
    error: str | None = None
    filters: FilterState | None = None
    generation: int = 0

    @property
    def is_empty(self) -> bool:
        """True when nothing is loading and no items are shown."""
        return not self.is_loading and len(self.items) == 0
