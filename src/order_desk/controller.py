"""
Paged, filtered, incrementally loaded collection controller.

One controller backs one list screen. It owns the filter state, the
pagination cursor and the accumulated items, and drives an injected
asynchronous fetch function.

Ordering rules:
- Every reset fetch (initialize, update_filters, refresh) starts a new
  generation. Responses are applied only if their generation is still the
  current one when they arrive, so a slow response for an older filter
  state can never overwrite newer results.
- Append fetches (load_more) are serialized: a second load_more is a no-op
  until the first has been applied, so pages are always concatenated in
  order.
- filters is the latest requested query; cursor is the query and page of
  the last applied response. Appends continue from the cursor and only
  advance it when applied, so after a failed reset the visible rows keep
  paging in their own sequence.

Fetch failures never escape the controller: prior items stay visible, the
loading flag is cleared, the error is recorded and on_error is notified.
"""

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

from order_desk.errors import OrderDeskError
from order_desk.lib import logs
from order_desk.models.common import AccumulatedList, PageResult
from order_desk.models.filters import FilterState, default_filters

LOG = logs.logger(__file__)

T = TypeVar("T")

FetchPage = Callable[[FilterState], Awaitable[PageResult[T]]]
ErrorCallback = Callable[[Exception], None]

_GENERIC_ERROR = "Failed to load data. Showing the last loaded results."


class PagedCollectionController(Generic[T]):
    """
    Accumulates pages of T for a list screen.

    Attributes:
        name: Label used in log lines (e.g. "orders").
    """

    def __init__(
        self,
        fetch_page: FetchPage[T],
        filters: FilterState | None = None,
        on_error: ErrorCallback | None = None,
        name: str = "list",
    ) -> None:
        """
        Args:
            fetch_page: Coroutine function returning one page for a FilterState.
            filters: Initial filters; a fresh default value when omitted.
            on_error: Called once per failed, non-stale fetch.
            name: Label used in log lines.
        """
        self.name = name
        self._fetch_page = fetch_page
        self._on_error = on_error
        self._filters: FilterState = filters or default_filters()
        self._cursor: FilterState | None = None
        self._items: list[T] = []
        self._total = 0
        self._has_more = False
        self._is_loading = False
        self._is_loading_more = False
        self._error: str | None = None
        self._generation = 0
        self._initialized = False

    @property
    def filters(self) -> FilterState:
        return self._filters

    @property
    def cursor(self) -> FilterState | None:
        """Filters that produced the last applied page, or None before any."""
        return self._cursor

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def total(self) -> int:
        return self._total

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_loading_more(self) -> bool:
        return self._is_loading_more

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def generation(self) -> int:
        return self._generation

    def snapshot(self) -> AccumulatedList[T]:
        """Return an immutable view of the current visible state."""
        return AccumulatedList(
            items=list(self._items),
            total=self._total,
            has_more=self._has_more,
            is_loading=self._is_loading,
            is_loading_more=self._is_loading_more,
            error=self._error,
            filters=self._filters,
            generation=self._generation,
        )

    def clear_error(self) -> None:
        """Dismiss the current error message."""
        self._error = None

    async def initialize(self, defaults: FilterState | None = None) -> None:
        """
        Set the initial filters and issue the first reset fetch.

        Only the first call has an effect.
        """
        if self._initialized:
            LOG.warning("%s controller already initialized; ignoring", self.name)
            return
        self._initialized = True
        if defaults is not None:
            self._filters = defaults
        await self._reset(self._filters.first_page())

    async def update_filters(self, **changes) -> None:
        """
        Merge changes into the filters, reset to page 1 and reload.

        Raises:
            ValidationError: If a change names an unknown field or is invalid.
                Nothing is fetched in that case.
        """
        filters = self._filters.merged(changes)
        LOG.info("%s filters updated: %s", self.name, changes)
        await self._reset(filters)

    async def refresh(self) -> None:
        """Reload page 1 with the current filters (after a mutation)."""
        await self._reset(self._filters.first_page())

    async def load_more(self) -> None:
        """
        Fetch the next page and append it.

        No-op when there is nothing more to load, an append is already in
        flight, or a reset fetch is in flight.
        """
        if (
            self._cursor is None
            or not self._has_more
            or self._is_loading_more
            or self._is_loading
        ):
            LOG.debug(
                "%s load_more skipped - has_more:%s loading:%s loading_more:%s",
                self.name,
                self._has_more,
                self._is_loading,
                self._is_loading_more,
            )
            return

        generation = self._generation
        requested = self._cursor.next_page()
        self._is_loading_more = True
        LOG.info(
            "%s load started - page:%s length:%s",
            self.name,
            requested.page,
            len(self._items),
        )
        try:
            page = await self._fetch_page(requested)
        except asyncio.CancelledError:
            if generation == self._generation:
                self._is_loading_more = False
            raise
        except Exception as exc:
            if self._is_stale(generation, "load_more failure"):
                return
            self._is_loading_more = False
            self._record_error(exc)
            return

        if self._is_stale(generation, "load_more response"):
            return
        self._items = self._items + list(page.items)
        self._cursor = requested
        if self._filters.first_page() == requested.first_page():
            self._filters = requested
        self._apply_counts(page)
        self._is_loading_more = False
        LOG.info(
            "%s load complete - has_more:%s length:%s",
            self.name,
            self._has_more,
            len(self._items),
        )

    async def on_sentinel_visible(self) -> None:
        """Called by the viewport collaborator when the end-of-list marker shows."""
        await self.load_more()

    async def _reset(self, filters: FilterState) -> None:
        self._generation += 1
        generation = self._generation
        self._filters = filters
        self._is_loading = True
        # Any append still in flight belongs to an older generation now
        self._is_loading_more = False
        try:
            page = await self._fetch_page(filters)
        except asyncio.CancelledError:
            if generation == self._generation:
                self._is_loading = False
            raise
        except Exception as exc:
            if self._is_stale(generation, "reset failure"):
                return
            self._is_loading = False
            self._record_error(exc)
            return

        if self._is_stale(generation, "reset response"):
            return
        self._cursor = filters
        self._items = list(page.items)
        self._apply_counts(page)
        self._is_loading = False

    def _is_stale(self, generation: int, what: str) -> bool:
        if generation == self._generation:
            return False
        LOG.debug(
            "%s discarding stale %s - generation:%s current:%s",
            self.name,
            what,
            generation,
            self._generation,
        )
        return True

    def _apply_counts(self, page: PageResult[T]) -> None:
        self._total = page.total_count
        self._has_more = page.has_more
        self._error = None

    def _record_error(self, exc: Exception) -> None:
        LOG.error("%s fetch failed: %s", self.name, exc, exc_info=True)
        self._error = str(exc) if isinstance(exc, OrderDeskError) else _GENERIC_ERROR
        if self._on_error is None:
            return
        try:
            self._on_error(exc)
        except Exception:
            LOG.warning("%s on_error callback failed", self.name, exc_info=True)
