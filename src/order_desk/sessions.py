"""
Per-browser-session list controllers.

Reflex state must stay serializable, so the controllers and filter bars
(which hold coroutines and timers) live here, keyed by the client token
and the list kind. Reflex event handlers look them up, drive them and copy
their snapshots into state vars.
"""

from datetime import datetime
from threading import Lock
from typing import Any, Generic, TypeVar

from order_desk.config import get_settings
from order_desk.controller import PagedCollectionController
from order_desk.errors import ValidationError
from order_desk.filter_bar import FilterBar
from order_desk.lib import logs
from order_desk.models.filters import EntityKind, default_filters
from order_desk.services.base import OrderDeskService

LOG = logs.logger(__file__)

T = TypeVar("T")


class ListSession(Generic[T]):
    """Controller and filter bar backing one list screen in one browser tab."""

    def __init__(
        self,
        kind: EntityKind,
        controller: PagedCollectionController[T],
        quiet_period: float,
    ) -> None:
        self.kind = kind
        self.controller = controller
        self.filter_bar = FilterBar(
            self._apply_changes,
            shape=type(controller.filters),
            quiet_period=quiet_period,
        )

    async def change_date_range(
        self, start: datetime | None, end: datetime | None
    ) -> str | None:
        """
        Apply a date range through the filter bar.

        Returns:
            None on success, or the validation message when the range is
            rejected (nothing is fetched and the filters are unchanged).
        """
        try:
            await self.filter_bar.date_range_changed(start, end)
        except ValidationError as exc:
            LOG.info("%s date range rejected: %s", self.kind, exc)
            return str(exc)
        return None

    async def _apply_changes(self, changes: dict[str, Any]) -> None:
        await self.controller.update_filters(**changes)


def new_session(
    kind: EntityKind,
    service: OrderDeskService,
    page_size: int | None = None,
    quiet_period: float | None = None,
) -> ListSession:
    """
    Build a controller + filter bar pair for a list screen.

    Args:
        kind: Which entity list ("clients", "products" or "orders").
        service: Backend used as the page-fetch function.
        page_size: Items per page; configured default when omitted.
        quiet_period: Search debounce in seconds; configured default when omitted.
    """
    settings = get_settings()
    fetchers = {
        "clients": service.list_clients,
        "products": service.list_products,
        "orders": service.list_orders,
    }
    filters = default_filters(kind, page_size or settings.page_size)
    controller = PagedCollectionController(fetchers[kind], filters=filters, name=kind)
    if quiet_period is None:
        quiet_period = settings.search_debounce
    return ListSession(kind, controller, quiet_period)


class SessionRegistry:
    """Thread-safe map of (client token, kind) to ListSession."""

    def __init__(self) -> None:
        self._sessions: dict[tuple[str, str], ListSession] = {}
        self._lock = Lock()

    def get(
        self, token: str, kind: EntityKind, service: OrderDeskService
    ) -> tuple[ListSession, bool]:
        """
        Return the session for a tab and list, creating it on first use.

        Returns:
            (session, created) where created is True for a new session.
        """
        key = (token, kind)
        with self._lock:
            session = self._sessions.get(key)
            if session is not None:
                return session, False
            session = new_session(kind, service)
            self._sessions[key] = session
            LOG.info("Created %s session for client %s", kind, token[:8])
            return session, True

    def drop(self, token: str) -> None:
        """Forget every list session of a tab."""
        with self._lock:
            for key in [key for key in self._sessions if key[0] == token]:
                del self._sessions[key]

    def __len__(self) -> int:
        return len(self._sessions)


REGISTRY = SessionRegistry()
