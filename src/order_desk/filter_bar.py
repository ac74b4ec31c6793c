"""
Filter emission for list screens.

FilterBar is the single place that decides when a filter edit becomes a
query. Free-text search is debounced: each keystroke cancels the pending
emission and restarts the quiet period. Discrete controls (date range,
dropdowns) and "clear" emit immediately.
"""

import asyncio
import inspect
from datetime import datetime
from typing import Any, Awaitable, Callable

from order_desk.lib import logs
from order_desk.models.filters import FilterState

LOG = logs.logger(__file__)

DEFAULT_QUIET_PERIOD = 0.3

CallLater = Callable[..., asyncio.TimerHandle]
Emit = Callable[[dict[str, Any]], Awaitable[None] | None]


class Debouncer:
    """
    Single-slot debounce timer.

    A new trigger always cancels the pending one; two timers never run at
    once for the same debouncer.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[..., Any],
        call_later: CallLater | None = None,
    ) -> None:
        """
        Args:
            delay: Quiet period in seconds.
            callback: Called with the trigger's arguments once the period
                elapses. Coroutine results are awaited.
            call_later: Scheduler with the loop.call_later signature;
                defaults to the running loop's.
        """
        self.delay = delay
        self._callback = callback
        self._call_later = call_later
        self._handle: asyncio.TimerHandle | None = None
        self._pending: asyncio.Future | None = None

    @property
    def pending(self) -> bool:
        """True while an emission is scheduled."""
        return self._handle is not None

    def trigger(self, *args: Any) -> asyncio.Future:
        """
        Schedule the callback, superseding any pending call.

        Returns:
            Future resolved with True once the callback has run, or False if
            this call was superseded or cancelled.
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        done = loop.create_future()
        call_later = self._call_later or loop.call_later
        self._pending = done
        self._handle = call_later(self.delay, self._fire, args, done)
        return done

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._pending is not None and not self._pending.done():
            self._pending.set_result(False)
        self._pending = None

    def _fire(self, args: tuple, done: asyncio.Future) -> None:
        self._handle = None
        self._pending = None
        try:
            result = self._callback(*args)
        except Exception as exc:
            done.set_exception(exc)
            return
        if not inspect.isawaitable(result):
            done.set_result(True)
            return
        task = asyncio.ensure_future(result)
        task.add_done_callback(lambda t: _settle(t, done))


def _settle(task: asyncio.Future, done: asyncio.Future) -> None:
    if done.done():
        return
    if task.cancelled():
        done.set_result(False)
    elif task.exception() is not None:
        done.set_exception(task.exception())
    else:
        done.set_result(True)


class FilterBar:
    """
    Turns filter-control edits into filter-change emissions.

    Attributes:
        shape: FilterState subclass whose defaults "clear" restores.
    """

    def __init__(
        self,
        emit: Emit,
        shape: type[FilterState] = FilterState,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        call_later: CallLater | None = None,
    ) -> None:
        """
        Args:
            emit: Receives a dict of changed filter fields (typically
                ``lambda changes: controller.update_filters(**changes)``).
            shape: Filter shape of the list this bar drives.
            quiet_period: Search debounce in seconds.
            call_later: Optional scheduler override (tests).
        """
        self.shape = shape
        self._emit = emit
        self._search = Debouncer(quiet_period, self._emit_search, call_later)

    @property
    def search_pending(self) -> bool:
        return self._search.pending

    def search_changed(self, value: str) -> asyncio.Future:
        """Debounced: emit {"search": value} after the quiet period."""
        return self._search.trigger(value)

    async def date_range_changed(
        self, start: datetime | None, end: datetime | None
    ) -> None:
        """Emit a new date range immediately."""
        await self._send({"start_date": start, "end_date": end})

    async def filter_changed(self, **fields: Any) -> None:
        """Emit discrete filter changes (dropdowns, sort) immediately."""
        await self._send(fields)

    async def clear(self) -> None:
        """Cancel any pending search and emit a full reset immediately."""
        self._search.cancel()
        await self._send(self.shape.reset_fields())

    async def _emit_search(self, value: str) -> None:
        await self._send({"search": value})

    async def _send(self, changes: dict[str, Any]) -> None:
        LOG.debug("filter change emitted: %s", changes)
        result = self._emit(changes)
        if inspect.isawaitable(result):
            await result
