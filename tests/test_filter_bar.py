"""Tests for the debounced filter bar."""

import asyncio
from datetime import datetime, timezone

from order_desk.controller import PagedCollectionController
from order_desk.filter_bar import Debouncer, FilterBar
from order_desk.models.common import PageResult
from order_desk.models.filters import OrderFilterState


class TestDebouncer:
    def test_fires_once_after_quiet_period(self, clock):
        calls = []

        async def scenario():
            debouncer = Debouncer(0.3, calls.append, call_later=clock.call_later)
            done = debouncer.trigger("x")
            assert debouncer.pending
            clock.advance(0.299)
            assert calls == []
            clock.advance(0.001)
            assert await done is True
            assert not debouncer.pending

        asyncio.run(scenario())
        assert calls == ["x"]

    def test_cancel_resolves_false(self, clock):
        calls = []

        async def scenario():
            debouncer = Debouncer(0.3, calls.append, call_later=clock.call_later)
            done = debouncer.trigger("x")
            debouncer.cancel()
            clock.advance(1)
            return await done

        assert asyncio.run(scenario()) is False
        assert calls == []

    def test_callback_error_propagates_to_future(self, clock):
        def boom(value):
            raise RuntimeError(value)

        async def scenario():
            debouncer = Debouncer(0.1, boom, call_later=clock.call_later)
            done = debouncer.trigger("bad")
            clock.advance(0.1)
            try:
                await done
            except RuntimeError as exc:
                return str(exc)
            return None

        assert asyncio.run(scenario()) == "bad"

    def test_uses_running_loop_by_default(self):
        calls = []

        async def scenario():
            debouncer = Debouncer(0.01, calls.append)
            return await debouncer.trigger("real")

        assert asyncio.run(scenario()) is True
        assert calls == ["real"]


class TestFilterBarSearch:
    def test_keystrokes_collapse_into_one_emission(self, clock):
        emitted = []

        async def scenario():
            bar = FilterBar(emitted.append, quiet_period=0.3, call_later=clock.call_later)
            first = bar.search_changed("a")  # t = 0 ms
            clock.advance(0.1)
            second = bar.search_changed("ab")  # t = 100 ms
            clock.advance(0.15)
            third = bar.search_changed("abc")  # t = 250 ms
            assert len(clock.live) == 1

            clock.advance(0.299)  # t = 549 ms
            assert emitted == []
            clock.advance(0.001)  # t = 550 ms
            results = [await first, await second, await third]
            return results

        assert asyncio.run(scenario()) == [False, False, True]
        assert emitted == [{"search": "abc"}]

    def test_clear_cancels_pending_search(self, clock):
        emitted = []

        async def scenario():
            bar = FilterBar(emitted.append, shape=OrderFilterState, call_later=clock.call_later)
            pending = bar.search_changed("late")
            await bar.clear()
            assert not bar.search_pending
            clock.advance(1)
            return await pending

        assert asyncio.run(scenario()) is False
        assert emitted == [
            {
                "search": "",
                "start_date": None,
                "end_date": None,
                "sort_by": None,
                "sort_order": None,
                "client_id": None,
                "product_id": None,
            }
        ]


class TestFilterBarImmediate:
    def test_date_range_emits_now(self, clock):
        emitted = []
        start = datetime(2025, 3, 1, tzinfo=timezone.utc)
        end = datetime(2025, 3, 31, tzinfo=timezone.utc)

        async def scenario():
            bar = FilterBar(emitted.append, call_later=clock.call_later)
            await bar.date_range_changed(start, end)

        asyncio.run(scenario())
        assert emitted == [{"start_date": start, "end_date": end}]
        assert clock.handles == []

    def test_filter_changed_awaits_async_emit(self):
        received = []

        async def emit(changes):
            await asyncio.sleep(0)
            received.append(changes)

        async def scenario():
            bar = FilterBar(emit)
            await bar.filter_changed(client_id="c1")

        asyncio.run(scenario())
        assert received == [{"client_id": "c1"}]


class TestClearRestoresDefaults:
    def test_clear_after_edits_returns_default_filters(self):
        async def fetch(filters):
            return PageResult.of([], total_count=0, page=filters.page, page_size=filters.page_size)

        controller = PagedCollectionController(fetch, filters=OrderFilterState(page_size=20))
        bar = FilterBar(lambda changes: controller.update_filters(**changes), shape=OrderFilterState)

        async def scenario():
            await controller.initialize()
            await bar.date_range_changed(
                datetime(2025, 1, 1, tzinfo=timezone.utc), datetime(2025, 1, 31, tzinfo=timezone.utc)
            )
            await bar.filter_changed(client_id="c1", product_id="p2", sort_by="week", sort_order="desc")
            await controller.update_filters(search="essay")
            assert controller.filters.has_active_filters
            await bar.clear()

        asyncio.run(scenario())

        assert controller.filters == OrderFilterState(page_size=20)
        assert not controller.filters.has_active_filters
