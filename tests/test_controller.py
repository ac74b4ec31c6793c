"""Tests for PagedCollectionController ordering, paging and failure handling."""

import asyncio
from unittest.mock import MagicMock

import pytest

from order_desk.controller import PagedCollectionController
from order_desk.errors import FetchError, ValidationError
from order_desk.models.common import PageResult
from order_desk.models.filters import FilterState, OrderFilterState
from order_desk.services.demo import DemoOrderDeskService


def _pages(items, page_size):
    """Static fetch function serving `items` in pages."""
    calls = []

    async def fetch(filters):
        calls.append(filters)
        start = (filters.page - 1) * filters.page_size
        return PageResult.of(
            items[start : start + filters.page_size],
            total_count=len(items),
            page=filters.page,
            page_size=filters.page_size,
        )

    fetch.calls = calls
    return fetch


class TestInitialize:
    def test_first_page_loaded(self):
        fetch = _pages(list("abcde"), 2)
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        asyncio.run(controller.initialize())

        snapshot = controller.snapshot()
        assert snapshot.items == ["a", "b"]
        assert snapshot.total == 5
        assert snapshot.has_more is True
        assert snapshot.is_loading is False
        assert snapshot.error is None
        assert snapshot.generation == 1

    def test_second_call_is_ignored(self):
        fetch = _pages(list("abc"), 2)
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        async def scenario():
            await controller.initialize()
            await controller.initialize(FilterState(search="x", page_size=2))

        asyncio.run(scenario())
        assert len(fetch.calls) == 1
        assert controller.filters.search == ""

    def test_defaults_replace_initial_filters(self):
        fetch = _pages(list("abc"), 3)
        controller = PagedCollectionController(fetch)

        asyncio.run(controller.initialize(OrderFilterState(page_size=3, client_id="c1")))

        assert fetch.calls[0].client_id == "c1"
        assert fetch.calls[0].page == 1

    def test_default_filters_are_not_shared(self):
        first = PagedCollectionController(_pages([], 20))
        second = PagedCollectionController(_pages([], 20))
        assert first.filters == second.filters
        assert first.filters is not second.filters


class TestStaleResponses:
    def test_latest_filter_wins_when_older_response_arrives_last(self, manual_fetch, settle):
        controller = PagedCollectionController(manual_fetch, filters=FilterState(page_size=2))

        async def scenario():
            init = asyncio.create_task(controller.initialize())
            await settle()
            manual_fetch.respond(0, ["a", "b"], total=4)
            await init

            first = asyncio.create_task(controller.update_filters(search="x"))
            await settle()
            second = asyncio.create_task(controller.update_filters(search="xy"))
            await settle()

            # Newer request answers first, older one last
            manual_fetch.respond(2, ["xy-1"], total=1)
            await second
            manual_fetch.respond(1, ["x-1", "x-2"], total=2)
            await first

        asyncio.run(scenario())

        snapshot = controller.snapshot()
        assert snapshot.items == ["xy-1"]
        assert snapshot.total == 1
        assert snapshot.filters.search == "xy"
        assert snapshot.is_loading is False
        assert snapshot.error is None

    def test_stale_failure_is_not_reported(self, manual_fetch, settle):
        on_error = MagicMock()
        controller = PagedCollectionController(
            manual_fetch, filters=FilterState(page_size=2), on_error=on_error
        )

        async def scenario():
            init = asyncio.create_task(controller.initialize())
            await settle()
            newer = asyncio.create_task(controller.update_filters(search="b"))
            await settle()
            manual_fetch.respond(1, ["b"], total=1)
            await newer
            manual_fetch.fail(0, FetchError("late failure"))
            await init

        asyncio.run(scenario())

        assert controller.error is None
        assert controller.items == ["b"]
        on_error.assert_not_called()


class TestLoadMore:
    def test_pages_append_in_order(self):
        fetch = _pages(list("abcde"), 2)
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        async def scenario():
            await controller.initialize()
            await controller.load_more()
            await controller.load_more()

        asyncio.run(scenario())

        assert controller.items == list("abcde")
        assert controller.has_more is False
        assert controller.filters.page == 3
        assert [call.page for call in fetch.calls] == [1, 2, 3]

    def test_no_fetch_when_nothing_more(self):
        fetch = _pages(list("ab"), 2)
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        async def scenario():
            await controller.initialize()
            await controller.load_more()
            await controller.on_sentinel_visible()

        asyncio.run(scenario())

        assert controller.has_more is False
        assert len(fetch.calls) == 1

    def test_concurrent_load_more_fetches_once(self, manual_fetch, settle):
        controller = PagedCollectionController(manual_fetch, filters=FilterState(page_size=2))

        async def scenario():
            init = asyncio.create_task(controller.initialize())
            await settle()
            manual_fetch.respond(0, ["a", "b"], total=6)
            await init

            first = asyncio.create_task(controller.load_more())
            await settle()
            await controller.on_sentinel_visible()
            await controller.load_more()
            assert len(manual_fetch.calls) == 2
            assert controller.is_loading_more is True

            manual_fetch.respond(1, ["c", "d"], total=6)
            await first

        asyncio.run(scenario())

        assert controller.items == ["a", "b", "c", "d"]
        assert controller.filters.page == 2
        assert controller.is_loading_more is False

    def test_load_more_ignored_during_reset(self, manual_fetch, settle):
        controller = PagedCollectionController(manual_fetch, filters=FilterState(page_size=2))

        async def scenario():
            init = asyncio.create_task(controller.initialize())
            await settle()
            manual_fetch.respond(0, ["a", "b"], total=6)
            await init

            reset = asyncio.create_task(controller.update_filters(search="a"))
            await settle()
            await controller.load_more()
            assert len(manual_fetch.calls) == 2
            manual_fetch.respond(1, ["a"], total=1)
            await reset

        asyncio.run(scenario())
        assert controller.items == ["a"]

    def test_reset_discards_inflight_append(self, manual_fetch, settle):
        controller = PagedCollectionController(manual_fetch, filters=FilterState(page_size=2))

        async def scenario():
            init = asyncio.create_task(controller.initialize())
            await settle()
            manual_fetch.respond(0, ["a", "b"], total=6)
            await init

            append = asyncio.create_task(controller.load_more())
            await settle()
            assert controller.is_loading_more is True

            reset = asyncio.create_task(controller.update_filters(search="z"))
            await settle()
            assert controller.is_loading is True
            assert controller.is_loading_more is False

            manual_fetch.respond(1, ["c", "d"], total=6)
            await append
            assert controller.items == ["a", "b"]

            manual_fetch.respond(2, ["z"], total=1)
            await reset

        asyncio.run(scenario())

        assert controller.items == ["z"]
        assert controller.filters.page == 1
        assert controller.filters.search == "z"


class TestLoadingFlags:
    def test_flags_never_both_true(self, manual_fetch, settle):
        controller = PagedCollectionController(manual_fetch, filters=FilterState(page_size=1))
        seen = []

        def observe():
            seen.append((controller.is_loading, controller.is_loading_more))

        async def scenario():
            init = asyncio.create_task(controller.initialize())
            await settle()
            observe()
            manual_fetch.respond(0, ["a"], total=3)
            await init
            observe()

            append = asyncio.create_task(controller.load_more())
            await settle()
            observe()
            reset = asyncio.create_task(controller.refresh())
            await settle()
            observe()
            manual_fetch.respond(1, ["b"], total=3)
            await append
            observe()
            manual_fetch.respond(2, ["a"], total=3)
            await reset
            observe()

        asyncio.run(scenario())

        assert (True, True) not in seen
        assert seen[0] == (True, False)
        assert seen[2] == (False, True)
        assert seen[3] == (True, False)
        assert seen[-1] == (False, False)


class TestFailures:
    def test_failed_reset_keeps_items_and_reports_once(self, manual_fetch, settle):
        on_error = MagicMock()
        controller = PagedCollectionController(
            manual_fetch, filters=FilterState(page_size=2), on_error=on_error
        )

        async def scenario():
            init = asyncio.create_task(controller.initialize())
            await settle()
            manual_fetch.respond(0, ["a", "b"], total=2)
            await init

            update = asyncio.create_task(controller.update_filters(search="q"))
            await settle()
            manual_fetch.fail(1, FetchError("Server returned 500 for /orders", status_code=500))
            await update

        asyncio.run(scenario())

        assert controller.items == ["a", "b"]
        assert controller.is_loading is False
        assert controller.error == "Server returned 500 for /orders"
        on_error.assert_called_once()
        assert isinstance(on_error.call_args.args[0], FetchError)

    def test_unexpected_exception_gets_generic_message(self):
        async def broken(filters):
            raise RuntimeError("socket closed")

        controller = PagedCollectionController(broken)
        asyncio.run(controller.initialize())

        assert controller.items == []
        assert controller.error.startswith("Failed to load data")
        assert controller.is_loading is False

    def test_failed_append_keeps_cursor(self, manual_fetch, settle):
        controller = PagedCollectionController(manual_fetch, filters=FilterState(page_size=2))

        async def scenario():
            init = asyncio.create_task(controller.initialize())
            await settle()
            manual_fetch.respond(0, ["a", "b"], total=4)
            await init

            append = asyncio.create_task(controller.load_more())
            await settle()
            manual_fetch.fail(1, FetchError("timeout"))
            await append
            assert controller.filters.page == 1
            assert controller.is_loading_more is False

            retry = asyncio.create_task(controller.load_more())
            await settle()
            assert manual_fetch.calls[2][0].page == 2
            manual_fetch.respond(2, ["c", "d"], total=4)
            await retry

        asyncio.run(scenario())

        assert controller.items == ["a", "b", "c", "d"]
        assert controller.error is None

    def test_success_clears_error(self):
        responses = [FetchError("down"), None]

        async def flaky(filters):
            outcome = responses.pop(0)
            if outcome:
                raise outcome
            return PageResult.of(["a"], total_count=1, page=1, page_size=filters.page_size)

        controller = PagedCollectionController(flaky)

        async def scenario():
            await controller.initialize()
            assert controller.error == "down"
            await controller.refresh()

        asyncio.run(scenario())
        assert controller.error is None
        assert controller.items == ["a"]

    def test_broken_error_callback_is_contained(self):
        async def broken(filters):
            raise FetchError("down")

        controller = PagedCollectionController(broken, on_error=MagicMock(side_effect=RuntimeError))
        asyncio.run(controller.initialize())
        assert controller.error == "down"

    def test_clear_error(self):
        async def broken(filters):
            raise FetchError("down")

        controller = PagedCollectionController(broken)
        asyncio.run(controller.initialize())
        controller.clear_error()
        assert controller.snapshot().error is None


class TestUpdateFilters:
    def test_unknown_field_rejected_without_fetch(self):
        fetch = _pages([], 20)
        controller = PagedCollectionController(fetch)

        with pytest.raises(ValidationError):
            asyncio.run(controller.update_filters(client_id="c1"))
        assert fetch.calls == []

    def test_page_resets_to_one(self):
        fetch = _pages(list("abcdef"), 2)
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        async def scenario():
            await controller.initialize()
            await controller.load_more()
            await controller.update_filters(sort_by="name", sort_order="asc")

        asyncio.run(scenario())

        assert controller.filters.page == 1
        assert fetch.calls[-1].page == 1
        assert controller.items == ["a", "b"]

    def test_refresh_starts_new_generation(self):
        fetch = _pages(list("ab"), 2)
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        async def scenario():
            await controller.initialize()
            await controller.refresh()

        asyncio.run(scenario())
        assert controller.generation == 2
        assert len(fetch.calls) == 2


class TestAgainstDemoBackend:
    def test_three_pages_of_forty_five(self):
        service = DemoOrderDeskService(order_count=45)
        controller = PagedCollectionController(
            service.list_orders, filters=OrderFilterState(page_size=20)
        )

        async def scenario():
            await controller.initialize()
            assert controller.total == 45
            assert controller.has_more is True
            await controller.load_more()
            await controller.load_more()

        asyncio.run(scenario())

        assert controller.has_more is False
        assert len(controller.items) == 45
        assert len({order.id for order in controller.items}) == 45

    def test_failed_refresh_after_delete_keeps_previous_rows(self):
        service = DemoOrderDeskService(order_count=5)
        outage = MagicMock(return_value=False)

        async def fetch(filters):
            if outage():
                raise FetchError("Network error")
            return await service.list_orders(filters)

        controller = PagedCollectionController(fetch, filters=OrderFilterState(page_size=20))

        async def scenario():
            await controller.initialize()
            before = controller.items
            await service.delete_order(before[0].id)
            outage.return_value = True
            await controller.refresh()
            return before

        before = asyncio.run(scenario())

        assert controller.items == before
        assert controller.error == "Network error"
        assert controller.is_loading is False


def _labelled_pages(total=6):
    """Fetch function labelling rows by query and page; fails while `down` is set."""
    state = {"down": False}
    calls = []

    async def fetch(filters):
        calls.append((filters.search, filters.page))
        if state["down"]:
            raise FetchError("Network error")
        label = filters.search or "all"
        start = (filters.page - 1) * filters.page_size
        count = max(0, min(filters.page_size, total - start))
        return PageResult.of(
            [f"{label}-{filters.page}-{index}" for index in range(count)],
            total_count=total,
            page=filters.page,
            page_size=filters.page_size,
        )

    fetch.state = state
    fetch.calls = calls
    return fetch


class TestLoadMoreAfterFailedReset:
    def test_failed_refresh_continues_visible_sequence(self):
        fetch = _labelled_pages()
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        async def scenario():
            await controller.initialize()
            await controller.load_more()
            fetch.state["down"] = True
            await controller.refresh()
            fetch.state["down"] = False
            await controller.load_more()

        asyncio.run(scenario())

        assert [page for _, page in fetch.calls] == [1, 2, 1, 3]
        assert controller.items == ["all-1-0", "all-1-1", "all-2-0", "all-2-1", "all-3-0", "all-3-1"]
        assert len(set(controller.items)) == len(controller.items)
        assert controller.has_more is False
        assert controller.cursor.page == 3
        assert controller.error is None

    def test_failed_filter_change_does_not_mix_queries(self):
        fetch = _labelled_pages()
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        async def scenario():
            await controller.initialize()
            fetch.state["down"] = True
            await controller.update_filters(search="x")
            assert controller.error == "Network error"
            fetch.state["down"] = False
            await controller.load_more()

        asyncio.run(scenario())

        assert fetch.calls[-1] == ("", 2)
        assert controller.items == ["all-1-0", "all-1-1", "all-2-0", "all-2-1"]
        assert controller.cursor.search == ""
        # The requested query is kept for the next edit or retry
        assert controller.filters.search == "x"
        assert controller.filters.page == 1

    def test_next_edit_merges_from_requested_filters(self):
        fetch = _labelled_pages()
        controller = PagedCollectionController(fetch, filters=FilterState(page_size=2))

        async def scenario():
            await controller.initialize()
            fetch.state["down"] = True
            await controller.update_filters(search="x")
            fetch.state["down"] = False
            await controller.update_filters(sort_by="name")

        asyncio.run(scenario())

        assert fetch.calls[-1] == ("x", 1)
        assert controller.items == ["x-1-0", "x-1-1"]
        assert controller.cursor == controller.filters
        assert controller.filters.sort_by == "name"
