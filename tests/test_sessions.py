"""Tests for per-tab list sessions and the view-model converters."""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

from order_desk.models.filters import ClientFilterState, OrderFilterState
from order_desk.models.reflex_models import (
    client_options,
    order_to_model,
    product_options,
    product_to_model,
)
from order_desk.services import DemoOrderDeskService
from order_desk.sessions import SessionRegistry, new_session


class TestNewSession:
    def test_shapes_and_defaults(self):
        session = new_session("orders", DemoOrderDeskService())
        assert session.kind == "orders"
        assert session.controller.filters == OrderFilterState(page_size=20)
        assert session.filter_bar.shape is OrderFilterState

    def test_filter_bar_drives_controller(self, clock):
        session = new_session("clients", DemoOrderDeskService(), page_size=3, quiet_period=0.3)
        session.filter_bar._search._call_later = clock.call_later

        async def scenario():
            await session.controller.initialize()
            assert session.controller.total == 8
            pending = session.filter_bar.search_changed("university of")
            clock.advance(0.3)
            assert await pending is True

        asyncio.run(scenario())

        assert session.controller.filters == ClientFilterState(search="university of", page_size=3)
        assert [c.client_name for c in session.controller.items] == ["Brian Kamau"]

    def test_clear_resets_to_defaults(self):
        session = new_session("orders", DemoOrderDeskService(), page_size=10)

        async def scenario():
            await session.controller.initialize()
            await session.filter_bar.filter_changed(client_id="3")
            await session.filter_bar.clear()

        asyncio.run(scenario())
        assert session.controller.filters == OrderFilterState(page_size=10)
        assert session.controller.total == 45

    def test_inverted_date_range_is_reported_not_raised(self):
        session = new_session("orders", DemoOrderDeskService(), page_size=10)
        start = datetime(2025, 3, 10, tzinfo=timezone.utc)
        end = datetime(2025, 3, 1, tzinfo=timezone.utc)

        async def scenario():
            await session.controller.initialize()
            before = session.controller.snapshot()
            message = await session.change_date_range(start, end)
            return before, message

        before, message = asyncio.run(scenario())

        assert message == "start_date must not be after end_date"
        after = session.controller.snapshot()
        assert after.filters == before.filters
        assert after.generation == before.generation
        assert after.is_loading is False
        assert after.items == before.items

    def test_valid_date_range_applies(self):
        session = new_session("orders", DemoOrderDeskService(), page_size=10)
        start = datetime(2025, 1, 6, tzinfo=timezone.utc)
        end = datetime(2025, 1, 6, 23, 59, tzinfo=timezone.utc)

        async def scenario():
            await session.controller.initialize()
            return await session.change_date_range(start, end)

        assert asyncio.run(scenario()) is None
        assert session.controller.filters.start_date == start
        assert session.controller.total == 3


class TestSessionRegistry:
    def test_one_session_per_tab_and_kind(self):
        registry = SessionRegistry()
        service = DemoOrderDeskService()

        orders, created = registry.get("tab-1", "orders", service)
        again, created_again = registry.get("tab-1", "orders", service)
        clients, _ = registry.get("tab-1", "clients", service)
        other, _ = registry.get("tab-2", "orders", service)

        assert created and not created_again
        assert again is orders
        assert clients is not orders
        assert other is not orders
        assert len(registry) == 3

    def test_drop(self):
        registry = SessionRegistry()
        service = DemoOrderDeskService()
        registry.get("tab-1", "orders", service)
        registry.get("tab-1", "clients", service)
        registry.get("tab-2", "orders", service)

        registry.drop("tab-1")

        assert len(registry) == 1
        assert registry.get("tab-1", "orders", service)[1] is True


class TestViewModels:
    def test_order_model(self, orders):
        model = order_to_model(orders[1], "Africa/Nairobi")
        assert model.client_name == "Amina Otieno"
        assert model.unit_price == "$12.50"
        assert model.total_cost == "$12.51"
        assert model.created == "N/A"

    def test_product_model_price_is_editable(self):
        from order_desk.models.entities import Product

        model = product_to_model(Product(id="p", name="Bulk", price_per_unit=Decimal("1234.5")))
        assert model.price == "1234.50"
        assert model.price_display == "$1,234.50"

    def test_options(self, client, product):
        assert client_options([client])[0].label == "Amina Otieno"
        assert product_options([product])[0].label == "Essay writing ($12.50)"
