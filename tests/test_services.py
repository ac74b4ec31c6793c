"""Tests for the HTTP and demo backends and the service factory."""

import asyncio
import json
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest

from order_desk.errors import FetchError
from order_desk.lib.caches import TokenCache
from order_desk.models.entities import Client, Order, Product
from order_desk.models.filters import ClientFilterState, OrderFilterState, ProductFilterState
from order_desk.services import DemoOrderDeskService, HttpOrderDeskService, get_service
from order_desk.services.base import OrderDeskService


def _service(handler, token_cache=None):
    return HttpOrderDeskService(
        base_url="http://backend.test/api",
        token_cache=token_cache,
        transport=httpx.MockTransport(handler),
    )


class TestHttpListing:
    def test_list_orders_sends_query_and_parses_page(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "data": [{"id": "1", "orderId": "ORD-1", "pagesOrSlides": 2, "totalCost": "25.00"}],
                    "total": 3,
                    "page": 1,
                    "page_size": 1,
                    "totalPages": 3,
                },
            )

        filters = OrderFilterState(search="essay", page_size=1, client_id="c1")
        page = asyncio.run(_service(handler).list_orders(filters))

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/orders"
        assert dict(request.url.params) == {
            "client_id": "c1",
            "page": "1",
            "page_size": "1",
            "search": "essay",
        }
        assert page.items[0].total_cost == Decimal("25.00")
        assert page.has_more

    def test_bearer_token_from_cache(self, tmp_path):
        cache = TokenCache(tmp_path / "tokens")
        cache.store("secret-token", {"id": "u1"})
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"data": [], "total": 0})

        asyncio.run(_service(handler, cache).list_clients(ClientFilterState()))
        assert seen[0].headers["Authorization"] == "Bearer secret-token"
        cache.close()

    def test_http_error_becomes_fetch_error(self):
        def handler(request):
            return httpx.Response(503, json={"message": "down"})

        with pytest.raises(FetchError) as excinfo:
            asyncio.run(_service(handler).list_products(ProductFilterState()))
        assert excinfo.value.status_code == 503
        assert "503" in str(excinfo.value)

    def test_transport_error_becomes_fetch_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(FetchError, match="Cannot reach the server"):
            asyncio.run(_service(handler).list_clients(ClientFilterState()))

    def test_malformed_page_becomes_fetch_error(self):
        def handler(request):
            return httpx.Response(200, json=[1, 2, 3])

        with pytest.raises(FetchError):
            asyncio.run(_service(handler).list_clients(ClientFilterState()))


class TestHttpMutations:
    def test_create_posts_and_update_puts(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path, json.loads(request.content)))
            body = json.loads(request.content)
            return httpx.Response(200, json={"data": {"id": "9", **body}})

        service = _service(handler)
        created = asyncio.run(service.save_client(Client(id="", client_name="Amina")))
        updated = asyncio.run(service.save_client(Client(id="9", client_name="Amina O.")))

        assert seen[0][:2] == ("POST", "/api/clients")
        assert seen[1][:2] == ("PUT", "/api/clients/9")
        assert seen[0][2]["clientName"] == "Amina"
        assert created.id == "9"
        assert updated.client_name == "Amina O."

    def test_empty_body_returns_submitted_entity(self):
        def handler(request):
            return httpx.Response(204)

        product = Product(id="p1", name="Essay", price_per_unit=Decimal("1.00"))
        assert asyncio.run(_service(handler).save_product(product)) is product

    def test_delete(self):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path))
            return httpx.Response(204)

        asyncio.run(_service(handler).delete_order("o1"))
        assert seen == [("DELETE", "/api/orders/o1")]

    def test_lookups_accept_envelopes(self):
        def handler(request):
            if request.method == "POST":
                return httpx.Response(201, json={"data": {"id": "3", "name": "Poetry"}})
            return httpx.Response(200, json={"data": [{"id": "1", "name": "Academic"}]})

        service = _service(handler)
        assert [g.name for g in asyncio.run(service.list_genres())] == ["Academic"]
        assert asyncio.run(service.add_genre("Poetry")).id == "3"

    def test_login(self):
        def handler(request):
            assert request.url.path == "/api/users/login"
            return httpx.Response(
                200, json={"success": True, "access_token": "t0k", "user": {"id": "u1", "name": "Admin"}}
            )

        token, user = asyncio.run(_service(handler).login("a@b.c", "pw"))
        assert token == "t0k"
        assert user["name"] == "Admin"

    def test_login_rejects_incomplete_response(self):
        def handler(request):
            return httpx.Response(200, json={"success": False})

        with pytest.raises(FetchError, match="Invalid login response"):
            asyncio.run(_service(handler).login("a@b.c", "pw"))


class TestDemoService:
    def test_paging_follows_total_pages_rule(self):
        service = DemoOrderDeskService(order_count=45)
        pages = [
            asyncio.run(service.list_orders(OrderFilterState(page=page, page_size=20)))
            for page in (1, 2, 3)
        ]
        assert [len(p.items) for p in pages] == [20, 20, 5]
        assert [p.has_more for p in pages] == [True, True, False]
        assert all(p.total_pages == 3 for p in pages)

    def test_filters_by_client_and_search(self):
        service = DemoOrderDeskService()
        page = asyncio.run(service.list_orders(OrderFilterState(client_id="2", page_size=100)))
        assert page.items
        assert all(order.client_id == "2" for order in page.items)

        page = asyncio.run(service.list_clients(ClientFilterState(search="kenyatta")))
        assert [c.client_name for c in page.items] == ["Cynthia Wanjiru"]

    def test_date_range(self):
        service = DemoOrderDeskService()
        filters = OrderFilterState(
            start_date=datetime(2025, 1, 6, tzinfo=timezone.utc),
            end_date=datetime(2025, 1, 6, 23, 59, tzinfo=timezone.utc),
        )
        page = asyncio.run(service.list_orders(filters))
        assert page.total_count == 3

    def test_sorting(self):
        service = DemoOrderDeskService()
        page = asyncio.run(service.list_products(ProductFilterState(sort_by="price_per_unit", sort_order="desc")))
        prices = [p.price_per_unit for p in page.items]
        assert prices == sorted(prices, reverse=True)

    def test_crud_round(self):
        service = DemoOrderDeskService(order_count=3)

        async def scenario():
            created = await service.save_order(Order(id="", client_id="1", product_id="2", quantity=2))
            assert created.id
            assert created.client.client_name == "Amina Otieno"
            await service.delete_order(created.id)
            with pytest.raises(FetchError):
                await service.delete_order(created.id)
            return await service.list_orders(OrderFilterState())

        assert asyncio.run(scenario()).total_count == 3

    def test_all_orders_walks_every_page(self):
        service = DemoOrderDeskService(order_count=45)
        orders = asyncio.run(service.all_orders(OrderFilterState(page=3), batch_size=10))
        assert len(orders) == 45
        assert len({order.id for order in orders}) == 45

    def test_all_clients_and_products(self):
        service = DemoOrderDeskService()
        assert len(asyncio.run(service.all_clients(batch_size=3))) == 8
        assert len(asyncio.run(service.all_products(batch_size=2))) == 5

    def test_default_login(self):
        token, user = asyncio.run(DemoOrderDeskService().login("me@example.com", "x"))
        assert token == ""
        assert user["email"] == "me@example.com"


class TestServiceFactory:
    def test_demo_kind(self):
        get_service.cache_clear()
        service = get_service("demo")
        assert isinstance(service, DemoOrderDeskService)
        assert isinstance(service, OrderDeskService)
        assert get_service("demo") is service

    def test_configured_kind(self, monkeypatch):
        get_service.cache_clear()
        monkeypatch.setenv("ORDER_DESK_SERVICE", "http")
        assert isinstance(get_service(), HttpOrderDeskService)
        get_service.cache_clear()

    def test_unknown_kind(self):
        get_service.cache_clear()
        with pytest.raises(ValueError, match="Unknown service kind"):
            get_service("ftp")
