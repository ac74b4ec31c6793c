"""Shared fixtures for the Order Desk tests."""

import asyncio
from decimal import Decimal

import pytest

from order_desk.config import get_settings
from order_desk.models.common import PageResult
from order_desk.models.entities import Client, Order, Product


class FakeHandle:
    """Timer handle returned by FakeClock.call_later."""

    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeClock:
    """Deterministic stand-in for loop.call_later; time only moves on advance()."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    def advance(self, seconds):
        self.now = round(self.now + seconds, 6)
        due = [h for h in self.handles if not h.cancelled and round(h.when, 6) <= self.now]
        for handle in sorted(due, key=lambda h: h.when):
            self.handles.remove(handle)
            handle.callback(*handle.args)

    @property
    def live(self):
        return [h for h in self.handles if not h.cancelled]


class ManualFetch:
    """Fetch function whose responses are released by the test, in any order."""

    def __init__(self):
        self.calls = []

    async def __call__(self, filters):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((filters, future))
        return await future

    def respond(self, index, items, total, page=None, page_size=None):
        filters, future = self.calls[index]
        future.set_result(
            PageResult.of(
                items,
                total_count=total,
                page=page or filters.page,
                page_size=page_size or filters.page_size,
            )
        )

    def fail(self, index, exc):
        self.calls[index][1].set_exception(exc)


async def _settle():
    """Let every ready task run until it blocks again."""
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manual_fetch():
    return ManualFetch()


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch, tmp_path):
    """Every test starts from default settings with a private cache dir."""
    for key in (
        "ORDER_DESK_API_URL",
        "ORDER_DESK_SERVICE",
        "ORDER_DESK_PAGE_SIZE",
        "ORDER_DESK_SEARCH_DEBOUNCE_MS",
        "ORDER_DESK_TIMEOUT",
        "ORDER_DESK_TIMEZONE",
        "ORDER_DESK_APP_PORT",
        "ORDER_DESK_GENERIC",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ORDER_DESK_CACHE_DIR", str(tmp_path / "cache"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    return Client(
        id="c1",
        client_id="CL-001",
        client_name="Amina Otieno",
        institution="University of Nairobi",
        phone="+254700000001",
        email="amina@example.com",
    )


@pytest.fixture
def product():
    return Product(id="p1", product_id="PR-001", name="Essay writing", price_per_unit=Decimal("12.50"))


@pytest.fixture
def orders(client, product):
    return [
        Order(
            id="o1",
            order_id="ORD-1",
            client_id=client.id,
            product_id=product.id,
            order_class="BIO 101",
            week="3",
            genre="Essay",
            description="Cell structure essay",
            quantity=4,
            total_cost=Decimal("50.00"),
            client=client,
            product=product,
        ),
        Order(
            id="o2",
            order_id="ORD-2",
            client_id=client.id,
            product_id=product.id,
            order_class="BIO 101",
            week="4",
            genre="Essay",
            description="Genetics <intro> & review",
            quantity=1,
            total_cost=Decimal("12.505"),
            client=client,
            product=product,
        ),
    ]


@pytest.fixture
def settle():
    return _settle
