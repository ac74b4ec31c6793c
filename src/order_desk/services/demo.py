"""
Demo implementation of OrderDeskService using in-memory data.

This service is useful for:
- Local development without a running backend
- Testing list screens with realistic data
- Demonstrating the dashboard without network dependencies

It applies the same search, date-range, equality and sort filters as the
real backend and paginates with the same total_pages rule.
"""

import asyncio
import itertools
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Sequence, TypeVar

from order_desk.data import demo_data
from order_desk.errors import FetchError
from order_desk.models.common import PageResult
from order_desk.models.entities import Client, Genre, Order, OrderClass, Product
from order_desk.models.filters import (
    ClientFilterState,
    FilterState,
    OrderFilterState,
    ProductFilterState,
)
from order_desk.services.base import OrderDeskService
from order_desk.utils import matches_query

E = TypeVar("E", Client, Product, Order)


class DemoOrderDeskService(OrderDeskService):
    """
    In-memory Order Desk backend seeded with demo records.

    Attributes:
        latency: Simulated network delay in seconds for every call.
    """

    def __init__(self, order_count: int = 45, latency: float = 0.0) -> None:
        """
        Args:
            order_count: Number of seeded orders.
            latency: Simulated delay per call, to make loading states visible.
        """
        self.latency = latency
        self._clients = demo_data.demo_clients()
        self._products = demo_data.demo_products()
        self._orders = demo_data.demo_orders(self._clients, self._products, order_count)
        self._classes = demo_data.demo_classes()
        self._genres = demo_data.demo_genres()
        self._ids = itertools.count(1000)

    async def list_clients(self, filters: ClientFilterState) -> PageResult[Client]:
        return await self._page(self._clients, filters)

    async def list_products(self, filters: ProductFilterState) -> PageResult[Product]:
        return await self._page(self._products, filters)

    async def list_orders(self, filters: OrderFilterState) -> PageResult[Order]:
        orders = [
            order
            for order in self._orders
            if (not filters.client_id or order.client_id == filters.client_id)
            and (not filters.product_id or order.product_id == filters.product_id)
        ]
        return await self._page(orders, filters)

    async def save_client(self, client: Client) -> Client:
        await self._pause()
        return self._upsert(self._clients, client)

    async def delete_client(self, client_id: str) -> None:
        await self._pause()
        self._clients = self._remove(self._clients, client_id)

    async def save_product(self, product: Product) -> Product:
        await self._pause()
        return self._upsert(self._products, product)

    async def delete_product(self, product_id: str) -> None:
        await self._pause()
        self._products = self._remove(self._products, product_id)

    async def save_order(self, order: Order) -> Order:
        await self._pause()
        client = self._find(self._clients, order.client_id)
        product = self._find(self._products, order.product_id)
        return self._upsert(self._orders, replace(order, client=client, product=product))

    async def delete_order(self, order_id: str) -> None:
        await self._pause()
        self._orders = self._remove(self._orders, order_id)

    async def list_classes(self) -> list[OrderClass]:
        await self._pause()
        return list(self._classes)

    async def add_class(self, name: str) -> OrderClass:
        await self._pause()
        created = OrderClass(id=str(next(self._ids)), name=name.strip())
        self._classes.append(created)
        return created

    async def list_genres(self) -> list[Genre]:
        await self._pause()
        return list(self._genres)

    async def add_genre(self, name: str) -> Genre:
        await self._pause()
        created = Genre(id=str(next(self._ids)), name=name.strip())
        self._genres.append(created)
        return created

    async def _pause(self) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)

    async def _page(self, records: Sequence[E], filters: FilterState) -> PageResult[E]:
        await self._pause()
        matched = [record for record in records if _matches(record, filters)]
        if filters.sort_by:
            matched.sort(
                key=_sort_key(filters.sort_by),
                reverse=filters.sort_order == "desc",
            )
        start = (filters.page - 1) * filters.page_size
        return PageResult.of(
            matched[start : start + filters.page_size],
            total_count=len(matched),
            page=filters.page,
            page_size=filters.page_size,
        )

    def _upsert(self, records: list[E], record: E) -> E:
        now = datetime.now(timezone.utc)
        if not record.id:
            stored = replace(record, id=str(next(self._ids)), created_at=now, updated_at=now)
            records.insert(0, stored)
            return stored
        for index, existing in enumerate(records):
            if existing.id == record.id:
                stored = replace(record, created_at=existing.created_at, updated_at=now)
                records[index] = stored
                return stored
        raise FetchError(f"Record {record.id} not found", status_code=404)

    @staticmethod
    def _remove(records: list[E], record_id: str) -> list[E]:
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            raise FetchError(f"Record {record_id} not found", status_code=404)
        return remaining

    @staticmethod
    def _find(records: Sequence[E], record_id: str) -> E | None:
        return next((record for record in records if record.id == record_id), None)


def _matches(record: Client | Product | Order, filters: FilterState) -> bool:
    if not matches_query(record.searchable_terms(), filters.search):
        return False
    created = record.created_at
    if filters.start_date and (created is None or created < _aware(filters.start_date)):
        return False
    return not (filters.end_date and (created is None or created > _aware(filters.end_date)))


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def _sort_key(field: str) -> Callable[[object], tuple]:
    def key(record: object) -> tuple:
        value = getattr(record, field, None)
        # Missing values group together instead of failing to compare
        return (value is None, value if value is not None else 0)

    return key
