"""
Abstract base class defining the Order Desk data access contract.

List methods return one PageResult for a FilterState; the paged collection
controller uses them directly as its fetch function. Mutations return the
stored entity (or None for deletes) and never touch any list state:
callers refresh their controller afterwards.

Implementations:
- DemoOrderDeskService: In-memory data for development/testing
- HttpOrderDeskService: REST backend over httpx
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any

from order_desk.models.common import PageResult
from order_desk.models.entities import Client, Genre, Order, OrderClass, Product
from order_desk.models.filters import (
    ClientFilterState,
    OrderFilterState,
    ProductFilterState,
)


class OrderDeskService(ABC):
    """
    Abstract base class for Order Desk data access.

    All methods are coroutines; they raise FetchError on transport or
    server failures.
    """

    @abstractmethod
    async def list_clients(self, filters: ClientFilterState) -> PageResult[Client]:
        """Return one page of clients matching the filters."""

    @abstractmethod
    async def list_products(self, filters: ProductFilterState) -> PageResult[Product]:
        """Return one page of products matching the filters."""

    @abstractmethod
    async def list_orders(self, filters: OrderFilterState) -> PageResult[Order]:
        """Return one page of orders matching the filters."""

    @abstractmethod
    async def save_client(self, client: Client) -> Client:
        """Create the client when it has no id, update it otherwise."""

    @abstractmethod
    async def delete_client(self, client_id: str) -> None:
        """Delete a client by id."""

    @abstractmethod
    async def save_product(self, product: Product) -> Product:
        """Create the product when it has no id, update it otherwise."""

    @abstractmethod
    async def delete_product(self, product_id: str) -> None:
        """Delete a product by id."""

    @abstractmethod
    async def save_order(self, order: Order) -> Order:
        """Create the order when it has no id, update it otherwise."""

    @abstractmethod
    async def delete_order(self, order_id: str) -> None:
        """Delete an order by id."""

    @abstractmethod
    async def list_classes(self) -> list[OrderClass]:
        """Return every order class."""

    @abstractmethod
    async def add_class(self, name: str) -> OrderClass:
        """Create a new order class."""

    @abstractmethod
    async def list_genres(self) -> list[Genre]:
        """Return every genre."""

    @abstractmethod
    async def add_genre(self, name: str) -> Genre:
        """Create a new genre."""

    async def login(self, email: str, password: str) -> tuple[str, dict[str, Any]]:
        """
        Authenticate and return (access_token, user).

        Default implementation for backends without authentication.
        """
        return "", {"id": "local", "email": email, "name": email}

    async def all_clients(self, batch_size: int = 200) -> list[Client]:
        """Return every client (for pickers)."""
        return await self._collect(self.list_clients, ClientFilterState(page_size=batch_size))

    async def all_products(self, batch_size: int = 200) -> list[Product]:
        """Return every product (for pickers and price lookups)."""
        return await self._collect(self.list_products, ProductFilterState(page_size=batch_size))

    async def all_orders(self, filters: OrderFilterState, batch_size: int = 200) -> list[Order]:
        """
        Return every order matching the filters by walking all pages.

        Used for invoices and reports, which need the complete row set.
        """
        return await self._collect(self.list_orders, replace(filters, page=1, page_size=batch_size))

    @staticmethod
    async def _collect(list_page, filters):
        items = []
        current = filters
        while True:
            page = await list_page(current)
            items.extend(page.items)
            if not page.has_more or not page.items:
                return items
            current = current.next_page()
