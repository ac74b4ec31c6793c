"""
REST implementation of OrderDeskService over httpx.

Endpoints:
- GET    /{clients,products,orders}        paged listing
- POST   /{clients,products,orders}        create
- PUT    /{clients,products,orders}/{id}   update
- DELETE /{clients,products,orders}/{id}   delete
- GET/POST /meta/classes, /meta/genres     lookup lists
- POST   /users/login                      authentication

Every transport or HTTP error is converted to FetchError with a message
suitable for showing to the user.
"""

from typing import Any, Callable, Mapping, TypeVar

import httpx

from order_desk.errors import FetchError
from order_desk.lib import caches, clients, logs
from order_desk.models.common import PageResult
from order_desk.models.entities import Client, Genre, Order, OrderClass, Product
from order_desk.models.filters import (
    ClientFilterState,
    FilterState,
    OrderFilterState,
    ProductFilterState,
)
from order_desk.services.base import OrderDeskService
from order_desk.services.query import to_query_params

LOG = logs.logger(__file__)

E = TypeVar("E")


class HttpOrderDeskService(OrderDeskService):
    """
    Order Desk backend reached over HTTP.

    Attributes:
        base_url: Backend base URL, or None for the configured one.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token_cache: caches.TokenCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Override for ORDER_DESK_API_URL.
            token_cache: Session cache providing the bearer token.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self.base_url = base_url
        self._token_cache = token_cache
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        token = self._token_cache.token if self._token_cache else None
        return clients.api_client(
            token=token, base_url=self.base_url, transport=self._transport
        )

    async def _request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        async with self._client() as client:
            try:
                response = await client.request(method, path, params=params, json=json)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                LOG.warning("%s %s failed with status %s", method, path, status)
                raise FetchError(
                    f"Server returned {status} for {path}", status_code=status
                ) from exc
            except httpx.HTTPError as exc:
                LOG.warning("%s %s failed: %s", method, path, exc)
                raise FetchError(f"Cannot reach the server: {exc}") from exc
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON from {path}") from exc

    async def _list_page(
        self,
        path: str,
        filters: FilterState,
        parse_item: Callable[[Mapping[str, Any]], E],
    ) -> PageResult[E]:
        body = await self._request("GET", path, params=to_query_params(filters))
        return PageResult.from_wire(body, parse_item, requested=filters)

    async def _save(
        self,
        path: str,
        entity_id: str,
        payload: dict[str, Any],
        parse_item: Callable[[Mapping[str, Any]], E],
        fallback: E,
    ) -> E:
        if entity_id:
            body = await self._request("PUT", f"{path}/{entity_id}", json=payload)
        else:
            body = await self._request("POST", path, json=payload)
        return parse_item(_unwrap(body)) if body else fallback

    async def list_clients(self, filters: ClientFilterState) -> PageResult[Client]:
        return await self._list_page("/clients", filters, Client.from_wire)

    async def list_products(self, filters: ProductFilterState) -> PageResult[Product]:
        return await self._list_page("/products", filters, Product.from_wire)

    async def list_orders(self, filters: OrderFilterState) -> PageResult[Order]:
        return await self._list_page("/orders", filters, Order.from_wire)

    async def save_client(self, client: Client) -> Client:
        return await self._save(
            "/clients", client.id, client.to_wire(), Client.from_wire, client
        )

    async def delete_client(self, client_id: str) -> None:
        await self._request("DELETE", f"/clients/{client_id}")

    async def save_product(self, product: Product) -> Product:
        return await self._save(
            "/products", product.id, product.to_wire(), Product.from_wire, product
        )

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", f"/products/{product_id}")

    async def save_order(self, order: Order) -> Order:
        return await self._save(
            "/orders", order.id, order.to_wire(), Order.from_wire, order
        )

    async def delete_order(self, order_id: str) -> None:
        await self._request("DELETE", f"/orders/{order_id}")

    async def list_classes(self) -> list[OrderClass]:
        body = await self._request("GET", "/meta/classes")
        return [OrderClass.from_wire(item) for item in _as_list(body)]

    async def add_class(self, name: str) -> OrderClass:
        body = await self._request("POST", "/meta/classes", json={"name": name})
        return OrderClass.from_wire(_unwrap(body))

    async def list_genres(self) -> list[Genre]:
        body = await self._request("GET", "/meta/genres")
        return [Genre.from_wire(item) for item in _as_list(body)]

    async def add_genre(self, name: str) -> Genre:
        body = await self._request("POST", "/meta/genres", json={"name": name})
        return Genre.from_wire(_unwrap(body))

    async def login(self, email: str, password: str) -> tuple[str, dict[str, Any]]:
        body = await self._request(
            "POST", "/users/login", json={"email": email, "password": password}
        )
        body = body or {}
        token, user = body.get("access_token"), body.get("user")
        if not body.get("success", True) or not token or not isinstance(user, dict):
            raise FetchError("Invalid login response")
        return token, user


def _unwrap(body: Any) -> Mapping[str, Any]:
    """Accept either a bare entity or a ``{"data": entity}`` envelope."""
    if isinstance(body, Mapping) and isinstance(body.get("data"), Mapping):
        return body["data"]
    if isinstance(body, Mapping):
        return body
    raise FetchError("Malformed entity response from server")


def _as_list(body: Any) -> list[Mapping[str, Any]]:
    """Accept either a bare list or a ``{"data": [...]}`` envelope."""
    if isinstance(body, Mapping):
        body = body.get("data")
    return list(body) if isinstance(body, list) else []
