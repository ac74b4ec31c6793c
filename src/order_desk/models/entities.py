"""
Domain entities and their wire mapping.

The backend speaks camelCase JSON; entities use snake_case attributes and
Decimal money. from_wire/to_wire are the only places that know the wire
names. The hierarchy is:

    Order
    ├── Client (optional, embedded by the backend)
    └── Product (optional, embedded by the backend)

Order.total_cost is whatever the server last stored; editing screens
derive a fresh value from the product and quantity with the pricing rule.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping

from order_desk.utils import parse_date, to_decimal


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    return "" if value is None else str(value)


@dataclass(slots=True)
class Client:
    """A customer that orders are placed for."""

    id: str
    client_id: str = ""
    client_name: str = ""
    institution: str = ""
    phone: str = ""
    email: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "Client":
        return cls(
            id=_text(payload, "id"),
            client_id=_text(payload, "clientId"),
            client_name=_text(payload, "clientName"),
            institution=_text(payload, "institution"),
            phone=_text(payload, "phone"),
            email=_text(payload, "email"),
            created_at=parse_date(payload.get("createdAt")),
            updated_at=parse_date(payload.get("updatedAt")),
        )

    def to_wire(self) -> dict[str, Any]:
        """Return the create/update payload."""
        return {
            "clientId": self.client_id,
            "clientName": self.client_name,
            "institution": self.institution,
            "phone": self.phone,
            "email": self.email,
        }

    def searchable_terms(self) -> list[str]:
        return [self.client_id, self.client_name, self.institution, self.email, self.phone]


@dataclass(slots=True)
class Product:
    """A billable product priced per unit (page, slide or question)."""

    id: str
    product_id: str = ""
    name: str = ""
    price_per_unit: Decimal = Decimal("0")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "Product":
        return cls(
            id=_text(payload, "id"),
            product_id=_text(payload, "productId"),
            name=_text(payload, "name"),
            price_per_unit=to_decimal(payload.get("pricePerUnit")),
            created_at=parse_date(payload.get("createdAt")),
            updated_at=parse_date(payload.get("updatedAt")),
        )

    def to_wire(self) -> dict[str, Any]:
        """Return the create/update payload."""
        return {
            "productId": self.product_id,
            "name": self.name,
            "pricePerUnit": float(self.price_per_unit),
        }

    def searchable_terms(self) -> list[str]:
        return [self.product_id, self.name]


@dataclass(slots=True)
class OrderClass:
    """A class (course group) an order belongs to."""

    id: str
    name: str

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "OrderClass":
        return cls(id=_text(payload, "id"), name=_text(payload, "name"))


@dataclass(slots=True)
class Genre:
    """A genre label for an order."""

    id: str
    name: str

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "Genre":
        return cls(id=_text(payload, "id"), name=_text(payload, "name"))


@dataclass(slots=True)
class Order:
    """An order line: a quantity of one product for one client."""

    id: str
    order_id: str = ""
    client_id: str = ""
    product_id: str = ""
    order_class: str = ""
    week: str = ""
    genre: str = ""
    description: str = ""
    quantity: int = 1
    total_cost: Decimal = Decimal("0")
    created_at: datetime | None = None
    updated_at: datetime | None = None
    client: Client | None = None
    product: Product | None = None

    @property
    def unit_price(self) -> Decimal:
        """Unit price of the embedded product, or zero when it is absent."""
        return self.product.price_per_unit if self.product else Decimal("0")

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "Order":
        order_class = payload.get("orderClass")
        if not order_class and isinstance(payload.get("class"), Mapping):
            order_class = payload["class"].get("name")
        client = payload.get("client")
        product = payload.get("product")
        return cls(
            id=_text(payload, "id"),
            order_id=_text(payload, "orderId"),
            client_id=_text(payload, "clientId"),
            product_id=_text(payload, "productId"),
            order_class=order_class or "",
            week=_text(payload, "week"),
            genre=_text(payload, "genre"),
            description=_text(payload, "description"),
            quantity=int(payload.get("pagesOrSlides") or 0),
            total_cost=to_decimal(payload.get("totalCost")),
            created_at=parse_date(payload.get("createdAt")),
            updated_at=parse_date(payload.get("updatedAt")),
            client=Client.from_wire(client) if isinstance(client, Mapping) else None,
            product=Product.from_wire(product) if isinstance(product, Mapping) else None,
        )

    def to_wire(self) -> dict[str, Any]:
        """Return the create/update payload."""
        return {
            "orderId": self.order_id,
            "clientId": self.client_id,
            "productId": self.product_id,
            "orderClass": self.order_class,
            "week": self.week,
            "genre": self.genre,
            "description": self.description,
            "pagesOrSlides": self.quantity,
            "totalCost": float(self.total_cost),
        }

    def searchable_terms(self) -> list[str]:
        terms = [self.order_id, self.order_class, self.week, self.genre, self.description]
        if self.client:
            terms.append(self.client.client_name)
        if self.product:
            terms.append(self.product.name)
        return terms

