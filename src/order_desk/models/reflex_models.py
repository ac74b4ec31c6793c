"""
Reflex-compatible view models for the Order Desk screens.

State vars must be plain serializable values, so domain entities are
flattened into these dataclasses with money and dates already formatted
for display. They can be used with rx.foreach and other Reflex reactive
components.
"""

from dataclasses import dataclass

from order_desk.analytics import ClientEarning, TrendPoint
from order_desk.models.entities import Client, Genre, Order, OrderClass, Product
from order_desk.utils import format_currency, format_in_zone, format_money, round_money


@dataclass
class OptionModel:
    """Value/label pair for select inputs."""

    value: str = ""
    label: str = ""


@dataclass
class ClientModel:
    id: str = ""
    client_id: str = ""
    client_name: str = ""
    institution: str = ""
    phone: str = ""
    email: str = ""
    created: str = ""


@dataclass
class ProductModel:
    id: str = ""
    product_id: str = ""
    name: str = ""
    price: str = ""
    price_display: str = ""


@dataclass
class OrderModel:
    """One order row as shown in the orders list and the invoices preview."""

    id: str = ""
    order_id: str = ""
    client_name: str = ""
    product_name: str = ""
    order_class: str = ""
    week: str = ""
    genre: str = ""
    description: str = ""
    quantity: int = 0
    unit_price: str = ""
    total_cost: str = ""
    created: str = ""


def client_to_model(client: Client, tz_name: str) -> ClientModel:
    return ClientModel(
        id=client.id,
        client_id=client.client_id,
        client_name=client.client_name,
        institution=client.institution,
        phone=client.phone,
        email=client.email,
        created=format_in_zone(client.created_at, tz_name),
    )


def product_to_model(product: Product) -> ProductModel:
    return ProductModel(
        id=product.id,
        product_id=product.product_id,
        name=product.name,
        price=format_money(product.price_per_unit).replace(",", ""),
        price_display=format_currency(product.price_per_unit),
    )


def order_to_model(order: Order, tz_name: str) -> OrderModel:
    """
    Flatten an Order for display.

    Args:
        order: Order with its embedded client and product, when present.
        tz_name: Zone the creation date is rendered in.
    """
    return OrderModel(
        id=order.id,
        order_id=order.order_id,
        client_name=order.client.client_name if order.client else "N/A",
        product_name=order.product.name if order.product else "N/A",
        order_class=order.order_class,
        week=order.week,
        genre=order.genre,
        description=order.description,
        quantity=order.quantity,
        unit_price=format_currency(order.unit_price),
        total_cost=format_currency(order.total_cost),
        created=format_in_zone(order.created_at, tz_name),
    )


def client_options(clients: list[Client]) -> list[OptionModel]:
    return [OptionModel(value=client.id, label=client.client_name) for client in clients]


def product_options(products: list[Product]) -> list[OptionModel]:
    return [
        OptionModel(
            value=product.id,
            label=f"{product.name} ({format_currency(product.price_per_unit)})",
        )
        for product in products
    ]


def name_options(items: list[OrderClass] | list[Genre]) -> list[OptionModel]:
    return [OptionModel(value=item.name, label=item.name) for item in items]


@dataclass
class TrendModel:
    """One chart point; total stays numeric for the chart axis."""

    day: str = ""
    total: float = 0.0
    orders: int = 0


@dataclass
class ClientEarningModel:
    client_name: str = ""
    total: str = ""
    orders: int = 0


def trend_to_models(points: list[TrendPoint]) -> list[TrendModel]:
    return [
        TrendModel(day=point.day.strftime("%b %d"), total=float(round_money(point.total)), orders=point.orders)
        for point in points
    ]


def earnings_to_models(rows: list[ClientEarning]) -> list[ClientEarningModel]:
    return [
        ClientEarningModel(client_name=row.client_name, total=format_currency(row.total), orders=row.orders)
        for row in rows
    ]
