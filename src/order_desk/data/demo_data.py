"""
Seeded demo records for DemoOrderDeskService.

Records are generated deterministically so that tests and local demos see
the same data on every run.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from order_desk.models.entities import Client, Genre, Order, OrderClass, Product
from order_desk.pricing import compute_total_cost

_EPOCH = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)

_CLIENT_NAMES = [
    ("Amina Otieno", "Strathmore University"),
    ("Brian Kamau", "University of Nairobi"),
    ("Cynthia Wanjiru", "Kenyatta University"),
    ("David Mwangi", "JKUAT"),
    ("Esther Achieng", "Moi University"),
    ("Felix Kiprop", "Egerton University"),
    ("Grace Njeri", "USIU Africa"),
    ("Hassan Ali", "Technical University of Mombasa"),
]

_PRODUCTS = [
    ("Essay writing", "12.50"),
    ("Presentation slides", "8.00"),
    ("Quiz questions", "3.75"),
    ("Lab report", "15.00"),
    ("Proofreading", "4.20"),
]

CLASSES = ["BBA 201", "ECO 110", "CS 340", "NUR 215", "LAW 101"]
GENRES = ["Academic", "Business", "Technical", "Creative"]


def demo_clients() -> list[Client]:
    return [
        Client(
            id=str(index + 1),
            client_id=f"CL-{index + 1:03d}",
            client_name=name,
            institution=institution,
            phone=f"+2547{index:02d}000{index:03d}",
            email=f"{name.split()[0].lower()}@example.com",
            created_at=_EPOCH + timedelta(days=index),
            updated_at=_EPOCH + timedelta(days=index),
        )
        for index, (name, institution) in enumerate(_CLIENT_NAMES)
    ]


def demo_products() -> list[Product]:
    return [
        Product(
            id=str(index + 1),
            product_id=f"PR-{index + 1:03d}",
            name=name,
            price_per_unit=Decimal(price),
            created_at=_EPOCH,
            updated_at=_EPOCH,
        )
        for index, (name, price) in enumerate(_PRODUCTS)
    ]


def demo_classes() -> list[OrderClass]:
    return [OrderClass(id=str(i + 1), name=name) for i, name in enumerate(CLASSES)]


def demo_genres() -> list[Genre]:
    return [Genre(id=str(i + 1), name=name) for i, name in enumerate(GENRES)]


def demo_orders(
    clients: list[Client], products: list[Product], count: int = 45
) -> list[Order]:
    """Return `count` orders spread over clients, products and days."""
    orders = []
    for index in range(count):
        client = clients[index % len(clients)]
        product = products[index % len(products)]
        quantity = (index % 9) + 1
        created = _EPOCH + timedelta(days=index // 3, hours=index % 3)
        orders.append(
            Order(
                id=str(index + 1),
                order_id=f"ORD-{index + 1:04d}",
                client_id=client.id,
                product_id=product.id,
                order_class=CLASSES[index % len(CLASSES)],
                week=f"Week {(index // 5) % 14 + 1}",
                genre=GENRES[index % len(GENRES)],
                description=f"{product.name} for {client.institution}",
                quantity=quantity,
                total_cost=compute_total_cost(product.price_per_unit, quantity),
                created_at=created,
                updated_at=created,
                client=client,
                product=product,
            )
        )
    return orders
