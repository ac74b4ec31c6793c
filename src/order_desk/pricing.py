"""
Order pricing.

An order's total cost is always derived from the currently selected
product's unit price and the quantity; it is never carried over from an
earlier computation. compute_total_cost performs no rounding; round only
when displaying (see utils.format_currency).
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from order_desk.errors import ValidationError
from order_desk.models.entities import Order, Product
from order_desk.utils import to_decimal


def compute_total_cost(price_per_unit: Decimal | int | float | str, quantity: int) -> Decimal:
    """
    Return price_per_unit * quantity at full precision.

    Args:
        price_per_unit: Non-negative unit price.
        quantity: Positive whole number of units (pages, slides, questions).

    Raises:
        ValidationError: If the price is negative or the quantity is below 1.
    """
    price = to_decimal(price_per_unit)
    if price < 0:
        raise ValidationError(f"Unit price must not be negative, got {price}")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError(f"Quantity must be a whole number >= 1, got {quantity!r}")
    return price * quantity


@dataclass
class OrderDraft:
    """
    Editable order form values.

    The total is a property, so changing the product or the quantity can
    never leave a stale value behind.
    """

    client_id: str = ""
    product: Product | None = None
    quantity: int = 1
    order_id: str = ""
    order_class: str = ""
    week: str = ""
    genre: str = ""
    description: str = ""
    editing_id: str | None = field(default=None, compare=False)

    @classmethod
    def from_order(cls, order: Order, product: Product | None = None) -> "OrderDraft":
        """Start editing an existing order, preferring the catalog's current product."""
        return cls(
            client_id=order.client_id,
            product=product or order.product,
            quantity=order.quantity,
            order_id=order.order_id,
            order_class=order.order_class,
            week=order.week,
            genre=order.genre,
            description=order.description,
            editing_id=order.id,
        )

    @property
    def total_cost(self) -> Decimal:
        """Preview total; zero until a product is chosen."""
        if self.product is None or self.quantity < 1:
            return Decimal("0")
        return compute_total_cost(self.product.price_per_unit, self.quantity)

    def validate(self) -> None:
        """
        Check required fields before a save request is dispatched.

        Raises:
            ValidationError: On the first missing or invalid field.
        """
        if not self.client_id:
            raise ValidationError("Please select a client")
        if self.product is None:
            raise ValidationError("Please select a product")
        compute_total_cost(self.product.price_per_unit, self.quantity)

    def to_order(self) -> Order:
        """Return the Order to persist with a total recomputed right now."""
        self.validate()
        return Order(
            id=self.editing_id or "",
            order_id=self.order_id,
            client_id=self.client_id,
            product_id=self.product.id,
            order_class=self.order_class,
            week=self.week,
            genre=self.genre,
            description=self.description,
            quantity=self.quantity,
            total_cost=compute_total_cost(self.product.price_per_unit, self.quantity),
            product=self.product,
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the wire payload for create/update."""
        return self.to_order().to_wire()


def parse_price(value: str | Decimal | int | float | None) -> Decimal:
    """
    Parse a unit price typed into a form.

    Raises:
        ValidationError: If the value is empty, not a number, or negative.
    """
    text = str(value if value is not None else "").replace(",", "").strip()
    if not text:
        raise ValidationError("Price per unit is required")
    try:
        price = Decimal(text)
    except InvalidOperation as exc:
        raise ValidationError(f"Price per unit must be a number, got {text!r}") from exc
    if not price.is_finite() or price < 0:
        raise ValidationError(f"Unit price must not be negative, got {text}")
    return price


def parse_quantity(value: str | int | None) -> int:
    """
    Parse a quantity typed into a form.

    Raises:
        ValidationError: If the value is not a whole number >= 1.
    """
    try:
        quantity = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Quantity must be a whole number >= 1, got {value!r}") from exc
    if quantity < 1:
        raise ValidationError(f"Quantity must be a whole number >= 1, got {value!r}")
    return quantity
