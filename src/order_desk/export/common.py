"""
Export contract shared by the PDF and spreadsheet renderers.

An ExportRequest is validated before any rendering happens. Renderers
receive finalized ExportRow values: money already rounded for display and
dates already rendered in the fixed audit time zone.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal, Sequence
from zoneinfo import ZoneInfo

from order_desk.errors import ValidationError
from order_desk.models.entities import Client, Order
from order_desk.utils import format_in_zone, format_money

ExportMode = Literal["invoice", "report"]
ExportFormat = Literal["pdf", "xlsx"]

COLUMNS = (
    "Client",
    "Class",
    "Product",
    "Week",
    "Description",
    "Units",
    "Unit Price",
    "Total",
)


@dataclass(frozen=True, slots=True)
class ExportRow:
    """One rendered order line."""

    client: str
    order_class: str
    product: str
    week: str
    description: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal

    @classmethod
    def from_order(cls, order: Order) -> "ExportRow":
        return cls(
            client=order.client.client_name if order.client else "N/A",
            order_class=order.order_class or "N/A",
            product=order.product.name if order.product else "N/A",
            week=order.week,
            description=order.description,
            quantity=order.quantity,
            unit_price=order.unit_price,
            line_total=order.total_cost,
        )

    def cells(self) -> list[str]:
        """Row as display strings, money at 2 decimal places."""
        return [
            self.client,
            self.order_class,
            self.product,
            self.week,
            self.description,
            str(self.quantity),
            format_money(self.unit_price),
            format_money(self.line_total),
        ]


@dataclass(frozen=True, slots=True)
class ExportRequest:
    """
    Everything needed to render one document.

    Attributes:
        orders: Finalized order rows, in display order.
        start_date: Start of the covered period.
        end_date: End of the covered period.
        mode: "invoice" (billed to one client) or "report".
        client: Billed client; required in invoice mode.
        title: Heading for report mode.
        tz_name: Named zone used for every rendered date.
        generated_at: Document timestamp; defaults to now.
    """

    orders: Sequence[Order]
    start_date: datetime | None
    end_date: datetime | None
    mode: ExportMode = "report"
    client: Client | None = None
    title: str = "Orders Report"
    tz_name: str = "Africa/Nairobi"
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def validate(self) -> None:
        """
        Raises:
            ValidationError: When there is nothing to export or invoice mode
                has no client.
        """
        if not self.orders:
            raise ValidationError("No data to export")
        if self.mode == "invoice" and self.client is None:
            raise ValidationError("Please select a client")
        if self.mode not in ("invoice", "report"):
            raise ValidationError(f"Unknown export mode: {self.mode}")

    @property
    def rows(self) -> list[ExportRow]:
        return [ExportRow.from_order(order) for order in self.orders]

    @property
    def total_amount(self) -> Decimal:
        """Sum of line totals, unrounded."""
        return sum((order.total_cost for order in self.orders), Decimal("0"))

    @property
    def heading(self) -> str:
        return "INVOICE" if self.mode == "invoice" else self.title

    @property
    def total_label(self) -> str:
        return "Total Amount:" if self.mode == "invoice" else "Total Revenue:"

    def render_date(self, moment: datetime | None) -> str:
        return format_in_zone(moment, self.tz_name)

    @property
    def period(self) -> str:
        return f"{self.render_date(self.start_date)} - {self.render_date(self.end_date)}"

    def filename(self, fmt: ExportFormat) -> str:
        """
        Return ``{EntityLabel}_{identifier}_{ISO-date}.{ext}``.

        Invoices are identified by the client id, reports by the covered
        period (``{start}_{end}``, open ends omitted, "all" when unbounded).
        All dates are calendar days in tz_name.
        """
        if self.mode == "invoice":
            label, identifier = "Invoice", self.client.id if self.client else "unknown"
        else:
            label = "Report"
            bounds = [self._day(moment) for moment in (self.start_date, self.end_date) if moment]
            identifier = "_".join(bounds) or "all"
        return f"{label}_{identifier}_{self._day(self.generated_at)}.{fmt}"

    def _day(self, moment: datetime) -> str:
        return moment.astimezone(ZoneInfo(self.tz_name)).date().isoformat()
