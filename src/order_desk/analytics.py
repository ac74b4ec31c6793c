"""
Dashboard analytics computed from order rows.

Everything here is a pure function of a list of orders and a reference
moment, so the dashboard works the same against the HTTP and the demo
backends. Days are bucketed in the configured display zone.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Iterable, Literal
from zoneinfo import ZoneInfo

from order_desk.models.entities import Order

ComparisonPeriod = Literal["week", "month", "quarter", "year"]
COMPARISON_PERIODS: tuple[ComparisonPeriod, ...] = ("week", "month", "quarter", "year")

_ZERO = Decimal("0")


@dataclass(frozen=True, slots=True)
class PeriodWindow:
    """Current period (start up to now) and the whole previous period."""

    current_start: datetime
    current_end: datetime
    previous_start: datetime
    previous_end: datetime


@dataclass(frozen=True, slots=True)
class EarningsComparison:
    period: ComparisonPeriod
    current_total: Decimal
    previous_total: Decimal
    current_orders: int
    previous_orders: int

    @property
    def change_percent(self) -> Decimal | None:
        """Percentage change against the previous period; None when it had no revenue."""
        if self.previous_total == 0:
            return _ZERO if self.current_total == 0 else None
        return (self.current_total - self.previous_total) / self.previous_total * 100


@dataclass(frozen=True, slots=True)
class TrendPoint:
    day: date
    total: Decimal
    orders: int


@dataclass(frozen=True, slots=True)
class ClientEarning:
    client_id: str
    client_name: str
    total: Decimal
    orders: int


def _period_start(period: ComparisonPeriod, day: date) -> date:
    if period == "week":
        return day - timedelta(days=day.weekday())
    if period == "month":
        return day.replace(day=1)
    if period == "quarter":
        return day.replace(month=(day.month - 1) // 3 * 3 + 1, day=1)
    if period == "year":
        return day.replace(month=1, day=1)
    raise ValueError(f"Unknown comparison period: {period}")


def _previous_start(period: ComparisonPeriod, start: date) -> date:
    if period == "week":
        return start - timedelta(days=7)
    if period == "year":
        return start.replace(year=start.year - 1)
    months = 1 if period == "month" else 3
    month_index = start.year * 12 + start.month - 1 - months
    return date(month_index // 12, month_index % 12 + 1, 1)


def period_window(period: ComparisonPeriod, now: datetime) -> PeriodWindow:
    """
    Return the comparison window for a period containing `now`.

    Weeks start on Monday, quarters on Jan/Apr/Jul/Oct. Bounds carry the
    tzinfo of `now`.

    Raises:
        ValueError: If the period is unknown.
    """
    start = _period_start(period, now.date())
    previous = _previous_start(period, start)
    zone = now.tzinfo
    current_start = datetime.combine(start, time.min, tzinfo=zone)
    return PeriodWindow(
        current_start=current_start,
        current_end=now,
        previous_start=datetime.combine(previous, time.min, tzinfo=zone),
        previous_end=current_start - timedelta(microseconds=1),
    )


def _created(order: Order) -> datetime | None:
    moment = order.created_at
    if moment is None:
        return None
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def orders_between(orders: Iterable[Order], start: datetime, end: datetime) -> list[Order]:
    """Orders created within [start, end]; naive timestamps are read as UTC."""
    return [
        order
        for order in orders
        if (created := _created(order)) is not None and start <= created <= end
    ]


def earnings_comparison(
    orders: Iterable[Order], period: ComparisonPeriod, now: datetime
) -> EarningsComparison:
    """Compare revenue so far in the current period with the whole previous one."""
    orders = list(orders)
    window = period_window(period, now)
    current = orders_between(orders, window.current_start, window.current_end)
    previous = orders_between(orders, window.previous_start, window.previous_end)
    return EarningsComparison(
        period=period,
        current_total=sum((o.total_cost for o in current), _ZERO),
        previous_total=sum((o.total_cost for o in previous), _ZERO),
        current_orders=len(current),
        previous_orders=len(previous),
    )


def revenue_trend(
    orders: Iterable[Order], start: date, end: date, tz_name: str
) -> list[TrendPoint]:
    """
    Daily revenue between two dates inclusive, with empty days filled with zero.

    Orders are assigned to the calendar day they were created on in tz_name.
    """
    zone = ZoneInfo(tz_name)
    totals: dict[date, Decimal] = defaultdict(lambda: _ZERO)
    counts: dict[date, int] = defaultdict(int)
    for order in orders:
        created = _created(order)
        if created is None:
            continue
        day = created.astimezone(zone).date()
        totals[day] += order.total_cost
        counts[day] += 1
    days = (end - start).days + 1
    return [
        TrendPoint(day=day, total=totals[day], orders=counts[day])
        for day in (start + timedelta(days=offset) for offset in range(max(days, 0)))
    ]


def client_earnings(orders: Iterable[Order], limit: int = 5) -> list[ClientEarning]:
    """Clients ranked by revenue, highest first (ties by name)."""
    totals: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    counts: dict[str, int] = defaultdict(int)
    names: dict[str, str] = {}
    for order in orders:
        totals[order.client_id] += order.total_cost
        counts[order.client_id] += 1
        if order.client:
            names[order.client_id] = order.client.client_name
    ranked = sorted(totals, key=lambda cid: (-totals[cid], names.get(cid, cid)))
    return [
        ClientEarning(
            client_id=cid,
            client_name=names.get(cid, "N/A"),
            total=totals[cid],
            orders=counts[cid],
        )
        for cid in ranked[:limit]
    ]
