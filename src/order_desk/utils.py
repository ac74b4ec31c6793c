"""
Utility functions for order data manipulation and formatting.

Provides helpers for:
- Date parsing (multiple formats supported)
- Currency formatting (2 decimal places, display-time rounding only)
- Rendering timestamps in a fixed named time zone
- Date-range presets used by the invoices screen
- Search query matching for the in-memory demo backend
"""

from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Literal
from zoneinfo import ZoneInfo

DatePreset = Literal[
    "today", "yesterday", "this_week", "last_week", "this_month", "last_month"
]
DATE_PRESETS: tuple[DatePreset, ...] = (
    "today",
    "yesterday",
    "this_week",
    "last_week",
    "this_month",
    "last_month",
)

_CENTS = Decimal("0.01")


def parse_date(date_str: str | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp or an m/d/y date into a datetime.

    Args:
        date_str: Date string such as "2024-12-25T08:00:00Z" or "12/25/2024".

    Returns:
        datetime object if parsing succeeds, None otherwise.
    """
    if date_str:
        date_str = date_str.strip()
    if not date_str:
        return None

    # ISO first: this is what the backend sends
    try:
        return datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%m/%d/%y"):
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue

    return None


def to_decimal(value: object) -> Decimal:
    """Convert a wire number (int, float or string) to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def round_money(value: Decimal | float | int) -> Decimal:
    """Round a monetary amount to cents, half up."""
    return to_decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Decimal | float | int) -> str:
    """Format an amount with exactly 2 decimal places and thousands separators."""
    return f"{round_money(value):,.2f}"


def format_currency(value: Decimal | float | int, symbol: str = "$") -> str:
    """
    Format a currency amount with the currency symbol prefix.

    Args:
        value: Numeric amount to format.
        symbol: Currency symbol or code.

    Returns:
        Formatted string like '$1,234.56'.
    """
    amount = round_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_in_zone(moment: datetime | str | None, tz_name: str) -> str:
    """
    Render a timestamp as a date in the named time zone, e.g. 'Mar 05, 2025'.

    Naive datetimes are treated as UTC, matching what the backend emits.
    """
    if isinstance(moment, str):
        moment = parse_date(moment)
    if moment is None:
        return "N/A"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(ZoneInfo(tz_name)).strftime("%b %d, %Y")


def preset_range(preset: DatePreset, now: datetime) -> tuple[datetime, datetime]:
    """
    Return the (start, end) datetimes covered by a named preset.

    Weeks start on Monday. End bounds are the last microsecond of the day.

    Args:
        preset: One of DATE_PRESETS.
        now: Reference moment; its tzinfo is carried onto the result.

    Raises:
        ValueError: If the preset is unknown.
    """
    today = now.date()
    if preset == "today":
        return _day_bounds(today, today, now)
    if preset == "yesterday":
        yesterday = today - timedelta(days=1)
        return _day_bounds(yesterday, yesterday, now)
    if preset in ("this_week", "last_week"):
        monday = today - timedelta(days=today.weekday())
        if preset == "last_week":
            monday -= timedelta(days=7)
        return _day_bounds(monday, monday + timedelta(days=6), now)
    if preset in ("this_month", "last_month"):
        first = today.replace(day=1)
        if preset == "last_month":
            first = (first - timedelta(days=1)).replace(day=1)
        next_first = (first + timedelta(days=32)).replace(day=1)
        return _day_bounds(first, next_first - timedelta(days=1), now)
    raise ValueError(f"Unknown date preset: {preset}")


def _day_bounds(start: date, end: date, now: datetime) -> tuple[datetime, datetime]:
    return (
        datetime.combine(start, time.min, tzinfo=now.tzinfo),
        datetime.combine(end, time.max, tzinfo=now.tzinfo),
    )


def matches_query(terms: Iterable[str | None], query: str | None) -> bool:
    """
    Case-insensitive substring match of the query against any term.

    Returns True when the query is empty.
    """
    normalized = (query or "").strip().lower()
    if not normalized:
        return True
    return any(normalized in term.lower() for term in terms if term)


def input_range(
    start: str | None, end: str | None, tz_name: str
) -> tuple[datetime | None, datetime | None]:
    """
    Turn date-picker values ("YYYY-MM-DD") into whole-day bounds in a zone.

    Empty or unparseable values give None for that side.
    """
    zone = ZoneInfo(tz_name)
    start_day = parse_date(start)
    end_day = parse_date(end)
    return (
        datetime.combine(start_day.date(), time.min, tzinfo=zone) if start_day else None,
        datetime.combine(end_day.date(), time.max, tzinfo=zone) if end_day else None,
    )
