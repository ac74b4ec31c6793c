"""
Translation between FilterState and the backend's query parameters.

This is the only module that knows the wire names of the paging and
filter parameters. Empty values are omitted rather than sent blank.
"""

from datetime import datetime
from typing import Any

from order_desk.models.filters import FilterState

# FilterState attribute -> query parameter
_WIRE_NAMES = {
    "page": "page",
    "page_size": "page_size",
    "search": "search",
    "start_date": "start_date",
    "end_date": "end_date",
    "sort_by": "sort_by",
    "sort_order": "sort_order",
    "client_id": "client_id",
    "product_id": "product_id",
}


def _wire_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return value.strip()
    return value


def to_query_params(filters: FilterState) -> dict[str, Any]:
    """
    Return the GET query parameters for a filter state.

    Raises:
        KeyError: If the filter shape has a field with no wire mapping.
    """
    params: dict[str, Any] = {}
    for name in sorted(filters.field_names()):
        value = _wire_value(getattr(filters, name))
        if value is None or value == "":
            continue
        params[_WIRE_NAMES[name]] = value
    return params
