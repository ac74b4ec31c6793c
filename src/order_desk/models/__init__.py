"""
Data models for the Order Desk dashboard.

This package provides:
- Filter state shapes for each list screen
- Paging models (PageResult, AccumulatedList)
- Domain entities (Client, Product, Order, OrderClass, Genre) with wire mapping
- Reflex view models for rendering

All models use Python dataclasses.
"""

from order_desk.models.common import AccumulatedList, PageResult, total_pages_for
from order_desk.models.entities import Client, Genre, Order, OrderClass, Product
from order_desk.models.filters import (
    DEFAULT_PAGE_SIZE,
    ClientFilterState,
    FilterState,
    OrderFilterState,
    ProductFilterState,
    default_filters,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "AccumulatedList",
    "Client",
    "ClientFilterState",
    "FilterState",
    "Genre",
    "Order",
    "OrderClass",
    "OrderFilterState",
    "PageResult",
    "Product",
    "ProductFilterState",
    "default_filters",
    "total_pages_for",
]
