"""
Service factory for the Order Desk dashboard.

This module provides the get_service() factory function that returns the
appropriate OrderDeskService implementation based on configuration.

Available Implementations:
- demo: In-memory service with seeded data (no backend required)
- http: REST backend reached over httpx

The service is cached at the module level, so the same instance is reused
across all sessions. Configure via the ORDER_DESK_SERVICE environment
variable.
"""

from functools import cache
from typing import Callable, Dict

from order_desk.config import get_settings
from order_desk.lib import caches, logs
from order_desk.services.base import OrderDeskService
from order_desk.services.demo import DemoOrderDeskService
from order_desk.services.http_service import HttpOrderDeskService

LOG = logs.logger(__file__)


@cache
def get_token_cache() -> caches.TokenCache:
    """Return the process-wide session token cache."""
    return caches.TokenCache(get_settings().cache_dir)


_SERVICE_REGISTRY: Dict[str, Callable[[], OrderDeskService]] = {
    "demo": lambda: DemoOrderDeskService(latency=0.2),
    "http": lambda: HttpOrderDeskService(token_cache=get_token_cache()),
}


@cache
def get_service(kind: str | None = None) -> OrderDeskService:
    """Return the configured Order Desk service implementation."""
    resolved_kind = (kind or get_settings().service).lower()
    LOG.info("get_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "DemoOrderDeskService",
    "HttpOrderDeskService",
    "OrderDeskService",
    "get_service",
    "get_token_cache",
]
