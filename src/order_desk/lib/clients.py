"""
HTTP client factory for the Order Desk REST backend.

Builds httpx.AsyncClient instances with the configured base URL, timeout
and bearer token. Clients are short-lived: create one per request batch
with ``async with``.
"""

import httpx

from order_desk import config


def api_client(
    token: str | None = None,
    base_url: str | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Return an httpx.AsyncClient for the backend API.

    Args:
        token: Optional bearer token added to the Authorization header.
        base_url: Override for the configured API URL.
        timeout: Override for the configured timeout in seconds.
        transport: Optional transport (tests pass httpx.MockTransport).

    Returns:
        Configured AsyncClient; the caller owns closing it.
    """
    settings = config.get_settings()
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=(base_url or settings.api_url).rstrip("/"),
        headers=headers,
        timeout=timeout or settings.timeout,
        transport=transport,
    )
