"""
Environment-driven configuration for the Order Desk dashboard.

All settings are read once from the process environment and frozen into a
Settings instance. Call get_settings.cache_clear() in tests after patching
the environment.
"""

import functools
import os
from dataclasses import dataclass, field
from pathlib import Path

from order_desk.lib import paths

_TRUE_VALUES = {"1", "true", "yes"}


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Runtime configuration.

    Attributes:
        api_url: Base URL of the REST backend.
        service: Backend implementation kind ("http" or "demo").
        page_size: Default page size for list screens.
        search_debounce_ms: Quiet period before a search edit becomes a query.
        timeout: HTTP timeout in seconds.
        timezone: Named time zone used for rendered dates in exports.
        cache_dir: Directory for the on-disk token cache.
        app_port: Port the Reflex app listens on.
        generic_branding: Use neutral titles instead of the studio branding.
    """

    api_url: str = "http://localhost:8000/api"
    service: str = "http"
    page_size: int = 20
    search_debounce_ms: int = 300
    timeout: float = 30.0
    timezone: str = "Africa/Nairobi"
    cache_dir: Path = field(default_factory=paths.default_cache_dir)
    app_port: int = 8000
    generic_branding: bool = False

    @property
    def search_debounce(self) -> float:
        """Search quiet period in seconds."""
        return self.search_debounce_ms / 1000


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got {value!r}") from exc


@functools.cache
def get_settings() -> Settings:
    """Return the process-wide settings, read from the environment."""
    defaults = Settings()
    page_size = _env_int("ORDER_DESK_PAGE_SIZE", defaults.page_size)
    if page_size <= 0:
        raise ValueError(f"ORDER_DESK_PAGE_SIZE must be positive, got {page_size}")
    cache_dir = os.getenv("ORDER_DESK_CACHE_DIR")
    return Settings(
        api_url=os.getenv("ORDER_DESK_API_URL", defaults.api_url).rstrip("/"),
        service=os.getenv("ORDER_DESK_SERVICE", defaults.service).lower(),
        page_size=page_size,
        search_debounce_ms=_env_int(
            "ORDER_DESK_SEARCH_DEBOUNCE_MS", defaults.search_debounce_ms
        ),
        timeout=float(os.getenv("ORDER_DESK_TIMEOUT", defaults.timeout)),
        timezone=os.getenv("ORDER_DESK_TIMEZONE", defaults.timezone),
        cache_dir=Path(cache_dir) if cache_dir else defaults.cache_dir,
        app_port=_env_int("ORDER_DESK_APP_PORT", defaults.app_port),
        generic_branding=os.getenv("ORDER_DESK_GENERIC", "false").lower()
        in _TRUE_VALUES,
    )
