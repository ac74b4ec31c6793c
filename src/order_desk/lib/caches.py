"""
Disk-based session cache for the access token and signed-in user.

Uses the diskcache library for thread-safe, process-safe storage with
automatic expiration. The cache is a convenience for restoring a session
across restarts, not a security boundary.
"""

from pathlib import Path
from typing import Any

import diskcache

from order_desk.lib import paths

_ACCESS_TOKEN_KEY = "access_token"
_USER_KEY = "user"
# Sessions that are not "remembered" expire after one working day
_SESSION_TTL = 12 * 60 * 60


class TokenCache:
    """
    Stores the API access token and the signed-in user on disk.

    Attributes:
        cache_dir: Path to the cache directory.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        """
        Initialize the token cache.

        Args:
            cache_dir: Directory path for storing cache files.
                       Created if it doesn't exist.
        """
        self.cache_dir = paths.ensure_dir(cache_dir)
        self._cache = diskcache.Cache(str(self.cache_dir))

    def store(self, token: str, user: dict[str, Any], remember: bool = False) -> None:
        """
        Persist a token and user record.

        Args:
            token: Bearer token returned by the login endpoint.
            user: User payload returned alongside the token.
            remember: Keep the session without expiry when True.
        """
        expire = None if remember else _SESSION_TTL
        self._cache.set(_ACCESS_TOKEN_KEY, token, expire=expire)
        self._cache.set(_USER_KEY, user, expire=expire)

    @property
    def token(self) -> str | None:
        """Return the cached access token, if any."""
        return self._cache.get(_ACCESS_TOKEN_KEY, default=None)

    @property
    def user(self) -> dict[str, Any] | None:
        """Return the cached user payload, if any."""
        return self._cache.get(_USER_KEY, default=None)

    def restore(self) -> tuple[str, dict[str, Any]] | None:
        """Return (token, user) when both are present, clearing partial state."""
        token, user = self.token, self.user
        if token and isinstance(user, dict):
            return token, user
        if token or user:
            self.clear()
        return None

    def clear(self) -> None:
        """Remove the cached session."""
        self._cache.delete(_ACCESS_TOKEN_KEY)
        self._cache.delete(_USER_KEY)

    def close(self) -> None:
        """Close the cache and release resources."""
        self._cache.close()
