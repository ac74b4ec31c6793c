"""
Local support library for the Order Desk dashboard.

Modules:
    logs: Logging utilities
    paths: Path utilities
    clients: HTTP client factory for the REST backend
    caches: Disk-based session token cache
"""

from order_desk.lib import caches, clients, logs, paths

__all__ = ["caches", "clients", "logs", "paths"]
