"""
Logging utilities for the Order Desk dashboard.

Provides a logger factory that creates configured Python loggers with
consistent formatting across the application.
"""

import logging
import os
from pathlib import Path

# Default log level from environment or INFO
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    If name is a file path (e.g., __file__), the module name is namespaced
    under ``order_desk`` so that all application loggers share one parent.

    Args:
        name: Logger name or __file__ path.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = f"order_desk.{Path(name).stem}"

    log = logging.getLogger(name)
    _configure_root()
    return log


def _configure_root() -> None:
    """Attach a single stream handler to the package logger."""
    root = logging.getLogger("order_desk")
    if root.handlers:
        return
    root.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
