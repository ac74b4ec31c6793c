"""
Filesystem locations used by the Order Desk dashboard.
"""

import tempfile
from pathlib import Path

APP_DIR_NAME = "order_desk"


def default_cache_dir() -> Path:
    """Per-user cache location under the system temp directory."""
    return Path(tempfile.gettempdir()) / APP_DIR_NAME


def ensure_dir(path: str | Path) -> Path:
    """Create the directory (and parents) if missing and return it."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory
