"""Configuration utilities for readmore."""

import os
from pathlib import Path
from typing import Optional

from ..exceptions import ConfigurationError
from .constants import DEFAULT_MARKER, DEFAULT_SITE_URL, READMORE_CONFIG_DIR


def get_db_path(override: Optional[str] = None) -> Path:
    """Get the content store path.

    An explicit override (the ``--db`` option) wins, then the READMORE_DB
    environment variable, then ``~/.config/readmore/content.db``.
    """
    if override:
        return Path(override)

    env_db = os.environ.get("READMORE_DB")
    if env_db:
        return Path(env_db)

    READMORE_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return READMORE_CONFIG_DIR / "content.db"


def get_marker() -> str:
    """Get the marker token the batch search filters content by."""
    marker = os.environ.get("READMORE_MARKER", DEFAULT_MARKER)
    if not marker.strip():
        raise ConfigurationError("Marker must not be empty", setting="READMORE_MARKER")
    return marker


def get_site_url() -> str:
    """Get the base URL used to build permalinks."""
    return os.environ.get("READMORE_SITE_URL", DEFAULT_SITE_URL).rstrip("/")
