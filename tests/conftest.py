"""Shared pytest fixtures for readmore tests."""

from collections.abc import Generator
from datetime import datetime
from pathlib import Path

import pytest
from fakes import BLOCK

from readmore.database import DatabaseConnection, SQLiteContentIndex, save_item
from readmore.search.query import ItemStatus


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """A fresh content store, also exported through READMORE_DB."""
    path = tmp_path / "content.db"
    monkeypatch.setenv("READMORE_DB", str(path))
    DatabaseConnection(path).ensure_schema()
    yield path


@pytest.fixture
def connection(db_path: Path) -> DatabaseConnection:
    return DatabaseConnection(db_path)


@pytest.fixture
def index(connection: DatabaseConnection) -> SQLiteContentIndex:
    return SQLiteContentIndex(connection, site_url="http://example.test")


@pytest.fixture
def sample_items(connection: DatabaseConnection) -> dict[str, int]:
    """A small store mixing marked, unmarked and draft items across dates."""
    rows = {
        "january_marked": ("Budget report", f"Intro {BLOCK} outro", ItemStatus.PUBLISHED, datetime(2024, 1, 10, 9, 0)),
        "january_edge": ("Edge of window", BLOCK, ItemStatus.PUBLISHED, datetime(2024, 1, 31, 23, 59)),
        "january_plain": ("Plain post", "No block here", ItemStatus.PUBLISHED, datetime(2024, 1, 15, 12, 0)),
        "january_draft": ("Draft with block", BLOCK, ItemStatus.DRAFT, datetime(2024, 1, 20, 8, 0)),
        "february_marked": ("February news", BLOCK, ItemStatus.PUBLISHED, datetime(2024, 2, 5, 10, 0)),
    }
    return {
        key: save_item(connection, title, content, status=status, published_at=published_at)
        for key, (title, content, status, published_at) in rows.items()
    }
