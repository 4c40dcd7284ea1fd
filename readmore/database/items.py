"""
Content item storage for the readmore content store
"""

import re
from datetime import datetime
from typing import Any, Optional

from ..search.query import ItemStatus
from .connection import DatabaseConnection


def slugify(title: str) -> str:
    """Lowercase, hyphen-separated slug for a title"""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "item"


def save_item(
    connection: DatabaseConnection,
    title: str,
    content: str = "",
    status: ItemStatus = ItemStatus.PUBLISHED,
    published_at: Optional[datetime] = None,
    slug: Optional[str] = None,
) -> int:
    """Save a content item and return its id"""
    published_at = published_at or datetime.now()
    with connection.get_connection() as conn:
        cursor = conn.execute(
            """
            INSERT INTO items (title, content, status, slug, published_at)
            VALUES (?, ?, ?, ?, ?)
        """,
            (
                title,
                content,
                ItemStatus(status).value,
                slug or slugify(title),
                published_at.isoformat(sep=" ", timespec="seconds"),
            ),
        )
        conn.commit()
        return cursor.lastrowid


def get_item(connection: DatabaseConnection, item_id: int) -> Optional[dict[str, Any]]:
    """Get a content item by id, whatever its status"""
    with connection.get_connection() as conn:
        row = conn.execute("SELECT * FROM items WHERE id = ?", (item_id,)).fetchone()
        return dict(row) if row else None
