"""
SQLite-backed content index
"""

import logging
import math
import sqlite3
from typing import Any, Optional

from ..config.constants import MAX_ITEM_ID
from ..config.settings import get_site_url
from ..exceptions import ContentIndexQueryError, ContentIndexUnavailableError
from ..search.query import ContentItemSummary, ItemField, QuerySpec, SearchResultPage
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SEARCHABLE_COLUMNS = ("title", "content")


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally"""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLiteContentIndex:
    """ContentIndex over the local ``items`` table.

    Term searches are case-insensitive substring matches on the requested
    columns. Keyword searches list title matches first, then newest first;
    marker searches are newest first.
    """

    def __init__(self, connection: DatabaseConnection, site_url: Optional[str] = None):
        self.connection = connection
        self.site_url = (site_url or get_site_url()).rstrip("/")

    def permalink(self, slug: str, item_id: int) -> str:
        if slug:
            return f"{self.site_url}/{slug}/"
        return f"{self.site_url}/?p={item_id}"

    def query(self, spec: QuerySpec) -> SearchResultPage:
        """Execute a QuerySpec and return one page of summaries"""
        try:
            with self.connection.get_connection() as conn:
                if spec.is_identifier_lookup:
                    return self._lookup(conn, spec)
                return self._search(conn, spec)
        except sqlite3.OperationalError as e:
            if "unable to open" in str(e):
                raise ContentIndexUnavailableError(
                    "Content store could not be opened", path=str(self.connection.db_path)
                ) from e
            raise ContentIndexQueryError(f"Search failed: {e}") from e
        except (sqlite3.Error, OverflowError) as e:
            raise ContentIndexQueryError(f"Search failed: {e}") from e

    def _lookup(self, conn: sqlite3.Connection, spec: QuerySpec) -> SearchResultPage:
        if not 0 < spec.item_id <= MAX_ITEM_ID:
            return SearchResultPage(items=(), total_pages=0)
        row = conn.execute(
            "SELECT id, title, slug FROM items WHERE id = ? AND status = ?",
            (spec.item_id, spec.status.value),
        ).fetchone()
        if row is None:
            return SearchResultPage(items=(), total_pages=0)
        return SearchResultPage(items=(self._summary(row, spec),), total_pages=1)

    def _search(self, conn: sqlite3.Connection, spec: QuerySpec) -> SearchResultPage:
        columns = [c for c in SEARCHABLE_COLUMNS if c in spec.search_columns]
        if not columns:
            raise ContentIndexQueryError("No searchable columns requested", columns=sorted(spec.search_columns))

        pattern = f"%{_escape_like(spec.search)}%"
        where = ["status = ?"]
        params: list[Any] = [spec.status.value]

        where.append("(" + " OR ".join(f"{c} LIKE ? ESCAPE '\\'" for c in columns) + ")")
        params.extend([pattern] * len(columns))

        if spec.date_window is not None:
            where.append("date(published_at) >= ? AND date(published_at) <= ?")
            params.extend([spec.date_window.after.isoformat(), spec.date_window.before.isoformat()])

        where_sql = " AND ".join(where)
        total = conn.execute(f"SELECT COUNT(*) FROM items WHERE {where_sql}", params).fetchone()[0]

        order_params: list[Any] = []
        if "title" in columns:
            order_sql = "ORDER BY (title LIKE ? ESCAPE '\\') DESC, published_at DESC, id DESC"
            order_params.append(pattern)
        else:
            order_sql = "ORDER BY published_at DESC, id DESC"

        sql = f"SELECT id, title, slug FROM items WHERE {where_sql} {order_sql}"
        if spec.is_unbounded:
            rows = conn.execute(sql, params + order_params).fetchall()
            total_pages = 1 if total else 0
        else:
            offset = (spec.page - 1) * spec.page_size
            rows = conn.execute(
                f"{sql} LIMIT ? OFFSET ?", params + order_params + [spec.page_size, offset]
            ).fetchall()
            total_pages = math.ceil(total / spec.page_size)

        logger.debug("Index matched %d item(s), returning %d", total, len(rows))
        return SearchResultPage(
            items=tuple(self._summary(row, spec) for row in rows),
            total_pages=total_pages,
        )

    def _summary(self, row: sqlite3.Row, spec: QuerySpec) -> ContentItemSummary:
        return ContentItemSummary(
            id=row["id"],
            title=row["title"] if ItemField.TITLE in spec.fields else "",
            permalink=self.permalink(row["slug"], row["id"]) if ItemField.PERMALINK in spec.fields else "",
        )
