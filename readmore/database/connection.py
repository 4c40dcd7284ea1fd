"""
Database connection management for the readmore content store
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from ..config.settings import get_db_path


class DatabaseConnection:
    """SQLite connection manager for the content store"""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self.db_path = Path(db_path) if db_path is not None else get_db_path()

    @contextmanager
    def get_connection(self):
        """Get a database connection with context manager"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row  # Enable column access by name
        try:
            yield conn
        finally:
            conn.close()

    def ensure_schema(self):
        """Ensure the items table and its indexes exist"""
        with self.get_connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS items (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL DEFAULT '',
                    status TEXT NOT NULL DEFAULT 'publish',
                    slug TEXT NOT NULL DEFAULT '',
                    published_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_items_status_published "
                "ON items (status, published_at)"
            )
            conn.commit()
