"""
readmore content store

- connection: SQLite connection management and schema
- items: content item storage
- index: SQLiteContentIndex, the ContentIndex over the store
"""

from .connection import DatabaseConnection
from .index import SQLiteContentIndex
from .items import get_item, save_item, slugify

__all__ = [
    "DatabaseConnection",
    "SQLiteContentIndex",
    "get_item",
    "save_item",
    "slugify",
]
