"""Shared helpers for CLI commands."""

from typing import Optional

import typer

from readmore.config.settings import get_db_path
from readmore.database import DatabaseConnection, SQLiteContentIndex


def open_index(ctx: Optional[typer.Context]) -> SQLiteContentIndex:
    """Open the content index for the database chosen on the command line."""
    override = None
    if ctx is not None and isinstance(ctx.obj, dict):
        override = ctx.obj.get("db_path")

    connection = DatabaseConnection(get_db_path(override))
    connection.ensure_schema()
    return SQLiteContentIndex(connection)
