"""
Interface every content index implements.
"""

from typing import Protocol

from .query import QuerySpec, SearchResultPage


class ContentIndex(Protocol):
    """Executes a QuerySpec against a content store.

    Implementations raise ``ContentIndexUnavailableError`` when the store
    cannot be reached and ``ContentIndexQueryError`` when a query fails.
    Result order is the index's own; callers must not re-sort or assume
    numeric identifier order.
    """

    def query(self, spec: QuerySpec) -> SearchResultPage:
        ...
