"""
Shared search logic for the batch command and the interactive picker.

Provides:
- DateWindow / build_date_window: validated publish-date ranges
- QuerySpec and its factories: normalized search requests
- ContentIndex: the interface a content store implements
- BatchSearcher: one-shot marker enumeration
"""

from .batch import BatchOutcome, BatchReport, BatchSearcher
from .date_window import DateWindow, build_date_window
from .index import ContentIndex
from .query import (
    ContentItemSummary,
    ItemField,
    ItemStatus,
    QuerySpec,
    SearchResultPage,
    identifier_query,
    keyword_query,
    marker_query,
)

__all__ = [
    "BatchOutcome",
    "BatchReport",
    "BatchSearcher",
    "ContentIndex",
    "ContentItemSummary",
    "DateWindow",
    "ItemField",
    "ItemStatus",
    "QuerySpec",
    "SearchResultPage",
    "build_date_window",
    "identifier_query",
    "keyword_query",
    "marker_query",
]
