"""
Search request and result types shared by the batch and interactive surfaces.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..config.constants import UNBOUNDED
from .date_window import DateWindow


class ItemStatus(str, Enum):
    """Publication status of a content item."""

    PUBLISHED = "publish"
    DRAFT = "draft"


class ItemField(str, Enum):
    """Fields a query may project onto each result."""

    ID = "id"
    TITLE = "title"
    PERMALINK = "link"


CONTENT_COLUMNS = frozenset({"content"})
KEYWORD_COLUMNS = frozenset({"title", "content"})
SUMMARY_FIELDS = frozenset({ItemField.ID, ItemField.TITLE, ItemField.PERMALINK})


@dataclass(frozen=True)
class QuerySpec:
    """A normalized search request.

    Exactly one of ``search`` (a marker or keyword) and ``item_id`` is set.
    Term searches carry pagination: either ``page_size == UNBOUNDED`` with no
    page, or a positive page size with ``page >= 1``. Identifier lookups carry
    no pagination at all.
    """

    search: Optional[str] = None
    search_columns: frozenset[str] = KEYWORD_COLUMNS
    item_id: Optional[int] = None
    date_window: Optional[DateWindow] = None
    status: ItemStatus = ItemStatus.PUBLISHED
    page_size: Optional[int] = None
    page: Optional[int] = None
    fields: frozenset[ItemField] = SUMMARY_FIELDS

    def __post_init__(self) -> None:
        if self.item_id is not None:
            if self.search is not None:
                raise ValueError("An identifier lookup cannot also carry a search term")
            if self.page_size is not None or self.page is not None:
                raise ValueError("An identifier lookup does not paginate")
            return

        if not self.search or not self.search.strip():
            raise ValueError("A search term is required")
        if self.page_size is None:
            raise ValueError("A term search needs a page size")
        if self.page_size == UNBOUNDED:
            if self.page is not None:
                raise ValueError("An unbounded search has no page")
        elif self.page_size < 1 or self.page is None or self.page < 1:
            raise ValueError(f"Invalid pagination: page={self.page}, page_size={self.page_size}")

    @property
    def is_identifier_lookup(self) -> bool:
        return self.item_id is not None

    @property
    def is_unbounded(self) -> bool:
        return self.page_size == UNBOUNDED


@dataclass(frozen=True)
class ContentItemSummary:
    """One matching item. Fields outside the query's projection stay empty."""

    id: int
    title: str = ""
    permalink: str = ""


@dataclass(frozen=True)
class SearchResultPage:
    """One page of results. Replaced wholesale, never mutated."""

    items: tuple[ContentItemSummary, ...] = field(default_factory=tuple)
    total_pages: int = 0

    def __post_init__(self) -> None:
        if self.total_pages < 0:
            raise ValueError("total_pages cannot be negative")

    @classmethod
    def empty(cls) -> "SearchResultPage":
        """The default result shown before any search."""
        return cls(items=(), total_pages=1)

    @property
    def ids(self) -> tuple[int, ...]:
        return tuple(item.id for item in self.items)

    def find(self, item_id: int) -> Optional[ContentItemSummary]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


def marker_query(marker: str, date_window: DateWindow) -> QuerySpec:
    """Every published item whose content contains ``marker`` within the window."""
    return QuerySpec(
        search=marker,
        search_columns=CONTENT_COLUMNS,
        date_window=date_window,
        page_size=UNBOUNDED,
        fields=frozenset({ItemField.ID}),
    )


def keyword_query(keyword: str, page: int, page_size: int) -> QuerySpec:
    """One page of published items matching ``keyword`` in title or content."""
    return QuerySpec(search=keyword.strip(), page=page, page_size=page_size)


def identifier_query(item_id: int) -> QuerySpec:
    """A direct lookup of a single published item."""
    return QuerySpec(item_id=item_id)
