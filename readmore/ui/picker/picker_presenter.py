"""
Presenter for the Picker Screen.

Keeps the displayed result page in step with the keyword, page and page size
the user edits. Edits are debounced so typing does not flood the index, and
every issued query carries a token so a response that arrives after a newer
query was issued is dropped instead of displayed.
"""

import asyncio
import itertools
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any

from ...config.constants import (
    DEBOUNCE_SECONDS,
    DEFAULT_PAGE_SIZE,
    MAX_ITEM_ID,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
)
from ...exceptions import ContentIndexError, SelectionNotFoundError
from ...search.index import ContentIndex
from ...search.query import (
    ContentItemSummary,
    QuerySpec,
    SearchResultPage,
    identifier_query,
    keyword_query,
)

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?)(\d+)")
_MAX_DIGITS = len(str(MAX_ITEM_ID))
_IDENTIFIER = re.compile(r"[0-9]+")


def _parse_digits(digits: str) -> int:
    """Convert a digit run; anything wider than an item id saturates just past MAX_ITEM_ID."""
    if len(digits.lstrip("0")) > _MAX_DIGITS:
        return MAX_ITEM_ID + 1
    return int(digits)


def parse_leading_int(raw: Any) -> int | None:
    """Parse the leading integer of a raw input value ("12abc" -> 12, "3.7" -> 3)."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    sign, digits = match.groups()
    value = _parse_digits(digits)
    return -value if sign == "-" else value


def clamp_page(raw: Any, total_pages: int) -> int:
    """Clamp a raw page value into ``[1, total_pages]``."""
    page = parse_leading_int(raw)
    if page is None or page < 1:
        return 1
    if page > total_pages:
        return max(total_pages, 1)
    return page


def clamp_page_size(raw: Any) -> int:
    """Clamp a raw page size into ``[MIN_PAGE_SIZE, MAX_PAGE_SIZE]``."""
    size = parse_leading_int(raw)
    if size is None or size < MIN_PAGE_SIZE:
        return MIN_PAGE_SIZE
    if size > MAX_PAGE_SIZE:
        return MAX_PAGE_SIZE
    return size


def build_query(keyword: str, page: int, page_size: int) -> QuerySpec | None:
    """Dispatch a keyword to the query it stands for.

    Returns None for a blank keyword (show the default set), an identifier
    lookup for an all-digit keyword, and a paginated keyword search otherwise.
    """
    stripped = keyword.strip()
    if not stripped:
        return None
    if _IDENTIFIER.fullmatch(stripped):
        return identifier_query(_parse_digits(stripped))
    return keyword_query(stripped, page, page_size)


@dataclass
class SearchSessionVM:
    """Complete picker state for the UI."""

    keyword: str = ""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = 1
    items: tuple[ContentItemSummary, ...] = ()
    is_loading: bool = False
    selected: ContentItemSummary | None = None
    error: str | None = None
    status_text: str = ""


class IncrementalSearchController:
    """
    Drives one interactive search session.

    - Every edit re-arms a single debounce timer; the timer is replaced,
      never stacked.
    - When the timer fires, the query gets a fresh token and any earlier
      token is void. Older queries still in flight finish, but their results
      are dropped.
    - A failed current query keeps the previous results on screen.
    """

    def __init__(
        self,
        index: ContentIndex,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        page_size: Any = DEFAULT_PAGE_SIZE,
        on_state_update: Callable[[SearchSessionVM], Awaitable[None]] | None = None,
    ):
        self.index = index
        self.debounce_seconds = debounce_seconds
        self.on_state_update = on_state_update
        self._state = SearchSessionVM(page_size=clamp_page_size(page_size))
        self._last_result = SearchResultPage.empty()
        self._tokens = itertools.count(1)
        self._pending_token: int | None = None
        self._debounce_task: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def snapshot(self) -> SearchSessionVM:
        """A copy of the current session state."""
        return replace(self._state)

    @property
    def last_result(self) -> SearchResultPage:
        return self._last_result

    async def _notify_update(self) -> None:
        """Notify listeners of state change."""
        if self.on_state_update:
            await self.on_state_update(self.snapshot)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    async def on_keyword_change(self, keyword: str) -> None:
        """Store a new keyword and restart from the first page."""
        if keyword == self._state.keyword:
            return
        self._state.keyword = keyword
        self._state.page = 1
        self._arm()
        await self._notify_update()

    async def on_page_change(self, raw: Any) -> None:
        """Move to a page, clamped against the last known page count."""
        page = clamp_page(raw, self._last_result.total_pages)
        if page == self._state.page:
            return
        self._state.page = page
        self._arm()
        await self._notify_update()

    async def on_page_size_change(self, raw: Any) -> None:
        """Change the page size; the page offset restarts at 1."""
        page_size = clamp_page_size(raw)
        changed = page_size != self._state.page_size or self._state.page != 1
        self._state.page_size = page_size
        self._state.page = 1
        if changed:
            self._arm()
            await self._notify_update()

    async def refresh(self) -> None:
        """Re-run the current search."""
        self._arm()
        await self._notify_update()

    def on_select(self, identifier: Any) -> ContentItemSummary:
        """Select an item of the current result set by id.

        Raises:
            SelectionNotFoundError: If no current item has that id; the
                previous selection is left untouched.
        """
        try:
            item_id = int(identifier)
        except (TypeError, ValueError):
            raise SelectionNotFoundError(identifier) from None

        item = self._last_result.find(item_id)
        if item is None:
            raise SelectionNotFoundError(identifier)

        self._state.selected = item
        return item

    # ------------------------------------------------------------------
    # Debounce and dispatch
    # ------------------------------------------------------------------

    def _arm(self) -> None:
        """Void the current token and restart the debounce timer."""
        self._pending_token = None
        if self._debounce_task is not None:
            self._debounce_task.cancel()
        self._state.is_loading = True
        self._debounce_task = asyncio.create_task(self._debounce())

    async def _debounce(self) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._debounce_task = None
        await self._fire()

    async def _fire(self) -> None:
        spec = build_query(self._state.keyword, self._state.page, self._state.page_size)
        if spec is None:
            self._apply_result(SearchResultPage.empty())
            self._state.status_text = "Enter keyword or item ID"
            await self._notify_update()
            return

        token = next(self._tokens)
        self._pending_token = token
        logger.debug("Issuing query %d: %s", token, spec)

        task = asyncio.create_task(self._run_query(token, spec))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run_query(self, token: int, spec: QuerySpec) -> None:
        try:
            result = await asyncio.to_thread(self.index.query, spec)
        except ContentIndexError as e:
            if token != self._pending_token:
                logger.debug("Dropping failure of superseded query %d", token)
                return
            logger.error(f"Search failed: {e}")
            await self._apply_failure(e.message)
            return
        except Exception as e:
            if token != self._pending_token:
                logger.debug("Dropping failure of superseded query %d", token)
                return
            logger.error(f"Unexpected search failure: {e}", exc_info=True)
            await self._apply_failure(str(e) or type(e).__name__)
            return

        if token != self._pending_token:
            logger.debug("Dropping stale response to query %d", token)
            return

        self._pending_token = None
        self._apply_result(result)
        await self._notify_update()

    async def _apply_failure(self, message: str) -> None:
        """Go idle with the error shown; the previous results stay."""
        self._pending_token = None
        self._state.is_loading = False
        self._state.error = message
        self._state.status_text = f"Search error: {message}"
        await self._notify_update()

    def _apply_result(self, result: SearchResultPage) -> None:
        self._last_result = result
        self._state.items = result.items
        self._state.total_pages = result.total_pages
        self._state.is_loading = False
        self._state.error = None
        if result.items:
            self._state.status_text = (
                f"{len(result.items)} items | page {self._state.page} of {result.total_pages}"
            )
        else:
            self._state.status_text = "No items found"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def settle(self) -> None:
        """Wait until no timer is armed and no query is in flight."""
        while True:
            pending = [
                task
                for task in (self._debounce_task, *self._in_flight)
                if task is not None and not task.done()
            ]
            if not pending:
                return
            done, _ = await asyncio.wait(pending)
            for task in done:
                if not task.cancelled() and task.exception() is not None:
                    raise task.exception()

    def close(self) -> None:
        """Disarm the timer. Queries already in flight finish and are dropped."""
        self._pending_token = None
        if self._debounce_task is not None:
            self._debounce_task.cancel()
            self._debounce_task = None
        self._state.is_loading = False
