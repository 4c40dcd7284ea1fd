"""Tests for the picker presenter (IncrementalSearchController)."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from fakes import FakeIndex, GatedIndex, items

from readmore.config.constants import MAX_ITEM_ID
from readmore.exceptions import ContentIndexUnavailableError, SelectionNotFoundError
from readmore.search.query import SearchResultPage
from readmore.ui.picker.picker_presenter import (
    IncrementalSearchController,
    SearchSessionVM,
    build_query,
    clamp_page,
    clamp_page_size,
    parse_leading_int,
)


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Poll the event loop until predicate() holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.01)


def page_of(*ids: int, total_pages: int = 1) -> SearchResultPage:
    return SearchResultPage(items=items(*ids), total_pages=total_pages)


class TestClamping:
    """Tests for page and page size clamping."""

    @pytest.mark.parametrize("raw, expected", [(0, 1), (500, 100), ("abc", 1), ("25", 25), (None, 1), (-3, 1)])
    def test_page_size(self, raw, expected) -> None:
        assert clamp_page_size(raw) == expected

    @pytest.mark.parametrize("raw, expected", [(0, 1), (9, 5), ("3", 3), ("x", 1), (5, 5)])
    def test_page_against_five_pages(self, raw, expected) -> None:
        assert clamp_page(raw, total_pages=5) == expected

    def test_page_never_below_one_without_results(self) -> None:
        assert clamp_page(4, total_pages=0) == 1

    def test_leading_integer_parsing(self) -> None:
        assert parse_leading_int("12abc") == 12
        assert parse_leading_int("3.7") == 3
        assert parse_leading_int(" 8") == 8
        assert parse_leading_int("abc") is None
        assert parse_leading_int(True) is None


class TestDispatch:
    """Tests for keyword-vs-identifier dispatch."""

    def test_numeric_keyword_is_identifier_lookup(self) -> None:
        spec = build_query("42", page=3, page_size=20)
        assert spec.is_identifier_lookup
        assert spec.item_id == 42
        assert spec.page is None
        assert spec.page_size is None

    def test_padded_numeric_keyword_is_identifier_lookup(self) -> None:
        assert build_query(" 42 ", page=1, page_size=10).item_id == 42

    def test_text_keyword_carries_pagination(self) -> None:
        spec = build_query("budget report", page=3, page_size=20)
        assert not spec.is_identifier_lookup
        assert spec.search == "budget report"
        assert (spec.page, spec.page_size) == (3, 20)

    @pytest.mark.parametrize("keyword", ["4.2", "-5", "42a"])
    def test_non_integer_keywords_are_text(self, keyword) -> None:
        assert build_query(keyword, page=1, page_size=10).search == keyword

    @pytest.mark.parametrize("keyword", ["", "   "])
    def test_blank_keyword_has_no_query(self, keyword) -> None:
        assert build_query(keyword, page=1, page_size=10) is None


class TestDebounce:
    """Edits are coalesced into one query."""

    @pytest.mark.asyncio
    async def test_rapid_edits_issue_one_query(self) -> None:
        index = FakeIndex(page_of(1))
        controller = IncrementalSearchController(index, debounce_seconds=0.05)

        for keyword in ("b", "bu", "bud", "budget"):
            await controller.on_keyword_change(keyword)
        await controller.settle()

        assert [spec.search for spec in index.calls] == ["budget"]
        assert controller.snapshot.items == items(1)

    @pytest.mark.asyncio
    async def test_loading_until_result_arrives(self) -> None:
        controller = IncrementalSearchController(FakeIndex(page_of(1)), debounce_seconds=0.01)

        await controller.on_keyword_change("news")
        assert controller.snapshot.is_loading is True

        await controller.settle()
        assert controller.snapshot.is_loading is False

    @pytest.mark.asyncio
    async def test_same_keyword_does_not_rearm(self) -> None:
        index = FakeIndex(page_of(1))
        controller = IncrementalSearchController(index, debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        await controller.on_keyword_change("news")
        await controller.settle()

        assert len(index.calls) == 1

    @pytest.mark.asyncio
    async def test_refresh_requeries(self) -> None:
        index = FakeIndex(page_of(1))
        controller = IncrementalSearchController(index, debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        await controller.refresh()
        await controller.settle()

        assert len(index.calls) == 2

    @pytest.mark.asyncio
    async def test_close_disarms_timer(self) -> None:
        index = FakeIndex(page_of(1))
        controller = IncrementalSearchController(index, debounce_seconds=0.05)
        await controller.on_keyword_change("news")

        controller.close()
        await asyncio.sleep(0.1)

        assert index.calls == []
        assert controller.snapshot.is_loading is False


class TestDispatchFromController:
    """Fired queries follow the dispatch rule."""

    @pytest.mark.asyncio
    async def test_empty_keyword_resets_without_index_call(self) -> None:
        index = FakeIndex(page_of(1, 2))
        controller = IncrementalSearchController(index, debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        await controller.on_keyword_change("   ")
        await controller.settle()

        assert len(index.calls) == 1
        state = controller.snapshot
        assert state.items == ()
        assert state.total_pages == 1
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_numeric_keyword_looks_up_identifier(self) -> None:
        index = FakeIndex(page_of(42))
        controller = IncrementalSearchController(index, debounce_seconds=0)

        await controller.on_keyword_change("42")
        await controller.settle()

        spec = index.calls[0]
        assert spec.item_id == 42
        assert spec.page is None and spec.page_size is None

    @pytest.mark.asyncio
    async def test_keyword_query_uses_current_pagination(self) -> None:
        index = FakeIndex(page_of(1, total_pages=5))
        controller = IncrementalSearchController(index, debounce_seconds=0, page_size=25)

        await controller.on_keyword_change("budget report")
        await controller.settle()
        await controller.on_page_change(4)
        await controller.settle()

        spec = index.calls[-1]
        assert spec.search == "budget report"
        assert (spec.page, spec.page_size) == (4, 25)


class TestPagination:
    """Page and page size edits."""

    @pytest.mark.asyncio
    async def test_page_clamps_to_last_known_total(self) -> None:
        controller = IncrementalSearchController(FakeIndex(page_of(1, total_pages=5)), debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        await controller.on_page_change(9)
        assert controller.snapshot.page == 5

        await controller.on_page_change(0)
        assert controller.snapshot.page == 1
        await controller.settle()

    @pytest.mark.asyncio
    async def test_page_size_change_resets_page(self) -> None:
        index = FakeIndex(page_of(1, total_pages=5))
        controller = IncrementalSearchController(index, debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()
        await controller.on_page_change(3)
        await controller.settle()

        await controller.on_page_size_change(20)
        await controller.settle()

        state = controller.snapshot
        assert state.page == 1
        assert state.page_size == 20
        assert (index.calls[-1].page, index.calls[-1].page_size) == (1, 20)

    @pytest.mark.asyncio
    async def test_page_size_clamps(self) -> None:
        controller = IncrementalSearchController(FakeIndex(), debounce_seconds=0)

        await controller.on_page_size_change(500)
        assert controller.snapshot.page_size == 100
        await controller.on_page_size_change("abc")
        assert controller.snapshot.page_size == 1
        await controller.settle()

    @pytest.mark.asyncio
    async def test_keyword_change_resets_page(self) -> None:
        controller = IncrementalSearchController(FakeIndex(page_of(1, total_pages=5)), debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()
        await controller.on_page_change(4)

        await controller.on_keyword_change("sport")
        await controller.settle()

        assert controller.snapshot.page == 1


class TestStaleResponses:
    """Only the latest query's answer is ever shown."""

    @pytest.mark.asyncio
    async def test_late_older_response_is_discarded(self) -> None:
        index = GatedIndex()
        index.results["alpha"] = page_of(1, 2)
        index.results["beta"] = page_of(3)
        controller = IncrementalSearchController(index, debounce_seconds=0)

        await controller.on_keyword_change("alpha")
        await wait_until(lambda: "alpha" in index.started)
        await controller.on_keyword_change("beta")
        await wait_until(lambda: "beta" in index.started)

        index.release("beta")
        await wait_until(lambda: controller.snapshot.items == items(3))
        index.release("alpha")
        await controller.settle()

        assert controller.snapshot.items == items(3)
        assert controller.last_result == page_of(3)

    @pytest.mark.asyncio
    async def test_response_after_reset_is_discarded(self) -> None:
        index = GatedIndex()
        index.results["alpha"] = page_of(1)
        controller = IncrementalSearchController(index, debounce_seconds=0)

        await controller.on_keyword_change("alpha")
        await wait_until(lambda: "alpha" in index.started)
        await controller.on_keyword_change("")
        await wait_until(lambda: not controller.snapshot.is_loading)

        index.release("alpha")
        await controller.settle()

        assert controller.snapshot.items == ()

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self) -> None:
        index = GatedIndex()
        index.errors["alpha"] = ContentIndexUnavailableError()
        index.results["beta"] = page_of(3)
        controller = IncrementalSearchController(index, debounce_seconds=0)

        await controller.on_keyword_change("alpha")
        await wait_until(lambda: "alpha" in index.started)
        await controller.on_keyword_change("beta")
        await wait_until(lambda: "beta" in index.started)

        index.release("beta")
        index.release("alpha")
        await controller.settle()

        state = controller.snapshot
        assert state.error is None
        assert state.items == items(3)


class TestFailures:
    """A failed current query keeps the previous results visible."""

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_result(self) -> None:
        index = FakeIndex(page_of(1, 2))
        controller = IncrementalSearchController(index, debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        index.error = ContentIndexUnavailableError()
        await controller.on_keyword_change("sport")
        await controller.settle()

        state = controller.snapshot
        assert state.items == items(1, 2)
        assert state.error == "Content index unavailable"
        assert state.is_loading is False

    @pytest.mark.asyncio
    async def test_next_success_clears_error(self) -> None:
        index = FakeIndex(page_of(1), error=ContentIndexUnavailableError())
        controller = IncrementalSearchController(index, debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        index.error = None
        await controller.refresh()
        await controller.settle()

        assert controller.snapshot.error is None
        assert controller.snapshot.items == items(1)

    @pytest.mark.asyncio
    async def test_unexpected_failure_goes_idle_with_error(self) -> None:
        index = FakeIndex(page_of(1, 2))
        controller = IncrementalSearchController(index, debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        index.error = RuntimeError("disk on fire")
        await controller.on_keyword_change("sport")
        await controller.settle()

        state = controller.snapshot
        assert state.is_loading is False
        assert state.error == "disk on fire"
        assert state.items == items(1, 2)


class TestOversizedNumbers:
    """Digit runs too wide for an item id or integer conversion stay harmless."""

    TWENTY_DIGITS = "9" * 20
    HUGE = "9" * 5000

    def test_huge_page_size_clamps_to_maximum(self) -> None:
        assert clamp_page_size(self.HUGE) == 100

    def test_huge_negative_page_clamps_to_first(self) -> None:
        assert clamp_page("-" + self.HUGE, total_pages=5) == 1

    def test_huge_identifier_is_past_any_stored_id(self) -> None:
        spec = build_query(self.HUGE, page=1, page_size=10)
        assert spec.is_identifier_lookup
        assert spec.item_id == MAX_ITEM_ID + 1

    def test_leading_zeros_do_not_count(self) -> None:
        assert build_query("0" * 30 + "42", page=1, page_size=10).item_id == 42

    @pytest.mark.asyncio
    @pytest.mark.parametrize("keyword", [TWENTY_DIGITS, HUGE])
    async def test_oversized_identifier_finds_nothing(self, index, sample_items, keyword) -> None:
        controller = IncrementalSearchController(index, debounce_seconds=0)

        await controller.on_keyword_change(keyword)
        await controller.settle()

        state = controller.snapshot
        assert state.is_loading is False
        assert state.error is None
        assert state.items == ()
        assert state.status_text == "No items found"

    @pytest.mark.asyncio
    async def test_huge_page_inputs_clamp_in_controller(self) -> None:
        controller = IncrementalSearchController(FakeIndex(page_of(1, total_pages=5)), debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        await controller.on_page_change(self.HUGE)
        assert controller.snapshot.page == 5

        await controller.on_page_size_change(self.HUGE)
        assert controller.snapshot.page_size == 100
        await controller.settle()


class TestSelection:
    """Selection resolves against the current result set only."""

    @pytest.mark.asyncio
    async def test_select_present_item(self) -> None:
        controller = IncrementalSearchController(FakeIndex(page_of(4, 7)), debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()

        item = controller.on_select("7")

        assert item.id == 7
        assert controller.snapshot.selected == item

    @pytest.mark.asyncio
    async def test_select_absent_item_keeps_previous_selection(self) -> None:
        index = FakeIndex(page_of(4, 7))
        controller = IncrementalSearchController(index, debounce_seconds=0)
        await controller.on_keyword_change("news")
        await controller.settle()
        previous = controller.on_select(4)

        index.result = page_of(9)
        await controller.on_keyword_change("sport")
        await controller.settle()

        with pytest.raises(SelectionNotFoundError):
            controller.on_select(7)
        assert controller.snapshot.selected == previous

    def test_select_without_results(self) -> None:
        controller = IncrementalSearchController(FakeIndex())
        with pytest.raises(SelectionNotFoundError):
            controller.on_select(1)
        assert controller.snapshot.selected is None

    def test_select_non_numeric(self) -> None:
        controller = IncrementalSearchController(FakeIndex())
        with pytest.raises(SelectionNotFoundError):
            controller.on_select("Select an item")


class TestStateUpdates:
    """Listeners receive snapshots."""

    @pytest.mark.asyncio
    async def test_callback_receives_snapshots(self) -> None:
        callback = AsyncMock()
        controller = IncrementalSearchController(
            FakeIndex(page_of(1)), debounce_seconds=0, on_state_update=callback
        )

        await controller.on_keyword_change("news")
        await controller.settle()

        states = [call.args[0] for call in callback.call_args_list]
        assert all(isinstance(state, SearchSessionVM) for state in states)
        assert states[0].is_loading is True
        assert states[-1].items == items(1)

    def test_snapshot_is_a_copy(self) -> None:
        controller = IncrementalSearchController(FakeIndex())
        snapshot = controller.snapshot
        snapshot.keyword = "changed"
        assert controller.snapshot.keyword == ""

    def test_initial_page_size_is_clamped(self) -> None:
        controller = IncrementalSearchController(FakeIndex(), page_size=1000)
        assert controller.snapshot.page_size == 100
