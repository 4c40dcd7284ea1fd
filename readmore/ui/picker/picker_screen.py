"""
Picker Screen - search published items and choose one to link to.

Features:
- Keyword or item ID search with debounced live results
- Page and page size inputs, clamped by the presenter
- Read More preview of the chosen item
"""

import logging
from typing import Any

from rich.markup import escape
from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, LoadingIndicator, OptionList, Static
from textual.widgets.option_list import Option

from ...exceptions import SelectionNotFoundError
from ...search.index import ContentIndex
from ...search.query import ContentItemSummary
from .picker_presenter import IncrementalSearchController, SearchSessionVM

logger = logging.getLogger(__name__)


def read_more_markup(item: ContentItemSummary | None) -> str:
    """Rich markup for the Read More preview line."""
    if item is None:
        return "[dim]Select an item to insert a read-more link[/dim]"
    return f"Read More: [link={item.permalink}][bold]{escape(item.title)}[/bold][/link]"


class PickerScreen(Widget):
    """
    Search widget with keyword, page and page size inputs.

    Layout:
    - Search bar with page and page size inputs
    - Result list, one option per item (option id = item id)
    - Status bar and Read More preview
    """

    BINDINGS = [
        Binding("ctrl+f", "focus_search", "Search"),
        Binding("ctrl+r", "refresh", "Refresh"),
    ]

    DEFAULT_CSS = """
    PickerScreen {
        layout: vertical;
    }

    #search-bar {
        height: 3;
    }

    #search-input {
        width: 1fr;
    }

    #page-input, #page-size-input {
        width: 12;
    }

    #results-list {
        height: 1fr;
    }

    #loading {
        height: 1;
        display: none;
    }

    #loading.active {
        display: block;
    }

    #picker-status {
        height: 1;
        padding: 0 1;
    }

    #read-more-preview {
        height: 1;
        padding: 0 1;
    }
    """

    class ItemSelected(Message):
        """Posted when the user picks an item from the current results."""

        def __init__(self, item: ContentItemSummary) -> None:
            self.item = item
            super().__init__()

    def __init__(self, index: ContentIndex, *args: Any, page_size: int | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        controller_kwargs: dict[str, Any] = {"on_state_update": self._on_state_update}
        if page_size is not None:
            controller_kwargs["page_size"] = page_size
        self.presenter = IncrementalSearchController(index, **controller_kwargs)

    def compose(self) -> ComposeResult:
        state = self.presenter.snapshot
        with Horizontal(id="search-bar"):
            yield Input(placeholder="Enter keyword or item ID", id="search-input")
            yield Input(value=str(state.page), type="integer", id="page-input")
            yield Input(value=str(state.page_size), type="integer", id="page-size-input")
        yield LoadingIndicator(id="loading")
        yield OptionList(id="results-list")
        yield Static("Enter keyword or item ID", id="picker-status")
        yield Static(read_more_markup(None), id="read-more-preview")

    def on_mount(self) -> None:
        logger.info("PickerScreen mounted")
        self.query_one("#search-input", Input).focus()

    def on_unmount(self) -> None:
        self.presenter.close()

    async def _on_state_update(self, state: SearchSessionVM) -> None:
        """Handle state updates from presenter."""
        self.call_later(self._render_state_sync, state)

    def _render_state_sync(self, state: SearchSessionVM) -> None:
        """Render the current state to the UI."""
        loading = self.query_one("#loading", LoadingIndicator)
        loading.set_class(state.is_loading, "active")

        page_input = self.query_one("#page-input", Input)
        if page_input.value != str(state.page):
            page_input.value = str(state.page)
        page_size_input = self.query_one("#page-size-input", Input)
        if page_size_input.value != str(state.page_size):
            page_size_input.value = str(state.page_size)
        page_input.tooltip = f"Total pages found: {state.total_pages}"

        results_list = self.query_one("#results-list", OptionList)
        results_list.clear_options()
        for item in state.items:
            results_list.add_option(Option(Text(item.title or f"#{item.id}"), id=str(item.id)))

        status = state.status_text
        if state.error:
            status = f"[red]{status}[/red]"
        self.query_one("#picker-status", Static).update(status)
        self.query_one("#read-more-preview", Static).update(read_more_markup(state.selected))

    async def on_input_changed(self, event: Input.Changed) -> None:
        """Route input edits to the presenter."""
        if event.input.id == "search-input":
            await self.presenter.on_keyword_change(event.value)
        elif event.input.id == "page-input":
            await self.presenter.on_page_change(event.value)
        elif event.input.id == "page-size-input":
            await self.presenter.on_page_size_change(event.value)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        """Resolve the chosen option against the current results."""
        if event.option_list.id != "results-list":
            return
        try:
            item = self.presenter.on_select(event.option.id)
        except SelectionNotFoundError:
            self.notify("Please select an item", severity="warning", timeout=3)
            return
        self.query_one("#read-more-preview", Static).update(read_more_markup(item))
        self.post_message(self.ItemSelected(item))

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    async def action_refresh(self) -> None:
        await self.presenter.refresh()
