"""
Standalone textual app hosting the PickerScreen.

The app exits with the chosen ContentItemSummary, or None when cancelled.
"""

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ...search.index import ContentIndex
from ...search.query import ContentItemSummary
from .picker_screen import PickerScreen


class PickerApp(App[ContentItemSummary | None]):
    """Pick one published item to link to."""

    TITLE = "Read More"
    SUB_TITLE = "Select an item to insert a read-more link"

    BINDINGS = [
        Binding("ctrl+s", "confirm", "Use selection"),
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, index: ContentIndex, page_size: int | None = None) -> None:
        super().__init__()
        self.index = index
        self.page_size = page_size
        self.selected: ContentItemSummary | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield PickerScreen(self.index, page_size=self.page_size, id="picker")
        yield Footer()

    def on_picker_screen_item_selected(self, event: PickerScreen.ItemSelected) -> None:
        self.selected = event.item

    def action_confirm(self) -> None:
        if self.selected is None:
            self.notify("Please select an item", severity="warning", timeout=3)
            return
        self.exit(self.selected)

    def action_cancel(self) -> None:
        self.exit(None)
