"""
Picker - interactive search for an item to link to.

Provides:
- PickerApp: Standalone textual app returning the chosen item
- PickerScreen: Search widget with keyword, page and page size inputs
- IncrementalSearchController: Debounced, stale-safe search session
"""

from .picker_app import PickerApp
from .picker_presenter import IncrementalSearchController, SearchSessionVM
from .picker_screen import PickerScreen

__all__ = [
    "IncrementalSearchController",
    "PickerApp",
    "PickerScreen",
    "SearchSessionVM",
]
