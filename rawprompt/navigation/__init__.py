"""Navigation and selection state for list, grid, and form prompts.

These classes hold no terminal or rendering state.
"""

from __future__ import annotations

from .focus_navigator import FocusNavigator
from .grid_navigator import GridLayout, GridNavigator, GridRow
from .list_navigator import ListNavigator, ListViewport, ListWindow
from .selection import SelectionController

__all__ = [
    "FocusNavigator",
    "GridLayout",
    "GridNavigator",
    "GridRow",
    "ListNavigator",
    "ListViewport",
    "ListWindow",
    "SelectionController",
]
