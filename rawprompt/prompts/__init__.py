"""Ready-made prompt scaffolds built on the loop, navigators and bindings.

Each scaffold owns its navigation and selection state for the length of one
``run`` and hands the frame to ``PromptLoop.run``.
"""

from __future__ import annotations

from .grid_prompt import SelectableGridPrompt, auto_columns
from .list_prompt import SelectableListPrompt
from .search_prompt import RankedListPrompt, SearchableListPrompt, contains_filter

__all__ = [
    "RankedListPrompt",
    "SearchableListPrompt",
    "SelectableGridPrompt",
    "SelectableListPrompt",
    "auto_columns",
    "contains_filter",
]
