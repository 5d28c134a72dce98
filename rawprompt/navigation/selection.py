"""Selected-index bookkeeping for single- and multi-select prompts."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")


class SelectionController:
    """Set of selected indices; single-select mode holds at most one."""

    def __init__(self, multi_select: bool = False, initial_selection: Iterable[int] | None = None) -> None:
        self.multi_select = multi_select
        selected = set(initial_selection or ())
        if not multi_select and len(selected) > 1:
            selected = {min(selected)}
        self._selected: set[int] = selected

    @classmethod
    def single(cls, initial_index: int | None = None) -> SelectionController:
        return cls(False, None if initial_index is None else (initial_index,))

    @classmethod
    def multi(cls, initial_selection: Iterable[int] | None = None) -> SelectionController:
        return cls(True, initial_selection)

    def __repr__(self) -> str:
        return f"SelectionController(multi_select={self.multi_select}, selected={sorted(self._selected)})"

    @property
    def selected_indices(self) -> frozenset[int]:
        return frozenset(self._selected)

    @property
    def count(self) -> int:
        return len(self._selected)

    @property
    def is_empty(self) -> bool:
        return not self._selected

    @property
    def selected_index(self) -> int | None:
        """Lowest selected index, or ``None``."""
        return min(self._selected) if self._selected else None

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def toggle(self, index: int) -> None:
        if not self.multi_select:
            self._selected = {index}
        elif index in self._selected:
            self._selected.discard(index)
        else:
            self._selected.add(index)

    def select(self, index: int) -> None:
        if self.multi_select:
            self._selected.add(index)
        else:
            self._selected = {index}

    def deselect(self, index: int) -> None:
        self._selected.discard(index)

    def clear(self) -> None:
        self._selected.clear()

    def select_all(self, count: int) -> None:
        if not self.multi_select:
            return
        self._selected = set(range(max(0, count)))

    def toggle_all(self, count: int) -> None:
        """Select everything, or clear when all ``count`` items are already selected."""
        if not self.multi_select:
            return
        if self._selected == set(range(max(0, count))):
            self.clear()
        else:
            self.select_all(count)

    def invert(self, count: int) -> None:
        if not self.multi_select:
            return
        self._selected = {index for index in range(max(0, count)) if index not in self._selected}

    def get_selected_many(self, items: Sequence[T], fallback_index: int | None = None) -> list[T]:
        """Items at the selected indices in ascending order.

        With nothing selected, falls back to ``[items[fallback_index]]`` when
        that index is valid.
        """
        if not self._selected:
            if fallback_index is not None and 0 <= fallback_index < len(items):
                return [items[fallback_index]]
            return []
        return [items[index] for index in sorted(self._selected) if 0 <= index < len(items)]

    def get_selected(self, items: Sequence[T], fallback_index: int | None = None) -> T | None:
        index = self.selected_index
        if index is not None and 0 <= index < len(items):
            return items[index]
        if fallback_index is not None and 0 <= fallback_index < len(items):
            return items[fallback_index]
        return None

    def get_selected_indices(self, fallback_index: int | None = None) -> list[int]:
        if not self._selected:
            return [] if fallback_index is None else [fallback_index]
        return sorted(self._selected)

    def constrain_to(self, item_count: int) -> None:
        self._selected = {index for index in self._selected if index < item_count}

    def summary(self, total_count: int) -> str:
        if not self._selected:
            return "none selected"
        return f"{len(self._selected)}/{total_count} selected"

    def copy(self) -> SelectionController:
        return SelectionController(self.multi_select, set(self._selected))
