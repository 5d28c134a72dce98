"""Wrapping selection over a list with a scrolling viewport.

This module has no rendering concerns; it only keeps ``selected_index`` and
``scroll_offset`` consistent so the selection is always visible.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ListViewport:
    start: int
    end: int
    has_overflow_above: bool
    has_overflow_below: bool

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.length == 0


@dataclass(frozen=True)
class ListWindow(Generic[T]):
    """The visible slice of ``items`` plus its absolute bounds."""

    items: tuple[T, ...]
    start: int
    end: int
    has_overflow_above: bool
    has_overflow_below: bool

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def indexed(self) -> list[tuple[int, T]]:
        """Pair each visible item with its absolute index."""
        return list(enumerate(self.items, start=self.start))


class ListNavigator:
    def __init__(self, item_count: int, max_visible: int, initial_index: int = 0) -> None:
        self._item_count = max(0, item_count)
        self._max_visible = max(1, max_visible)
        self._selected_index = 0
        self._scroll_offset = 0
        if self._item_count > 0:
            self._selected_index = max(0, min(initial_index, self._item_count - 1))
        self._adjust_scroll()

    def __repr__(self) -> str:
        return (
            f"ListNavigator(items={self._item_count}, visible={self._max_visible}, "
            f"selected={self._selected_index}, offset={self._scroll_offset})"
        )

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def scroll_offset(self) -> int:
        return self._scroll_offset

    @property
    def item_count(self) -> int:
        return self._item_count

    @item_count.setter
    def item_count(self, value: int) -> None:
        self._item_count = max(0, value)
        if self._item_count == 0:
            self._selected_index = 0
            self._scroll_offset = 0
            return
        self._selected_index = max(0, min(self._selected_index, self._item_count - 1))
        self._adjust_scroll()

    @property
    def max_visible(self) -> int:
        return self._max_visible

    @max_visible.setter
    def max_visible(self, value: int) -> None:
        self._max_visible = max(1, value)
        self._adjust_scroll()

    @property
    def has_overflow_above(self) -> bool:
        return self._scroll_offset > 0

    @property
    def has_overflow_below(self) -> bool:
        return self._item_count > 0 and self._scroll_offset + self._max_visible < self._item_count

    @property
    def is_empty(self) -> bool:
        return self._item_count == 0

    def move_by(self, delta: int) -> None:
        if self._item_count == 0:
            return
        self._selected_index = (self._selected_index + delta) % self._item_count
        self._adjust_scroll()

    def move_up(self) -> None:
        self.move_by(-1)

    def move_down(self) -> None:
        self.move_by(1)

    def page_up(self) -> None:
        self.move_by(-self._max_visible)

    def page_down(self) -> None:
        self.move_by(self._max_visible)

    def jump_to(self, index: int) -> None:
        if self._item_count == 0:
            return
        self._selected_index = max(0, min(index, self._item_count - 1))
        self._adjust_scroll()

    def jump_to_first(self) -> None:
        self.jump_to(0)

    def jump_to_last(self) -> None:
        self.jump_to(self._item_count - 1)

    def reset(self, initial_index: int = 0) -> None:
        self._scroll_offset = 0
        if self._item_count == 0:
            self._selected_index = 0
            return
        self._selected_index = max(0, min(initial_index, self._item_count - 1))
        self._adjust_scroll()

    def is_selected(self, index: int) -> bool:
        return index == self._selected_index

    @property
    def viewport(self) -> ListViewport:
        return ListViewport(
            start=self._scroll_offset,
            end=min(self._scroll_offset + self._max_visible, self._item_count),
            has_overflow_above=self.has_overflow_above,
            has_overflow_below=self.has_overflow_below,
        )

    def visible_window(self, items: Sequence[T]) -> ListWindow[T]:
        """Slice ``items`` to the current viewport.

        Bounds come from ``len(items)`` rather than ``item_count`` so a stale
        count never slices past the end.
        """
        if not items:
            return ListWindow((), 0, 0, False, False)
        start = max(0, min(self._scroll_offset, len(items)))
        end = min(self._scroll_offset + self._max_visible, len(items))
        return ListWindow(
            items=tuple(items[start:end]),
            start=start,
            end=end,
            has_overflow_above=start > 0,
            has_overflow_below=end < len(items),
        )

    def _adjust_scroll(self) -> None:
        if self._item_count == 0:
            self._scroll_offset = 0
            return
        if self._selected_index < self._scroll_offset:
            self._scroll_offset = self._selected_index
        elif self._selected_index >= self._scroll_offset + self._max_visible:
            self._scroll_offset = self._selected_index - self._max_visible + 1
        max_offset = max(0, self._item_count - self._max_visible)
        self._scroll_offset = max(0, min(self._scroll_offset, max_offset))
