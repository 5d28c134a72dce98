"""2D focus over a flat item sequence laid out row-major in fixed columns."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

ROW_PREFIX_WIDTH = 2
CELL_SEPARATOR_WIDTH = 1


@dataclass(frozen=True)
class GridLayout:
    item_count: int
    columns: int
    rows: int
    focused_index: int
    focused_row: int
    focused_column: int

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0

    def index_at(self, row: int, col: int) -> int:
        return row * self.columns + col

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < self.item_count


@dataclass(frozen=True)
class GridRow(Generic[T]):
    row: int
    start_index: int
    items: tuple[T, ...]
    is_last_row: bool

    def __len__(self) -> int:
        return len(self.items)


def _cap_columns(columns: int, item_count: int, max_columns: int | None) -> int:
    if max_columns is not None and max_columns > 0:
        columns = min(columns, max_columns)
    return min(columns, max(1, item_count))


class GridNavigator:
    def __init__(self, item_count: int, columns: int, initial_index: int = 0) -> None:
        self._item_count = max(0, item_count)
        self._columns = max(1, columns)
        self._focused_index = 0
        if self._item_count > 0:
            self._focused_index = max(0, min(initial_index, self._item_count - 1))

    @classmethod
    def responsive(
        cls,
        item_count: int,
        cell_width: int,
        available_width: int,
        max_columns: int | None = None,
        initial_index: int = 0,
        separator_width: int = CELL_SEPARATOR_WIDTH,
        prefix_width: int = ROW_PREFIX_WIDTH,
    ) -> GridNavigator:
        """Fit as many ``cell_width`` columns as ``available_width`` allows."""
        unit = max(1, cell_width + separator_width)
        columns = max(1, (available_width - prefix_width + separator_width) // unit)
        return cls(item_count, _cap_columns(columns, item_count, max_columns), initial_index)

    @classmethod
    def balanced(
        cls,
        item_count: int,
        cell_width: int | None = None,
        available_width: int | None = None,
        max_columns: int | None = None,
        initial_index: int = 0,
    ) -> GridNavigator:
        """Aim for a roughly square grid, narrowed to fit the width when given."""
        columns = max(1, math.ceil(math.sqrt(max(0, item_count))))
        if cell_width is not None and available_width is not None:
            by_width = max(1, (available_width - ROW_PREFIX_WIDTH) // max(1, cell_width + CELL_SEPARATOR_WIDTH))
            columns = min(columns, by_width)
        return cls(item_count, _cap_columns(columns, item_count, max_columns), initial_index)

    def __repr__(self) -> str:
        return (
            f"GridNavigator(items={self._item_count}, cols={self._columns}, "
            f"rows={self.rows}, focused={self._focused_index})"
        )

    @property
    def focused_index(self) -> int:
        return self._focused_index

    @property
    def item_count(self) -> int:
        return self._item_count

    @item_count.setter
    def item_count(self, value: int) -> None:
        self._item_count = max(0, value)
        if self._item_count == 0:
            self._focused_index = 0
        else:
            self._focused_index = max(0, min(self._focused_index, self._item_count - 1))

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        self._columns = max(1, value)

    @property
    def rows(self) -> int:
        if self._item_count == 0:
            return 0
        return (self._item_count + self._columns - 1) // self._columns

    @property
    def focused_row(self) -> int:
        return self._focused_index // self._columns

    @property
    def focused_column(self) -> int:
        return self._focused_index % self._columns

    @property
    def is_empty(self) -> bool:
        return self._item_count == 0

    def is_focused(self, index: int) -> bool:
        return index == self._focused_index

    def move_left(self) -> None:
        if self._item_count == 0:
            return
        self._focused_index = (self._focused_index - 1) % self._item_count

    def move_right(self) -> None:
        if self._item_count == 0:
            return
        self._focused_index = (self._focused_index + 1) % self._item_count

    def _move_vertical(self, step: int) -> None:
        if self._item_count == 0:
            return
        col = self.focused_column
        row = self.focused_row
        total_rows = self.rows
        # A short last row has holes; skip rows with no item in this column.
        for _ in range(total_rows):
            row = (row + step) % total_rows
            candidate = row * self._columns + col
            if candidate < self._item_count:
                self._focused_index = candidate
                return

    def move_up(self) -> None:
        self._move_vertical(-1)

    def move_down(self) -> None:
        self._move_vertical(1)

    def jump_to(self, index: int) -> None:
        if self._item_count == 0:
            return
        self._focused_index = max(0, min(index, self._item_count - 1))

    def jump_to_cell(self, row: int, col: int) -> None:
        if self._item_count == 0:
            return
        row = max(0, min(row, self.rows - 1))
        col = max(0, min(col, self._columns - 1))
        self.jump_to(row * self._columns + col)

    def jump_to_first(self) -> None:
        self.jump_to(0)

    def jump_to_last(self) -> None:
        self.jump_to(self._item_count - 1)

    def reset(self, initial_index: int = 0) -> None:
        if self._item_count == 0:
            self._focused_index = 0
        else:
            self._focused_index = max(0, min(initial_index, self._item_count - 1))

    @property
    def layout(self) -> GridLayout:
        return GridLayout(
            item_count=self._item_count,
            columns=self._columns,
            rows=self.rows,
            focused_index=self._focused_index,
            focused_row=self.focused_row,
            focused_column=self.focused_column,
        )

    def rows_of(self, items: Sequence[T]) -> Iterator[GridRow[T]]:
        total_rows = self.rows
        for row in range(total_rows):
            start = row * self._columns
            end = min(start + self._columns, self._item_count)
            yield GridRow(
                row=row,
                start_index=start,
                items=tuple(items[min(start, len(items)) : min(end, len(items))]),
                is_last_row=row == total_rows - 1,
            )
