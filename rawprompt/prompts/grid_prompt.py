"""Selectable grid scaffold: items laid out in boxed cells, arrows move in 2D."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from typing import Generic, TypeVar

from ..input import bindings as kb
from ..input.bindings import KeyBindings
from ..navigation import GridNavigator, SelectionController
from ..navigation.grid_navigator import CELL_SEPARATOR_WIDTH, ROW_PREFIX_WIDTH
from ..render.surface import RenderSurface
from ..render.text import clamp_int, pad_right, truncate
from ..runtime import EngineConfig, PromptResult
from ..terminal import Terminal, TerminalInfo
from . import chrome

T = TypeVar("T")

CellRenderer = Callable[[T, int, bool, bool, int], str]

MIN_CELL_WIDTH = 10
MAX_CELL_WIDTH = 40
CELL_PADDING = 4
COLUMN_SEPARATOR = "│"
ROW_SEPARATOR = "─"
CROSSING = "┼"


def auto_columns(item_count: int, cell_width: int, available_width: int, max_columns: int | None = None) -> int:
    """Columns for a roughly square grid that still fits ``available_width``.

    Without ``max_columns`` the cap is ``ceil(sqrt(item_count))`` but never
    below two.
    """
    unit = cell_width + CELL_SEPARATOR_WIDTH
    by_width = max(1, (available_width - ROW_PREFIX_WIDTH + CELL_SEPARATOR_WIDTH) // unit)
    desired = max(2, min(item_count, math.ceil(math.sqrt(max(0, item_count)))))
    cap = max_columns if max_columns is not None and max_columns > 0 else desired
    return min(by_width, cap)


class SelectableGridPrompt(Generic[T]):
    """Pick one or several items laid out in a grid.

    ``columns=0`` sizes the grid from the terminal width on every frame.
    Cell renderers get ``(item, index, focused, selected, cell_width)`` and
    return the cell text, padded to ``cell_width``.
    """

    def __init__(
        self,
        title: str,
        items: Sequence[T],
        label: Callable[[T], str] = str,
        multi_select: bool = False,
        columns: int = 0,
        cell_width: int | None = None,
        max_columns: int | None = None,
        initial_selection: Iterable[int] | None = None,
        terminal: Terminal | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.title = title
        self.items = list(items)
        self.label = label
        self.multi_select = multi_select
        self.columns = max(0, columns)
        self.max_columns = max_columns
        self.initial_selection = tuple(initial_selection or ())
        self.terminal = terminal
        self.config = config
        if cell_width is None:
            widest = max((len(label(item)) for item in self.items), default=0)
            cell_width = clamp_int(widest + CELL_PADDING, MIN_CELL_WIDTH, MAX_CELL_WIDTH)
        self.cell_width = cell_width
        self.grid = GridNavigator(len(self.items), self.columns or 1)
        self.selection = SelectionController(multi_select)
        self.bindings = KeyBindings()
        self.was_cancelled = False

    @classmethod
    def responsive(
        cls,
        title: str,
        items: Sequence[T],
        label: Callable[[T], str] = str,
        multi_select: bool = False,
        max_columns: int | None = None,
        terminal: Terminal | None = None,
        config: EngineConfig | None = None,
    ) -> SelectableGridPrompt[T]:
        return cls(
            title,
            items,
            label=label,
            multi_select=multi_select,
            max_columns=max_columns,
            terminal=terminal,
            config=config,
        )

    @classmethod
    def single(cls, title: str, items: Sequence[T], **kwargs) -> T | None:
        chosen = cls(title, items, multi_select=False, **kwargs).run()
        return chosen[0] if chosen else None

    @classmethod
    def multi(cls, title: str, items: Sequence[T], **kwargs) -> list[T]:
        return cls(title, items, multi_select=True, **kwargs).run()

    def _recompute_layout(self, available_width: int) -> None:
        if self.columns > 0:
            self.grid.columns = self.columns
        else:
            self.grid.columns = auto_columns(len(self.items), self.cell_width, available_width, self.max_columns)

    def _init_state(self, available_width: int) -> None:
        self.grid = GridNavigator(len(self.items), self.columns or 1)
        self._recompute_layout(available_width)
        valid = [index for index in self.initial_selection if 0 <= index < len(self.items)]
        self.selection = SelectionController(self.multi_select, valid)
        self.was_cancelled = False

    def _build_bindings(self, extra_bindings: KeyBindings | None) -> KeyBindings:
        grid = self.grid
        selection = self.selection

        def on_cancel() -> None:
            self.was_cancelled = True

        bindings = kb.grid_selection(
            grid.move_up,
            grid.move_down,
            grid.move_left,
            grid.move_right,
            on_toggle=(lambda: selection.toggle(grid.focused_index)) if self.multi_select else None,
            show_toggle_hint=self.multi_select,
            on_cancel=on_cancel,
        )
        if extra_bindings is not None:
            bindings = extra_bindings + bindings
        return bindings

    def _default_cell(self, item: T, _index: int, focused: bool, selected: bool, width: int) -> str:
        check = chrome.check_mark(selected) if self.multi_select else ""
        text = pad_right(truncate(check + self.label(item), width), width)
        if focused:
            return f"{chrome.INVERSE}{text}{chrome.RESET}"
        return text

    def run(self, render_cell: CellRenderer | None = None, extra_bindings: KeyBindings | None = None) -> list[T]:
        """Return the selected items in order, the focused item when none are selected, ``[]`` on cancel."""
        if not self.items:
            return []
        loop = chrome.prompt_loop(self.terminal, self.config)
        self._init_state(TerminalInfo(loop.terminal.output).columns)
        self.bindings = self._build_bindings(extra_bindings)
        draw_cell = render_cell if render_cell is not None else self._default_cell
        gutter = " " * ROW_PREFIX_WIDTH

        def render(surface: RenderSurface) -> None:
            if self.columns == 0:
                self._recompute_layout(surface.info.columns)
            chrome.write_title(surface, self.title)
            width = self.cell_width
            for row in self.grid.rows_of(self.items):
                cells = [
                    draw_cell(item, index, self.grid.is_focused(index), self.selection.is_selected(index), width)
                    for index, item in enumerate(row.items, start=row.start_index)
                ]
                surface.writeln(gutter + COLUMN_SEPARATOR.join(cells))
                if not row.is_last_row:
                    surface.writeln(gutter + CROSSING.join([ROW_SEPARATOR * width] * self.grid.columns))
            chrome.write_footer(surface, self.bindings)

        result = loop.run(render, self.bindings)
        if result is PromptResult.CANCELLED or self.was_cancelled:
            return []
        return self.selection.get_selected_many(self.items, fallback_index=self.grid.focused_index)
