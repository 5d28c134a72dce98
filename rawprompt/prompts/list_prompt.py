"""Selectable list scaffold: windowed list, wrapping focus, optional checkboxes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Generic, TypeVar

from ..input import bindings as kb
from ..input.bindings import KeyBindings
from ..navigation import ListNavigator, SelectionController
from ..render.surface import RenderSurface
from ..runtime import EngineConfig, PromptResult
from ..terminal import Terminal
from . import chrome

T = TypeVar("T")

ItemRenderer = Callable[[RenderSurface, T, int, bool, bool], None]
FrameSection = Callable[[RenderSurface], None]

DEFAULT_MAX_VISIBLE = 12
DEFAULT_RESERVED_LINES = 7


class SelectableListPrompt(Generic[T]):
    """Pick one or several items from a list.

    Navigation, selection and bindings are rebuilt at the start of every run,
    so a prompt object can be shown more than once. The item renderer gets
    ``(surface, item, absolute_index, focused, selected)``.
    """

    def __init__(
        self,
        title: str,
        items: Sequence[T],
        label: Callable[[T], str] = str,
        multi_select: bool = False,
        max_visible: int = DEFAULT_MAX_VISIBLE,
        initial_selection: Iterable[int] | None = None,
        reserved_lines: int = DEFAULT_RESERVED_LINES,
        terminal: Terminal | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.title = title
        self.items = list(items)
        self.label = label
        self.multi_select = multi_select
        self.max_visible = max(1, max_visible)
        self.initial_selection = tuple(initial_selection or ())
        self.reserved_lines = reserved_lines
        self.terminal = terminal
        self.config = config
        self.nav = ListNavigator(len(self.items), self.max_visible)
        self.selection = SelectionController(multi_select)
        self.bindings = KeyBindings()
        self.was_cancelled = False

    @classmethod
    def single(
        cls,
        title: str,
        items: Sequence[T],
        label: Callable[[T], str] = str,
        initial_index: int | None = None,
        terminal: Terminal | None = None,
        config: EngineConfig | None = None,
    ) -> T | None:
        """Run a single-select list and return the chosen item, or ``None`` on cancel."""
        prompt = cls(
            title,
            items,
            label=label,
            initial_selection=() if initial_index is None else (initial_index,),
            terminal=terminal,
            config=config,
        )
        chosen = prompt.run()
        return chosen[0] if chosen else None

    @classmethod
    def multi(
        cls,
        title: str,
        items: Sequence[T],
        label: Callable[[T], str] = str,
        initial_selection: Iterable[int] | None = None,
        terminal: Terminal | None = None,
        config: EngineConfig | None = None,
    ) -> list[T]:
        """Run a multi-select list with ``A`` bound to select all / clear."""
        prompt = cls(
            title,
            items,
            label=label,
            multi_select=True,
            initial_selection=initial_selection,
            terminal=terminal,
            config=config,
        )
        select_all = kb.letter(
            "a",
            lambda: prompt.selection.toggle_all(len(prompt.items)),
            hint_description="select all / clear",
        )
        return prompt.run(extra_bindings=select_all)

    def _init_state(self) -> None:
        count = len(self.items)
        self.nav = ListNavigator(count, self.max_visible)
        valid = [index for index in self.initial_selection if 0 <= index < count]
        self.selection = SelectionController(self.multi_select, valid)
        if valid:
            self.nav.jump_to(min(valid))
        self.was_cancelled = False

    def _build_bindings(self, extra_bindings: KeyBindings | None) -> KeyBindings:
        nav = self.nav
        selection = self.selection

        def on_cancel() -> None:
            self.was_cancelled = True

        bindings = kb.vertical_navigation(nav.move_up, nav.move_down)
        if self.multi_select:
            bindings = bindings + kb.toggle(lambda: selection.toggle(nav.selected_index))
        if extra_bindings is not None:
            bindings = bindings + extra_bindings
        return bindings + kb.prompt(on_cancel=on_cancel)

    def _default_item(self, surface: RenderSurface, item: T, _index: int, focused: bool, selected: bool) -> None:
        check = chrome.check_mark(selected) if self.multi_select else ""
        surface.writeln(f"{chrome.marker(focused)}{check}{self.label(item)}")

    def summary_line(self) -> str:
        return f"({self.selection.summary(len(self.items))})"

    def run(self, render_item: ItemRenderer | None = None, extra_bindings: KeyBindings | None = None) -> list[T]:
        return self.run_custom(render_item=render_item, extra_bindings=extra_bindings)

    def run_custom(
        self,
        render_item: ItemRenderer | None = None,
        before_items: FrameSection | None = None,
        after_items: FrameSection | None = None,
        extra_bindings: KeyBindings | None = None,
        on_before_render: Callable[[], None] | None = None,
    ) -> list[T]:
        """Run with optional sections drawn around the item window.

        Returns the selected items in list order; with nothing selected the
        focused item is returned. Cancel and an empty list return ``[]``.
        """
        if not self.items:
            return []
        self._init_state()
        self.bindings = self._build_bindings(extra_bindings)
        draw_item = render_item if render_item is not None else self._default_item

        def render(surface: RenderSurface) -> None:
            if on_before_render is not None:
                on_before_render()
            self.nav.max_visible = chrome.fit_visible_rows(surface.info.rows, self.reserved_lines, self.max_visible)
            chrome.write_title(surface, self.title)
            if before_items is not None:
                before_items(surface)
            window = self.nav.visible_window(self.items)
            if window.has_overflow_above:
                surface.writeln(chrome.OVERFLOW_ABOVE)
            for index, item in window.indexed():
                draw_item(surface, item, index, self.nav.is_selected(index), self.selection.is_selected(index))
            if window.has_overflow_below:
                surface.writeln(chrome.OVERFLOW_BELOW)
            if after_items is not None:
                after_items(surface)
            chrome.write_footer(surface, self.bindings)

        result = chrome.prompt_loop(self.terminal, self.config).run(render, self.bindings)
        if result is PromptResult.CANCELLED or self.was_cancelled:
            return []
        return self.selection.get_selected_many(self.items, fallback_index=self.nav.selected_index)
