"""Query-driven list scaffolds.

``SearchableListPrompt`` filters a selectable list behind a ``/`` toggle.
``RankedListPrompt`` re-ranks on every keystroke with fuzzy or substring
matching and returns the single focused item.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Generic, TypeVar

from ..input import bindings as kb
from ..input.bindings import KeyActionResult, KeyBinding, KeyBindings
from ..input.text_buffer import TextInputBuffer, text_input
from ..navigation import ListNavigator, SelectionController
from ..render.surface import RenderSurface
from ..runtime import EngineConfig, PromptResult
from ..search import RankedItem, RankResult, highlight_spans, rank_items, substring_match
from ..terminal import Terminal
from . import chrome

logger = logging.getLogger(__name__)

T = TypeVar("T")

ItemRenderer = Callable[[RenderSurface, T, int, bool, bool], None]
RankedRenderer = Callable[[RenderSurface, RankedItem[T], int, bool], None]
FrameSection = Callable[[RenderSurface], None]


def contains_filter(label: Callable[[T], str]) -> Callable[[T, str], bool]:
    """Case-insensitive substring filter over ``label(item)``."""

    def matches(item: T, query: str) -> bool:
        return query.lower() in label(item).lower()

    return matches


def _while_active(is_active: Callable[[], bool], bindings: KeyBindings) -> KeyBindings:
    """Make every binding decline its keys while ``is_active()`` is false."""

    def gate(binding: KeyBinding) -> KeyBinding:
        def action(event):
            if not is_active():
                return KeyActionResult.IGNORED
            return binding.action(event)

        return dataclasses.replace(binding, action=action)

    return KeyBindings([gate(binding) for binding in bindings])


class SearchableListPrompt(Generic[T]):
    """Selectable list with an optional search line.

    ``/`` turns search on and off; turning it off clears the query. While
    search is on, typed keys edit the query (Space included) and the list is
    narrowed to items accepted by ``filter_item``. Every change to the
    filtered list resets focus to the top and drops selections that no longer
    fall inside it.
    """

    def __init__(
        self,
        title: str,
        items: Sequence[T],
        label: Callable[[T], str] = str,
        multi_select: bool = False,
        max_visible: int = 10,
        search_enabled: bool = True,
        initial_selection: Iterable[int] | None = None,
        filter_item: Callable[[T, str], bool] | None = None,
        terminal: Terminal | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.title = title
        self.items = list(items)
        self.label = label
        self.multi_select = multi_select
        self.max_visible = max(1, max_visible)
        self.search_enabled = search_enabled
        self.initial_selection = tuple(initial_selection or ())
        self.filter_item = filter_item if filter_item is not None else contains_filter(label)
        self.terminal = terminal
        self.config = config
        self.query = TextInputBuffer()
        self.filtered: list[T] = list(self.items)
        self.search_active = search_enabled
        self.nav = ListNavigator(len(self.items), self.max_visible)
        self.selection = SelectionController(multi_select)
        self.bindings = KeyBindings()
        self.was_cancelled = False

    def _init_state(self) -> None:
        self.query.clear()
        self.search_active = self.search_enabled
        self.filtered = list(self.items)
        self.nav = ListNavigator(len(self.filtered), self.max_visible)
        valid = [index for index in self.initial_selection if 0 <= index < len(self.items)]
        self.selection = SelectionController(self.multi_select, valid)
        self.was_cancelled = False

    def update_filter(self) -> None:
        query = self.query.text
        if not self.search_active or not query:
            self.filtered = list(self.items)
        else:
            self.filtered = [item for item in self.items if self.filter_item(item, query)]
        self.nav.item_count = len(self.filtered)
        self.nav.reset()
        self.selection.constrain_to(len(self.filtered))
        logger.debug("search %r kept %d of %d items", query, len(self.filtered), len(self.items))

    def _toggle_search(self) -> None:
        self.search_active = not self.search_active
        if not self.search_active:
            self.query.clear()
        self.update_filter()

    def _build_bindings(self) -> KeyBindings:
        nav = self.nav
        selection = self.selection

        def on_cancel() -> None:
            self.was_cancelled = True

        bindings = (
            kb.vertical_navigation(nav.move_up, nav.move_down)
            + kb.search_toggle(self._toggle_search)
            + _while_active(lambda: self.search_active, text_input(self.query, on_input=self.update_filter))
        )
        if self.multi_select:
            bindings = bindings + kb.conditional_toggle(
                lambda: bool(self.filtered),
                lambda: selection.toggle(nav.selected_index),
                hint_description="toggle",
            )
        return bindings + kb.prompt(on_cancel=on_cancel)

    def _default_item(self, surface: RenderSurface, item: T, _index: int, focused: bool, selected: bool) -> None:
        text = self.label(item)
        query = self.query.text
        if self.search_active and query:
            match = substring_match(text, query)
            if match is not None:
                text = highlight_spans(text, match.indices)
        check = chrome.check_mark(selected) if self.multi_select else ""
        surface.writeln(f"{chrome.marker(focused)}{check}{text}")

    def _write_search_line(self, surface: RenderSurface) -> None:
        if self.search_active:
            surface.writeln(f"Search: {self.query.text_with_cursor()}")
        else:
            surface.writeln(f"{chrome.DIM}/ to search{chrome.RESET}")

    def run(self, render_item: ItemRenderer | None = None) -> list[T]:
        """Return the selected filtered items, or the focused one when none are selected.

        Cancel, an empty item list and an empty filtered list all return ``[]``.
        """
        if not self.items:
            return []
        self._init_state()
        self.bindings = self._build_bindings()
        draw_item = render_item if render_item is not None else self._default_item

        def render(surface: RenderSurface) -> None:
            chrome.write_title(surface, self.title)
            self._write_search_line(surface)
            window = self.nav.visible_window(self.filtered)
            if window.is_empty:
                surface.writeln(chrome.NO_MATCHES)
            if window.has_overflow_above:
                surface.writeln(chrome.OVERFLOW_ABOVE)
            for index, item in window.indexed():
                draw_item(surface, item, index, self.nav.is_selected(index), self.selection.is_selected(index))
            if window.has_overflow_below:
                surface.writeln(chrome.OVERFLOW_BELOW)
            chrome.write_footer(surface, self.bindings)

        result = chrome.prompt_loop(self.terminal, self.config).run(render, self.bindings)
        if result is PromptResult.CANCELLED or self.was_cancelled or not self.filtered:
            return []
        return self.selection.get_selected_many(self.filtered, fallback_index=self.nav.selected_index)


class RankedListPrompt(Generic[T]):
    """Type-to-rank picker returning the focused item.

    An empty query lists every item in input order. ``Ctrl+R`` flips between
    fuzzy and substring matching and re-ranks immediately.
    """

    def __init__(
        self,
        title: str,
        items: Sequence[T],
        max_visible: int = 12,
        initial_fuzzy: bool = True,
        reserved_lines: int = 8,
        terminal: Terminal | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.title = title
        self.items = list(items)
        self.max_visible = max(1, max_visible)
        self.initial_fuzzy = initial_fuzzy
        self.reserved_lines = reserved_lines
        self.terminal = terminal
        self.config = config
        self.query = TextInputBuffer()
        self.use_fuzzy = initial_fuzzy
        self.ranked: list[RankedItem[T]] = []
        self.nav = ListNavigator(len(self.items), self.max_visible)
        self.bindings = KeyBindings()

    def run(
        self,
        item_label: Callable[[T], str] = str,
        rank_item: Callable[[T, str, bool], RankResult | None] | None = None,
        item_subtitle: Callable[[T], str | None] | None = None,
        render_item: RankedRenderer | None = None,
        before_items: FrameSection | None = None,
        extra_bindings: KeyBindings | None = None,
    ) -> T | None:
        """Return the focused ranked item on Enter; ``None`` on cancel or with no matches."""
        self.query.clear()
        self.use_fuzzy = self.initial_fuzzy
        self.nav = ListNavigator(len(self.items), self.max_visible)
        chosen: list[T] = []

        def update_ranking() -> None:
            self.ranked = rank_items(self.items, self.query.text, item_label, self.use_fuzzy, rank_item)
            self.nav.item_count = len(self.ranked)
            self.nav.reset()

        def toggle_mode() -> None:
            self.use_fuzzy = not self.use_fuzzy
            update_ranking()

        def on_confirm() -> None:
            if self.ranked:
                chosen.append(self.ranked[self.nav.selected_index].item)

        def default_item(surface: RenderSurface, entry: RankedItem[T], _index: int, focused: bool) -> None:
            line = chrome.marker(focused) + highlight_spans(item_label(entry.item), entry.indices)
            subtitle = item_subtitle(entry.item) if item_subtitle is not None else None
            if subtitle:
                line += f"  {chrome.DIM}{subtitle}{chrome.RESET}"
            surface.writeln(line)

        update_ranking()
        self.bindings = kb.vertical_navigation(self.nav.move_up, self.nav.move_down) + text_input(
            self.query, on_input=update_ranking
        )
        self.bindings = self.bindings + kb.ctrl_r(toggle_mode, hint_description="toggle mode")
        if extra_bindings is not None:
            self.bindings = self.bindings + extra_bindings
        self.bindings = self.bindings + kb.confirm(on_confirm) + kb.cancel()
        draw_item = render_item if render_item is not None else default_item

        def render(surface: RenderSurface) -> None:
            self.nav.max_visible = chrome.fit_visible_rows(surface.info.rows, self.reserved_lines, self.max_visible)
            chrome.write_title(surface, self.title)
            if before_items is not None:
                before_items(surface)
            else:
                mode = "Fuzzy" if self.use_fuzzy else "Substring"
                surface.writeln(f"Search: {self.query.text_with_cursor()}  {chrome.DIM}({mode}){chrome.RESET}")
                surface.writeln(f"{chrome.DIM}Matches: {len(self.ranked)}{chrome.RESET}")
            window = self.nav.visible_window(self.ranked)
            if window.is_empty:
                surface.writeln(chrome.NO_MATCHES)
            for index, entry in window.indexed():
                draw_item(surface, entry, index, self.nav.is_selected(index))
            if window.has_overflow_below:
                surface.writeln(chrome.OVERFLOW_BELOW)
            chrome.write_footer(surface, self.bindings)

        result = chrome.prompt_loop(self.terminal, self.config).run(render, self.bindings)
        if result is PromptResult.CANCELLED or not chosen:
            return None
        return chosen[0]
