"""Incremental render surface and the raw-mode session around it.

``RenderSurface`` counts every line it writes so ``clear`` can move the cursor
back up over exactly that output and erase it, leaving earlier terminal
content untouched. ``Session`` owns raw-mode and cursor-visibility lifecycle.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterator
from typing import TypeVar

from ..context import resolve_terminal
from ..terminal import (
    ERASE_TO_END,
    Terminal,
    TerminalInfo,
    TerminalModeState,
    cursor_up,
    enter_raw,
    hide_cursor as _hide_cursor,
    show_cursor as _show_cursor,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RenderSurface:
    def __init__(self, terminal: Terminal | None = None) -> None:
        self.terminal = resolve_terminal(terminal)
        self._line_count = 0

    @property
    def line_count(self) -> int:
        return self._line_count

    @property
    def info(self) -> TerminalInfo:
        return TerminalInfo(self.terminal.output)

    def writeln(self, line: str = "") -> None:
        self.terminal.output.writeln(line)
        self._line_count += 1 + line.count("\n")

    def write(self, text: str) -> None:
        self.terminal.output.write(text)
        self._line_count += text.count("\n")

    def clear(self) -> None:
        """Erase everything written since the last clear."""
        if self._line_count > 0:
            self.terminal.output.write(cursor_up(self._line_count))
            self.terminal.output.write(ERASE_TO_END)
        self._line_count = 0


class Session:
    """Raw-mode and cursor lifecycle for one prompt.

    ``start`` and ``end`` are idempotent, so nested cleanup paths may call
    ``end`` more than once without restoring the terminal twice.
    """

    def __init__(self, terminal: Terminal | None = None, hide_cursor: bool = False, raw_mode: bool = False) -> None:
        self.terminal = resolve_terminal(terminal)
        self.hide_cursor = hide_cursor
        self.raw_mode = raw_mode
        self._mode_state: TerminalModeState | None = None
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        """Enter the session; a failure part way through undoes the mode change."""
        if self._active:
            return
        try:
            if self.raw_mode:
                self._mode_state = enter_raw(self.terminal.input)
            if self.hide_cursor:
                _hide_cursor(self.terminal.output)
        except BaseException:
            self._restore_modes()
            raise
        self._active = True

    def _restore_modes(self) -> None:
        if self._mode_state is not None:
            self._mode_state.restore()
            self._mode_state = None

    def end(self) -> None:
        if not self._active:
            return
        self._active = False
        self._restore_modes()
        if self.hide_cursor:
            _show_cursor(self.terminal.output)

    @contextlib.contextmanager
    def active(self) -> Iterator[Session]:
        try:
            self.start()
            yield self
        finally:
            self.end()

    def run(self, body: Callable[[], T]) -> T:
        with self.active():
            return body()

    def run_with_output(self, body: Callable[[RenderSurface], T], clear_on_end: bool = False) -> T:
        surface = RenderSurface(self.terminal)
        try:
            with self.active():
                return body(surface)
        finally:
            if clear_on_end:
                surface.clear()
