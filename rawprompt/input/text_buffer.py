"""Cursor-aware single-line text buffer for text-entry prompts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .bindings import KeyActionResult, KeyBinding, KeyBindings
from .events import KeyEvent, KeyEventType

DEFAULT_CURSOR_CHAR = "▌"


@dataclass(frozen=True)
class BlockCursorText:
    """Buffer text split around the cursor cell for block-cursor rendering."""

    before: str
    cursor: str
    after: str


class TextInputBuffer:
    """Editable text with a cursor position and optional length cap."""

    def __init__(self, initial_text: str = "", max_length: int | None = None) -> None:
        self.max_length = max_length
        self._text = self._capped(initial_text)
        self._cursor = len(self._text)

    def _capped(self, text: str) -> str:
        if self.max_length is not None and len(text) > self.max_length:
            return text[: self.max_length]
        return text

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor_position(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    @property
    def is_empty(self) -> bool:
        return not self._text

    @property
    def cursor_at_start(self) -> bool:
        return self._cursor == 0

    @property
    def cursor_at_end(self) -> bool:
        return self._cursor == len(self._text)

    @property
    def text_before_cursor(self) -> str:
        return self._text[: self._cursor]

    @property
    def text_after_cursor(self) -> str:
        return self._text[self._cursor :]

    @property
    def char_at_cursor(self) -> str | None:
        if self._cursor < len(self._text):
            return self._text[self._cursor]
        return None

    def insert(self, char: str) -> bool:
        """Insert ``char`` at the cursor; ``False`` when empty or at capacity."""
        if not char:
            return False
        if self.max_length is not None and len(self._text) >= self.max_length:
            return False
        self._text = self.text_before_cursor + char + self.text_after_cursor
        self._cursor += len(char)
        return True

    def insert_text(self, text: str) -> int:
        """Insert as much of ``text`` as fits and return how many chars went in."""
        if not text:
            return 0
        if self.max_length is not None:
            available = self.max_length - len(self._text)
            if available <= 0:
                return 0
            text = text[:available]
        self._text = self.text_before_cursor + text + self.text_after_cursor
        self._cursor += len(text)
        return len(text)

    def backspace(self) -> bool:
        if self._cursor == 0:
            return False
        self._text = self._text[: self._cursor - 1] + self.text_after_cursor
        self._cursor -= 1
        return True

    def delete(self) -> bool:
        if self._cursor >= len(self._text):
            return False
        self._text = self.text_before_cursor + self._text[self._cursor + 1 :]
        return True

    def _word_start_before(self, pos: int) -> int:
        text = self._text
        pos -= 1
        while pos > 0 and text[pos] == " ":
            pos -= 1
        while pos > 0 and text[pos - 1] != " ":
            pos -= 1
        return pos

    def backspace_word(self) -> bool:
        """Delete back to the start of the previous word, skipping trailing spaces."""
        if self._cursor == 0:
            return False
        start = self._word_start_before(self._cursor)
        self._text = self._text[:start] + self.text_after_cursor
        self._cursor = start
        return True

    def clear(self) -> None:
        self._text = ""
        self._cursor = 0

    def set_text(self, text: str) -> None:
        self._text = self._capped(text)
        self._cursor = len(self._text)

    def move_cursor(self, delta: int) -> None:
        self.set_cursor_position(self._cursor + delta)

    def move_cursor_to_start(self) -> None:
        self._cursor = 0

    def move_cursor_to_end(self) -> None:
        self._cursor = len(self._text)

    def set_cursor_position(self, position: int) -> None:
        self._cursor = max(0, min(position, len(self._text)))

    def move_cursor_word_left(self) -> None:
        if self._cursor == 0:
            return
        self._cursor = self._word_start_before(self._cursor)

    def move_cursor_word_right(self) -> None:
        text = self._text
        pos = self._cursor
        while pos < len(text) and text[pos] != " ":
            pos += 1
        while pos < len(text) and text[pos] == " ":
            pos += 1
        self._cursor = pos

    def handle_key(self, event: KeyEvent) -> bool:
        """Apply a standard editing key; return whether the buffer changed."""
        if event.type is KeyEventType.CHAR:
            return event.char is not None and self.insert(event.char)
        if event.type is KeyEventType.SPACE:
            return self.insert(" ")
        if event.type is KeyEventType.BACKSPACE:
            return self.backspace()
        if event.type is KeyEventType.ARROW_LEFT:
            if self.cursor_at_start:
                return False
            self.move_cursor(-1)
            return True
        if event.type is KeyEventType.ARROW_RIGHT:
            if self.cursor_at_end:
                return False
            self.move_cursor(1)
            return True
        return False

    def handle_key_extended(self, event: KeyEvent, ctrl: bool = False) -> bool:
        """Like ``handle_key`` but with word-wise moves and deletes when ``ctrl``."""
        if not ctrl:
            return self.handle_key(event)
        before = self._cursor
        if event.type is KeyEventType.ARROW_LEFT:
            self.move_cursor_word_left()
            return self._cursor != before
        if event.type is KeyEventType.ARROW_RIGHT:
            self.move_cursor_word_right()
            return self._cursor != before
        if event.type is KeyEventType.BACKSPACE:
            return self.backspace_word()
        return self.handle_key(event)

    def text_with_cursor(self, cursor_char: str = DEFAULT_CURSOR_CHAR, show_cursor: bool = True) -> str:
        if not show_cursor:
            return self._text
        return self.text_before_cursor + cursor_char + self.text_after_cursor

    def block_cursor_text(self) -> BlockCursorText:
        cursor = self.char_at_cursor
        return BlockCursorText(
            before=self.text_before_cursor,
            cursor=cursor if cursor is not None else " ",
            after=self._text[self._cursor + 1 :] if cursor is not None else "",
        )

    def append(self, text: str) -> None:
        self.move_cursor_to_end()
        self.insert_text(text)

    def remove_last(self) -> bool:
        self.move_cursor_to_end()
        return self.backspace()

    def bindings(self, on_input: Callable[[], object] | None = None) -> KeyBindings:
        return text_input(self, on_input)


_EDIT_KEYS = (
    KeyEventType.CHAR,
    KeyEventType.SPACE,
    KeyEventType.BACKSPACE,
    KeyEventType.ARROW_LEFT,
    KeyEventType.ARROW_RIGHT,
)


def text_input(buffer: TextInputBuffer, on_input: Callable[[], object] | None = None) -> KeyBindings:
    """Route editing keys into ``buffer``.

    Keys that leave the buffer unchanged (Backspace at start, a char past
    ``max_length``) return ``IGNORED`` so later bindings may claim them.
    """

    def action(event: KeyEvent) -> KeyActionResult:
        if not buffer.handle_key(event):
            return KeyActionResult.IGNORED
        if on_input is not None:
            on_input()
        return KeyActionResult.HANDLED

    return KeyBindings([KeyBinding.multi(_EDIT_KEYS, action)])
