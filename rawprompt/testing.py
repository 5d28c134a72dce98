"""In-memory terminal for driving prompts from tests and scripts.

``ScriptedTerminal`` queues input bytes ahead of time and records every write,
so a full prompt loop can run without a tty.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from .input.events import KeyEventType
from .terminal import DEFAULT_COLUMNS, DEFAULT_LINES, Terminal

KEY_BYTES: dict[KeyEventType, tuple[int, ...]] = {
    KeyEventType.ENTER: (13,),
    KeyEventType.ESC: (27,),
    KeyEventType.CTRL_C: (3,),
    KeyEventType.CTRL_R: (18,),
    KeyEventType.CTRL_D: (4,),
    KeyEventType.CTRL_E: (5,),
    KeyEventType.TAB: (9,),
    KeyEventType.SPACE: (32,),
    KeyEventType.SLASH: (47,),
    KeyEventType.BACKSPACE: (127,),
    KeyEventType.ARROW_UP: (27, 91, 65),
    KeyEventType.ARROW_DOWN: (27, 91, 66),
    KeyEventType.ARROW_RIGHT: (27, 91, 67),
    KeyEventType.ARROW_LEFT: (27, 91, 68),
}


class InputExhaustedError(EOFError):
    """Raised when a scripted prompt reads past the queued input."""


class ScriptedInput:
    def __init__(self) -> None:
        self._bytes: deque[int] = deque()
        self.echo_mode = True
        self.line_mode = True
        self.has_terminal = True

    @property
    def bytes_remaining(self) -> int:
        return len(self._bytes)

    def queue_bytes(self, data: Iterable[int]) -> None:
        self._bytes.extend(byte & 0xFF for byte in data)

    def queue_text(self, text: str) -> None:
        self.queue_bytes(text.encode("utf-8"))

    def queue_key(self, key: KeyEventType, char: str | None = None) -> None:
        """Queue the bytes a real terminal sends for ``key``.

        ``CHAR`` needs ``char``; ``CTRL_GENERIC`` takes the letter (``"a"`` for Ctrl+A).
        """
        if key is KeyEventType.CHAR:
            if not char:
                raise ValueError("CHAR keys need a character")
            self.queue_text(char)
        elif key is KeyEventType.CTRL_GENERIC:
            if not char or not "a" <= char.lower() <= "z":
                raise ValueError("CTRL_GENERIC keys need a letter")
            self.queue_bytes((ord(char.lower()) - 96,))
        elif key in KEY_BYTES:
            self.queue_bytes(KEY_BYTES[key])
        else:
            raise ValueError(f"no byte sequence for {key}")

    def queue_keys(self, *keys: KeyEventType) -> None:
        for key in keys:
            self.queue_key(key)

    def read_byte(self) -> int:
        if not self._bytes:
            raise InputExhaustedError("scripted terminal has no more queued input")
        return self._bytes.popleft()

    def read_byte_nowait(self, timeout: float = 0.0) -> int | None:
        if not self._bytes:
            return None
        return self._bytes.popleft()

    def reset(self) -> None:
        self._bytes.clear()
        self.echo_mode = True
        self.line_mode = True
        self.has_terminal = True


class ScriptedOutput:
    def __init__(self, columns: int = DEFAULT_COLUMNS, lines: int = DEFAULT_LINES) -> None:
        self.columns = columns
        self.lines = lines
        self.has_terminal = True
        self.writes: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self.writes)

    def write(self, text: str) -> None:
        self.writes.append(text)

    def writeln(self, text: str = "") -> None:
        self.writes.append(text + "\n")

    def contains(self, text: str) -> bool:
        return text in self.text

    def set_dimensions(self, columns: int | None = None, lines: int | None = None) -> None:
        if columns is not None:
            self.columns = columns
        if lines is not None:
            self.lines = lines

    def reset(self) -> None:
        self.writes.clear()
        self.columns = DEFAULT_COLUMNS
        self.lines = DEFAULT_LINES
        self.has_terminal = True


class ScriptedTerminal(Terminal):
    input: ScriptedInput
    output: ScriptedOutput

    def __init__(self, columns: int = DEFAULT_COLUMNS, lines: int = DEFAULT_LINES) -> None:
        super().__init__(ScriptedInput(), ScriptedOutput(columns, lines))

    def reset(self) -> None:
        self.input.reset()
        self.output.reset()
