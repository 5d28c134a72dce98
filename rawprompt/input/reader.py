"""Low-level terminal input decoding.

Reads raw bytes from a terminal and translates them into ``KeyEvent`` values.
A lone ESC byte is told apart from an arrow-key CSI sequence by waiting a
short delay and peeking for follow-up bytes. That is a timing heuristic, not a
protocol parser: under heavy input latency an arrow key can be reported as ESC
followed by stray characters, and unrecognized CSI sequences longer than two
bytes leak their tail as separate events.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..context import resolve_terminal
from ..terminal import Terminal
from .events import KeyEvent, KeyEventType

logger = logging.getLogger(__name__)

ESC_SEQUENCE_DELAY_MS = 30
ESC = 27
CSI_BRACKET = 0x5B

_FIXED_BYTES: dict[int, KeyEventType] = {
    13: KeyEventType.ENTER,
    10: KeyEventType.ENTER,
    3: KeyEventType.CTRL_C,
    18: KeyEventType.CTRL_R,
    4: KeyEventType.CTRL_D,
    5: KeyEventType.CTRL_E,
    9: KeyEventType.TAB,
    32: KeyEventType.SPACE,
    47: KeyEventType.SLASH,
    127: KeyEventType.BACKSPACE,
    8: KeyEventType.BACKSPACE,
}

_ARROW_FINAL_BYTES: dict[int, KeyEventType] = {
    0x41: KeyEventType.ARROW_UP,
    0x42: KeyEventType.ARROW_DOWN,
    0x43: KeyEventType.ARROW_RIGHT,
    0x44: KeyEventType.ARROW_LEFT,
}


def classify_byte(byte: int) -> KeyEvent | None:
    """Classify a byte that needs no look-ahead.

    Returns ``None`` only for ESC, which must go through sequence detection.
    """
    fixed = _FIXED_BYTES.get(byte)
    if fixed is not None:
        return KeyEvent(fixed)
    if 1 <= byte <= 26:
        return KeyEvent(KeyEventType.CTRL_GENERIC, chr(byte + 96))
    if byte == ESC:
        return None
    ch = bytes([byte & 0xFF]).decode("utf-8", errors="replace")
    if len(ch) == 1 and " " <= ch <= "~":
        return KeyEvent(KeyEventType.CHAR, ch)
    logger.debug("unclassified input byte %#04x", byte)
    return KeyEvent(KeyEventType.UNKNOWN)


class KeyDecoder:
    """Stateful byte-to-event decoder bound to one terminal.

    Bytes read ahead while checking an ESC that did not turn out to be an
    arrow sequence are kept in a pending queue and decoded first on the next
    ``read`` call, so a fast keystroke typed right after ESC is not dropped.
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        esc_delay_ms: int = ESC_SEQUENCE_DELAY_MS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.terminal = resolve_terminal(terminal)
        self.esc_delay_ms = max(0, int(esc_delay_ms))
        self._sleep = sleep
        self._pending: list[int] = []

    @property
    def pending(self) -> tuple[int, ...]:
        return tuple(self._pending)

    def _next_byte(self) -> int:
        if self._pending:
            return self._pending.pop(0)
        return self.terminal.input.read_byte()

    def _peek_byte(self) -> int | None:
        if self._pending:
            return self._pending.pop(0)
        return self.terminal.input.read_byte_nowait(0.0)

    def read(self) -> KeyEvent:
        """Block for the next key and return its normalized event."""
        byte = self._next_byte()
        event = classify_byte(byte)
        if event is not None:
            return event
        return self._read_escape()

    def _read_escape(self) -> KeyEvent:
        if self.esc_delay_ms and not self._pending:
            self._sleep(self.esc_delay_ms / 1000.0)
        first = self._peek_byte()
        if first is None:
            return KeyEvent(KeyEventType.ESC)
        if first != CSI_BRACKET:
            self._pending.insert(0, first)
            return KeyEvent(KeyEventType.ESC)
        second = self._peek_byte()
        if second is None:
            return KeyEvent(KeyEventType.ESC)
        arrow = _ARROW_FINAL_BYTES.get(second)
        if arrow is not None:
            return KeyEvent(arrow)
        logger.debug("unsupported CSI sequence ESC [ %#04x", second)
        return KeyEvent(KeyEventType.ESC)
