"""Normalized key event vocabulary shared by decoders, bindings, and prompts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class KeyEventType(Enum):
    ENTER = "enter"
    ESC = "esc"
    CTRL_C = "ctrl_c"
    CTRL_R = "ctrl_r"
    CTRL_D = "ctrl_d"
    CTRL_E = "ctrl_e"
    CTRL_GENERIC = "ctrl_generic"
    TAB = "tab"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    BACKSPACE = "backspace"
    SPACE = "space"
    SLASH = "slash"
    CHAR = "char"
    UNKNOWN = "unknown"


ARROW_KEYS = frozenset(
    {
        KeyEventType.ARROW_UP,
        KeyEventType.ARROW_DOWN,
        KeyEventType.ARROW_LEFT,
        KeyEventType.ARROW_RIGHT,
    }
)


@dataclass(frozen=True)
class KeyEvent:
    """One decoded keypress.

    ``char`` carries the printable character for ``CHAR`` events and the
    lowercase letter combined with Ctrl for ``CTRL_GENERIC`` (``^A`` -> ``"a"``).
    It is ``None`` for every other type.
    """

    type: KeyEventType
    char: str | None = None

    @property
    def is_char(self) -> bool:
        return self.type is KeyEventType.CHAR and self.char is not None
