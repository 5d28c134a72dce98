"""Input-layer public API: key events, byte decoding, and binding dispatch.

Low-level decoding (``KeyDecoder``) is kept separate from the binding
registry and recipes that prompts compose on top of it.
"""

from . import bindings
from .bindings import KeyActionResult, KeyBinding, KeyBindings
from .events import ARROW_KEYS, KeyEvent, KeyEventType
from .reader import ESC_SEQUENCE_DELAY_MS, KeyDecoder, classify_byte
from .text_buffer import BlockCursorText, TextInputBuffer, text_input

__all__ = [
    "ARROW_KEYS",
    "BlockCursorText",
    "ESC_SEQUENCE_DELAY_MS",
    "KeyActionResult",
    "KeyBinding",
    "KeyBindings",
    "KeyDecoder",
    "KeyEvent",
    "KeyEventType",
    "TextInputBuffer",
    "bindings",
    "classify_byte",
    "text_input",
]
