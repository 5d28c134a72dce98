"""Public package surface for rawprompt.

A terminal-interaction engine for interactive CLI prompts: key decoding,
binding dispatch, list/grid navigation, and incremental redraws.
Most implementation lives in the ``input``, ``navigation``, ``render``,
``runtime`` and ``search`` subpackages, with ready-made list, search and
grid prompts in ``prompts``.
"""

from __future__ import annotations

import logging

from .context import current_terminal, has_custom_terminal, reset_current_terminal, set_current_terminal
from .input import KeyActionResult, KeyBinding, KeyBindings, KeyDecoder, KeyEvent, KeyEventType, TextInputBuffer
from .navigation import FocusNavigator, GridNavigator, ListNavigator, SelectionController
from .prompts import RankedListPrompt, SearchableListPrompt, SelectableGridPrompt, SelectableListPrompt
from .render import RenderSurface, Session
from .runtime import EndBehavior, EngineConfig, PromptLoop, PromptResult
from .terminal import StdioTerminal, Terminal, TerminalInfo

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EndBehavior",
    "EngineConfig",
    "FocusNavigator",
    "GridNavigator",
    "KeyActionResult",
    "KeyBinding",
    "KeyBindings",
    "KeyDecoder",
    "KeyEvent",
    "KeyEventType",
    "ListNavigator",
    "PromptLoop",
    "PromptResult",
    "RankedListPrompt",
    "RenderSurface",
    "SearchableListPrompt",
    "SelectableGridPrompt",
    "SelectableListPrompt",
    "SelectionController",
    "Session",
    "StdioTerminal",
    "Terminal",
    "TerminalInfo",
    "TextInputBuffer",
    "current_terminal",
    "has_custom_terminal",
    "reset_current_terminal",
    "set_current_terminal",
]
