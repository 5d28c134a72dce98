"""Frame pieces shared by the prompt scaffolds: title, markers, hint footer."""

from __future__ import annotations

from ..input.bindings import KeyBindings
from ..render import hints
from ..render.surface import RenderSurface
from ..runtime import EngineConfig, PromptLoop, load_engine_config
from ..terminal import Terminal

BOLD = "\033[1m"
DIM = "\033[2m"
INVERSE = "\033[7m"
RESET = "\033[0m"

FOCUS_MARKER = "❯ "
BLANK_MARKER = "  "
CHECKED = "[x] "
UNCHECKED = "[ ] "
OVERFLOW_ABOVE = "  ↑ more"
OVERFLOW_BELOW = "  ↓ more"
NO_MATCHES = "  no matches"

MIN_VISIBLE_ROWS = 5


def marker(focused: bool) -> str:
    return FOCUS_MARKER if focused else BLANK_MARKER


def check_mark(selected: bool) -> str:
    return CHECKED if selected else UNCHECKED


def fit_visible_rows(terminal_rows: int, reserved_lines: int, max_visible: int) -> int:
    """Rows left for items once the frame chrome is subtracted, never above ``max_visible``."""
    return min(max_visible, max(MIN_VISIBLE_ROWS, terminal_rows - reserved_lines))


def write_title(surface: RenderSurface, title: str) -> None:
    if title:
        surface.writeln(f"{BOLD}{title}{RESET}")


def write_footer(surface: RenderSurface, bindings: KeyBindings) -> None:
    footer = hints.bindings_bullets(bindings)
    if footer:
        surface.writeln(footer)


def prompt_loop(terminal: Terminal | None, config: EngineConfig | None) -> PromptLoop:
    """Loop for one scaffold run; stored defaults apply when ``config`` is omitted."""
    return PromptLoop.from_config(config if config is not None else load_engine_config(), terminal=terminal)
