"""Process-wide default terminal, offered as optional convenience.

Engine objects take a ``Terminal`` in their constructor; passing ``None`` falls
back to ``current_terminal()``. Nothing in the engine depends on this module
beyond that fallback, so tests and embedders can ignore it entirely.
"""

from __future__ import annotations

from .terminal import StdioTerminal, Terminal

_CURRENT: Terminal | None = None


def current_terminal() -> Terminal:
    """Return the installed terminal, creating a ``StdioTerminal`` on first use."""
    global _CURRENT
    if _CURRENT is None:
        _CURRENT = StdioTerminal()
    return _CURRENT


def set_current_terminal(terminal: Terminal | None) -> None:
    """Install ``terminal`` as the default; ``None`` resets to stdio."""
    global _CURRENT
    _CURRENT = terminal


def reset_current_terminal() -> None:
    set_current_terminal(None)


def has_custom_terminal() -> bool:
    return _CURRENT is not None


def resolve_terminal(terminal: Terminal | None) -> Terminal:
    """Return ``terminal`` or the process default when it is ``None``."""
    return terminal if terminal is not None else current_terminal()
