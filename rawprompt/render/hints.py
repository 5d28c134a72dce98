"""Key-hint strings for prompt footers.

Hints are built from ``KeyBindings.hint_entries()`` so the footer always
matches the active bindings. Output uses plain SGR codes; pass
``color=False`` for undecorated text.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..input.bindings import KeyBindings

RESET = "\033[0m"
DIM = "\033[2m"
GRAY = "\033[90m"
KEY_ACCENT = "\033[38;5;229m"
BULLET_SEPARATOR = " • "


def _paint(code: str, text: str, color: bool) -> str:
    return f"{code}{text}{RESET}" if color else text


def key_hint(label: str, color: bool = True) -> str:
    """Render one key label as ``[label]``."""
    return f"[{_paint(KEY_ACCENT, label, color)}]"


def hint(key_label: str, action: str, color: bool = True) -> str:
    return f"{key_hint(key_label, color)} {action}"


def bullets(segments: Sequence[str], dim: bool = False, color: bool = True) -> str:
    return _paint(DIM if dim else GRAY, BULLET_SEPARATOR.join(segments), color)


def comma(segments: Sequence[str], color: bool = True) -> str:
    return _paint(DIM, f"({', '.join(segments)})", color)


def grid(rows: Sequence[Sequence[str]], color: bool = True) -> str:
    """Two-column "Controls:" table with keys and actions aligned."""
    key_width = max((len(row[0]) for row in rows if row), default=0)
    action_width = max((len(row[1]) for row in rows if len(row) > 1), default=0)
    lines = [_paint(DIM, "Controls:", color)]
    for row in rows:
        key = row[0].ljust(key_width + 2) if row else ""
        action = row[1].ljust(action_width + 2) if len(row) > 1 else ""
        lines.append(f"  {_paint(GRAY, key, color)}{action}".rstrip())
    return "\n".join(lines)


def bindings_bullets(bindings: KeyBindings, color: bool = True) -> str:
    return bullets([hint(label, description, color) for label, description in bindings.hint_entries()], color=color)


def bindings_grid(bindings: KeyBindings, color: bool = True) -> str:
    return grid(bindings.hint_entries(), color)
