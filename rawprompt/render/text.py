"""ANSI-aware text measurement, padding, and clipping for prompt lines.

Escape sequences never count toward width. Wide East Asian characters count
as two columns and combining marks as zero, so padded columns stay aligned
when labels mix styling and non-Latin text.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
ELLIPSIS = "…"


def char_display_width(ch: str, col: int = 0) -> int:
    """Return terminal column width for one character at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def visible_length(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def pad_right(text: str, width: int) -> str:
    if len(text) >= width:
        return text
    return text + " " * (width - len(text))


def pad_left(text: str, width: int) -> str:
    if len(text) >= width:
        return text
    return " " * (width - len(text)) + text


def pad_visible_right(text: str, width: int) -> str:
    visible = visible_length(text)
    if visible >= width:
        return text
    return text + " " * (width - visible)


def pad_visible_left(text: str, width: int) -> str:
    visible = visible_length(text)
    if visible >= width:
        return text
    return " " * (width - visible) + text


def pad_visible_center(text: str, width: int) -> str:
    """Center ``text``; odd leftover space goes to the right."""
    visible = visible_length(text)
    if visible >= width:
        return text
    total = width - visible
    left = total // 2
    return " " * left + text + " " * (total - left)


def truncate(text: str, width: int) -> str:
    """Shorten plain ``text`` to ``width`` chars, ending in an ellipsis when cut."""
    if len(text) <= width:
        return text
    if width <= 1:
        return text[: max(0, width)]
    return text[: width - 1] + ELLIPSIS


def truncate_pad(text: str, width: int) -> str:
    if len(text) <= width:
        return pad_right(text, width)
    return truncate(text, width)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def clamp_int(value: int, low: int, high: int) -> int:
    if value < low:
        return low
    if value > high:
        return high
    return value


def column_width(values: Iterable[str], min_width: int = 0, max_width: int = 999, visible: bool = False) -> int:
    """Width of the widest value clamped into ``[min_width, max_width]``.

    With ``visible`` set, widths are measured after stripping escape codes.
    """
    measure = visible_length if visible else len
    widest = max((measure(value) for value in values), default=0)
    return clamp_int(widest, min_width, max_width)
