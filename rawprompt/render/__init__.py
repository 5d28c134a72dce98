"""Rendering surface, session lifecycle, and presentation helpers.

Helpers here return strings; only ``RenderSurface`` and ``Session`` touch
the terminal.
"""

from __future__ import annotations

from . import hints
from .highlight import highlight_code, highlight_lines, sanitize_terminal_text
from .surface import RenderSurface, Session
from .text import (
    clamp_int,
    clip_ansi_line,
    column_width,
    pad_left,
    pad_right,
    pad_visible_center,
    pad_visible_left,
    pad_visible_right,
    strip_ansi,
    truncate,
    truncate_pad,
    visible_length,
)

__all__ = [
    "RenderSurface",
    "Session",
    "clamp_int",
    "clip_ansi_line",
    "column_width",
    "highlight_code",
    "highlight_lines",
    "hints",
    "pad_left",
    "pad_right",
    "pad_visible_center",
    "pad_visible_left",
    "pad_visible_right",
    "sanitize_terminal_text",
    "strip_ansi",
    "truncate",
    "truncate_pad",
    "visible_length",
]
