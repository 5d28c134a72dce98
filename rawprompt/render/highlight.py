"""Syntax highlighting for code snippets shown inside prompts.

Snippets are sanitized first so control bytes in user content cannot move
the cursor or corrupt the surface line count.
"""

from __future__ import annotations

import logging
import re

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
        elif code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
        else:
            out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def resolve_lexer(source: str, filename: str | None = None, language: str | None = None) -> Lexer:
    """Pick a lexer by explicit language, then by filename, else plain text."""
    if language:
        try:
            return get_lexer_by_name(language)
        except ClassNotFound:
            logger.debug("no lexer named %r", language)
    if filename:
        try:
            return get_lexer_for_filename(filename, source)
        except ClassNotFound:
            logger.debug("no lexer for filename %r", filename)
    return TextLexer()


def highlight_code(
    source: str,
    filename: str | None = None,
    language: str | None = None,
    style: str = DEFAULT_STYLE,
) -> str:
    """Return ``source`` colored with ANSI codes, without a trailing newline added."""
    clean = sanitize_terminal_text(source)
    lexer = resolve_lexer(clean, filename, language)
    rendered = pygments_highlight(clean, lexer, _formatter_for_style(_normalize_style(style)))
    if not clean.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered


def highlight_lines(
    source: str,
    filename: str | None = None,
    language: str | None = None,
    style: str = DEFAULT_STYLE,
) -> list[str]:
    """Highlight ``source`` and split it into lines ready for ``RenderSurface.writeln``."""
    return highlight_code(source, filename, language, style).split("\n")
