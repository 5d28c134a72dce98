"""Terminal I/O boundary for prompt sessions.

Separates byte input (echo/line toggles, blocking and peeking reads) from text
output (writes and dimension queries). ``StdioTerminal`` binds both to tty file
descriptors; every query degrades to safe defaults when no tty is attached.
"""

from __future__ import annotations

import logging
import os
import select
import termios
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = 80
DEFAULT_LINES = 24

CURSOR_HIDE = "\x1b[?25l"
CURSOR_SHOW = "\x1b[?25h"
ERASE_TO_END = "\x1b[0J"
CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[H"


def cursor_up(rows: int) -> str:
    """Return the CSI sequence moving the cursor up ``rows`` lines."""
    return f"\x1b[{rows}A"


_LINE_LFLAGS = termios.ICANON | termios.ISIG | termios.IEXTEN
_LINE_IFLAGS = termios.IXON | termios.ICRNL


def _set_line_discipline(attrs: list, enabled: bool) -> None:
    """Toggle canonical input together with signal keys, flow control and CR mapping.

    With line mode off, Ctrl+C, Ctrl+Z, Ctrl+S/Q and Ctrl+V arrive as plain
    bytes and Enter arrives as 13. Output processing is left alone so ``\\n``
    still returns the carriage.
    """
    if enabled:
        attrs[0] |= _LINE_IFLAGS
        attrs[3] |= _LINE_LFLAGS
    else:
        attrs[0] &= ~_LINE_IFLAGS
        attrs[3] &= ~_LINE_LFLAGS
        attrs[6][termios.VMIN] = 1
        attrs[6][termios.VTIME] = 0


class TerminalInput(Protocol):
    """Byte-level input side of a terminal."""

    echo_mode: bool
    line_mode: bool

    @property
    def has_terminal(self) -> bool: ...

    def read_byte(self) -> int:
        """Block until one byte arrives; raise ``EOFError`` when input is exhausted."""
        ...

    def read_byte_nowait(self, timeout: float = 0.0) -> int | None:
        """Return one byte if it arrives within ``timeout`` seconds, else ``None``."""
        ...


class TerminalOutput(Protocol):
    """Text output side of a terminal."""

    @property
    def has_terminal(self) -> bool: ...

    @property
    def columns(self) -> int: ...

    @property
    def lines(self) -> int: ...

    def write(self, text: str) -> None: ...

    def writeln(self, text: str = "") -> None: ...


class Terminal:
    """One input paired with one output; the unit injected into engine objects."""

    def __init__(self, terminal_input: TerminalInput, terminal_output: TerminalOutput) -> None:
        self.input = terminal_input
        self.output = terminal_output


class StdioInput:
    """``TerminalInput`` over a tty file descriptor using termios and select."""

    def __init__(self, fd: int = 0) -> None:
        self.fd = fd

    @property
    def has_terminal(self) -> bool:
        try:
            return os.isatty(self.fd)
        except OSError:
            return False

    def _lflag_enabled(self, flag: int) -> bool:
        if not self.has_terminal:
            return True
        try:
            attrs = termios.tcgetattr(self.fd)
        except (termios.error, OSError):
            return True
        return bool(attrs[3] & flag)

    def _set_lflag(self, flag: int, enabled: bool) -> None:
        if not self.has_terminal:
            return
        try:
            attrs = termios.tcgetattr(self.fd)
            if flag == termios.ICANON:
                _set_line_discipline(attrs, enabled)
            elif enabled:
                attrs[3] |= flag
            else:
                attrs[3] &= ~flag
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        except (termios.error, OSError) as exc:
            logger.debug("could not change tty lflag %#x on fd %d: %s", flag, self.fd, exc)

    def tty_attributes(self) -> list | None:
        """Return a copy of the full termios attribute list, or ``None`` without a tty."""
        if not self.has_terminal:
            return None
        try:
            attrs = termios.tcgetattr(self.fd)
        except (termios.error, OSError):
            return None
        return [*attrs[:6], list(attrs[6])]

    def restore_tty_attributes(self, attrs: list) -> None:
        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        except (termios.error, OSError) as exc:
            logger.debug("could not restore tty attributes on fd %d: %s", self.fd, exc)

    @property
    def echo_mode(self) -> bool:
        return self._lflag_enabled(termios.ECHO)

    @echo_mode.setter
    def echo_mode(self, value: bool) -> None:
        self._set_lflag(termios.ECHO, value)

    @property
    def line_mode(self) -> bool:
        return self._lflag_enabled(termios.ICANON)

    @line_mode.setter
    def line_mode(self, value: bool) -> None:
        self._set_lflag(termios.ICANON, value)

    def read_byte(self) -> int:
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError(f"terminal input on fd {self.fd} is exhausted")
        return data[0]

    def read_byte_nowait(self, timeout: float = 0.0) -> int | None:
        try:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout))
        except (OSError, ValueError):
            return None
        if not ready:
            return None
        data = os.read(self.fd, 1)
        if not data:
            return None
        return data[0]


class StdioOutput:
    """``TerminalOutput`` writing UTF-8 straight to a file descriptor."""

    def __init__(self, fd: int = 1) -> None:
        self.fd = fd

    @property
    def has_terminal(self) -> bool:
        try:
            return os.isatty(self.fd)
        except OSError:
            return False

    def _size(self) -> os.terminal_size | None:
        if not self.has_terminal:
            return None
        try:
            size = os.get_terminal_size(self.fd)
        except OSError:
            return None
        if size.columns <= 0 or size.lines <= 0:
            return None
        return size

    @property
    def columns(self) -> int:
        size = self._size()
        return size.columns if size is not None else DEFAULT_COLUMNS

    @property
    def lines(self) -> int:
        size = self._size()
        return size.lines if size is not None else DEFAULT_LINES

    def write(self, text: str) -> None:
        payload = text.encode("utf-8")
        while payload:
            written = os.write(self.fd, payload)
            payload = payload[written:]

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")


class StdioTerminal(Terminal):
    """Terminal bound to the process stdin/stdout descriptors."""

    def __init__(self, stdin_fd: int = 0, stdout_fd: int = 1) -> None:
        super().__init__(StdioInput(stdin_fd), StdioOutput(stdout_fd))


@dataclass
class TerminalModeState:
    """Echo/line-mode snapshot taken at raw-mode entry.

    For a real tty the full termios attribute list is kept as well and put
    back last, so control chars and flags not tracked by the two modes
    (``VMIN``, ``VTIME``, ``ISIG``, ``IXON``) end up exactly as they were.

    ``restore`` is safe to call repeatedly and never raises: a terminal that
    went away between entry and restore is simply left alone.
    """

    terminal_input: TerminalInput
    orig_echo: bool
    orig_line_mode: bool
    tty_attrs: list | None = None

    def restore(self) -> None:
        try:
            if not self.terminal_input.has_terminal:
                return
        except Exception as exc:
            logger.debug("terminal availability check failed during restore: %s", exc)
            return
        try:
            self.terminal_input.echo_mode = self.orig_echo
        except Exception as exc:
            logger.debug("echo mode restore failed: %s", exc)
        try:
            self.terminal_input.line_mode = self.orig_line_mode
        except Exception as exc:
            logger.debug("line mode restore failed: %s", exc)
        if self.tty_attrs is not None and isinstance(self.terminal_input, StdioInput):
            self.terminal_input.restore_tty_attributes(self.tty_attrs)


def enter_raw(terminal_input: TerminalInput) -> TerminalModeState:
    """Disable echo and line buffering, returning the state needed to undo it."""
    state = TerminalModeState(
        terminal_input=terminal_input,
        orig_echo=terminal_input.echo_mode,
        orig_line_mode=terminal_input.line_mode,
        tty_attrs=terminal_input.tty_attributes() if isinstance(terminal_input, StdioInput) else None,
    )
    terminal_input.echo_mode = False
    terminal_input.line_mode = False
    return state


def hide_cursor(terminal_output: TerminalOutput) -> None:
    terminal_output.write(CURSOR_HIDE)


def show_cursor(terminal_output: TerminalOutput) -> None:
    terminal_output.write(CURSOR_SHOW)


def clear_and_home(terminal_output: TerminalOutput) -> None:
    """Clear the whole screen and park the cursor top-left."""
    terminal_output.write(CLEAR_SCREEN)
    terminal_output.write(CURSOR_HOME)


class TerminalInfo:
    """Guarded dimension queries with 80x24 fallbacks."""

    def __init__(self, terminal_output: TerminalOutput) -> None:
        self.output = terminal_output

    @property
    def has_terminal(self) -> bool:
        try:
            return bool(self.output.has_terminal)
        except Exception:
            return False

    @property
    def columns(self) -> int:
        try:
            if self.output.has_terminal:
                return self.output.columns
        except Exception:
            pass
        return DEFAULT_COLUMNS

    @property
    def rows(self) -> int:
        try:
            if self.output.has_terminal:
                return self.output.lines
        except Exception:
            pass
        return DEFAULT_LINES

    @property
    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``."""
        return self.columns, self.rows
