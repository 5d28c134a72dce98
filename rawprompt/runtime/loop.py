"""Main prompt loop: render, read a key, dispatch, redraw.

The loop is wiring only. Widget state lives in the closures behind the
render callback and the key bindings; the loop owns the session, the render
surface, and cleanup ordering.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeVar

from ..context import resolve_terminal
from ..input.bindings import KeyActionResult, KeyBindings
from ..input.events import KeyEvent
from ..input.reader import KeyDecoder
from ..render.surface import RenderSurface, Session
from ..terminal import Terminal
from .config import EngineConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")

RenderFn = Callable[[RenderSurface], None]


class PromptResult(Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class EndBehavior:
    """What happens to the last frame once the loop exits."""

    clear_on_end: bool = True

    CLEAR: ClassVar[EndBehavior]
    PERSIST: ClassVar[EndBehavior]


EndBehavior.CLEAR = EndBehavior(clear_on_end=True)
EndBehavior.PERSIST = EndBehavior(clear_on_end=False)


def to_prompt_result(result: KeyActionResult) -> PromptResult | None:
    """Map a dispatch outcome to a loop exit, or ``None`` to keep going."""
    if result is KeyActionResult.CONFIRMED:
        return PromptResult.CONFIRMED
    if result is KeyActionResult.CANCELLED:
        return PromptResult.CANCELLED
    return None


class PromptLoop:
    """Run one interactive prompt against a terminal.

    Every exit path (confirm, cancel, or an exception from rendering, an
    action, or the input source) runs ``on_before_cleanup``, restores the
    terminal, then runs ``on_after_cleanup``.
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        hide_cursor: bool = True,
        end_behavior: EndBehavior = EndBehavior.CLEAR,
        on_before_cleanup: Callable[[], None] | None = None,
        on_after_cleanup: Callable[[], None] | None = None,
        decoder: KeyDecoder | None = None,
    ) -> None:
        self.terminal = resolve_terminal(terminal)
        self.hide_cursor = hide_cursor
        self.end_behavior = end_behavior
        self.on_before_cleanup = on_before_cleanup
        self.on_after_cleanup = on_after_cleanup
        self.decoder = decoder if decoder is not None else KeyDecoder(self.terminal)

    @classmethod
    def from_config(
        cls,
        config: EngineConfig,
        terminal: Terminal | None = None,
        on_before_cleanup: Callable[[], None] | None = None,
        on_after_cleanup: Callable[[], None] | None = None,
    ) -> PromptLoop:
        terminal = resolve_terminal(terminal)
        return cls(
            terminal=terminal,
            hide_cursor=config.hide_cursor,
            end_behavior=EndBehavior(clear_on_end=config.clear_on_end),
            on_before_cleanup=on_before_cleanup,
            on_after_cleanup=on_after_cleanup,
            decoder=KeyDecoder(terminal, esc_delay_ms=config.esc_delay_ms),
        )

    to_prompt_result = staticmethod(to_prompt_result)

    def _session(self) -> Session:
        return Session(self.terminal, hide_cursor=self.hide_cursor, raw_mode=True)

    def _cleanup(self, session: Session) -> None:
        try:
            if self.on_before_cleanup is not None:
                self.on_before_cleanup()
        finally:
            session.end()
            if self.on_after_cleanup is not None:
                self.on_after_cleanup()

    def run_keys(self, render: RenderFn, on_key: Callable[[KeyEvent], PromptResult | None]) -> PromptResult:
        """Loop until ``on_key`` returns a result; redraw after every other key."""
        session = self._session()
        surface = RenderSurface(self.terminal)
        try:
            session.start()
            render(surface)
            while True:
                event = self.decoder.read()
                result = on_key(event)
                if result is not None:
                    logger.debug("prompt finished with %s", result.value)
                    break
                surface.clear()
                render(surface)
        finally:
            self._cleanup(session)

        if self.end_behavior.clear_on_end:
            surface.clear()
        return result

    def run(self, render: RenderFn, bindings: KeyBindings) -> PromptResult:
        return self.run_keys(render, lambda event: to_prompt_result(bindings.dispatch(event)))

    def run_custom(self, body: Callable[[RenderSurface], T]) -> T:
        """Run ``body`` inside a managed raw-mode session with a fresh surface."""
        session = self._session()
        surface = RenderSurface(self.terminal)
        try:
            session.start()
            return body(surface)
        finally:
            self._cleanup(session)
            if self.end_behavior.clear_on_end:
                surface.clear()
