"""Composable key-binding registry and the standard binding recipes.

A ``KeyBindings`` value is an ordered, immutable tuple of ``KeyBinding``
entries. Prompts build one from the recipe functions below, concatenate them
with ``+``, and hand the result to the prompt loop for dispatch.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .events import KeyEvent, KeyEventType

if TYPE_CHECKING:
    from .reader import KeyDecoder


class KeyActionResult(Enum):
    HANDLED = "handled"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    IGNORED = "ignored"


Action = Callable[[KeyEvent], KeyActionResult]


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from a set of key types to one action callback."""

    keys: frozenset[KeyEventType]
    action: Action
    char_matcher: Callable[[str], bool] | None = None
    hint_label: str | None = None
    hint_description: str | None = None

    @classmethod
    def single(
        cls,
        key: KeyEventType,
        action: Action,
        hint_label: str | None = None,
        hint_description: str | None = None,
    ) -> KeyBinding:
        return cls(frozenset({key}), action, None, hint_label, hint_description)

    @classmethod
    def multi(
        cls,
        keys: Iterable[KeyEventType],
        action: Action,
        hint_label: str | None = None,
        hint_description: str | None = None,
    ) -> KeyBinding:
        return cls(frozenset(keys), action, None, hint_label, hint_description)

    @classmethod
    def char(
        cls,
        matcher: Callable[[str], bool],
        action: Action,
        hint_label: str | None = None,
        hint_description: str | None = None,
    ) -> KeyBinding:
        return cls(frozenset({KeyEventType.CHAR}), action, matcher, hint_label, hint_description)

    def matches(self, event: KeyEvent) -> bool:
        if event.type not in self.keys:
            return False
        if event.type is KeyEventType.CHAR and self.char_matcher is not None:
            return event.char is not None and bool(self.char_matcher(event.char))
        return True

    def try_handle(self, event: KeyEvent) -> KeyActionResult | None:
        """Run the action when ``event`` matches; ``None`` otherwise."""
        if self.matches(event):
            return self.action(event)
        return None


class KeyBindings:
    """Ordered binding collection; earlier entries win."""

    __slots__ = ("_bindings",)

    def __init__(self, bindings: Iterable[KeyBinding] = ()) -> None:
        self._bindings: tuple[KeyBinding, ...] = tuple(bindings)

    @property
    def bindings(self) -> tuple[KeyBinding, ...]:
        return self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self):
        return iter(self._bindings)

    def __add__(self, other: KeyBindings) -> KeyBindings:
        if not isinstance(other, KeyBindings):
            return NotImplemented
        return KeyBindings(self._bindings + other._bindings)

    def __repr__(self) -> str:
        return f"KeyBindings({len(self._bindings)} bindings)"

    @staticmethod
    def merge(*collections: KeyBindings) -> KeyBindings:
        merged: list[KeyBinding] = []
        for collection in collections:
            merged.extend(collection.bindings)
        return KeyBindings(merged)

    def add(self, binding: KeyBinding) -> KeyBindings:
        return KeyBindings(self._bindings + (binding,))

    def add_all(self, bindings: Iterable[KeyBinding]) -> KeyBindings:
        return KeyBindings(self._bindings + tuple(bindings))

    def dispatch(self, event: KeyEvent) -> KeyActionResult:
        """Run the first binding that claims ``event``.

        A binding that returns ``IGNORED`` declines the event and evaluation
        moves on to the next binding. Returns ``IGNORED`` when nothing claims it.
        """
        for binding in self._bindings:
            result = binding.try_handle(event)
            if result is not None and result is not KeyActionResult.IGNORED:
                return result
        return KeyActionResult.IGNORED

    def hint_entries(self) -> list[tuple[str, str]]:
        """Return ``(label, description)`` for bindings that carry both."""
        return [
            (binding.hint_label, binding.hint_description)
            for binding in self._bindings
            if binding.hint_label is not None and binding.hint_description is not None
        ]

    def wait_for_key(self, decoder: KeyDecoder) -> KeyActionResult:
        """Read keys until one is handled, confirmed, or cancelled."""
        return self.wait_for_result(decoder)

    def wait_for_result(self, decoder: KeyDecoder) -> KeyActionResult:
        """Read keys until dispatch returns anything other than ``IGNORED``."""
        while True:
            result = self.dispatch(decoder.read())
            if result is not KeyActionResult.IGNORED:
                return result


def _handled(callback: Callable[[], object]) -> Action:
    def action(_event: KeyEvent) -> KeyActionResult:
        callback()
        return KeyActionResult.HANDLED

    return action


def _finish(result: KeyActionResult, callback: Callable[[], object] | None) -> Action:
    def action(_event: KeyEvent) -> KeyActionResult:
        if callback is not None:
            callback()
        return result

    return action


def cancel(
    on_cancel: Callable[[], object] | None = None,
    hint_label: str = "Esc",
    hint_description: str = "cancel",
) -> KeyBindings:
    return KeyBindings(
        [
            KeyBinding.multi(
                (KeyEventType.ESC, KeyEventType.CTRL_C),
                _finish(KeyActionResult.CANCELLED, on_cancel),
                hint_label,
                hint_description,
            )
        ]
    )


def confirm(
    on_confirm: Callable[[], KeyActionResult | None] | None = None,
    hint_label: str = "Enter",
    hint_description: str = "confirm",
) -> KeyBindings:
    """Bind Enter; ``on_confirm`` may veto by returning a non-confirm result."""

    def action(_event: KeyEvent) -> KeyActionResult:
        if on_confirm is None:
            return KeyActionResult.CONFIRMED
        result = on_confirm()
        return result if result is not None else KeyActionResult.CONFIRMED

    return KeyBindings([KeyBinding.single(KeyEventType.ENTER, action, hint_label, hint_description)])


def vertical_navigation(
    on_up: Callable[[], object],
    on_down: Callable[[], object],
    hint_label: str = "↑/↓",
    hint_description: str = "navigate",
) -> KeyBindings:
    return KeyBindings(
        [
            KeyBinding.single(KeyEventType.ARROW_UP, _handled(on_up)),
            KeyBinding.single(KeyEventType.ARROW_DOWN, _handled(on_down), hint_label, hint_description),
        ]
    )


def horizontal_navigation(
    on_left: Callable[[], object],
    on_right: Callable[[], object],
    hint_label: str = "←/→",
    hint_description: str = "adjust",
) -> KeyBindings:
    return KeyBindings(
        [
            KeyBinding.single(KeyEventType.ARROW_LEFT, _handled(on_left)),
            KeyBinding.single(KeyEventType.ARROW_RIGHT, _handled(on_right), hint_label, hint_description),
        ]
    )


def directional_navigation(
    on_up: Callable[[], object] | None = None,
    on_down: Callable[[], object] | None = None,
    on_left: Callable[[], object] | None = None,
    on_right: Callable[[], object] | None = None,
    hint_label: str = "↑/↓/←/→",
    hint_description: str = "navigate",
) -> KeyBindings:
    """Bind only the arrows that have a callback; the hint rides on the last one."""
    pairs = [
        (KeyEventType.ARROW_UP, on_up),
        (KeyEventType.ARROW_DOWN, on_down),
        (KeyEventType.ARROW_LEFT, on_left),
        (KeyEventType.ARROW_RIGHT, on_right),
    ]
    present = [(key, callback) for key, callback in pairs if callback is not None]
    bindings = []
    for position, (key, callback) in enumerate(present):
        is_last = position == len(present) - 1
        bindings.append(
            KeyBinding.single(
                key,
                _handled(callback),
                hint_label if is_last else None,
                hint_description if is_last else None,
            )
        )
    return KeyBindings(bindings)


def grid_navigation(
    on_up: Callable[[], object],
    on_down: Callable[[], object],
    on_left: Callable[[], object],
    on_right: Callable[[], object],
    hint_label: str = "↑/↓/←/→",
    hint_description: str = "navigate",
) -> KeyBindings:
    return directional_navigation(on_up, on_down, on_left, on_right, hint_label, hint_description)


def toggle(
    on_toggle: Callable[[], object],
    hint_label: str = "Space",
    hint_description: str = "toggle",
) -> KeyBindings:
    return KeyBindings([KeyBinding.single(KeyEventType.SPACE, _handled(on_toggle), hint_label, hint_description)])


def conditional_toggle(
    is_enabled: Callable[[], bool],
    on_toggle: Callable[[], object],
    hint_label: str = "Space",
    hint_description: str = "select",
) -> KeyBindings:
    """Space toggles only while ``is_enabled()``; otherwise the key falls through."""

    def action(_event: KeyEvent) -> KeyActionResult:
        if not is_enabled():
            return KeyActionResult.IGNORED
        on_toggle()
        return KeyActionResult.HANDLED

    return KeyBindings([KeyBinding.single(KeyEventType.SPACE, action, hint_label, hint_description)])


def row_toggle(
    on_toggle: Callable[[], object],
    hint_label: str = "←/→ / Space",
    hint_description: str = "toggle",
) -> KeyBindings:
    return KeyBindings(
        [
            KeyBinding.multi(
                (KeyEventType.ARROW_LEFT, KeyEventType.ARROW_RIGHT, KeyEventType.SPACE),
                _handled(on_toggle),
                hint_label,
                hint_description,
            )
        ]
    )


def tab(
    on_tab: Callable[[], object],
    hint_label: str = "Tab",
    hint_description: str = "switch",
) -> KeyBindings:
    return KeyBindings([KeyBinding.single(KeyEventType.TAB, _handled(on_tab), hint_label, hint_description)])


def search_toggle(
    on_toggle: Callable[[], object],
    hint_label: str = "/",
    hint_description: str = "search",
) -> KeyBindings:
    return KeyBindings([KeyBinding.single(KeyEventType.SLASH, _handled(on_toggle), hint_label, hint_description)])


def ctrl_r(
    on_press: Callable[[], object],
    hint_label: str = "Ctrl+R",
    hint_description: str = "reveal",
) -> KeyBindings:
    return KeyBindings([KeyBinding.single(KeyEventType.CTRL_R, _handled(on_press), hint_label, hint_description)])


def ctrl_d(
    on_press: Callable[[], object],
    hint_label: str = "Ctrl+D",
    hint_description: str | None = None,
) -> KeyBindings:
    return KeyBindings([KeyBinding.single(KeyEventType.CTRL_D, _handled(on_press), hint_label, hint_description)])


def numbers(
    on_number: Callable[[int], object],
    max_value: int = 9,
    include_zero: bool = False,
    hint_label: str | None = None,
    hint_description: str | None = None,
) -> KeyBindings:
    """Bind digit keys ``1..max_value`` (``0`` too when ``include_zero``)."""

    def accepts(ch: str) -> bool:
        if len(ch) != 1 or not "0" <= ch <= "9":
            return False
        value = int(ch)
        if value == 0 and not include_zero:
            return False
        return value <= max_value

    def action(event: KeyEvent) -> KeyActionResult:
        on_number(int(event.char or "0"))
        return KeyActionResult.HANDLED

    low = 0 if include_zero else 1
    return KeyBindings(
        [
            KeyBinding.char(
                accepts,
                action,
                hint_label if hint_label is not None else f"{low}–{max_value}",
                hint_description if hint_description is not None else "set value",
            )
        ]
    )


def letter(
    char: str,
    on_press: Callable[[], object],
    hint_label: str | None = None,
    hint_description: str | None = None,
) -> KeyBindings:
    """Bind one letter, matching either case."""
    lower = char.lower()
    upper = char.upper()
    return KeyBindings(
        [
            KeyBinding.char(
                lambda ch: ch == lower or ch == upper,
                _handled(on_press),
                hint_label if hint_label is not None else upper,
                hint_description,
            )
        ]
    )


def prompt(
    on_confirm: Callable[[], KeyActionResult | None] | None = None,
    on_cancel: Callable[[], object] | None = None,
) -> KeyBindings:
    return confirm(on_confirm) + cancel(on_cancel)


def list_navigation(
    on_up: Callable[[], object],
    on_down: Callable[[], object],
    on_confirm: Callable[[], KeyActionResult | None] | None = None,
    on_cancel: Callable[[], object] | None = None,
) -> KeyBindings:
    return vertical_navigation(on_up, on_down) + confirm(on_confirm) + cancel(on_cancel)


def selection(
    on_up: Callable[[], object],
    on_down: Callable[[], object],
    on_toggle: Callable[[], object],
    on_confirm: Callable[[], KeyActionResult | None] | None = None,
    on_cancel: Callable[[], object] | None = None,
) -> KeyBindings:
    return (
        vertical_navigation(on_up, on_down)
        + toggle(on_toggle, hint_description="select")
        + confirm(on_confirm)
        + cancel(on_cancel)
    )


def slider(
    on_left: Callable[[], object],
    on_right: Callable[[], object],
    on_confirm: Callable[[], KeyActionResult | None] | None = None,
    on_cancel: Callable[[], object] | None = None,
) -> KeyBindings:
    return horizontal_navigation(on_left, on_right) + confirm(on_confirm) + cancel(on_cancel)


def toggle_prompt(
    on_toggle: Callable[[], object],
    on_confirm: Callable[[], KeyActionResult | None] | None = None,
    on_cancel: Callable[[], object] | None = None,
    toggle_hint: str = "toggle",
) -> KeyBindings:
    """Any arrow or Space flips a two-state value."""
    flips = KeyBindings(
        [
            KeyBinding.multi(
                (
                    KeyEventType.ARROW_LEFT,
                    KeyEventType.ARROW_RIGHT,
                    KeyEventType.ARROW_UP,
                    KeyEventType.ARROW_DOWN,
                ),
                _handled(on_toggle),
                "←/→",
                toggle_hint,
            ),
            KeyBinding.single(KeyEventType.SPACE, _handled(on_toggle)),
        ]
    )
    return flips + confirm(on_confirm) + cancel(on_cancel)


def grid_selection(
    on_up: Callable[[], object],
    on_down: Callable[[], object],
    on_left: Callable[[], object],
    on_right: Callable[[], object],
    on_toggle: Callable[[], object] | None = None,
    show_toggle_hint: bool = False,
    on_confirm: Callable[[], KeyActionResult | None] | None = None,
    on_cancel: Callable[[], object] | None = None,
) -> KeyBindings:
    bindings = grid_navigation(on_up, on_down, on_left, on_right)
    if on_toggle is not None:
        bindings = bindings + KeyBindings(
            [
                KeyBinding.single(
                    KeyEventType.SPACE,
                    _handled(on_toggle),
                    "Space" if show_toggle_hint else None,
                    "toggle selection" if show_toggle_hint else None,
                )
            ]
        )
    return bindings + confirm(on_confirm) + cancel(on_cancel)


def toggle_group(
    on_up: Callable[[], object],
    on_down: Callable[[], object],
    on_toggle: Callable[[], object],
    on_toggle_all: Callable[[], object],
    on_confirm: Callable[[], KeyActionResult | None] | None = None,
    on_cancel: Callable[[], object] | None = None,
) -> KeyBindings:
    return (
        vertical_navigation(on_up, on_down)
        + row_toggle(on_toggle)
        + letter("A", on_toggle_all, hint_description="toggle all")
        + confirm(on_confirm)
        + cancel(on_cancel)
    )


def exit_on(
    keys: Iterable[KeyEventType],
    on_exit: Callable[[], object] | None = None,
    hint_label: str | None = None,
    hint_description: str | None = None,
) -> KeyBindings:
    """Confirm (and leave the loop) on any of ``keys``."""
    return KeyBindings(
        [KeyBinding.multi(keys, _finish(KeyActionResult.CONFIRMED, on_exit), hint_label, hint_description)]
    )


def continue_prompt(
    on_continue: Callable[[], object] | None = None,
    hint_label: str = "Enter",
    hint_description: str = "continue",
) -> KeyBindings:
    return exit_on(
        (KeyEventType.ENTER, KeyEventType.ESC, KeyEventType.SPACE),
        on_continue,
        hint_label,
        hint_description,
    )


_ANY_KEY_TYPES = (
    KeyEventType.ENTER,
    KeyEventType.ESC,
    KeyEventType.SPACE,
    KeyEventType.ARROW_LEFT,
    KeyEventType.ARROW_RIGHT,
    KeyEventType.ARROW_UP,
    KeyEventType.ARROW_DOWN,
    KeyEventType.TAB,
    KeyEventType.CTRL_C,
)


def any_key_to_continue(
    on_continue: Callable[[], object] | None = None,
    hint_label: str = "any key",
    hint_description: str = "continue",
) -> KeyBindings:
    action = _finish(KeyActionResult.CONFIRMED, on_continue)
    return KeyBindings(
        [
            KeyBinding.multi(_ANY_KEY_TYPES, action, hint_label, hint_description),
            KeyBinding.char(lambda _ch: True, action),
        ]
    )


def back(
    on_back: Callable[[], object] | None = None,
    hint_label: str = "← / Esc / Enter",
    hint_description: str = "back",
) -> KeyBindings:
    return exit_on(
        (KeyEventType.ARROW_LEFT, KeyEventType.ESC, KeyEventType.ENTER, KeyEventType.CTRL_C),
        on_back,
        hint_label,
        hint_description,
    )
