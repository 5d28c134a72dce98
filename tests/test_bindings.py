"""Tests for key-binding dispatch order, composition, and binding recipes."""

from __future__ import annotations

import unittest

from rawprompt.input import bindings as kb
from rawprompt.input.bindings import KeyActionResult, KeyBinding, KeyBindings
from rawprompt.input.events import KeyEvent, KeyEventType
from rawprompt.input.reader import KeyDecoder
from rawprompt.testing import ScriptedTerminal

ENTER = KeyEvent(KeyEventType.ENTER)
ESC = KeyEvent(KeyEventType.ESC)
SPACE = KeyEvent(KeyEventType.SPACE)
UP = KeyEvent(KeyEventType.ARROW_UP)
DOWN = KeyEvent(KeyEventType.ARROW_DOWN)
LEFT = KeyEvent(KeyEventType.ARROW_LEFT)
RIGHT = KeyEvent(KeyEventType.ARROW_RIGHT)


def _char(ch: str) -> KeyEvent:
    return KeyEvent(KeyEventType.CHAR, ch)


class KeyBindingTests(unittest.TestCase):
    def test_char_matcher_filters_char_events(self) -> None:
        binding = KeyBinding.char(lambda ch: ch.isdigit(), lambda _e: KeyActionResult.HANDLED)

        self.assertTrue(binding.matches(_char("5")))
        self.assertFalse(binding.matches(_char("x")))
        self.assertFalse(binding.matches(KeyEvent(KeyEventType.CHAR)))
        self.assertFalse(binding.matches(ENTER))

    def test_try_handle_returns_none_on_mismatch(self) -> None:
        binding = KeyBinding.single(KeyEventType.TAB, lambda _e: KeyActionResult.HANDLED)
        self.assertIsNone(binding.try_handle(ENTER))


class KeyBindingsDispatchTests(unittest.TestCase):
    def test_first_claiming_binding_wins(self) -> None:
        calls: list[str] = []

        def make(name: str, result: KeyActionResult):
            def action(_event: KeyEvent) -> KeyActionResult:
                calls.append(name)
                return result

            return action

        bindings = KeyBindings(
            [
                KeyBinding.single(KeyEventType.ENTER, make("first", KeyActionResult.HANDLED)),
                KeyBinding.single(KeyEventType.ENTER, make("second", KeyActionResult.CONFIRMED)),
            ]
        )

        self.assertIs(bindings.dispatch(ENTER), KeyActionResult.HANDLED)
        self.assertEqual(calls, ["first"])

    def test_ignored_falls_through_to_later_bindings(self) -> None:
        enabled = False
        toggled: list[bool] = []
        bindings = kb.conditional_toggle(lambda: enabled, lambda: toggled.append(True)) + kb.toggle(
            lambda: toggled.append(False)
        )

        self.assertIs(bindings.dispatch(SPACE), KeyActionResult.HANDLED)
        self.assertEqual(toggled, [False])

    def test_unmatched_event_is_ignored(self) -> None:
        self.assertIs(kb.prompt().dispatch(SPACE), KeyActionResult.IGNORED)
        self.assertIs(KeyBindings().dispatch(ENTER), KeyActionResult.IGNORED)

    def test_composition_preserves_order_and_is_immutable(self) -> None:
        left = kb.confirm()
        right = kb.cancel()
        combined = left + right
        merged = KeyBindings.merge(left, right, kb.tab(lambda: None))
        extended = left.add(KeyBinding.single(KeyEventType.TAB, lambda _e: KeyActionResult.HANDLED))

        self.assertEqual(len(left), 1)
        self.assertEqual(combined.bindings, left.bindings + right.bindings)
        self.assertEqual(len(merged), 3)
        self.assertEqual(len(extended), 2)
        self.assertEqual(len(left.add_all(right.bindings)), 2)

    def test_hint_entries_only_for_labelled_bindings(self) -> None:
        bindings = kb.vertical_navigation(lambda: None, lambda: None) + kb.prompt()
        self.assertEqual(
            bindings.hint_entries(),
            [("↑/↓", "navigate"), ("Enter", "confirm"), ("Esc", "cancel")],
        )

    def test_wait_for_result_skips_ignored_keys(self) -> None:
        terminal = ScriptedTerminal()
        terminal.input.queue_key(KeyEventType.CHAR, "x")
        terminal.input.queue_keys(KeyEventType.TAB, KeyEventType.ENTER)
        decoder = KeyDecoder(terminal, sleep=lambda _s: None)

        self.assertIs(kb.prompt().wait_for_result(decoder), KeyActionResult.CONFIRMED)
        self.assertEqual(terminal.input.bytes_remaining, 0)

    def test_wait_for_key_stops_on_handled(self) -> None:
        terminal = ScriptedTerminal()
        terminal.input.queue_keys(KeyEventType.SPACE, KeyEventType.ENTER)
        decoder = KeyDecoder(terminal, sleep=lambda _s: None)

        self.assertIs(kb.toggle(lambda: None).wait_for_key(decoder), KeyActionResult.HANDLED)
        self.assertEqual(terminal.input.bytes_remaining, 1)


class BindingRecipeTests(unittest.TestCase):
    def test_cancel_covers_esc_and_ctrl_c(self) -> None:
        cancelled: list[bool] = []
        bindings = kb.cancel(lambda: cancelled.append(True))

        self.assertIs(bindings.dispatch(ESC), KeyActionResult.CANCELLED)
        self.assertIs(bindings.dispatch(KeyEvent(KeyEventType.CTRL_C)), KeyActionResult.CANCELLED)
        self.assertEqual(len(cancelled), 2)

    def test_confirm_callback_can_veto(self) -> None:
        self.assertIs(kb.confirm().dispatch(ENTER), KeyActionResult.CONFIRMED)
        self.assertIs(kb.confirm(lambda: None).dispatch(ENTER), KeyActionResult.CONFIRMED)
        self.assertIs(kb.confirm(lambda: KeyActionResult.HANDLED).dispatch(ENTER), KeyActionResult.HANDLED)

    def test_directional_navigation_binds_only_given_arrows(self) -> None:
        moves: list[str] = []
        bindings = kb.directional_navigation(on_up=lambda: moves.append("up"), on_left=lambda: moves.append("left"))

        self.assertIs(bindings.dispatch(UP), KeyActionResult.HANDLED)
        self.assertIs(bindings.dispatch(LEFT), KeyActionResult.HANDLED)
        self.assertIs(bindings.dispatch(DOWN), KeyActionResult.IGNORED)
        self.assertEqual(moves, ["up", "left"])
        self.assertEqual(bindings.hint_entries(), [("↑/↓/←/→", "navigate")])

    def test_numbers_respects_range_and_zero(self) -> None:
        pressed: list[int] = []
        bindings = kb.numbers(pressed.append, max_value=5)

        for ch in "0156":
            bindings.dispatch(_char(ch))

        self.assertEqual(pressed, [1, 5])
        self.assertEqual(bindings.hint_entries(), [("1–5", "set value")])
        with_zero = kb.numbers(pressed.append, include_zero=True)
        self.assertIs(with_zero.dispatch(_char("0")), KeyActionResult.HANDLED)
        self.assertEqual(with_zero.hint_entries(), [("0–9", "set value")])

    def test_letter_matches_both_cases(self) -> None:
        presses: list[bool] = []
        bindings = kb.letter("a", lambda: presses.append(True), hint_description="all")

        bindings.dispatch(_char("a"))
        bindings.dispatch(_char("A"))
        bindings.dispatch(_char("b"))

        self.assertEqual(len(presses), 2)
        self.assertEqual(bindings.hint_entries(), [("A", "all")])

    def test_toggle_prompt_flips_on_every_arrow_and_space(self) -> None:
        flips: list[bool] = []
        bindings = kb.toggle_prompt(lambda: flips.append(True))

        for event in (UP, DOWN, LEFT, RIGHT, SPACE):
            self.assertIs(bindings.dispatch(event), KeyActionResult.HANDLED)
        self.assertEqual(len(flips), 5)
        self.assertIs(bindings.dispatch(ENTER), KeyActionResult.CONFIRMED)

    def test_selection_preset(self) -> None:
        toggled: list[bool] = []
        bindings = kb.selection(lambda: None, lambda: None, lambda: toggled.append(True))

        self.assertIs(bindings.dispatch(SPACE), KeyActionResult.HANDLED)
        self.assertIn(("Space", "select"), bindings.hint_entries())
        self.assertIs(bindings.dispatch(ESC), KeyActionResult.CANCELLED)

    def test_grid_selection_toggle_hint_is_optional(self) -> None:
        noop = lambda: None  # noqa: E731
        hidden = kb.grid_selection(noop, noop, noop, noop, on_toggle=noop)
        shown = kb.grid_selection(noop, noop, noop, noop, on_toggle=noop, show_toggle_hint=True)

        self.assertNotIn(("Space", "toggle selection"), hidden.hint_entries())
        self.assertIn(("Space", "toggle selection"), shown.hint_entries())
        self.assertIs(hidden.dispatch(SPACE), KeyActionResult.HANDLED)

    def test_toggle_group_toggle_all_letter(self) -> None:
        events: list[str] = []
        bindings = kb.toggle_group(
            lambda: events.append("up"),
            lambda: events.append("down"),
            lambda: events.append("row"),
            lambda: events.append("all"),
        )

        bindings.dispatch(RIGHT)
        bindings.dispatch(_char("a"))
        self.assertEqual(events, ["row", "all"])

    def test_exit_recipes_confirm(self) -> None:
        self.assertIs(kb.continue_prompt().dispatch(SPACE), KeyActionResult.CONFIRMED)
        self.assertIs(kb.any_key_to_continue().dispatch(_char("z")), KeyActionResult.CONFIRMED)
        self.assertIs(kb.any_key_to_continue().dispatch(KeyEvent(KeyEventType.CTRL_C)), KeyActionResult.CONFIRMED)
        self.assertIs(kb.back().dispatch(LEFT), KeyActionResult.CONFIRMED)
        self.assertIs(kb.back().dispatch(RIGHT), KeyActionResult.IGNORED)
        self.assertIs(kb.exit_on([KeyEventType.TAB]).dispatch(KeyEvent(KeyEventType.TAB)), KeyActionResult.CONFIRMED)

    def test_ctrl_and_search_recipes(self) -> None:
        hits: list[str] = []
        bindings = (
            kb.ctrl_r(lambda: hits.append("r"))
            + kb.ctrl_d(lambda: hits.append("d"))
            + kb.search_toggle(lambda: hits.append("/"))
            + kb.slider(lambda: hits.append("<"), lambda: hits.append(">"))
        )

        for event in (
            KeyEvent(KeyEventType.CTRL_R),
            KeyEvent(KeyEventType.CTRL_D),
            KeyEvent(KeyEventType.SLASH),
            LEFT,
            RIGHT,
        ):
            bindings.dispatch(event)

        self.assertEqual(hits, ["r", "d", "/", "<", ">"])
        # ctrl_d has no default description so it carries no hint
        self.assertNotIn("Ctrl+D", [label for label, _ in bindings.hint_entries()])


if __name__ == "__main__":
    unittest.main()
