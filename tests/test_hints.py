from __future__ import annotations

import unittest

from rawprompt.input import bindings as kb
from rawprompt.render import hints


class HintFormattingTests(unittest.TestCase):
    def test_key_hint(self) -> None:
        self.assertEqual(hints.key_hint("Enter", color=False), "[Enter]")
        self.assertEqual(hints.key_hint("Enter"), f"[{hints.KEY_ACCENT}Enter{hints.RESET}]")
        self.assertEqual(hints.hint("Esc", "cancel", color=False), "[Esc] cancel")

    def test_bullets_and_comma(self) -> None:
        self.assertEqual(hints.bullets(["a", "b"], color=False), "a • b")
        self.assertEqual(hints.bullets(["a", "b"], dim=True), f"{hints.DIM}a • b{hints.RESET}")
        self.assertEqual(hints.comma(["x", "y"], color=False), "(x, y)")

    def test_grid_aligns_columns(self) -> None:
        rendered = hints.grid([("↑/↓", "navigate"), ("Enter", "confirm")], color=False)
        self.assertEqual(
            rendered.split("\n"),
            ["Controls:", "  ↑/↓    navigate", "  Enter  confirm"],
        )

    def test_hints_follow_bindings(self) -> None:
        bindings = kb.prompt()
        self.assertEqual(hints.bindings_bullets(bindings, color=False), "[Enter] confirm • [Esc] cancel")
        self.assertIn("  Esc    cancel", hints.bindings_grid(bindings, color=False))


if __name__ == "__main__":
    unittest.main()
