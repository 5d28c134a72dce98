"""Tests for single- and multi-select bookkeeping."""

from __future__ import annotations

import unittest

from rawprompt.navigation import SelectionController

ITEMS = ["red", "green", "blue", "cyan", "pink"]


class SelectionControllerTests(unittest.TestCase):
    def test_multi_toggle_twice_is_empty(self) -> None:
        selection = SelectionController.multi()
        selection.toggle(2)
        selection.toggle(2)
        self.assertTrue(selection.is_empty)

    def test_single_toggle_replaces_selection(self) -> None:
        selection = SelectionController.single(initial_index=1)
        selection.toggle(3)
        selection.toggle(3)
        self.assertEqual(selection.selected_indices, frozenset({3}))
        selection.select(0)
        self.assertEqual(selection.count, 1)

    def test_single_mode_never_holds_more_than_one(self) -> None:
        selection = SelectionController(multi_select=False, initial_selection={4, 2})
        self.assertEqual(selection.selected_indices, frozenset({2}))
        selection.select_all(5)
        selection.invert(5)
        self.assertEqual(selection.count, 1)

    def test_select_all_then_toggle_all_clears(self) -> None:
        selection = SelectionController.multi()
        selection.select_all(5)
        self.assertEqual(selection.count, 5)
        selection.toggle_all(5)
        self.assertTrue(selection.is_empty)
        selection.toggle_all(5)
        self.assertEqual(selection.count, 5)

    def test_invert(self) -> None:
        selection = SelectionController.multi({0, 2})
        selection.invert(4)
        self.assertEqual(selection.get_selected_indices(), [1, 3])

    def test_get_selected_many_sorted_and_bounded(self) -> None:
        selection = SelectionController.multi({4, 0, 9})
        self.assertEqual(selection.get_selected_many(ITEMS), ["red", "pink"])

    def test_fallback_on_empty_selection(self) -> None:
        selection = SelectionController.multi()
        self.assertEqual(selection.get_selected_many(ITEMS, fallback_index=1), ["green"])
        self.assertEqual(selection.get_selected_many(ITEMS, fallback_index=10), [])
        self.assertEqual(selection.get_selected(ITEMS, fallback_index=2), "blue")
        self.assertIsNone(selection.get_selected(ITEMS))
        self.assertEqual(selection.get_selected_indices(fallback_index=3), [3])

    def test_constrain_to_drops_out_of_range(self) -> None:
        selection = SelectionController.multi({1, 3, 4})
        selection.constrain_to(4)
        self.assertEqual(selection.get_selected_indices(), [1, 3])

    def test_summary_and_copy(self) -> None:
        selection = SelectionController.multi({1})
        self.assertEqual(selection.summary(5), "1/5 selected")
        clone = selection.copy()
        clone.toggle(2)
        self.assertEqual(selection.count, 1)
        self.assertTrue(clone.multi_select)
        self.assertEqual(SelectionController.multi().summary(5), "none selected")

    def test_deselect_and_clear(self) -> None:
        selection = SelectionController.multi({1, 2})
        selection.deselect(1)
        self.assertFalse(selection.is_selected(1))
        selection.clear()
        self.assertIsNone(selection.selected_index)


if __name__ == "__main__":
    unittest.main()
