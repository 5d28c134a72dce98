"""Tests for ANSI-aware width measurement, padding, and clipping."""

from __future__ import annotations

import unittest

from rawprompt.render.text import (
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

STYLED = "\x1b[1mab\x1b[0m"


class MeasurementTests(unittest.TestCase):
    def test_escape_codes_do_not_count(self) -> None:
        self.assertEqual(strip_ansi(STYLED), "ab")
        self.assertEqual(visible_length(STYLED), 2)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(visible_length("\x1b[31m漢字\x1b[0m"), 4)
        self.assertEqual(visible_length("é"), 1)

    def test_column_width(self) -> None:
        values = ["a", "\x1b[1mabc\x1b[0m"]
        self.assertEqual(column_width(values, visible=True), 3)
        self.assertEqual(column_width(values), len(values[1]))
        self.assertEqual(column_width(values, max_width=5), 5)
        self.assertEqual(column_width([], min_width=2), 2)


class PaddingTests(unittest.TestCase):
    def test_plain_padding(self) -> None:
        self.assertEqual(pad_right("ab", 4), "ab  ")
        self.assertEqual(pad_left("7", 3), "  7")
        self.assertEqual(pad_right("toolong", 3), "toolong")

    def test_visible_padding_ignores_escapes(self) -> None:
        self.assertEqual(pad_visible_right(STYLED, 4), STYLED + "  ")
        self.assertEqual(pad_visible_left(STYLED, 3), " " + STYLED)
        self.assertEqual(visible_length(pad_visible_right(STYLED, 4)), 4)

    def test_center_puts_odd_space_on_right(self) -> None:
        self.assertEqual(pad_visible_center("ab", 5), " ab  ")
        self.assertEqual(pad_visible_center("abc", 2), "abc")


class TruncationTests(unittest.TestCase):
    def test_truncate_adds_ellipsis(self) -> None:
        self.assertEqual(truncate("abcdef", 4), "abc…")
        self.assertEqual(truncate("abc", 3), "abc")
        self.assertEqual(truncate("abc", 1), "a")
        self.assertEqual(truncate("abc", 0), "")

    def test_truncate_pad_is_fixed_width(self) -> None:
        self.assertEqual(truncate_pad("ab", 4), "ab  ")
        self.assertEqual(truncate_pad("abcdef", 4), "abc…")

    def test_clip_keeps_leading_escapes(self) -> None:
        self.assertEqual(clip_ansi_line("\x1b[31mhello\x1b[0m", 3), "\x1b[31mhel")
        self.assertEqual(clip_ansi_line("漢字x", 3), "漢")
        self.assertEqual(clip_ansi_line("a\tb", 4), "a")
        self.assertEqual(clip_ansi_line("a\tb", 9), "a       b")
        self.assertEqual(clip_ansi_line("abc", 0), "")


if __name__ == "__main__":
    unittest.main()
