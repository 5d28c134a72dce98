"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, pushback of read-ahead bytes, and
control-key mapping. These protect interactive input handling in raw mode.
"""

from __future__ import annotations

import os
import time
import unittest

from rawprompt.input.events import KeyEvent, KeyEventType
from rawprompt.input.reader import KeyDecoder, classify_byte
from rawprompt.terminal import StdioInput, StdioOutput, Terminal
from rawprompt.testing import InputExhaustedError, ScriptedTerminal


def _decoder(data: bytes) -> tuple[KeyDecoder, list[float]]:
    terminal = ScriptedTerminal()
    terminal.input.queue_bytes(data)
    sleeps: list[float] = []
    return KeyDecoder(terminal, sleep=sleeps.append), sleeps


class ClassifyByteTests(unittest.TestCase):
    def test_fixed_byte_mappings(self) -> None:
        expected = {
            13: KeyEventType.ENTER,
            10: KeyEventType.ENTER,
            3: KeyEventType.CTRL_C,
            18: KeyEventType.CTRL_R,
            4: KeyEventType.CTRL_D,
            5: KeyEventType.CTRL_E,
            9: KeyEventType.TAB,
            32: KeyEventType.SPACE,
            47: KeyEventType.SLASH,
            127: KeyEventType.BACKSPACE,
            8: KeyEventType.BACKSPACE,
        }
        for byte, key_type in expected.items():
            with self.subTest(byte=byte):
                self.assertEqual(classify_byte(byte), KeyEvent(key_type))

    def test_other_control_bytes_are_generic_ctrl_letters(self) -> None:
        self.assertEqual(classify_byte(1), KeyEvent(KeyEventType.CTRL_GENERIC, "a"))
        self.assertEqual(classify_byte(11), KeyEvent(KeyEventType.CTRL_GENERIC, "k"))
        self.assertEqual(classify_byte(26), KeyEvent(KeyEventType.CTRL_GENERIC, "z"))

    def test_printable_ascii_is_char(self) -> None:
        self.assertEqual(classify_byte(ord("a")), KeyEvent(KeyEventType.CHAR, "a"))
        self.assertEqual(classify_byte(ord("~")), KeyEvent(KeyEventType.CHAR, "~"))

    def test_non_printable_bytes_are_unknown(self) -> None:
        self.assertEqual(classify_byte(0), KeyEvent(KeyEventType.UNKNOWN))
        self.assertEqual(classify_byte(0xC3), KeyEvent(KeyEventType.UNKNOWN))

    def test_escape_needs_lookahead(self) -> None:
        self.assertIsNone(classify_byte(27))


class KeyDecoderTests(unittest.TestCase):
    def test_arrow_sequences(self) -> None:
        for final, key_type in (
            (b"A", KeyEventType.ARROW_UP),
            (b"B", KeyEventType.ARROW_DOWN),
            (b"C", KeyEventType.ARROW_RIGHT),
            (b"D", KeyEventType.ARROW_LEFT),
        ):
            with self.subTest(final=final):
                decoder, _ = _decoder(b"\x1b[" + final)
                self.assertEqual(decoder.read(), KeyEvent(key_type))

    def test_lone_escape_waits_once_then_returns_esc(self) -> None:
        decoder, sleeps = _decoder(b"\x1b")

        self.assertEqual(decoder.read(), KeyEvent(KeyEventType.ESC))
        self.assertEqual(sleeps, [0.03])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        decoder, _ = _decoder(b"\x1bq")

        self.assertEqual(decoder.read(), KeyEvent(KeyEventType.ESC))
        self.assertEqual(decoder.pending, (ord("q"),))
        self.assertEqual(decoder.read(), KeyEvent(KeyEventType.CHAR, "q"))

    def test_escape_followed_by_escape_yields_two_escapes(self) -> None:
        decoder, _ = _decoder(b"\x1b\x1b")

        self.assertEqual(decoder.read(), KeyEvent(KeyEventType.ESC))
        self.assertEqual(decoder.read(), KeyEvent(KeyEventType.ESC))

    def test_incomplete_csi_is_esc(self) -> None:
        decoder, _ = _decoder(b"\x1b[")
        self.assertEqual(decoder.read(), KeyEvent(KeyEventType.ESC))

    def test_unsupported_csi_consumes_two_bytes_and_leaks_tail(self) -> None:
        decoder, _ = _decoder(b"\x1b[3~")

        self.assertEqual(decoder.read(), KeyEvent(KeyEventType.ESC))
        self.assertEqual(decoder.read(), KeyEvent(KeyEventType.CHAR, "~"))

    def test_configurable_delay(self) -> None:
        terminal = ScriptedTerminal()
        terminal.input.queue_bytes([27])
        sleeps: list[float] = []
        KeyDecoder(terminal, esc_delay_ms=0, sleep=sleeps.append).read()
        self.assertEqual(sleeps, [])

    def test_exhausted_input_propagates(self) -> None:
        decoder, _ = _decoder(b"")
        with self.assertRaises(InputExhaustedError):
            decoder.read()
        with self.assertRaises(EOFError):
            decoder.read()

    def test_scripted_key_helpers_round_trip_through_decoder(self) -> None:
        terminal = ScriptedTerminal()
        terminal.input.queue_keys(KeyEventType.ARROW_DOWN, KeyEventType.ENTER)
        terminal.input.queue_key(KeyEventType.CHAR, "x")
        terminal.input.queue_key(KeyEventType.CTRL_GENERIC, "b")
        decoder = KeyDecoder(terminal, sleep=lambda _seconds: None)

        self.assertEqual(
            [decoder.read() for _ in range(4)],
            [
                KeyEvent(KeyEventType.ARROW_DOWN),
                KeyEvent(KeyEventType.ENTER),
                KeyEvent(KeyEventType.CHAR, "x"),
                KeyEvent(KeyEventType.CTRL_GENERIC, "b"),
            ],
        )


class PipeDecoderTests(unittest.TestCase):
    def _read_keys(self, data: bytes, count: int) -> list[KeyEvent]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, data)
            terminal = Terminal(StdioInput(read_fd), StdioOutput(write_fd))
            decoder = KeyDecoder(terminal, esc_delay_ms=20)
            return [decoder.read() for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_keys(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, [KeyEvent(KeyEventType.ESC)])
        self.assertLess(elapsed, 0.5)

    def test_arrow_sequence_over_pipe(self) -> None:
        self.assertEqual(self._read_keys(b"\x1b[A", 1), [KeyEvent(KeyEventType.ARROW_UP)])

    def test_escape_then_letter_over_pipe(self) -> None:
        self.assertEqual(
            self._read_keys(b"\x1ba", 2),
            [KeyEvent(KeyEventType.ESC), KeyEvent(KeyEventType.CHAR, "a")],
        )


if __name__ == "__main__":
    unittest.main()
