"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, and control-key token mapping.
"""

import os
import time
import unittest

from buffersticks import input as input_mod


def _read_all(payload: bytes, count: int) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, payload)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        self.assertEqual(_read_all(b"\x1b[A\x1b[B\x1bOC\x1b[D", 4), ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_modified_arrow_parameters_are_skipped(self) -> None:
        self.assertEqual(_read_all(b"\x1b[1;5Aq", 2), ["UP", "q"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_all(b"\x1bm", 2), ["ESC", "m"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            _read_all(b"\x03\x11\r\x7f\t", 5),
            ["CTRL_C", "CTRL_Q", "ENTER", "BACKSPACE", "TAB"],
        )

    def test_multibyte_character_is_one_key(self) -> None:
        self.assertEqual(_read_all("é/".encode("utf-8"), 2), ["é", "/"])

    def test_timeout_returns_empty(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = input_mod.read_key(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")

    def test_closed_input_returns_empty(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            key = input_mod.read_key(read_fd)
        finally:
            os.close(read_fd)

        self.assertEqual(key, "")


if __name__ == "__main__":
    unittest.main()
