"""Logical key tokens exchanged between input decoding and sessions.

Printable keys are passed as the character itself; everything else uses one
of the upper-case token names below.
"""

from __future__ import annotations

ENTER = "ENTER"
ESC = "ESC"
BACKSPACE = "BACKSPACE"
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
TAB = "TAB"
CTRL_C = "CTRL_C"
CTRL_Q = "CTRL_Q"

CANCEL_KEYS = frozenset({ESC, CTRL_C})


def is_printable_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


__all__ = [
    "BACKSPACE",
    "CANCEL_KEYS",
    "CTRL_C",
    "CTRL_Q",
    "DOWN",
    "ENTER",
    "ESC",
    "LEFT",
    "RIGHT",
    "TAB",
    "UP",
    "is_printable_key",
]
