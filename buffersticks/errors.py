"""Exception types raised by buffersticks.

Ambiguous or malformed user input is never an error; these cover label-space
exhaustion and internal invariant violations only.
"""

from __future__ import annotations


class BufferSticksError(Exception):
    """Base class for all buffersticks failures."""


class LabelSpaceExhaustedError(BufferSticksError):
    """No unused label is left for an item."""


class InvariantError(BufferSticksError):
    """Internal consistency check failed (duplicate labels, bad index)."""


__all__ = ["BufferSticksError", "InvariantError", "LabelSpaceExhaustedError"]
