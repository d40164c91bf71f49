"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into the logical key tokens of
``buffersticks.keys``. Handles ESC-sequence timing so a lone Escape press is
reported without waiting for another key.
"""

from __future__ import annotations

import os
import select

from . import keys

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_BYTES = {
    b"\x03": keys.CTRL_C,
    b"\x11": keys.CTRL_Q,
    b"\t": keys.TAB,
    b"\x08": keys.BACKSPACE,
    b"\x7f": keys.BACKSPACE,
    b"\r": keys.ENTER,
    b"\n": keys.ENTER,
}

_CSI_FINAL_BYTES = {
    b"A": keys.UP,
    b"B": keys.DOWN,
    b"C": keys.RIGHT,
    b"D": keys.LEFT,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character started by ``lead``."""
    first = lead[0]
    if first >= 0xF0:
        extra = 3
    elif first >= 0xE0:
        extra = 2
    elif first >= 0xC0:
        extra = 1
    else:
        extra = 0
    data = lead
    for _ in range(extra):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token; returns ``""`` on timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    token = _CONTROL_BYTES.get(ch)
    if token is not None:
        return token

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return keys.ESC
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return keys.ESC
    final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    # Skip parameter bytes (``ESC [ 1 ; 5 A``) up to the final byte.
    while final is not None and b"0" <= final <= b"?":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return keys.ESC
    return _CSI_FINAL_BYTES.get(final, keys.ESC)


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "read_key"]
