"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing for arrow and delete keys.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x04": "CTRL_D",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\t": "TAB",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}
_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}
_CSI_TILDE_KEYS = {
    b"1": "HOME",
    b"3": "DELETE",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
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
        missing = 3
    elif first >= 0xE0:
        missing = 2
    elif first >= 0xC0:
        missing = 1
    else:
        missing = 0
    data = lead
    for _ in range(missing):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[seq]
    if seq in _CSI_TILDE_KEYS:
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return _CSI_TILDE_KEYS[seq]
    return "ESC"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; ``""`` on timeout or EOF."""
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

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _read_utf8_tail(fd, ch)
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in {b"[", b"O"}:
        return _read_csi(fd)
    _PENDING_BYTES.append(seq)
    return "ESC"
