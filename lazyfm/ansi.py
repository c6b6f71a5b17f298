"""ANSI-aware text measurement and line shaping utilities.

Clipping and padding preserve escape sequences so colored entry names and
highlighted preview lines stay aligned inside fixed-width panes.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def sanitize_terminal_text(text: str) -> str:
    """Replace control characters except tab so raw text cannot drive the terminal."""
    return "".join(
        ch if ch == "\t" or (ord(ch) >= 0x20 and ord(ch) != 0x7F) else "?"
        for ch in text
    )


def display_width(text: str) -> int:
    """Visible width of ``text`` ignoring escape sequences."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad with spaces to fill them."""
    clipped = clip_ansi_line(text, width)
    if "\x1b" in clipped:
        clipped += RESET
    return clipped + " " * max(0, width - display_width(clipped))
