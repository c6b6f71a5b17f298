"""Syntax-highlighted head preview for the selected regular file."""

from __future__ import annotations

from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.util import ClassNotFound

from ..ansi import sanitize_terminal_text

PREVIEW_READ_BYTES = 8192
BINARY_PLACEHOLDER = "(binary file)"
_FORMATTER = TerminalFormatter()


def read_head(path: Path, max_lines: int) -> str | None:
    """Return up to ``max_lines`` decoded lines from the start of ``path``.

    Returns ``BINARY_PLACEHOLDER`` for content containing NUL bytes and
    ``None`` when the file cannot be read.
    """
    try:
        with path.open("rb") as handle:
            data = handle.read(PREVIEW_READ_BYTES)
    except OSError:
        return None
    if b"\x00" in data:
        return BINARY_PLACEHOLDER
    text = data.decode("utf-8", errors="replace")
    lines = text.splitlines()[:max_lines]
    return "\n".join(sanitize_terminal_text(line) for line in lines)


def highlight_source(source: str, path: Path) -> str:
    """Colorize ``source`` with the lexer guessed from the file name."""
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, _FORMATTER)


def preview_lines(path: Path, max_lines: int, *, no_color: bool = False) -> list[str]:
    """Build display rows previewing the head of ``path``."""
    if max_lines <= 0:
        return []
    source = read_head(path, max_lines)
    if not source:
        return []
    if source == BINARY_PLACEHOLDER or no_color:
        return source.splitlines()
    return highlight_source(source, path).splitlines()[:max_lines]
