"""Frame rendering for the two-pane browser view.

Left pane lists entries, right pane shows details and a preview, and the
last row is a reverse-video status line. ``build_frame`` is pure;
``render_browser`` writes the frame to the terminal.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ..ansi import clip_ansi_line, fit_ansi_line, sanitize_terminal_text
from ..directory.types import EntryRef
from ..ui_theme import UITheme
from .details import format_details_error, format_details_lines
from .preview import preview_lines

EMPTY_DIRECTORY_HINT = "(empty directory)"


@dataclass(frozen=True)
class RenderContext:
    """Everything one frame needs, captured from session state."""

    path: Path
    entries: list[EntryRef]
    selected_idx: int | None
    list_start: int
    width: int
    height: int
    theme: UITheme
    details_lines: list[str] = field(default_factory=list)
    preview_lines: list[str] = field(default_factory=list)
    status_message: str = ""
    status_is_error: bool = False
    key_hint: str = ""


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def content_rows(height: int) -> int:
    return max(1, height - 1)


def pane_widths(width: int) -> tuple[int, int]:
    """Split the screen evenly between list and details, minus a divider."""
    left = max(1, (width - 1) // 2)
    right = max(1, width - left - 1)
    return left, right


def list_viewport_start(selected_idx: int | None, list_start: int, rows: int, total: int) -> int:
    """Scroll ``list_start`` just enough to keep ``selected_idx`` visible."""
    if selected_idx is None or total <= 0:
        return 0
    if selected_idx < list_start:
        list_start = selected_idx
    elif selected_idx >= list_start + rows:
        list_start = selected_idx - rows + 1
    return max(0, min(list_start, max(0, total - rows)))


def format_entry(entry: EntryRef, theme: UITheme) -> str:
    color = theme.entry_color(entry.kind)
    name = sanitize_terminal_text(entry.name)
    if not color:
        return f" {name}"
    return f" {color}{name}{theme.reset}"


def _status_row(context: RenderContext) -> str:
    total = len(context.entries)
    position = 0 if context.selected_idx is None else context.selected_idx + 1
    left = f" {sanitize_terminal_text(str(context.path))} ({position}/{total})"
    right = sanitize_terminal_text(context.status_message) if context.status_message else context.key_hint
    line = build_status_line(left, context.width, f"{right} " if right else "")
    theme = context.theme
    if context.status_message:
        color = theme.status_error if context.status_is_error else theme.status_message
    else:
        color = theme.reverse
    return f"{color}{line}{theme.reset}"


def build_frame(context: RenderContext) -> str:
    """Compose the full-screen frame for ``context`` as one string."""
    theme = context.theme
    rows = content_rows(context.height)
    left_width, right_width = pane_widths(context.width)
    right_lines = list(context.details_lines)
    if context.preview_lines:
        right_lines.append("")
        right_lines.extend(context.preview_lines)

    out: list[str] = ["\033[H\033[J"]
    for row in range(rows):
        entry_idx = context.list_start + row
        if entry_idx < len(context.entries):
            left = format_entry(context.entries[entry_idx], theme)
            left = fit_ansi_line(left, left_width)
            if entry_idx == context.selected_idx:
                left = selected_with_ansi(left, theme)
        elif row == 0 and not context.entries:
            hint_off = theme.reset if theme.empty_hint else ""
            left = fit_ansi_line(f" {theme.empty_hint}{EMPTY_DIRECTORY_HINT}{hint_off}", left_width)
        else:
            left = " " * left_width
        out.append(left)

        divider_off = theme.reset if theme.divider else ""
        out.append(f"{theme.divider}│{divider_off}")

        if row < len(right_lines):
            right = clip_ansi_line(f" {right_lines[row]}", right_width)
            out.append(right)
            if "\033" in right:
                out.append(theme.reset or "\033[0m")
        out.append("\r\n")

    out.append(_status_row(context))
    return "".join(out)


def render_browser(context: RenderContext, fd: int) -> None:
    os.write(fd, build_frame(context).encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "build_frame",
    "build_status_line",
    "content_rows",
    "format_details_error",
    "format_details_lines",
    "format_entry",
    "list_viewport_start",
    "pane_widths",
    "preview_lines",
    "render_browser",
    "selected_with_ansi",
]
