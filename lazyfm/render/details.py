"""Details-pane text for the selected entry."""

from __future__ import annotations

import time

from ..ansi import sanitize_terminal_text
from ..directory.types import EntryDetails
from ..ui_theme import UITheme

MODIFIED_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"


def format_modified(mtime: float) -> str:
    """Format an mtime like RFC 1123, in local time."""
    return time.strftime(MODIFIED_FORMAT, time.localtime(mtime))


def details_fields(details: EntryDetails) -> list[tuple[str, str]]:
    fields = [
        ("Name", sanitize_terminal_text(details.name)),
        ("Type", details.kind.label),
        ("Size", f"{details.size} bytes"),
        ("Permissions", details.permissions),
        ("Owner", str(details.uid)),
        ("Group", str(details.gid)),
        ("Modified", format_modified(details.mtime)),
    ]
    if details.link_target is not None:
        fields.append(("Target", sanitize_terminal_text(details.link_target)))
    return fields


def format_details_lines(details: EntryDetails | None, theme: UITheme) -> list[str]:
    """Render labelled ``Name:``/``Type:``/... rows; empty when nothing is selected."""
    if details is None:
        return []
    label_on = theme.details_label
    label_off = theme.reset if label_on else ""
    return [f"{label_on}{label}:{label_off} {value}" for label, value in details_fields(details)]


def format_details_error(message: str, theme: UITheme) -> list[str]:
    color_off = theme.reset if theme.details_error else ""
    return [f"{theme.details_error}{sanitize_terminal_text(message)}{color_off}"]
