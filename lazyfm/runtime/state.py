from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BrowserState:
    """Mutable view state owned by the session, separate from the directory model."""

    list_start: int = 0
    page_rows: int = 1
    status_message: str = ""
    status_is_error: bool = False
    dirty: bool = True
    skip_next_lf: bool = False
