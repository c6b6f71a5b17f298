"""Main interactive event loop for the browser.

One event at a time: render when dirty, read one key, dispatch it. The
only blocking point outside ``read_key`` is the editor handoff, which runs
inside the session's dispatch.
"""

from __future__ import annotations

import logging
import shutil

from ..input import read_key
from ..render import render_browser
from ..terminal import TerminalController
from .session import SessionController

logger = logging.getLogger(__name__)

# Polling interval so terminal resizes are picked up without a keypress.
RESIZE_POLL_MS = 200


def normalize_enter(key: str, session: SessionController) -> str | None:
    """Collapse CR, LF and CRLF into a single ``ENTER`` token.

    Returns ``None`` for the LF half of a CRLF pair.
    """
    state = session.state
    if state.skip_next_lf and key == "ENTER_LF":
        state.skip_next_lf = False
        return None
    if key == "ENTER_CR":
        state.skip_next_lf = True
        return "ENTER"
    state.skip_next_lf = False
    if key == "ENTER_LF":
        return "ENTER"
    return key


def run_main_loop(
    session: SessionController,
    terminal: TerminalController,
    stdin_fd: int,
    stdout_fd: int,
) -> None:
    """Run the browser until a quit key; the terminal is restored on every exit path."""
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        logger.info("session started in %s", session.model.path)
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                session.state.dirty = True

            if session.state.dirty:
                render_browser(session.render_context(term.columns, term.lines), stdout_fd)
                session.state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=RESIZE_POLL_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            normalized = normalize_enter(key, session)
            if normalized is None:
                continue
            if session.handle_key(normalized):
                break
    logger.info("session ended in %s", session.model.path)
