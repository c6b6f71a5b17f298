"""Runtime wiring for one browser session.

Builds the directory model, terminal controller and session controller,
then runs the loop. Fatal terminal-state failures end here with an exit
code; everything else was already handled inside the session.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from ..directory import DirectoryModel
from ..errors import DirectoryUnreadable, ExitCode, TerminalStateError, user_facing_error
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .loop import run_main_loop
from .session import SessionController

logger = logging.getLogger(__name__)

TERMINAL_RECOVERY_HINT = "run `stty sane` if the shell does not echo input"


@dataclass(frozen=True)
class BrowserOptions:
    """Resolved settings for a session (CLI flags merged over config)."""

    editor_command: list[str]
    theme: UITheme = DEFAULT_THEME
    show_hidden: bool = True
    preview_line_count: int = 0
    no_color: bool = False


def run_browser(
    path: Path,
    options: BrowserOptions,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> ExitCode:
    """Browse ``path`` interactively and return the process exit code."""
    stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd

    model = DirectoryModel(path, show_hidden=options.show_hidden)
    try:
        model.load()
    except DirectoryUnreadable as exc:
        logger.error("cannot start in %s: %s", path, exc.message)
        print(user_facing_error(exc.message), file=sys.stderr)
        return ExitCode.UNREADABLE_PATH

    try:
        terminal = TerminalController(stdin_fd, stdout_fd)
        session = SessionController(
            model,
            terminal,
            editor_command=options.editor_command,
            theme=options.theme,
            preview_line_count=options.preview_line_count,
            no_color=options.no_color,
        )
        run_main_loop(session, terminal, stdin_fd, stdout_fd)
    except TerminalStateError as exc:
        logger.error("fatal terminal %s failure: %s", exc.operation, exc.message, exc_info=True)
        print(user_facing_error(exc.message, hint=TERMINAL_RECOVERY_HINT), file=sys.stderr)
        return ExitCode.TERMINAL_ERROR
    return ExitCode.SUCCESS
