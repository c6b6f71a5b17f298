"""Terminal control helpers for the browser session.

Owns raw-mode lifecycle, alternate-screen switching, and the handoff that
lends the terminal to a foreground child process and takes it back.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

from .errors import TerminalStateError

logger = logging.getLogger(__name__)

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"

TerminalAttributes = list


class TerminalController:
    """Manage terminal mode transitions for one stdin/stdout pair."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture the pre-launch tty state and bind file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = self.capture_state()
        self.raw_mode_active = False

    def capture_state(self) -> TerminalAttributes:
        """Snapshot current tty attributes; failure is fatal."""
        try:
            return termios.tcgetattr(self.stdin_fd)
        except termios.error as exc:
            raise TerminalStateError(
                f"Cannot read terminal attributes: {exc}",
                operation="capture",
            ) from exc

    def restore_state(self, attributes: TerminalAttributes) -> None:
        """Apply ``attributes`` exactly, keeping any pending typed input."""
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSADRAIN, attributes)
        except termios.error as exc:
            raise TerminalStateError(
                f"Cannot restore terminal attributes: {exc}",
                operation="restore",
            ) from exc

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, ENTER_SCREEN)
        self.raw_mode_active = True

    def disable_tui_mode(self) -> None:
        """Restore the pre-launch terminal state and main screen buffer."""
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, LEAVE_SCREEN)
        self.raw_mode_active = False
        self.restore_state(self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Lend the terminal to a foreground child for the ``with`` body.

        The raw-mode attributes are captured before screen control is
        released and re-applied byte-for-byte afterwards, even when the body
        raises. Yields the captured attributes.
        """
        attributes = self.capture_state()
        os.write(self.stdout_fd, LEAVE_SCREEN)
        self.raw_mode_active = False
        try:
            self.restore_state(self._saved_tty_state)
            yield attributes
        finally:
            self.restore_state(attributes)
            os.write(self.stdout_fd, ENTER_SCREEN)
            self.raw_mode_active = True
            logger.debug("terminal reacquired after handoff")
