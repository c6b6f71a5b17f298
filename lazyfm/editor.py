"""Editor launch helper for opening files from the browser.

Resolves the editor command and runs it as a foreground child attached to
the real stdin/stdout/stderr. Terminal handoff is the caller's job.
"""

from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .errors import EditorLaunchFailed

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vim"


@dataclass(frozen=True)
class EditorOutcome:
    """Exit status of a finished editor child."""

    returncode: int

    def describe(self) -> str | None:
        """Return a status note for abnormal exits, else ``None``."""
        if self.returncode == 0:
            return None
        if self.returncode < 0:
            return f"Editor terminated by signal {-self.returncode}"
        return f"Editor exited with status {self.returncode}"


def resolve_editor_command(configured: str | None = None) -> list[str]:
    """Pick the editor argv: explicit setting, ``$VISUAL``, ``$EDITOR``, then vim."""
    for candidate in (configured, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        if candidate is None:
            continue
        try:
            cmd = shlex.split(candidate)
        except ValueError:
            logger.warning("ignoring unparsable editor command %r", candidate)
            continue
        if cmd:
            return cmd
    return [DEFAULT_EDITOR]


def launch_editor(target: Path, command: list[str]) -> EditorOutcome:
    """Run ``command target`` in the foreground and wait for it to exit.

    The child inherits the real stdin/stdout/stderr. SIGINT is ignored by the
    browser while waiting so Ctrl+C reaches only the editor. Raises
    ``EditorLaunchFailed`` when the process cannot be started.
    """
    argv = [*command, str(target)]
    logger.info("launching editor: %s", shlex.join(argv))
    try:
        process = subprocess.Popen(argv)
    except (OSError, subprocess.SubprocessError) as exc:
        raise EditorLaunchFailed(f"Failed to launch editor: {exc}", path=target) from exc

    previous_handler = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        returncode = process.wait()
    finally:
        signal.signal(signal.SIGINT, previous_handler)
    logger.info("editor exited with status %s", returncode)
    return EditorOutcome(returncode=returncode)
