"""Error model and exit code contract.

Recoverable filesystem/process failures are raised by the component that
performed the operation and turned into status-line text by the session.
Terminal-state failures are fatal and end the process.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    UNREADABLE_PATH = 3
    TERMINAL_ERROR = 4
    RUNTIME_ERROR = 5


@dataclass(eq=False)
class LazyFMError(Exception):
    message: str
    path: Path | None = None
    code: ExitCode = ExitCode.RUNTIME_ERROR

    def __str__(self) -> str:
        return self.message


class DirectoryUnreadable(LazyFMError):
    """Directory could not be listed (missing, not a directory, no permission)."""


class StatFailed(LazyFMError):
    """Metadata query for a single entry failed, usually because it vanished."""


class DeleteFailed(LazyFMError):
    """Recursive removal of an entry failed."""


class EditorLaunchFailed(LazyFMError):
    """The editor child process could not be started."""


@dataclass(eq=False)
class TerminalStateError(LazyFMError):
    """Terminal attributes could not be captured or restored.

    There is no safe way to keep handing the terminal back and forth after
    this, so it is the only error that ends the session.
    """

    code: ExitCode = ExitCode.TERMINAL_ERROR
    operation: str = "capture"


def describe_os_error(exc: OSError) -> str:
    """Return the short human reason carried by ``exc``."""
    return exc.strerror or str(exc)


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
