"""Domain datatypes for directory listings and navigation requests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryKind(Enum):
    """Filesystem classification of one directory entry."""

    DIRECTORY = "Directory"
    REGULAR_FILE = "File"
    SYMLINK = "Symlink"
    NAMED_PIPE = "Named Pipe"
    SOCKET = "Socket"
    DEVICE = "Device"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class EntryRef:
    """One listed entry; rebuilt on every load, never updated in place."""

    name: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class EntryDetails:
    """Metadata for the selected entry, computed on demand."""

    name: str
    kind: EntryKind
    size: int
    permissions: str
    uid: int
    gid: int
    mtime: float
    link_target: str | None = None


@dataclass(frozen=True)
class EnterDirectory:
    path: Path


@dataclass(frozen=True)
class OpenFile:
    path: Path


NavigateAction = EnterDirectory | OpenFile


__all__ = [
    "EntryKind",
    "EntryRef",
    "EntryDetails",
    "EnterDirectory",
    "OpenFile",
    "NavigateAction",
]
