"""Filesystem primitives for directory listing, metadata and removal.

Every failure is raised as a typed ``LazyFMError`` chained to the original
``OSError`` so callers never have to inspect errno values.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from ..errors import DeleteFailed, DirectoryUnreadable, StatFailed, describe_os_error
from .types import EntryDetails, EntryKind, EntryRef

logger = logging.getLogger(__name__)


def kind_from_mode(mode: int) -> EntryKind:
    """Classify a ``st_mode`` value without following symlinks."""
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISREG(mode):
        return EntryKind.REGULAR_FILE
    if stat.S_ISFIFO(mode):
        return EntryKind.NAMED_PIPE
    if stat.S_ISSOCK(mode):
        return EntryKind.SOCKET
    if stat.S_ISCHR(mode) or stat.S_ISBLK(mode):
        return EntryKind.DEVICE
    return EntryKind.OTHER


def _classify_dir_entry(entry: os.DirEntry) -> EntryKind:
    # d_type answers the common cases without an extra lstat call.
    if entry.is_symlink():
        return EntryKind.SYMLINK
    if entry.is_dir(follow_symlinks=False):
        return EntryKind.DIRECTORY
    if entry.is_file(follow_symlinks=False):
        return EntryKind.REGULAR_FILE
    return kind_from_mode(entry.stat(follow_symlinks=False).st_mode)


def sort_entries(entries: list[EntryRef]) -> list[EntryRef]:
    """Directories first, then everything else, each by the raw bytes of the name."""
    return sorted(entries, key=lambda item: (not item.is_dir, os.fsencode(item.name)))


def list_entries(directory: Path, show_hidden: bool = True) -> list[EntryRef]:
    """List and classify the entries of ``directory`` in display order.

    Entries that vanish between ``readdir`` and classification are skipped.
    Raises ``DirectoryUnreadable`` when the directory itself cannot be listed.
    """
    entries: list[EntryRef] = []
    try:
        with os.scandir(directory) as scan:
            for child in scan:
                if not show_hidden and child.name.startswith("."):
                    continue
                try:
                    kind = _classify_dir_entry(child)
                except OSError:
                    logger.debug("skipping vanished entry %s", child.path)
                    continue
                entries.append(EntryRef(name=child.name, kind=kind))
    except OSError as exc:
        raise DirectoryUnreadable(
            f"Cannot open {directory}: {describe_os_error(exc)}",
            path=directory,
        ) from exc
    return sort_entries(entries)


def resolves_to_directory(path: Path) -> bool:
    """Return whether ``path`` is a directory after following symlinks.

    Raises ``StatFailed`` when the target cannot be stat'ed, including dangling
    symlinks and entries removed since the last listing.
    """
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except OSError as exc:
        raise StatFailed(f"Cannot open {path.name}: {describe_os_error(exc)}", path=path) from exc


def read_details(path: Path) -> EntryDetails:
    """Stat one entry (not following symlinks) and build its details."""
    try:
        info = os.lstat(path)
    except OSError as exc:
        raise StatFailed(
            f"Error retrieving details: {describe_os_error(exc)}",
            path=path,
        ) from exc

    kind = kind_from_mode(info.st_mode)
    link_target: str | None = None
    if kind is EntryKind.SYMLINK:
        try:
            link_target = os.readlink(path)
        except OSError:
            link_target = None
    return EntryDetails(
        name=path.name,
        kind=kind,
        size=int(info.st_size),
        permissions=stat.filemode(info.st_mode),
        uid=int(info.st_uid),
        gid=int(info.st_gid),
        mtime=float(info.st_mtime),
        link_target=link_target,
    )


def remove_entry(path: Path) -> None:
    """Remove a file, symlink or whole directory tree at ``path``.

    Symlinks are unlinked, never followed. A missing entry is a failure, not
    a silent success. Raises ``DeleteFailed`` on any error.
    """
    try:
        info = os.lstat(path)
        if stat.S_ISDIR(info.st_mode):
            shutil.rmtree(path)
        else:
            os.unlink(path)
    except OSError as exc:
        raise DeleteFailed(
            f"Error deleting {path.name}: {describe_os_error(exc)}",
            path=path,
        ) from exc


__all__ = [
    "kind_from_mode",
    "sort_entries",
    "list_entries",
    "resolves_to_directory",
    "read_details",
    "remove_entry",
]
