"""Directory listing state machine: load, select, navigate and delete.

``DirectoryModel`` owns the displayed path, its sorted entries and the
selection index. Every mutation rebuilds the whole entry list; failures leave
the previous view untouched and surface as ``LazyFMError`` subclasses.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import DirectoryUnreadable
from .fs import list_entries, read_details, remove_entry, resolves_to_directory
from .types import EnterDirectory, EntryDetails, EntryRef, NavigateAction, OpenFile

logger = logging.getLogger(__name__)


class DirectoryModel:
    """Consistent view of one directory's contents."""

    def __init__(self, path: Path, *, show_hidden: bool = True) -> None:
        self.path = path
        self.show_hidden = show_hidden
        self.entries: list[EntryRef] = []
        self.selected_idx: int | None = None

    @property
    def selected_entry(self) -> EntryRef | None:
        if self.selected_idx is None:
            return None
        return self.entries[self.selected_idx]

    def entry_path(self, index: int) -> Path:
        return self.path / self.entries[index].name

    def _entry_at(self, index: int | None) -> EntryRef | None:
        if index is None or not 0 <= index < len(self.entries):
            return None
        return self.entries[index]

    def load(
        self,
        path: Path | None = None,
        *,
        select_name: str | None = None,
        select_index: int | None = None,
    ) -> None:
        """List ``path`` (default: current path) and replace the view.

        Selection resets to the first entry unless ``select_name`` matches an
        entry or ``select_index`` is given (clamped to the new bounds).
        Raises ``DirectoryUnreadable`` and keeps the old view on failure.
        """
        target = self.path if path is None else path
        entries = list_entries(target, show_hidden=self.show_hidden)

        self.path = target
        self.entries = entries
        if not entries:
            self.selected_idx = None
            return
        selected = 0
        if select_name is not None:
            for idx, entry in enumerate(entries):
                if entry.name == select_name:
                    selected = idx
                    break
        elif select_index is not None:
            selected = max(0, min(select_index, len(entries) - 1))
        self.selected_idx = selected
        logger.debug("loaded %s (%d entries)", target, len(entries))

    def reload(self) -> None:
        """Re-list the current path, keeping the selected name when present."""
        current = self.selected_entry
        self.load(
            select_name=current.name if current is not None else None,
        )

    def move_selection(self, delta: int) -> bool:
        """Move selection by ``delta`` with saturation; return whether it moved."""
        if self.selected_idx is None:
            return False
        target = max(0, min(self.selected_idx + delta, len(self.entries) - 1))
        if target == self.selected_idx:
            return False
        self.selected_idx = target
        return True

    def navigate(self, index: int | None) -> NavigateAction | None:
        """Decide whether activating ``index`` enters a directory or opens a file.

        Symlinks are followed, so a link to a directory is entered. Returns
        ``None`` when there is no entry at ``index``.
        """
        entry = self._entry_at(index)
        if entry is None:
            return None
        target = self.path / entry.name
        if resolves_to_directory(target):
            return EnterDirectory(target)
        return OpenFile(target)

    def enter_directory(self, path: Path) -> None:
        self.load(path)

    def navigate_up(self) -> None:
        """Load the parent directory, reselecting the directory just left.

        At the filesystem root the parent is the root itself.
        """
        child_name = self.path.name
        self.load(self.path.parent, select_name=child_name or None)

    def delete(self, index: int | None) -> bool:
        """Recursively remove the entry at ``index`` and reload the view.

        Returns ``False`` when there is nothing at ``index``. Raises
        ``DeleteFailed`` (view unchanged) when removal fails. If the removal
        succeeds but the reload does not, the removed entry is dropped from
        the current view instead.
        """
        entry = self._entry_at(index)
        if entry is None:
            return False
        target = self.path / entry.name
        remove_entry(target)
        logger.info("deleted %s", target)
        try:
            self.load(select_index=index)
        except DirectoryUnreadable as exc:
            logger.warning("reload after deleting %s failed: %s", target, exc.message)
            self.entries = [item for item in self.entries if item is not entry]
            if not self.entries:
                self.selected_idx = None
            else:
                self.selected_idx = min(index, len(self.entries) - 1)
        return True

    def details_for(self, index: int | None) -> EntryDetails | None:
        """Stat the entry at ``index`` on demand; ``None`` when nothing is selected."""
        entry = self._entry_at(index)
        if entry is None:
            return None
        return read_details(self.path / entry.name)

    def toggle_hidden(self) -> None:
        self.show_hidden = not self.show_hidden
        try:
            self.reload()
        except DirectoryUnreadable:
            self.show_hidden = not self.show_hidden
            raise


__all__ = ["DirectoryModel"]
