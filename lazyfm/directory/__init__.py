"""Directory model public API."""

from .fs import kind_from_mode, list_entries, read_details, remove_entry, resolves_to_directory, sort_entries
from .model import DirectoryModel
from .types import EnterDirectory, EntryDetails, EntryKind, EntryRef, NavigateAction, OpenFile

__all__ = [
    "DirectoryModel",
    "EnterDirectory",
    "EntryDetails",
    "EntryKind",
    "EntryRef",
    "NavigateAction",
    "OpenFile",
    "kind_from_mode",
    "list_entries",
    "read_details",
    "remove_entry",
    "resolves_to_directory",
    "sort_entries",
]
