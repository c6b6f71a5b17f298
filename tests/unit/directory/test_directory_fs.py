"""Tests for directory listing, classification, details and removal primitives."""

from __future__ import annotations

import os
import socket
import stat
import tempfile
import unittest
from pathlib import Path

from lazyfm.directory import EntryKind, EntryRef, kind_from_mode, list_entries, read_details, remove_entry, sort_entries
from lazyfm.errors import DeleteFailed, DirectoryUnreadable, StatFailed


class DirectoryFsTests(unittest.TestCase):
    def test_list_entries_puts_directories_first_in_case_sensitive_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "zebra.txt").write_text("z", encoding="utf-8")
            (root / "Apple").mkdir()
            (root / "banana.txt").write_text("b", encoding="utf-8")

            entries = list_entries(root)

        self.assertEqual([entry.name for entry in entries], ["Apple", "banana.txt", "zebra.txt"])
        self.assertEqual(entries[0].kind, EntryKind.DIRECTORY)

    def test_sorting_is_byte_order_within_each_group(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("beta", "Alpha", "_under"):
                (root / name).mkdir()
            for name in ("b.txt", "B.txt", "a.txt", "Z.txt"):
                (root / name).write_text("", encoding="utf-8")

            names = [entry.name for entry in list_entries(root)]

        self.assertEqual(names, ["Alpha", "_under", "beta", "B.txt", "Z.txt", "a.txt", "b.txt"])

    def test_undecodable_names_sort_by_raw_bytes(self) -> None:
        undecodable = os.fsdecode(b"\xff")
        private_use = "\ue000"
        entries = [EntryRef(undecodable, EntryKind.REGULAR_FILE), EntryRef(private_use, EntryKind.REGULAR_FILE)]

        ordered = [os.fsencode(entry.name) for entry in sort_entries(entries)]

        self.assertEqual(ordered, [b"\xee\x80\x80", b"\xff"])

    def test_listing_is_byte_ordered_for_non_utf8_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = os.fsencode(tmp)
            try:
                open(os.path.join(root, b"\xff"), "wb").close()
            except OSError:
                self.skipTest("filesystem rejects non-UTF-8 names")
            (Path(tmp) / "\ue000").write_text("", encoding="utf-8")
            (Path(tmp) / "plain").write_text("", encoding="utf-8")

            names = [os.fsencode(entry.name) for entry in list_entries(Path(tmp))]

        self.assertEqual(names, sorted(names))
        self.assertEqual(names, [b"plain", b"\xee\x80\x80", b"\xff"])

    def test_every_directory_precedes_every_non_directory(self) -> None:
        entries = [
            EntryRef("m", EntryKind.REGULAR_FILE),
            EntryRef("a-link", EntryKind.SYMLINK),
            EntryRef("z-dir", EntryKind.DIRECTORY),
            EntryRef("fifo", EntryKind.NAMED_PIPE),
            EntryRef("b-dir", EntryKind.DIRECTORY),
        ]

        ordered = sort_entries(entries)

        kinds = [entry.is_dir for entry in ordered]
        self.assertEqual(kinds, sorted(kinds, reverse=True))
        self.assertEqual([entry.name for entry in ordered], ["b-dir", "z-dir", "a-link", "fifo", "m"])

    def test_symlinks_are_classified_without_following(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            os.symlink(root / "real", root / "link-to-dir")
            os.symlink(root / "missing", root / "dangling")

            kinds = {entry.name: entry.kind for entry in list_entries(root)}

        self.assertEqual(kinds["real"], EntryKind.DIRECTORY)
        self.assertEqual(kinds["link-to-dir"], EntryKind.SYMLINK)
        self.assertEqual(kinds["dangling"], EntryKind.SYMLINK)

    def test_special_files_are_classified(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            os.mkfifo(root / "pipe")
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.bind(str(root / "sock"))
                kinds = {entry.name: entry.kind for entry in list_entries(root)}
            finally:
                sock.close()

        self.assertEqual(kinds["pipe"], EntryKind.NAMED_PIPE)
        self.assertEqual(kinds["sock"], EntryKind.SOCKET)

    def test_kind_from_mode_covers_devices_and_unknown_modes(self) -> None:
        self.assertEqual(kind_from_mode(stat.S_IFCHR | 0o600), EntryKind.DEVICE)
        self.assertEqual(kind_from_mode(stat.S_IFBLK | 0o600), EntryKind.DEVICE)
        self.assertEqual(kind_from_mode(0), EntryKind.OTHER)

    def test_hidden_entries_can_be_filtered(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".hidden").write_text("", encoding="utf-8")
            (root / "shown").write_text("", encoding="utf-8")

            self.assertEqual([e.name for e in list_entries(root, show_hidden=False)], ["shown"])
            self.assertEqual([e.name for e in list_entries(root, show_hidden=True)], [".hidden", "shown"])

    def test_list_entries_raises_unreadable_for_missing_or_non_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            a_file = root / "file.txt"
            a_file.write_text("", encoding="utf-8")

            with self.assertRaises(DirectoryUnreadable) as missing:
                list_entries(root / "missing")
            with self.assertRaises(DirectoryUnreadable):
                list_entries(a_file)

        self.assertEqual(missing.exception.path, root / "missing")
        self.assertIsInstance(missing.exception.__cause__, FileNotFoundError)

    def test_read_details_reports_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "notes.txt"
            target.write_text("hello", encoding="utf-8")
            os.chmod(target, 0o640)
            info = os.lstat(target)

            details = read_details(target)

        self.assertEqual(details.name, "notes.txt")
        self.assertEqual(details.kind, EntryKind.REGULAR_FILE)
        self.assertEqual(details.size, 5)
        self.assertEqual(details.permissions, "-rw-r-----")
        self.assertEqual(details.uid, info.st_uid)
        self.assertEqual(details.gid, info.st_gid)
        self.assertIsNone(details.link_target)

    def test_read_details_reports_symlink_target(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            link = Path(tmp) / "link"
            os.symlink("elsewhere", link)

            details = read_details(link)

        self.assertEqual(details.kind, EntryKind.SYMLINK)
        self.assertEqual(details.link_target, "elsewhere")

    def test_read_details_on_vanished_entry_raises_stat_failed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(StatFailed) as ctx:
                read_details(Path(tmp) / "gone")

        self.assertIn("Error retrieving details", ctx.exception.message)

    def test_remove_entry_deletes_trees_files_and_links(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            tree = root / "tree"
            (tree / "nested").mkdir(parents=True)
            (tree / "nested" / "leaf.txt").write_text("x", encoding="utf-8")
            keep = root / "keep"
            keep.mkdir()
            (keep / "precious").write_text("x", encoding="utf-8")
            link = root / "link"
            os.symlink(keep, link)
            plain = root / "plain.txt"
            plain.write_text("x", encoding="utf-8")

            remove_entry(tree)
            remove_entry(link)
            remove_entry(plain)

            self.assertEqual(sorted(p.name for p in root.iterdir()), ["keep"])
            self.assertTrue((keep / "precious").exists())

    def test_remove_entry_on_missing_path_raises_delete_failed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(DeleteFailed) as ctx:
                remove_entry(Path(tmp) / "already-gone")

        self.assertIsInstance(ctx.exception.__cause__, FileNotFoundError)
        self.assertIn("already-gone", ctx.exception.message)


if __name__ == "__main__":
    unittest.main()
