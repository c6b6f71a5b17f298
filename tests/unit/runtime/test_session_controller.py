"""Tests for session key dispatch and the editor handoff state machine."""

from __future__ import annotations

import tempfile
import unittest
from contextlib import contextmanager
from pathlib import Path

from lazyfm.directory import DirectoryModel
from lazyfm.editor import EditorOutcome
from lazyfm.errors import EditorLaunchFailed, TerminalStateError
from lazyfm.runtime import SessionController, SessionPhase
from lazyfm.ui_theme import PLAIN_THEME


class _FakeTerminal:
    def __init__(self) -> None:
        self.events: list[str] = []
        self.fail_capture = False

    @contextmanager
    def suspended(self):
        if self.fail_capture:
            raise TerminalStateError("Cannot capture terminal state", operation="capture")
        self.events.append("suspend")
        try:
            yield ["raw"]
        finally:
            self.events.append("resume")


class SessionControllerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        (self.root / "docs").mkdir()
        (self.root / "docs" / "guide.md").write_text("# guide\n", encoding="utf-8")
        (self.root / "notes.txt").write_text("first\nsecond\n", encoding="utf-8")
        (self.root / "todo.txt").write_text("", encoding="utf-8")
        self.model = DirectoryModel(self.root)
        self.model.load()
        self.terminal = _FakeTerminal()
        self.launches: list[tuple[Path, list[str]]] = []

    def _session(self, launch=None, **kwargs) -> SessionController:
        def default_launch(path: Path, command: list[str]) -> EditorOutcome:
            self.launches.append((path, command))
            return EditorOutcome(returncode=0)

        return SessionController(
            self.model,
            self.terminal,
            editor_command=["fake-editor"],
            theme=PLAIN_THEME,
            launch=launch or default_launch,
            **kwargs,
        )


class SessionNavigationTests(SessionControllerTestCase):
    def test_movement_keys_update_selection(self) -> None:
        session = self._session()

        session.handle_key("j")
        session.handle_key("DOWN")
        self.assertEqual(self.model.selected_idx, 2)
        session.handle_key("k")
        self.assertEqual(self.model.selected_idx, 1)
        session.handle_key("G")
        self.assertEqual(self.model.selected_idx, 2)
        session.handle_key("g")
        self.assertEqual(self.model.selected_idx, 0)

    def test_enter_on_directory_loads_it_and_backspace_returns(self) -> None:
        session = self._session()

        session.handle_key("ENTER")
        self.assertEqual(self.model.path, self.root / "docs")
        self.assertEqual([e.name for e in self.model.entries], ["guide.md"])

        session.handle_key("BACKSPACE")
        self.assertEqual(self.model.path, self.root)
        self.assertEqual(self.model.selected_entry.name, "docs")
        self.assertEqual(self.launches, [])

    def test_quit_key_stops_session_and_unbound_keys_do_not(self) -> None:
        session = self._session()

        self.assertFalse(session.handle_key("x"))
        self.assertFalse(session.handle_key("ESC"))
        self.assertTrue(session.handle_key("q"))

    def test_delete_removes_selected_entry(self) -> None:
        session = self._session()
        session.handle_key("G")

        session.handle_key("CTRL_D")

        self.assertFalse((self.root / "todo.txt").exists())
        self.assertEqual([e.name for e in self.model.entries], ["docs", "notes.txt"])
        self.assertEqual(self.model.selected_idx, 1)
        self.assertEqual(session.state.status_message, "")

    def test_delete_failure_becomes_error_status(self) -> None:
        session = self._session()
        session.handle_key("G")
        (self.root / "todo.txt").unlink()

        session.handle_key("CTRL_D")

        self.assertTrue(session.state.status_is_error)
        self.assertIn("Error deleting todo.txt", session.state.status_message)
        self.assertEqual(session.phase, SessionPhase.BROWSING)

    def test_vanished_directory_reports_and_keeps_view(self) -> None:
        session = self._session()
        (self.root / "docs" / "guide.md").unlink()
        (self.root / "docs").rmdir()

        session.handle_key("ENTER")

        self.assertEqual(self.model.path, self.root)
        self.assertTrue(session.state.status_is_error)
        self.assertTrue(session.state.status_message)

    def test_next_key_clears_status_message(self) -> None:
        session = self._session()
        session.set_status("Hiding hidden entries")

        session.handle_key("j")

        self.assertEqual(session.state.status_message, "")

    def test_toggle_hidden_sets_note(self) -> None:
        session = self._session()

        session.handle_key(".")

        self.assertFalse(self.model.show_hidden)
        self.assertEqual(session.state.status_message, "Hiding hidden entries")
        self.assertFalse(session.state.status_is_error)


class SessionEditorHandoffTests(SessionControllerTestCase):
    def test_open_file_runs_editor_inside_suspended_terminal(self) -> None:
        phases: list[SessionPhase] = []

        def launch(path: Path, command: list[str]) -> EditorOutcome:
            phases.append(session.phase)
            self.terminal.events.append("editor")
            self.launches.append((path, command))
            return EditorOutcome(returncode=0)

        session = self._session(launch=launch)
        session.handle_key("j")

        session.handle_key("ENTER")

        self.assertEqual(self.launches, [(self.root / "notes.txt", ["fake-editor"])])
        self.assertEqual(self.terminal.events, ["suspend", "editor", "resume"])
        self.assertEqual(phases, [SessionPhase.EDITOR_RUNNING])
        self.assertEqual(session.phase, SessionPhase.BROWSING)
        self.assertTrue(session.state.dirty)

    def test_editor_nonzero_exit_is_noted_and_directory_reloaded(self) -> None:
        def launch(path: Path, command: list[str]) -> EditorOutcome:
            (self.root / "created-by-editor").write_text("", encoding="utf-8")
            return EditorOutcome(returncode=1)

        session = self._session(launch=launch)

        session.open_file(self.root / "notes.txt")

        self.assertEqual(session.phase, SessionPhase.BROWSING)
        self.assertIn("created-by-editor", [e.name for e in self.model.entries])
        self.assertEqual(session.state.status_message, "Editor exited with status 1")
        self.assertFalse(session.state.status_is_error)

    def test_launch_failure_is_reported_without_reload(self) -> None:
        def launch(path: Path, command: list[str]) -> EditorOutcome:
            (self.root / "late-arrival").write_text("", encoding="utf-8")
            raise EditorLaunchFailed("Failed to launch editor: no such file", path=path)

        session = self._session(launch=launch)

        session.open_file(self.root / "notes.txt")

        self.assertEqual(session.phase, SessionPhase.BROWSING)
        self.assertEqual(self.terminal.events, ["suspend", "resume"])
        self.assertTrue(session.state.status_is_error)
        self.assertEqual(session.state.status_message, "Failed to launch editor: no such file")
        self.assertNotIn("late-arrival", [e.name for e in self.model.entries])

    def test_reentrant_open_request_is_dropped(self) -> None:
        nested: list[Path] = []

        def launch(path: Path, command: list[str]) -> EditorOutcome:
            nested.append(path)
            session.open_file(self.root / "todo.txt")
            self.assertFalse(session.handle_key("q"))
            return EditorOutcome(returncode=0)

        session = self._session(launch=launch)

        session.open_file(self.root / "notes.txt")

        self.assertEqual(nested, [self.root / "notes.txt"])
        self.assertEqual(self.terminal.events, ["suspend", "resume"])
        self.assertEqual(session.phase, SessionPhase.BROWSING)

    def test_terminal_capture_failure_propagates(self) -> None:
        self.terminal.fail_capture = True
        session = self._session()

        with self.assertRaises(TerminalStateError):
            session.open_file(self.root / "notes.txt")

        self.assertEqual(self.launches, [])
        self.assertEqual(session.phase, SessionPhase.BROWSING)

    def test_interrupt_during_launch_returns_to_browsing(self) -> None:
        def launch(path: Path, command: list[str]) -> EditorOutcome:
            raise KeyboardInterrupt

        session = self._session(launch=launch)

        with self.assertRaises(KeyboardInterrupt):
            session.open_file(self.root / "notes.txt")

        self.assertEqual(self.terminal.events, ["suspend", "resume"])
        self.assertEqual(session.phase, SessionPhase.BROWSING)
        self.assertFalse(session.handle_key("j"))
        self.assertEqual(self.model.selected_idx, 1)

    def test_invalid_transition_raises(self) -> None:
        session = self._session()

        with self.assertRaises(RuntimeError):
            session._transition(SessionPhase.RESUMING)
        self.assertEqual(session.phase, SessionPhase.BROWSING)


class SessionRenderContextTests(SessionControllerTestCase):
    def test_render_context_includes_details_and_preview(self) -> None:
        session = self._session(preview_line_count=5, no_color=True)
        session.handle_key("j")

        context = session.render_context(80, 10)

        self.assertEqual(context.selected_idx, 1)
        self.assertEqual(session.state.page_rows, 9)
        self.assertIn("Name: notes.txt", context.details_lines)
        self.assertIn("Type: File", context.details_lines)
        self.assertEqual(context.preview_lines, ["first", "second"])

    def test_render_context_reports_vanished_selection(self) -> None:
        session = self._session()
        session.handle_key("j")
        (self.root / "notes.txt").unlink()

        context = session.render_context(80, 10)

        self.assertEqual(len(context.details_lines), 1)
        self.assertIn("Error retrieving details", context.details_lines[0])
        self.assertEqual(context.preview_lines, [])

    def test_render_context_scrolls_list_to_selection(self) -> None:
        for index in range(20):
            (self.root / f"file{index:02d}").write_text("", encoding="utf-8")
        self.model.load()
        session = self._session()
        session.handle_key("G")

        context = session.render_context(80, 6)

        self.assertEqual(context.list_start, len(self.model.entries) - 5)


if __name__ == "__main__":
    unittest.main()
