"""Session controller: key dispatch and the editor handoff state machine.

The session is always in one ``SessionPhase``. Keys are only handled while
``BROWSING``; opening a file walks ``SUSPENDING -> EDITOR_RUNNING ->
RESUMING -> BROWSING`` with the terminal lent to the editor in between.
Recoverable errors become status-line messages here. ``TerminalStateError``
is never caught and ends the session.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from ..directory import DirectoryModel, EnterDirectory, EntryKind, OpenFile
from ..editor import EditorOutcome, launch_editor
from ..errors import DeleteFailed, DirectoryUnreadable, EditorLaunchFailed, LazyFMError, StatFailed
from ..input import KEY_HINT, BrowserKeyActions, build_browser_key_registry
from ..render import (
    RenderContext,
    content_rows,
    format_details_error,
    format_details_lines,
    list_viewport_start,
    preview_lines,
)
from ..terminal import TerminalController
from ..ui_theme import DEFAULT_THEME, UITheme
from .state import BrowserState

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    BROWSING = "browsing"
    SUSPENDING = "suspending"
    EDITOR_RUNNING = "editor_running"
    RESUMING = "resuming"


_ALLOWED_TRANSITIONS: dict[SessionPhase, frozenset[SessionPhase]] = {
    SessionPhase.BROWSING: frozenset({SessionPhase.SUSPENDING}),
    # SUSPENDING -> BROWSING aborts a handoff whose terminal capture failed.
    SessionPhase.SUSPENDING: frozenset({SessionPhase.EDITOR_RUNNING, SessionPhase.BROWSING}),
    SessionPhase.EDITOR_RUNNING: frozenset({SessionPhase.RESUMING}),
    SessionPhase.RESUMING: frozenset({SessionPhase.BROWSING}),
}


class SessionController:
    """Drive one browser session over a directory model and a terminal."""

    def __init__(
        self,
        model: DirectoryModel,
        terminal: TerminalController,
        *,
        editor_command: list[str],
        theme: UITheme = DEFAULT_THEME,
        preview_line_count: int = 0,
        no_color: bool = False,
        launch: Callable[[Path, list[str]], EditorOutcome] = launch_editor,
    ) -> None:
        self.model = model
        self.terminal = terminal
        self.editor_command = editor_command
        self.theme = theme
        self.preview_line_count = preview_line_count
        self.no_color = no_color
        self._launch = launch
        self.phase = SessionPhase.BROWSING
        self.state = BrowserState()
        self._keys = build_browser_key_registry(
            BrowserKeyActions(
                move_selection=self.move_selection,
                page_rows=lambda: self.state.page_rows,
                activate=self.activate,
                go_parent=self.go_parent,
                delete_selected=self.delete_selected,
                toggle_hidden=self.toggle_hidden,
                reload=self.reload,
            )
        )

    def _transition(self, target: SessionPhase) -> None:
        if target not in _ALLOWED_TRANSITIONS[self.phase]:
            raise RuntimeError(f"invalid session transition {self.phase.name} -> {target.name}")
        logger.debug("session phase %s -> %s", self.phase.name, target.name)
        self.phase = target

    def set_status(self, message: str, *, error: bool = False) -> None:
        self.state.status_message = message
        self.state.status_is_error = error
        self.state.dirty = True

    def clear_status(self) -> None:
        if self.state.status_message:
            self.set_status("")

    def _report(self, exc: LazyFMError) -> None:
        logger.warning("%s", exc.message)
        self.set_status(exc.message, error=True)

    def handle_key(self, key: str) -> bool:
        """Dispatch one key while browsing; return ``True`` when the session should quit."""
        if self.phase is not SessionPhase.BROWSING:
            return False
        self.clear_status()
        return bool(self._keys.dispatch(key))

    def move_selection(self, delta: int) -> None:
        if self.model.move_selection(delta):
            self.state.dirty = True

    def activate(self) -> None:
        """Enter the selected directory or open the selected file."""
        try:
            action = self.model.navigate(self.model.selected_idx)
        except StatFailed as exc:
            self._report(exc)
            return
        if isinstance(action, EnterDirectory):
            try:
                self.model.enter_directory(action.path)
            except DirectoryUnreadable as exc:
                self._report(exc)
            self.state.dirty = True
        elif isinstance(action, OpenFile):
            self.open_file(action.path)

    def go_parent(self) -> None:
        try:
            self.model.navigate_up()
        except DirectoryUnreadable as exc:
            self._report(exc)
        self.state.dirty = True

    def delete_selected(self) -> None:
        try:
            self.model.delete(self.model.selected_idx)
        except (DeleteFailed, DirectoryUnreadable) as exc:
            self._report(exc)
        self.state.dirty = True

    def toggle_hidden(self) -> None:
        try:
            self.model.toggle_hidden()
        except DirectoryUnreadable as exc:
            self._report(exc)
            return
        self.set_status("Showing hidden entries" if self.model.show_hidden else "Hiding hidden entries")

    def reload(self) -> None:
        try:
            self.model.reload()
        except DirectoryUnreadable as exc:
            self._report(exc)
        self.state.dirty = True

    def open_file(self, path: Path) -> None:
        """Hand the terminal to the editor for ``path`` and take it back.

        Requests arriving while a handoff is already in flight are dropped.
        The directory is reloaded after any editor that actually ran.
        """
        if self.phase is not SessionPhase.BROWSING:
            logger.debug("dropping open request for %s during %s", path, self.phase.name)
            return

        self._transition(SessionPhase.SUSPENDING)
        outcome: EditorOutcome | None = None
        launch_error: EditorLaunchFailed | None = None
        try:
            with self.terminal.suspended():
                self._transition(SessionPhase.EDITOR_RUNNING)
                try:
                    outcome = self._launch(path, self.editor_command)
                except EditorLaunchFailed as exc:
                    launch_error = exc
                finally:
                    self._transition(SessionPhase.RESUMING)
        finally:
            self._transition(SessionPhase.BROWSING)
            self.state.dirty = True

        if launch_error is not None:
            self._report(launch_error)
            return
        try:
            self.model.reload()
        except DirectoryUnreadable as exc:
            self._report(exc)
            return
        note = outcome.describe() if outcome is not None else None
        if note:
            self.set_status(note)

    def _details_and_preview(self) -> tuple[list[str], list[str]]:
        index = self.model.selected_idx
        try:
            details = self.model.details_for(index)
        except StatFailed as exc:
            return format_details_error(exc.message, self.theme), []
        detail_lines = format_details_lines(details, self.theme)
        if details is None or details.kind is not EntryKind.REGULAR_FILE or index is None:
            return detail_lines, []
        preview = preview_lines(
            self.model.entry_path(index),
            self.preview_line_count,
            no_color=self.no_color,
        )
        return detail_lines, preview

    def render_context(self, width: int, height: int) -> RenderContext:
        """Snapshot the session for rendering at ``width`` x ``height``."""
        rows = content_rows(height)
        self.state.page_rows = rows
        self.state.list_start = list_viewport_start(
            self.model.selected_idx,
            self.state.list_start,
            rows,
            len(self.model.entries),
        )
        detail_lines, preview = self._details_and_preview()
        return RenderContext(
            path=self.model.path,
            entries=self.model.entries,
            selected_idx=self.model.selected_idx,
            list_start=self.state.list_start,
            width=width,
            height=height,
            theme=self.theme,
            details_lines=detail_lines,
            preview_lines=preview,
            status_message=self.state.status_message,
            status_is_error=self.state.status_is_error,
            key_hint=KEY_HINT,
        )


__all__ = ["SessionController", "SessionPhase"]
