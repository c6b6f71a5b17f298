"""Browser key bindings.

Maps decoded key tokens onto session actions. Handlers return ``True`` when
the loop should stop; unbound keys are ignored.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .key_registry import KeyComboBinding, KeyComboRegistry

MOVE_UP_KEYS = ("UP", "k")
MOVE_DOWN_KEYS = ("DOWN", "j")
PAGE_UP_KEYS = ("PAGE_UP",)
PAGE_DOWN_KEYS = ("PAGE_DOWN",)
FIRST_KEYS = ("g", "HOME")
LAST_KEYS = ("G", "END")
ACTIVATE_KEYS = ("ENTER", "RIGHT", "l")
PARENT_KEYS = ("BACKSPACE", "LEFT", "h")
DELETE_KEYS = ("CTRL_D",)
TOGGLE_HIDDEN_KEYS = (".",)
RELOAD_KEYS = ("r",)
QUIT_KEYS = ("q",)

KEY_HINT = "Enter open  Bksp up  ^D delete  . hidden  q quit"


@dataclass(frozen=True)
class BrowserKeyActions:
    """Session operations reachable from the keyboard."""

    move_selection: Callable[[int], None]
    page_rows: Callable[[], int]
    activate: Callable[[], None]
    go_parent: Callable[[], None]
    delete_selected: Callable[[], None]
    toggle_hidden: Callable[[], None]
    reload: Callable[[], None]


def _run(action: Callable[[], None]) -> Callable[[], bool]:
    def handler() -> bool:
        action()
        return False

    return handler


def build_browser_key_registry(actions: BrowserKeyActions) -> KeyComboRegistry:
    """Build the key table used while the session is browsing."""

    def move(delta: int) -> Callable[[], bool]:
        return _run(lambda: actions.move_selection(delta))

    def page(direction: int) -> Callable[[], bool]:
        return _run(lambda: actions.move_selection(direction * max(1, actions.page_rows())))

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(MOVE_UP_KEYS, move(-1)),
        KeyComboBinding(MOVE_DOWN_KEYS, move(1)),
        KeyComboBinding(PAGE_UP_KEYS, page(-1)),
        KeyComboBinding(PAGE_DOWN_KEYS, page(1)),
        # Saturating moves land on the first/last entry.
        KeyComboBinding(FIRST_KEYS, move(-(1 << 30))),
        KeyComboBinding(LAST_KEYS, move(1 << 30)),
        KeyComboBinding(ACTIVATE_KEYS, _run(actions.activate)),
        KeyComboBinding(PARENT_KEYS, _run(actions.go_parent)),
        KeyComboBinding(DELETE_KEYS, _run(actions.delete_selected)),
        KeyComboBinding(TOGGLE_HIDDEN_KEYS, _run(actions.toggle_hidden)),
        KeyComboBinding(RELOAD_KEYS, _run(actions.reload)),
        KeyComboBinding(QUIT_KEYS, lambda: True),
    )


__all__ = [
    "BrowserKeyActions",
    "KEY_HINT",
    "build_browser_key_registry",
]
