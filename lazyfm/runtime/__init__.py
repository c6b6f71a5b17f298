"""Runtime package: session controller, event loop and app wiring."""

from .app import BrowserOptions, run_browser
from .loop import run_main_loop
from .session import SessionController, SessionPhase
from .state import BrowserState

__all__ = [
    "BrowserOptions",
    "BrowserState",
    "SessionController",
    "SessionPhase",
    "run_browser",
    "run_main_loop",
]
