"""Input-layer public API for key decoding and key bindings."""

from .bindings import KEY_HINT, BrowserKeyActions, build_browser_key_registry
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "BrowserKeyActions",
    "KEY_HINT",
    "build_browser_key_registry",
]
