"""Command-line front door for lazyfm.

Parses CLI options, merges them over the user config, configures logging,
and dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from .config import load_browser_config
from .editor import resolve_editor_command
from .errors import ExitCode, user_facing_error
from .logging import LOG_LEVELS, configure_logging, default_log_path
from .runtime import BrowserOptions, run_browser
from .ui_theme import available_theme_names, resolve_theme


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized not in LOG_LEVELS:
        accepted = ", ".join(sorted(LOG_LEVELS))
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyfm",
        description="Browse a directory in the terminal, open files in an editor, delete entries.",
    )
    parser.add_argument("path", nargs="?", default=".", help="Directory to browse. Defaults to the current directory.")
    parser.add_argument("--editor", default=None, help="Editor command (default: config, $VISUAL, $EDITOR, vim).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors and preview highlighting.")
    parser.add_argument(
        "--hidden",
        dest="show_hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show entries whose name starts with a dot (default: shown).",
    )
    parser.add_argument("--log-level", type=_log_level_type, default="INFO")
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def build_options(namespace: argparse.Namespace) -> BrowserOptions:
    """Merge parsed flags over the user config file."""
    config = load_browser_config()
    show_hidden = config.show_hidden if namespace.show_hidden is None else namespace.show_hidden
    return BrowserOptions(
        editor_command=resolve_editor_command(namespace.editor or config.editor),
        theme=resolve_theme(namespace.theme or config.theme, no_color=namespace.no_color),
        show_hidden=show_hidden,
        preview_line_count=config.preview_lines,
        no_color=namespace.no_color,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the browser, returning the process exit code."""
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    log_path = namespace.log_file.expanduser() if namespace.log_file is not None else default_log_path()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    if not (os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())):
        print(user_facing_error("lazyfm needs an interactive terminal"), file=sys.stderr)
        return int(ExitCode.INVALID_ARGS)

    path = Path(os.path.abspath(namespace.path))
    options = build_options(namespace)
    logger.debug("editor command: %s", options.editor_command)
    try:
        return int(run_browser(path, options))
    except Exception:
        logger.exception("Unhandled exception in browser session")
        print(
            user_facing_error("Unexpected runtime failure", hint=f"Inspect logs: {log_path}"),
            file=sys.stderr,
        )
        return int(ExitCode.RUNTIME_ERROR)


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
