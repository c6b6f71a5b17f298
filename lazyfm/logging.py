"""Application logging helpers.

The TUI owns stdout/stderr while it runs, so log records go to a file by
default. A stream handler is attached only when a stream is passed in.
"""

from __future__ import annotations

import logging as py_logging
from pathlib import Path
from typing import TextIO

from platformdirs import user_log_dir

APP_NAME = "lazyfm"
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    normalized = level.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    resolved = LOG_LEVELS.get(normalized, py_logging.INFO)

    logger = py_logging.getLogger(APP_NAME)
    logger.setLevel(resolved)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    formatter = py_logging.Formatter(_FORMAT)

    if stream is not None:
        stream_handler = py_logging.StreamHandler(stream)
        stream_handler.setLevel(resolved)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        if not log_path.is_absolute():
            log_path = log_path.resolve()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            pass
        else:
            file_handler.setLevel(resolved)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(py_logging.NullHandler())
    logger.propagate = False
    return logger
