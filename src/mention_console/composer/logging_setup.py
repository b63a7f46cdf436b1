"""Logging for mention-console.

Records from the ``mention_console`` package go to stderr and to a rotating
file in the XDG state directory.  The composer core logs every edit at
DEBUG; those records only pass when ``debug`` is requested.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

from .paths import state_dir

PACKAGE_LOGGER = "mention_console"
CORE_LOGGER = "mention_console.composer"

LOG_FILE = state_dir() / "app.log"
LOG_FORMAT = "[%(name)s] %(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
MAX_BYTES = 1_000_000
BACKUP_COUNT = 3

STDERR_HANDLER = "mention-console-stderr"
FILE_HANDLER = "mention-console-file"


def _console_level(requested: str | None) -> int:
    # LOG_LEVEL beats the stored setting; unknown names are skipped
    for candidate in (os.environ.get("LOG_LEVEL"), requested):
        if candidate:
            level = logging.getLevelName(candidate.upper())
            if isinstance(level, int):
                return level
    return logging.INFO


def _handler(logger: logging.Logger, name: str) -> logging.Handler | None:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def configure_logging(console_level: str | None = None, *, debug: bool = False) -> logging.Logger:
    """Attach the stderr and file handlers to the package logger and set levels.

    The file handler always records DEBUG.  Calling again adjusts the levels
    without adding handlers, so a later ``--debug`` takes effect.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    package.setLevel(logging.DEBUG)
    logging.getLogger(CORE_LOGGER).setLevel(logging.DEBUG if debug else logging.INFO)

    stderr = _handler(package, STDERR_HANDLER)
    if stderr is None:
        stderr = logging.StreamHandler(sys.stderr)
        stderr.set_name(STDERR_HANDLER)
        stderr.setFormatter(logging.Formatter(LOG_FORMAT))
        package.addHandler(stderr)
    stderr.setLevel(logging.DEBUG if debug else _console_level(console_level))

    if _handler(package, FILE_HANDLER) is None:
        LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOG_FILE, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.set_name(FILE_HANDLER)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        package.addHandler(file_handler)
    return package


def _copy_logs(out: TextIO) -> None:
    # app.log.3 ... app.log.1, then app.log
    paths = [LOG_FILE.with_name(f"{LOG_FILE.name}.{n}") for n in range(BACKUP_COUNT, 0, -1)]
    paths.append(LOG_FILE)
    for path in paths:
        if path.exists():
            with path.open(encoding="utf-8", errors="replace") as f:
                shutil.copyfileobj(f, out)


def export_logs(dest: str | Path | None = None) -> Path | None:
    """Write all logs oldest first to *dest*, or to stdout when it is None."""
    if dest is None:
        _copy_logs(sys.stdout)
        return None
    dest = Path(dest)
    with dest.open("w", encoding="utf-8") as out:
        _copy_logs(out)
    return dest
