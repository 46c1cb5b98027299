"""
Logging configuration — central setup for all entrypoints.

Two independent streams:

1. **Process diagnostics** — ``setup_logging()`` configures the root
   logger once at startup. Every module that does
   ``logger = logging.getLogger(__name__)`` inherits this config.
   Levels are resolved in precedence order:
       CLI flag  >  PHPJS_LOG_LEVEL env var  >  WARNING (default)
   Optional file output via PHPJS_LOG_FILE / PHPJS_LOG_FILE_LEVEL.

2. **Setup run log** — ``RunLog`` is the operator-facing record of one
   host setup run: ``YYYY-MM-DD HH:MM:SS - message`` lines echoed to
   stdout and appended to a fixed file. It does not propagate to root.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

# ── Format strings ──────────────────────────────────────────────

# WARNING level: minimal, no noise
_FMT_MINIMAL = "%(message)s"

# INFO level: timestamped with module context
_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

# DEBUG level: full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output: always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# Setup run log: one flat timestamped line per event
_FMT_RUN = "%(asctime)s - %(message)s"
_DATEFMT_RUN = "%Y-%m-%d %H:%M:%S"

RUN_LOGGER_NAME = "phpjs_env.setup.run"


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Arguments left as ``None`` fall back to ``PHPJS_LOG_LEVEL``,
    ``PHPJS_LOG_FILE`` and ``PHPJS_LOG_FILE_LEVEL``. The setup run log
    (``RunLog``) is not affected: it never propagates to root.
    """
    env = os.environ if environ is None else environ
    console_level = _parse_level(level or env.get("PHPJS_LOG_LEVEL"))
    log_file = log_file or env.get("PHPJS_LOG_FILE")

    handlers: list[logging.Handler] = [_console_handler(console_level)]
    if log_file:
        file_level_name = log_file_level or env.get("PHPJS_LOG_FILE_LEVEL")
        file_level = _parse_level(file_level_name) if file_level_name else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))


def _console_handler(level: int) -> logging.Handler:
    if level <= logging.DEBUG:
        formatter = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG)
    elif level <= logging.INFO:
        formatter = logging.Formatter(_FMT_VERBOSE, datefmt=_DATEFMT_VERBOSE)
    else:
        formatter = logging.Formatter(_FMT_MINIMAL)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
    return handler


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def _run_formatter() -> logging.Formatter:
    return logging.Formatter(_FMT_RUN, datefmt=_DATEFMT_RUN)


class RunLog:
    """Append-only, timestamped record of one setup run.

    Lines go to ``stream`` (stdout by default) immediately. The log file
    is only opened by ``attach_file()``; lines emitted before that are
    held in memory and written out, in order, when the file is attached.
    A run that stops before ``attach_file()`` leaves no file behind.
    """

    def __init__(self, path: str | Path, stream: TextIO | None = None):
        self._path = Path(path)
        self._logger = logging.getLogger(RUN_LOGGER_NAME)
        self._logger.handlers.clear()
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        console = logging.StreamHandler(stream if stream is not None else sys.stdout)
        console.setFormatter(_run_formatter())
        self._logger.addHandler(console)

        # Holds every pre-attach line; there is no target until attach_file()
        self._pending: logging.handlers.MemoryHandler | None = logging.handlers.MemoryHandler(
            capacity=sys.maxsize,
            flushLevel=logging.CRITICAL + 1,
            target=None,
            flushOnClose=False,
        )
        self._logger.addHandler(self._pending)
        self._file: logging.FileHandler | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def attached(self) -> bool:
        """Whether lines are being appended to the log file."""
        return self._file is not None

    def attach_file(self) -> None:
        """Open the log file in append mode and write held lines to it."""
        if self._file is not None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(self._path, mode="a", encoding="utf-8")
        fh.setFormatter(_run_formatter())

        if self._pending is not None:
            self._pending.setTarget(fh)
            self._pending.flush()
            self._logger.removeHandler(self._pending)
            self._pending.close()
            self._pending = None

        self._logger.addHandler(fh)
        self._file = fh

    def __call__(self, message: str) -> None:
        self.info(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)

    def close(self) -> None:
        """Flush and detach every handler of the run logger."""
        for handler in list(self._logger.handlers):
            handler.flush()
            self._logger.removeHandler(handler)
            handler.close()
        self._pending = None
        self._file = None
