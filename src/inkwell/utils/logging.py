"""Logging setup for the renderer tools.

Every handler installed here carries a :class:`BlobRedactingFilter`, so the
affix and dictionary data the host streams in (``typo-aff``/``typo-dic``)
never reaches a log file, whichever module happens to log it.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Any

__all__ = ["BlobRedactingFilter", "setup_logging", "get_log_path", "redact"]

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "inkwell.log"

_DEFAULT_LOG_DIR = Path.home() / ".inkwell" / "logs"
_QUIET_LOGGERS: tuple[str, ...] = ("PySide6", "jsonschema")
_BLOB_TYPES = (bytes, bytearray, memoryview)
_CONFIGURED = False
_LOG_PATH: Path | None = None


def redact(value: Any) -> Any:
    """Replace a bytes-like value with a ``<N bytes>`` marker."""
    if isinstance(value, memoryview):
        return f"<{value.nbytes} bytes>"
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    return value


class BlobRedactingFilter(logging.Filter):
    """Rewrites records so binary payloads are logged by size only.

    Both ``record.msg`` and positional ``record.args`` are checked. Records
    are never dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, _BLOB_TYPES):
            record.msg = redact(record.msg)
        args = record.args
        if isinstance(args, tuple) and any(isinstance(arg, _BLOB_TYPES) for arg in args):
            record.args = tuple(redact(arg) for arg in args)
        elif isinstance(args, dict) and any(isinstance(arg, _BLOB_TYPES) for arg in args.values()):
            record.args = {key: redact(arg) for key, arg in args.items()}
        return True


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Install the rotating file handler (and a console handler) on the root logger.

    Repeated calls return the existing log path unless ``force`` is set.
    ``INKWELL_LOG_DIR`` overrides the default directory when ``log_dir`` is
    not given.
    """
    global _CONFIGURED, _LOG_PATH
    if _CONFIGURED and not force and _LOG_PATH is not None:
        return _LOG_PATH

    log_path = _log_dir(log_dir) / LOG_FILE_NAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    redactor = BlobRedactingFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(redactor)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.captureWarnings(True)

    # Third-party chatter stays at WARNING even in debug runs.
    quiet_level = max(level, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    _CONFIGURED = True
    _LOG_PATH = log_path
    return log_path


def get_log_path() -> Path | None:
    """Return the log file installed by :func:`setup_logging`, if any."""
    return _LOG_PATH


def _log_dir(log_dir: Path | str | None) -> Path:
    return Path(log_dir or os.environ.get("INKWELL_LOG_DIR") or _DEFAULT_LOG_DIR).expanduser()
