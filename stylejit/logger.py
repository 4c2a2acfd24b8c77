# stylejit/logger.py
"""
stylejit.logger
===============
File  : <project>/.stylejit/logs/stylejit.log   ($STYLEJIT_LOG_DIR overrides)
Rotates at 1 MB × 5 backups.

Every module asks for ``get_logger(__name__)``; the ``stylejit`` logger owns
the single file handler and its children propagate to it.
"""

from __future__ import annotations

import logging
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path

from stylejit import env

# ─────────────────────────── internals
_LOCK = threading.Lock()
_ROOT_NAME = "stylejit"
_LOG_NAME = "stylejit.log"
_MAX_BYTES = 1_000_000
_BACKUP_COUNT = 5
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _log_path() -> Path:
    # resolved on first use so tests can redirect STYLEJIT_LOG_DIR
    return env.get_logs_root() / _LOG_NAME


def _make_handler() -> RotatingFileHandler:
    h = RotatingFileHandler(
        _log_path(),
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
        delay=True,  # open on first emit
    )
    h.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return h


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        root.setLevel(logging.DEBUG)
        root.propagate = False
        root.addHandler(_make_handler())
    return root


# ─────────────────────────── public API
def get_logger(name: str = _ROOT_NAME) -> logging.Logger:
    """Thread-safe logger getter; names outside ``stylejit.`` are nested under it."""
    with _LOCK:
        root = _configure_root()
        if name == _ROOT_NAME:
            return root
        if not name.startswith(_ROOT_NAME + "."):
            name = f"{_ROOT_NAME}.{name}"
        return logging.getLogger(name)
