# stylejit/env.py
"""
stylejit.env
============

Single source-of-truth for:

• Project-root discovery & locking
• Standard *project-local* tree
      <project>/.stylejit
      <project>/.stylejit/logs
• Config-file lookup (stylejit.yml next to the project root)
"""

from __future__ import annotations

import os
from pathlib import Path
from threading import Lock

# ──────────────────────────────────────────────────────────────
# internal state
# ──────────────────────────────────────────────────────────────
_LOCK = Lock()
_PROJECT_ROOT: Path = Path.cwd().resolve()  # locked-in once per process

CONFIG_FILENAMES = ("stylejit.yml", "stylejit.yaml")


# ──────────────────────────────────────────────────────────────
# project root helpers
# ──────────────────────────────────────────────────────────────
def set_project_root(path: Path) -> None:
    """Change the canonical project root."""
    global _PROJECT_ROOT
    with _LOCK:
        _PROJECT_ROOT = Path(path).resolve()


def get_project_root() -> Path:  # hot-path – keep ultra-cheap
    return _PROJECT_ROOT


# ──────────────────────────────────────────────────────────────
# project-local directory helpers
# ──────────────────────────────────────────────────────────────
def _ensure_dir(p: Path) -> Path:
    p.mkdir(parents=True, exist_ok=True)
    return p


def get_dot_stylejit() -> Path:
    """`<project>/.stylejit` – lazily created on first call."""
    return _ensure_dir(get_project_root() / ".stylejit")


def get_logs_root() -> Path:
    """
    `$STYLEJIT_LOG_DIR` if set, else `<project>/.stylejit/logs`.
    """
    custom = os.getenv("STYLEJIT_LOG_DIR")
    if custom:
        return _ensure_dir(Path(custom).expanduser())
    return _ensure_dir(get_dot_stylejit() / "logs")


# ──────────────────────────────────────────────────────────────
# config helpers
# ──────────────────────────────────────────────────────────────
def find_config_file(root: Path | None = None) -> Path | None:
    """First existing `stylejit.yml` / `stylejit.yaml` under *root*."""
    root = root or get_project_root()
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None
