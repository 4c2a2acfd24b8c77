# stylejit/preferences/__init__.py
"""
Project configuration read from ``stylejit.yml`` (or ``--config PATH``).

    css: public/style.css
    scan:
      - "templates/**/*.html"
      - "public/**/*.js"
    out: public/style.jit.css
    keep_unknown: false
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from stylejit import env
from stylejit.logger import get_logger

logger = get_logger(__name__)


class Preferences:
    def __init__(self, path: Path | None = None):
        self.path: Path | None = path
        self.prefs: dict = {}
        self.initialized: bool = False

    def get_preferences_path(self) -> tuple[Path | None, bool]:
        path = self.path or env.find_config_file()
        return path, bool(path and path.is_file())

    def reload(self):
        """Force a fresh read from disk"""
        self.prefs = self._load_preferences()
        self.initialized = True

    def _ensure_loaded(self):
        if not self.initialized:
            self.reload()

    def _load_preferences(self) -> dict:
        prefs_path, exists = self.get_preferences_path()
        if not exists:
            return {}
        try:
            data = yaml.safe_load(prefs_path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", prefs_path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: top level is not a mapping", prefs_path)
            return {}
        return data

    def get(self, *keys: str, default: Any = None) -> Any:
        self._ensure_loaded()
        result = self.prefs
        for key in keys:
            if not isinstance(result, dict) or key not in result:
                return default
            result = result[key]
        return result

    def resolve_path(self, value: str | Path | None) -> Path | None:
        """Config paths are relative to the config file's directory."""
        if value is None:
            return None
        p = Path(value).expanduser()
        if p.is_absolute():
            return p
        prefs_path, exists = self.get_preferences_path()
        base = prefs_path.parent if exists else env.get_project_root()
        return base / p


def load_preferences(path: Path | None = None) -> Preferences:
    prefs = Preferences(path)
    prefs.reload()
    return prefs
