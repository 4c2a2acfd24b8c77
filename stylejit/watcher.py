# stylejit/watcher.py
"""
`--watch` support: rebuild whenever a scanned source or the stylesheet changes.

Usage:

    from stylejit.watcher import watch

    watch(settings, rebuild=lambda reason: run_build(settings))   # blocks

The module hides all watchdog details; callers just hand over a callback.
Bursts of events (editors write, rename, chmod …) are coalesced into one
rebuild per debounce window.
"""

from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Callable, Dict, Iterable, Set

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from stylejit.logger import get_logger
from stylejit.models import BuildSettings
from stylejit.scanner import glob_root

logger = get_logger(__name__)

WATCH_SUFFIXES = (".html", ".htm", ".js", ".jsx", ".ts", ".tsx", ".vue", ".php", ".svelte")
DEBOUNCE_SECONDS = 0.2

Rebuild = Callable[[str], None]


class RebuildHandler(FileSystemEventHandler):
    """
    One handler for every watched directory.

    Source files qualify by suffix; the stylesheet qualifies by exact path.
    The generated output file never triggers a rebuild.
    """

    def __init__(
        self,
        rebuild: Rebuild,
        *,
        css_path: Path,
        out_path: Path,
        suffixes: Iterable[str] = WATCH_SUFFIXES,
        debounce: float = DEBOUNCE_SECONDS,
    ) -> None:
        self._rebuild = rebuild
        self._css = Path(css_path).resolve()
        self._out = Path(out_path).resolve()
        self._suffixes = tuple(s.lower() for s in suffixes)
        self._debounce = debounce
        self._timer: threading.Timer | None = None
        self._reason = ""
        self._lock = threading.Lock()  # builds never overlap

    # ------------------------------------------------------------------ #

    def qualifies(self, path: str | Path) -> str | None:
        """Human-readable reason for a rebuild, or None to ignore the path."""
        p = Path(path).resolve()
        if p == self._out:
            return None
        if p == self._css:
            return "CSS source changed"
        if p.suffix.lower() in self._suffixes:
            return f"Change detected in {p.name}"
        return None

    # watchdog callback
    def on_any_event(self, event: FileSystemEvent) -> None:  # type: ignore[override]
        if event.is_directory or event.event_type in ("opened", "closed_no_write"):
            return
        paths = [event.src_path, getattr(event, "dest_path", "") or ""]
        for raw in paths:
            if not raw:
                continue
            reason = self.qualifies(raw)
            if reason:
                self.schedule(reason)
                return

    # ------------------------------------------------------------------ #

    def schedule(self, reason: str) -> None:
        """(Re)start the debounce timer; the last reason wins."""
        with self._lock:
            self._reason = reason
            if self._timer is not None:
                self._timer.cancel()
            if self._debounce <= 0:
                self._timer = None
            else:
                self._timer = threading.Timer(self._debounce, self._fire)
                self._timer.daemon = True
                self._timer.start()
                return
        self._fire()

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
            reason = self._reason
            try:
                self._rebuild(reason)
            except Exception:  # noqa: BLE001
                # keep watching; the next change gets another chance
                logger.exception("Rebuild failed (%s)", reason)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


def watch_targets(settings: BuildSettings) -> Dict[Path, bool]:
    """{directory: recursive} covering every scan pattern and the stylesheet."""
    targets: Dict[Path, bool] = {}
    for pattern in settings.scan:
        root = glob_root(pattern)
        if root.is_dir():
            targets[root] = True
    css_dir = Path(settings.css).resolve().parent
    targets.setdefault(css_dir, False)
    return targets


def start_observer(settings: BuildSettings, rebuild: Rebuild) -> tuple[Observer, RebuildHandler]:
    """Schedule every target on a fresh, started Observer."""
    handler = RebuildHandler(rebuild, css_path=settings.css, out_path=settings.out)
    observer = Observer()
    scheduled: Set[Path] = set()
    for directory, recursive in watch_targets(settings).items():
        if directory in scheduled:
            continue
        scheduled.add(directory)
        observer.schedule(handler, str(directory), recursive=recursive)
        logger.debug("Watching %s (recursive=%s)", directory, recursive)
    observer.start()
    return observer, handler


def watch(settings: BuildSettings, rebuild: Rebuild) -> None:
    """Block forever, rebuilding on change; returns on KeyboardInterrupt."""
    observer, handler = start_observer(settings, rebuild)
    try:
        while observer.is_alive():
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        handler.cancel()
        observer.stop()
        observer.join()
