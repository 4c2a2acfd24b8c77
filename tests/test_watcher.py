from pathlib import Path

import pytest
from watchdog.events import FileCreatedEvent, FileModifiedEvent, FileMovedEvent

from stylejit.models import BuildSettings
from stylejit.watcher import RebuildHandler, watch_targets


@pytest.fixture
def handler(project):
    calls = []
    h = RebuildHandler(
        calls.append,
        css_path=project / "style.css",
        out_path=project / "style.jit.css",
        debounce=0,
    )
    return h, calls


def test_source_change_triggers_rebuild(handler, project):
    h, calls = handler
    h.dispatch(FileModifiedEvent(str(project / "src" / "index.html")))
    assert calls == ["Change detected in index.html"]


def test_stylesheet_change_triggers_rebuild(handler, project):
    h, calls = handler
    h.dispatch(FileModifiedEvent(str(project / "style.css")))
    assert calls == ["CSS source changed"]


def test_output_and_unrelated_files_ignored(handler, project):
    h, calls = handler
    h.dispatch(FileModifiedEvent(str(project / "style.jit.css")))
    h.dispatch(FileCreatedEvent(str(project / "notes.txt")))
    h.dispatch(FileModifiedEvent(str(project / "other.css")))
    assert calls == []


def test_atomic_save_rename_counts(handler, project):
    h, calls = handler
    h.dispatch(FileMovedEvent(str(project / ".index.html.swp"), str(project / "index.html")))
    assert calls == ["Change detected in index.html"]


def test_failed_rebuild_keeps_watching(project):
    seen = []

    def boom(reason):
        seen.append(reason)
        raise RuntimeError("broken")

    h = RebuildHandler(boom, css_path=project / "a.css", out_path=project / "b.css", debounce=0)
    h.dispatch(FileModifiedEvent(str(project / "x.js")))
    h.dispatch(FileModifiedEvent(str(project / "y.js")))
    assert len(seen) == 2


def test_debounce_coalesces_bursts(project):
    import threading

    done = threading.Event()
    calls = []

    def rebuild(reason):
        calls.append(reason)
        done.set()

    h = RebuildHandler(rebuild, css_path=project / "a.css", out_path=project / "b.css", debounce=0.05)
    for name in ("a.html", "b.html", "c.html"):
        h.dispatch(FileModifiedEvent(str(project / name)))
    assert done.wait(2)
    assert calls == ["Change detected in c.html"]


def test_watch_targets(write, project):
    write("src/a.html", "")
    write("assets/style.css", "")
    settings = BuildSettings(
        css="assets/style.css", scan=["src/**/*.html", "missing/*.js"]
    )
    targets = watch_targets(settings)
    assert targets[(project / "src").resolve()] is True
    assert targets[Path(project / "assets").resolve()] is False
    assert (project / "missing").resolve() not in targets
