# stylejit/tests/conftest.py
import os
import tempfile

# logs must never land in the developer's checkout; set before stylejit imports
os.environ.setdefault("STYLEJIT_LOG_DIR", tempfile.mkdtemp(prefix="stylejit_logs_"))

import pytest  # noqa: E402

from stylejit import env  # noqa: E402


# ───────────────────────────────────────────────────────────────
#  Per-test project root
# ───────────────────────────────────────────────────────────────
@pytest.fixture
def project(tmp_path, monkeypatch):
    """
    A throw-away project root: cwd and stylejit's root both point at it,
    so relative globs, outputs and stylejit.yml lookups stay inside.
    """
    old_root = env.get_project_root()
    root = tmp_path.resolve()
    monkeypatch.chdir(root)
    env.set_project_root(root)
    yield root
    env.set_project_root(old_root)


@pytest.fixture
def write(project):
    """write("src/a.html", "...") → absolute Path, parents created."""

    def _write(rel: str, content: str):
        p = project / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return p

    return _write
