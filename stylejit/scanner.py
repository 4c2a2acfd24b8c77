# stylejit/scanner.py
"""
Static usage index: which class names do the source files mention?

Three independent sweeps per file, unioned:

1. ``class="…"`` / ``className="…"`` attribute values (whitespace split)
2. string literals passed to ``classList.add/remove/toggle/contains/replace``
3. any backtick template literal containing ``class`` (every word-like token)

Over-approximation is fine (a few extra rules survive); missing a real class
is not.
"""

from __future__ import annotations

import glob
import re
from pathlib import Path
from typing import Iterable, List, Set

from stylejit.env import get_project_root
from stylejit.logger import get_logger

logger = get_logger(__name__)

_CLASS_ATTR_RE = re.compile(r"""class(?:Name)?=["'`]([^"'`]+)["'`]""")
_CLASSLIST_RE = re.compile(
    r"classList\.(?:add|toggle|contains|replace|remove)\(([^)]*)\)"
)
_STRING_LITERAL_RE = re.compile(r"""["'`]([^"'`]+)["'`]""")
_TEMPLATE_RE = re.compile(r"`[^`]*class[^`]*`")
_WORD_RE = re.compile(r"[a-zA-Z][a-zA-Z0-9_-]*")

_GLOB_CHARS = ("*", "?", "[")


def extract_classes_from_text(content: str) -> Set[str]:
    """Run all three sweeps over *content*."""
    found: Set[str] = set()

    for m in _CLASS_ATTR_RE.finditer(content):
        found.update(tok for tok in m.group(1).split() if tok)

    for m in _CLASSLIST_RE.finditer(content):
        for lit in _STRING_LITERAL_RE.finditer(m.group(1)):
            found.update(tok for tok in lit.group(1).split() if tok)

    for m in _TEMPLATE_RE.finditer(content):
        found.update(_WORD_RE.findall(m.group(0)))

    return found


def has_glob(pattern: str) -> bool:
    return any(ch in pattern for ch in _GLOB_CHARS)


def glob_root(pattern: str) -> Path:
    """
    Directory a pattern can only match beneath (`src/**/*.html` → `src`).
    Direct file paths map to their parent directory.
    """
    root = get_project_root()
    parts = Path(pattern).parts
    fixed: List[str] = []
    for part in parts:
        if has_glob(part):
            break
        fixed.append(part)
    else:
        # no wildcard at all → a concrete file
        return (root / pattern).parent.resolve()
    return (root / Path(*fixed)).resolve() if fixed else root


def expand_glob(pattern: str) -> List[Path]:
    """Files matched by *pattern*, relative to the project root when not absolute."""
    root = get_project_root()
    if not has_glob(pattern):
        p = Path(pattern)
        p = p if p.is_absolute() else root / p
        return [p] if p.is_file() else []

    base = pattern if Path(pattern).is_absolute() else str(root / pattern)
    return sorted(Path(m) for m in glob.glob(base, recursive=True) if Path(m).is_file())


def scan_file(path: Path) -> Set[str]:
    """Classes mentioned in one file; unreadable files contribute nothing."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable file %s: %s", path, exc)
        return set()
    return extract_classes_from_text(content)


def scan_files(patterns: Iterable[str]) -> Set[str]:
    """Union of class names over every file matched by *patterns*."""
    used: Set[str] = set()
    seen: Set[Path] = set()
    for pattern in patterns:
        files = expand_glob(pattern)
        if not files:
            logger.info("Pattern %r matched no files", pattern)
        for f in files:
            if f in seen:
                continue
            seen.add(f)
            used |= scan_file(f)
    logger.debug("Scanned %d files, %d classes", len(seen), len(used))
    return used
