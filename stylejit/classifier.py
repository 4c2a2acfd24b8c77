# stylejit/classifier.py
from __future__ import annotations

import re
from functools import lru_cache
from typing import Tuple

from stylejit.models import Classification

# ───── constants ────────────────────────────────────────────────────
CLASS_TOKEN_RE = re.compile(r"\.([a-zA-Z][a-zA-Z0-9_-]*)")

# Bare elements, pseudo-elements and a few known compound exceptions.
# Order matters only for readability; any match makes the selector "base".
BASE_PATTERNS: Tuple[re.Pattern, ...] = tuple(
    re.compile(p)
    for p in (
        r"^\*$", r"^html$", r"^body$", r"^div$", r"^section$", r"^main$",
        r"^p$", r"^hr$", r"^form$", r"^input", r"^select$", r"^textarea$",
        r"^label$", r"^fieldset$", r"^option$", r"^table$", r"^thead$",
        r"^tbody$", r"^tr$", r"^th$", r"^td$", r"^a$", r"^button$",
        r"^a,\s*button$", r"^i$", r"^img$", r"^progress", r"^::-webkit",
        r"^::", r"^:root", r"^h[1-6]$", r"^ul$", r"^ol$", r"^li$",
        r"^span$", r"^nav$", r"^p\s+i", r"^i\.material", r"^td\s+img",
        r"^tr:nth", r"^#pagination", r"^input\[type", r"^textarea:focus",
    )
)  # fmt: skip


def extract_classes(selector: str) -> Tuple[str, ...]:
    """Distinct class names referenced by *selector*, in first-seen order."""
    return tuple(dict.fromkeys(CLASS_TOKEN_RE.findall(selector)))


def is_base_selector(selector: str) -> bool:
    return any(p.search(selector) for p in BASE_PATTERNS)


@lru_cache(maxsize=4096)
def classify(selector: str) -> Classification:
    """
    Classify a trimmed selector.

    A selector may be base *and* reference classes (``i.material-icons``);
    callers decide which wins.
    """
    return Classification(
        is_base=is_base_selector(selector),
        classes=extract_classes(selector),
    )
