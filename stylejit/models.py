# stylejit/models.py
"""
Data models shared by the build CLI and the runtime.

• All models are Pydantic v2 (`model_config = ConfigDict(...)`).
• `SegmentKind` is a str Enum so segments dump cleanly to JSON.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OUT = "style.jit.css"


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


class SegmentKind(str, Enum):
    """Top-level syntactic unit of a stylesheet."""

    COMMENT = "comment"
    IMPORT = "import"
    AT_RULE = "at-rule"
    RULE = "rule"


class Segment(BaseModel):
    """
    A contiguous span of stylesheet text.

    `raw` is the exact source slice (braces included) and `start`/`end` are its
    offsets in the text that was segmented.  `selector` is only set for rules.
    """

    model_config = ConfigDict(frozen=True)

    kind: SegmentKind
    raw: str
    start: int
    end: int
    selector: Optional[str] = None

    @property
    def has_block(self) -> bool:
        return "{" in self.raw

    @property
    def at_keyword(self) -> str | None:
        """`@media`, `@keyframes`, … lower-cased; None for rules/comments."""
        if self.kind not in (SegmentKind.AT_RULE, SegmentKind.IMPORT):
            return None
        word = []
        for ch in self.raw[1:]:
            if not (ch.isalnum() or ch in "-_"):
                break
            word.append(ch)
        return "@" + "".join(word).lower()


class Classification(BaseModel):
    """Result of classifying one selector."""

    model_config = ConfigDict(frozen=True)

    is_base: bool = False
    classes: Tuple[str, ...] = ()

    @property
    def is_class_rule(self) -> bool:
        return bool(self.classes)

    @property
    def is_unknown(self) -> bool:
        """Neither a base element rule nor a class rule."""
        return not self.is_base and not self.classes


# ---------------------------------------------------------------------------
# Retention policy
# ---------------------------------------------------------------------------


class RetentionPolicy(BaseModel):
    """
    Keep/drop switches applied to every rule, top level and inside media.

    keep_base      retain rules whose selector is a base element pattern
    prune_unknown  drop selectors that are neither base nor class rules
    """

    model_config = ConfigDict(frozen=True)

    keep_base: bool = True
    prune_unknown: bool = True


# ---------------------------------------------------------------------------
# Build settings / results
# ---------------------------------------------------------------------------


class BuildSettings(BaseModel):
    """Resolved inputs for one CLI build (flags merged over stylejit.yml)."""

    model_config = ConfigDict(extra="ignore")

    css: Path
    scan: List[str] = Field(min_length=1)
    out: Path = Path(DEFAULT_OUT)
    watch: bool = False
    stats: bool = False
    keep_unknown: bool = False

    @field_validator("scan", mode="before")
    @classmethod
    def _coerce_scan(cls, v):
        if isinstance(v, str):
            return [v]
        return v

    def policy(self) -> RetentionPolicy:
        return RetentionPolicy(keep_base=True, prune_unknown=not self.keep_unknown)


class BuildStats(BaseModel):
    """Numbers reported after a build."""

    input_bytes: int = 0
    output_bytes: int = 0
    rules_total: int = 0  # top-level rule segments in the source
    kept: int = 0
    skipped: int = 0
    used_classes: List[str] = Field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def reduction(self) -> float:
        """Percentage saved; 0 for an empty source."""
        if not self.input_bytes:
            return 0.0
        return 100.0 - (self.output_bytes / self.input_bytes) * 100.0


class BuildResult(BaseModel):
    css: str
    out_path: Optional[Path] = None
    stats: BuildStats = Field(default_factory=BuildStats)
