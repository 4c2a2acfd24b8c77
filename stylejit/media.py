# stylejit/media.py
"""
Per-rule filtering inside `@media` blocks.

The interior between the outer braces is re-segmented with the top-level
segmenter, each inner rule is judged on its own, and the survivors are
re-wrapped under the original header:

    @media (min-width:600px){
    span{color:blue}
    }
"""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Tuple

from stylejit.models import Segment, SegmentKind
from stylejit.segmenter import segment

FILTERED_AT_RULES = ("@media",)
OPAQUE_AT_RULES = ("@keyframes", "@-webkit-keyframes", "@-moz-keyframes", "@-o-keyframes")


def is_media_block(seg: Segment) -> bool:
    return seg.kind is SegmentKind.AT_RULE and seg.at_keyword in FILTERED_AT_RULES


def is_keyframes_block(seg: Segment) -> bool:
    return seg.kind is SegmentKind.AT_RULE and seg.at_keyword in OPAQUE_AT_RULES


def split_block(raw: str) -> Optional[Tuple[str, str]]:
    """
    ``(header, inner)`` where *header* ends with the opening brace and *inner*
    excludes the closing one.  None for block-less text.
    """
    brace = raw.find("{")
    if brace == -1:
        return None
    header = raw[: brace + 1]
    inner = raw[brace + 1 :]
    if inner.endswith("}"):
        inner = inner[:-1]
    return header, inner


def wrap_rules(header: str, rules: Iterable[str]) -> str:
    return f"{header}\n" + "\n".join(rules) + "\n}"


def inner_segments(raw: str) -> Tuple[str, List[Segment]]:
    """Header plus the segments found inside the block (comments included)."""
    parts = split_block(raw)
    if parts is None:
        return raw, []
    header, inner = parts
    return header, segment(inner)


def filter_block(raw: str, keep: Callable[[Segment], bool]) -> Optional[str]:
    """
    Rebuild *raw* with only the inner segments *keep* accepts.

    Inner comments are dropped, nested at-rules are kept whole.  Returns None
    when nothing survives, or *raw* unchanged if it has no block at all.
    """
    parts = split_block(raw)
    if parts is None:
        return raw
    header, inner = parts

    kept: List[str] = []
    for seg in segment(inner):
        if seg.kind is SegmentKind.COMMENT:
            continue
        if seg.kind is SegmentKind.RULE:
            if seg.has_block and keep(seg):
                kept.append(seg.raw)
            continue
        kept.append(seg.raw)

    if not kept:
        return None
    return wrap_rules(header, kept)
