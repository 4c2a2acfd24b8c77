# stylejit/segmenter.py
"""
Split raw stylesheet text into an ordered list of `Segment`s.

The scan is a single left-to-right pass with naive brace-depth tracking:

    /* … */          → comment   (to the closer, or end of input)
    @import / @charset → import  (to the next ';', or end of input)
    @anything { … }  → at-rule   (to the matching '}')
    selector { … }   → rule      (selector = trimmed pre-brace text)

Every non-whitespace character of the input lands in exactly one segment, so
joining the `raw` spans (ignoring whitespace gaps) rebuilds the source.
Braces inside quoted strings are *not* special-cased.
"""

from __future__ import annotations

from typing import Iterator, List

from stylejit.models import Segment, SegmentKind

_COMMENT_OPEN = "/*"
_COMMENT_CLOSE = "*/"
_STATEMENT_KEYWORDS = ("@import", "@charset")


def find_block_end(text: str, open_idx: int) -> int:
    """
    Index of the '}' matching the '{' at *open_idx*.

    Returns ``len(text) - 1`` when the block is never closed, so callers can
    always slice ``text[start:end + 1]``.
    """
    depth = 0
    for j in range(open_idx, len(text)):
        ch = text[j]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return j
    return len(text) - 1


def _skip_ws(text: str, pos: int) -> int:
    n = len(text)
    while pos < n and text[pos].isspace():
        pos += 1
    return pos


def iter_segments(text: str) -> Iterator[Segment]:
    """Yield segments of *text* in source order."""
    n = len(text)
    pos = 0

    while True:
        pos = _skip_ws(text, pos)
        if pos >= n:
            return

        # ── comment ─────────────────────────────────────────────────
        if text.startswith(_COMMENT_OPEN, pos):
            close = text.find(_COMMENT_CLOSE, pos + 2)
            end = n if close == -1 else close + 2
            yield Segment(kind=SegmentKind.COMMENT, raw=text[pos:end], start=pos, end=end)
            pos = end
            continue

        # ── @import / @charset ──────────────────────────────────────
        if text.startswith(_STATEMENT_KEYWORDS, pos):
            semi = text.find(";", pos)
            end = n if semi == -1 else semi + 1
            yield Segment(kind=SegmentKind.IMPORT, raw=text[pos:end], start=pos, end=end)
            pos = end
            continue

        brace = text.find("{", pos)

        # ── other at-rules ──────────────────────────────────────────
        if text[pos] == "@":
            semi = text.find(";", pos)
            if semi != -1 and (brace == -1 or semi < brace):
                # block-less statement: @namespace x; / @layer a, b;
                end = semi + 1
            elif brace == -1:
                end = n
            else:
                end = find_block_end(text, brace) + 1
            yield Segment(kind=SegmentKind.AT_RULE, raw=text[pos:end], start=pos, end=end)
            pos = end
            continue

        # ── plain rule ──────────────────────────────────────────────
        if brace == -1:
            # truncated trailing content – keep it so the partition stays total
            yield Segment(
                kind=SegmentKind.RULE,
                raw=text[pos:n],
                start=pos,
                end=n,
                selector=text[pos:n].strip(),
            )
            return

        end = find_block_end(text, brace) + 1
        yield Segment(
            kind=SegmentKind.RULE,
            raw=text[pos:end],
            start=pos,
            end=end,
            selector=text[pos:brace].strip(),
        )
        pos = end


def segment(text: str) -> List[Segment]:
    """Eager wrapper around `iter_segments`."""
    return list(iter_segments(text))
