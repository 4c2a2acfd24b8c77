# stylejit/runtime/rulemap.py
"""
Parse a stylesheet into the runtime lookup table.

    RuleMap.parse(css_text)
        .entries   every class rule text, in source order
        .classes   class name → indexes into `entries` (insertion ordered)
        .base      always-injected text: imports, keyframes, other at-rules
                   and rules without class tokens

Class rules found inside ``@media`` are stored re-wrapped in their own media
header, one wrapper per rule.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from stylejit.classifier import classify
from stylejit.media import inner_segments, is_keyframes_block, is_media_block, wrap_rules
from stylejit.models import RetentionPolicy, Segment, SegmentKind
from stylejit.retention import is_base_block
from stylejit.segmenter import iter_segments


class RuleMap(BaseModel):
    model_config = ConfigDict(frozen=True)

    entries: List[str] = Field(default_factory=list)
    classes: Dict[str, List[int]] = Field(default_factory=dict)
    base: str = ""

    # ------------------------------------------------------------------ #

    def available(self) -> List[str]:
        return list(self.classes)

    def rules_for(self, name: str) -> List[str]:
        return [self.entries[i] for i in self.classes.get(name, [])]

    def indexes_for(self, names: Iterable[str]) -> List[int]:
        out: List[int] = []
        for name in names:
            out.extend(self.classes.get(name, []))
        return out

    # ------------------------------------------------------------------ #

    @classmethod
    def parse(cls, css_text: str, policy: RetentionPolicy | None = None) -> "RuleMap":
        policy = policy or RetentionPolicy(prune_unknown=False)
        builder = _Builder(policy)
        for seg in iter_segments(css_text):
            builder.add(seg)
        return cls(entries=builder.entries, classes=builder.classes, base="\n".join(builder.base))


class _Builder:
    def __init__(self, policy: RetentionPolicy) -> None:
        self.policy = policy
        # inside @media only base-pattern rules join the base block
        self.media_policy = RetentionPolicy(keep_base=policy.keep_base, prune_unknown=True)
        self.entries: List[str] = []
        self.classes: Dict[str, List[int]] = {}
        self.base: List[str] = []

    def _map(self, names: Iterable[str], text: str) -> None:
        idx = len(self.entries)
        self.entries.append(text)
        for name in names:
            self.classes.setdefault(name, []).append(idx)

    def add(self, seg: Segment) -> None:
        if seg.kind is SegmentKind.COMMENT:
            return
        if seg.kind is SegmentKind.IMPORT or is_keyframes_block(seg):
            self.base.append(seg.raw)
            return
        if is_media_block(seg):
            self._add_media(seg)
            return
        if seg.kind is SegmentKind.AT_RULE:
            # @font-face, @supports, @page, … have no class to key on
            self.base.append(seg.raw)
            return
        if not seg.has_block:
            return

        verdict = classify(seg.selector or "")
        if verdict.classes:
            self._map(verdict.classes, seg.raw)
        elif is_base_block(verdict, self.policy):
            self.base.append(seg.raw)

    def _add_media(self, seg: Segment) -> None:
        header, inner = inner_segments(seg.raw)
        media_base: List[str] = []
        for rule in inner:
            if rule.kind is SegmentKind.COMMENT:
                continue
            if rule.kind is not SegmentKind.RULE:
                media_base.append(rule.raw)
                continue
            if not rule.has_block:
                continue
            verdict = classify(rule.selector or "")
            if verdict.classes:
                self._map(verdict.classes, wrap_rules(header, [rule.raw]))
            elif is_base_block(verdict, self.media_policy):
                media_base.append(rule.raw)
        if media_base:
            self.base.append(wrap_rules(header, media_base))
