# stylejit/builder.py
"""
Batch driver: usage scan → segmentation → retention → assembly → write.

    result = build(BuildSettings(css="style.css", scan=["src/**/*.html"]))
    print(result.stats.kept, result.stats.skipped)
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import AbstractSet, List, Tuple

from stylejit.classifier import classify
from stylejit.errors import ConfigurationError
from stylejit.logger import get_logger
from stylejit.media import filter_block, is_media_block
from stylejit.models import (
    BuildResult,
    BuildSettings,
    BuildStats,
    RetentionPolicy,
    Segment,
    SegmentKind,
)
from stylejit.retention import keep_rule
from stylejit.scanner import scan_files
from stylejit.segmenter import segment

logger = get_logger(__name__)

SEGMENT_SEPARATOR = "\n\n"


def _keep_inner(used: AbstractSet[str], policy: RetentionPolicy):
    def _keep(seg: Segment) -> bool:
        return keep_rule(classify(seg.selector or ""), used, policy)

    return _keep


def retain(
    segments: List[Segment],
    used: AbstractSet[str],
    policy: RetentionPolicy | None = None,
) -> Tuple[List[str], int]:
    """
    Keep/drop every top-level segment.

    Returns the kept texts (media blocks already rewritten) and the number of
    skipped segments.
    """
    policy = policy or RetentionPolicy()
    keep_inner = _keep_inner(used, policy)
    kept: List[str] = []
    skipped = 0

    for seg in segments:
        if seg.kind in (SegmentKind.COMMENT, SegmentKind.IMPORT):
            kept.append(seg.raw)
            continue

        if seg.kind is SegmentKind.AT_RULE:
            if not is_media_block(seg):
                # @keyframes, @font-face, @supports, … kept whole
                kept.append(seg.raw)
                continue
            filtered = filter_block(seg.raw, keep_inner)
            if filtered is None:
                skipped += 1
            else:
                kept.append(filtered)
            continue

        if seg.has_block and keep_inner(seg):
            kept.append(seg.raw)
        else:
            skipped += 1

    return kept, skipped


def subset_stylesheet(
    css_text: str,
    used: AbstractSet[str],
    policy: RetentionPolicy | None = None,
) -> Tuple[str, BuildStats]:
    """Pure core of the build: returns the reduced CSS and its stats."""
    segments = segment(css_text)
    kept, skipped = retain(segments, used, policy)
    output = SEGMENT_SEPARATOR.join(kept)

    stats = BuildStats(
        input_bytes=len(css_text.encode("utf-8")),
        output_bytes=len(output.encode("utf-8")),
        rules_total=sum(1 for s in segments if s.kind is SegmentKind.RULE),
        kept=len(kept),
        skipped=skipped,
        used_classes=sorted(used),
    )
    return output, stats


def read_stylesheet(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(f"CSS file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read CSS file {path}: {exc}") from exc


def build(settings: BuildSettings) -> BuildResult:
    """Run one full build and write `settings.out`."""
    started = time.perf_counter()

    css_text = read_stylesheet(settings.css)
    used = scan_files(settings.scan)
    output, stats = subset_stylesheet(css_text, used, settings.policy())

    out_path = Path(settings.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(output, encoding="utf-8")

    stats.elapsed_ms = (time.perf_counter() - started) * 1000.0
    logger.info(
        "Built %s → %s (%d kept, %d skipped, %d classes)",
        settings.css,
        out_path,
        stats.kept,
        stats.skipped,
        len(stats.used_classes),
    )
    return BuildResult(css=output, out_path=out_path, stats=stats)
