from stylejit.builder import subset_stylesheet
from stylejit.classifier import classify
from stylejit.media import filter_block, is_keyframes_block, is_media_block, split_block
from stylejit.models import RetentionPolicy
from stylejit.retention import keep_rule
from stylejit.segmenter import segment

MEDIA = "@media (min-width:600px){.x{color:red} span{color:blue}}"


def _keeper(used, policy=RetentionPolicy()):
    return lambda seg: keep_rule(classify(seg.selector), used, policy)


def test_split_block():
    assert split_block(MEDIA) == (
        "@media (min-width:600px){",
        ".x{color:red} span{color:blue}",
    )
    assert split_block("@media print") is None


def test_drops_unused_class_keeps_base():
    out = filter_block(MEDIA, _keeper(set()))
    assert out == "@media (min-width:600px){\nspan{color:blue}\n}"


def test_keeps_used_class_rules_in_order():
    out = filter_block(MEDIA, _keeper({"x"}))
    assert out == "@media (min-width:600px){\n.x{color:red}\nspan{color:blue}\n}"


def test_block_dropped_when_nothing_survives():
    assert filter_block("@media print{.x{color:red} .y{color:blue}}", _keeper(set())) is None


def test_inner_comments_dropped_nested_at_rules_kept():
    raw = "@media screen{/* note */ @supports (display:grid){.g{display:grid}} .x{}}"
    out = filter_block(raw, _keeper(set()))
    assert "/* note */" not in out
    assert "@supports (display:grid){.g{display:grid}}" in out
    assert ".x{}" not in out


def test_block_kinds():
    media, frames, face = segment("@media print{} @keyframes k{} @font-face{font-family:x}")
    assert is_media_block(media) and not is_keyframes_block(media)
    assert is_keyframes_block(frames) and not is_media_block(frames)
    assert not is_media_block(face) and not is_keyframes_block(face)


def test_build_counts_dropped_media_as_skipped():
    css = "@media print{.x{color:red}} .y{}"
    out, stats = subset_stylesheet(css, set())
    assert out == ""
    assert stats.skipped == 2
    assert stats.kept == 0


def test_keyframes_never_filtered_in_build():
    css = "@keyframes spin{from{opacity:0}to{opacity:1}}"
    out, _ = subset_stylesheet(css, set())
    assert out == css
