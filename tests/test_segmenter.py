import re

import pytest

from stylejit.models import SegmentKind
from stylejit.segmenter import find_block_end, segment


def _squash(text: str) -> str:
    return re.sub(r"\s+", "", text)


SAMPLE = """
@charset "utf-8";
@import url("reset.css");
/* ── layout ── */
:root { --x: 1; }
.card, .card:hover { color: red; }
@media (min-width: 600px) {
  .card { padding: 2px; }
  span { color: blue; }
}
@keyframes spin { from { opacity: 0 } to { opacity: 1 } }
div > p { margin: 0 }
"""


def test_empty_input_yields_nothing():
    assert segment("") == []
    assert segment("   \n\t ") == []


def test_kinds_in_source_order():
    kinds = [s.kind for s in segment(SAMPLE)]
    assert kinds == [
        SegmentKind.IMPORT,
        SegmentKind.IMPORT,
        SegmentKind.COMMENT,
        SegmentKind.RULE,
        SegmentKind.RULE,
        SegmentKind.AT_RULE,
        SegmentKind.AT_RULE,
        SegmentKind.RULE,
    ]


def test_selectors_are_trimmed():
    rules = [s for s in segment(SAMPLE) if s.kind is SegmentKind.RULE]
    assert [r.selector for r in rules] == [":root", ".card, .card:hover", "div > p"]


def test_non_rules_have_no_selector():
    assert all(s.selector is None for s in segment(SAMPLE) if s.kind is not SegmentKind.RULE)


@pytest.mark.parametrize(
    "css",
    [
        SAMPLE,
        ":root{--x:1} .a{color:red} .b{color:blue} div{margin:0}",
        "a{b{c{}}}d{}",
        "/* unterminated comment .a{color:red}",
        ".a{color:red} .b{color:blue",
        "@media screen { .a{}",
        ".a{} trailing-garbage",
        "@import 'x.css'",
        "@namespace svg url(http://www.w3.org/2000/svg); .a{}",
    ],
)
def test_segmentation_is_lossless(css):
    segs = segment(css)
    assert _squash("".join(s.raw for s in segs)) == _squash(css)
    # offsets partition the input in order
    for prev, nxt in zip(segs, segs[1:]):
        assert prev.end <= nxt.start
        assert css[prev.end : nxt.start].strip() == ""
    for s in segs:
        assert css[s.start : s.end] == s.raw


def test_nested_braces_close_at_matching_depth():
    css = "@media print { .a { color: red } .b { color: blue } } .c{}"
    segs = segment(css)
    assert segs[0].raw == "@media print { .a { color: red } .b { color: blue } }"
    assert segs[1].selector == ".c"


def test_unterminated_comment_consumes_to_end():
    segs = segment("/* never closed .a{color:red}")
    assert len(segs) == 1
    assert segs[0].kind is SegmentKind.COMMENT


def test_unterminated_block_consumes_to_end():
    segs = segment(".a{color:red} .b{color:blue")
    assert segs[-1].selector == ".b"
    assert segs[-1].raw == ".b{color:blue"


def test_trailing_text_without_block():
    segs = segment(".a{} p")
    assert segs[-1].selector == "p"
    assert not segs[-1].has_block


def test_import_without_semicolon_runs_to_end():
    segs = segment('@import "a.css"')
    assert len(segs) == 1
    assert segs[0].kind is SegmentKind.IMPORT


def test_statement_at_rule_does_not_swallow_next_rule():
    segs = segment("@layer base, theme; .a{color:red}")
    assert segs[0].raw == "@layer base, theme;"
    assert segs[1].selector == ".a"


def test_at_keyword():
    segs = segment("@MEDIA screen{} @-webkit-keyframes x{} @import 'a';")
    assert [s.at_keyword for s in segs] == ["@media", "@-webkit-keyframes", "@import"]


def test_find_block_end():
    text = "a{b{}c}d"
    assert find_block_end(text, 1) == 6
    assert find_block_end("x{", 1) == 1


def test_quoted_braces_are_not_special_cased():
    # documented limitation: naive counting mis-nests, but must terminate
    segs = segment('.a::after{content:"}"} .b{}')
    assert _squash("".join(s.raw for s in segs)) == _squash('.a::after{content:"}"} .b{}')
