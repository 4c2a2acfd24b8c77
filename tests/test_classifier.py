import pytest

from stylejit.classifier import classify, extract_classes, is_base_selector
from stylejit.models import Classification, RetentionPolicy
from stylejit.retention import is_base_block, keep_rule


@pytest.mark.parametrize(
    "selector, expected",
    [
        (".btn", ("btn",)),
        (".btn.primary:hover", ("btn", "primary")),
        (".a > .b .a", ("a", "b")),
        ("div .card-title__x", ("card-title__x",)),
        (".Foo .foo", ("Foo", "foo")),
        ("div", ()),
        (".5col", ()),  # must start with a letter
        ("#main", ()),
    ],
)
def test_extract_classes(selector, expected):
    assert extract_classes(selector) == expected


@pytest.mark.parametrize(
    "selector",
    [
        "*", "html", "body", "div", "p", "h1", "h6", "a, button", "input",
        "input[type=checkbox]", "textarea:focus", "tr:nth-child(even)",
        "::selection", "::-webkit-scrollbar-thumb", ":root", "p i",
        "i.material-icons", "td img", "#pagination a",
    ],
)  # fmt: skip
def test_base_selectors(selector):
    assert is_base_selector(selector)


@pytest.mark.parametrize("selector", ["div > p", "article", "h7", ".btn", "a:hover", "#main"])
def test_non_base_selectors(selector):
    assert not is_base_selector(selector)


def test_base_and_class_can_coexist():
    verdict = classify("i.material-icons")
    assert verdict.is_base
    assert verdict.classes == ("material-icons",)
    assert not verdict.is_unknown


def test_unknown_selector():
    verdict = classify("article")
    assert verdict.is_unknown
    assert not verdict.is_class_rule


# ── retention ───────────────────────────────────────────────────────
STRICT = RetentionPolicy()
LENIENT = RetentionPolicy(prune_unknown=False)


def test_keep_rule_base_wins():
    assert keep_rule(classify("i.material-icons"), set(), STRICT)


def test_keep_rule_any_used_class():
    assert keep_rule(classify(".a, .b"), {"b"}, STRICT)
    assert not keep_rule(classify(".a, .b"), {"c"}, STRICT)


def test_keep_rule_unknown_follows_policy():
    unknown = classify("article")
    assert not keep_rule(unknown, set(), STRICT)
    assert keep_rule(unknown, set(), LENIENT)


def test_keep_base_false_drops_base():
    assert not keep_rule(classify("div"), set(), RetentionPolicy(keep_base=False))


def test_is_base_block():
    assert is_base_block(classify("div"), LENIENT)
    assert is_base_block(classify("article"), LENIENT)
    assert not is_base_block(classify("article"), STRICT)
    assert not is_base_block(classify(".a"), LENIENT)
    assert not is_base_block(Classification(is_base=True), RetentionPolicy(keep_base=False))
