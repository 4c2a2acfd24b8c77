import pytest

from stylejit.builder import build, retain, subset_stylesheet
from stylejit.errors import ConfigurationError
from stylejit.models import BuildSettings, RetentionPolicy
from stylejit.segmenter import segment

CSS = ":root{--x:1} .a{color:red} .b{color:blue} div{margin:0}"


def test_subset_keeps_root_base_and_used_class():
    out, stats = subset_stylesheet(CSS, {"a"})
    assert ":root{--x:1}" in out
    assert "div{margin:0}" in out
    assert ".a{color:red}" in out
    assert ".b{color:blue}" not in out
    assert out == ":root{--x:1}\n\n.a{color:red}\n\ndiv{margin:0}"
    assert stats.kept == 3
    assert stats.skipped == 1
    assert stats.rules_total == 4
    assert stats.used_classes == ["a"]


def test_comments_and_imports_always_kept():
    css = '@import "x.css";\n/* header */\n.gone{}'
    out, _ = subset_stylesheet(css, set())
    assert out == '@import "x.css";\n\n/* header */'


def test_other_at_rules_kept_whole():
    css = "@font-face{font-family:x;src:url(x.woff)} @supports (gap:1px){.g{gap:1px}}"
    out, stats = subset_stylesheet(css, set())
    assert "@font-face" in out and "@supports" in out
    assert stats.skipped == 0


def test_unknown_selector_pruned_by_default():
    out, _ = subset_stylesheet("article{margin:0} .a{}", set())
    assert out == ""


def test_unknown_selector_kept_when_lenient():
    out, _ = subset_stylesheet(
        "article{margin:0} .a{}", set(), RetentionPolicy(prune_unknown=False)
    )
    assert out == "article{margin:0}"


def test_truncated_trailing_text_is_dropped():
    kept, skipped = retain(segment("div{} p"), set())
    assert kept == ["div{}"]
    assert skipped == 1


def test_subset_is_idempotent():
    first, _ = subset_stylesheet(CSS, {"a", "b"})
    second, _ = subset_stylesheet(CSS, {"a", "b"})
    assert first == second


def test_reduction_handles_empty_input():
    _, stats = subset_stylesheet("", set())
    assert stats.reduction == 0.0


def test_build_writes_output(write, project):
    write("style.css", CSS)
    write("src/index.html", '<div class="a other"></div>')
    settings = BuildSettings(css="style.css", scan=["src/**/*.html"], out="dist/out.css")

    result = build(settings)

    written = (project / "dist" / "out.css").read_text()
    assert written == result.css
    assert ".a{color:red}" in written
    assert ".b{color:blue}" not in written
    assert result.stats.used_classes == ["a", "other"]
    assert result.stats.elapsed_ms >= 0


def test_build_is_byte_identical_on_rerun(write, project):
    write("style.css", CSS)
    write("src/index.html", '<p class="b"></p>')
    settings = BuildSettings(css="style.css", scan=["src/*.html"], out="out.css")

    build(settings)
    first = (project / "out.css").read_bytes()
    build(settings)
    assert (project / "out.css").read_bytes() == first


def test_build_missing_stylesheet(project):
    settings = BuildSettings(css="nope.css", scan=["*.html"])
    with pytest.raises(ConfigurationError, match="CSS file not found"):
        build(settings)
