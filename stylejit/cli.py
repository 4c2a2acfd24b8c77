# stylejit/cli.py
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.markup import escape

from stylejit.builder import build
from stylejit.errors import ConfigurationError
from stylejit.logger import get_logger
from stylejit.models import DEFAULT_OUT, BuildResult, BuildSettings
from stylejit.preferences import load_preferences
from stylejit.ui import console, print_error, print_info, print_primary, print_success
from stylejit.ui.spinner import safe_status

logger = get_logger(__name__)

app = typer.Typer(
    help="stylejit: build a minimal stylesheet from the classes your files use.",
    add_completion=False,
)

USAGE_HINT = 'Usage: stylejit --css style.css --scan "src/**/*.html" --out output.css'


def resolve_settings(
    css: Optional[Path],
    scan: Optional[List[str]],
    out: Optional[Path],
    watch: bool,
    stats: bool,
    keep_unknown: bool,
    config: Optional[Path],
) -> BuildSettings:
    """Merge command-line flags over the config file; flags win."""
    prefs = load_preferences(config)

    css = css or prefs.resolve_path(prefs.get("css"))
    if not css:
        raise ConfigurationError(f"Missing --css argument. {USAGE_HINT}")

    scan = list(scan or []) or prefs.get("scan", default=[])
    if isinstance(scan, str):
        scan = [scan]
    if not scan:
        raise ConfigurationError(
            'Missing --scan argument. Provide at least one glob like --scan "src/**/*.html"'
        )

    out = out or prefs.resolve_path(prefs.get("out")) or Path(DEFAULT_OUT)

    try:
        return BuildSettings(
            css=css,
            scan=scan,
            out=out,
            watch=watch,
            stats=stats,
            keep_unknown=keep_unknown or bool(prefs.get("keep_unknown", default=False)),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def report(result: BuildResult, show_stats: bool) -> None:
    s = result.stats
    in_kb = s.input_bytes / 1024
    out_kb = s.output_bytes / 1024

    print_success(f"Done in {s.elapsed_ms:.0f}ms")
    console.print(f"   Input:  {in_kb:.1f} KB ({s.rules_total} rules)")
    console.print(f"   Output: {out_kb:.1f} KB → {s.reduction:.1f}% smaller")
    console.print(f"   Saved to: {result.out_path}")

    if show_stats:
        print_primary("Stats:")
        console.print(f"   Used classes detected: {len(s.used_classes)}")
        console.print(f"   Rules kept: {s.kept}")
        console.print(f"   Rules pruned: {s.skipped}")
        console.print("   Used classes:")
        for name in s.used_classes:
            console.print(f"     .{name}")


def run_build(settings: BuildSettings) -> BuildResult:
    print_info("Building…")
    with safe_status("Building…"):
        result = build(settings)
    print_info(f"Found {len(result.stats.used_classes)} unique class names in your files")
    report(result, settings.stats)
    return result


@app.command()
def main(
    css: Optional[Path] = typer.Option(
        None, "--css", help="Path to the full stylesheet (required)"
    ),
    scan: Optional[List[str]] = typer.Option(
        None,
        "--scan",
        help=(
            "Glob of files to scan for class names; repeatable (required). "
            'Patterns are not recursive unless they contain **: "*.html" only '
            'matches the top directory, use "**/*.html" for the whole tree'
        ),
    ),
    out: Optional[Path] = typer.Option(
        None, "--out", help=f"Output file path (default: {DEFAULT_OUT})"
    ),
    watch: bool = typer.Option(
        False, "--watch", help="Watch for changes and rebuild automatically"
    ),
    stats: bool = typer.Option(False, "--stats", help="Show detailed stats after build"),
    keep_unknown: bool = typer.Option(
        False,
        "--keep-unknown",
        help="Keep selectors that are neither base element rules nor class rules",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="YAML config file (default: ./stylejit.yml if present)"
    ),
):
    """Scan files for class names and write the matching subset of a stylesheet."""
    try:
        settings = resolve_settings(css, scan, out, watch, stats, keep_unknown, config)
        run_build(settings)
    except ConfigurationError as exc:
        logger.error("Build aborted: %s", exc)
        print_error(escape(str(exc)))
        raise typer.Exit(code=1)

    if settings.watch:
        from stylejit.watcher import watch as watch_forever

        def _rebuild(reason: str) -> None:
            print_info(reason)
            try:
                run_build(settings)
            except ConfigurationError as exc:
                # e.g. stylesheet briefly missing during a save; keep watching
                print_error(escape(str(exc)))

        print_primary("Watching for file changes... (Ctrl+C to stop)")
        watch_forever(settings, _rebuild)
