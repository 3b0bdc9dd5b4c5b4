"""CLI interface for DiskScope."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from diskscope import __version__
from diskscope.core.cache import ScanCache
from diskscope.core.navigator import Navigator, parse_selection
from diskscope.core.paths import PathError, available_roots, resolve_directory
from diskscope.core.scanner import LevelScanner
from diskscope.core.tree import build_tree, render_tree, sort_tree, tree_to_records
from diskscope.models.navigation import Outcome
from diskscope.presenter import root_menu_lines, show_level, show_message
from diskscope.settings import KEYS, Settings
from diskscope.utils import bytes_to_human


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _resolve_or_exit(path: str) -> Path:
    try:
        return resolve_directory(path)
    except PathError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _root_choice(raw: str, roots: list[Path]) -> str:
    """Map menu input to a path: a listed number, typed text, or the first root."""
    if not raw:
        return str(roots[0])
    selection = parse_selection(raw, len(roots))
    if selection.ok:
        return str(roots[selection.index])
    return raw


def prompt_root() -> Path:
    """Ask for a starting folder until a valid directory is given."""
    roots = available_roots()
    while True:
        for line in root_menu_lines(roots):
            click.echo(line)
        raw = click.prompt("Select drive number or type a path", default="", show_default=False)
        try:
            return resolve_directory(_root_choice(raw.strip(), roots))
        except PathError as e:
            show_message(f"Error: {e}", error=True)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.version_option(__version__, prog_name="diskscope")
def main(verbose: int) -> None:
    """DiskScope: see which folders use your disk space."""
    _setup_logging(verbose)


# ── explore ──────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", required=False)
@click.option("--workers", "-w", type=click.IntRange(min=1), default=None, help="Parallel size workers")
@click.option("--width", type=click.IntRange(min=4), default=None, help="Folder name column width")
def explore(path: str | None, workers: int | None, width: int | None) -> None:
    """Browse folder sizes one level at a time.

    Enter a number to open a folder, 'b' to go back, 'r' to rescan and
    'q' to quit. Without PATH a starting drive is asked for first.
    """
    settings = Settings.instance()
    workers = workers or settings.max_workers()
    width = width or settings.name_width()

    def on_scan(folder: Path) -> None:
        click.echo(f"\nScanning {folder} ", nl=False)

    def on_progress(name: str, status: str) -> None:
        if status == "done":
            click.echo(".", nl=False)

    try:
        start = _resolve_or_exit(path) if path is not None else prompt_root()
        cache = ScanCache(LevelScanner(workers, on_progress=on_progress), on_scan=on_scan)
        navigator = Navigator(cache, select_root=prompt_root)
        navigator.initial(start)
        _run_loop(navigator, width)
    except click.Abort:
        click.echo()
    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        sys.exit(130)


def _run_loop(navigator: Navigator, width: int) -> None:
    message = ""
    while True:
        scans_before = navigator.cache.scan_count
        path, result = navigator.current_view()
        show_level(path, result, width, from_cache=navigator.cache.scan_count == scans_before)
        if message:
            show_message(message)
        raw = click.prompt(">", default="", show_default=False, prompt_suffix=" ")
        outcome = navigator.handle_command(raw)
        if outcome.outcome is Outcome.QUIT:
            return
        message = outcome.message if outcome.outcome is Outcome.INVALID else ""


# ── tree ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", default=".")
@click.option("--depth", "-d", type=click.IntRange(min=0), default=None, help="Levels to print")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def tree(path: str, depth: int | None, as_json: bool) -> None:
    """Scan a folder completely and print its tree of sizes."""
    root_path = _resolve_or_exit(path)

    if not as_json:
        click.echo(f"\nScanning: {root_path}")
        click.echo("Please wait...")

    root = build_tree(root_path)
    sort_tree(root)

    if as_json:
        click.echo(json.dumps(tree_to_records(root, depth), indent=2))
        return
    for line in render_tree(root, depth):
        click.echo(line)


# ── size ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", default=".")
@click.option("--workers", "-w", type=click.IntRange(min=1), default=None, help="Parallel size workers")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def size(path: str, workers: int | None, as_json: bool) -> None:
    """Print the subfolders of PATH with their sizes, largest first."""
    folder = _resolve_or_exit(path)
    result = LevelScanner(workers or Settings.instance().max_workers()).scan_level(folder)

    if as_json:
        data = {
            "path": str(result.path),
            "access_denied": result.access_denied,
            "total_bytes": result.total_bytes,
            "entries": [
                {
                    "name": e.name,
                    "path": str(e.path),
                    "size_bytes": e.size_bytes,
                    "access_denied": e.access_denied,
                }
                for e in result
            ],
        }
        click.echo(json.dumps(data, indent=2))
        return

    if result.access_denied:
        click.echo(click.style(f"Cannot read {folder}", fg="red"), err=True)
        return
    for entry in result:
        label = "ACCESS DENIED" if entry.access_denied else bytes_to_human(entry.size_bytes)
        click.echo(f"  {label:>12s}  {entry.name}")
    click.echo(f"\nTotal: {click.style(bytes_to_human(result.total_bytes), fg='green', bold=True)}")


# ── config ───────────────────────────────────────────────────────────────

@main.group()
def config() -> None:
    """Show or change persistent settings."""


@config.command("show")
def config_show() -> None:
    """Print the effective settings."""
    settings = Settings.instance()
    click.echo(f"  {click.style('File:', bold=True)} {settings.path}")
    for key, value in settings.as_dict().items():
        click.echo(f"  {key:22s} {value}")


@config.command("set")
@click.argument("key", type=click.Choice(KEYS))
@click.argument("value", type=click.IntRange(min=1))
def config_set(key: str, value: int) -> None:
    """Store a setting."""
    Settings.instance().set(key, value)
    click.echo(f"{key} = {value}")
