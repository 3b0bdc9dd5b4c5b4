"""Console rendering for the interactive explorer."""

from __future__ import annotations

from pathlib import Path

import click

from diskscope.models.folder_entry import ScanResult
from diskscope.settings import DEFAULT_NAME_WIDTH
from diskscope.utils import bytes_to_human, format_elapsed, truncate_name

BANNER = "DiskScope - Interactive Disk Explorer"
LEGEND = "[num] = enter | 'b' = back | 'r' = refresh | 'q' = quit"

_HEAVY = "=" * 60
_LIGHT = "-" * 60
_SIZE_COLUMN = 12


def header_lines() -> list[str]:
    return [_HEAVY, f"  {click.style(BANNER, bold=True)}", _HEAVY, ""]


def level_lines(
    path: Path,
    result: ScanResult,
    name_width: int = DEFAULT_NAME_WIDTH,
    from_cache: bool = False,
) -> list[str]:
    """Lines for one folder level: numbered children plus a status footer."""
    lines = header_lines()
    lines.append(f"Current: {click.style(str(path), fg='cyan', bold=True)}")
    lines.append(_LIGHT)
    lines.append("")

    if result.access_denied:
        lines.append(click.style("  (Access denied)", fg="red"))
    elif not result.entries:
        lines.append(click.style("  (No subfolders found)", fg="bright_black"))
    else:
        names = [truncate_name(e.name, name_width) for e in result.entries]
        pad = min(max(len(n) for n in names), name_width) + 2
        for i, (entry, name) in enumerate(zip(result.entries, names)):
            if entry.access_denied:
                size = click.style(f"{'[ACCESS DENIED]':>{_SIZE_COLUMN}}", fg="red")
            else:
                size = click.style(f"{bytes_to_human(entry.size_bytes):>{_SIZE_COLUMN}}", fg="green")
            lines.append(f"  [{i:2d}] {name:<{pad}}{size}")

    lines.append("")
    lines.append(_LIGHT)
    count = len(result.entries)
    status = (
        f"  Total: {click.style(bytes_to_human(result.total_bytes), bold=True)}"
        f" in {count} folder{'s' if count != 1 else ''}"
    )
    if from_cache:
        status += " | cached"
    else:
        status += f" | scanned in {format_elapsed(result.elapsed)}"
    lines.append(status)
    lines.append(f"  {LEGEND}")
    lines.append(_LIGHT)
    return lines


def show_level(
    path: Path,
    result: ScanResult,
    name_width: int = DEFAULT_NAME_WIDTH,
    from_cache: bool = False,
) -> None:
    """Clear the screen and draw one folder level."""
    click.clear()
    for line in level_lines(path, result, name_width, from_cache):
        click.echo(line)


def root_menu_lines(roots: list[Path]) -> list[str]:
    """Lines for the starting-root menu."""
    lines = [""] + header_lines()
    lines.append("Available drives:")
    lines.append(_LIGHT)
    lines.append("")
    for i, root in enumerate(roots):
        lines.append(f"  [{i}] {root}")
    lines.append("")
    lines.append(_LIGHT)
    return lines


def show_message(message: str, error: bool = False) -> None:
    """Print a one-line notice under the listing."""
    click.echo(click.style(message, fg="red" if error else "yellow"), err=error)
