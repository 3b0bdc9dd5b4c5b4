"""Recursive folder size calculation."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

log = logging.getLogger(__name__)


def read_level(path: Path | str) -> tuple[list[str], int]:
    """List one directory without descending into it.

    Symbolic links are skipped whatever they point to. Entries that are
    neither directories nor regular files are ignored, as are entries that
    vanish or cannot be stat'ed while the listing is read.

    Returns:
        (subdirectory paths in listing order, total bytes of regular files)

    Raises:
        OSError: if *path* itself cannot be opened.
    """
    dirs: list[str] = []
    file_bytes = 0
    with os.scandir(path) as it:
        try:
            for entry in it:
                try:
                    if entry.is_symlink():
                        continue
                    if entry.is_dir(follow_symlinks=False):
                        dirs.append(entry.path)
                    elif entry.is_file(follow_symlinks=False):
                        file_bytes += entry.stat(follow_symlinks=False).st_size
                except OSError:
                    log.debug("Cannot access: %s", entry.path)
        except OSError as e:
            log.debug("Listing of %s cut short: %s", path, e)
    return dirs, file_bytes


def measure(path: Path | str, stop: threading.Event | None = None) -> tuple[int, bool]:
    """Total size of everything under *path*.

    Walks with an explicit stack so deep trees cannot hit the interpreter
    recursion limit. Unreadable subfolders count as 0. Setting *stop*
    ends the walk early with a partial total.

    Returns:
        (total_bytes, readable) where *readable* is False only when
        *path* itself could not be opened.
    """
    try:
        stack, total = read_level(path)
    except (OSError, ValueError) as e:
        log.debug("Cannot read %s: %s", path, e)
        return 0, False

    while stack:
        if stop is not None and stop.is_set():
            break
        current = stack.pop()
        try:
            dirs, file_bytes = read_level(current)
        except OSError as e:
            log.debug("Cannot read %s: %s", current, e)
            continue
        total += file_bytes
        stack.extend(dirs)
    return total, True


def compute_size(path: Path | str) -> int:
    """Calculate total size of a directory tree. Never raises OSError."""
    return measure(path)[0]
