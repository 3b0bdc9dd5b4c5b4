"""Single-level folder scanning with parallel size computation."""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable

from diskscope.core.size import measure, read_level
from diskscope.models.folder_entry import FolderEntry, ScanResult, display_name

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]  # (folder_name, status)


def default_workers() -> int:
    """Worker cap used when none is configured."""
    return min(32, (os.cpu_count() or 1) + 4)


class LevelScanner:
    """Lists the subfolders of one folder together with their total sizes.

    Each subfolder is measured as its own task on a thread pool, so the
    cost of a level is bounded by its largest child rather than the sum.
    """

    def __init__(
        self,
        max_workers: int | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.max_workers = max(1, max_workers or default_workers())
        self.on_progress = on_progress

    def scan_level(self, path: Path | str) -> ScanResult:
        """Scan the immediate subfolders of *path*.

        Never raises for file-system problems: an unreadable *path* yields
        an empty result with ``access_denied`` set.

        Returns:
            Subfolders sorted by size, largest first (stable).
        """
        path = Path(path)
        start = time.perf_counter()
        try:
            dirs, _ = read_level(path)
        except (OSError, ValueError) as e:
            log.debug("Cannot list %s: %s", path, e)
            return ScanResult(path=path, access_denied=True)

        if len(dirs) > 1 and self.max_workers > 1:
            sizes = self._measure_parallel(dirs)
        else:
            sizes = [self._measure_child(d) for d in dirs]

        entries = [
            FolderEntry(
                name=display_name(Path(d)),
                path=Path(d),
                size_bytes=size,
                access_denied=not readable,
            )
            for d, (size, readable) in zip(dirs, sizes)
        ]
        entries.sort(key=lambda e: e.size_bytes, reverse=True)

        elapsed = time.perf_counter() - start
        log.info("Scanned %d subfolders of %s in %.2fs", len(entries), path, elapsed)
        return ScanResult(path=path, entries=tuple(entries), elapsed=elapsed)

    def _measure_child(self, child: str, stop: threading.Event | None = None) -> tuple[int, bool]:
        name = display_name(Path(child))
        if self.on_progress:
            self.on_progress(name, "scanning")
        try:
            result = measure(child, stop)
        except Exception:
            log.exception("Size calculation failed for '%s'", child)
            if self.on_progress:
                self.on_progress(name, "error")
            return 0, False
        if self.on_progress:
            self.on_progress(name, "done")
        return result

    def _measure_parallel(self, dirs: list[str]) -> list[tuple[int, bool]]:
        """Measure every child on a thread pool and wait for all of them.

        Results come back in listing order regardless of completion order.
        On Ctrl-C, queued tasks are cancelled and running ones told to stop.
        """
        stop = threading.Event()
        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(dirs)),
            thread_name_prefix="diskscope-scan",
        )
        try:
            futures = [executor.submit(self._measure_child, d, stop) for d in dirs]
            results = [future.result() for future in futures]
        except BaseException:
            stop.set()
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown()
        return results
