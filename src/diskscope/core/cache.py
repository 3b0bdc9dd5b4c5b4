"""Per-session memo of scanned folder levels."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from diskscope.core.scanner import LevelScanner
from diskscope.models.folder_entry import ScanResult

log = logging.getLogger(__name__)

ScanCallback = Callable[[Path], None]


def cache_key(path: Path | str) -> str:
    """Absolute, normalized string form of *path*."""
    return os.path.abspath(path)


class ScanCache:
    """Maps absolute folder paths to their scan results.

    A key is present only while a completed scan for it has not been
    invalidated. There is no eviction and no file-system watching; stale
    entries go away only through :meth:`invalidate` and
    :meth:`invalidate_subtree`. Not thread-safe: it is used from the
    navigation thread only, and results are stored after the level's
    workers have all finished.
    """

    def __init__(
        self,
        scanner: LevelScanner | None = None,
        on_scan: ScanCallback | None = None,
    ) -> None:
        self.scanner = scanner or LevelScanner()
        self.on_scan = on_scan
        self.scan_count = 0
        self._results: dict[str, ScanResult] = {}

    def get(self, path: Path | str) -> ScanResult:
        """Return the cached result for *path*, scanning it first on a miss."""
        key = cache_key(path)
        cached = self._results.get(key)
        if cached is not None:
            log.debug("Cache hit: %s", key)
            return cached

        log.debug("Cache miss: %s", key)
        if self.on_scan:
            self.on_scan(Path(key))
        result = self.scanner.scan_level(key)
        self.scan_count += 1
        self._results[key] = result
        return result

    def invalidate(self, path: Path | str) -> None:
        """Forget the result for *path*. No-op if it was never scanned."""
        if self._results.pop(cache_key(path), None) is not None:
            log.debug("Invalidated %s", cache_key(path))

    def invalidate_subtree(self, path: Path | str) -> int:
        """Forget *path* and every cached folder below it.

        Returns:
            Number of entries removed.
        """
        root = Path(cache_key(path))
        stale = [k for k in self._results if Path(k).is_relative_to(root)]
        for key in stale:
            del self._results[key]
        log.debug("Invalidated %d cached levels under %s", len(stale), root)
        return len(stale)

    def __contains__(self, path: Path | str) -> bool:
        return cache_key(path) in self._results

    def __len__(self) -> int:
        return len(self._results)
