"""Folder entry and scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


def display_name(path: Path) -> str:
    """Label for a folder: its final segment, or the whole path for a volume root."""
    return path.name or str(path)


@dataclass(frozen=True, slots=True)
class FolderEntry:
    """Immediate child folder with the recursive size of everything under it.

    ``access_denied`` is set when the folder itself could not be opened,
    in which case ``size_bytes`` is 0.
    """

    name: str
    path: Path
    size_bytes: int
    access_denied: bool = False


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Children of one folder, largest first.

    Ties keep the order in which the directory listing produced them.
    ``access_denied`` tells an unreadable folder apart from one that simply
    has no subfolders.
    """

    path: Path
    entries: tuple[FolderEntry, ...] = ()
    access_denied: bool = False
    elapsed: float = field(default=0.0, compare=False)

    @property
    def total_bytes(self) -> int:
        return sum(e.size_bytes for e in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FolderEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> FolderEntry:
        return self.entries[index]
