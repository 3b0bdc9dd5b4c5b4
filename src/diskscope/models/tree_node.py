"""Folder tree node used by the batch report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class FolderNode:
    """Folder with its total size and fully expanded subfolders."""

    name: str
    path: Path
    size_bytes: int = 0
    children: list[FolderNode] = field(default_factory=list)
    access_denied: bool = False
