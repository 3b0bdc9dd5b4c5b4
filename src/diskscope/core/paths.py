"""Resolving user-supplied paths and listing starting roots."""

from __future__ import annotations

import os
import string
import sys
from pathlib import Path


class PathError(Exception):
    """Raised when user input does not name a usable directory."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class PathNotFoundError(PathError):
    """The path does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Path does not exist")


class NotADirectoryPathError(PathError):
    """The path exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "Path is not a directory")


def resolve_directory(text: str | os.PathLike[str]) -> Path:
    """Turn user input into an absolute path to an existing directory.

    ``~`` is expanded. Symbolic links in the path are kept as typed.

    Raises:
        PathNotFoundError: if nothing exists at the path.
        NotADirectoryPathError: if the path is not a directory.
    """
    path = Path(os.path.abspath(os.path.expanduser(os.fspath(text))))
    # os.path reports unusable names (too long, embedded NUL) as missing rather than raising.
    if not os.path.exists(path):
        raise PathNotFoundError(path)
    if not os.path.isdir(path):
        raise NotADirectoryPathError(path)
    return path


def available_roots() -> list[Path]:
    """Starting points offered when no folder has been chosen.

    Every mounted drive letter on Windows, the file-system root elsewhere.
    """
    if sys.platform != "win32":
        return [Path("/")]
    drives = [Path(f"{letter}:\\") for letter in string.ascii_uppercase]
    return [d for d in drives if d.exists()] or [Path("C:\\")]
