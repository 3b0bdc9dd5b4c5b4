"""Shared utility functions."""

from __future__ import annotations

import os
from pathlib import Path

_UNITS = ("B", "KB", "MB", "GB", "TB")


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string.

    Binary (1024) steps, two decimals, capped at TB:
    ``bytes_to_human(1024) == "1.00 KB"``.
    """
    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.2f} {_UNITS[unit]}"


def truncate_name(name: str, width: int) -> str:
    """Cut *name* to *width* characters, marking the cut with '...'."""
    if len(name) <= width:
        return name
    if width <= 3:
        return name[:width]
    return name[: width - 3] + "..."


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
