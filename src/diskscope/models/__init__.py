"""DiskScope data models."""

from diskscope.models.folder_entry import FolderEntry, ScanResult, display_name
from diskscope.models.navigation import (
    CommandResult,
    NavigationState,
    Outcome,
    Selection,
    SelectionError,
)
from diskscope.models.tree_node import FolderNode

__all__ = [
    "CommandResult",
    "FolderEntry",
    "FolderNode",
    "NavigationState",
    "Outcome",
    "ScanResult",
    "Selection",
    "SelectionError",
    "display_name",
]
