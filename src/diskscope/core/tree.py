"""Eager full-tree scan for the one-shot report."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator

from diskscope.core.size import read_level
from diskscope.models.folder_entry import display_name
from diskscope.models.tree_node import FolderNode
from diskscope.utils import bytes_to_human

log = logging.getLogger(__name__)

_RULE = "=" * 43


def build_tree(path: Path | str) -> FolderNode:
    """Scan *path* and every folder below it into a tree of nodes.

    Uses the same rules as :func:`~diskscope.core.size.compute_size`, so
    a node's size always equals what ``compute_size`` reports for it.
    Walks with an explicit stack, so nesting depth is not bounded by the
    interpreter recursion limit.
    """
    path = Path(path)
    root = FolderNode(name=display_name(path), path=path)
    visited: list[FolderNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        visited.append(node)
        try:
            dirs, file_bytes = read_level(node.path)
        except (OSError, ValueError) as e:
            log.debug("Cannot read %s: %s", node.path, e)
            node.access_denied = True
            continue
        node.size_bytes = file_bytes
        node.children = [FolderNode(name=display_name(Path(d)), path=Path(d)) for d in dirs]
        stack.extend(node.children)

    # Parents are visited before their children, so reversed order sums bottom-up.
    for node in reversed(visited):
        node.size_bytes += sum(c.size_bytes for c in node.children)
    return root


def sort_tree(root: FolderNode) -> None:
    """Order children by size, largest first, at every level."""
    stack = [root]
    while stack:
        node = stack.pop()
        node.children.sort(key=lambda c: c.size_bytes, reverse=True)
        stack.extend(node.children)


def _size_label(node: FolderNode) -> str:
    if node.access_denied:
        return "[ACCESS DENIED]"
    return f"[{bytes_to_human(node.size_bytes)}]"


def _walk(root: FolderNode, max_depth: int | None) -> Iterator[tuple[FolderNode, int, str, bool]]:
    """Pre-order (node, depth, prefix, is_last) below *root*, down to *max_depth*."""
    stack = [(child, 1, "", i == len(root.children) - 1) for i, child in enumerate(root.children)]
    stack.reverse()
    while stack:
        node, depth, prefix, is_last = stack.pop()
        yield node, depth, prefix, is_last
        if max_depth is not None and depth >= max_depth:
            continue
        child_prefix = prefix + ("    " if is_last else "|   ")
        last = len(node.children) - 1
        for i in range(last, -1, -1):
            stack.append((node.children[i], depth + 1, child_prefix, i == last))


def render_tree(root: FolderNode, max_depth: int | None = None) -> Iterator[str]:
    """Yield the lines of the tree report.

    Args:
        root: Tree produced by :func:`build_tree`.
        max_depth: How many levels below the root to print; None prints all.
    """
    yield ""
    yield _RULE
    yield "           DiskScope Results"
    yield _RULE
    yield ""
    yield f"{root.path} {_size_label(root)}"
    if max_depth is None or max_depth >= 1:
        for node, _, prefix, _ in _walk(root, max_depth):
            yield f"{prefix}+-- {node.name} {_size_label(node)}"
    yield ""
    yield _RULE
    yield f"Total: {bytes_to_human(root.size_bytes)}"
    yield f"Folders scanned: {len(root.children)}"
    yield _RULE


def _record(node: FolderNode, depth: int) -> dict[str, Any]:
    return {
        "name": node.name,
        "path": str(node.path),
        "depth": depth,
        "size_bytes": node.size_bytes,
        "access_denied": node.access_denied,
    }


def tree_to_records(root: FolderNode, max_depth: int | None = None) -> list[dict[str, Any]]:
    """JSON-ready form of the tree: one flat record per folder, in report order.

    ``depth`` is 0 for the root. Flat so arbitrarily deep trees serialize.
    """
    records = [_record(root, 0)]
    if max_depth is None or max_depth >= 1:
        records.extend(_record(node, depth) for node, depth, _, _ in _walk(root, max_depth))
    return records
