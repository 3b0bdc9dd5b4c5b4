"""Drill-down navigation over cached folder levels."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from diskscope.core.cache import ScanCache
from diskscope.models.folder_entry import ScanResult
from diskscope.models.navigation import (
    CommandResult,
    NavigationState,
    Outcome,
    Selection,
    SelectionError,
)

log = logging.getLogger(__name__)

RootSelector = Callable[[], Path]

_BACK = frozenset({"b", "back"})
_REFRESH = frozenset({"r", "refresh"})
_QUIT = frozenset({"q", "quit"})


def parse_selection(raw: str, count: int) -> Selection:
    """Parse a 0-based child index out of user input. Never raises."""
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        return Selection(error=SelectionError.NOT_A_NUMBER)
    # int() refuses very long digit strings; anything longer than count is out of range anyway.
    digits = text.lstrip("0") or "0"
    if len(digits) > len(str(count)):
        return Selection(error=SelectionError.OUT_OF_RANGE)
    index = int(digits)
    if index >= count:
        return Selection(error=SelectionError.OUT_OF_RANGE)
    return Selection(index=index)


class Navigator:
    """Holds the current folder and history, and applies user commands.

    Child data is read only through :meth:`ScanCache.get`; whether that is
    a lookup or a fresh scan is up to the cache.
    """

    def __init__(self, cache: ScanCache, select_root: RootSelector | None = None) -> None:
        self.cache = cache
        self.select_root = select_root or self._anchor_root
        self._state: NavigationState | None = None

    @property
    def state(self) -> NavigationState:
        if self._state is None:
            raise RuntimeError("Navigator.initial() has not been called")
        return self._state

    def initial(self, path: Path | str) -> None:
        """Start navigating at *path* with an empty history."""
        self._state = NavigationState(current_path=Path(path))

    def current_view(self) -> tuple[Path, ScanResult]:
        """The current folder and its children."""
        path = self.state.current_path
        return path, self.cache.get(path)

    def handle_command(self, raw: str) -> CommandResult:
        """Apply one line of user input.

        Numbers enter the matching child; ``b``, ``r`` and ``q`` go back,
        refresh and quit. Invalid input leaves the state untouched.
        """
        command = raw.strip().lower()
        if not command:
            return CommandResult(Outcome.NONE)
        if command in _QUIT:
            return CommandResult(Outcome.QUIT)
        if command in _BACK:
            return self._back()
        if command in _REFRESH:
            path = self.state.current_path
            self.cache.invalidate_subtree(path)
            return CommandResult(Outcome.REFRESHED, f"Refreshed {path}")
        return self._enter(command)

    def _enter(self, command: str) -> CommandResult:
        state = self.state
        children = self.cache.get(state.current_path)
        selection = parse_selection(command, len(children))
        if selection.error is SelectionError.NOT_A_NUMBER:
            return CommandResult(Outcome.INVALID, f"Invalid input: {command!r}")
        if selection.error is SelectionError.OUT_OF_RANGE:
            return CommandResult(
                Outcome.INVALID,
                f"Invalid selection: {command} (choose 0-{len(children) - 1})"
                if len(children)
                else f"Invalid selection: {command} (no subfolders)",
            )

        target = children[selection.index].path
        state.push(target)
        log.debug("Entered %s", target)
        return CommandResult(Outcome.ENTERED)

    def _back(self) -> CommandResult:
        state = self.state
        if state.pop():
            return CommandResult(Outcome.WENT_BACK)
        root = self.select_root()
        state.current_path = Path(root)
        log.debug("History empty, restarting at %s", root)
        return CommandResult(Outcome.RESELECTED)

    def _anchor_root(self) -> Path:
        current = self.state.current_path
        return Path(current.anchor or "/")
