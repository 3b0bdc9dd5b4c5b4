"""Navigation state and command outcome types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(slots=True)
class NavigationState:
    """Current folder plus the folders to return to, most recent last."""

    current_path: Path
    history: list[Path] = field(default_factory=list)

    def push(self, path: Path) -> None:
        """Move into *path*, remembering the current folder."""
        self.history.append(self.current_path)
        self.current_path = path

    def pop(self) -> bool:
        """Return to the previous folder. False if there is none."""
        if not self.history:
            return False
        self.current_path = self.history.pop()
        return True


class Outcome(Enum):
    ENTERED = "entered"
    WENT_BACK = "went_back"
    RESELECTED = "reselected"
    REFRESHED = "refreshed"
    QUIT = "quit"
    INVALID = "invalid"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """What a single command did to the navigation state."""

    outcome: Outcome
    message: str = ""


class SelectionError(Enum):
    NOT_A_NUMBER = "not_a_number"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True, slots=True)
class Selection:
    """Parsed child index, or the reason the input is not one."""

    index: int | None = None
    error: SelectionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
