"""User settings stored in ``$XDG_CONFIG_HOME/diskscope/settings.json``.

Two values are configurable, each kept under its own section::

    {"scan": {"max_workers": 8}, "display": {"name_width": 60}}

Only configuration lives here; scan results are never written to disk.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from diskscope.core.scanner import default_workers
from diskscope.utils import xdg_config_home

log = logging.getLogger(__name__)

MAX_WORKERS_KEY = "scan.max_workers"
NAME_WIDTH_KEY = "display.name_width"

DEFAULT_NAME_WIDTH = 40

KEYS = (MAX_WORKERS_KEY, NAME_WIDTH_KEY)


def settings_path() -> Path:
    return xdg_config_home() / "diskscope" / "settings.json"


class Settings:
    """Effective settings, read once from the JSON file."""

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings_path()
        self._values: dict[str, Any] = {}
        self._read()

    @classmethod
    def instance(cls) -> Settings:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def max_workers(self) -> int:
        """Thread cap for sizing sibling folders."""
        return self._positive(MAX_WORKERS_KEY, default_workers())

    def name_width(self) -> int:
        """Column width for folder names in the listing."""
        return self._positive(NAME_WIDTH_KEY, DEFAULT_NAME_WIDTH)

    def as_dict(self) -> dict[str, int]:
        return {MAX_WORKERS_KEY: self.max_workers(), NAME_WIDTH_KEY: self.name_width()}

    def set(self, key: str, value: int) -> None:
        """Store *value* under one of :data:`KEYS` and write the file.

        Raises:
            KeyError: if *key* is not a known setting.
        """
        if key not in KEYS:
            raise KeyError(key)
        self._values[key] = value
        self._write()

    def _positive(self, key: str, default: int) -> int:
        value = self._values.get(key)
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            log.warning("Ignoring invalid %s in %s: %r", key, self.path, value)
            return default
        return value

    def _read(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self.path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: top level is not an object", self.path)
            return
        for key in KEYS:
            section, name = key.split(".")
            if isinstance(data.get(section), dict) and name in data[section]:
                self._values[key] = data[section][name]

    def _write(self) -> None:
        data: dict[str, dict[str, Any]] = {}
        for key, value in self._values.items():
            section, name = key.split(".")
            data.setdefault(section, {})[name] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self.path, e)
