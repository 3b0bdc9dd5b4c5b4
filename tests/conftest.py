"""Shared test fixtures."""

from __future__ import annotations

import os
import sys

import pytest

from diskscope.settings import Settings

from .utils import write_file


@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    """Let pytest's recursive tmp_path cleanup remove the 1100-level deep tree.

    Raised only after all tests have run, so tests still see the default limit.
    """
    sys.setrecursionlimit(max(sys.getrecursionlimit(), 10000))


@pytest.fixture
def sample_tree(tmp_path):
    """root/ with A (2048 bytes total, nested) and B (1024 bytes), plus a loose file."""
    root = tmp_path / "root"
    write_file(root / "A" / "a.bin", 1024)
    write_file(root / "A" / "nested" / "deep.bin", 1024)
    write_file(root / "B" / "b.bin", 1024)
    write_file(root / "top.txt", 100)
    return root


@pytest.fixture
def deny_paths(monkeypatch):
    """Make os.scandir fail with EACCES for the paths added to the returned set.

    Works regardless of the uid running the tests, unlike chmod.
    """
    denied: set[str] = set()
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.path.abspath(path) in denied:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)
    return denied


@pytest.fixture
def isolate_settings(tmp_path, monkeypatch):
    """Point the settings file at a temp directory and drop the singleton."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return config_home / "diskscope" / "settings.json"
