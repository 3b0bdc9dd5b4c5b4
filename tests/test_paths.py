"""Tests for path resolution helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from diskscope.core.paths import (
    NotADirectoryPathError,
    PathError,
    PathNotFoundError,
    available_roots,
    resolve_directory,
)

from .utils import write_file


class TestResolveDirectory:
    def test_relative_path_made_absolute(self, sample_tree, monkeypatch):
        monkeypatch.chdir(sample_tree)
        resolved = resolve_directory("A")
        assert resolved.is_absolute()
        assert resolved.samefile(sample_tree / "A")

    def test_home_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert resolve_directory("~") == tmp_path

    def test_missing(self, tmp_path):
        with pytest.raises(PathNotFoundError) as exc:
            resolve_directory(tmp_path / "nope")
        assert "does not exist" in str(exc.value)
        assert isinstance(exc.value, PathError)

    def test_overlong_name_is_missing(self, tmp_path):
        with pytest.raises(PathNotFoundError):
            resolve_directory(tmp_path / ("9" * 5000))

    def test_not_a_directory(self, tmp_path):
        f = write_file(tmp_path / "file.txt", 3)
        with pytest.raises(NotADirectoryPathError) as exc:
            resolve_directory(str(f))
        assert exc.value.path == f


class TestAvailableRoots:
    @pytest.mark.skipif(sys.platform == "win32", reason="posix root")
    def test_posix_root(self):
        assert available_roots() == [Path("/")]

    def test_windows_drives(self, monkeypatch):
        monkeypatch.setattr("diskscope.core.paths.sys.platform", "win32")
        monkeypatch.setattr(Path, "exists", lambda self: str(self) in ("C:\\", "D:\\"))
        assert [str(p) for p in available_roots()] == ["C:\\", "D:\\"]
