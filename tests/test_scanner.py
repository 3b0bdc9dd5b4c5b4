"""Tests for single-level scanning."""

from __future__ import annotations

import os
import threading
import time

from diskscope.core import scanner as scanner_module
from diskscope.core.scanner import LevelScanner, default_workers
from diskscope.core.size import compute_size
from diskscope.utils import bytes_to_human

from .utils import write_file


class TestLevelScanner:
    def test_sorted_largest_first(self, sample_tree):
        result = LevelScanner().scan_level(sample_tree)
        assert [e.name for e in result] == ["A", "B"]
        assert [bytes_to_human(e.size_bytes) for e in result] == ["2.00 KB", "1.00 KB"]
        assert not result.access_denied

    def test_entry_sizes_match_compute_size(self, sample_tree):
        result = LevelScanner().scan_level(sample_tree)
        for entry in result:
            assert entry.size_bytes == compute_size(entry.path)
            assert entry.path.parent == sample_tree

    def test_only_directories(self, sample_tree):
        result = LevelScanner().scan_level(sample_tree)
        assert all(e.path.is_dir() for e in result)
        assert "top.txt" not in [e.name for e in result]

    def test_excludes_symlinked_folders(self, sample_tree, tmp_path):
        write_file(tmp_path / "elsewhere" / "huge.bin", 50_000)
        os.symlink(tmp_path / "elsewhere", sample_tree / "link")
        result = LevelScanner().scan_level(sample_tree)
        assert [e.name for e in result] == ["A", "B"]
        assert not any(e.path.is_symlink() for e in result)

    def test_ties_keep_listing_order(self, tmp_path):
        root = tmp_path / "ties"
        for name in ("m", "c", "x", "a", "q"):
            write_file(root / name / "f.bin", 64)
        write_file(root / "big" / "f.bin", 128)
        listing = [e.name for e in os.scandir(root) if e.is_dir() and e.name != "big"]

        result = LevelScanner(max_workers=4).scan_level(root)

        assert result[0].name == "big"
        assert [e.name for e in result][1:] == listing

    def test_non_increasing_sizes(self, tmp_path):
        root = tmp_path / "mixed"
        for i, size in enumerate([10, 500, 0, 250, 250, 1]):
            folder = root / f"d{i}"
            folder.mkdir(parents=True)
            if size:
                write_file(folder / "f.bin", size)
        sizes = [e.size_bytes for e in LevelScanner().scan_level(root)]
        assert sizes == sorted(sizes, reverse=True)

    def test_empty_folder(self, tmp_path):
        result = LevelScanner().scan_level(tmp_path)
        assert len(result) == 0
        assert not result.access_denied

    def test_unreadable_folder_is_empty_and_flagged(self, sample_tree, deny_paths):
        deny_paths.add(str(sample_tree))
        result = LevelScanner().scan_level(sample_tree)
        assert len(result) == 0
        assert result.access_denied

    def test_missing_folder_is_empty_and_flagged(self, tmp_path):
        result = LevelScanner().scan_level(tmp_path / "gone")
        assert len(result) == 0
        assert result.access_denied

    def test_unreadable_child_is_flagged(self, sample_tree, deny_paths):
        deny_paths.add(str(sample_tree / "A"))
        result = LevelScanner().scan_level(sample_tree)
        by_name = {e.name: e for e in result}
        assert by_name["A"].access_denied
        assert by_name["A"].size_bytes == 0
        assert not by_name["B"].access_denied
        assert [e.name for e in result] == ["B", "A"]

    def test_sequential_and_parallel_agree(self, sample_tree):
        assert LevelScanner(max_workers=1).scan_level(sample_tree) == LevelScanner(max_workers=8).scan_level(
            sample_tree
        )

    def test_children_measured_concurrently(self, tmp_path, monkeypatch):
        root = tmp_path / "slow"
        for name in ("one", "two", "three"):
            (root / name).mkdir(parents=True)

        active = 0
        peak = 0
        lock = threading.Lock()
        real_measure = scanner_module.measure

        def slow_measure(path, stop=None):
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.05)
            with lock:
                active -= 1
            return real_measure(path, stop)

        monkeypatch.setattr(scanner_module, "measure", slow_measure)
        result = LevelScanner(max_workers=3).scan_level(root)

        assert len(result) == 3
        assert peak > 1

    def test_task_failure_is_contained(self, sample_tree, monkeypatch):
        real_measure = scanner_module.measure

        def flaky_measure(path, stop=None):
            if os.path.basename(path) == "B":
                raise RuntimeError("boom")
            return real_measure(path, stop)

        monkeypatch.setattr(scanner_module, "measure", flaky_measure)
        result = LevelScanner(max_workers=2).scan_level(sample_tree)

        by_name = {e.name: e for e in result}
        assert by_name["A"].size_bytes == 2048
        assert by_name["B"].size_bytes == 0
        assert by_name["B"].access_denied

    def test_progress_callback(self, sample_tree):
        events: list[tuple[str, str]] = []
        lock = threading.Lock()

        def on_progress(name: str, status: str) -> None:
            with lock:
                events.append((name, status))

        LevelScanner(on_progress=on_progress).scan_level(sample_tree)
        assert ("A", "scanning") in events
        assert ("A", "done") in events
        assert ("B", "done") in events

    def test_worker_count_floor(self):
        assert LevelScanner(max_workers=0).max_workers == default_workers()
        assert LevelScanner(max_workers=1).max_workers == 1
        assert default_workers() >= 1
