"""
Unit tests for temp file staging.
"""
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from adb_mcp.adb import allocate, release, temp_file


class TestAllocate:
    """Tests for allocate()."""

    def test_path_is_in_temp_dir(self, staging_dir):
        path = allocate("adb-mcp", "screenshot.png")
        assert path.parent == Path(tempfile.gettempdir())
        assert path.name.startswith("adb-mcp-")
        assert path.name.endswith("-screenshot.png")

    def test_same_name_gives_distinct_paths(self, staging_dir):
        paths = {allocate("adb-mcp", "window_dump.xml") for _ in range(50)}
        assert len(paths) == 50

    def test_concurrent_allocations_are_distinct(self, staging_dir):
        with ThreadPoolExecutor(max_workers=8) as pool:
            paths = list(pool.map(lambda _: allocate("adb-mcp", "screenshot.png"), range(200)))
        assert len(set(paths)) == 200

    def test_directory_components_are_stripped(self, staging_dir):
        path = allocate("adb-mcp", "/sdcard/../../etc/passwd")
        assert path.parent == staging_dir
        assert path.name.endswith("-passwd")

    def test_windows_separators_are_stripped(self, staging_dir):
        path = allocate("adb-mcp", "..\\..\\evil.txt")
        assert path.parent == staging_dir
        assert path.name.endswith("-evil.txt")

    @pytest.mark.parametrize("name", ["", "/", ".."])
    def test_empty_base_name_falls_back(self, staging_dir, name):
        path = allocate("adb-mcp", name)
        assert path.parent == staging_dir
        assert path.name.endswith("-file")

    def test_trailing_slash_uses_last_component(self, staging_dir):
        assert allocate("adb-mcp", "/sdcard/Download/").name.endswith("-Download")

    def test_file_is_not_created(self, staging_dir):
        assert not allocate().exists()


class TestRelease:
    """Tests for release()."""

    def test_removes_file(self, staging_dir):
        path = allocate("adb-mcp", "data.bin")
        path.write_bytes(b"data")
        release(path)
        assert not path.exists()

    def test_missing_file_does_not_raise(self, staging_dir):
        release(staging_dir / "does-not-exist")

    def test_undeletable_path_does_not_raise(self, staging_dir):
        directory = staging_dir / "a-directory"
        directory.mkdir()
        release(directory)
        assert directory.exists()


class TestTempFileScope:
    """Tests for the temp_file() context manager."""

    def test_released_after_block(self, staging_dir):
        with temp_file("adb-mcp", "x.txt") as path:
            path.write_text("content")
            assert path.exists()
        assert not path.exists()

    def test_released_on_exception(self, staging_dir):
        with pytest.raises(RuntimeError):
            with temp_file("adb-mcp", "x.txt") as path:
                path.write_text("content")
                raise RuntimeError("boom")
        assert not path.exists()
        assert list(staging_dir.iterdir()) == []
