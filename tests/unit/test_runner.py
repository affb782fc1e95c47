"""
Unit tests for the adb process runner.
"""
import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from adb_mcp.adb import AdbRunner, CommandResult
from adb_mcp.exceptions import (
    AdbNotFoundError,
    CommandFailedError,
    OutputLimitExceededError,
    ProcessError,
    ProcessLaunchError,
    ProcessTimeoutError,
)


class TestSpawnFailures:
    """Tests for failures to start adb."""

    @pytest.mark.asyncio
    async def test_missing_binary(self, tmp_path):
        runner = AdbRunner(adb_path=str(tmp_path / "no-such-adb"))
        with pytest.raises(AdbNotFoundError) as exc_info:
            await runner.run(["devices"])
        assert "no-such-adb" in str(exc_info.value)
        assert isinstance(exc_info.value, ProcessError)

    @pytest.mark.asyncio
    async def test_permission_denied(self):
        with patch(
            "asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            side_effect=PermissionError("Permission denied"),
        ):
            with pytest.raises(ProcessLaunchError) as exc_info:
                await AdbRunner().run(["devices"])
        assert "Permission denied" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_embedded_nul_is_a_launch_error(self, runner):
        with pytest.raises(ProcessLaunchError) as exc_info:
            await runner.run(["shell", "echo a\x00b"])
        assert isinstance(exc_info.value, ProcessError)

    @pytest.mark.asyncio
    async def test_argv_passed_without_shell(self):
        with patch(
            "asyncio.create_subprocess_exec",
            new_callable=AsyncMock,
            side_effect=FileNotFoundError(),
        ) as mock_exec:
            with pytest.raises(AdbNotFoundError):
                await AdbRunner().run(["-s", "emulator-5554", "shell", "echo a; echo b"])

        args = mock_exec.call_args[0]
        assert args == ("adb", "-s", "emulator-5554", "shell", "echo a; echo b")


class TestRun:
    """Tests for running the fake adb."""

    @pytest.mark.asyncio
    async def test_captures_stdout(self, runner):
        result = await runner.run(["devices"])
        assert isinstance(result, CommandResult)
        assert result.stdout.startswith("List of devices attached")
        assert result.stderr == ""
        assert result.returncode == 0

    @pytest.mark.asyncio
    async def test_stdout_and_stderr_are_separate(self, runner, monkeypatch):
        monkeypatch.setenv("FAKE_ADB_STDERR", "something on stderr")
        result = await runner.run(["shell", "echo out"])
        assert result.stdout == "out\n"
        assert result.stderr == "something on stderr\n"

    @pytest.mark.asyncio
    async def test_nonzero_exit_is_returned(self, runner):
        result = await runner.run(["shell", "exit 3"])
        assert result.returncode == 3

    @pytest.mark.asyncio
    async def test_run_checked_raises_on_nonzero_exit(self, runner):
        with pytest.raises(CommandFailedError) as exc_info:
            await runner.run_checked(["pull", "/sdcard/missing.txt", "/tmp/x"])
        assert exc_info.value.returncode == 1
        assert "Command failed" in str(exc_info.value)
        assert "failed to stat remote object" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_output_limit(self, fake_adb):
        runner = AdbRunner(adb_path=str(fake_adb.path), max_output_bytes=100)
        with pytest.raises(OutputLimitExceededError):
            await runner.run(["logcat", "-d"])

    @pytest.mark.asyncio
    async def test_output_under_limit(self, fake_adb):
        runner = AdbRunner(adb_path=str(fake_adb.path), max_output_bytes=1024 * 1024)
        result = await runner.run(["logcat", "-d"])
        assert len(result.stdout.splitlines()) == 100

    @pytest.mark.asyncio
    async def test_timeout(self, fake_adb):
        runner = AdbRunner(adb_path=str(fake_adb.path), timeout=0.5)
        with pytest.raises(ProcessTimeoutError):
            await runner.run(["shell", "sleep 3"])

    @pytest.mark.asyncio
    async def test_cancel_kills_child(self, runner):
        spawned = []
        real_exec = asyncio.create_subprocess_exec

        async def spawn(*args, **kwargs):
            proc = await real_exec(*args, **kwargs)
            spawned.append(proc)
            return proc

        with patch("asyncio.create_subprocess_exec", new=spawn):
            task = asyncio.ensure_future(runner.run(["shell", "sleep 5"]))
            while not spawned:
                await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        assert spawned[0].returncode is not None

    @pytest.mark.asyncio
    async def test_concurrent_runs(self, runner):
        results = await asyncio.gather(*(runner.run(["shell", f"echo {i}"]) for i in range(5)))
        assert [r.stdout.strip() for r in results] == ["0", "1", "2", "3", "4"]


class TestAvailability:
    """Tests for adb detection."""

    def test_available(self, runner):
        assert runner.available()

    def test_not_available(self, tmp_path):
        assert not AdbRunner(adb_path=str(tmp_path / "no-such-adb")).available()

    @pytest.mark.asyncio
    async def test_version(self, runner):
        assert await runner.version() == "Android Debug Bridge version 1.0.41"
