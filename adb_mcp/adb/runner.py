"""Process runner for the adb executable."""

import asyncio
import shutil
from dataclasses import dataclass
from typing import Sequence

from adb_mcp.exceptions import (
    AdbNotFoundError,
    CommandFailedError,
    OutputLimitExceededError,
    ProcessLaunchError,
    ProcessTimeoutError,
)
from adb_mcp.logging import get_logger

logger = get_logger("runner")

DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024
_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class CommandResult:
    """Captured output of one adb invocation."""

    stdout: str
    stderr: str
    returncode: int


class AdbRunner:
    """
    Runs adb with an explicit argv list, never through a shell.

    Args:
        adb_path: adb executable name or path.
        max_output_bytes: Ceiling for stdout + stderr combined.
        timeout: Optional limit in seconds for a single invocation.
        encoding: Text encoding used to decode console output.
    """

    def __init__(
        self,
        adb_path: str = "adb",
        max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
        timeout: float | None = None,
        encoding: str = "utf-8",
    ):
        self.adb_path = adb_path
        self.max_output_bytes = max_output_bytes
        self.timeout = timeout
        self.encoding = encoding

    def command_string(self, args: Sequence[str]) -> str:
        """Render an invocation for logs and error messages."""
        return " ".join([self.adb_path, *args])

    async def run(self, args: Sequence[str]) -> CommandResult:
        """
        Run adb and capture its output.

        Args:
            args: argv passed to adb (program name excluded).

        Returns:
            CommandResult with stdout and stderr kept separate.

        Raises:
            AdbNotFoundError: The adb executable does not exist.
            ProcessLaunchError: adb could not be started.
            OutputLimitExceededError: Output went over max_output_bytes.
            ProcessTimeoutError: The timeout expired.
        """
        argv = [self.adb_path, *args]
        logger.debug(f"Executing command: {self.command_string(args)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise AdbNotFoundError(f"adb executable not found: {self.adb_path}") from e
        except OSError as e:
            raise ProcessLaunchError(f"Failed to start {self.adb_path}: {e}") from e
        except ValueError as e:
            # Arguments the OS cannot pass, such as an embedded NUL
            raise ProcessLaunchError(f"Failed to start {self.adb_path}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(self._collect(proc), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            await self._kill(proc)
            raise ProcessTimeoutError(
                f"Command timed out after {self.timeout}s: {self.command_string(args)}"
            ) from e
        except OutputLimitExceededError:
            await self._kill(proc)
            raise
        except asyncio.CancelledError:
            await self._kill(proc)
            raise

        returncode = await proc.wait()
        return CommandResult(
            stdout=stdout.decode(self.encoding, errors="replace"),
            stderr=stderr.decode(self.encoding, errors="replace"),
            returncode=returncode,
        )

    async def run_checked(self, args: Sequence[str]) -> CommandResult:
        """
        Run adb and treat a non-zero exit status as a failure.

        Raises:
            CommandFailedError: adb exited with a non-zero status.
            ProcessError: See run().
        """
        result = await self.run(args)
        if result.returncode != 0:
            message = f"Command failed: {self.command_string(args)}"
            stderr = result.stderr.strip()
            if stderr:
                message = f"{message}\n{stderr}"
            raise CommandFailedError(message, returncode=result.returncode, stderr=result.stderr)
        return result

    async def _collect(self, proc: asyncio.subprocess.Process) -> tuple[bytes, bytes]:
        """Drain stdout and stderr concurrently, enforcing the output ceiling."""
        total = 0

        async def drain(stream: asyncio.StreamReader) -> bytes:
            nonlocal total
            buffer = bytearray()
            while True:
                chunk = await stream.read(_CHUNK_SIZE)
                if not chunk:
                    return bytes(buffer)
                total += len(chunk)
                if total > self.max_output_bytes:
                    raise OutputLimitExceededError(
                        f"Output exceeded the limit of {self.max_output_bytes} bytes"
                    )
                buffer.extend(chunk)

        tasks = [
            asyncio.ensure_future(drain(proc.stdout)),
            asyncio.ensure_future(drain(proc.stderr)),
        ]
        try:
            stdout, stderr = await asyncio.gather(*tasks)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
        return stdout, stderr

    async def _kill(self, proc: asyncio.subprocess.Process) -> None:
        """Kill a child process and reap it."""
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
        await proc.wait()

    # =========================================================================
    # Availability
    # =========================================================================

    def available(self) -> bool:
        """Check whether the adb executable can be found."""
        return shutil.which(self.adb_path) is not None

    async def version(self) -> str:
        """Get the first line of ``adb version``."""
        result = await self.run_checked(["version"])
        lines = result.stdout.strip().splitlines()
        return lines[0] if lines else ""
