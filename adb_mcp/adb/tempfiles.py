"""Temporary files for staging binary transfers between adb and the client."""

import os
import tempfile
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from adb_mcp.logging import get_logger

logger = get_logger("tempfiles")

DEFAULT_PREFIX = "adb-mcp"


def _base_name(suggested_name: str) -> str:
    """Strip directory components (posix and windows style) from a name."""
    name = suggested_name.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    if name in ("", ".", ".."):
        return "file"
    return name


def allocate(prefix: str = DEFAULT_PREFIX, suggested_name: str = "file") -> Path:
    """
    Allocate a unique path in the system temp directory.

    The file is not created. The name combines the prefix, the current
    time in nanoseconds, a random component and the base name of
    ``suggested_name``, so concurrent calls never share a path and a
    remote path like ``../../etc/passwd`` cannot escape the temp directory.

    Args:
        prefix: Namespace for files created by this server.
        suggested_name: Name hint, usually the remote file name.

    Returns:
        Path under ``tempfile.gettempdir()``.
    """
    unique = f"{time.time_ns()}-{uuid.uuid4().hex[:8]}"
    return Path(tempfile.gettempdir()) / f"{prefix}-{unique}-{_base_name(suggested_name)}"


def release(path: Path | str) -> None:
    """
    Delete a temp file, logging instead of raising on failure.

    Args:
        path: Path returned by allocate().
    """
    try:
        os.remove(path)
        logger.debug(f"Cleaned up temp file: {path}")
    except FileNotFoundError:
        logger.debug(f"Temp file already gone: {path}")
    except OSError as e:
        logger.warn(f"Failed to clean up temp file {path}: {e}")


@contextmanager
def temp_file(prefix: str = DEFAULT_PREFIX, suggested_name: str = "file") -> Iterator[Path]:
    """
    Allocate a temp path for the duration of a block.

    The file is released on every exit path, including exceptions.

    Usage:
        with temp_file("adb-mcp", "screenshot.png") as path:
            await runner.run_checked(["pull", remote, str(path)])
    """
    path = allocate(prefix, suggested_name)
    try:
        yield path
    finally:
        release(path)
