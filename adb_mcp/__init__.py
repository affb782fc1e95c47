"""
adb-mcp - Android Debug Bridge tools for MCP clients.

This package exposes adb operations (devices, shell, install, logcat,
file transfer, screenshots, UI dumps, am/pm) as Model Context Protocol
tools served over stdio.
"""

from adb_mcp.adb import AdbRunner, CommandResult, classify, device_args, tokenize
from adb_mcp.exceptions import (
    AdbMcpError,
    AdbNotFoundError,
    CommandFailedError,
    OutputLimitExceededError,
    ProcessError,
    ProcessLaunchError,
    ProcessTimeoutError,
    RequestValidationError,
)
from adb_mcp.logging import LogConfig, LogLevel, StructuredLogger, configure_logging, get_logger
from adb_mcp.tools import AdbToolHandlers, ToolResponse

__version__ = "0.1.0"
__all__ = [
    # Core
    "AdbRunner",
    "CommandResult",
    "AdbToolHandlers",
    "ToolResponse",
    "tokenize",
    "device_args",
    "classify",
    # Logging
    "configure_logging",
    "get_logger",
    "LogConfig",
    "LogLevel",
    "StructuredLogger",
    # Exceptions
    "AdbMcpError",
    "RequestValidationError",
    "ProcessError",
    "AdbNotFoundError",
    "ProcessLaunchError",
    "OutputLimitExceededError",
    "ProcessTimeoutError",
    "CommandFailedError",
]
