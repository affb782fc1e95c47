"""
Exception hierarchy for adb-mcp.

This module defines the errors raised between the adb layer and the tool
handlers. Handlers catch them and turn them into error responses, so none
of them ever reaches the transport as an uncaught fault.

Categories:
- Request validation (bad or empty arguments, nothing was executed)
- Process errors (adb missing, not startable, too much output, timed out)
- Command failures (adb ran and reported an error)

Usage:
    from adb_mcp.exceptions import AdbNotFoundError

    raise AdbNotFoundError("adb executable not found", adb_path="adb")
"""

from typing import Any


class AdbMcpError(Exception):
    """
    Base exception for all adb-mcp errors.

    Attributes:
        user_message: Short description of the error category
        context: Additional context for debugging
    """

    user_message: str = "An error occurred"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.context = context

    def __str__(self) -> str:
        base = super().__str__()
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{base} ({ctx_str})"
        return base


# ============================================================================
# Validation Errors
# ============================================================================

class RequestValidationError(AdbMcpError):
    """
    Tool arguments were missing, malformed or empty.

    Raised before any subprocess is spawned.

    Attributes:
        errors: One "field: problem" string per violation
    """
    user_message = "Invalid tool arguments"

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


# ============================================================================
# Process Errors
# ============================================================================

class ProcessError(AdbMcpError):
    """Base class for failures to run the adb process itself."""
    user_message = "Failed to run adb"


class AdbNotFoundError(ProcessError):
    """
    The adb executable could not be found.

    Not recoverable until platform-tools are installed or the path is fixed.
    """
    user_message = "adb not found. Please install Android platform-tools and add adb to PATH."


class ProcessLaunchError(ProcessError):
    """The adb executable exists but could not be started."""
    user_message = "adb could not be started"


class OutputLimitExceededError(ProcessError):
    """
    The command produced more output than the configured ceiling.

    The child process is killed when this is raised.
    """
    user_message = "adb produced too much output"


class ProcessTimeoutError(ProcessError):
    """The command did not finish within the configured timeout."""
    user_message = "adb command timed out"


# ============================================================================
# Command Errors
# ============================================================================

class CommandFailedError(AdbMcpError):
    """
    adb ran but reported a failure (non-zero exit status).

    Attributes:
        returncode: Exit status of the adb process
        stderr: Captured error stream
    """
    user_message = "adb command failed"

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ToolCallError(AdbMcpError):
    """
    Marks a tool call result as an error for the MCP transport.

    The message is sent to the client verbatim.
    """
    user_message = "Tool call failed"


# ============================================================================
# Utility Functions
# ============================================================================

def get_user_message(error: Exception) -> str:
    """
    Get a short, category-level error message.

    Args:
        error: The exception

    Returns:
        User-friendly message string
    """
    if isinstance(error, AdbMcpError):
        return error.user_message
    return str(error)
