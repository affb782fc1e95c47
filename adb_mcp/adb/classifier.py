"""
Classification of adb output into success, benign warning or failure.

adb writes informational notices and real errors to stderr
inconsistently across subcommands, so a non-empty stderr alone does not
mean a command failed. The rules here give callers a stable signal:

1. Empty stderr, or a positive marker in stdout -> SUCCESS
2. stderr matches a known benign warning -> BENIGN_WARNING
3. Anything else -> FAILURE

The benign list is deliberately short. Each entry was observed from a
real subcommand; adding guesses would hide genuine failures.
"""

from dataclasses import dataclass
from enum import Enum

# stdout markers that mean the command succeeded regardless of stderr
SUCCESS_MARKERS: tuple[str, ...] = (
    "List of devices attached",  # adb devices, even while the daemon starts
    "Success",                   # adb install, pm install
)

# `am start` reports these on stderr while exiting 0
BENIGN_WARNINGS: tuple[str, ...] = (
    "Warning: Activity not started, its current task has been brought to the front",
    "Warning: Activity not started, intent has been delivered to currently running top-most instance.",
)

DEFAULT_SUCCESS_TEXT = "Command executed successfully"
ERROR_PREFIX = "Error: "


class Outcome(Enum):
    """Classification of one command result."""
    SUCCESS = "success"
    BENIGN_WARNING = "benign_warning"
    FAILURE = "failure"


@dataclass(frozen=True)
class Classification:
    """Outcome plus the text to return to the caller."""

    outcome: Outcome
    text: str

    @property
    def is_error(self) -> bool:
        return self.outcome is Outcome.FAILURE


def classify(stdout: str, stderr: str) -> Classification:
    """
    Classify captured adb output.

    Args:
        stdout: Captured standard output.
        stderr: Captured standard error, kept separate from stdout.

    Returns:
        SUCCESS with stdout (or a default message when stdout is empty),
        BENIGN_WARNING with stderr minus any leading "Error: ",
        or FAILURE with "Error: " followed by stderr.
    """
    stderr_text = stderr.strip()

    if not stderr_text or any(marker in stdout for marker in SUCCESS_MARKERS):
        return Classification(Outcome.SUCCESS, stdout or DEFAULT_SUCCESS_TEXT)

    if any(warning in stderr_text for warning in BENIGN_WARNINGS):
        text = stderr_text[len(ERROR_PREFIX):] if stderr_text.startswith(ERROR_PREFIX) else stderr_text
        return Classification(Outcome.BENIGN_WARNING, text)

    return Classification(Outcome.FAILURE, f"{ERROR_PREFIX}{stderr_text}")
