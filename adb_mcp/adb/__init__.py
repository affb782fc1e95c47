"""adb command construction, execution and result classification."""

from adb_mcp.adb.args import device_args, tokenize
from adb_mcp.adb.classifier import (
    BENIGN_WARNINGS,
    SUCCESS_MARKERS,
    Classification,
    Outcome,
    classify,
)
from adb_mcp.adb.runner import AdbRunner, CommandResult
from adb_mcp.adb.tempfiles import allocate, release, temp_file

__all__ = [
    # Arguments
    "tokenize",
    "device_args",
    # Temp files
    "allocate",
    "release",
    "temp_file",
    # Execution
    "AdbRunner",
    "CommandResult",
    # Classification
    "classify",
    "Classification",
    "Outcome",
    "BENIGN_WARNINGS",
    "SUCCESS_MARKERS",
]
