"""Table of exposed tools: name, description, request model and handler."""

from dataclasses import dataclass
from typing import Type

from adb_mcp.tools import descriptions
from adb_mcp.tools.schemas import (
    ActivityManagerRequest,
    DevicesRequest,
    InspectUiRequest,
    InstallRequest,
    LogcatRequest,
    PackageManagerRequest,
    PullRequest,
    PushRequest,
    ScreenshotRequest,
    ShellRequest,
    ToolRequest,
)


@dataclass(frozen=True)
class ToolSpec:
    """Declaration of one tool."""

    name: str
    description: str
    request_model: Type[ToolRequest]
    handler: str  # AdbToolHandlers method name


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec("adb_devices", descriptions.ADB_DEVICES, DevicesRequest, "devices"),
    ToolSpec("inspect_ui", descriptions.INSPECT_UI, InspectUiRequest, "inspect_ui"),
    ToolSpec("adb_shell", descriptions.ADB_SHELL, ShellRequest, "shell"),
    ToolSpec("adb_install", descriptions.ADB_INSTALL, InstallRequest, "install"),
    ToolSpec("adb_logcat", descriptions.ADB_LOGCAT, LogcatRequest, "logcat"),
    ToolSpec("adb_pull", descriptions.ADB_PULL, PullRequest, "pull"),
    ToolSpec("adb_push", descriptions.ADB_PUSH, PushRequest, "push"),
    ToolSpec("dump_image", descriptions.DUMP_IMAGE, ScreenshotRequest, "screenshot"),
    ToolSpec(
        "adb_activity_manager",
        descriptions.ADB_ACTIVITY_MANAGER,
        ActivityManagerRequest,
        "activity_manager",
    ),
    ToolSpec(
        "adb_package_manager",
        descriptions.ADB_PACKAGE_MANAGER,
        PackageManagerRequest,
        "package_manager",
    ),
)

TOOLS_BY_NAME: dict[str, ToolSpec] = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> ToolSpec | None:
    """Look up a tool by its exposed name."""
    return TOOLS_BY_NAME.get(name)
