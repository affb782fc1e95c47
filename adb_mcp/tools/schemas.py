"""
Pydantic request models for each tool.

Wire names are camelCase to match existing MCP clients (``apkPath``,
``asBase64``); snake_case names are accepted too. The JSON schema
advertised to the host comes from ``model_json_schema(by_alias=True)``.
"""

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from adb_mcp.exceptions import RequestValidationError

DEFAULT_UI_DUMP_PATH = "/sdcard/window_dump.xml"
DEFAULT_LOGCAT_LINES = 50

_DEVICE_DESCRIPTION = "Specific device ID (optional)"


class ToolRequest(BaseModel):
    """Base for all tool requests."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# =============================================================================
# Request Models
# =============================================================================

class DevicesRequest(ToolRequest):
    # Some clients cannot send an empty argument object
    random_string: Optional[str] = Field(default=None, description="Unused placeholder")


class ShellRequest(ToolRequest):
    command: str = Field(description="Shell command to execute on the device")
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)


class InstallRequest(ToolRequest):
    apk_path: str = Field(alias="apkPath", description="Local path to the APK file")
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)


class LogcatRequest(ToolRequest):
    filter: Optional[str] = Field(default=None, description="Logcat filter expression (optional)")
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)
    lines: Optional[int] = Field(
        default=DEFAULT_LOGCAT_LINES,
        description="Number of lines to return (default: 50, negative for all)",
    )


class PullRequest(ToolRequest):
    remote_path: str = Field(alias="remotePath", description="Remote file path on the device")
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)
    as_base64: bool = Field(
        default=True, alias="asBase64", description="Return file content as base64 (default: true)"
    )


class PushRequest(ToolRequest):
    file_base64: str = Field(alias="fileBase64", description="Base64 encoded file content to push")
    remote_path: str = Field(alias="remotePath", description="Remote file path on the device")
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)


class ScreenshotRequest(ToolRequest):
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)
    as_base64: bool = Field(
        default=False, alias="asBase64", description="Return image as base64 (default: false)"
    )


class InspectUiRequest(ToolRequest):
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)
    output_path: Optional[str] = Field(
        default=None,
        alias="outputPath",
        description=f"Custom output path on device (default: {DEFAULT_UI_DUMP_PATH})",
    )
    as_base64: bool = Field(
        default=False, alias="asBase64", description="Return XML content as base64 (default: false)"
    )


class ActivityManagerRequest(ToolRequest):
    am_command: str = Field(
        alias="amCommand",
        description="Activity Manager subcommand, e.g. 'start', 'broadcast', 'force-stop', etc.",
    )
    am_args: Optional[str] = Field(
        default=None,
        alias="amArgs",
        description="Arguments for the am subcommand, e.g. '-a android.intent.action.VIEW'",
    )
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)


class PackageManagerRequest(ToolRequest):
    pm_command: str = Field(
        alias="pmCommand",
        description="Package Manager subcommand, e.g. 'list', 'install', 'uninstall', 'grant', 'revoke', etc.",
    )
    pm_args: Optional[str] = Field(
        default=None,
        alias="pmArgs",
        description="Arguments for the pm subcommand, e.g. 'packages', 'com.example.app android.permission.CAMERA'",
    )
    device: Optional[str] = Field(default=None, description=_DEVICE_DESCRIPTION)


# =============================================================================
# Validation
# =============================================================================

RequestT = TypeVar("RequestT", bound=ToolRequest)


def _format_error(error: dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "arguments"
    return f"{location}: {error.get('msg', 'invalid value')}"


def parse_request(model: Type[RequestT], arguments: Optional[dict[str, Any]]) -> RequestT:
    """
    Validate raw tool arguments into a typed request.

    Args:
        model: The request model for the tool.
        arguments: Arguments as received from the client (may be None).

    Returns:
        A validated instance of ``model``.

    Raises:
        RequestValidationError: With one entry per invalid field.
    """
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        errors = [_format_error(err) for err in e.errors()]
        raise RequestValidationError(
            f"Invalid arguments: {'; '.join(errors)}", errors=errors
        ) from e


def input_schema(model: Type[ToolRequest]) -> dict[str, Any]:
    """Get the JSON schema advertised for a request model."""
    return model.model_json_schema(by_alias=True)
