"""Tool handlers: one async method per exposed adb operation."""

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Sequence

from adb_mcp.adb import AdbRunner, Outcome, classify, device_args, temp_file, tokenize
from adb_mcp.adb.tempfiles import DEFAULT_PREFIX
from adb_mcp.exceptions import AdbMcpError, RequestValidationError, get_user_message
from adb_mcp.logging import get_logger
from adb_mcp.tools.schemas import (
    DEFAULT_LOGCAT_LINES,
    DEFAULT_UI_DUMP_PATH,
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
)

logger = get_logger("handlers")

SCREENSHOT_REMOTE_PATH = "/sdcard/screenshot.png"
_LINE_BREAK = re.compile(r"\r?\n")

# Errors a handler turns into an error response instead of propagating
_HANDLED_ERRORS = (AdbMcpError, OSError, binascii.Error)


@dataclass
class ToolResponse:
    """Result of a tool call: text for the client and an error flag."""

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResponse":
        return cls(text=text)

    @classmethod
    def error(cls, text: str) -> "ToolResponse":
        return cls(text=text, is_error=True)


def _require(value: str | None, message: str) -> str:
    """Trim a required string argument, rejecting it when empty."""
    trimmed = (value or "").strip()
    if not trimmed:
        raise RequestValidationError(message)
    return trimmed


def _failure(prefix: str, error: Exception) -> ToolResponse:
    message = f"{prefix}: {error}"
    logger.error(message, category=get_user_message(error))
    return ToolResponse.error(message)


class AdbToolHandlers:
    """
    Executes tool requests against adb.

    Args:
        runner: Process runner used for every adb invocation.
        temp_prefix: Namespace for staged temp files.
    """

    def __init__(self, runner: AdbRunner, temp_prefix: str = DEFAULT_PREFIX):
        self.runner = runner
        self.temp_prefix = temp_prefix

    async def execute_command(self, args: Sequence[str], error_message: str) -> ToolResponse:
        """
        Run a single adb command and classify its output.

        Args:
            args: argv passed to adb.
            error_message: Prefix for launch and exit-status failures.

        Returns:
            ToolResponse with stdout on success, the warning text for a
            benign warning, or "Error: <stderr>" flagged as an error.
        """
        try:
            result = await self.runner.run_checked(args)
        except AdbMcpError as e:
            return _failure(error_message, e)

        classification = classify(result.stdout, result.stderr)
        if classification.outcome is Outcome.FAILURE:
            logger.error(f"Command error: {result.stderr.strip()}")
            return ToolResponse.error(classification.text)

        if classification.outcome is Outcome.BENIGN_WARNING:
            logger.warn(f"Command warning (not error): {classification.text}")
        else:
            logger.debug(f"Command successful: {self.runner.command_string(args)}")
            logger.info(f"ADB command executed successfully: {args[0] if args else 'adb'}")
        return ToolResponse.ok(classification.text)

    # =========================================================================
    # Device and shell
    # =========================================================================

    async def devices(self, request: DevicesRequest) -> ToolResponse:
        logger.info("Listing connected devices")
        return await self.execute_command(["devices"], "Error executing adb devices")

    async def shell(self, request: ShellRequest) -> ToolResponse:
        """Run a shell command on the device. The command is passed as one token."""
        logger.info(f"Executing shell command: {request.command}")
        try:
            command = _require(request.command, "Shell command must not be empty")
        except RequestValidationError as e:
            logger.error(str(e))
            return ToolResponse.error(str(e))

        return await self.execute_command(
            [*device_args(request.device), "shell", command],
            "Error executing shell command",
        )

    async def install(self, request: InstallRequest) -> ToolResponse:
        logger.info(f"Installing APK file from path: {request.apk_path}")
        try:
            apk_path = _require(request.apk_path, "APK path must not be empty")
        except RequestValidationError as e:
            return _failure("Error installing APK", e)

        response = await self.execute_command(
            [*device_args(request.device), "install", "-r", apk_path],
            "Error installing APK",
        )
        if not response.is_error:
            logger.info("APK installed successfully")
        return response

    async def logcat(self, request: LogcatRequest) -> ToolResponse:
        """
        Dump the log buffer (``logcat -d``) and return its last lines.

        stderr from logcat is logged but does not fail the call. A missing
        or zero line limit means the default; a negative one returns the
        whole dump.
        """
        lines = request.lines or DEFAULT_LOGCAT_LINES
        filter_args = tokenize(request.filter)
        logger.info(f"Reading logcat ({lines} lines, filter: {request.filter or 'none'})")

        try:
            result = await self.runner.run_checked(
                [*device_args(request.device), "logcat", "-d", *filter_args]
            )
        except AdbMcpError as e:
            return _failure("Error reading logcat", e)

        if result.stderr:
            logger.warn(f"logcat returned stderr: {result.stderr.strip()}")

        # Split on newlines only; other line-break characters are log payload
        log_lines = _LINE_BREAK.split(result.stdout)
        if log_lines and log_lines[-1] == "":
            log_lines.pop()
        if lines > 0:
            log_lines = log_lines[-lines:]
        return ToolResponse.ok("\n".join(log_lines))

    # =========================================================================
    # File transfer
    # =========================================================================

    async def pull(self, request: PullRequest) -> ToolResponse:
        """Pull a device file, returning it as base64 or adb's transfer message."""
        logger.info(f"Pulling file from device: {request.remote_path}")
        try:
            remote_path = _require(request.remote_path, "Remote path must not be empty")
        except RequestValidationError as e:
            return _failure("Error pulling file", e)

        try:
            with temp_file(self.temp_prefix, remote_path) as local_path:
                result = await self.runner.run_checked(
                    [*device_args(request.device), "pull", remote_path, str(local_path)]
                )
                if result.stderr:
                    logger.warn(f"adb pull reported stderr: {result.stderr.strip()}")

                if request.as_base64:
                    text = base64.b64encode(local_path.read_bytes()).decode("ascii")
                else:
                    text = result.stdout
        except _HANDLED_ERRORS as e:
            return _failure("Error pulling file", e)

        logger.info(f"File pulled from device successfully: {remote_path}")
        return ToolResponse.ok(text)

    async def push(self, request: PushRequest) -> ToolResponse:
        """Decode base64 content into a temp file and push it to the device."""
        logger.info(f"Pushing file to device: {request.remote_path}")
        try:
            remote_path = _require(request.remote_path, "Remote path must not be empty")
            data = base64.b64decode("".join(request.file_base64.split()), validate=True)
        except RequestValidationError as e:
            return _failure("Error pushing file", e)
        except binascii.Error as e:
            return _failure("Error pushing file", RequestValidationError(f"Invalid base64 content: {e}"))

        try:
            with temp_file(self.temp_prefix, remote_path) as local_path:
                local_path.write_bytes(data)
                response = await self.execute_command(
                    [*device_args(request.device), "push", str(local_path), remote_path],
                    "Error pushing file",
                )
        except OSError as e:
            return _failure("Error pushing file", e)

        if not response.is_error:
            logger.info(f"File pushed to device successfully: {remote_path}")
        return response

    # =========================================================================
    # Screen capture
    # =========================================================================

    async def _capture(self, device: str | None, capture: list[str], remote_path: str, name: str) -> bytes:
        """
        Run an on-device capture, pull the artifact and remove it from the device.

        Not atomic: if the pull fails the artifact stays on the device.
        """
        prefix = device_args(device)
        with temp_file(self.temp_prefix, name) as local_path:
            await self.runner.run_checked([*prefix, "shell", *capture, remote_path])
            await self.runner.run_checked([*prefix, "pull", remote_path, str(local_path)])
            await self.runner.run_checked([*prefix, "shell", "rm", remote_path])
            return local_path.read_bytes()

    async def screenshot(self, request: ScreenshotRequest) -> ToolResponse:
        logger.info("Taking device screenshot")
        try:
            image = await self._capture(
                request.device, ["screencap", "-p"], SCREENSHOT_REMOTE_PATH, "screenshot.png"
            )
        except _HANDLED_ERRORS as e:
            return _failure("Error taking screenshot", e)

        if request.as_base64:
            logger.info("Screenshot captured and converted to base64 successfully")
            return ToolResponse.ok(base64.b64encode(image).decode("ascii"))
        logger.info("Screenshot captured successfully")
        return ToolResponse.ok("Screenshot captured successfully")

    async def inspect_ui(self, request: InspectUiRequest) -> ToolResponse:
        logger.info("Dumping UI hierarchy")
        remote_path = (request.output_path or "").strip() or DEFAULT_UI_DUMP_PATH
        try:
            xml_data = await self._capture(
                request.device, ["uiautomator", "dump"], remote_path, "window_dump.xml"
            )
        except _HANDLED_ERRORS as e:
            return _failure("Error dumping UI hierarchy", e)

        if request.as_base64:
            logger.info("UI hierarchy dumped successfully as base64")
            return ToolResponse.ok(base64.b64encode(xml_data).decode("ascii"))
        logger.info("UI hierarchy dumped successfully as plain text")
        return ToolResponse.ok(xml_data.decode("utf-8", errors="replace"))

    # =========================================================================
    # am / pm passthrough
    # =========================================================================

    async def _manager_command(
        self,
        tool: str,
        label: str,
        subcommand: str,
        extra_args: str | None,
        device: str | None,
    ) -> ToolResponse:
        logger.info(f"Executing {label} command: {tool} {subcommand} {extra_args or ''}".rstrip())
        try:
            command = _require(subcommand, f"{label} command must not be empty")
        except RequestValidationError as e:
            logger.error(str(e))
            return ToolResponse.error(str(e))

        return await self.execute_command(
            [*device_args(device), "shell", tool, command, *tokenize(extra_args)],
            f"Error executing {label} command",
        )

    async def activity_manager(self, request: ActivityManagerRequest) -> ToolResponse:
        return await self._manager_command(
            "am", "Activity Manager", request.am_command, request.am_args, request.device
        )

    async def package_manager(self, request: PackageManagerRequest) -> ToolResponse:
        return await self._manager_command(
            "pm", "Package Manager", request.pm_command, request.pm_args, request.device
        )
