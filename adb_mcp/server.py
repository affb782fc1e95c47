"""
ADB MCP Server - exposes adb operations as MCP tools over stdio.

Tools:
- adb_devices: List connected devices
- inspect_ui: Dump the UI hierarchy of the current screen
- dump_image: Take a screenshot of the current screen
- adb_shell: Run shell commands on the device
- adb_install, adb_logcat, adb_pull, adb_push,
  adb_activity_manager, adb_package_manager

Resources:
- adb://version: output of `adb version`
- adb://devices: output of `adb devices -l`

Logging goes to stderr. For detailed logs run with LOG_LEVEL=3 (or DEBUG).
"""

import asyncio
import sys
from typing import Any, Iterable

import mcp.types as types
from dotenv import load_dotenv
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from adb_mcp.adb import AdbRunner
from adb_mcp.config import Settings, get_settings
from adb_mcp.exceptions import AdbMcpError, RequestValidationError, ToolCallError
from adb_mcp.logging import configure_logging, get_log_config, get_logger
from adb_mcp.tools import TOOLS, AdbToolHandlers, ToolResponse, get_tool, parse_request
from adb_mcp.tools.schemas import input_schema

logger = get_logger("server")

VERSION_URI = "adb://version"
DEVICES_URI = "adb://devices"


class AdbMcpServer:
    """
    MCP server wiring for the adb tools.

    Args:
        settings: Loaded configuration.
        runner: Optional runner override, built from settings when omitted.
    """

    def __init__(self, settings: Settings, runner: AdbRunner | None = None):
        self.settings = settings
        self.runner = runner or AdbRunner(
            adb_path=settings.adb.adb_path,
            max_output_bytes=settings.adb.max_output_bytes,
            timeout=settings.adb.timeout,
            encoding=settings.adb.encoding,
        )
        self.handlers = AdbToolHandlers(self.runner, temp_prefix=settings.adb.temp_prefix)
        self.server: Server = Server(settings.server.name, version=settings.server.version)
        self._register()

    def _register(self) -> None:
        """Attach list/call handlers to the MCP server."""
        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)
        self.server.list_resources()(self.list_resources)
        self.server.read_resource()(self.read_resource)

    # =========================================================================
    # Tools
    # =========================================================================

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=input_schema(tool.request_model),
            )
            for tool in TOOLS
        ]

    async def dispatch(self, name: str, arguments: dict[str, Any] | None) -> ToolResponse:
        """
        Validate arguments and run the named tool.

        Never raises for caller mistakes or adb failures; those come back
        as an error ToolResponse.
        """
        tool = get_tool(name)
        if tool is None:
            logger.error(f"Unknown tool: {name}")
            return ToolResponse.error(f"Unknown tool: {name}")

        try:
            request = parse_request(tool.request_model, arguments)
        except RequestValidationError as e:
            logger.error(f"Invalid arguments for {name}", errors=e.errors)
            return ToolResponse.error(f"Invalid arguments for {name}: {'; '.join(e.errors)}")

        handler = getattr(self.handlers, tool.handler)
        return await handler(request)

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        """MCP entry point. An error response is raised so the SDK flags it with isError."""
        response = await self.dispatch(name, arguments)
        if response.is_error:
            raise ToolCallError(response.text)
        return [types.TextContent(type="text", text=response.text)]

    # =========================================================================
    # Resources
    # =========================================================================

    async def list_resources(self) -> list[types.Resource]:
        return [
            types.Resource(
                uri=VERSION_URI,
                name="adb-version",
                description="Version of the adb executable in use",
                mimeType="text/plain",
            ),
            types.Resource(
                uri=DEVICES_URI,
                name="device-list",
                description="Connected devices with details (adb devices -l)",
                mimeType="text/plain",
            ),
        ]

    async def read_resource(self, uri: Any) -> Iterable[ReadResourceContents]:
        key = str(uri).rstrip("/")
        if key == VERSION_URI:
            text = await self._resource_text(["version"], "Error retrieving ADB version")
        elif key == DEVICES_URI:
            text = await self._resource_text(["devices", "-l"], "Error retrieving device list")
        else:
            raise ValueError(f"Unknown resource: {uri}")
        return [ReadResourceContents(content=text, mime_type="text/plain")]

    async def _resource_text(self, args: list[str], error_message: str) -> str:
        try:
            result = await self.runner.run_checked(args)
        except AdbMcpError as e:
            logger.error(f"{error_message}: {e}")
            return f"{error_message}: {e}"
        return result.stdout

    # =========================================================================
    # Startup
    # =========================================================================

    async def check_adb(self) -> bool:
        """Log whether adb is usable. A missing adb is not fatal."""
        if not self.runner.available():
            logger.warn(
                "ADB not found in PATH. Please ensure Android Debug Bridge is installed and in your PATH."
            )
            return False
        try:
            version = await self.runner.version()
        except AdbMcpError as e:
            logger.warn(f"ADB found but not usable: {e}")
            return False
        logger.info(f"ADB detected: {version}")
        return True

    async def run(self) -> None:
        """Serve MCP requests on stdin/stdout until the client disconnects."""
        logger.info(f"Starting {self.settings.server.name}...")
        logger.info(f"Current log level: {get_log_config().level.value}")
        logger.info("To see more detailed logs, set LOG_LEVEL=3 environment variable")

        await self.check_adb()

        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"{self.settings.server.name} connected and ready")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def main() -> None:
    """Console entry point."""
    load_dotenv()
    settings = get_settings()
    settings.reload()
    configure_logging(settings.log.to_log_config())

    server = AdbMcpServer(settings)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except Exception as e:
        logger.error(f"Error connecting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
