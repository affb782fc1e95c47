"""MCP tools: request models, handlers and the tool table."""

from adb_mcp.tools.handlers import AdbToolHandlers, ToolResponse
from adb_mcp.tools.registry import TOOLS, ToolSpec, get_tool
from adb_mcp.tools.schemas import parse_request

__all__ = ["AdbToolHandlers", "ToolResponse", "TOOLS", "ToolSpec", "get_tool", "parse_request"]
