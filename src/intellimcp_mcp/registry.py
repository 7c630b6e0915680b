"""Registry of MCP tools shared by the stdio and HTTP transports."""
import logging
import traceback
from typing import Any, Mapping, Optional

from mcp.types import Tool

from intellimcp_core import ProjectRegistry

from . import formatters
from .tools import McpTool, ToolResult, get_default_tools

logger = logging.getLogger("intellimcp-mcp.registry")


class McpToolRegistry:
    """Ordered set of tools keyed by name.

    Input schemas are computed when a tool is constructed, so registering a
    tool fixes the parameters it advertises.
    """

    def __init__(self):
        self._tools: dict[str, McpTool] = {}

    @classmethod
    def create_default(cls, projects: ProjectRegistry) -> "McpToolRegistry":
        """Create a registry with all built-in tools registered."""
        registry = cls()
        for tool in get_default_tools(projects):
            registry.register(tool)
        logger.info(f"Registered MCP tools: {', '.join(registry.names)}")
        return registry

    def register(self, tool: McpTool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[McpTool]:
        return self._tools.get(name)

    def get_tools(self) -> list[McpTool]:
        return list(self._tools.values())

    @property
    def names(self) -> list[str]:
        return list(self._tools)

    def size(self) -> int:
        return len(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def list_tools(self) -> list[Tool]:
        """MCP tool definitions, in registration order."""
        return [tool.to_tool() for tool in self._tools.values()]

    def call(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        """
        Execute a tool by name.

        Unknown tools and unexpected handler exceptions become error results;
        nothing propagates to the transport.
        """
        logger.info(f"Tool call: {name} with arguments: {arguments}")
        tool = self._tools.get(name)
        if tool is None:
            logger.warning(f"Unknown tool requested: {name}")
            return ToolResult.error(f"Unknown tool: {name}")

        try:
            result = tool.execute(arguments or {})
        except Exception as e:
            logger.error(f"Unexpected error during {name} call:")
            logger.error(f"  Error type: {type(e).__name__}")
            logger.error(f"  Error message: {str(e)}")
            logger.error(f"  Arguments: {arguments}")
            logger.error(f"  Traceback:\n{traceback.format_exc()}")
            return ToolResult.error(formatters.format_error(f"{type(e).__name__}: {str(e)}"))

        if result.is_error:
            logger.info(f"Tool {name} returned error: {result.text}")
        return result
