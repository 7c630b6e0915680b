"""intellimcp MCP Server - expose project files to AI assistants over stdio."""
import asyncio
import logging
import sys
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from intellimcp_core import ProjectRegistry
from intellimcp_core.config import Settings, get_settings

from .registry import McpToolRegistry

logger = logging.getLogger("intellimcp-mcp")


def configure_logging(level: str) -> None:
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )


def create_project_registry(settings: Settings) -> ProjectRegistry:
    """Open the project roots listed in settings and the optional projects file."""
    projects = ProjectRegistry(settings.projects)
    if settings.projects_file:
        projects.load_file(settings.projects_file)
    logger.info(f"{len(projects)} projects open")
    return projects


class ToolCallError(Exception):
    """Error result text; the MCP server reports it as a result with isError set."""


def create_server(registry: McpToolRegistry, name: str = "intellimcp") -> Server:
    """Build an MCP server whose tools are served from the registry."""
    app = Server(name)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        """List available MCP tools."""
        return registry.list_tools()

    @app.call_tool()
    async def call_tool(name: str, arguments: Any) -> list[TextContent]:
        """
        Handle MCP tool calls by delegating to the tool registry.

        Raises:
            ToolCallError: If the tool returned an error result
        """
        # Tools do blocking file I/O
        result = await asyncio.to_thread(registry.call, name, arguments)
        if result.is_error:
            raise ToolCallError(result.text)
        return result.to_content()

    return app


async def main(settings: Optional[Settings] = None):
    """Run the MCP server."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    logger.info(f"MCP Server {settings.server_name} starting")

    registry = McpToolRegistry.create_default(create_project_registry(settings))
    app = create_server(registry, settings.server_name)

    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
