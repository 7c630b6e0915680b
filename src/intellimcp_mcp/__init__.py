"""intellimcp MCP Server - Model Context Protocol integration.

This package exposes project files to AI assistants through MCP tools whose
arguments are declared with intellimcp_core.validator.

Modules:
- server: stdio MCP server implementation
- api: HTTP transport (FastAPI)
- registry: tool registry shared by both transports
- tools: MCP tool definitions
- handlers: Tool implementation handlers
- formatters: Response formatting utilities
- schemas: Response models
"""

__version__ = "1.0.0"

from . import formatters
from . import handlers
from . import tools
from .registry import McpToolRegistry

__all__ = ["formatters", "handlers", "tools", "McpToolRegistry", "__version__"]
