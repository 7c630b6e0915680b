"""HTTP transport for the MCP tools."""
