"""API endpoints for listing and calling MCP tools."""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from ...registry import McpToolRegistry

logger = logging.getLogger("intellimcp-mcp.api.tools")

router = APIRouter(tags=["tools"])


def get_registry(request: Request) -> McpToolRegistry:
    return request.app.state.registry


@router.get("/")
async def list_tools(registry: McpToolRegistry = Depends(get_registry)):
    """
    List all tools with their input schemas.

    The schemas are the same ones advertised over stdio.
    """
    return [tool.model_dump(mode="json", exclude_none=True) for tool in registry.list_tools()]


@router.get("/{name}")
async def get_tool(name: str, registry: McpToolRegistry = Depends(get_registry)):
    """Get one tool definition by name."""
    tool = registry.get(name)
    if tool is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown tool: {name}",
        )
    return tool.to_tool().model_dump(mode="json", exclude_none=True)


@router.post("/{name}")
def call_tool(
    name: str,
    arguments: Optional[dict[str, Any]] = Body(default=None),
    registry: McpToolRegistry = Depends(get_registry),
):
    """
    Call a tool with a JSON object of arguments.

    Validation failures and tool errors are not HTTP errors: they come back
    as a tool result with ``isError`` set, exactly as over stdio. Only unknown
    tool names return 404.
    """
    if registry.get(name) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown tool: {name}",
        )
    result = registry.call(name, arguments or {})
    return result.to_call_tool_result().model_dump(mode="json", exclude_none=True)
