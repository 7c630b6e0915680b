"""Shared formatting for MCP tool results.

Used by both the stdio server and the HTTP transport so they render tool
output identically.
"""
import json
import logging
from typing import Any, Mapping

from pydantic import BaseModel

from intellimcp_core.validator import format_errors

logger = logging.getLogger("intellimcp-mcp.formatters")


def serialize_response(payload: Any) -> str:
    """Render a tool payload as text; strings pass through unchanged."""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, BaseModel):
        return payload.model_dump_json(by_alias=True)
    try:
        return json.dumps(payload)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to serialize response of type {type(payload).__name__}: {e}")
        return json.dumps({"error": f"Failed to serialize response: {e}"})


def format_error(message: str) -> str:
    return f"Error: {message}"


def format_validation_errors(errors: Mapping[str, str]) -> str:
    """Single error line listing every invalid argument."""
    return format_error(format_errors(errors))
