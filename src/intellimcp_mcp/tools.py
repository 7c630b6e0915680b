"""MCP tool definitions.

Each tool declares its arguments once, as a ToolParameters list. That single
declaration produces both the advertised input schema and the runtime
validation, so both transports (stdio and HTTP) expose exactly what the
handlers accept.
"""
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from mcp.types import CallToolResult, TextContent, Tool

from intellimcp_core import ProjectRegistry
from intellimcp_core import validator
from intellimcp_core.validator import ToolParameters

from . import formatters
from . import handlers
from .schemas import EntryKind

logger = logging.getLogger("intellimcp-mcp.tools")


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool call: a success payload or an error message."""

    payload: Any
    is_error: bool = False

    @classmethod
    def success(cls, payload: Any) -> "ToolResult":
        return cls(payload)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(message, is_error=True)

    @property
    def text(self) -> str:
        return formatters.serialize_response(self.payload)

    def to_content(self) -> list[TextContent]:
        return [TextContent(type="text", text=self.text)]

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(content=self.to_content(), isError=self.is_error)


class McpTool:
    """Base class for MCP tools.

    Subclasses set ``name`` and ``description``, build ``self.parameters`` in
    ``__init__`` and implement ``execute``.
    """

    name: str
    description: str
    parameters: ToolParameters

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.parameters.schema

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        raise NotImplementedError

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)

    @staticmethod
    def invalid(errors: Mapping[str, str]) -> ToolResult:
        return ToolResult.error(formatters.format_validation_errors(errors))

    @staticmethod
    def run(handler, *args: Any) -> ToolResult:
        """Call a handler, turning ToolError into an error result."""
        try:
            return ToolResult.success(handler(*args))
        except handlers.ToolError as e:
            logger.warning(f"{handler.__name__} failed: {e}")
            return ToolResult.error(formatters.format_error(str(e)))


def _max_results(description: str) -> validator.Arg[int]:
    return validator.integer("maxResults", description).min(1).max(1000).optional(100)


# ============================================================================
# Project Tools
# ============================================================================

class ListProjectsTool(McpTool):
    name = "list_projects"
    description = "List all open projects with their names and root paths."

    def __init__(self, projects: ProjectRegistry):
        self.projects = projects
        self.parameters = ToolParameters()

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        return self.run(handlers.handle_list_projects, self.projects)


# ============================================================================
# File Tools
# ============================================================================

class ReadFileTool(McpTool):
    name = "read_file"
    description = (
        "Read the content of a file by its path relative to the project root. "
        "Supports optional line range."
    )

    def __init__(self, projects: ProjectRegistry):
        self.parameters = ToolParameters(
            validator.project_relative_path("filePath", "Relative path from the project root to the file to read"),
            validator.project(projects),
            validator.integer(
                "startLine", "Start line number (1-based, inclusive). If not specified, reads from the beginning."
            ).min(1).optional(),
            validator.integer(
                "endLine", "End line number (1-based, inclusive). If not specified, reads to the end."
            ).min(1).optional(),
        )

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        return self.parameters.validate(arguments).map_n(
            lambda file_path, project, start_line, end_line: self.run(
                handlers.handle_read_file, file_path, project, start_line, end_line
            )
        ).or_else_errors(self.invalid)


class FindFileTool(McpTool):
    name = "find_file"
    description = (
        "Find files in a project by glob pattern. Patterns without '/' match file names "
        "at any depth (e.g. '*.py'); patterns with '/' match paths relative to the search directory."
    )

    def __init__(self, projects: ProjectRegistry):
        self.parameters = ToolParameters(
            validator.project(projects),
            validator.string("pattern", "Glob pattern to match, e.g. '*.py' or 'src/*/models.py'").required(),
            validator.optional_project_relative_path(
                "directory", "Relative path of the directory to search in. Defaults to the project root."
            ),
            _max_results("Maximum number of files to return"),
        )

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        return self.parameters.validate(arguments).map_n(
            lambda project, pattern, directory, max_results: self.run(
                handlers.handle_find_file, project, pattern, directory, max_results
            )
        ).or_else_errors(self.invalid)


class SearchTextTool(McpTool):
    name = "search_text"
    description = "Search for text or a regular expression in the project's text files, line by line."

    def __init__(self, projects: ProjectRegistry):
        self.parameters = ToolParameters(
            validator.project(projects),
            validator.string("query", "Text or regular expression to search for").required(),
            validator.boolean("isRegex", "Treat query as a regular expression").optional(False),
            validator.boolean("caseSensitive", "Match case exactly").optional(True),
            validator.string_array(
                "filePatterns", "File name globs to restrict the search to, e.g. ['*.py', '*.md']"
            ).optional(),
            validator.optional_project_relative_path(
                "directory", "Relative path of the directory to search in. Defaults to the project root."
            ),
            _max_results("Maximum number of matching lines to return"),
        )

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        return self.parameters.validate(arguments).map_n(
            lambda project, query, is_regex, case_sensitive, file_patterns, directory, max_results: self.run(
                handlers.handle_search_text,
                project, query, is_regex, case_sensitive, file_patterns, directory, max_results,
            )
        ).or_else_errors(self.invalid)


class CreateFileOrDirectoryTool(McpTool):
    name = "create_file_or_directory"
    description = (
        "Create a file or directory at a path relative to the project root. "
        "Parent directories are created as needed."
    )

    def __init__(self, projects: ProjectRegistry):
        self.parameters = ToolParameters(
            validator.project(projects),
            validator.project_relative_path("path", "Relative path from the project root of the entry to create"),
            validator.enum_arg("kind", "Kind of entry to create", EntryKind).optional(EntryKind.FILE),
            validator.string("content", "Initial file content. Only allowed when kind is FILE.").optional(),
            validator.boolean("overwrite", "Replace an existing file").optional(False),
        )

    def execute(self, arguments: Mapping[str, Any]) -> ToolResult:
        return self.parameters.validate(arguments).map_n(
            lambda project, path, kind, content, overwrite: self.run(
                handlers.handle_create_file_or_directory, project, path, kind, content, overwrite
            )
        ).or_else_errors(self.invalid)


def get_default_tools(projects: ProjectRegistry) -> list[McpTool]:
    """All built-in tools, bound to the given project registry."""
    return [
        ListProjectsTool(projects),
        ReadFileTool(projects),
        FindFileTool(projects),
        SearchTextTool(projects),
        CreateFileOrDirectoryTool(projects),
    ]

