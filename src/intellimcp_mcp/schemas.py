"""Pydantic response models returned by MCP tools.

Responses serialize with camelCase keys (``filePath``, ``totalLines``), the
naming tool arguments use on the wire.
"""
import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EntryKind(str, enum.Enum):
    """Kind of filesystem entry created by create_file_or_directory."""

    FILE = "file"
    DIRECTORY = "directory"


class ToolResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectInfo(ToolResponse):
    name: str
    base_path: str


class ListProjectsResponse(ToolResponse):
    projects: list[ProjectInfo] = Field(default_factory=list)


class ReadFileResponse(ToolResponse):
    file_path: str
    content: str
    total_lines: int
    start_line: int
    end_line: int


class FindFileResponse(ToolResponse):
    files: list[str] = Field(default_factory=list)
    truncated: bool = False


class SearchMatch(ToolResponse):
    file_path: str
    line: int = Field(description="1-based line number")
    column: int = Field(description="1-based column of the first match")
    text: str


class SearchTextResponse(ToolResponse):
    matches: list[SearchMatch] = Field(default_factory=list)
    truncated: bool = False


class CreateEntryResponse(ToolResponse):
    path: str
    kind: EntryKind
    overwritten: bool = False
    size: Optional[int] = None
